"""Tests for the tracker CLI."""

import io

import pandas as pd
import pytest

from inflight.tracker.cache import JsonFileStorage, MemoryStorage
from inflight.tracker.cli import TerminalRenderer, build_session, main, parse_args
from inflight.tracker.config import TrackerConfig
from inflight.tracker.models import RefreshResult
from inflight.tracker.session import OFFLINE_NOTICE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in (
        "INFLIGHT_PROVIDER",
        "INFLIGHT_REFRESH_INTERVAL",
        "INFLIGHT_TIMEOUT",
        "INFLIGHT_CACHE_FILE",
        "INFLIGHT_ENV",
    ):
        monkeypatch.delenv(name, raising=False)


class TestMain:
    """End-to-end runs that stay off the network."""

    def test_list(self, capsys) -> None:
        main(["--list"])
        out = capsys.readouterr().out
        assert "spirit" in out
        assert "American Airlines" in out

    def test_unknown_provider_exits(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--provider", "united", "--no-cache", "--once"])
        assert exc.value.code == 1
        assert "united" in capsys.readouterr().err

    def test_offline_once_shows_demo(self, capsys, tmp_path) -> None:
        out_csv = tmp_path / "history.csv"
        main(["-p", "delta", "--once", "--offline", "--no-cache", "--stats", "-o", str(out_csv)])

        out = capsys.readouterr().out
        assert "[Offline Mode] Delta Air Lines" in out
        assert "DL 789" in out
        assert "36,000 ft" in out
        assert "Total refreshes: 1" in out

        df = pd.read_csv(out_csv)
        assert list(df["marker"]) == ["offline"]

    def test_invalid_env_exits(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("INFLIGHT_TIMEOUT", "never")
        with pytest.raises(SystemExit) as exc:
            main(["--once", "--offline", "--no-cache"])
        assert exc.value.code == 1


class TestBuildSession:
    """Tests for wiring a session from flags and config."""

    def test_flags_override_config(self, tmp_path) -> None:
        args = parse_args(
            ["-p", "american", "-i", "5", "--timeout", "2", "--demo", "--cache-file", str(tmp_path / "c.json")]
        )
        session = build_session(args, TrackerConfig())

        assert session.provider.id == "american"
        assert session.interval == 5
        assert session.orchestrator.timeout == 2
        assert session.orchestrator.development_mode is True
        assert isinstance(session.orchestrator.cache.storage, JsonFileStorage)

    def test_no_cache_uses_memory(self) -> None:
        session = build_session(parse_args(["--no-cache"]), TrackerConfig())
        assert isinstance(session.orchestrator.cache.storage, MemoryStorage)
        assert session.orchestrator.connectivity.online is True

    def test_offline_flag(self) -> None:
        session = build_session(parse_args(["--offline", "--no-cache"]), TrackerConfig(environment="dev"))
        assert session.orchestrator.connectivity.online is False
        assert session.orchestrator.development_mode is True


class TestTerminalRenderer:
    """Tests for the terminal output."""

    def test_notice_and_result_share_the_stream(self) -> None:
        out = io.StringIO()
        renderer = TerminalRenderer(stream=out)

        renderer.notice(OFFLINE_NOTICE, "warning")
        renderer.render(RefreshResult(provider_id="delta", marker="error", message="No WiFi"), None)

        text = out.getvalue()
        assert text.startswith(f"* {OFFLINE_NOTICE}\n")
        assert "[Not Connected] Delta" in text
        assert "  ! No WiFi" in text
