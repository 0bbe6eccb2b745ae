"""Unit tests for refresh history and statistics."""

from datetime import timedelta

from inflight.tracker.history import COLUMNS, RefreshHistory
from inflight.tracker.models import FlightStatus, RefreshResult

from conftest import NOW


def _result(marker: str, minutes: int = 0, url=None) -> RefreshResult:
    flight = None if marker == "error" else FlightStatus(flight_number="NK 123", progress_percent=40.0)
    return RefreshResult(
        provider_id="spirit",
        marker=marker,
        flight=flight,
        fetched_at=NOW + timedelta(minutes=minutes),
        source_url=url,
    )


class TestRefreshHistory:
    """Tests for RefreshHistory."""

    def test_to_dataframe_empty(self) -> None:
        df = RefreshHistory().to_dataframe()
        assert len(df) == 0
        assert list(df.columns) == COLUMNS

    def test_to_dataframe_rows(self) -> None:
        history = RefreshHistory()
        history.record(_result("connected", url="https://portal.test/a"))
        history.record(_result("error", minutes=1))

        df = history.to_dataframe()
        assert len(df) == 2
        assert df.iloc[0]["flight_number"] == "NK 123"
        assert df.iloc[0]["source_url"] == "https://portal.test/a"
        assert df.iloc[1]["marker"] == "error"
        assert df.iloc[1]["flight_number"] is None

    def test_last_updated(self) -> None:
        history = RefreshHistory()
        assert history.last_updated is None
        history.record(_result("demo"))
        history.record(_result("demo", minutes=2))
        assert history.last_updated == NOW + timedelta(minutes=2)

    def test_bounded(self) -> None:
        history = RefreshHistory(max_entries=3)
        for i in range(5):
            history.record(_result("demo", minutes=i))
        assert len(history) == 3
        assert history.results[0].fetched_at == NOW + timedelta(minutes=2)


class TestSummary:
    """Tests for RefreshHistory.summary."""

    def test_empty(self) -> None:
        stats = RefreshHistory().summary()
        assert stats.total_cycles == 0
        assert stats.live_ratio == 0.0

    def test_counts(self) -> None:
        history = RefreshHistory()
        history.record(_result("connected", url="https://portal.test/a"))
        history.record(_result("connected", minutes=1, url="https://portal.test/a"))
        history.record(_result("cached", minutes=2))
        history.record(_result("error", minutes=3))

        stats = history.summary()
        assert stats.total_cycles == 4
        assert stats.by_marker == {"connected": 2, "cached": 1, "error": 1}
        assert stats.by_source == {"https://portal.test/a": 2}
        assert stats.live_ratio == 0.5
        assert stats.to_dict()["last_updated"] == (NOW + timedelta(minutes=3)).isoformat()
