"""Unit tests for TrackerSession refresh triggers."""

import asyncio
from typing import List, Optional
from unittest.mock import MagicMock

import pytest

from inflight.reference.providers import Provider, UnknownProvider
from inflight.tracker.connectivity import ConnectivitySignal
from inflight.tracker.models import FlightStatus, RefreshResult
from inflight.tracker.session import OFFLINE_NOTICE, ONLINE_NOTICE, TrackerSession


class _FakeOrchestrator:
    """Returns scripted results; optionally blocks until released."""

    def __init__(self, markers: Optional[List[str]] = None, block: bool = False):
        self.connectivity = ConnectivitySignal()
        self.markers = list(markers or [])
        self.block = block
        self.release: Optional[asyncio.Event] = None
        self.calls: List[str] = []

    async def refresh(self, provider: Provider) -> RefreshResult:
        self.calls.append(provider.id)
        if self.block:
            if self.release is None:
                self.release = asyncio.Event()
            await self.release.wait()
        marker = self.markers.pop(0) if self.markers else "connected"
        flight = None if marker == "error" else FlightStatus(flight_number=f"{provider.id}-1")
        return RefreshResult(provider_id=provider.id, marker=marker, flight=flight)


def _rendered(renderer: MagicMock) -> List[RefreshResult]:
    return [c.args[0] for c in renderer.render.call_args_list if c.args[0].marker != "loading"]


class TestRefresh:
    """Tests for TrackerSession.refresh."""

    def test_renders_loading_then_result(self) -> None:
        renderer = MagicMock()
        session = TrackerSession(_FakeOrchestrator(), renderer=renderer)

        result = asyncio.run(session.refresh())

        markers = [c.args[0].marker for c in renderer.render.call_args_list]
        assert markers == ["loading", "connected"]
        assert result.flight.flight_number == "spirit-1"
        assert session.last_good is result.flight
        assert len(session.history) == 1

    def test_error_keeps_last_good_values(self) -> None:
        renderer = MagicMock()
        session = TrackerSession(_FakeOrchestrator(["connected", "error"]), renderer=renderer)

        async def scenario():
            good = await session.refresh()
            bad = await session.refresh()
            return good, bad

        good, bad = asyncio.run(scenario())
        assert bad.marker == "error"
        assert session.last_good is good.flight
        last_call = renderer.render.call_args_list[-1]
        assert last_call.args == (bad, good.flight)

    def test_overlapping_trigger_is_dropped(self) -> None:
        orchestrator = _FakeOrchestrator(block=True)
        session = TrackerSession(orchestrator)

        async def scenario():
            first = asyncio.create_task(session.refresh("timer"))
            await asyncio.sleep(0)
            assert session.refreshing
            dropped = await session.refresh("manual")
            orchestrator.release.set()
            return dropped, await first

        dropped, result = asyncio.run(scenario())
        assert dropped is None
        assert result.marker == "connected"
        assert orchestrator.calls == ["spirit"]
        assert not session.refreshing

    def test_unknown_initial_provider(self) -> None:
        with pytest.raises(UnknownProvider):
            TrackerSession(_FakeOrchestrator(), provider_id="united")


class TestSelectProvider:
    """Tests for switching provider mid-cycle."""

    def test_stale_result_is_discarded(self) -> None:
        orchestrator = _FakeOrchestrator(block=True)
        renderer = MagicMock()
        session = TrackerSession(orchestrator, renderer=renderer)

        async def scenario():
            old = asyncio.create_task(session.refresh())
            await asyncio.sleep(0)
            new = asyncio.create_task(session.select_provider("delta"))
            await asyncio.sleep(0)
            orchestrator.release.set()
            return await old, await new

        old, new = asyncio.run(scenario())
        assert orchestrator.calls == ["spirit", "delta"]
        assert old is None
        assert new.provider_id == "delta"
        assert [r.provider_id for r in _rendered(renderer)] == ["delta"]
        assert [r.provider_id for r in session.history.results] == ["delta"]
        assert session.last_good.flight_number == "delta-1"

    def test_unknown_provider_leaves_selection(self) -> None:
        session = TrackerSession(_FakeOrchestrator())
        with pytest.raises(UnknownProvider):
            asyncio.run(session.select_provider("united"))
        assert session.provider.id == "spirit"


class TestConnectivity:
    """Tests for online/offline transitions."""

    def test_going_offline_refreshes_with_notice(self) -> None:
        renderer = MagicMock()
        orchestrator = _FakeOrchestrator(["offline"])
        session = TrackerSession(orchestrator, renderer=renderer)

        result = asyncio.run(session.set_online(False))

        renderer.notice.assert_called_once_with(OFFLINE_NOTICE, "warning")
        assert result.marker == "offline"
        assert not orchestrator.connectivity.online

    def test_coming_back_online_refreshes(self) -> None:
        renderer = MagicMock()
        orchestrator = _FakeOrchestrator()
        orchestrator.connectivity.set(False)
        session = TrackerSession(orchestrator, renderer=renderer)

        result = asyncio.run(session.set_online(True))

        renderer.notice.assert_called_once_with(ONLINE_NOTICE, "success")
        assert result.marker == "connected"

    def test_unchanged_state_does_nothing(self) -> None:
        orchestrator = _FakeOrchestrator()
        session = TrackerSession(orchestrator)
        assert asyncio.run(session.set_online(True)) is None
        assert orchestrator.calls == []


class TestRun:
    """Tests for the periodic loop."""

    def test_runs_requested_cycles(self) -> None:
        orchestrator = _FakeOrchestrator()
        session = TrackerSession(orchestrator, interval=0)

        asyncio.run(session.run(cycles=3))

        assert orchestrator.calls == ["spirit"] * 3
        assert len(session.history) == 3
