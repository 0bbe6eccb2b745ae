"""Tracker session: current provider, refresh triggers and rendering."""

import asyncio
import logging
from typing import Optional, Protocol

from inflight.reference.providers import Provider, get_provider
from inflight.tracker.config import DEFAULT_INTERVAL, DEFAULT_PROVIDER
from inflight.tracker.history import RefreshHistory
from inflight.tracker.models import FlightStatus, RefreshResult
from inflight.tracker.orchestrator import FetchOrchestrator

logger = logging.getLogger(__name__)

ONLINE_NOTICE = "Connection restored! Refreshing flight data..."
OFFLINE_NOTICE = "You are offline. Showing cached data."


class Renderer(Protocol):
    """Presents refresh results. Implementations own all visual output."""

    def render(self, result: RefreshResult, last_good: Optional[FlightStatus]) -> None:
        """Show a result. On errors, last_good holds the values to keep on screen."""
        ...

    def notice(self, message: str, level: str) -> None:
        """Show a transient message; level is 'success' or 'warning'."""
        ...


class NullRenderer:
    def render(self, result: RefreshResult, last_good: Optional[FlightStatus]) -> None:
        pass

    def notice(self, message: str, level: str) -> None:
        pass


class TrackerSession:
    """Owns the selected provider and drives refresh cycles.

    Overlapping triggers for the same provider are dropped while a refresh is
    in flight. Selecting another provider starts a new generation; results
    still arriving for an older generation are discarded.
    """

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        renderer: Optional[Renderer] = None,
        provider_id: str = DEFAULT_PROVIDER,
        interval: float = DEFAULT_INTERVAL,
        history: Optional[RefreshHistory] = None,
    ):
        self.orchestrator = orchestrator
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.provider: Provider = get_provider(provider_id)
        self.interval = interval
        self.history = history if history is not None else RefreshHistory()
        self.last_good: Optional[FlightStatus] = None
        self._generation = 0
        self._in_flight: Optional[int] = None

    @property
    def refreshing(self) -> bool:
        return self._in_flight == self._generation

    async def refresh(self, trigger: str = "manual") -> Optional[RefreshResult]:
        """Run one cycle and render it. Returns None if the trigger was dropped
        or the result belongs to a provider that is no longer selected."""
        if self.refreshing:
            logger.info("Refresh already in flight for %s; dropping %s trigger", self.provider.id, trigger)
            return None

        generation = self._generation
        provider = self.provider
        self._in_flight = generation
        logger.debug("Refreshing %s (trigger=%s)", provider.id, trigger)
        try:
            self.renderer.render(
                RefreshResult(provider_id=provider.id, marker="loading"), self.last_good
            )
            result = await self.orchestrator.refresh(provider)
        finally:
            if self._in_flight == generation:
                self._in_flight = None

        if generation != self._generation:
            logger.info(
                "Discarding %s result for %s; provider is now %s",
                result.marker,
                provider.id,
                self.provider.id,
            )
            return None

        self.history.record(result)
        if result.flight is not None:
            self.last_good = result.flight
        self.renderer.render(result, self.last_good)
        return result

    async def select_provider(self, provider_id: str) -> Optional[RefreshResult]:
        """Switch provider and refresh. Raises UnknownProvider for bad ids."""
        provider = get_provider(provider_id)
        logger.info("Switched to %s", provider.display_name)
        self.provider = provider
        self._generation += 1
        self.last_good = None
        return await self.refresh("provider-change")

    async def set_online(self, online: bool) -> Optional[RefreshResult]:
        """React to a connectivity transition; no-op when the state is unchanged."""
        if not self.orchestrator.connectivity.set(online):
            return None
        if online:
            self.renderer.notice(ONLINE_NOTICE, "success")
        else:
            self.renderer.notice(OFFLINE_NOTICE, "warning")
        return await self.refresh("online" if online else "offline")

    async def run(self, cycles: Optional[int] = None) -> None:
        """Refresh every `interval` seconds; forever unless cycles is given."""
        count = 0
        while cycles is None or count < cycles:
            await self.refresh("timer")
            count += 1
            if cycles is not None and count >= cycles:
                break
            await asyncio.sleep(self.interval)
