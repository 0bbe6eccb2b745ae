"""Endpoint probing with cache and demo fallback."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx

from inflight.reference.demo import get_demo_payload
from inflight.reference.providers import Provider, get_provider
from inflight.tracker.cache import CacheStore
from inflight.tracker.config import DEFAULT_TIMEOUT
from inflight.tracker.connectivity import ConnectivitySignal
from inflight.tracker.errors import AllAttemptsExhausted, AttemptFailure
from inflight.tracker.extractor import extract_flight_status
from inflight.tracker.models import RefreshResult, StatusMarker, utcnow

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {"Accept": "application/json"}

OFFLINE_CACHED_MESSAGE = "Showing cached flight data. You are currently offline."
OFFLINE_DEMO_MESSAGE = "You are offline. Showing demo data."


def not_connected_message(provider: Provider) -> str:
    name = provider.display_name
    return (
        f"Unable to connect to {name} WiFi. "
        f"Make sure you are connected to the {name} inflight WiFi network."
    )


class FetchOrchestrator:
    """Fetches flight status for a provider, trying each endpoint in order.

    Attempts are sequential: the next URL is only requested once the previous
    one has failed. The first 2xx response with a JSON object body wins and
    is the only thing written to the cache.
    """

    def __init__(
        self,
        cache: Optional[CacheStore] = None,
        connectivity: Optional[ConnectivitySignal] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        development_mode: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.cache = cache if cache is not None else CacheStore()
        self.connectivity = connectivity if connectivity is not None else ConnectivitySignal()
        self.timeout = timeout
        self.development_mode = development_mode
        self.clock = clock
        self._client = client

    async def refresh(self, provider: Union[Provider, str]) -> RefreshResult:
        """Run one fetch cycle. Only an unknown provider id raises."""
        if isinstance(provider, str):
            provider = get_provider(provider)

        if not self.connectivity.online:
            return self._offline_result(provider)

        try:
            url, body = await self._probe(provider)
        except AllAttemptsExhausted as e:
            logger.info("%s", e)
            return self._fallback_result(provider)

        now = self.clock()
        flight = extract_flight_status(body)
        self.cache.put(provider.id, body, captured_at=now)
        logger.info("Live flight data for %s from %s", provider.id, url)
        return RefreshResult(
            provider_id=provider.id,
            marker="connected",
            flight=flight,
            fetched_at=now,
            source_url=url,
        )

    async def _probe(self, provider: Provider) -> Tuple[str, Dict[str, Any]]:
        """Return (url, body) of the first endpoint that answers with JSON."""
        failures: List[AttemptFailure] = []
        if self._client is not None:
            return await self._probe_with(self._client, provider, failures)
        async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
            return await self._probe_with(client, provider, failures)

    async def _probe_with(
        self,
        client: httpx.AsyncClient,
        provider: Provider,
        failures: List[AttemptFailure],
    ) -> Tuple[str, Dict[str, Any]]:
        for url in provider.endpoint_urls():
            try:
                return url, await self._attempt(client, url)
            except AttemptFailure as e:
                logger.warning("Failed to fetch from %s: %s", url, e.reason)
                failures.append(e)
        raise AllAttemptsExhausted(provider.id, failures)

    async def _attempt(self, client: httpx.AsyncClient, url: str) -> Dict[str, Any]:
        logger.debug("Attempting to fetch from: %s", url)
        # httpx times each phase separately; wait_for bounds the whole attempt.
        try:
            resp = await asyncio.wait_for(
                client.get(url, headers=REQUEST_HEADERS, timeout=self.timeout),
                self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise AttemptFailure(url, f"timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise AttemptFailure(url, f"request failed: {e}") from e

        if not resp.is_success:
            raise AttemptFailure(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
        try:
            data = resp.json()
        except (ValueError, RecursionError) as e:
            raise AttemptFailure(url, f"malformed JSON body: {e}", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise AttemptFailure(url, "JSON body is not an object", status_code=resp.status_code)
        return data

    def _offline_result(self, provider: Provider) -> RefreshResult:
        now = self.clock()
        entry = self.cache.get(provider.id, now)
        if entry is not None:
            return RefreshResult(
                provider_id=provider.id,
                marker="cached",
                flight=extract_flight_status(entry.payload),
                message=OFFLINE_CACHED_MESSAGE,
                fetched_at=now,
            )
        return self._demo_result(provider, "offline", OFFLINE_DEMO_MESSAGE)

    def _fallback_result(self, provider: Provider) -> RefreshResult:
        now = self.clock()
        entry = self.cache.get(provider.id, now)
        if entry is not None:
            minutes = int(entry.age(now).total_seconds() // 60)
            return RefreshResult(
                provider_id=provider.id,
                marker="cached",
                flight=extract_flight_status(entry.payload),
                message=f"Live data unavailable. Showing cached flight data from {minutes} min ago.",
                fetched_at=now,
            )
        if self.development_mode or not self.connectivity.online:
            return self._demo_result(provider, "demo", None)
        return RefreshResult(
            provider_id=provider.id,
            marker="error",
            message=not_connected_message(provider),
            fetched_at=now,
        )

    def _demo_result(
        self, provider: Provider, marker: StatusMarker, message: Optional[str]
    ) -> RefreshResult:
        logger.info("Demo data displayed for %s", provider.display_name)
        return RefreshResult(
            provider_id=provider.id,
            marker=marker,
            flight=extract_flight_status(get_demo_payload(provider.id)),
            message=message,
            fetched_at=self.clock(),
        )
