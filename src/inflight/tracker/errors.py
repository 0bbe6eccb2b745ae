"""Exceptions raised by the tracker core."""

from typing import List, Optional

from inflight.reference.providers import UnknownProvider

__all__ = [
    "AllAttemptsExhausted",
    "AttemptFailure",
    "CacheUnavailable",
    "TrackerError",
    "UnknownProvider",
]


class TrackerError(Exception):
    """Base class for tracker errors."""


class AttemptFailure(TrackerError):
    """A single endpoint attempt failed (network error, timeout, bad status or body)."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


class AllAttemptsExhausted(TrackerError):
    """Every candidate endpoint of a provider failed."""

    def __init__(self, provider_id: str, failures: List[AttemptFailure]):
        self.provider_id = provider_id
        self.failures = failures
        super().__init__(
            f"All {len(failures)} endpoint(s) failed for provider {provider_id!r}"
        )


class CacheUnavailable(TrackerError):
    """Persisted storage could not be read or written."""
