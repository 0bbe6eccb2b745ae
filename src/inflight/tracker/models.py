"""Data models for the flight tracker."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal, Optional

StatusMarker = Literal["connected", "loading", "demo", "cached", "offline", "error"]

CACHE_MAX_AGE = timedelta(hours=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FlightStatus:
    """Normalized, provider-agnostic flight record."""

    flight_number: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    altitude_feet: Optional[float] = None
    speed_mph: Optional[float] = None
    time_remaining_minutes: Optional[float] = None
    progress_percent: float = 0.0
    # Formatted display strings
    altitude: Optional[str] = None
    speed: Optional[str] = None
    time_remaining: Optional[str] = None

    def route(self) -> str:
        """Return route as ORIGIN-DESTINATION, with placeholders for missing ends."""
        return f"{self.origin or '--'}-{self.destination or '--'}"

    def display(self, placeholder: str = "--") -> Dict[str, str]:
        """Field values as the UI shows them."""
        return {
            "flight_number": self.flight_number or placeholder,
            "origin": self.origin or placeholder,
            "destination": self.destination or placeholder,
            "altitude": self.altitude or placeholder,
            "speed": self.speed or placeholder,
            "time_remaining": self.time_remaining or placeholder,
            "progress": f"{round(self.progress_percent)}%",
        }


@dataclass(frozen=True)
class CacheEntry:
    """Last successful raw payload, keyed by the provider that produced it."""

    provider_id: str
    payload: Dict[str, Any]
    captured_at: datetime

    def age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or utcnow()) - self.captured_at

    def is_fresh(
        self,
        provider_id: str,
        now: Optional[datetime] = None,
        max_age: timedelta = CACHE_MAX_AGE,
    ) -> bool:
        """Usable only for the same provider and while younger than max_age."""
        if self.provider_id != provider_id:
            return False
        return self.age(now) < max_age

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider_id": self.provider_id,
            "payload": self.payload,
            "captured_at": self.captured_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheEntry":
        """Parse a stored entry. Raises ValueError/KeyError/TypeError on bad data."""
        captured_at = datetime.fromisoformat(data["captured_at"])
        if captured_at.tzinfo is None:
            captured_at = captured_at.replace(tzinfo=timezone.utc)
        payload = data["payload"]
        if not isinstance(payload, dict):
            raise TypeError("cached payload is not an object")
        return cls(
            provider_id=str(data["provider_id"]),
            payload=payload,
            captured_at=captured_at,
        )


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh cycle, handed to the renderer."""

    provider_id: str
    marker: StatusMarker
    flight: Optional[FlightStatus] = None
    message: Optional[str] = None
    fetched_at: datetime = field(default_factory=utcnow)
    source_url: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.marker == "connected"
