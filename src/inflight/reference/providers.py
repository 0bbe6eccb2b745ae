"""Registry of known inflight WiFi portal providers."""

from dataclasses import dataclass
from typing import Dict, Tuple


class UnknownProvider(LookupError):
    """Requested provider id is not in the registry."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Unknown provider: {provider_id!r}")


@dataclass(frozen=True)
class ThemeColors:
    """Display colours for a provider."""

    primary: str
    secondary: str


@dataclass(frozen=True)
class Provider:
    """One airline's inflight WiFi portal API configuration."""

    id: str
    display_name: str
    logo: str
    base_address: str
    endpoint_paths: Tuple[str, ...]
    theme_colors: ThemeColors

    def endpoint_urls(self) -> Tuple[str, ...]:
        """Return candidate URLs in probing order."""
        base = self.base_address.rstrip("/")
        return tuple(f"{base}{path}" for path in self.endpoint_paths)


_PROVIDERS: Tuple[Provider, ...] = (
    Provider(
        id="spirit",
        display_name="Spirit Airlines",
        logo="✈️ Spirit Airlines",
        base_address="https://www.spiritwifi.com",
        endpoint_paths=(
            "/api/flight/info",
            "/api/flight/status",
            "/api/v1/flight",
            "/flight-info",
            "/status.json",
        ),
        theme_colors=ThemeColors(primary="#FFD100", secondary="#FFA500"),
    ),
    Provider(
        id="american",
        display_name="American Airlines",
        logo="🦅 American Airlines",
        base_address="https://www.aainflight.com",
        # Only the Intelsat system-status endpoint has been confirmed on board.
        endpoint_paths=("/api/v1/connectivity/intelsat/system-status",),
        theme_colors=ThemeColors(primary="#CC0000", secondary="#0033AA"),
    ),
    Provider(
        id="delta",
        display_name="Delta Air Lines",
        logo="🔺 Delta Air Lines",
        base_address="https://www.wifi.delta.com",
        endpoint_paths=(
            "/api/flight/info",
            "/api/flight/status",
            "/api/v1/flight",
            "/flight-details",
            "/flight-status.json",
        ),
        theme_colors=ThemeColors(primary="#003366", secondary="#CE1126"),
    ),
)

_BY_ID: Dict[str, Provider] = {p.id: p for p in _PROVIDERS}


def get_provider(provider_id: str) -> Provider:
    """Look up a provider by id. Raises UnknownProvider if not found."""
    key = (provider_id or "").strip().lower()
    try:
        return _BY_ID[key]
    except KeyError:
        raise UnknownProvider(provider_id) from None


def list_provider_ids() -> Tuple[str, ...]:
    """Provider ids in display order."""
    return tuple(p.id for p in _PROVIDERS)


def all_providers() -> Tuple[Provider, ...]:
    return _PROVIDERS
