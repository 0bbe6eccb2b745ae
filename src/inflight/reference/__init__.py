"""Static reference data: known portal providers and demo payloads."""

from inflight.reference.demo import get_demo_payload
from inflight.reference.providers import (
    Provider,
    ThemeColors,
    UnknownProvider,
    all_providers,
    get_provider,
    list_provider_ids,
)

__all__ = [
    "Provider",
    "ThemeColors",
    "UnknownProvider",
    "all_providers",
    "get_demo_payload",
    "get_provider",
    "list_provider_ids",
]
