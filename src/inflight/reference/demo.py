"""Demo flight payloads shown when no real portal data is reachable."""

import copy
import json
from importlib import resources
from typing import Any, Dict, Optional

_demo_cache: Optional[Dict[str, Dict[str, Any]]] = None

# Used when a provider has no entry in the bundled data file
_GENERIC_DEMO: Dict[str, Any] = {
    "flightNumber": "DEMO 1",
    "origin": "Origin (ORG)",
    "destination": "Destination (DST)",
    "altitude": 34000,
    "speed": 510,
    "timeRemaining": 90,
    "progress": 50,
}


def _load_demo_flights() -> Dict[str, Dict[str, Any]]:
    global _demo_cache
    if _demo_cache is None:
        try:
            data_path = resources.files("inflight.reference").joinpath("data").joinpath("demo_flights.json")
            with data_path.open(encoding="utf-8") as f:
                _demo_cache = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            _demo_cache = {}
    return _demo_cache


def get_demo_payload(provider_id: str) -> Dict[str, Any]:
    """Return a raw demo payload for the provider, shaped like its live API.

    A deep copy is returned so callers can never alter the bundled table.
    """
    payload = _load_demo_flights().get(provider_id) or _GENERIC_DEMO
    return copy.deepcopy(payload)
