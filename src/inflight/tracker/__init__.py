"""Inflight WiFi portal flight tracker."""

from inflight.tracker.cache import CacheStore, JsonFileStorage, MemoryStorage
from inflight.tracker.config import TrackerConfig
from inflight.tracker.connectivity import ConnectivitySignal
from inflight.tracker.extractor import extract_flight_status
from inflight.tracker.formatting import format_altitude, format_speed, format_time_remaining
from inflight.tracker.models import CacheEntry, FlightStatus, RefreshResult
from inflight.tracker.orchestrator import FetchOrchestrator
from inflight.tracker.progress import estimate_progress
from inflight.tracker.session import TrackerSession

__all__ = [
    "CacheEntry",
    "CacheStore",
    "ConnectivitySignal",
    "FetchOrchestrator",
    "FlightStatus",
    "JsonFileStorage",
    "MemoryStorage",
    "RefreshResult",
    "TrackerConfig",
    "TrackerSession",
    "estimate_progress",
    "extract_flight_status",
    "format_altitude",
    "format_speed",
    "format_time_remaining",
]
