"""Record of refresh cycles and summary statistics."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from inflight.tracker.models import RefreshResult

COLUMNS = [
    "fetched_at",
    "provider_id",
    "marker",
    "source_url",
    "flight_number",
    "origin",
    "destination",
    "altitude_feet",
    "speed_mph",
    "time_remaining",
    "progress_percent",
    "message",
]


@dataclass
class HistoryStats:
    """Container for refresh statistics."""

    total_cycles: int = 0
    by_marker: Dict[str, int] = field(default_factory=dict)
    by_source: Dict[str, int] = field(default_factory=dict)
    last_updated: Optional[datetime] = None

    @property
    def live_ratio(self) -> float:
        """Share of cycles that returned live data."""
        if not self.total_cycles:
            return 0.0
        return self.by_marker.get("connected", 0) / self.total_cycles

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_cycles": self.total_cycles,
            "by_marker": self.by_marker,
            "by_source": self.by_source,
            "live_ratio": self.live_ratio,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }


class RefreshHistory:
    """Bounded in-memory log of refresh results, oldest first."""

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self._results: List[RefreshResult] = []

    def record(self, result: RefreshResult) -> None:
        self._results.append(result)
        if len(self._results) > self.max_entries:
            del self._results[: len(self._results) - self.max_entries]

    @property
    def results(self) -> List[RefreshResult]:
        return list(self._results)

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._results[-1].fetched_at if self._results else None

    def __len__(self) -> int:
        return len(self._results)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to pandas DataFrame, one row per cycle."""
        if not self._results:
            return pd.DataFrame(columns=COLUMNS)
        rows = []
        for r in self._results:
            f = r.flight
            rows.append(
                {
                    "fetched_at": r.fetched_at,
                    "provider_id": r.provider_id,
                    "marker": r.marker,
                    "source_url": r.source_url,
                    "flight_number": f.flight_number if f else None,
                    "origin": f.origin if f else None,
                    "destination": f.destination if f else None,
                    "altitude_feet": f.altitude_feet if f else None,
                    "speed_mph": f.speed_mph if f else None,
                    "time_remaining": f.time_remaining if f else None,
                    "progress_percent": f.progress_percent if f else None,
                    "message": r.message,
                }
            )
        return pd.DataFrame(rows, columns=COLUMNS)

    def summary(self) -> HistoryStats:
        """Compute statistics over the recorded cycles."""
        stats = HistoryStats()
        if not self._results:
            return stats

        stats.total_cycles = len(self._results)
        for r in self._results:
            stats.by_marker[r.marker] = stats.by_marker.get(r.marker, 0) + 1
            if r.source_url:
                stats.by_source[r.source_url] = stats.by_source.get(r.source_url, 0) + 1
        stats.last_updated = self.last_updated
        return stats
