"""Flight completion percentage from whichever progress fields a payload carries."""

from typing import Any, Optional, Tuple

from inflight.tracker.payload import Path, RawPayload, as_number

# (numerator, denominator) pairs, highest precedence first. The explicit
# top-level "progress" field sits between the first pair and the rest.
_NESTED_RATIO: Tuple[Path, Path] = (
    ("flight_info", "time_to_land_mins"),
    ("flight_info", "total_flight_duration_mins"),
)
_FLAT_RATIOS: Tuple[Tuple[Path, Path], ...] = (
    (("elapsed",), ("duration",)),
    (("distance_traveled",), ("total_distance",)),
)


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def _ratio(raw: RawPayload, numerator: Path, denominator: Path) -> Optional[float]:
    num = raw.number(numerator)
    den = raw.number(denominator)
    if num is None or den is None or den <= 0:
        return None
    return clamp_percent(num / den * 100)


def estimate_progress(raw: Any) -> float:
    """Return progress in [0, 100]; 0 when no progress-bearing field is present."""
    if not isinstance(raw, RawPayload):
        raw = RawPayload(raw)

    ratio = _ratio(raw, *_NESTED_RATIO)
    if ratio is not None:
        return ratio

    explicit = as_number(raw.get("progress"))
    if explicit is not None:
        return clamp_percent(explicit)

    for numerator, denominator in _FLAT_RATIOS:
        ratio = _ratio(raw, numerator, denominator)
        if ratio is not None:
            return ratio

    return 0.0
