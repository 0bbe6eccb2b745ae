"""Normalize portal payloads into FlightStatus records.

Each portal nests its data differently. American's Intelsat system-status
endpoint nests the flight under ``flight_info`` and position under
``positional_info``; other portals answer with a flat object whose key
spelling varies. Every output field is resolved from an ordered list of key
paths: the nested, provider-specific shapes come first because a structural
match is more trustworthy than a generic key that happens to collide.
"""

from typing import Any, Dict, Tuple

from inflight.tracker.formatting import format_altitude, format_speed, format_time_remaining
from inflight.tracker.models import FlightStatus
from inflight.tracker.payload import Path, RawPayload, as_number, as_text
from inflight.tracker.progress import estimate_progress

FIELD_ALIASES: Dict[str, Tuple[Path, ...]] = {
    "flight_number": (
        ("flight_info", "flight_no"),
        ("flightNumber",),
        ("flight_number",),
        ("flight",),
    ),
    "origin": (
        ("flight_info", "departure_airport_iata"),
        ("origin",),
        ("departure",),
        ("from",),
    ),
    "destination": (
        ("flight_info", "arrival_airport_iata"),
        ("destination",),
        ("arrival",),
        ("to",),
    ),
    "altitude": (
        ("positional_info", "above_sea_level_feet"),
        ("altitude",),
        ("alt",),
    ),
    "speed": (
        ("positional_info", "horizontal_velocity_mph"),
        ("speed",),
        ("groundSpeed",),
        ("ground_speed",),
    ),
    "time_remaining": (
        ("flight_info", "time_to_land_mins"),
        ("timeRemaining",),
        ("time_remaining",),
        ("eta",),
    ),
}


def _time_remaining_value(value: Any) -> Any:
    """Accept minutes (number or numeric string) or a pre-formatted string."""
    number = as_number(value)
    if number is not None:
        return number
    return as_text(value)


def extract_flight_status(raw: Any) -> FlightStatus:
    """Map an arbitrary decoded JSON value to a FlightStatus. Never raises."""
    payload = raw if isinstance(raw, RawPayload) else RawPayload(raw)

    altitude = payload.first(FIELD_ALIASES["altitude"], coerce=as_number)
    speed = payload.first(FIELD_ALIASES["speed"], coerce=as_number)
    time_remaining = payload.first(FIELD_ALIASES["time_remaining"], coerce=_time_remaining_value)

    return FlightStatus(
        flight_number=payload.first(FIELD_ALIASES["flight_number"], coerce=as_text),
        origin=payload.first(FIELD_ALIASES["origin"], coerce=as_text),
        destination=payload.first(FIELD_ALIASES["destination"], coerce=as_text),
        altitude_feet=altitude,
        speed_mph=speed,
        time_remaining_minutes=time_remaining if isinstance(time_remaining, float) else None,
        progress_percent=estimate_progress(payload),
        altitude=format_altitude(altitude),
        speed=format_speed(speed),
        time_remaining=format_time_remaining(time_remaining),
    )
