"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

NOW = datetime(2026, 1, 30, 23, 0, tzinfo=timezone.utc)

# Intelsat system-status response as served on American flights (trimmed)
AMERICAN_PAYLOAD = {
    "time_stamp": "2026-01-30T22:54:08.150Z",
    "aircraft_info": {"tail_no": "N818AW", "airline_code": "AAL", "aircraft_type": "A319"},
    "positional_info": {
        "above_gnd_level_feet": "34871.2",
        "horizontal_velocity_mph": "512.6",
        "above_sea_level_feet": "35000.4",
        "source": "ARINC_DIRECT",
    },
    "flight_info": {
        "flight_no": "AAL2911",
        "departure_airport_icao": "KMYR",
        "arrival_airport_icao": "KDFW",
        "departure_airport_iata": "MYR",
        "arrival_airport_iata": "DFW",
        "time_to_land_mins": "90",
        "total_flight_duration_mins": "180",
    },
    "service_info": {"flight_phase": "CRUISE", "link_state": "UP"},
}

SPIRIT_PAYLOAD = {
    "flightNumber": "NK 123",
    "origin": "FLL",
    "destination": "LAX",
    "altitude": 35000,
    "speed": 520,
    "timeRemaining": 145,
    "progress": 62,
}

DELTA_PAYLOAD = {
    "flight_number": "DL 789",
    "departure": "ATL",
    "arrival": "SEA",
    "alt": 36000,
    "ground_speed": 532.4,
    "eta": "3h 23m",
    "elapsed": 90,
    "duration": 293,
}


@pytest.fixture
def now() -> datetime:
    return NOW
