# tests/test_models.py

import datetime

import pytest

from itinerary_planner.core.config import Settings
from itinerary_planner.core.models import (
    DateRangeTrip,
    DayCountTrip,
    ItineraryResult,
    resolve_trip,
)

D = datetime.date


def test_resolve_date_range():
    trip = resolve_trip("Alor Setar", "mid-range", D(2025, 11, 4), D(2025, 11, 5))
    assert trip == DateRangeTrip("Alor Setar", D(2025, 11, 4), D(2025, 11, 5), "mid-range")
    assert trip.day_count == 2


def test_resolve_defaults_to_three_mid_range_days():
    assert resolve_trip(" Bandung ") == DayCountTrip("Bandung", 3, "mid-range")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"city": ""},
        {"city": "Bandung", "budget": "cheap"},
        {"city": "Bandung", "start_date": D(2025, 11, 4)},
        {"city": "Bandung", "start_date": D(2025, 11, 5), "end_date": D(2025, 11, 4)},
        {"city": "Bandung", "start_date": D(2025, 11, 4), "end_date": D(2025, 11, 5), "days": 2},
        {"city": "Bandung", "days": 0},
    ],
)
def test_resolve_rejects_bad_shapes(kwargs):
    with pytest.raises(ValueError):
        resolve_trip(**kwargs)


def test_result_to_dict_omits_missing_dates():
    out = ItineraryResult("text", "Bandung", 3, "budget", forecast_available=False).to_dict()
    assert out == {
        "itinerary": "text",
        "location": "Bandung",
        "days": 3,
        "budget": "budget",
        "forecastAvailable": False,
    }


def test_result_to_dict_with_dates():
    out = ItineraryResult("t", "Alor Setar", 2, "mid-range", D(2025, 11, 4), D(2025, 11, 5)).to_dict()
    assert out["startDate"] == "2025-11-04"
    assert out["endDate"] == "2025-11-05"


def test_settings_from_env():
    s = Settings.from_env({
        "GEMINI_API_KEY": "g",
        "BRAVE_SEARCH_API_KEY": "b",
        "FORECAST_DAYS": "7",
        "LOG_LEVEL": "debug",
    })
    assert s.gemini_api_key == "g"
    assert s.brave_api_key == "b"
    assert s.forecast_days == 7
    assert s.log_level == "DEBUG"
    assert s.gemini_model == "gemini-2.5-flash"


def test_settings_require_names_env_var():
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        Settings().require("gemini_api_key")
