# tests/test_window.py

import datetime

import pytest

from conftest import make_series
from itinerary_planner.core.models import DateRangeTrip, DayCountTrip
from itinerary_planner.core.window import select_window

D = datetime.date


def test_range_keeps_only_dates_inside_inclusive_bounds():
    series = make_series(D(2025, 11, 1), 10)
    trip = DateRangeTrip("Bandung", D(2025, 11, 3), D(2025, 11, 6), "budget")

    window = select_window(trip, "Bandung", series)

    assert [e.date for e in window.entries] == [D(2025, 11, d) for d in (3, 4, 5, 6)]
    assert all(trip.start_date <= e.date <= trip.end_date for e in window.entries)
    assert window.day_count == 4
    assert window.forecast_available is True
    assert window.explicit_range is True
    assert window.entries[0].condition == "Overcast"
    assert window.entries[0].location == "Bandung"


def test_range_includes_last_available_day():
    series = make_series(D(2025, 11, 1), 16)
    last = series.dates[-1]
    trip = DateRangeTrip("Bandung", last, last + datetime.timedelta(days=2))

    window = select_window(trip, "Bandung", series)

    assert [e.date for e in window.entries] == [last]
    assert window.day_count == 3


def test_range_outside_horizon_degrades_with_calendar_day_count():
    series = make_series(D(2025, 10, 1), 16)
    trip = DateRangeTrip("Alor Setar", D(2025, 11, 4), D(2025, 11, 5), "mid-range")

    window = select_window(trip, "Alor Setar", series)

    assert window.entries == ()
    assert window.forecast_available is False
    assert window.day_count == 2
    assert window.start_date == D(2025, 11, 4)


@pytest.mark.parametrize("span", [0, 1, 6, 29])
def test_range_day_count_is_calendar_span(span):
    start = D(2025, 12, 28)
    trip = DateRangeTrip("Bandung", start, start + datetime.timedelta(days=span))
    for series in (None, make_series(start, 3)):
        assert select_window(trip, "Bandung", series).day_count == span + 1


def test_range_without_series_degrades():
    trip = DateRangeTrip("Bandung", D(2025, 11, 4), D(2025, 11, 6))
    window = select_window(trip, "Bandung", None)
    assert (window.entries, window.forecast_available, window.day_count) == ((), False, 3)


def test_day_count_takes_prefix():
    series = make_series(D(2025, 11, 1), 16, code=61)
    window = select_window(DayCountTrip("Bandung", 3, "budget"), "Bandung", series)

    assert len(window.entries) == 3
    assert window.forecast_available is True
    assert window.day_count == 3
    assert window.start_date == D(2025, 11, 1)
    assert window.end_date == D(2025, 11, 3)
    assert window.explicit_range is False
    assert window.entries[2].condition == "Slight rain"


def test_day_count_is_capped_by_available_days():
    series = make_series(D(2025, 11, 1), 7)
    window = select_window(DayCountTrip("Bandung", 10), "Bandung", series)
    assert window.day_count == 7
    assert len(window.entries) == 7


def test_day_count_without_series_keeps_requested_days():
    window = select_window(DayCountTrip("Bandung", 4), "Bandung", None)
    assert window.day_count == 4
    assert window.forecast_available is False
    assert window.start_date is None
