# core/window.py

from __future__ import annotations

from typing import Optional

from itinerary_planner.core.models import (
    DailyForecastEntry,
    DateRangeTrip,
    DayCountTrip,
    ForecastWindow,
    RawDailySeries,
    TripRequest,
)
from itinerary_planner.services.weather import decode_condition


def _entry(series: RawDailySeries, i: int, location: str) -> DailyForecastEntry:
    return DailyForecastEntry(
        date=series.dates[i],
        max_temp=series.max_temps[i],
        min_temp=series.min_temps[i],
        precipitation_chance=series.precipitation[i],
        condition=decode_condition(series.weather_codes[i]),
        location=location,
    )


def select_window(trip: TripRequest,
                  location: str,
                  series: Optional[RawDailySeries]) -> ForecastWindow:
    """
    Cut the fetched daily series down to the trip.

    ``series`` is None when the forecast could not be read; the window is
    then returned with ``forecast_available=False`` instead of failing.
    """
    if isinstance(trip, DateRangeTrip):
        return _select_range(trip, location, series)
    if isinstance(trip, DayCountTrip):
        return _select_prefix(trip, location, series)
    raise TypeError(f"unsupported trip request: {trip!r}")


def _select_range(trip: DateRangeTrip,
                  location: str,
                  series: Optional[RawDailySeries]) -> ForecastWindow:
    entries = ()
    if series is not None:
        entries = tuple(
            _entry(series, i, location)
            for i, d in enumerate(series.dates)
            if trip.start_date <= d <= trip.end_date
        )
    # day count comes from the calendar, never from the entries
    return ForecastWindow(
        entries=entries,
        location=location,
        start_date=trip.start_date,
        end_date=trip.end_date,
        day_count=trip.day_count,
        budget=trip.budget,
        forecast_available=bool(entries),
        explicit_range=True,
    )


def _select_prefix(trip: DayCountTrip,
                   location: str,
                   series: Optional[RawDailySeries]) -> ForecastWindow:
    if series is None or len(series) == 0:
        return ForecastWindow(
            entries=(),
            location=location,
            start_date=None,
            end_date=None,
            day_count=trip.days,
            budget=trip.budget,
            forecast_available=False,
        )

    n = min(trip.days, len(series))
    entries = tuple(_entry(series, i, location) for i in range(n))
    return ForecastWindow(
        entries=entries,
        location=location,
        start_date=entries[0].date,
        end_date=entries[-1].date,
        day_count=n,
        budget=trip.budget,
        forecast_available=True,
    )
