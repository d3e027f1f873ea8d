# core/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal, Optional, Tuple, Union

Budget = Literal["budget", "mid-range", "luxury"]
BUDGETS: Tuple[str, ...] = ("budget", "mid-range", "luxury")
DEFAULT_BUDGET = "mid-range"
DEFAULT_DAYS = 3


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RawDailySeries:
    """Parallel per-day arrays as the forecast service returns them."""

    dates: Tuple[date, ...]
    max_temps: Tuple[Optional[float], ...]
    min_temps: Tuple[Optional[float], ...]
    precipitation: Tuple[Optional[int], ...]
    weather_codes: Tuple[Optional[int], ...]

    def __len__(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class DailyForecastEntry:
    date: date
    max_temp: Optional[float]
    min_temp: Optional[float]
    precipitation_chance: Optional[int]
    condition: str
    location: str

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "maxTemp": self.max_temp,
            "minTemp": self.min_temp,
            "precipitationChance": self.precipitation_chance,
            "condition": self.condition,
            "location": self.location,
        }


# ──────────────────────────────────────────────────────────────────────────────
# Trip requests: one variant per accepted input shape
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class DateRangeTrip:
    city: str
    start_date: date
    end_date: date
    budget: Budget = DEFAULT_BUDGET

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class DayCountTrip:
    city: str
    days: int = DEFAULT_DAYS
    budget: Budget = DEFAULT_BUDGET


TripRequest = Union[DateRangeTrip, DayCountTrip]


def resolve_trip(
    city: str,
    budget: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    days: Optional[int] = None,
) -> TripRequest:
    """
    Turn loose entry-point parameters into exactly one trip variant.

    Raises ValueError when the parameters match neither shape.
    """
    city = (city or "").strip()
    if not city:
        raise ValueError("city must not be empty")

    budget = budget or DEFAULT_BUDGET
    if budget not in BUDGETS:
        raise ValueError(f"budget must be one of {', '.join(BUDGETS)}, got {budget!r}")

    if start_date is not None or end_date is not None:
        if start_date is None or end_date is None:
            raise ValueError("start date and end date must be given together")
        if days is not None:
            raise ValueError("give either a date range or a day count, not both")
        if end_date < start_date:
            raise ValueError("end date is before start date")
        return DateRangeTrip(city=city, start_date=start_date, end_date=end_date, budget=budget)

    if days is None:
        days = DEFAULT_DAYS
    if days < 1:
        raise ValueError("days must be at least 1")
    return DayCountTrip(city=city, days=days, budget=budget)


@dataclass(frozen=True)
class ForecastWindow:
    entries: Tuple[DailyForecastEntry, ...]
    location: str
    start_date: Optional[date]
    end_date: Optional[date]
    day_count: int
    budget: str
    forecast_available: bool
    explicit_range: bool = False


@dataclass(frozen=True)
class SearchResult:
    title: str
    description: str
    url: str

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "url": self.url}


@dataclass(frozen=True)
class ItineraryResult:
    text: str
    location: str
    day_count: int
    budget: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    forecast_available: bool = True

    def to_dict(self) -> dict:
        out = {
            "itinerary": self.text,
            "location": self.location,
            "days": self.day_count,
            "budget": self.budget,
            "forecastAvailable": self.forecast_available,
        }
        if self.start_date is not None:
            out["startDate"] = self.start_date.isoformat()
        if self.end_date is not None:
            out["endDate"] = self.end_date.isoformat()
        return out
