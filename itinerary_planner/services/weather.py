# services/weather.py

import datetime as dt
import logging

import requests

from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import MalformedResponseError
from itinerary_planner.core.models import Location, RawDailySeries

logger = logging.getLogger(__name__)

_DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_mean",
    "weather_code",
)

# WMO weather interpretation codes
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    95: "Thunderstorm",
}


def decode_condition(code) -> str:
    """Short description of a weather code; "Unknown" for anything unmapped."""
    return WEATHER_CODES.get(code, "Unknown")


class ForecastFetcher:
    """Daily forecast for a coordinate pair from the Open-Meteo forecast API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.settings = settings
        self.session = session or requests.Session()

    def fetch(self, location: Location) -> RawDailySeries:
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "daily": ",".join(_DAILY_FIELDS),
            "timezone": "auto",
            "forecast_days": self.settings.forecast_days,
        }
        logger.info("Fetching forecast for %s (%s, %s)",
                    location.name, location.latitude, location.longitude)
        r = self.session.get(
            self.settings.forecast_url, params=params, timeout=self.settings.http_timeout
        )
        # Open-Meteo answers bad requests with {"error": true, "reason": ...}
        if r.status_code >= 400:
            try:
                reason = r.json().get("reason", "")
            except (ValueError, AttributeError):
                reason = ""
            raise MalformedResponseError(f"forecast service {r.status_code}: {reason}")
        return parse_daily(r.json())


def parse_daily(payload: dict) -> RawDailySeries:
    """
    Pull the parallel daily arrays out of a forecast payload.

    Raises MalformedResponseError when the ``daily`` object is absent or
    its arrays are missing or not aligned.
    """
    daily = payload.get("daily") if isinstance(payload, dict) else None
    if not isinstance(daily, dict) or "time" not in daily:
        raise MalformedResponseError("forecast response has no daily series")

    missing = [f for f in _DAILY_FIELDS if f not in daily]
    if missing:
        raise MalformedResponseError(f"forecast response lacks {', '.join(missing)}")

    times = daily["time"]
    if any(len(daily[f]) != len(times) for f in _DAILY_FIELDS):
        raise MalformedResponseError("forecast daily arrays are not aligned")

    try:
        dates = tuple(dt.date.fromisoformat(t) for t in times)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"bad date in forecast response: {exc}") from exc

    return RawDailySeries(
        dates=dates,
        max_temps=tuple(daily["temperature_2m_max"]),
        min_temps=tuple(daily["temperature_2m_min"]),
        precipitation=tuple(
            None if p is None else round(p) for p in daily["precipitation_probability_mean"]
        ),
        weather_codes=tuple(daily["weather_code"]),
    )
