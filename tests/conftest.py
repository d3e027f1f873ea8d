# tests/conftest.py

import datetime

import pytest
import requests

from itinerary_planner.core.config import Settings
from itinerary_planner.core.models import RawDailySeries


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Answers GET requests from a {url: FakeResponse | Exception} map and records them."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def settings():
    return Settings(gemini_api_key="gemini-test", brave_api_key="brave-test")


def make_series(start: datetime.date, n: int, code: int = 3) -> RawDailySeries:
    dates = tuple(start + datetime.timedelta(days=i) for i in range(n))
    return RawDailySeries(
        dates=dates,
        max_temps=tuple(30.0 + i for i in range(n)),
        min_temps=tuple(22.0 + i for i in range(n)),
        precipitation=tuple(10 * i for i in range(n)),
        weather_codes=tuple(code for _ in range(n)),
    )


def forecast_payload(start: datetime.date, n: int, code: int = 3) -> dict:
    dates = [(start + datetime.timedelta(days=i)).isoformat() for i in range(n)]
    return {
        "timezone": "Asia/Jakarta",
        "daily": {
            "time": dates,
            "temperature_2m_max": [30.0 + i for i in range(n)],
            "temperature_2m_min": [22.0 + i for i in range(n)],
            "precipitation_probability_mean": [10 * i for i in range(n)],
            "weather_code": [code] * n,
        },
    }
