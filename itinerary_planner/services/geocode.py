# services/geocode.py

import logging

import requests

from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import NotFoundError
from itinerary_planner.core.models import Location

logger = logging.getLogger(__name__)


class GeocoderClient:
    """Resolves a free-text city name through the Open-Meteo geocoding API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.settings = settings
        self.session = session or requests.Session()

    def resolve(self, city_name: str) -> Location:
        """
        Return the single best match for ``city_name``.

        Raises NotFoundError when the service has no candidate at all.
        """
        if not city_name or not city_name.strip():
            raise ValueError("city name must not be empty")

        params = {"name": city_name.strip(), "count": 1}
        logger.info("Geocoding %r", city_name)
        r = self.session.get(
            self.settings.geocoding_url, params=params, timeout=self.settings.http_timeout
        )
        r.raise_for_status()
        results = r.json().get("results") or []
        if not results:
            raise NotFoundError(f"Location '{city_name}' not found")

        best = results[0]
        return Location(
            name=best["name"],
            latitude=float(best["latitude"]),
            longitude=float(best["longitude"]),
        )
