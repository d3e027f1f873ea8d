# pipeline.py

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

import requests

from itinerary_planner.ai.gemini import GeminiGenerator
from itinerary_planner.ai.prompts import build_prompt
from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import GenerationError, MalformedResponseError, PlannerError
from itinerary_planner.core.models import ItineraryResult, TripRequest
from itinerary_planner.core.window import select_window
from itinerary_planner.services.geocode import GeocoderClient
from itinerary_planner.services.search import BraveSearchClient
from itinerary_planner.services.weather import ForecastFetcher

logger = logging.getLogger(__name__)


def accumulate(fragments: Iterable[str],
               on_fragment: Optional[Callable[[str], None]] = None) -> str:
    """
    Concatenate streamed fragments in arrival order.

    The fragment iterator is closed on every exit path. Planner errors pass
    through unchanged; anything else is reported as a GenerationError.
    """
    parts = []
    it = iter(fragments)
    try:
        for fragment in it:
            if on_fragment is not None:
                on_fragment(fragment)
            parts.append(fragment)
    except PlannerError:
        raise
    except Exception as exc:
        raise GenerationError(f"generation failed: {exc}") from exc
    finally:
        close = getattr(it, "close", None)
        if close is not None:
            close()
    return "".join(parts)


class ItineraryPlanner:
    """Geocode, fetch the forecast, window it, prompt the model, collect the text."""

    def __init__(self, geocoder, forecaster, generator, search):
        self.geocoder = geocoder
        self.forecaster = forecaster
        self.generator = generator
        self.search = search

    @classmethod
    def from_settings(cls, settings: Settings,
                      session: requests.Session | None = None) -> "ItineraryPlanner":
        session = session or requests.Session()
        return cls(
            geocoder=GeocoderClient(settings, session),
            forecaster=ForecastFetcher(settings, session),
            generator=GeminiGenerator(settings),
            search=BraveSearchClient(settings, session),
        )

    def plan(self, trip: TripRequest,
             on_fragment: Optional[Callable[[str], None]] = None) -> ItineraryResult:
        location = self.geocoder.resolve(trip.city)

        try:
            series = self.forecaster.fetch(location)
        except MalformedResponseError as exc:
            logger.warning("Forecast unavailable for %s: %s", location.name, exc)
            series = None

        window = select_window(trip, location.name, series)
        if not window.forecast_available:
            logger.warning("No forecast data for %s in the requested window; "
                           "planning without weather", location.name)

        prompt = build_prompt(window)
        logger.debug("Prompt:\n%s", prompt)
        text = accumulate(self.generator.stream(prompt, self.search), on_fragment)

        return ItineraryResult(
            text=text,
            location=window.location,
            day_count=window.day_count,
            budget=window.budget,
            start_date=window.start_date,
            end_date=window.end_date,
            forecast_available=window.forecast_available,
        )
