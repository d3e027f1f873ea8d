"""
services/search.py
------------------
Web search through the Brave Search API.
- One GET per query, at most ``search_result_count`` results
- Optional date range appended to the query text
- Every failure (HTTP status or transport) becomes a SearchServiceError
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional

import requests

from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import SearchServiceError
from itinerary_planner.core.models import SearchResult

logger = logging.getLogger(__name__)


def augment_query(query: str,
                  start_date: Optional[dt.date] = None,
                  end_date: Optional[dt.date] = None) -> str:
    if start_date and end_date:
        return f"{query} {start_date.isoformat()} to {end_date.isoformat()}"
    if start_date:
        return f"{query} {start_date.isoformat()}"
    return query


class BraveSearchClient:

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": self.settings.require("brave_api_key"),
        }

    def search(self,
               query: str,
               start_date: Optional[dt.date] = None,
               end_date: Optional[dt.date] = None) -> List[SearchResult]:
        """Ranked results for ``query``, best first."""
        q = augment_query(query, start_date, end_date)
        params = {"q": q, "count": self.settings.search_result_count}
        logger.info("Searching the web for %r", q)
        try:
            r = self.session.get(
                self.settings.search_url,
                params=params,
                headers=self._headers(),
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as exc:
            raise SearchServiceError(f"Brave Search request failed: {exc}") from exc

        if r.status_code >= 400:
            raise SearchServiceError(f"Brave Search API error: {r.status_code}")

        try:
            data = r.json()
        except ValueError as exc:
            raise SearchServiceError("Brave Search returned invalid JSON") from exc

        raw = (data.get("web") or {}).get("results") or []
        return [
            SearchResult(
                title=item.get("title", ""),
                description=item.get("description", ""),
                url=item.get("url", ""),
            )
            for item in raw[: self.settings.search_result_count]
        ]
