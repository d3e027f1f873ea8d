# ai/gemini.py
# ------------------------------------------------------------------------------
from __future__ import annotations

import datetime as dt
import logging
from typing import Callable, Iterator, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from itinerary_planner.ai.prompts import AGENT_INSTRUCTIONS
from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import GenerationError

logger = logging.getLogger(__name__)

_MODEL_ERRORS = (
    google_exceptions.GoogleAPIError,
    genai.types.BlockedPromptException,
    genai.types.StopCandidateException,
    ValueError,
)


# ──────────────────────────────────────────────────────────────────────────────
# Helper: a configured Gemini model carrying the search tool
# ──────────────────────────────────────────────────────────────────────────────
def _get_model(settings: Settings, tools: list):
    genai.configure(api_key=settings.require("gemini_api_key"))
    return genai.GenerativeModel(
        settings.gemini_model,
        system_instruction=AGENT_INSTRUCTIONS,
        tools=tools,
    )


def _parse_date(value) -> Optional[dt.date]:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(str(value))
    except ValueError:
        return None


def make_search_tool(search) -> Callable[..., dict]:
    """Wrap a search capability as the function the model is allowed to call."""

    def web_search(query: str, start_date: str = "", end_date: str = "") -> dict:
        """Search the web for information about a location.

        Args:
            query: The search query.
            start_date: Optional trip start date, YYYY-MM-DD.
            end_date: Optional trip end date, YYYY-MM-DD.
        """
        results = search.search(query, _parse_date(start_date), _parse_date(end_date))
        return {"results": [r.to_dict() for r in results]}

    return web_search


def _parts(chunk) -> list:
    # trailing chunks may carry only usage metadata
    if not chunk.candidates:
        return []
    return chunk.candidates[0].content.parts


def _release(response) -> None:
    # a streamed response keeps its transport stream open until drained
    iterator = getattr(response, "_iterator", None)
    for name in ("cancel", "close"):
        closer = getattr(iterator, name, None)
        if callable(closer):
            closer()
            return


class GeminiGenerator:
    """
    Streams itinerary text from Gemini while serving its web_search calls.

    ``model_factory`` receives the tool list and returns an object with a
    ``generate_content(contents, stream=True)`` method; tests pass a fake.
    """

    def __init__(self, settings: Settings, model_factory: Optional[Callable] = None):
        self.settings = settings
        self._model_factory = model_factory or (lambda tools: _get_model(settings, tools))

    def _answer(self, call, tool) -> genai.protos.Part:
        args = dict(call.args or {})
        logger.debug("Model called %s with %s", call.name, args)
        if call.name == tool.__name__:
            payload = tool(
                query=str(args.get("query", "")),
                start_date=str(args.get("start_date", "") or ""),
                end_date=str(args.get("end_date", "") or ""),
            )
        else:
            payload = {"error": f"unknown tool {call.name}"}
        return genai.protos.Part(
            function_response=genai.protos.FunctionResponse(name=call.name, response=payload)
        )

    def stream(self, prompt: str, search) -> Iterator[str]:
        """
        Yield text fragments in arrival order.

        Function calls are answered with search results and the model is
        asked to continue, for at most ``max_search_rounds`` rounds.
        SearchServiceError from ``search`` propagates as is.
        """
        tool = make_search_tool(search)
        model = self._model_factory([tool])
        contents: list = [{"role": "user", "parts": [prompt]}]

        for _ in range(self.settings.max_search_rounds + 1):
            try:
                response = model.generate_content(contents, stream=True)
            except _MODEL_ERRORS as exc:
                raise GenerationError(f"Gemini request failed: {exc}") from exc

            calls = []
            try:
                for chunk in response:
                    for part in _parts(chunk):
                        call = getattr(part, "function_call", None)
                        if call and call.name:
                            calls.append(call)
                        elif part.text:
                            yield part.text
            except _MODEL_ERRORS as exc:
                raise GenerationError(f"Gemini stream failed: {exc}") from exc
            finally:
                _release(response)

            if not calls:
                return

            contents.append(response.candidates[0].content)
            contents.append({"role": "user", "parts": [self._answer(c, tool) for c in calls]})

        raise GenerationError(
            f"model still calling tools after {self.settings.max_search_rounds} rounds"
        )
