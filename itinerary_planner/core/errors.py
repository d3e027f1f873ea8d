# core/errors.py


class PlannerError(RuntimeError):
    """Base class for every failure the planner raises on purpose."""


class NotFoundError(PlannerError):
    """The geocoding service returned no candidate for the city."""


class MalformedResponseError(PlannerError):
    """The forecast service answered without the expected daily series."""


class IncompleteWindowError(PlannerError):
    """A forecast window is missing a field the prompt needs."""


class SearchServiceError(PlannerError):
    """The web search service failed or answered with an error status."""


class GenerationError(PlannerError):
    """The language model stream failed before completing."""
