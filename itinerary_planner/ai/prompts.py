# ai/prompts.py
# ------------------------------------------------------------------------------
import json
import textwrap

from itinerary_planner.core.errors import IncompleteWindowError
from itinerary_planner.core.models import BUDGETS, ForecastWindow

# ──────────────────────────────────────────────────────────────────────────────
# System instruction given to the model once per generation
# ──────────────────────────────────────────────────────────────────────────────
AGENT_INSTRUCTIONS = textwrap.dedent(
    """\
    You are a travel expert who creates practical day-by-day itineraries.

    Use the web_search tool FIRST to find information about local attractions,
    activities, restaurants, events and accommodations.
    THEN write one single complete itinerary. Do not show your initial draft,
    only the final version.

    Adapt all recommendations to the user's budget preference.
    Keep all suggestions concise and practical. Adapt activities to the weather
    when a forecast is given.
    Do not include search result notes at the end of your response.
    """
)

# ──────────────────────────────────────────────────────────────────────────────
# Per-day layout the generated text must follow
# ──────────────────────────────────────────────────────────────────────────────
_DAY_LAYOUT = textwrap.dedent(
    """\
    Then, for each day, use exactly this layout:

    DAY X (DATE)
    {weather_line}BREAKFAST: one local breakfast spot with a brief description
    MORNING: one or two activities, with times and locations
    LUNCH: one local eatery with a brief description
    AFTERNOON: one or two activities, with times and locations
    DINNER: one local restaurant with a brief description
    EVENING: an optional evening activity if appropriate
    """
)

_WITH_FORECAST = "Base the plan on this weather forecast:\n{forecast_json}"

_WITHOUT_FORECAST = (
    "No weather forecast is available for this trip. Do not write WEATHER lines, "
    "do not invent temperatures or conditions, and keep activity choices "
    "weather-neutral."
)


def _check(window: ForecastWindow) -> None:
    if not window.location or not window.location.strip():
        raise IncompleteWindowError("forecast window has no location")
    if window.budget not in BUDGETS:
        raise IncompleteWindowError(f"forecast window has invalid budget {window.budget!r}")
    if window.day_count < 1:
        raise IncompleteWindowError("forecast window has no days")
    if window.explicit_range and (window.start_date is None or window.end_date is None):
        raise IncompleteWindowError("date-range window is missing its dates")
    if window.forecast_available and not window.entries:
        raise IncompleteWindowError("window claims a forecast but has no entries")


def _research_directives(window: ForecastWindow) -> list[str]:
    month_year = window.start_date.strftime("%B %Y")
    start, end = window.start_date.isoformat(), window.end_date.isoformat()
    loc = window.location
    return [
        "Before writing, you MUST run these searches with the web_search tool:",
        f'1. "festivals in {loc} {month_year}" (start_date={start}, end_date={end})',
        f'2. "local events in {loc} {month_year}" (start_date={start}, end_date={end})',
        f'3. "best time to visit {loc} {month_year}"',
    ]


def build_prompt(window: ForecastWindow) -> str:
    """Return the user prompt for one itinerary. Same window, same string."""
    _check(window)
    loc, n = window.location, window.day_count

    lines = [f"Create a {n}-day itinerary for {loc}."]
    if window.explicit_range:
        lines.append(
            f"Trip dates: {window.start_date.isoformat()} to {window.end_date.isoformat()}."
        )
    elif window.start_date is not None:
        lines.append(f"The trip starts on {window.start_date.isoformat()}.")
    lines.append("")

    if window.forecast_available:
        forecast_json = json.dumps([e.to_dict() for e in window.entries], indent=2)
        lines.append(_WITH_FORECAST.format(forecast_json=forecast_json))
    else:
        lines.append(_WITHOUT_FORECAST)
    lines.append("")
    lines.append(f"Budget preference: {window.budget}")
    lines.append("")

    if window.explicit_range:
        lines.extend(_research_directives(window))
        lines.append("")

    lines.append("Structure the itinerary as follows:")
    lines.append(f"DESTINATION OVERVIEW: a short introduction to {loc}.")
    if window.explicit_range:
        lines.append(
            f"BEST TIME TO VISIT: assess whether {window.start_date.strftime('%B %Y')} "
            f"is a good time to visit {loc}."
        )
        lines.append(
            "SPECIAL EVENTS & FESTIVALS: events happening during the trip dates, "
            "from your searches."
        )
    else:
        lines.append(f"BEST TIME TO VISIT: a short assessment of when to visit {loc}.")
    lines.append("")

    weather_line = (
        "WEATHER: brief summary with temperature and conditions\n"
        if window.forecast_available else ""
    )
    lines.append(_DAY_LAYOUT.format(weather_line=weather_line).rstrip("\n"))

    if n > 1:
        lines.append("")
        lines.append(
            "End with ACCOMMODATION recommendations offering Budget, Mid-range "
            "and Luxury options."
        )
    lines.append("")
    lines.append(
        f"Use the web_search tool to find popular attractions, activities, restaurants "
        f"and accommodations in {loc} that match the {window.budget} budget level."
    )
    return "\n".join(lines)
