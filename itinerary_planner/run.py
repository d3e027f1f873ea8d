# run.py

import argparse
import datetime
import logging
import sys

import requests
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import PlannerError
from itinerary_planner.core.models import BUDGETS, DEFAULT_BUDGET, resolve_trip
from itinerary_planner.pipeline import ItineraryPlanner

console = Console()


def _iso_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="itinerary-planner",
        description="Weather-aware day-by-day travel itinerary.",
    )
    p.add_argument("--city", "--dest", required=True)
    p.add_argument("--start", type=_iso_date)  # YYYY-MM-DD
    p.add_argument("--end", type=_iso_date)
    p.add_argument("--days", type=int)
    p.add_argument("--budget", choices=BUDGETS, default=DEFAULT_BUDGET)
    return p


def main(argv=None, planner=None) -> int:
    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    p = build_parser()
    args = p.parse_args(argv)
    try:
        trip = resolve_trip(args.city, args.budget, args.start, args.end, args.days)
    except ValueError as e:
        p.error(str(e))

    planner = planner or ItineraryPlanner.from_settings(settings)

    console.print(f"[cyan]→ Planning {escape(trip.city)} ({trip.budget})…[/]")
    try:
        result = planner.plan(
            trip, on_fragment=lambda s: console.out(s, end="", highlight=False)
        )
    except (PlannerError, requests.RequestException) as e:
        console.print(f"\n[bold red]✗[/] {escape(str(e))}")
        return 1

    console.print()
    if not result.forecast_available:
        console.print("[yellow]No forecast for these dates: itinerary written without weather.[/]")
    span = ""
    if result.start_date and result.end_date:
        span = f", {result.start_date} → {result.end_date}"
    console.print(
        f"[bold green]Itinerary ready:[/] {escape(result.location)}, "
        f"{result.day_count} day(s){span}, {result.budget}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
