"""award-compass CLI - find award charts and transfer paths for an itinerary."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import programs as programs_mod
from .formatter import (
    console,
    print_airport_matches,
    print_award_results,
    print_card_programs,
    print_program_detail,
    print_programs,
    print_resolved,
    print_results_json,
)
from .models import CABIN_CLASSES
from .repository import DataStoreError
from .search import AwardSearch

app = typer.Typer(
    name="award-compass",
    help="🧭 Find which award charts cover a trip and how to fund them with card points",
    rich_markup_mode="rich",
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

DbOption = Annotated[Optional[Path], typer.Option("--db", help="Reference database path")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")]


def _open(db: Optional[Path], verbose: bool, workers: int = 1) -> AwardSearch:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    try:
        return AwardSearch.open(db, workers=workers)
    except DataStoreError as e:
        console.print(f"[red]⚠ {e}[/red]")
        raise typer.Exit(1)


@app.command()
def search(
    origin: Annotated[str, typer.Argument(help="Origin airport or metro code (e.g. NYC)")],
    destination: Annotated[str, typer.Argument(help="Destination airport or metro code (e.g. NRT)")],
    cabin: Annotated[str, typer.Option("--class", "-c", help="Cabin: economy, premium_economy, business, first")] = "economy",
    cards: Annotated[Optional[str], typer.Option("--cards", help="Comma-separated card programs (e.g. AMEX_MR,CHASE_UR)")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
    workers: Annotated[int, typer.Option("--workers", "-w", help="Evaluate programs on N threads")] = 1,
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """
    🔍 Find award charts covering an itinerary.

    Examples:

      award-compass search NYC NRT --class business --cards AMEX_MR,CHASE_UR

      award-compass search SFO LHR --class first --json
    """
    if cabin not in CABIN_CLASSES:
        console.print(f"[red]Invalid cabin. Choose: {', '.join(CABIN_CLASSES)}[/red]")
        raise typer.Exit(1)

    engine = _open(db, verbose, workers)
    enabled_cards = [c.strip().upper() for c in cards.split(",") if c.strip()] if cards else []

    results = engine.find_awards(origin.upper(), destination.upper(), cabin, enabled_cards)

    if as_json:
        print_results_json(results)
    else:
        print_award_results(results, origin.upper(), destination.upper(), cabin)


@app.command()
def airports(
    query: Annotated[str, typer.Argument(help="Airport code, city or name fragment")],
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """
    🛫 Search airports and metro areas.

    Example:

      award-compass airports tokyo
    """
    engine = _open(db, verbose)
    print_airport_matches(engine.search_airports(query))


@app.command()
def resolve(
    code: Annotated[str, typer.Argument(help="Airport or metro code")],
    as_json: Annotated[bool, typer.Option("--json", help="Print as JSON")] = False,
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """
    🧩 Show which airports a code covers.

    Example:

      award-compass resolve NYC
    """
    engine = _open(db, verbose)
    resolved = engine.resolve(code.upper())
    if as_json:
        print(json.dumps(resolved.to_dict(), indent=2))
    else:
        print_resolved(resolved)
        if not resolved.airport_codes:
            raise typer.Exit(1)


@app.command("programs")
def programs_list(
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """📋 List airline loyalty programs."""
    engine = _open(db, verbose)
    print_programs(programs_mod.list_programs(engine))


@app.command()
def program(
    code: Annotated[str, typer.Argument(help="Program code (e.g. ANA)")],
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """
    📖 Show one program's transfer partners and award chart.

    Example:

      award-compass program ANA
    """
    engine = _open(db, verbose)
    detail = programs_mod.program_detail(engine, code)
    if detail is None:
        console.print(f"[red]Program not found: {code.upper()}[/red]")
        raise typer.Exit(1)
    print_program_detail(detail)


@app.command()
def cards(
    db: DbOption = None,
    verbose: VerboseOption = False,
):
    """💳 List credit card programs usable with --cards."""
    engine = _open(db, verbose)
    print_card_programs(programs_mod.list_card_programs(engine))


def main():
    app()


if __name__ == "__main__":
    main()
