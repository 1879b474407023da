"""Output formatting for award search results."""

import json
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import AirportMatch, AwardResult, ResolvedCode

console = Console()

CABIN_STYLES = {
    "economy": "green",
    "premium_economy": "cyan",
    "business": "yellow",
    "first": "red bold",
}


def format_miles(miles: Optional[int]) -> str:
    """Format miles with comma separator."""
    if miles is None:
        return "–"
    return f"{miles:,}"


def format_transfer_time(hours: int) -> str:
    if hours == 0:
        return "Instant"
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}d"


def format_ratio(ratio) -> str:
    return f"1:{float(ratio):g}"


def cabin_label(cabin: str) -> str:
    return cabin.replace("_", " ").title()


def _miles_range(result: AwardResult) -> str:
    chart = result.chart
    if chart.min_miles == chart.max_miles:
        return format_miles(chart.min_miles)
    return f"{format_miles(chart.min_miles)}–{format_miles(chart.max_miles)}"


def print_award_results(
    results: list[AwardResult],
    origin: str,
    destination: str,
    cabin: str,
) -> None:
    """Print search results as a rich table, one row per program."""
    if not results:
        console.print(
            f"[dim]No award charts found for {origin} → {destination} "
            f"in {cabin_label(cabin)}[/dim]"
        )
        return

    title = f"✈  {origin} → {destination}  |  {cabin_label(cabin)}"
    console.print(f"\n[bold blue]{title}[/bold blue]")

    table = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        show_lines=False,
        pad_edge=True,
    )
    table.add_column("Program", style="white", no_wrap=True)
    table.add_column("Alliance")
    table.add_column("Regions")
    table.add_column("Miles", justify="right", style="bold")
    table.add_column("Type", justify="center")
    table.add_column("Transfer From")
    table.add_column("Points", justify="right")
    table.add_column("Time", justify="right")

    for result in results:
        program_text = Text(result.program.name)
        if result.program.has_dynamic_pricing:
            program_text.append(" (dynamic)", style="dim")
        miles_text = Text(_miles_range(result), style=CABIN_STYLES.get(result.chart.cabin_class, "white"))
        trip_type = "One-way" if result.chart.is_one_way else "Round-trip"
        regions = f"{result.origin_region} → {result.destination_region}"

        options = sorted(result.transfer_options, key=lambda t: t.points_needed)
        best = result.best_transfer()
        if not options:
            table.add_row(
                program_text, result.alliance or "–", regions, miles_text, trip_type,
                "[dim]–[/dim]", "–", "–",
            )
            continue

        for i, option in enumerate(options):
            source = option.card_program.name
            if option.is_bonus_active and option.bonus_ratio:
                source += f" [green](bonus {format_ratio(option.bonus_ratio)})[/green]"
            points = Text(format_miles(option.points_needed), style="bold green" if option is best else "")
            if i == 0:
                table.add_row(
                    program_text, result.alliance or "–", regions, miles_text, trip_type,
                    source, points,
                    format_transfer_time(option.transfer_time_hours),
                )
            else:
                # Additional transfer rows (indented)
                table.add_row(
                    "", "", "", "", "",
                    source, points,
                    format_transfer_time(option.transfer_time_hours),
                )

    console.print(table)

    for result in results:
        if result.search_url:
            console.print(f"[dim]{result.program.code}: {result.search_url}[/dim]")

    total = len(results)
    console.print(f"[dim]{total} program{'s' if total != 1 else ''} found.[/dim]\n")


def print_results_json(results: list[AwardResult]) -> None:
    """Print results as JSON."""
    print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))


def print_airport_matches(matches: list[AirportMatch]) -> None:
    if not matches:
        console.print("[dim]No airports found.[/dim]")
        return

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("City")
    table.add_column("Country")
    for m in matches:
        name = m.name
        if m.is_metro:
            name += f" [dim]({', '.join(m.airport_codes)})[/dim]"
        table.add_row(m.code, name, m.city, m.country)
    console.print(table)


def print_resolved(resolved: ResolvedCode) -> None:
    if not resolved.airport_codes:
        console.print(f"[red]Unknown airport or metro code: {resolved.code}[/red]")
        return
    if resolved.is_metro:
        console.print(
            f"[bold]{resolved.code}[/bold] = {resolved.metro_name}: "
            f"{', '.join(resolved.airport_codes)}"
        )
    else:
        console.print(f"[bold]{resolved.code}[/bold]: {resolved.airport_codes[0]}")


def print_programs(programs: list[dict]) -> None:
    table = Table(
        title="Airline Programs",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Alliance")
    table.add_column("Pricing")
    table.add_column("Transfer Partners", justify="right")
    table.add_column("Charts", justify="right")

    for p in programs:
        table.add_row(
            p["code"],
            p["name"],
            p["alliance_name"] or "[dim]–[/dim]",
            "Dynamic" if p["has_dynamic_pricing"] else "Fixed",
            str(p["transfer_partner_count"]),
            str(p["award_chart_count"]),
        )
    console.print(table)


def print_program_detail(detail: dict) -> None:
    program = detail["program"]
    alliance = program["alliance_name"] or "No alliance"
    console.print(f"\n[bold blue]{program['name']} ({program['code']})[/bold blue]  [dim]{alliance}[/dim]")

    if detail["transfer_partners"]:
        table = Table(title="Transfer Partners", box=box.ROUNDED, header_style="bold cyan")
        table.add_column("Card Program")
        table.add_column("Ratio", justify="right")
        table.add_column("Time", justify="right")
        table.add_column("Bonus")
        for t in detail["transfer_partners"]:
            bonus = format_ratio(t["bonus_ratio"]) if t["is_bonus_active"] and t["bonus_ratio"] else "–"
            table.add_row(
                t["credit_card_program_name"],
                format_ratio(t["transfer_ratio"]),
                format_transfer_time(t["transfer_time_hours"]),
                bonus,
            )
        console.print(table)

    if detail["award_charts"]:
        table = Table(title="Award Chart", box=box.ROUNDED, header_style="bold cyan")
        table.add_column("From")
        table.add_column("To")
        table.add_column("Cabin")
        table.add_column("Miles", justify="right")
        table.add_column("Partners")
        for c in detail["award_charts"]:
            miles = format_miles(c["min_miles"])
            if c["max_miles"] != c["min_miles"]:
                miles += f"–{format_miles(c['max_miles'])}"
            table.add_row(
                (c["origin_region"] or {}).get("name", "?"),
                (c["destination_region"] or {}).get("name", "?"),
                Text(cabin_label(c["cabin_class"]), style=CABIN_STYLES.get(c["cabin_class"], "white")),
                miles,
                c["partner_type"].replace("_", " "),
            )
        console.print(table)
    else:
        console.print("[dim]No award chart on file.[/dim]")

    if detail["alliance_partners"]:
        names = ", ".join(p["name"] for p in detail["alliance_partners"])
        console.print(f"[dim]Alliance partners: {names}[/dim]")


def print_card_programs(cards: list[dict]) -> None:
    table = Table(title="Credit Card Programs", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    for c in cards:
        table.add_row(c["code"], c["name"])
    console.print(table)
