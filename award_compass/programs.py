"""Program catalog views: listing, per-program detail, card programs."""

from dataclasses import asdict
from typing import Optional

from .search import AwardSearch


def _alliance_fields(search: AwardSearch, alliance_id: Optional[int]) -> dict:
    alliance = search.alliances.get(alliance_id) if alliance_id is not None else None
    return {
        "alliance_id": alliance_id,
        "alliance_name": alliance.name if alliance else None,
        "alliance_code": alliance.code if alliance else None,
    }


def list_programs(search: AwardSearch) -> list[dict]:
    """Every airline program by name, with transfer-partner and chart counts."""
    rows = []
    for program in search.programs:
        rows.append({
            "id": program.id,
            "name": program.name,
            "code": program.code,
            "has_dynamic_pricing": program.has_dynamic_pricing,
            **_alliance_fields(search, program.alliance_id),
            "transfer_partner_count": len(search.transfers.partners_for_program(program.id)),
            "award_chart_count": len(search.charts.charts_for_program(program.id)),
        })
    return rows


def program_detail(search: AwardSearch, code: str) -> Optional[dict]:
    """Full view of one program, or None if *code* is unknown.

    Returns a dict with keys: program, transfer_partners, award_charts,
    regions, alliance_partners.
    """
    code = code.upper()
    program = next((p for p in search.programs if p.code == code), None)
    if program is None:
        return None

    transfer_partners = [
        {
            "credit_card_program_id": card.id,
            "credit_card_program_name": card.name,
            "credit_card_program_code": card.code,
            "transfer_ratio": float(p.transfer_ratio),
            "transfer_time_hours": p.transfer_time_hours,
            "is_bonus_active": p.is_bonus_active,
            "bonus_ratio": float(p.bonus_ratio) if p.bonus_ratio is not None else None,
        }
        for card, p in search.transfers.partners_for_program(program.id)
    ]

    def region_dict(region_id: int) -> Optional[dict]:
        region = search.regions.region(region_id)
        if region is None or region.program_id != program.id:
            return None
        return {"id": region.id, "name": region.name, "code": region.code}

    award_charts = []
    for chart in search.charts.charts_for_program(program.id):
        row = asdict(chart)
        row["origin_region"] = region_dict(chart.origin_region_id)
        row["destination_region"] = region_dict(chart.destination_region_id)
        award_charts.append(row)

    alliance_partners = [
        {"id": p.id, "name": p.name, "code": p.code}
        for p in search.programs
        if program.alliance_id is not None
        and p.alliance_id == program.alliance_id
        and p.id != program.id
    ]

    return {
        "program": {
            "id": program.id,
            "name": program.name,
            "code": program.code,
            "has_dynamic_pricing": program.has_dynamic_pricing,
            "search_url_template": program.search_url_template,
            **_alliance_fields(search, program.alliance_id),
        },
        "transfer_partners": transfer_partners,
        "award_charts": award_charts,
        "regions": [
            {"id": r.id, "name": r.name, "code": r.code}
            for r in search.regions.regions_for_program(program.id)
        ],
        "alliance_partners": alliance_partners,
    }


def list_card_programs(search: AwardSearch) -> list[dict]:
    return [asdict(c) for c in search.transfers.card_programs()]
