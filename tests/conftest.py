"""Shared reference data for the award-compass test suite.

Fixture world (business class, NYC/TYO):

  ANA Mileage Club      Star      NA->Japan 75,000 (any)      flies JFK<->NRT
  Air Canada Aeroplan   Star      NA->Asia  60,000 (partner)  no own routes
  American AAdvantage   OneWorld  NA->Asia  57,500 (own_metal) no own routes
  Emirates Skywards     -         no Asia region
  Japan Airlines        OneWorld  no regions                  flies JFK<->NRT
  United MileagePlus    Star      NA->Japan 60,000 (any)      EWR is its only NYC airport
"""

import sqlite3
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from award_compass.models import (
    AirlineProgram,
    AirlineRoute,
    Airport,
    AirportRegionMapping,
    Alliance,
    AwardChart,
    CreditCardProgram,
    Region,
    TransferPartnership,
)
from award_compass.repository import InMemoryRepository
from award_compass.search import AwardSearch
from award_compass.store import create_schema

TODAY = date(2025, 6, 1)

ANA, UNITED, AEROPLAN, AADVANTAGE, EMIRATES, JAL = 1, 2, 3, 4, 5, 6
STAR, ONEWORLD = 1, 2
AMEX_MR, CHASE_UR, BILT = 1, 2, 3


def make_repository() -> InMemoryRepository:
    airports = [
        Airport("JFK", "John F. Kennedy International", "New York", "United States", "US", 40.64, -73.78, "NYC"),
        Airport("EWR", "Newark Liberty International", "Newark", "United States", "US", 40.69, -74.17, "NYC"),
        Airport("LGA", "LaGuardia", "New York", "United States", "US", 40.78, -73.87, "NYC"),
        Airport("NRT", "Narita International", "Tokyo", "Japan", "JP", 35.77, 140.39, "TYO"),
        Airport("HND", "Haneda", "Tokyo", "Japan", "JP", 35.55, 139.78, "TYO"),
        Airport("LHR", "Heathrow", "London", "United Kingdom", "GB", 51.47, -0.45, "LON"),
        Airport("LAX", "Los Angeles International", "Los Angeles", "United States", "US", 33.94, -118.41),
        Airport("SFO", "San Francisco International", "San Francisco", "United States", "US", 37.62, -122.38, "SFO"),
        Airport("OAK", "Oakland International", "Oakland", "United States", "US", 37.71, -122.22, "SFO"),
    ]
    alliances = [
        Alliance(STAR, "Star Alliance", "STAR"),
        Alliance(ONEWORLD, "OneWorld", "OW"),
    ]
    programs = [
        AirlineProgram(
            ANA, "ANA Mileage Club", "ANA", STAR,
            search_url_template="https://www.ana.co.jp/award?from={origin}&to={destination}&date={date}",
        ),
        AirlineProgram(
            UNITED, "United MileagePlus", "UNITED", STAR, has_dynamic_pricing=True,
            search_url_template="https://www.united.com/fsr?f={origin}&t={destination}&d={date}",
        ),
        AirlineProgram(AEROPLAN, "Air Canada Aeroplan", "AEROPLAN", STAR),
        AirlineProgram(AADVANTAGE, "American AAdvantage", "AADVANTAGE", ONEWORLD, has_dynamic_pricing=True),
        AirlineProgram(EMIRATES, "Emirates Skywards", "EMIRATES", None, pricing_model="distance"),
        AirlineProgram(JAL, "Japan Airlines Mileage Bank", "JAL", ONEWORLD),
    ]
    regions = [
        Region(10, ANA, "North America", "NA"),
        Region(11, ANA, "Japan", "JAPAN"),
        Region(12, ANA, "Europe", "EUROPE"),
        Region(20, UNITED, "North America", "NA"),
        Region(21, UNITED, "Japan", "JAPAN"),
        Region(30, AEROPLAN, "North America", "NA"),
        Region(31, AEROPLAN, "Asia", "ASIA"),
        Region(40, AADVANTAGE, "North America", "NA"),
        Region(41, AADVANTAGE, "Asia", "ASIA"),
        Region(50, EMIRATES, "Americas", "AMERICAS"),
    ]
    mapping_rows = {
        (ANA, 10): ["JFK", "EWR", "LAX", "SFO"],
        (ANA, 11): ["NRT", "HND"],
        (ANA, 12): ["LHR"],
        (UNITED, 20): ["EWR", "SFO", "LAX"],
        (UNITED, 21): ["NRT", "HND"],
        (AEROPLAN, 30): ["JFK", "LAX"],
        (AEROPLAN, 31): ["NRT"],
        (AADVANTAGE, 40): ["JFK", "LAX"],
        (AADVANTAGE, 41): ["NRT", "HND"],
        (EMIRATES, 50): ["JFK"],
    }
    mappings = [
        AirportRegionMapping(code, region_id, program_id)
        for (program_id, region_id), codes in mapping_rows.items()
        for code in codes
    ]
    charts = [
        AwardChart(1, ANA, 10, 11, "business", 75_000, 75_000, "any", 75_000, False, "Round-trip price"),
        AwardChart(2, ANA, 11, 10, "business", 75_000, 75_000, "any", 75_000, False, "Round-trip price"),
        AwardChart(3, ANA, 10, 11, "economy", 50_000, 50_000, "any", None, False),
        AwardChart(4, UNITED, 20, 21, "business", 60_000, 120_000, "any", 88_000),
        AwardChart(5, UNITED, 20, 21, "economy", 35_000, 80_000, "any"),
        AwardChart(6, AEROPLAN, 30, 31, "business", 60_000, 60_000, "partner"),
        AwardChart(7, AADVANTAGE, 40, 41, "business", 57_500, 57_500, "own_metal"),
        AwardChart(8, AADVANTAGE, 40, 41, "economy", 35_000, 35_000, "partner"),
    ]
    routes = [
        AirlineRoute(ANA, "JFK", "NRT"),
        AirlineRoute(ANA, "NRT", "JFK"),
        AirlineRoute(ANA, "LAX", "HND"),
        AirlineRoute(UNITED, "EWR", "NRT"),
        AirlineRoute(UNITED, "NRT", "EWR"),
        AirlineRoute(UNITED, "SFO", "NRT"),
        AirlineRoute(JAL, "JFK", "NRT"),
        AirlineRoute(JAL, "NRT", "JFK"),
    ]
    cards = [
        CreditCardProgram(AMEX_MR, "American Express Membership Rewards", "AMEX_MR"),
        CreditCardProgram(CHASE_UR, "Chase Ultimate Rewards", "CHASE_UR"),
        CreditCardProgram(BILT, "Bilt Rewards", "BILT"),
    ]
    partnerships = [
        TransferPartnership(1, AMEX_MR, ANA, Decimal("1.0"), 48),
        TransferPartnership(2, BILT, ANA, Decimal("1.0"), 48, True, Decimal("1.3"), "2025-06-30T00:00:00"),
        TransferPartnership(3, CHASE_UR, UNITED, Decimal("1.0"), 0),
        TransferPartnership(4, AMEX_MR, AEROPLAN, Decimal("1.0"), 0),
        TransferPartnership(5, CHASE_UR, AEROPLAN, Decimal("1.0"), 0, False, Decimal("1.5")),
        TransferPartnership(6, BILT, AADVANTAGE, Decimal("1.0"), 0),
        TransferPartnership(7, AMEX_MR, EMIRATES, Decimal("0.8"), 0),
    ]
    return InMemoryRepository(
        airports=airports,
        alliances=alliances,
        programs=programs,
        regions=regions,
        region_mappings=mappings,
        award_charts=charts,
        routes=routes,
        card_programs=cards,
        transfer_partnerships=partnerships,
    )


def write_sqlite(path: Path, repo: InMemoryRepository) -> Path:
    """Populate a reference database the way the out-of-band seeder would."""
    create_schema(path)
    conn = sqlite3.connect(path)
    conn.executemany(
        "INSERT INTO alliances (id, name, code) VALUES (?, ?, ?)",
        [(a.id, a.name, a.code) for a in repo.alliances],
    )
    conn.executemany(
        """
        INSERT INTO airline_programs
            (id, name, code, alliance_id, has_dynamic_pricing, pricing_model, search_url_template)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (p.id, p.name, p.code, p.alliance_id, int(p.has_dynamic_pricing),
             p.pricing_model, p.search_url_template)
            for p in repo.programs
        ],
    )
    conn.executemany(
        "INSERT INTO credit_card_programs (id, name, code) VALUES (?, ?, ?)",
        [(c.id, c.name, c.code) for c in repo.card_programs],
    )
    conn.executemany(
        """
        INSERT INTO transfer_partnerships
            (id, credit_card_program_id, airline_program_id, transfer_ratio,
             transfer_time_hours, is_bonus_active, bonus_ratio, bonus_expires_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (t.id, t.credit_card_program_id, t.airline_program_id, str(t.transfer_ratio),
             t.transfer_time_hours, int(t.is_bonus_active),
             str(t.bonus_ratio) if t.bonus_ratio is not None else None, t.bonus_expires_at)
            for t in repo.transfer_partnerships
        ],
    )
    conn.executemany(
        "INSERT INTO regions (id, program_id, name, code) VALUES (?, ?, ?, ?)",
        [(r.id, r.program_id, r.name, r.code) for r in repo.regions],
    )
    conn.executemany(
        """
        INSERT INTO airports (code, name, city, country, country_code, lat, lng, metro)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [(a.code, a.name, a.city, a.country, a.country_code, a.lat, a.lng, a.metro) for a in repo.airports],
    )
    conn.executemany(
        "INSERT INTO airport_region_mappings (airport_code, region_id, program_id) VALUES (?, ?, ?)",
        [(m.airport_code, m.region_id, m.program_id) for m in repo.region_mappings],
    )
    conn.executemany(
        """
        INSERT INTO airline_routes (airline_program_id, origin_airport_code, destination_airport_code)
        VALUES (?, ?, ?)
        """,
        [(r.airline_program_id, r.origin_airport_code, r.destination_airport_code) for r in repo.routes],
    )
    conn.executemany(
        """
        INSERT INTO award_charts
            (id, program_id, origin_region_id, destination_region_id, cabin_class, partner_type,
             min_miles, max_miles, typical_miles, is_one_way, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (c.id, c.program_id, c.origin_region_id, c.destination_region_id, c.cabin_class,
             c.partner_type, c.min_miles, c.max_miles, c.typical_miles, int(c.is_one_way), c.notes)
            for c in repo.award_charts
        ],
    )
    conn.commit()
    conn.close()
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def repo() -> InMemoryRepository:
    return make_repository()


@pytest.fixture
def engine(repo) -> AwardSearch:
    return AwardSearch(repo, today=TODAY)


@pytest.fixture
def reference_db(tmp_path, repo) -> Path:
    return write_sqlite(tmp_path / "reference.db", repo)
