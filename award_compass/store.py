"""SQLite-backed reference store.

Reference tables are populated out-of-band; this module only opens the
database read-only and turns rows into model objects. ``SCHEMA`` is the DDL
the populating process is expected to apply (``create_schema`` does exactly
that and nothing else).
"""

import logging
import sqlite3
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Optional

from .models import (
    CABIN_CLASSES,
    PARTNER_TYPES,
    PRICING_MODELS,
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
from .repository import DataStoreError, ReferenceRepository

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / ".award-compass"
DB_FILE = DATA_DIR / "reference.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS alliances (
    id    INTEGER PRIMARY KEY,
    name  TEXT NOT NULL UNIQUE,
    code  TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS airline_programs (
    id                   INTEGER PRIMARY KEY,
    name                 TEXT    NOT NULL,
    code                 TEXT    NOT NULL UNIQUE,
    alliance_id          INTEGER REFERENCES alliances(id),
    has_dynamic_pricing  INTEGER NOT NULL DEFAULT 0,
    pricing_model        TEXT    NOT NULL DEFAULT 'region',
    search_url_template  TEXT
);
CREATE TABLE IF NOT EXISTS credit_card_programs (
    id    INTEGER PRIMARY KEY,
    name  TEXT NOT NULL,
    code  TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS transfer_partnerships (
    id                      INTEGER PRIMARY KEY,
    credit_card_program_id  INTEGER NOT NULL REFERENCES credit_card_programs(id),
    airline_program_id      INTEGER NOT NULL REFERENCES airline_programs(id),
    transfer_ratio          TEXT    NOT NULL DEFAULT '1.0',
    transfer_time_hours     INTEGER NOT NULL DEFAULT 0,
    is_bonus_active         INTEGER NOT NULL DEFAULT 0,
    bonus_ratio             TEXT,
    bonus_expires_at        TEXT,
    UNIQUE (credit_card_program_id, airline_program_id)
);
CREATE TABLE IF NOT EXISTS regions (
    id          INTEGER PRIMARY KEY,
    program_id  INTEGER NOT NULL REFERENCES airline_programs(id),
    name        TEXT    NOT NULL,
    code        TEXT,
    UNIQUE (program_id, name)
);
CREATE TABLE IF NOT EXISTS airports (
    code          TEXT PRIMARY KEY,
    name          TEXT NOT NULL,
    city          TEXT NOT NULL,
    country       TEXT NOT NULL,
    country_code  TEXT,
    lat           REAL,
    lng           REAL,
    metro         TEXT
);
CREATE TABLE IF NOT EXISTS airport_region_mappings (
    id            INTEGER PRIMARY KEY,
    airport_code  TEXT    NOT NULL REFERENCES airports(code),
    region_id     INTEGER NOT NULL REFERENCES regions(id),
    program_id    INTEGER NOT NULL REFERENCES airline_programs(id),
    UNIQUE (airport_code, program_id)
);
CREATE TABLE IF NOT EXISTS airline_routes (
    id                        INTEGER PRIMARY KEY,
    airline_program_id        INTEGER NOT NULL REFERENCES airline_programs(id),
    origin_airport_code       TEXT    NOT NULL REFERENCES airports(code),
    destination_airport_code  TEXT    NOT NULL REFERENCES airports(code),
    UNIQUE (airline_program_id, origin_airport_code, destination_airport_code)
);
CREATE TABLE IF NOT EXISTS award_charts (
    id                     INTEGER PRIMARY KEY,
    program_id             INTEGER NOT NULL REFERENCES airline_programs(id),
    origin_region_id       INTEGER NOT NULL REFERENCES regions(id),
    destination_region_id  INTEGER NOT NULL REFERENCES regions(id),
    cabin_class            TEXT    NOT NULL,
    partner_type           TEXT    NOT NULL DEFAULT 'any',
    min_miles              INTEGER NOT NULL,
    max_miles              INTEGER NOT NULL,
    typical_miles          INTEGER,
    is_one_way             INTEGER NOT NULL DEFAULT 1,
    notes                  TEXT
);
CREATE INDEX IF NOT EXISTS idx_award_chart_program ON award_charts(program_id);
CREATE INDEX IF NOT EXISTS idx_airport_region_program
    ON airport_region_mappings(program_id, region_id);
"""


def create_schema(path: Path) -> None:
    """Create empty reference tables at *path* for the populating process."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


def _decimal(value: Any, column: str) -> Decimal:
    try:
        ratio = Decimal(str(value))
    except InvalidOperation:
        raise DataStoreError(f"Malformed decimal in {column}: {value!r}") from None
    if not ratio.is_finite() or ratio <= 0:
        raise DataStoreError(f"Non-positive ratio in {column}: {value!r}")
    return ratio


def _choice(value: str, allowed: tuple[str, ...], column: str) -> str:
    if value not in allowed:
        raise DataStoreError(f"Unknown {column} {value!r}; expected one of {', '.join(allowed)}")
    return value


class SqliteRepository(ReferenceRepository):
    """Reads reference tables from a SQLite file opened read-only."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DB_FILE

    def _get_conn(self) -> sqlite3.Connection:
        if not self.path.exists():
            raise DataStoreError(f"Reference database not found: {self.path}")
        logger.debug(f"Opening reference database {self.path}")
        try:
            conn = sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise DataStoreError(f"Cannot open reference database {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def _rows(self, sql: str, convert: Callable[[sqlite3.Row], Any]) -> list:
        conn = self._get_conn()
        try:
            rows = conn.execute(sql).fetchall()
            return [convert(row) for row in rows]
        except sqlite3.Error as e:
            raise DataStoreError(f"Reference query failed: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f"Malformed reference row: {e}") from e
        finally:
            conn.close()

    def list_airports(self) -> list[Airport]:
        return self._rows(
            "SELECT * FROM airports ORDER BY rowid",
            lambda r: Airport(
                code=r["code"],
                name=r["name"],
                city=r["city"],
                country=r["country"],
                country_code=r["country_code"],
                lat=r["lat"],
                lng=r["lng"],
                metro=r["metro"] or None,
            ),
        )

    def list_alliances(self) -> list[Alliance]:
        return self._rows(
            "SELECT id, name, code FROM alliances ORDER BY id",
            lambda r: Alliance(id=r["id"], name=r["name"], code=r["code"]),
        )

    def list_programs(self) -> list[AirlineProgram]:
        return self._rows(
            "SELECT * FROM airline_programs ORDER BY id",
            lambda r: AirlineProgram(
                id=r["id"],
                name=r["name"],
                code=r["code"],
                alliance_id=r["alliance_id"],
                has_dynamic_pricing=bool(r["has_dynamic_pricing"]),
                pricing_model=_choice(r["pricing_model"], PRICING_MODELS, "pricing_model"),
                search_url_template=r["search_url_template"],
            ),
        )

    def list_regions(self) -> list[Region]:
        return self._rows(
            "SELECT id, program_id, name, code FROM regions ORDER BY id",
            lambda r: Region(id=r["id"], program_id=r["program_id"], name=r["name"], code=r["code"]),
        )

    def list_region_mappings(self) -> list[AirportRegionMapping]:
        return self._rows(
            "SELECT airport_code, region_id, program_id FROM airport_region_mappings ORDER BY id",
            lambda r: AirportRegionMapping(
                airport_code=r["airport_code"],
                region_id=r["region_id"],
                program_id=r["program_id"],
            ),
        )

    def list_award_charts(self) -> list[AwardChart]:
        return self._rows(
            "SELECT * FROM award_charts ORDER BY id",
            lambda r: AwardChart(
                id=r["id"],
                program_id=r["program_id"],
                origin_region_id=r["origin_region_id"],
                destination_region_id=r["destination_region_id"],
                cabin_class=_choice(r["cabin_class"], CABIN_CLASSES, "cabin_class"),
                partner_type=_choice(r["partner_type"], PARTNER_TYPES, "partner_type"),
                min_miles=int(r["min_miles"]),
                max_miles=int(r["max_miles"]),
                typical_miles=r["typical_miles"],
                is_one_way=bool(r["is_one_way"]),
                notes=r["notes"],
            ),
        )

    def list_routes(self) -> list[AirlineRoute]:
        return self._rows(
            """
            SELECT airline_program_id, origin_airport_code, destination_airport_code
            FROM   airline_routes
            ORDER  BY id
            """,
            lambda r: AirlineRoute(
                airline_program_id=r["airline_program_id"],
                origin_airport_code=r["origin_airport_code"],
                destination_airport_code=r["destination_airport_code"],
            ),
        )

    def list_card_programs(self) -> list[CreditCardProgram]:
        return self._rows(
            "SELECT id, name, code FROM credit_card_programs ORDER BY id",
            lambda r: CreditCardProgram(id=r["id"], name=r["name"], code=r["code"]),
        )

    def list_transfer_partnerships(self) -> list[TransferPartnership]:
        return self._rows(
            "SELECT * FROM transfer_partnerships ORDER BY id",
            lambda r: TransferPartnership(
                id=r["id"],
                credit_card_program_id=r["credit_card_program_id"],
                airline_program_id=r["airline_program_id"],
                transfer_ratio=_decimal(r["transfer_ratio"] or "1.0", "transfer_ratio"),
                transfer_time_hours=int(r["transfer_time_hours"]),
                is_bonus_active=bool(r["is_bonus_active"]),
                bonus_ratio=(
                    _decimal(r["bonus_ratio"], "bonus_ratio")
                    if r["bonus_ratio"] is not None
                    else None
                ),
                bonus_expires_at=r["bonus_expires_at"],
            ),
        )
