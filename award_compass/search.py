"""Award search orchestration.

For each airline program the pipeline is: origin region -> destination region
-> award chart -> route availability -> transfer options. A missing region,
chart or route simply drops the program from the results; only store
failures (``DataStoreError``) escape.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional

from .airports import AirportDirectory
from .charts import ChartLookup
from .models import CABIN_CLASSES, AirlineProgram, AirportMatch, AwardResult, ResolvedCode
from .regions import RegionResolver
from .repository import ReferenceRepository
from .routes import RouteChecker
from .transfers import TransferCalculator

logger = logging.getLogger(__name__)

SEARCH_DATE_OFFSET_DAYS = 30  # default departure date for deep links


def build_search_url(
    template: Optional[str],
    origin_code: str,
    destination_code: str,
    departure: date,
) -> Optional[str]:
    """Fill a program's award-search URL template, or None without one."""
    if not template:
        return None
    return (
        template
        .replace("{origin}", origin_code, 1)
        .replace("{destination}", destination_code, 1)
        .replace("{date}", departure.isoformat(), 1)
    )


class AwardSearch:
    """Matching engine over one immutable snapshot of reference data."""

    def __init__(
        self,
        repository: ReferenceRepository,
        workers: int = 1,
        today: Optional[date] = None,
    ):
        snapshot = repository.snapshot()
        self.workers = max(1, workers)
        self._today = today

        self.airports = AirportDirectory(snapshot.airports)
        self.regions = RegionResolver(snapshot.regions, snapshot.region_mappings)
        self.charts = ChartLookup(snapshot.award_charts)
        self.routes = RouteChecker(snapshot.programs, snapshot.routes)
        self.transfers = TransferCalculator(snapshot.card_programs, snapshot.transfer_partnerships)

        self.alliances = {a.id: a for a in snapshot.alliances}
        self.programs: list[AirlineProgram] = sorted(snapshot.programs, key=lambda p: (p.name.casefold(), p.id))

        logger.debug(
            f"Loaded snapshot: {len(snapshot.airports)} airports, {len(snapshot.programs)} programs, "
            f"{len(snapshot.award_charts)} charts, {len(snapshot.routes)} routes"
        )

    @classmethod
    def open(cls, path: Optional[Path] = None, **kwargs) -> "AwardSearch":
        """Build an engine over the SQLite reference store at *path*."""
        from .store import SqliteRepository

        return cls(SqliteRepository(path), **kwargs)

    def departure_date(self) -> date:
        today = self._today or datetime.now(timezone.utc).date()
        return today + timedelta(days=SEARCH_DATE_OFFSET_DAYS)

    def alliance_name(self, program: AirlineProgram) -> Optional[str]:
        alliance = self.alliances.get(program.alliance_id) if program.alliance_id is not None else None
        return alliance.name if alliance else None

    # ------------------------------------------------------------------
    # Airport lookups
    # ------------------------------------------------------------------

    def resolve(self, code: str) -> ResolvedCode:
        metro = self.airports.metro_info(code)
        return ResolvedCode(
            code=code,
            airport_codes=self.airports.resolve_codes(code),
            is_metro=metro is not None,
            metro_name=metro.name if metro else None,
        )

    def search_airports(self, query: str) -> list[AirportMatch]:
        return self.airports.search_airports(query)

    # ------------------------------------------------------------------
    # Award search
    # ------------------------------------------------------------------

    def _match_program(
        self,
        program: AirlineProgram,
        origin_codes: list[str],
        destination_codes: list[str],
        cabin_class: str,
        enabled_card_codes: list[str],
        departure: date,
    ) -> Optional[AwardResult]:
        origin_region = self.regions.region_for(program.id, origin_codes)
        if origin_region is None:
            return None
        destination_region = self.regions.region_for(program.id, destination_codes)
        if destination_region is None:
            return None

        chart = self.charts.chart_for(program.id, origin_region.id, destination_region.id, cabin_class)
        if chart is None:
            logger.debug(f"{program.code}: no {cabin_class} chart {origin_region.name} -> {destination_region.name}")
            return None

        if not self.routes.is_route_available(
            program.id, program.alliance_id, chart.partner_type, origin_codes, destination_codes
        ):
            logger.debug(f"{program.code}: no {chart.partner_type} route for itinerary")
            return None

        return AwardResult(
            program=program,
            alliance=self.alliance_name(program),
            chart=chart,
            origin_region=origin_region.name,
            destination_region=destination_region.name,
            search_url=build_search_url(
                program.search_url_template, origin_codes[0], destination_codes[0], departure
            ),
            transfer_options=self.transfers.transfer_options(
                program.id, chart.min_miles, enabled_card_codes
            ),
        )

    def find_awards(
        self,
        origin: str,
        destination: str,
        cabin_class: str,
        enabled_card_codes: Iterable[str] = (),
    ) -> list[AwardResult]:
        """Programs able to redeem origin -> destination in *cabin_class*.

        Sorted by chart minimum miles; programs tying on miles keep their
        alphabetical program order.
        """
        if cabin_class not in CABIN_CLASSES:
            raise ValueError(f"Invalid cabin class {cabin_class!r}; choose from {', '.join(CABIN_CLASSES)}")

        origin_codes = self.airports.resolve_codes(origin)
        destination_codes = self.airports.resolve_codes(destination)
        if not origin_codes or not destination_codes:
            logger.debug(f"Unresolved itinerary {origin!r} -> {destination!r}")
            return []

        cards = list(enabled_card_codes)
        departure = self.departure_date()

        def match(program: AirlineProgram) -> Optional[AwardResult]:
            return self._match_program(
                program, origin_codes, destination_codes, cabin_class, cards, departure
            )

        if self.workers > 1:
            # map() yields in submission order, so the merge keeps program order
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                matches = list(pool.map(match, self.programs))
        else:
            matches = [match(p) for p in self.programs]

        results = [r for r in matches if r is not None]
        results.sort(key=lambda r: r.min_miles)
        logger.debug(f"{origin}->{destination} {cabin_class}: {len(results)} of {len(self.programs)} programs matched")
        return results
