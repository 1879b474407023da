"""Airport directory: airport records plus the derived metro-area index."""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from .models import Airport, AirportMatch, MetroGroup

logger = logging.getLogger(__name__)

# Max rows returned by search_airports(), metro pseudo-entries included.
SEARCH_RESULT_LIMIT = 15
MIN_QUERY_LENGTH = 2

# Metro area display names
METRO_NAMES = {
    "NYC": "New York",
    "CHI": "Chicago",
    "WAS": "Washington D.C.",
    "DFW": "Dallas/Fort Worth",
    "MIA": "Miami",
    "SFO": "San Francisco Bay Area",
    "LON": "London",
    "PAR": "Paris",
    "TYO": "Tokyo",
    "SEL": "Seoul",
    "BJS": "Beijing",
    "SHA": "Shanghai",
    "OSA": "Osaka",
    "BKK": "Bangkok",
    "IST": "Istanbul",
    "ROM": "Rome",
    "MIL": "Milan",
    "SAO": "São Paulo",
    "RIO": "Rio de Janeiro",
    "BUE": "Buenos Aires",
}


def metro_display_name(metro_code: str) -> str:
    return METRO_NAMES.get(metro_code, metro_code)


class AirportDirectory:
    """Canonical airports, indexed by code and by metro grouping.

    The metro index is built once on first use and kept for the lifetime of
    the directory; reference data does not change underneath a running engine.
    """

    def __init__(self, airports: Iterable[Airport]):
        self._airports = list(airports)
        self._by_code = {a.code: a for a in self._airports}
        self._metros: Optional[dict[str, MetroGroup]] = None

    def metro_groups(self) -> dict[str, MetroGroup]:
        """Group airports on their metro code, in directory order."""
        if self._metros is None:
            members: dict[str, list[Airport]] = defaultdict(list)
            for airport in self._airports:
                if airport.metro:
                    members[airport.metro].append(airport)
            self._metros = {
                code: MetroGroup(
                    code=code,
                    name=metro_display_name(code),
                    airport_codes=tuple(a.code for a in group),
                    country=group[0].country,
                )
                for code, group in members.items()
            }
            logger.debug(f"Built metro index: {len(self._metros)} metros over {len(self._airports)} airports")
        return self._metros

    def metro_info(self, code: str) -> Optional[MetroGroup]:
        return self.metro_groups().get(code.strip().upper())

    def resolve_codes(self, code: str) -> list[str]:
        """Resolve a metro or airport code to the airport codes it covers.

        A metro code wins over an airport sharing the same code (e.g. SFO is
        both). Unknown codes resolve to an empty list.
        """
        code = code.strip().upper()
        if not code:
            return []
        metro = self.metro_groups().get(code)
        if metro is not None:
            return list(metro.airport_codes)
        if code in self._by_code:
            return [code]
        return []

    def search_airports(self, query: str) -> list[AirportMatch]:
        """Case-insensitive substring search over airports and metro areas.

        Metros whose code or name match come first, then metros of any
        matching airport, then the matching airports themselves.
        """
        if not query or len(query) < MIN_QUERY_LENGTH:
            return []

        upper_query = query.upper()
        lower_query = query.lower()
        metros = self.metro_groups()

        results: list[AirportMatch] = []
        added_metros: set[str] = set()

        def add_metro(metro: MetroGroup) -> None:
            results.append(AirportMatch(
                code=metro.code,
                name=f"All {metro.name} Airports",
                city=metro.name,
                country=metro.country,
                is_metro=True,
                airport_codes=list(metro.airport_codes),
            ))
            added_metros.add(metro.code)

        for metro in metros.values():
            if upper_query in metro.code or lower_query in metro.name.lower():
                add_metro(metro)

        matching = [
            a for a in self._airports
            if upper_query in a.code.upper()
            or lower_query in a.city.lower()
            or lower_query in a.name.lower()
        ]

        for airport in matching:
            if airport.metro and airport.metro not in added_metros:
                add_metro(metros[airport.metro])

        for airport in matching:
            results.append(AirportMatch(
                code=airport.code,
                name=airport.name,
                city=airport.city,
                country=airport.country,
            ))

        return results[:SEARCH_RESULT_LIMIT]
