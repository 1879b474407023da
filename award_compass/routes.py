"""Route availability: does anyone eligible actually fly the itinerary?"""

from collections import defaultdict
from typing import Iterable, Optional

from .models import AirlineProgram, AirlineRoute


class RouteChecker:
    """Directed route table plus alliance membership.

    Routes are directed edges. A missing reverse edge means the itinerary is
    unavailable in that direction; there is no fallback.
    """

    def __init__(self, programs: Iterable[AirlineProgram], routes: Iterable[AirlineRoute]):
        self._members: dict[int, list[int]] = defaultdict(list)
        for program in programs:
            if program.alliance_id is not None:
                self._members[program.alliance_id].append(program.id)

        self._routes: dict[int, set[tuple[str, str]]] = defaultdict(set)
        for route in routes:
            self._routes[route.airline_program_id].add(
                (route.origin_airport_code, route.destination_airport_code)
            )

    def alliance_members(self, alliance_id: Optional[int]) -> list[int]:
        if alliance_id is None:
            return []
        return list(self._members.get(alliance_id, []))

    def operators(self, program_id: int, alliance_id: Optional[int], partner_type: str) -> set[int]:
        """Programs whose flights count toward a chart entry of *program_id*."""
        candidates = {program_id}
        # own_metal never expands, whatever the alliance
        if partner_type in ("partner", "any") and alliance_id is not None:
            candidates.update(self.alliance_members(alliance_id))
        return candidates

    def is_route_available(
        self,
        program_id: int,
        alliance_id: Optional[int],
        partner_type: str,
        origin_codes: Iterable[str],
        destination_codes: Iterable[str],
    ) -> bool:
        origins = set(origin_codes)
        destinations = set(destination_codes)
        if not origins or not destinations:
            return False
        for operator in self.operators(program_id, alliance_id, partner_type):
            for origin, destination in self._routes.get(operator, ()):
                if origin in origins and destination in destinations:
                    return True
        return False
