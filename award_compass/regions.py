"""Per-program region resolution."""

from collections import defaultdict
from typing import Iterable, Optional

from .models import AirportRegionMapping, Region


class RegionResolver:
    """Maps airports into each program's private region taxonomy."""

    def __init__(self, regions: Iterable[Region], mappings: Iterable[AirportRegionMapping]):
        self._regions = {r.id: r for r in regions}
        self._by_program: dict[int, list[Region]] = defaultdict(list)
        for region in self._regions.values():
            self._by_program[region.program_id].append(region)

        # program -> [(airport_code, region)], kept in mapping enumeration order
        self._mappings: dict[int, list[tuple[str, Region]]] = defaultdict(list)
        for m in mappings:
            region = self._regions.get(m.region_id)
            if region is None:
                continue
            self._mappings[m.program_id].append((m.airport_code, region))

    def region(self, region_id: int) -> Optional[Region]:
        return self._regions.get(region_id)

    def regions_for_program(self, program_id: int) -> list[Region]:
        return list(self._by_program.get(program_id, []))

    def region_for(self, program_id: int, airport_codes: Iterable[str]) -> Optional[Region]:
        """Region of the first mapped airport in *airport_codes*, or None.

        Any member of a metro set suffices; members are not required to agree.
        """
        codes = set(airport_codes)
        if not codes:
            return None
        for airport_code, region in self._mappings.get(program_id, ()):
            if airport_code in codes:
                return region
        return None
