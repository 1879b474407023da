"""Award chart price-band lookup."""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from .models import AwardChart

logger = logging.getLogger(__name__)

ChartKey = tuple[int, int, int, str]


class ChartLookup:
    """Index of award charts keyed on (program, origin region, destination region, cabin).

    Nothing in the data model makes that key unique. When several rows share
    it, the first one in the store's enumeration order is returned. That
    choice is arbitrary; callers must not read meaning into which duplicate
    wins.
    """

    def __init__(self, charts: Iterable[AwardChart]):
        self._charts: dict[ChartKey, AwardChart] = {}
        self._by_program: dict[int, list[AwardChart]] = defaultdict(list)
        duplicates = 0
        for chart in charts:
            key = (chart.program_id, chart.origin_region_id, chart.destination_region_id, chart.cabin_class)
            if key in self._charts:
                duplicates += 1
            else:
                self._charts[key] = chart
            self._by_program[chart.program_id].append(chart)
        if duplicates:
            logger.debug("%d duplicate award chart rows ignored (first row wins)", duplicates)

    def chart_for(
        self,
        program_id: int,
        origin_region_id: int,
        destination_region_id: int,
        cabin_class: str,
    ) -> Optional[AwardChart]:
        return self._charts.get((program_id, origin_region_id, destination_region_id, cabin_class))

    def charts_for_program(self, program_id: int) -> list[AwardChart]:
        """All rows of one program, by cabin class name then min miles."""
        return sorted(
            self._by_program.get(program_id, []),
            key=lambda c: (c.cabin_class, c.min_miles),
        )
