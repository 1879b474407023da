"""Read-only reference data access.

The matching engine never reaches for ambient global state: it is handed a
``ReferenceRepository`` and takes one ``ReferenceSnapshot`` from it when a
search engine is built. Every list a repository returns is in the store's
enumeration order, which the engine treats as meaningful for first-match
lookups.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .models import (
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


class DataStoreError(Exception):
    """The reference store is unreachable or returned malformed data."""


@dataclass(frozen=True)
class ReferenceSnapshot:
    """Immutable copy of every reference table, taken once per engine."""
    airports: tuple[Airport, ...] = ()
    alliances: tuple[Alliance, ...] = ()
    programs: tuple[AirlineProgram, ...] = ()
    regions: tuple[Region, ...] = ()
    region_mappings: tuple[AirportRegionMapping, ...] = ()
    award_charts: tuple[AwardChart, ...] = ()
    routes: tuple[AirlineRoute, ...] = ()
    card_programs: tuple[CreditCardProgram, ...] = ()
    transfer_partnerships: tuple[TransferPartnership, ...] = ()


class ReferenceRepository(ABC):
    """Abstract source of award reference data."""

    @abstractmethod
    def list_airports(self) -> list[Airport]:
        ...

    @abstractmethod
    def list_alliances(self) -> list[Alliance]:
        ...

    @abstractmethod
    def list_programs(self) -> list[AirlineProgram]:
        ...

    @abstractmethod
    def list_regions(self) -> list[Region]:
        ...

    @abstractmethod
    def list_region_mappings(self) -> list[AirportRegionMapping]:
        ...

    @abstractmethod
    def list_award_charts(self) -> list[AwardChart]:
        ...

    @abstractmethod
    def list_routes(self) -> list[AirlineRoute]:
        ...

    @abstractmethod
    def list_card_programs(self) -> list[CreditCardProgram]:
        ...

    @abstractmethod
    def list_transfer_partnerships(self) -> list[TransferPartnership]:
        ...

    def snapshot(self) -> ReferenceSnapshot:
        """Load every table once. Errors propagate as DataStoreError."""
        return ReferenceSnapshot(
            airports=tuple(self.list_airports()),
            alliances=tuple(self.list_alliances()),
            programs=tuple(self.list_programs()),
            regions=tuple(self.list_regions()),
            region_mappings=tuple(self.list_region_mappings()),
            award_charts=tuple(self.list_award_charts()),
            routes=tuple(self.list_routes()),
            card_programs=tuple(self.list_card_programs()),
            transfer_partnerships=tuple(self.list_transfer_partnerships()),
        )


@dataclass
class InMemoryRepository(ReferenceRepository):
    """Repository over plain lists, for embedding and tests."""
    airports: list[Airport] = field(default_factory=list)
    alliances: list[Alliance] = field(default_factory=list)
    programs: list[AirlineProgram] = field(default_factory=list)
    regions: list[Region] = field(default_factory=list)
    region_mappings: list[AirportRegionMapping] = field(default_factory=list)
    award_charts: list[AwardChart] = field(default_factory=list)
    routes: list[AirlineRoute] = field(default_factory=list)
    card_programs: list[CreditCardProgram] = field(default_factory=list)
    transfer_partnerships: list[TransferPartnership] = field(default_factory=list)

    def list_airports(self) -> list[Airport]:
        return list(self.airports)

    def list_alliances(self) -> list[Alliance]:
        return list(self.alliances)

    def list_programs(self) -> list[AirlineProgram]:
        return list(self.programs)

    def list_regions(self) -> list[Region]:
        return list(self.regions)

    def list_region_mappings(self) -> list[AirportRegionMapping]:
        return list(self.region_mappings)

    def list_award_charts(self) -> list[AwardChart]:
        return list(self.award_charts)

    def list_routes(self) -> list[AirlineRoute]:
        return list(self.routes)

    def list_card_programs(self) -> list[CreditCardProgram]:
        return list(self.card_programs)

    def list_transfer_partnerships(self) -> list[TransferPartnership]:
        return list(self.transfer_partnerships)
