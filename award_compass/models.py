"""Data models for award-compass award chart matching."""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Optional

CABIN_CLASSES = ("economy", "premium_economy", "business", "first")
PARTNER_TYPES = ("own_metal", "partner", "any")
PRICING_MODELS = ("region", "distance")


@dataclass(frozen=True)
class Airport:
    code: str
    name: str
    city: str
    country: str
    country_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    metro: Optional[str] = None  # e.g. NYC for JFK, EWR, LGA


@dataclass(frozen=True)
class MetroGroup:
    """Airports sharing one metro code. Derived, never stored."""
    code: str
    name: str
    airport_codes: tuple[str, ...]
    country: str = ""


@dataclass(frozen=True)
class Alliance:
    id: int
    name: str
    code: str  # STAR, OW, ST


@dataclass(frozen=True)
class AirlineProgram:
    id: int
    name: str
    code: str
    alliance_id: Optional[int] = None
    has_dynamic_pricing: bool = False
    pricing_model: str = "region"
    search_url_template: Optional[str] = None


@dataclass(frozen=True)
class Region:
    """A program-private zone. Two programs never share a region."""
    id: int
    program_id: int
    name: str
    code: Optional[str] = None


@dataclass(frozen=True)
class AirportRegionMapping:
    airport_code: str
    region_id: int
    program_id: int


@dataclass(frozen=True)
class AwardChart:
    id: int
    program_id: int
    origin_region_id: int
    destination_region_id: int
    cabin_class: str
    min_miles: int
    max_miles: int
    partner_type: str = "any"
    typical_miles: Optional[int] = None
    is_one_way: bool = True
    notes: Optional[str] = None


@dataclass(frozen=True)
class AirlineRoute:
    """Directed airport pair operated (or codeshared) by a program's airline."""
    airline_program_id: int
    origin_airport_code: str
    destination_airport_code: str


@dataclass(frozen=True)
class CreditCardProgram:
    id: int
    name: str
    code: str  # AMEX_MR, CHASE_UR, ...


@dataclass(frozen=True)
class TransferPartnership:
    id: int
    credit_card_program_id: int
    airline_program_id: int
    transfer_ratio: Decimal = Decimal("1.0")
    transfer_time_hours: int = 0  # 0 = instant
    is_bonus_active: bool = False
    bonus_ratio: Optional[Decimal] = None  # e.g. 1.3 for a 30% bonus
    bonus_expires_at: Optional[str] = None


# ---------------------------------------------------------------------------
# Result shapes
# ---------------------------------------------------------------------------

@dataclass
class AirportMatch:
    """A row of airport search output: a metro pseudo-entry or one airport."""
    code: str
    name: str
    city: str
    country: str
    is_metro: bool = False
    airport_codes: list[str] = field(default_factory=list)


@dataclass
class ResolvedCode:
    code: str
    airport_codes: list[str]
    is_metro: bool
    metro_name: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TransferOption:
    card_program: CreditCardProgram
    transfer_ratio: Decimal
    transfer_time_hours: int
    points_needed: int
    is_bonus_active: bool
    bonus_ratio: Optional[Decimal] = None
    bonus_expires_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "credit_card_program": asdict(self.card_program),
            "transfer_ratio": float(self.transfer_ratio),
            "transfer_time_hours": self.transfer_time_hours,
            "points_needed": self.points_needed,
            "is_bonus_active": self.is_bonus_active,
            "bonus_ratio": float(self.bonus_ratio) if self.bonus_ratio is not None else None,
            "bonus_expires_at": self.bonus_expires_at,
        }


@dataclass
class AwardResult:
    """One program able to redeem the searched itinerary."""
    program: AirlineProgram
    alliance: Optional[str]
    chart: AwardChart
    origin_region: str
    destination_region: str
    search_url: Optional[str] = None
    transfer_options: list[TransferOption] = field(default_factory=list)

    @property
    def min_miles(self) -> int:
        return self.chart.min_miles

    def best_transfer(self) -> Optional[TransferOption]:
        """Transfer option needing the fewest card points."""
        if not self.transfer_options:
            return None
        return min(self.transfer_options, key=lambda t: t.points_needed)

    def to_dict(self) -> dict:
        return {
            "airline_program": {
                "id": self.program.id,
                "name": self.program.name,
                "code": self.program.code,
                "has_dynamic_pricing": self.program.has_dynamic_pricing,
                "pricing_model": self.program.pricing_model,
                "search_url": self.search_url,
                "alliance": self.alliance,
            },
            "award_cost": {
                "min_miles": self.chart.min_miles,
                "max_miles": self.chart.max_miles,
                "typical_miles": self.chart.typical_miles,
                "is_one_way": self.chart.is_one_way,
                "notes": self.chart.notes,
            },
            "transfer_options": [t.to_dict() for t in self.transfer_options],
            "origin_region": self.origin_region,
            "destination_region": self.destination_region,
        }
