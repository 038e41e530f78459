from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PropertyStatus(Enum):
    LEAD = "Lead"
    ANALYZING = "Analyzing"
    OFFER_MADE = "Offer Made"
    UNDER_CONTRACT = "Under Contract"
    OWNED = "Owned"


@dataclass(frozen=True)
class Unit:
    name: str
    bedrooms: int
    bathrooms: Decimal
    estimated_rent: Decimal = Decimal("0")  # Monthly
    is_owner_occupied: bool = False  # Informational, still counted in gross rent
    id: str = ""


@dataclass(frozen=True)
class Property:
    address: str
    price: Decimal
    units: tuple[Unit, ...] = ()
    taxes_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")
    city: str = ""
    state: str = ""
    zip_code: str = ""
    status: PropertyStatus = PropertyStatus.LEAD
    notes: str = ""
    workspace_id: str | None = None
    id: str = ""

    @property
    def unit_count(self) -> int:
        return len(self.units)

    @property
    def total_rent(self) -> Decimal:
        return sum((u.estimated_rent for u in self.units), Decimal("0"))


@dataclass(frozen=True)
class Workspace:
    """A location-based group of properties, e.g. "Austin Market"."""

    id: str
    name: str
    location_string: str  # "Austin, TX"

    @property
    def city(self) -> str:
        return self.location_string.split(",")[0].strip()

    @property
    def state(self) -> str:
        parts = self.location_string.split(",", 1)
        return parts[1].strip() if len(parts) > 1 else ""
