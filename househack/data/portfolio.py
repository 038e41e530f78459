"""In-memory workspace and property store.

Holds everything in process memory; data is lost on restart.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from househack.engine.editing import new_id
from househack.engine.validation import validate_property
from househack.models.property import Property, PropertyStatus, Unit, Workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioStats:
    total: int
    analyzing: int
    offers: int


class InMemoryPortfolio:
    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}
        self._properties: list[Property] = []
        self.selected_workspace_id: str | None = None

    # ── Workspaces ────────────────────────────────────────────────

    def workspaces(self) -> list[Workspace]:
        return list(self._workspaces.values())

    def get_workspace(self, workspace_id: str) -> Workspace:
        try:
            return self._workspaces[workspace_id]
        except KeyError:
            raise KeyError(f"Unknown workspace: {workspace_id}") from None

    def add_workspace(self, name: str, location_string: str | None = None) -> Workspace:
        """Create a workspace and select it. Location defaults to the name."""
        name = name.strip()
        if not name:
            raise ValueError("Workspace name is required")
        ws = Workspace(id=new_id(), name=name, location_string=(location_string or name).strip())
        self._workspaces[ws.id] = ws
        self.selected_workspace_id = ws.id
        logger.info("Added workspace %s (%s)", ws.name, ws.id)
        return ws

    def delete_workspace(self, workspace_id: str) -> None:
        """Remove a workspace. Its properties stay, still tagged with its id."""
        self.get_workspace(workspace_id)
        del self._workspaces[workspace_id]
        if self.selected_workspace_id == workspace_id:
            self.selected_workspace_id = None

    # ── Properties ────────────────────────────────────────────────

    def properties(self, workspace_id: str | None = None) -> list[Property]:
        """Properties in a workspace, newest first. All properties when workspace_id is None."""
        if workspace_id is None:
            return list(self._properties)
        return [p for p in self._properties if p.workspace_id == workspace_id]

    def get_property(self, property_id: str) -> Property:
        for p in self._properties:
            if p.id == property_id:
                return p
        raise KeyError(f"Unknown property: {property_id}")

    def add_property(self, prop: Property) -> Property:
        """Store a new property, newest first. Raises InvalidPropertyError for data compute() would reject."""
        validate_property(prop)
        if any(p.id == prop.id for p in self._properties):
            raise ValueError(f"Property {prop.id} already exists")
        self._properties.insert(0, prop)
        return prop

    def save_property(self, prop: Property) -> Property:
        """Replace the stored property with the same id. Invalid data raises before anything is replaced."""
        validate_property(prop)
        for i, p in enumerate(self._properties):
            if p.id == prop.id:
                self._properties[i] = prop
                return prop
        raise KeyError(f"Unknown property: {prop.id}")

    def new_property(self, workspace_id: str | None = None) -> Property:
        """Blank lead with a single owner-occupied unit."""
        ws = self.get_workspace(workspace_id) if workspace_id else None
        prop = Property(
            id=new_id(),
            workspace_id=workspace_id,
            address="New Property",
            city=ws.city if ws else "",
            state=ws.state if ws else "",
            price=Decimal("0"),
            units=(
                Unit(id=new_id(), name="Main", bedrooms=3, bathrooms=Decimal("2"), is_owner_occupied=True),
            ),
        )
        return self.add_property(prop)

    def quick_add(
        self,
        workspace_id: str,
        address: str,
        price: Decimal = Decimal("0"),
        unit_count: int = 2,
    ) -> Property:
        """Add a lead found by the deal search. The first unit is the owner's."""
        if not address.strip():
            raise ValueError("Address is required")
        if unit_count < 1:
            raise ValueError(f"unit_count must be >= 1, got {unit_count}")

        ws = self.get_workspace(workspace_id)
        units = tuple(
            Unit(
                id=new_id(),
                name=f"Unit {i + 1}",
                bedrooms=2,
                bathrooms=Decimal("1"),
                is_owner_occupied=i == 0,
            )
            for i in range(unit_count)
        )
        prop = Property(
            id=new_id(),
            workspace_id=ws.id,
            address=address.strip(),
            city=ws.city,
            state=ws.state,
            price=price,
            units=units,
            notes="Added from Deal Finder",
        )
        return self.add_property(prop)

    def stats(self, workspace_id: str | None = None) -> PortfolioStats:
        props = self.properties(workspace_id)
        return PortfolioStats(
            total=len(props),
            analyzing=sum(1 for p in props if p.status is PropertyStatus.ANALYZING),
            offers=sum(1 for p in props if p.status is PropertyStatus.OFFER_MADE),
        )


def sample_portfolio() -> InMemoryPortfolio:
    """Portfolio seeded with two Arizona workspaces and one triplex."""
    portfolio = InMemoryPortfolio()
    for ws in (
        Workspace(id="ws1", name="Lake Havasu", location_string="Lake Havasu City, AZ"),
        Workspace(id="ws2", name="Phoenix Metro", location_string="Phoenix, AZ"),
    ):
        portfolio._workspaces[ws.id] = ws
    portfolio.selected_workspace_id = "ws1"

    portfolio.add_property(Property(
        id="1",
        workspace_id="ws1",
        address="2444 Hummingbird Ln",
        city="Lake Havasu City",
        state="AZ",
        zip_code="86403",
        price=Decimal("525000"),
        units=(
            Unit(id="u1", name="Unit A", bedrooms=3, bathrooms=Decimal("2"),
                 estimated_rent=Decimal("1800"), is_owner_occupied=True),
            Unit(id="u2", name="Unit B", bedrooms=2, bathrooms=Decimal("1"), estimated_rent=Decimal("1400")),
            Unit(id="u3", name="Unit C", bedrooms=2, bathrooms=Decimal("1"), estimated_rent=Decimal("1400")),
        ),
        taxes_yearly=Decimal("2400"),
        insurance_yearly=Decimal("1200"),
        status=PropertyStatus.ANALYZING,
        notes="Great potential for self-sufficiency. Needs minor cosmetic work.",
    ))
    return portfolio
