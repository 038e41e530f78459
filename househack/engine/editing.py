"""Immutable property and unit edits.

Every edit returns a new Property; existing snapshots are never mutated, so a
CalculationResult computed from one always matches it.
"""

import dataclasses
import uuid
from decimal import Decimal
from typing import Any

from househack.models.property import Property, PropertyStatus, Unit

UNIT_FIELDS = {"name", "bedrooms", "bathrooms", "estimated_rent", "is_owner_occupied"}
PROPERTY_FIELDS = {
    "address", "city", "state", "zip_code", "price",
    "taxes_yearly", "insurance_yearly", "status", "notes",
}


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def _check_fields(changes: dict[str, Any], allowed: set[str], kind: str) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown {kind} field(s): {', '.join(sorted(unknown))}")


def update_unit(prop: Property, index: int, **changes: Any) -> Property:
    """Return a copy of prop with units[index] changed."""
    _check_fields(changes, UNIT_FIELDS, "unit")
    if not 0 <= index < len(prop.units):
        raise IndexError(f"Unit index {index} out of range ({len(prop.units)} units)")

    units = list(prop.units)
    units[index] = dataclasses.replace(units[index], **changes)
    return dataclasses.replace(prop, units=tuple(units))


def add_unit(prop: Property) -> Property:
    unit = Unit(
        id=new_id(),
        name=f"Unit {len(prop.units) + 1}",
        bedrooms=2,
        bathrooms=Decimal("1"),
        estimated_rent=Decimal("0"),
        is_owner_occupied=False,
    )
    return dataclasses.replace(prop, units=prop.units + (unit,))


def remove_unit(prop: Property, index: int) -> Property:
    """Drop units[index]. A property always keeps at least one unit."""
    if not 0 <= index < len(prop.units):
        raise IndexError(f"Unit index {index} out of range ({len(prop.units)} units)")
    if len(prop.units) <= 1:
        raise ValueError("Cannot remove the only unit of a property")
    units = prop.units[:index] + prop.units[index + 1:]
    return dataclasses.replace(prop, units=units)


def update_property(prop: Property, **changes: Any) -> Property:
    _check_fields(changes, PROPERTY_FIELDS, "property")
    if "status" in changes and not isinstance(changes["status"], PropertyStatus):
        changes["status"] = PropertyStatus(changes["status"])
    return dataclasses.replace(prop, **changes)
