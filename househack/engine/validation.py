"""Input validation for the FHA calculator.

Values are coerced to Decimal and rejected if they would make the
calculation undefined (NaN, Infinity, division by zero).
"""

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from househack.models.loan import LoanScenario
from househack.models.property import Property, Unit


class InvalidScenarioError(ValueError):
    """Loan scenario cannot produce a finite payment."""


class InvalidPropertyError(ValueError):
    """Property data cannot be evaluated."""


class CalculationOverflowError(ValueError):
    """Inputs are finite but a derived amount exceeds the Decimal exponent range."""


def to_decimal(val: Any, field_name: str, error: type[ValueError] = ValueError) -> Decimal:
    """Coerce int/float/str/Decimal to a finite Decimal.

    Floats go through str() so 6.5 becomes Decimal("6.5"), not its binary expansion.
    """
    if isinstance(val, bool) or val is None:
        raise error(f"Invalid value for {field_name}: {val!r}")
    if isinstance(val, Decimal):
        d = val
    elif isinstance(val, (int, float, str)):
        try:
            d = Decimal(str(val).strip())
        except InvalidOperation:
            raise error(f"Invalid value for {field_name}: {val!r}") from None
    else:
        raise error(f"Invalid type for {field_name}: {type(val).__name__}")
    if not d.is_finite():
        raise error(f"{field_name} must be finite, got {val!r}")
    return d


def _non_negative(val: Any, field_name: str, error: type[ValueError]) -> Decimal:
    d = to_decimal(val, field_name, error)
    if d < 0:
        raise error(f"{field_name} must be >= 0, got {d}")
    return d


def validate_scenario(scenario: LoanScenario) -> tuple[Decimal, Decimal, int, Decimal]:
    """Return (down_payment_percent, interest_rate, loan_term_years, mip_rate).

    Raises InvalidScenarioError for a non-positive term, negative rates or a
    down payment outside 0-100%.
    """
    down_pct = _non_negative(scenario.down_payment_percent, "down_payment_percent", InvalidScenarioError)
    if down_pct > 100:
        raise InvalidScenarioError(f"down_payment_percent must be <= 100, got {down_pct}")

    rate = _non_negative(scenario.interest_rate, "interest_rate", InvalidScenarioError)
    mip = _non_negative(scenario.mip_rate, "mip_rate", InvalidScenarioError)

    term = scenario.loan_term_years
    if isinstance(term, bool) or not isinstance(term, int):
        raise InvalidScenarioError(f"loan_term_years must be an integer, got {term!r}")
    if term <= 0:
        raise InvalidScenarioError(f"loan_term_years must be > 0, got {term}")

    return down_pct, rate, term, mip


def validate_units(units: Any) -> tuple[Decimal, ...]:
    """Return each unit's monthly rent, in order.

    The unit list drives the self-sufficiency test, so anything that is not a
    sequence of Unit is rejected rather than treated as exempt.
    """
    if isinstance(units, (str, bytes)) or not isinstance(units, Sequence):
        raise InvalidPropertyError(f"units must be a sequence of Unit, got {type(units).__name__}")

    rents = []
    for i, unit in enumerate(units):
        if not isinstance(unit, Unit):
            raise InvalidPropertyError(f"units[{i}] is not a Unit: {unit!r}")
        if isinstance(unit.bedrooms, bool) or not isinstance(unit.bedrooms, int) or unit.bedrooms < 0:
            raise InvalidPropertyError(f"units[{i}].bedrooms must be a non-negative integer")
        _non_negative(unit.bathrooms, f"units[{i}].bathrooms", InvalidPropertyError)
        rents.append(_non_negative(unit.estimated_rent, f"units[{i}].estimated_rent", InvalidPropertyError))
    return tuple(rents)


def validate_property(prop: Property) -> tuple[Decimal, Decimal, Decimal, tuple[Decimal, ...]]:
    """Return (price, taxes_yearly, insurance_yearly, unit rents)."""
    price = _non_negative(prop.price, "price", InvalidPropertyError)
    taxes = _non_negative(prop.taxes_yearly, "taxes_yearly", InvalidPropertyError)
    insurance = _non_negative(prop.insurance_yearly, "insurance_yearly", InvalidPropertyError)
    return price, taxes, insurance, validate_units(prop.units)
