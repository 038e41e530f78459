"""Canonical test fixtures used across all tests.

Fixture: $200K triplex, standard FHA terms (3.5% down, 6.5%, 30yr, 0.85% MIP),
$2,400 taxes, $1,200 insurance, rents 1200 / 1000 / 900.
"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from househack.api.app import app
from househack.api.deps import get_portfolio
from househack.data.portfolio import sample_portfolio
from househack.models.loan import LoanScenario
from househack.models.property import Property, PropertyStatus, Unit


@pytest.fixture
def fha_scenario() -> LoanScenario:
    return LoanScenario(
        down_payment_percent=Decimal("3.5"),
        interest_rate=Decimal("6.5"),
        loan_term_years=30,
        mip_rate=Decimal("0.85"),
    )


@pytest.fixture
def triplex() -> Property:
    """$200K triplex, owner lives in Unit A."""
    return Property(
        id="tri",
        address="100 Elm St",
        city="Phoenix",
        state="AZ",
        price=Decimal("200000"),
        taxes_yearly=Decimal("2400"),
        insurance_yearly=Decimal("1200"),
        status=PropertyStatus.ANALYZING,
        units=(
            Unit(id="a", name="Unit A", bedrooms=2, bathrooms=Decimal("1"),
                 estimated_rent=Decimal("1200"), is_owner_occupied=True),
            Unit(id="b", name="Unit B", bedrooms=2, bathrooms=Decimal("1"), estimated_rent=Decimal("1000")),
            Unit(id="c", name="Unit C", bedrooms=1, bathrooms=Decimal("1"), estimated_rent=Decimal("900")),
        ),
    )


@pytest.fixture
def duplex() -> Property:
    """Duplex whose rent does not come close to covering PITI."""
    return Property(
        id="dup",
        address="200 Oak Ave",
        price=Decimal("400000"),
        taxes_yearly=Decimal("4800"),
        insurance_yearly=Decimal("1800"),
        units=(
            Unit(id="a", name="Unit A", bedrooms=2, bathrooms=Decimal("1.5"),
                 estimated_rent=Decimal("500"), is_owner_occupied=True),
            Unit(id="b", name="Unit B", bedrooms=2, bathrooms=Decimal("1.5"), estimated_rent=Decimal("500")),
        ),
    )


@pytest.fixture
def portfolio():
    return sample_portfolio()


@pytest.fixture
def client(portfolio):
    """API client backed by a fresh sample portfolio."""
    app.dependency_overrides[get_portfolio] = lambda: portfolio
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
