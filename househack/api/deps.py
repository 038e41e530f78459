"""FastAPI dependency injection."""

import functools

from househack.config import settings
from househack.data.portfolio import InMemoryPortfolio, sample_portfolio
from househack.engine.fha import compute
from househack.engine.validation import validate_property, validate_scenario
from househack.models.loan import CalculationResult, LoanScenario
from househack.models.property import Property

_portfolio = sample_portfolio()

# Property and LoanScenario are frozen dataclasses, so the cache key is a
# value hash of both snapshots.
memoized_compute = functools.lru_cache(maxsize=settings.calc_cache_size)(compute)


def cached_compute(prop: Property, scenario: LoanScenario) -> CalculationResult:
    """Validate, then look up the memoized result.

    Hash equality treats 30 and 30.0 (or 1 and True) as the same key, so
    inputs are checked before the lookup rather than only on a miss.
    """
    validate_scenario(scenario)
    validate_property(prop)
    return memoized_compute(prop, scenario)


def get_portfolio() -> InMemoryPortfolio:
    return _portfolio


def get_calculator():
    return cached_compute
