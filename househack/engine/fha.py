"""FHA loan and self-sufficiency calculation.

Pure functions: Decimal in, dataclass out. No I/O, no shared state, so
compute() is safe to call on every input change and from any thread.
"""

from decimal import Decimal, Overflow

from househack.engine.debt import monthly_payment
from househack.engine.validation import CalculationOverflowError, validate_property, validate_scenario
from househack.models.loan import CalculationResult, LoanScenario
from househack.models.property import Property

# Lenders count 75% of gross rent toward self-sufficiency (vacancy / collection loss)
RENTAL_INCOME_FACTOR = Decimal("0.75")

# FHA self-sufficiency applies to 3-4 unit properties
SELF_SUFFICIENCY_MIN_UNITS = 3


def self_sufficiency_pass(net_rental_income: Decimal, total_piti: Decimal, unit_count: int) -> bool:
    """Net rent must cover PITI on 3+ units. Smaller properties are exempt."""
    if unit_count < SELF_SUFFICIENCY_MIN_UNITS:
        return True
    return net_rental_income >= total_piti


def compute(prop: Property, scenario: LoanScenario) -> CalculationResult:
    """Monthly PITI breakdown, rental income, cash flow and self-sufficiency verdict.

    Raises InvalidScenarioError / InvalidPropertyError instead of returning
    NaN or Infinity, and CalculationOverflowError when finite inputs produce
    an amount too large to represent.
    """
    down_pct, rate, term_years, mip_rate = validate_scenario(scenario)
    price, taxes_yearly, insurance_yearly, rents = validate_property(prop)

    try:
        loan_amount = price * (1 - down_pct / 100)
        monthly_rate = rate / 100 / 12
        number_of_payments = term_years * 12

        principal_interest = monthly_payment(loan_amount, monthly_rate, number_of_payments)
        monthly_taxes = taxes_yearly / 12
        monthly_insurance = insurance_yearly / 12
        monthly_mip = loan_amount * (mip_rate / 100) / 12

        total_piti = principal_interest + monthly_taxes + monthly_insurance + monthly_mip

        # Owner-occupied units are counted too
        gross = sum(rents, Decimal("0"))
        net = gross * RENTAL_INCOME_FACTOR
        cash_flow = gross - total_piti
    except Overflow:
        raise CalculationOverflowError(f"Calculation for property {prop.id or prop.address!r} overflows") from None

    return CalculationResult(
        loan_amount=loan_amount,
        monthly_principal_interest=principal_interest,
        monthly_taxes=monthly_taxes,
        monthly_insurance=monthly_insurance,
        monthly_mip=monthly_mip,
        total_piti=total_piti,
        gross_rental_income=gross,
        net_rental_income=net,
        cash_flow=cash_flow,
        self_sufficiency_pass=self_sufficiency_pass(net, total_piti, len(rents)),
        unit_count=len(rents),
    )
