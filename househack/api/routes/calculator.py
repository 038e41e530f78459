"""Calculator routes: FHA PITI breakdown and self-sufficiency test."""

from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, Depends, HTTPException

from househack.api.deps import get_calculator
from househack.api.schemas import (
    CalculateRequest,
    CalculationResponse,
    LoanScenarioRequest,
    PropertyInput,
)
from househack.models.loan import CalculationResult, LoanScenario
from househack.models.property import Property, Unit

router = APIRouter(prefix="/api/v1/calculate", tags=["calculator"])

TWO_PLACES = Decimal("0.01")


def _cents(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def to_scenario(req: LoanScenarioRequest) -> LoanScenario:
    return LoanScenario(
        down_payment_percent=req.down_payment_percent,
        interest_rate=req.interest_rate,
        loan_term_years=req.loan_term_years,
        mip_rate=req.mip_rate,
    )


def _to_property(req: PropertyInput) -> Property:
    return Property(
        address="",
        price=req.price,
        taxes_yearly=req.taxes_yearly,
        insurance_yearly=req.insurance_yearly,
        units=tuple(
            Unit(
                name=u.name,
                bedrooms=u.bedrooms,
                bathrooms=u.bathrooms,
                estimated_rent=u.estimated_rent,
                is_owner_occupied=u.is_owner_occupied,
            )
            for u in req.units
        ),
    )


def result_to_response(result: CalculationResult) -> CalculationResponse:
    """Convert engine CalculationResult to API response, rounded to cents."""
    return CalculationResponse(
        loan_amount=_cents(result.loan_amount),
        monthly_principal_interest=_cents(result.monthly_principal_interest),
        monthly_taxes=_cents(result.monthly_taxes),
        monthly_insurance=_cents(result.monthly_insurance),
        monthly_mip=_cents(result.monthly_mip),
        total_piti=_cents(result.total_piti),
        gross_rental_income=_cents(result.gross_rental_income),
        net_rental_income=_cents(result.net_rental_income),
        cash_flow=_cents(result.cash_flow),
        self_sufficiency_pass=result.self_sufficiency_pass,
        self_sufficiency_applies=result.self_sufficiency_applies,
        unit_count=result.unit_count,
    )


def run_calculation(calculator, prop: Property, scenario: LoanScenario) -> CalculationResponse:
    try:
        result = calculator(prop, scenario)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result_to_response(result)


@router.post("", response_model=CalculationResponse)
async def calculate(req: CalculateRequest, calculator=Depends(get_calculator)):
    """Ad-hoc calculation for a property snapshot that is not in the portfolio."""
    return run_calculation(calculator, _to_property(req.property), to_scenario(req.scenario))


@router.get("/default-scenario", response_model=LoanScenarioRequest)
async def default_scenario():
    """Standard FHA terms: 3.5% down, 6.5%, 30 years, 0.85% MIP."""
    s = LoanScenario()
    return LoanScenarioRequest(
        down_payment_percent=s.down_payment_percent,
        interest_rate=s.interest_rate,
        loan_term_years=s.loan_term_years,
        mip_rate=s.mip_rate,
    )
