"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from househack.models.ai import RentEstimate


# ---- Request schemas ----

class UnitRequest(BaseModel):
    name: str = "Unit"
    bedrooms: int = 2
    bathrooms: Decimal = Decimal("1")
    estimated_rent: Decimal = Decimal("0")
    is_owner_occupied: bool = False


class PropertyInput(BaseModel):
    """The property fields the calculator reads."""
    price: Decimal
    taxes_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")
    units: list[UnitRequest] = Field(default_factory=list)


class LoanScenarioRequest(BaseModel):
    down_payment_percent: Decimal = Decimal("3.5")
    interest_rate: Decimal = Decimal("6.5")
    loan_term_years: int = 30
    mip_rate: Decimal = Decimal("0.85")


class CalculateRequest(BaseModel):
    property: PropertyInput
    scenario: LoanScenarioRequest = Field(default_factory=LoanScenarioRequest)


class WorkspaceCreate(BaseModel):
    name: str
    location_string: str | None = Field(None, description="e.g. 'Austin, TX'; defaults to name")


class NewPropertyRequest(BaseModel):
    workspace_id: str | None = None


class QuickAddRequest(BaseModel):
    workspace_id: str
    address: str
    price: Decimal = Decimal("0")
    unit_count: int = Field(2, ge=1)


class PropertyUpdate(BaseModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    price: Decimal | None = Field(None, ge=0)
    taxes_yearly: Decimal | None = Field(None, ge=0)
    insurance_yearly: Decimal | None = Field(None, ge=0)
    status: str | None = None
    notes: str | None = None


class UnitUpdate(BaseModel):
    name: str | None = None
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: Decimal | None = Field(None, ge=0)
    estimated_rent: Decimal | None = Field(None, ge=0)
    is_owner_occupied: bool | None = None


class RentEstimateRequest(BaseModel):
    address: str
    bedrooms: int
    bathrooms: float


class AnalyzeDealRequest(BaseModel):
    property_details: str
    financials: str


class DealSearchRequest(BaseModel):
    location: str
    query: str


# ---- Response schemas ----

class CalculationResponse(BaseModel):
    loan_amount: Decimal
    monthly_principal_interest: Decimal
    monthly_taxes: Decimal
    monthly_insurance: Decimal
    monthly_mip: Decimal
    total_piti: Decimal
    gross_rental_income: Decimal
    net_rental_income: Decimal
    cash_flow: Decimal
    self_sufficiency_pass: bool
    self_sufficiency_applies: bool
    unit_count: int


class UnitResponse(BaseModel):
    id: str
    name: str
    bedrooms: int
    bathrooms: Decimal
    estimated_rent: Decimal
    is_owner_occupied: bool


class PropertyResponse(BaseModel):
    id: str
    workspace_id: str | None = None
    address: str
    city: str
    state: str
    zip_code: str
    price: Decimal
    taxes_yearly: Decimal
    insurance_yearly: Decimal
    status: str
    notes: str
    units: list[UnitResponse]


class WorkspaceResponse(BaseModel):
    id: str
    name: str
    location_string: str


class StatsResponse(BaseModel):
    total: int
    analyzing: int
    offers: int


class UnitRentEstimateResponse(BaseModel):
    estimate: RentEstimate
    property: PropertyResponse


class AnalysisTextResponse(BaseModel):
    analysis: str
