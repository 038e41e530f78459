"""Property routes: portfolio CRUD, unit editing and per-property calculation."""

from fastapi import APIRouter, Depends, HTTPException

from househack.api.deps import get_calculator, get_portfolio
from househack.api.routes.calculator import run_calculation, to_scenario
from househack.api.schemas import (
    CalculationResponse,
    LoanScenarioRequest,
    NewPropertyRequest,
    PropertyResponse,
    PropertyUpdate,
    QuickAddRequest,
    UnitResponse,
    UnitUpdate,
)
from househack.data.portfolio import InMemoryPortfolio
from househack.engine.editing import add_unit, remove_unit, update_property, update_unit
from househack.models.property import Property

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def property_to_response(prop: Property) -> PropertyResponse:
    return PropertyResponse(
        id=prop.id,
        workspace_id=prop.workspace_id,
        address=prop.address,
        city=prop.city,
        state=prop.state,
        zip_code=prop.zip_code,
        price=prop.price,
        taxes_yearly=prop.taxes_yearly,
        insurance_yearly=prop.insurance_yearly,
        status=prop.status.value,
        notes=prop.notes,
        units=[
            UnitResponse(
                id=u.id,
                name=u.name,
                bedrooms=u.bedrooms,
                bathrooms=u.bathrooms,
                estimated_rent=u.estimated_rent,
                is_owner_occupied=u.is_owner_occupied,
            )
            for u in prop.units
        ],
    )


def load_property(portfolio: InMemoryPortfolio, property_id: str) -> Property:
    try:
        return portfolio.get_property(property_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")


@router.get("", response_model=list[PropertyResponse])
async def list_properties(
    workspace_id: str | None = None,
    portfolio: InMemoryPortfolio = Depends(get_portfolio),
):
    return [property_to_response(p) for p in portfolio.properties(workspace_id)]


@router.post("", response_model=PropertyResponse, status_code=201)
async def new_property(req: NewPropertyRequest, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    try:
        prop = portfolio.new_property(req.workspace_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Workspace {req.workspace_id} not found")
    return property_to_response(prop)


@router.post("/quick-add", response_model=PropertyResponse, status_code=201)
async def quick_add(req: QuickAddRequest, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    """Add a lead from the deal finder with N identical placeholder units."""
    try:
        prop = portfolio.quick_add(req.workspace_id, req.address, req.price, req.unit_count)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Workspace {req.workspace_id} not found")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return property_to_response(prop)


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: str, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    return property_to_response(load_property(portfolio, property_id))


@router.put("/{property_id}", response_model=PropertyResponse)
async def save_property(
    property_id: str,
    req: PropertyUpdate,
    portfolio: InMemoryPortfolio = Depends(get_portfolio),
):
    prop = load_property(portfolio, property_id)
    try:
        saved = portfolio.save_property(update_property(prop, **req.model_dump(exclude_none=True)))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return property_to_response(saved)


@router.post("/{property_id}/units", response_model=PropertyResponse, status_code=201)
async def create_unit(property_id: str, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    prop = load_property(portfolio, property_id)
    return property_to_response(portfolio.save_property(add_unit(prop)))


@router.patch("/{property_id}/units/{index}", response_model=PropertyResponse)
async def edit_unit(
    property_id: str,
    index: int,
    req: UnitUpdate,
    portfolio: InMemoryPortfolio = Depends(get_portfolio),
):
    prop = load_property(portfolio, property_id)
    try:
        saved = portfolio.save_property(update_unit(prop, index, **req.model_dump(exclude_none=True)))
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return property_to_response(saved)


@router.delete("/{property_id}/units/{index}", response_model=PropertyResponse)
async def delete_unit(property_id: str, index: int, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    prop = load_property(portfolio, property_id)
    try:
        updated = remove_unit(prop, index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return property_to_response(portfolio.save_property(updated))


@router.post("/{property_id}/calculate", response_model=CalculationResponse)
async def calculate_property(
    property_id: str,
    scenario: LoanScenarioRequest | None = None,
    portfolio: InMemoryPortfolio = Depends(get_portfolio),
    calculator=Depends(get_calculator),
):
    """Run the FHA calculation for a saved property. Scenario defaults to standard FHA terms."""
    prop = load_property(portfolio, property_id)
    return run_calculation(calculator, prop, to_scenario(scenario or LoanScenarioRequest()))
