"""AI assistant routes. Failures come back as placeholder text, never as 5xx."""

from fastapi import APIRouter, Depends, HTTPException

from househack.api.deps import get_portfolio
from househack.api.routes.properties import load_property, property_to_response
from househack.api.schemas import (
    AnalysisTextResponse,
    AnalyzeDealRequest,
    DealSearchRequest,
    RentEstimateRequest,
    UnitRentEstimateResponse,
)
from househack.data import assistant
from househack.data.portfolio import InMemoryPortfolio
from househack.engine.editing import update_unit
from househack.engine.validation import to_decimal
from househack.models.ai import DealSearchResult, RentEstimate

router = APIRouter(prefix="/api/v1", tags=["ai"])


@router.post("/ai/rent-estimate", response_model=RentEstimate)
async def rent_estimate(req: RentEstimateRequest):
    return await assistant.estimate_market_rent(req.address, req.bedrooms, req.bathrooms)


@router.post("/ai/analyze", response_model=AnalysisTextResponse)
async def analyze(req: AnalyzeDealRequest):
    return AnalysisTextResponse(analysis=await assistant.analyze_deal(req.property_details, req.financials))


@router.post("/ai/deals", response_model=DealSearchResult)
async def find_deals(req: DealSearchRequest):
    return await assistant.find_deals(req.location, req.query)


@router.post("/properties/{property_id}/analyze", response_model=AnalysisTextResponse)
async def analyze_property(property_id: str, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    prop = load_property(portfolio, property_id)
    analysis = await assistant.analyze_deal(
        assistant.property_summary(prop),
        assistant.financial_summary(prop),
    )
    return AnalysisTextResponse(analysis=analysis)


@router.post(
    "/properties/{property_id}/units/{index}/estimate-rent",
    response_model=UnitRentEstimateResponse,
)
async def estimate_unit_rent(
    property_id: str,
    index: int,
    portfolio: InMemoryPortfolio = Depends(get_portfolio),
):
    """Estimate one unit's rent and write it back to the unit."""
    prop = load_property(portfolio, property_id)
    if not 0 <= index < len(prop.units):
        raise HTTPException(status_code=404, detail=f"Unit index {index} out of range")

    unit = prop.units[index]
    estimate = await assistant.estimate_market_rent(prop.address, unit.bedrooms, float(unit.bathrooms))
    try:
        rent = to_decimal(estimate.estimated_rent, "estimated_rent")
    except ValueError as e:
        raise HTTPException(status_code=502, detail=f"Unusable rent estimate: {e}")
    if rent < 0:
        raise HTTPException(status_code=502, detail=f"Unusable rent estimate: {rent}")
    updated = update_unit(prop, index, estimated_rent=rent)
    portfolio.save_property(updated)
    return UnitRentEstimateResponse(estimate=estimate, property=property_to_response(updated))
