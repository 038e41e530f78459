"""Claude API client for rent estimates, deal commentary and listing search.

Every call degrades to a placeholder when the API key is missing or the call
fails; nothing here raises into the calculator or the routes.
"""

import json
import logging

import anthropic

from househack.config import settings
from househack.models.ai import DealSearchResult, RentEstimate, SearchSource
from househack.models.property import Property

logger = logging.getLogger(__name__)

NO_KEY_RENT = RentEstimate(estimated_rent=1500, confidence="Low (No API Key)", reasoning="Default placeholder value.")
FAILED_RENT = RentEstimate(estimated_rent=0, confidence="Error", reasoning="Failed to fetch data.")

UNDERWRITER_SYSTEM = "You are a helpful, conservative real estate underwriter."
WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search"}


def _client() -> anthropic.AsyncAnthropic:
    return anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)


def _response_text(message) -> str:
    return "".join(
        block.text for block in message.content if getattr(block, "type", None) == "text"
    ).strip()


def _extract_json(text: str) -> dict:
    # Handle markdown code blocks
    if "```" in text:
        text = text.split("```")[1]
        if text.startswith("json"):
            text = text[4:]
        text = text.strip()
    return json.loads(text)


def property_summary(prop: Property) -> str:
    return f"{prop.address} ({prop.unit_count} units)"


def financial_summary(prop: Property) -> str:
    return (
        f"Price: {prop.price}, Taxes: {prop.taxes_yearly}, "
        f"Units: {prop.unit_count}, Total Rent: {prop.total_rent}"
    )


async def estimate_market_rent(address: str, bedrooms: int, bathrooms: float) -> RentEstimate:
    """Conservative monthly rent for one unit configuration at an address."""
    if not settings.anthropic_api_key:
        logger.debug("Anthropic API key not configured, returning placeholder rent")
        return NO_KEY_RENT

    prompt = (
        f"Estimate the monthly market rent for a {bedrooms} bedroom, {bathrooms} bathroom "
        f"apartment at {address}.\n"
        f"Provide a realistic conservative estimate for FHA house hacking calculations.\n\n"
        f"Return ONLY valid JSON, no other text: "
        f"{{\"estimatedRent\": <number>, \"confidence\": \"High\" | \"Medium\" | \"Low\", \"reasoning\": <str>}}"
    )

    try:
        message = await _client().messages.create(
            model=settings.ai_model,
            max_tokens=300,
            messages=[{"role": "user", "content": prompt}],
        )
        data = _extract_json(_response_text(message))
        return RentEstimate(
            estimated_rent=float(data["estimatedRent"]),
            confidence=str(data.get("confidence", "Low")),
            reasoning=str(data.get("reasoning", "")),
        )
    except Exception as e:
        logger.warning("AI rent estimation failed: %s", e)
        return FAILED_RENT


async def analyze_deal(property_details: str, financials: str) -> str:
    """Pros/cons checklist and a self-sufficiency opinion for a deal."""
    if not settings.anthropic_api_key:
        logger.debug("Anthropic API key not configured, skipping deal analysis")
        return "AI Key missing. Unable to analyze."

    prompt = f"""Act as a real estate investment expert specializing in FHA house hacking.
Analyze this deal:
Property: {property_details}
Financials: {financials}

Provide a brief checklist of pros, cons, and whether it likely passes the FHA Self-Sufficiency Test (Net Rental Income >= PITI)."""

    try:
        message = await _client().messages.create(
            model=settings.ai_model,
            max_tokens=settings.ai_max_tokens,
            system=UNDERWRITER_SYSTEM,
            messages=[{"role": "user", "content": prompt}],
        )
        return _response_text(message) or "No analysis generated."
    except Exception as e:
        logger.warning("AI deal analysis failed: %s", e)
        return "Error generating analysis."


def _search_sources(message) -> list[SearchSource]:
    """Collect cited pages, first occurrence of each URL wins."""
    seen: dict[str, SearchSource] = {}
    for block in message.content:
        block_type = getattr(block, "type", None)
        if block_type == "web_search_tool_result":
            results = block.content if isinstance(block.content, list) else []
            candidates = [(r.url, getattr(r, "title", "") or "") for r in results]
        elif block_type == "text":
            candidates = [
                (c.url, getattr(c, "title", "") or "")
                for c in (getattr(block, "citations", None) or [])
                if getattr(c, "url", None)
            ]
        else:
            continue
        for uri, title in candidates:
            if uri not in seen:
                seen[uri] = SearchSource(uri=uri, title=title)
    return list(seen.values())


async def find_deals(location: str, query: str) -> DealSearchResult:
    """Web-grounded search for small multi-family listings near a location."""
    if not settings.anthropic_api_key:
        logger.debug("Anthropic API key not configured, skipping deal search")
        return DealSearchResult(text="AI Key missing. Unable to search.")

    prompt = f"""Find active multi-family (duplex, triplex, fourplex) real estate listings in or near {location}.
Focus on properties that might work for FHA house hacking (under FHA loan limits if known).
Additional criteria: {query}.

For each finding, provide:
1. Approximate Address
2. Price
3. Unit composition (e.g. Duplex, Triplex)
4. Brief description"""

    try:
        message = await _client().messages.create(
            model=settings.ai_model,
            max_tokens=settings.ai_max_tokens * 2,
            messages=[{"role": "user", "content": prompt}],
            tools=[{**WEB_SEARCH_TOOL, "max_uses": settings.ai_search_max_uses}],
        )
        return DealSearchResult(
            text=_response_text(message) or "No listings found.",
            sources=_search_sources(message),
        )
    except Exception as e:
        logger.warning("AI deal search failed: %s", e)
        return DealSearchResult(text="Error searching for deals.")
