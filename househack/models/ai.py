"""Pydantic models for the AI rent, deal analysis and listing search service."""

from pydantic import BaseModel, Field


class RentEstimate(BaseModel):
    estimated_rent: float
    confidence: str  # "High" | "Medium" | "Low", or a placeholder label
    reasoning: str


class SearchSource(BaseModel):
    uri: str
    title: str = ""


class DealSearchResult(BaseModel):
    text: str
    sources: list[SearchSource] = Field(default_factory=list)
