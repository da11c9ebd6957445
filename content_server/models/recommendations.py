"""Recommendation response models."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from .common import RecommendationItem


class StrategyResponse(BaseModel):
    strategy: str
    status: str
    error: Optional[str] = None
    recommendations: List[RecommendationItem]


class BundleResponse(BaseModel):
    results: Dict[str, StrategyResponse]
    merged: List[RecommendationItem]
    degraded: List[str] = []
