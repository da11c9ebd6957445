"""Pydantic request/response models for the API."""

from content_engine import RecommendationRequest

from .common import ContentCard, RecommendationItem
from .recommendations import BundleResponse, StrategyResponse

__all__ = [
    "BundleResponse",
    "ContentCard",
    "RecommendationItem",
    "RecommendationRequest",
    "StrategyResponse",
]
