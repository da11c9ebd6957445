"""Data models for the recommendation engine."""

from .config import (
    DEFAULT_CONFIG,
    WEIGHTS_VERSION,
    PersonalizedWeights,
    RecommendationConfig,
    SimilarityWeights,
    TrendingWeights,
    resolve_config,
)
from .content import ContentItem, ContentType, Difficulty, ensure_list
from .event import InteractionEvent, ensure_events
from .profile import UserProfile
from .request import RecommendationRequest
from .scoring import RecommendationBundle, RecommendationScore, StrategyResult

__all__ = [
    "DEFAULT_CONFIG",
    "WEIGHTS_VERSION",
    "ContentItem",
    "ContentType",
    "Difficulty",
    "InteractionEvent",
    "PersonalizedWeights",
    "RecommendationBundle",
    "RecommendationConfig",
    "RecommendationRequest",
    "RecommendationScore",
    "SimilarityWeights",
    "StrategyResult",
    "TrendingWeights",
    "UserProfile",
    "ensure_events",
    "ensure_list",
    "resolve_config",
]
