"""Pipeline stages: index build, profile build, strategies, enrichment, fan-out."""

from .enrichment import enrich
from .orchestrator import fan_out
from .similarity_index import Neighbor, SimilarityIndex, build_similarity_index, score_pair
from .strategies import (
    STRATEGY_CONTENT_BASED,
    STRATEGY_PERSONALIZED,
    STRATEGY_TRENDING,
    rank_content_based,
    rank_latest,
    rank_personalized,
    rank_trending,
)
from .user_profile import build_user_profile, load_user_profile

__all__ = [
    "Neighbor",
    "STRATEGY_CONTENT_BASED",
    "STRATEGY_PERSONALIZED",
    "STRATEGY_TRENDING",
    "SimilarityIndex",
    "build_similarity_index",
    "build_user_profile",
    "enrich",
    "fan_out",
    "load_user_profile",
    "rank_content_based",
    "rank_latest",
    "rank_personalized",
    "rank_trending",
    "score_pair",
]
