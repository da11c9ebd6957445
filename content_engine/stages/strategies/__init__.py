"""
Recommendation strategies. Each turns an immutable snapshot (index, profile,
events) into a ranked list of RecommendationScore carrying bare content ids;
enrichment resolves the ids afterwards.
"""

from .content_based import STRATEGY_CONTENT_BASED, rank_content_based
from .personalized import STRATEGY_PERSONALIZED, rank_latest, rank_personalized, score_candidate
from .trending import STRATEGY_TRENDING, count_engagement, rank_trending

__all__ = [
    "STRATEGY_CONTENT_BASED",
    "STRATEGY_PERSONALIZED",
    "STRATEGY_TRENDING",
    "count_engagement",
    "rank_content_based",
    "rank_latest",
    "rank_personalized",
    "rank_trending",
    "score_candidate",
]
