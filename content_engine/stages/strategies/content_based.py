"""
Content-based strategy: the item's neighbors from the similarity index.
"""

from typing import List, Optional

from ...models.scoring import RecommendationScore
from ..similarity_index import SimilarityIndex

STRATEGY_CONTENT_BASED = "content_based"

REASON_SIMILAR = "Similar content"


def rank_content_based(
    index: SimilarityIndex,
    content_id: str,
    limit: Optional[int] = None,
) -> List[RecommendationScore]:
    """Neighbors of content_id truncated to limit. Ids absent from the index yield []."""
    return [
        RecommendationScore(
            content_id=neighbor.content_id,
            score=neighbor.score,
            reasons=[REASON_SIMILAR],
            signals={"similarity": neighbor.score},
            strategy=STRATEGY_CONTENT_BASED,
        )
        for neighbor in index.neighbors(content_id)[:limit]
    ]
