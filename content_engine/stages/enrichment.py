"""
Enrichment: resolve bare content ids on ranked scores to full ContentItems.
"""

from typing import Iterable, List, Optional

from ..models.scoring import RecommendationScore
from ..stores.catalog import CatalogReader


def enrich(
    scores: Iterable[RecommendationScore],
    catalog: CatalogReader,
    limit: Optional[int] = None,
) -> List[RecommendationScore]:
    """
    Attach content to each score, preserving order.

    Ids the catalog no longer resolves (deleted or unpublished since the
    index was built, or never in the catalog) are dropped. With a limit,
    resolution stops once that many items resolved, so dropped ids are
    backfilled from further down the ranking. Reader errors propagate.
    """
    out: List[RecommendationScore] = []
    if limit is not None and limit <= 0:
        return out
    for rec in scores:
        item = catalog.get(rec.content_id)
        if item is None:
            continue
        out.append(rec.model_copy(update={"content": item}))
        if limit is not None and len(out) >= limit:
            break
    return out
