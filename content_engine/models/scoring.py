"""
Scoring model: RecommendationScore, StrategyResult and RecommendationBundle.

Contains:
- RecommendationScore: one ranked item with its score, reasons and signal breakdown
- StrategyResult: a strategy's output plus whether it ran cleanly, found
  nothing, or degraded because a store failed
- RecommendationBundle: fan-in of several StrategyResults for one request
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .content import ContentItem

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_DEGRADED = "degraded"


class RecommendationScore(BaseModel):
    """A recommended item with all its scoring components."""

    content_id: str
    # None until enrichment resolves the id against the catalog.
    content: Optional[ContentItem] = None
    score: float
    reasons: List[str] = Field(default_factory=list)
    signals: Dict[str, float] = Field(default_factory=dict)
    strategy: str = ""


class StrategyResult(BaseModel):
    """
    Outcome of one strategy run.

    status is "ok" (recommendations found), "empty" (nothing to recommend:
    unknown id, no history, empty catalog) or "degraded" (a store failed;
    error carries the logged cause and recommendations holds whatever could
    still be computed, usually nothing).
    """

    strategy: str
    recommendations: List[RecommendationScore] = Field(default_factory=list)
    status: Literal["ok", "empty", "degraded"] = STATUS_OK
    error: Optional[str] = None

    @classmethod
    def from_recommendations(
        cls, strategy: str, recommendations: List[RecommendationScore]
    ) -> "StrategyResult":
        return cls(
            strategy=strategy,
            recommendations=recommendations,
            status=STATUS_OK if recommendations else STATUS_EMPTY,
        )

    @classmethod
    def degraded(
        cls,
        strategy: str,
        error: str,
        recommendations: Optional[List[RecommendationScore]] = None,
    ) -> "StrategyResult":
        return cls(
            strategy=strategy,
            recommendations=recommendations or [],
            status=STATUS_DEGRADED,
            error=error,
        )

    @property
    def ok(self) -> bool:
        return self.status != STATUS_DEGRADED

    @property
    def content_ids(self) -> List[str]:
        return [r.content_id for r in self.recommendations]


class RecommendationBundle(BaseModel):
    """Results of a fan-out request, keyed by strategy name in request order."""

    results: Dict[str, StrategyResult] = Field(default_factory=dict)

    def get(self, strategy: str) -> Optional[StrategyResult]:
        return self.results.get(strategy)

    @property
    def degraded(self) -> List[str]:
        return [name for name, r in self.results.items() if not r.ok]

    def merged(self, limit: int) -> List[RecommendationScore]:
        """
        One list across strategies, de-duplicated by content id.

        The highest score wins; reasons from every strategy that surfaced the
        item are kept in order without duplicates.
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        by_id: Dict[str, RecommendationScore] = {}
        order: List[str] = []
        for result in self.results.values():
            for rec in result.recommendations:
                existing = by_id.get(rec.content_id)
                if existing is None:
                    by_id[rec.content_id] = rec.model_copy(deep=True)
                    order.append(rec.content_id)
                    continue
                reasons = existing.reasons + [r for r in rec.reasons if r not in existing.reasons]
                if rec.score > existing.score:
                    by_id[rec.content_id] = rec.model_copy(update={"reasons": reasons}, deep=True)
                else:
                    existing.reasons = reasons
        first_seen = {cid: i for i, cid in enumerate(order)}
        ranked = sorted(by_id.values(), key=lambda r: (-r.score, first_seen[r.content_id]))
        return ranked[:limit]
