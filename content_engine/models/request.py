"""
RecommendationRequest model: one fan-out request across several strategies.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

StrategyName = Literal["content_based", "personalized", "trending"]


class RecommendationRequest(BaseModel):
    """
    What to run and for whom.

    When strategies is omitted it is inferred: content_based if content_id is
    set, personalized if user_id is set, and trending always. timeout (seconds)
    is a caller policy; strategies still running when it expires come back
    degraded with error "timeout".
    """

    strategies: List[StrategyName] = Field(default_factory=list)
    content_id: Optional[str] = None
    user_id: Optional[str] = None
    window: str = "week"
    limit: int = Field(10, ge=0)
    exclude_ids: List[str] = Field(default_factory=list)
    timeout: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def infer_strategies(self):
        if not self.strategies:
            inferred: List[StrategyName] = []
            if self.content_id:
                inferred.append("content_based")
            if self.user_id:
                inferred.append("personalized")
            inferred.append("trending")
            self.strategies = inferred
        else:
            # Keep request order, drop repeats.
            self.strategies = list(dict.fromkeys(self.strategies))
        return self
