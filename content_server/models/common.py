"""Common Pydantic models shared across routes."""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel


class ContentCard(BaseModel):
    id: str
    title: str
    slug: Optional[str] = None
    type: str
    categories: List[str] = []
    tags: List[str] = []
    difficulty: Optional[str] = None
    length_metric: Optional[Union[int, str]] = None
    created_at: Optional[str] = None


class RecommendationItem(BaseModel):
    content_id: str
    score: float
    reasons: List[str] = []
    signals: Dict[str, float] = {}
    strategy: str
    content: Optional[ContentCard] = None
