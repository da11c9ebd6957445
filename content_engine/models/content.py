"""
Content model: typed representation of a catalog item (episode, insight, report).

Used by the similarity index, strategies and enrichment instead of raw dicts.
Built from catalog records via ContentItem.model_validate(d) or, for raw
store rows, via schema.record_adapter.to_content_item().
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class ContentType(str, Enum):
    EPISODE = "episode"
    INSIGHT = "insight"
    REPORT = "report"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware values."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ContentItem(BaseModel):
    """
    A publishable catalog item. Owned by the catalog; immutable to the engine.

    length_metric is reading-time minutes for insights/reports or a duration
    string (e.g. "42:10") for episodes.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    title: str = ""
    slug: Optional[str] = None
    type: ContentType
    categories: FrozenSet[str] = frozenset()
    tags: FrozenSet[str] = frozenset()
    difficulty: Optional[Difficulty] = None
    length_metric: Optional[Union[int, str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def _normalize_labels(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(str(v).strip().lower() for v in value if v and str(v).strip())

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


def ensure_list(items: List[Union[Dict[str, Any], "ContentItem"]]) -> List["ContentItem"]:
    """Convert list of dicts or ContentItems to list of ContentItem models."""
    return [
        ContentItem.model_validate(i) if isinstance(i, dict) else i
        for i in items
    ]
