"""Schema adapters for converting raw catalog rows into engine models."""

from .record_adapter import (
    SOURCE_EPISODES,
    SOURCE_INSIGHTS,
    SOURCE_REPORTS,
    SOURCE_TYPES,
    is_published,
    to_content_item,
    to_content_items,
)

__all__ = [
    "SOURCE_EPISODES",
    "SOURCE_INSIGHTS",
    "SOURCE_REPORTS",
    "SOURCE_TYPES",
    "is_published",
    "to_content_item",
    "to_content_items",
]
