"""Builders and fake stores shared by the test modules."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from content_engine import ContentItem, InteractionEvent

NOW = datetime(2025, 8, 15, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def fixed_clock() -> datetime:
    return NOW


def make_item(
    content_id: str,
    type: str = "episode",
    categories=(),
    tags=(),
    difficulty: Optional[str] = None,
    title: str = "",
    created_days_ago: Optional[float] = None,
) -> ContentItem:
    return ContentItem(
        id=content_id,
        title=title,
        type=type,
        categories=list(categories),
        tags=list(tags),
        difficulty=difficulty,
        created_at=days_ago(created_days_ago) if created_days_ago is not None else None,
    )


def make_event(
    action: str,
    content_id: str,
    user_id: Optional[str] = "u1",
    days: float = 0.0,
    event_type: str = "content_interaction",
    metadata: Optional[dict] = None,
) -> InteractionEvent:
    return InteractionEvent(
        event_type=event_type,
        action=action,
        content_id=content_id,
        user_id=user_id,
        timestamp=days_ago(days),
        metadata=metadata,
    )


def scenario_catalog() -> List[ContentItem]:
    """A and B: finance episodes (2 and 40 days old); C: a tax report."""
    return [
        make_item("A", "episode", ["finance"], created_days_ago=2),
        make_item("B", "episode", ["finance"], created_days_ago=40),
        make_item("C", "report", ["tax"]),
    ]


class FailingCatalogReader:
    """Catalog reader whose store is unreachable."""

    def list_published(self, content_type=None):
        raise ConnectionError("catalog unreachable")

    def get(self, content_id):
        raise ConnectionError("catalog unreachable")


class FailingEventReader:
    """Event reader whose store is unreachable."""

    def events_for_user(self, user_id, since):
        raise ConnectionError("events unreachable")

    def events_in_window(self, since):
        raise ConnectionError("events unreachable")


class ToggleCatalogReader:
    """Wraps a catalog and fails while .failing is set."""

    def __init__(self, inner):
        self.inner = inner
        self.failing = False

    def list_published(self, content_type=None):
        if self.failing:
            raise ConnectionError("catalog unreachable")
        return self.inner.list_published(content_type)

    def get(self, content_id):
        if self.failing:
            raise ConnectionError("catalog unreachable")
        return self.inner.get(content_id)
