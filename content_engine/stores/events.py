"""
Interaction Event Reader abstraction.

Supplies stored interaction events (views, plays, bookmarks, shares) for
profile building and trending. The engine never writes events; ingestion
belongs to the analytics pipeline. Implementations: in-memory (tests) and a
JSON export of the analytics_events table (local runs).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol, Union

from ..models.event import InteractionEvent, ensure_events


class EventReader(Protocol):
    """Protocol for read-only event access. Implementations may raise on store failure."""

    def events_for_user(self, user_id: str, since: datetime) -> List[InteractionEvent]:
        """Events of one user with timestamp >= since."""
        ...

    def events_in_window(self, since: datetime) -> List[InteractionEvent]:
        """Events of all users with timestamp >= since."""
        ...


class InMemoryEventReader:
    """Event reader backed by a list held in memory. Used for tests and the local harness."""

    def __init__(self, events: Iterable[Union[Dict, InteractionEvent]] = ()):
        self._events: List[InteractionEvent] = ensure_events(list(events))

    def add(self, event: Union[Dict, InteractionEvent]) -> None:
        self._events.extend(ensure_events([event]))

    def events_for_user(self, user_id: str, since: datetime) -> List[InteractionEvent]:
        return [e for e in self._events if e.user_id == user_id and e.timestamp >= since]

    def events_in_window(self, since: datetime) -> List[InteractionEvent]:
        return [e for e in self._events if e.timestamp >= since]


def _event_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten an analytics_events row ({event_type, event_data, user_id, created_at})
    into InteractionEvent fields. Rows already in event shape pass through.
    """
    if "event_data" not in row:
        return row
    data = row.get("event_data") or {}
    content_id = (
        data.get("content_id")
        or data.get("insight_id")
        or data.get("episode_id")
        or data.get("pdf_id")
        or ""
    )
    return {
        "event_type": row.get("event_type") or "content_interaction",
        "action": data.get("action", ""),
        "content_id": content_id,
        "metadata": data.get("metadata"),
        "timestamp": row.get("created_at") or row.get("timestamp"),
        "user_id": row.get("user_id"),
    }


class JsonEventReader:
    """
    Event reader backed by a JSON export of the analytics_events table.
    Rows without a content id or action are skipped.
    The export is read once; refresh() re-reads it.
    """

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Events JSON not found: {self._path}")
        self._events: List[InteractionEvent] = []
        self.refresh()

    def refresh(self) -> None:
        """Re-read the export. On failure the previously loaded events stay."""
        with open(self._path) as f:
            rows = json.load(f)
        flattened = [_event_from_row(r) for r in rows]
        self._events = ensure_events([r for r in flattened if r.get("content_id") and r.get("action")])

    def events_for_user(self, user_id: str, since: datetime) -> List[InteractionEvent]:
        return [e for e in self._events if e.user_id == user_id and e.timestamp >= since]

    def events_in_window(self, since: datetime) -> List[InteractionEvent]:
        return [e for e in self._events if e.timestamp >= since]
