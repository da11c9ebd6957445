"""
InteractionEvent model: a stored visitor interaction (view, play, bookmark, share).

Read-only to the engine; produced by the analytics pipeline. Used by the
profile builder and the trending strategy. Built from store dicts via
InteractionEvent.model_validate(d) or ensure_events().
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .content import as_utc


class InteractionEvent(BaseModel):
    """
    A single interaction with a catalog item.

    event_type: analytics event family; only content interactions are scored.
    action: view, play, bookmark, share, ... (lower-cased).
    metadata: free-form event payload (may carry content_type, reading_time, ...).
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    event_type: str = "content_interaction"
    action: str
    content_id: str
    metadata: Optional[Dict[str, Any]] = None
    timestamp: datetime
    user_id: Optional[str] = None

    @field_validator("action", mode="before")
    @classmethod
    def _lower_action(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("timestamp", mode="after")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    def get_metadata(self) -> Dict[str, Any]:
        """Metadata dict, never None."""
        return self.metadata if self.metadata is not None else {}


def ensure_events(
    items: List[Union[Dict, "InteractionEvent"]],
) -> List["InteractionEvent"]:
    """Convert list of dicts or InteractionEvents to list of InteractionEvent models."""
    return [
        InteractionEvent.model_validate(e) if isinstance(e, dict) else e
        for e in items
    ]
