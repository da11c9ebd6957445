"""UserProfile model: a user's preferences derived from interaction history."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """
    Behavioral profile for one user.

    preferred_types / preferred_categories: top-N by interaction frequency,
    ties broken by first-seen order. viewed_content_ids is most-recent-first.
    interaction_counts: action -> number of events, for auditing.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    preferred_types: List[str] = Field(default_factory=list)
    preferred_categories: List[str] = Field(default_factory=list)
    preferred_difficulty: List[str] = Field(default_factory=list)
    viewed_content_ids: List[str] = Field(default_factory=list)
    bookmarked_content_ids: List[str] = Field(default_factory=list)
    interaction_counts: Dict[str, int] = Field(default_factory=dict)
    built_at: Optional[datetime] = None

    @classmethod
    def empty(cls, user_id: str) -> "UserProfile":
        """Default profile used for users with no history or when the event store fails."""
        return cls(user_id=user_id, built_at=datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not (self.viewed_content_ids or self.bookmarked_content_ids or self.interaction_counts)
