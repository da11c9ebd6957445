"""
Engine configuration: the versioned weight table plus index, profile and
strategy parameters.

RecommendationConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file at RECOMMENDER_CONFIG_PATH); from_dict() merges it with
these defaults. Bump WEIGHTS_VERSION whenever a default weight changes.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

WEIGHTS_VERSION = "2025.08.1"


class SimilarityWeights(BaseModel):
    """Item-to-item similarity used to build the index. Composite is clamped to 1.0."""

    model_config = ConfigDict(frozen=True)

    # Flat bonus when both items have the same content type.
    same_type: float = Field(0.3, ge=0.0)
    # Multiplier for Jaccard(categories).
    categories: float = Field(0.4, ge=0.0)
    # Multiplier for Jaccard(tags).
    tags: float = Field(0.3, ge=0.0)
    # Flat bonus when both items have a difficulty and they match.
    same_difficulty: float = Field(0.2, ge=0.0)
    # Multiplier for Jaccard(title tokens).
    title: float = Field(0.1, ge=0.0)


class PersonalizedWeights(BaseModel):
    """Per-signal contributions for the personalized strategy (summed, not normalized)."""

    model_config = ConfigDict(frozen=True)

    preferred_type: float = Field(0.3, ge=0.0)
    preferred_category: float = Field(0.25, ge=0.0)
    preferred_difficulty: float = Field(0.2, ge=0.0)
    # Multiplier for max index similarity to recently viewed content.
    viewed_similarity: float = Field(0.4, ge=0.0)
    recently_published: float = Field(0.1, ge=0.0)


class TrendingWeights(BaseModel):
    """engagement = views * view + shares * share + bookmarks * bookmark."""

    model_config = ConfigDict(frozen=True)

    view: float = Field(1.0, ge=0.0)
    share: float = Field(3.0, ge=0.0)
    bookmark: float = Field(2.0, ge=0.0)

    def as_action_map(self) -> Dict[str, float]:
        return {"view": self.view, "share": self.share, "bookmark": self.bookmark}


class RecommendationConfig(BaseModel):
    """Configuration for the recommendation engine."""

    model_config = ConfigDict(frozen=True)

    weights_version: str = WEIGHTS_VERSION

    # -------------------------------------------------------------------------
    # Similarity index
    # -------------------------------------------------------------------------

    similarity: SimilarityWeights = SimilarityWeights()

    # Neighbors retained per item (top-K).
    neighbors_per_item: int = Field(10, ge=1)

    # Rows scored per numpy block during a build. Bounds peak memory at
    # roughly block_size * catalog_size floats per signal.
    index_block_size: int = Field(512, ge=1)

    # -------------------------------------------------------------------------
    # User profile
    # -------------------------------------------------------------------------

    # Events older than this are ignored when building a profile.
    profile_lookback_days: int = Field(90, ge=1)

    # Size of preferred_types / preferred_categories.
    preferred_top_n: int = Field(5, ge=1)

    # Only events with these event_type values feed profiles and trending;
    # None accepts every type. Covers both spellings of the generic type plus
    # the per-table families written by the site.
    interaction_event_types: Optional[Tuple[str, ...]] = (
        "content_interaction",
        "content-interaction",
        "insight_interaction",
        "episode_interaction",
        "episode_played",
    )

    # Actions that mark content as viewed / bookmarked.
    view_actions: Tuple[str, ...] = ("view", "play")
    bookmark_actions: Tuple[str, ...] = ("bookmark",)

    # -------------------------------------------------------------------------
    # Personalized strategy
    # -------------------------------------------------------------------------

    personalized: PersonalizedWeights = PersonalizedWeights()

    # Number of most recently viewed items compared against each candidate.
    recent_views_limit: int = Field(10, ge=1)

    # Max viewed-similarity above which "Similar to content you've viewed" is given.
    similar_reason_threshold: float = Field(0.3, ge=0.0)

    # Items created within this many days get the recency bonus.
    recency_window_days: int = Field(7, ge=0)

    # Candidates scoring at or below this are discarded.
    min_personalized_score: float = Field(0.1, ge=0.0)

    # Users with no profile signal get the newest items instead of nothing.
    cold_start_fallback: bool = True

    # -------------------------------------------------------------------------
    # Trending strategy
    # -------------------------------------------------------------------------

    trending: TrendingWeights = TrendingWeights()

    # Named windows and their length in days.
    trending_windows: Dict[str, int] = {"day": 1, "week": 7, "month": 30}

    @model_validator(mode="after")
    def windows_are_positive(self):
        for name, days in self.trending_windows.items():
            if days <= 0:
                raise ValueError(f"Trending window {name!r} must be positive, got {days}")
        return self

    def counts_event_type(self, event_type: str) -> bool:
        """Whether events of this type feed profiles and trending."""
        types = self.interaction_event_types
        return types is None or event_type in types

    def window_days(self, window: str) -> int:
        """Days for a named trending window. Unknown names are a caller error."""
        try:
            return self.trending_windows[window]
        except KeyError:
            raise ValueError(
                f"Unknown trending window {window!r}; expected one of {sorted(self.trending_windows)}"
            ) from None

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from a nested dictionary (e.g., loaded from JSON)."""
        flat: Dict = {}
        if "version" in config_dict:
            flat["weights_version"] = config_dict["version"]
        if "similarity" in config_dict:
            sim = dict(config_dict["similarity"])
            if "neighbors_per_item" in sim:
                flat["neighbors_per_item"] = sim.pop("neighbors_per_item")
            flat["similarity"] = sim
        if "personalized" in config_dict:
            pers = dict(config_dict["personalized"])
            for key in (
                "recent_views_limit",
                "similar_reason_threshold",
                "recency_window_days",
                "min_personalized_score",
                "cold_start_fallback",
            ):
                if key in pers:
                    flat[key] = pers.pop(key)
            if "threshold" in pers:
                flat["min_personalized_score"] = pers.pop("threshold")
            flat["personalized"] = pers
        if "trending" in config_dict:
            trend = dict(config_dict["trending"])
            if "windows" in trend:
                flat["trending_windows"] = trend.pop("windows")
            flat["trending"] = trend
        if "profile" in config_dict:
            prof = config_dict["profile"]
            if "lookback_days" in prof:
                flat["profile_lookback_days"] = prof["lookback_days"]
            if "top_n" in prof:
                flat["preferred_top_n"] = prof["top_n"]
            if "event_types" in prof:
                flat["interaction_event_types"] = prof["event_types"]
        if "index" in config_dict:
            idx = config_dict["index"]
            if "block_size" in idx:
                flat["index_block_size"] = idx["block_size"]
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
