"""
Content Recommendation Engine facade.

Owns the stores, the configuration, the clock and both caches, and exposes
the three strategies plus a concurrent fan-out over them:

- content_based(content_id, limit): neighbors from the similarity index
- personalized(user_id, limit, exclude_ids): weighted profile match, or the
  newest items for users without history
- trending(window, limit): weighted engagement in a time window
- recommend(request): async fan-out of several strategies

Every strategy returns a StrategyResult. Unknown ids give an "empty" result;
store failures give a "degraded" result with the cause logged. Negative
limits and unknown trending windows raise ValueError.
"""

import logging
from datetime import datetime, timedelta
from functools import partial
from typing import Any, Callable, Collection, Dict, Optional

from .cache import IndexCache, ProfileCache
from .models.config import RecommendationConfig, resolve_config
from .models.profile import UserProfile
from .models.request import RecommendationRequest
from .models.scoring import RecommendationBundle, StrategyResult
from .stages.enrichment import enrich
from .stages.orchestrator import fan_out
from .stages.similarity_index import SimilarityIndex
from .stages.strategies import (
    STRATEGY_CONTENT_BASED,
    STRATEGY_PERSONALIZED,
    STRATEGY_TRENDING,
    rank_content_based,
    rank_latest,
    rank_personalized,
    rank_trending,
)
from .stages.user_profile import load_user_profile
from .stores.catalog import CatalogReader
from .stores.events import EventReader
from .utils.dates import utc_now

logger = logging.getLogger(__name__)


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def _error(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


class RecommendationEngine:
    """
    Recommendation API over a catalog reader and an event reader.

    Caches are per instance; pass index_cache / profile_cache to share or
    pre-seed them.
    """

    def __init__(
        self,
        catalog: CatalogReader,
        events: EventReader,
        config: Optional[RecommendationConfig] = None,
        clock: Callable[[], datetime] = utc_now,
        index_cache: Optional[IndexCache] = None,
        profile_cache: Optional[ProfileCache] = None,
    ):
        self.catalog = catalog
        self.events = events
        self.config = resolve_config(config)
        self._clock = clock
        self.index_cache = index_cache or IndexCache(catalog, self.config, clock)
        self.profile_cache = profile_cache or ProfileCache(self._build_profile)

    def _build_profile(self, user_id: str) -> UserProfile:
        # Items are resolved against the last published snapshot, if any.
        index = self.index_cache.current
        items = index.items if index is not None else {}
        return load_user_profile(user_id, self.events, items, self.config, self._clock())

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    def content_based(self, content_id: str, limit: int = 10) -> StrategyResult:
        """Items most similar to content_id, best first."""
        _check_limit(limit)
        try:
            index = self.index_cache.get()
            recs = enrich(rank_content_based(index, content_id), self.catalog, limit)
        except Exception as e:
            logger.warning(
                "[store_unavailable] CONTENT_BASED_FAILED content_id=%s error=%s", content_id, _error(e)
            )
            return StrategyResult.degraded(STRATEGY_CONTENT_BASED, _error(e))
        return StrategyResult.from_recommendations(STRATEGY_CONTENT_BASED, recs)

    def personalized(
        self,
        user_id: str,
        limit: int = 10,
        exclude_ids: Collection[str] = (),
    ) -> StrategyResult:
        """
        Catalog items matching the user's profile, excluding exclude_ids and
        anything the user already viewed.

        A user with no history gets the newest catalog items instead, unless
        config.cold_start_fallback is off.

        If the event store fails the user is scored with an empty profile and
        the result is degraded.
        """
        _check_limit(limit)
        try:
            index = self.index_cache.get()
        except Exception as e:
            logger.warning(
                "[store_unavailable] PERSONALIZED_INDEX_UNAVAILABLE user_id=%s error=%s", user_id, _error(e)
            )
            return StrategyResult.degraded(STRATEGY_PERSONALIZED, _error(e))

        profile_error = None
        try:
            profile = self.profile_cache.get_or_build(user_id)
        except Exception as e:
            logger.warning(
                "[store_unavailable] PROFILE_EVENTS_READ_FAILED user_id=%s error=%s", user_id, _error(e)
            )
            profile = UserProfile.empty(user_id)
            profile_error = _error(e)

        now = self._clock()
        if profile.is_empty and self.config.cold_start_fallback:
            ranked = rank_latest(index, None, exclude_ids, now)
        else:
            ranked = rank_personalized(index, profile, None, exclude_ids, self.config, now)
        try:
            recs = enrich(ranked, self.catalog, limit)
        except Exception as e:
            logger.warning(
                "[store_unavailable] PERSONALIZED_ENRICH_FAILED user_id=%s error=%s", user_id, _error(e)
            )
            return StrategyResult.degraded(STRATEGY_PERSONALIZED, _error(e))

        if profile_error is not None:
            return StrategyResult.degraded(STRATEGY_PERSONALIZED, profile_error, recs)
        return StrategyResult.from_recommendations(STRATEGY_PERSONALIZED, recs)

    def trending(self, window: str = "week", limit: int = 10) -> StrategyResult:
        """Most engaged-with content in the named window (day, week, month)."""
        _check_limit(limit)
        days = self.config.window_days(window)
        now = self._clock()
        since = now - timedelta(days=days)
        try:
            events = [e for e in self.events.events_in_window(since) if e.timestamp <= now]
            recs = enrich(rank_trending(events, None, self.config), self.catalog, limit)
        except Exception as e:
            logger.warning(
                "[store_unavailable] TRENDING_FAILED window=%s error=%s", window, _error(e)
            )
            return StrategyResult.degraded(STRATEGY_TRENDING, _error(e))
        return StrategyResult.from_recommendations(STRATEGY_TRENDING, recs)

    async def recommend(self, request: RecommendationRequest) -> RecommendationBundle:
        """
        Run the requested strategies concurrently and join their results.

        A strategy missing its input (content_based without content_id,
        personalized without user_id) comes back empty.
        """
        _check_limit(request.limit)
        if STRATEGY_TRENDING in request.strategies:
            self.config.window_days(request.window)

        tasks: Dict[str, Callable[[], StrategyResult]] = {}
        for name in request.strategies:
            if name == STRATEGY_CONTENT_BASED:
                if request.content_id:
                    tasks[name] = partial(self.content_based, request.content_id, request.limit)
                else:
                    tasks[name] = partial(StrategyResult.from_recommendations, name, [])
            elif name == STRATEGY_PERSONALIZED:
                if request.user_id:
                    tasks[name] = partial(
                        self.personalized, request.user_id, request.limit, request.exclude_ids
                    )
                else:
                    tasks[name] = partial(StrategyResult.from_recommendations, name, [])
            elif name == STRATEGY_TRENDING:
                tasks[name] = partial(self.trending, request.window, request.limit)
        return await fan_out(tasks, request.timeout)

    # -------------------------------------------------------------------------
    # Cache control
    # -------------------------------------------------------------------------

    def rebuild_index(self) -> SimilarityIndex:
        """
        Re-read file-backed stores, then rebuild the index from the catalog.

        On failure the old snapshot stays and the error propagates.
        """
        for store in (self.catalog, self.events):
            refresh = getattr(store, "refresh", None)
            if refresh is None:
                continue
            try:
                refresh()
            except Exception as e:
                logger.warning(
                    "[store_unavailable] STORE_REFRESH_FAILED store=%s error=%s", type(store).__name__, _error(e)
                )
                raise
        return self.index_cache.rebuild()

    def invalidate_profile(self, user_id: str) -> bool:
        """Drop the user's cached profile; the next request rebuilds it."""
        return self.profile_cache.invalidate(user_id)

    def rebuild_profile(self, user_id: str) -> UserProfile:
        """
        Rebuild and cache the user's profile now.

        On an event store failure the cached entry is dropped and an empty,
        uncached profile is returned.
        """
        try:
            return self.profile_cache.rebuild(user_id)
        except Exception as e:
            logger.warning(
                "[store_unavailable] PROFILE_REBUILD_FAILED user_id=%s error=%s", user_id, _error(e)
            )
            self.profile_cache.invalidate(user_id)
            return UserProfile.empty(user_id)

    def stats(self) -> Dict[str, Any]:
        index = self.index_cache.current
        return {
            "index_built": index is not None,
            "index_items": len(index) if index is not None else 0,
            "index_built_at": index.built_at.isoformat() if index is not None else None,
            "weights_version": self.config.weights_version,
            "cached_profiles": len(self.profile_cache),
        }
