"""
Engine-owned caches: the similarity index snapshot and per-user profiles.

IndexCache builds a complete new SimilarityIndex off to the side and swaps
it in with a single reference assignment. A lock serializes rebuilds only;
readers never lock and always see either the old or the new snapshot.

ProfileCache keeps one UserProfile per user until it is invalidated or
rebuilt. Failed builds are not cached.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Optional

from .models.config import RecommendationConfig, resolve_config
from .models.profile import UserProfile
from .stages.similarity_index import SimilarityIndex, build_similarity_index
from .stores.catalog import CatalogReader
from .utils.dates import utc_now

logger = logging.getLogger(__name__)


class IndexCache:
    """Holds the current SimilarityIndex for one catalog."""

    def __init__(
        self,
        catalog: CatalogReader,
        config: Optional[RecommendationConfig] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._catalog = catalog
        self._config = resolve_config(config)
        self._clock = clock
        self._index: Optional[SimilarityIndex] = None
        self._rebuild_lock = threading.Lock()

    @property
    def current(self) -> Optional[SimilarityIndex]:
        """The published snapshot, or None before the first successful build."""
        return self._index

    def get(self) -> SimilarityIndex:
        """Current snapshot; builds the first one lazily."""
        index = self._index
        if index is not None:
            return index
        return self.rebuild()

    def rebuild(self) -> SimilarityIndex:
        """
        Full rebuild from the catalog, then swap.

        If the catalog read fails the previous snapshot stays published and
        the error propagates.
        """
        with self._rebuild_lock:
            try:
                items = self._catalog.list_published()
            except Exception as e:
                logger.warning(
                    "[store_unavailable] INDEX_CATALOG_READ_FAILED keeping_previous=%s error=%s: %s",
                    self._index is not None, type(e).__name__, e,
                )
                raise
            index = build_similarity_index(items, self._config, built_at=self._clock())
            self._index = index
            return index


class ProfileCache:
    """
    Per-user UserProfile cache with no TTL.

    builder(user_id) produces a fresh profile and may raise; entries are
    independent of each other.
    """

    def __init__(self, builder: Callable[[str], UserProfile]):
        self._builder = builder
        self._profiles: Dict[str, UserProfile] = {}
        self._lock = threading.Lock()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def peek(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def get_or_build(self, user_id: str) -> UserProfile:
        profile = self._profiles.get(user_id)
        if profile is not None:
            return profile
        return self.rebuild(user_id)

    def rebuild(self, user_id: str) -> UserProfile:
        """Build a fresh profile and replace any cached entry."""
        profile = self._builder(user_id)
        with self._lock:
            self._profiles[user_id] = profile
        return profile

    def invalidate(self, user_id: str) -> bool:
        """Drop one entry. Returns True if there was one."""
        with self._lock:
            return self._profiles.pop(user_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._profiles.clear()
