"""Application state: the engine and the stores it reads from."""

import logging
from typing import Optional

from content_engine import (
    CatalogReader,
    EventReader,
    InMemoryCatalogReader,
    InMemoryEventReader,
    JsonEventReader,
    RecommendationEngine,
    json_catalog_from_dir,
)

from .config import ServerConfig, get_config

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig, engine: Optional[RecommendationEngine] = None):
        self.config = config
        if engine is None:
            engine = RecommendationEngine(
                self._create_catalog(config),
                self._create_event_reader(config),
                config=config.load_recommender_config(),
            )
        self.engine = engine

    @staticmethod
    def _create_catalog(config: ServerConfig) -> CatalogReader:
        """JSON table exports when CATALOG_DIR exists, else an empty in-memory catalog."""
        if config.catalog_dir.is_dir():
            logger.info("[startup] Catalog: JSON exports in %s", config.catalog_dir)
            return json_catalog_from_dir(config.catalog_dir)
        logger.warning("[startup] Catalog directory not found: %s; serving an empty catalog", config.catalog_dir)
        return InMemoryCatalogReader()

    @staticmethod
    def _create_event_reader(config: ServerConfig) -> EventReader:
        """JSON analytics export when EVENTS_JSON_PATH is set, else no history."""
        if config.events_json_path:
            logger.info("[startup] Events: JSON (%s)", config.events_json_path)
            return JsonEventReader(config.events_json_path)
        logger.info("[startup] Events: none configured")
        return InMemoryEventReader()

    @property
    def is_loaded(self) -> bool:
        return self.engine.index_cache.current is not None


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (None resets it to lazy construction)."""
    global _state
    _state = state
