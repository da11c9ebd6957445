"""
Content Recommendation Engine.

Single entry point for the engine package:
- models/: ContentItem, InteractionEvent, UserProfile, scores, RecommendationConfig
- features/: tag extraction and title tokens
- schema/: raw catalog rows -> ContentItem
- stores/: catalog and event reader protocols with in-memory and JSON readers
- stages/: similarity index, user profile, strategies, enrichment, fan-out
- cache: IndexCache and ProfileCache
- engine: RecommendationEngine facade
"""

from .cache import IndexCache, ProfileCache
from .engine import RecommendationEngine
from .models import (
    DEFAULT_CONFIG,
    WEIGHTS_VERSION,
    ContentItem,
    ContentType,
    Difficulty,
    InteractionEvent,
    RecommendationBundle,
    RecommendationConfig,
    RecommendationRequest,
    RecommendationScore,
    StrategyResult,
    UserProfile,
)
from .stages import SimilarityIndex, build_similarity_index, build_user_profile
from .stores import (
    CatalogReader,
    EventReader,
    InMemoryCatalogReader,
    InMemoryEventReader,
    JsonCatalogReader,
    JsonEventReader,
    MultiSourceCatalogReader,
    json_catalog_from_dir,
)

__all__ = [
    "DEFAULT_CONFIG",
    "WEIGHTS_VERSION",
    "CatalogReader",
    "ContentItem",
    "ContentType",
    "Difficulty",
    "EventReader",
    "InMemoryCatalogReader",
    "InMemoryEventReader",
    "IndexCache",
    "InteractionEvent",
    "JsonCatalogReader",
    "JsonEventReader",
    "MultiSourceCatalogReader",
    "ProfileCache",
    "RecommendationBundle",
    "RecommendationConfig",
    "RecommendationEngine",
    "RecommendationRequest",
    "RecommendationScore",
    "SimilarityIndex",
    "StrategyResult",
    "UserProfile",
    "build_similarity_index",
    "build_user_profile",
    "json_catalog_from_dir",
]
