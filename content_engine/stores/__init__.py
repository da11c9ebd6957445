"""Read-side store abstractions: content catalog and interaction events."""

from .catalog import (
    CatalogReader,
    InMemoryCatalogReader,
    JsonCatalogReader,
    MultiSourceCatalogReader,
    json_catalog_from_dir,
)
from .events import EventReader, InMemoryEventReader, JsonEventReader

__all__ = [
    "CatalogReader",
    "EventReader",
    "InMemoryCatalogReader",
    "InMemoryEventReader",
    "JsonCatalogReader",
    "JsonEventReader",
    "MultiSourceCatalogReader",
    "json_catalog_from_dir",
]
