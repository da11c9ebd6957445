"""
Content Catalog Reader abstraction.

Supplies published catalog items to the engine (index builds, enrichment).
Implementations: in-memory (tests, embedding), JSON exports of the source
tables (local runs), and a multi-source reader that merges per-table readers
into one homogeneous list.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Union

from ..models.content import ContentItem, ensure_list
from ..schema import SOURCE_TYPES, to_content_items

logger = logging.getLogger(__name__)


class CatalogReader(Protocol):
    """Protocol for read-only catalog access. Implementations may raise on store failure."""

    def list_published(self, content_type: Optional[str] = None) -> List[ContentItem]:
        """Return all published items, optionally restricted to one content type."""
        ...

    def get(self, content_id: str) -> Optional[ContentItem]:
        """Get one published item by id; None when it does not exist or is unpublished."""
        ...


class InMemoryCatalogReader:
    """
    Catalog reader backed by a list of items held in memory.
    Used for tests and for embedding the engine next to an existing cache.
    """

    def __init__(self, items: Iterable[Union[Dict, ContentItem]] = ()):
        self._items: Dict[str, ContentItem] = {}
        for item in ensure_list(list(items)):
            self._items.setdefault(item.id, item)

    def list_published(self, content_type: Optional[str] = None) -> List[ContentItem]:
        items = list(self._items.values())
        if content_type is not None:
            items = [i for i in items if i.type == content_type]
        return items

    def get(self, content_id: str) -> Optional[ContentItem]:
        return self._items.get(content_id)

    def put(self, item: ContentItem) -> None:
        """Add or replace an item. The index only sees it after a rebuild."""
        self._items[item.id] = item

    def remove(self, content_id: str) -> None:
        self._items.pop(content_id, None)


class JsonCatalogReader:
    """
    Catalog reader backed by a JSON export of one source table
    (episodes.json, insights.json or downloadable_pdfs.json).
    Rows are normalized with schema.to_content_items; unpublished rows are skipped.
    The export is read once and held by id; refresh() re-reads it.
    """

    def __init__(self, path: Union[Path, str], source: str):
        if source not in SOURCE_TYPES:
            raise ValueError(f"Unknown catalog source {source!r}; expected one of {sorted(SOURCE_TYPES)}")
        self._path = Path(path)
        self._source = source
        if not self._path.exists():
            raise FileNotFoundError(f"Catalog JSON not found: {self._path}")
        self._items_by_id: Dict[str, ContentItem] = {}
        self.refresh()

    @property
    def content_type(self) -> str:
        return SOURCE_TYPES[self._source].value

    def refresh(self) -> None:
        """Re-read the export. On failure the previously loaded items stay."""
        with open(self._path) as f:
            records = json.load(f)
        items_by_id: Dict[str, ContentItem] = {}
        for item in to_content_items(records, self._source):
            items_by_id.setdefault(item.id, item)
        self._items_by_id = items_by_id

    def list_published(self, content_type: Optional[str] = None) -> List[ContentItem]:
        if content_type is not None and content_type != self.content_type:
            return []
        return list(self._items_by_id.values())

    def get(self, content_id: str) -> Optional[ContentItem]:
        return self._items_by_id.get(content_id)


class MultiSourceCatalogReader:
    """
    Merges one reader per content type into a single catalog.

    list_published concatenates every source (or only the matching one);
    get asks each source in order and returns the first hit. A failing
    source propagates its exception: callers decide how to degrade.
    """

    def __init__(self, readers: Mapping[str, CatalogReader]):
        self._readers = dict(readers)

    def list_published(self, content_type: Optional[str] = None) -> List[ContentItem]:
        if content_type is not None:
            reader = self._readers.get(content_type)
            return reader.list_published(content_type) if reader is not None else []
        items: List[ContentItem] = []
        for source_type, reader in self._readers.items():
            items.extend(reader.list_published(source_type))
        return items

    def get(self, content_id: str) -> Optional[ContentItem]:
        for reader in self._readers.values():
            item = reader.get(content_id)
            if item is not None:
                return item
        return None

    def refresh(self) -> None:
        """Refresh every source that supports it."""
        for reader in self._readers.values():
            refresh = getattr(reader, "refresh", None)
            if refresh is not None:
                refresh()


def json_catalog_from_dir(catalog_dir: Union[Path, str]) -> MultiSourceCatalogReader:
    """
    Build a multi-source reader from a directory of table exports.
    Missing table files are skipped with a warning.
    """
    catalog_dir = Path(catalog_dir)
    readers: Dict[str, CatalogReader] = {}
    for source, content_type in SOURCE_TYPES.items():
        path = catalog_dir / f"{source}.json"
        if not path.exists():
            logger.warning("[catalog] SOURCE_MISSING source=%s path=%s", source, path)
            continue
        readers[content_type.value] = JsonCatalogReader(path, source)
    return MultiSourceCatalogReader(readers)
