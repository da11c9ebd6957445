"""
Record adapter: convert raw catalog rows into ContentItem models.

Supports the three source tables of the catalog:
- episodes: title, slug, description/summary, duration, publish_date, series, status
- insights: insight_type, difficulty_level, estimated_read_time / reading_time_minutes,
  category / categories, tags, status
- downloadable_pdfs: title, description, category, is_public (surfaced as type "report")

Rows already in ContentItem shape (with a "type" field) pass through.
Tags are derived from title + free text when the row carries none.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..features import extract_tags
from ..models.content import ContentItem, ContentType, Difficulty

SOURCE_EPISODES = "episodes"
SOURCE_INSIGHTS = "insights"
SOURCE_REPORTS = "downloadable_pdfs"

SOURCE_TYPES: Dict[str, ContentType] = {
    SOURCE_EPISODES: ContentType.EPISODE,
    SOURCE_INSIGHTS: ContentType.INSIGHT,
    SOURCE_REPORTS: ContentType.REPORT,
}

# Legacy type names seen in stored rows.
_TYPE_ALIASES = {"pdf": ContentType.REPORT.value}


def _labels(*values: Any) -> List[str]:
    """Flatten category-like fields (str, list or None) into one list."""
    out: List[str] = []
    for value in values:
        if not value:
            continue
        if isinstance(value, str):
            out.append(value)
        else:
            out.extend(str(v) for v in value if v)
    return out


def _free_text(record: Dict[str, Any]) -> str:
    parts = (record.get(k) for k in ("subtitle", "description", "summary", "content"))
    return " ".join(p for p in parts if isinstance(p, str) and p)


def _first(record: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def _difficulty(value: Any) -> Optional[str]:
    """Known difficulty level or None; free-form levels are not comparable."""
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value if value in {d.value for d in Difficulty} else None


def is_published(record: Dict[str, Any], source: str) -> bool:
    """Episodes and insights need status 'published'; reports need is_public."""
    if source == SOURCE_REPORTS:
        return bool(record.get("is_public", True))
    status = record.get("status")
    return status is None or status == "published"


def to_content_item(record: Dict[str, Any], source: Optional[str] = None) -> ContentItem:
    """
    Convert one raw row to a ContentItem.

    source selects the table mapping; when None the row's own "type" is used.
    Raises pydantic.ValidationError for rows without an id or a known type.
    """
    record_type = record.get("type")
    if source is not None:
        content_type = SOURCE_TYPES[source].value
    else:
        content_type = _TYPE_ALIASES.get(record_type, record_type)

    title = record.get("title") or ""
    tags = record.get("tags")
    if not tags:
        tags = extract_tags(title, _free_text(record))

    return ContentItem.model_validate({
        "id": record.get("id"),
        "title": title,
        "slug": record.get("slug"),
        "type": content_type,
        "categories": _labels(record.get("categories"), record.get("category"), record.get("insight_type")),
        "tags": tags,
        "difficulty": _difficulty(_first(record, "difficulty", "difficulty_level")),
        "length_metric": _first(
            record, "length_metric", "reading_time_minutes", "estimated_read_time", "reading_time", "duration",
        ),
        "created_at": _first(record, "publish_date", "published_at", "created_at"),
        "updated_at": record.get("updated_at"),
    })


def to_content_items(records: Iterable[Dict[str, Any]], source: Optional[str] = None) -> List[ContentItem]:
    """Convert published rows of one source; unpublished rows are skipped."""
    return [
        to_content_item(r, source)
        for r in records
        if source is None or is_published(r, source)
    ]
