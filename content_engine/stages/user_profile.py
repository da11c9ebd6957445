"""
User profile builder: aggregate a user's interaction history into preferences.

Events are restricted to content interactions inside the lookback window.
View/play actions fill viewed_content_ids (most recent first, de-duplicated),
bookmark actions fill bookmarked_content_ids. Every interaction counts toward
the type, category and difficulty of the touched item; the top-N of each,
ties broken by first-seen (chronological) order, become the preferences.

Public API: build_user_profile (pure) and load_user_profile (reads the event
store first; store errors propagate so callers can degrade).
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional

from ..models.config import RecommendationConfig, resolve_config
from ..models.content import ContentItem
from ..models.event import InteractionEvent
from ..models.profile import UserProfile
from ..stores.events import EventReader
from ..utils.dates import utc_now

logger = logging.getLogger(__name__)


def _top(counter: Counter, n: int) -> List[str]:
    # Counter preserves insertion order and most_common sorts stably, so equal
    # counts keep first-seen order.
    return [key for key, _ in counter.most_common(n)]


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for cid in ids:
        if cid not in seen:
            seen.add(cid)
            out.append(cid)
    return out


def build_user_profile(
    user_id: str,
    events: Iterable[InteractionEvent],
    catalog: Mapping[str, ContentItem],
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> UserProfile:
    """
    Build a profile from already-read events.

    catalog resolves content ids to their type/categories/difficulty; when an
    id is unknown the event metadata's content_type is used for the type.
    """
    config = resolve_config(config)
    now = now or utc_now()
    since = now - timedelta(days=config.profile_lookback_days)

    relevant = [
        e for e in events
        if config.counts_event_type(e.event_type)
        and e.content_id
        and since <= e.timestamp <= now
    ]
    if not relevant:
        return UserProfile(user_id=user_id, built_at=now)

    # --- 1. Frequencies in chronological order (first-seen tie-break) ---
    chronological = sorted(relevant, key=lambda e: e.timestamp)
    type_counts: Counter = Counter()
    category_counts: Counter = Counter()
    difficulty_counts: Counter = Counter()
    action_counts: Counter = Counter()
    for event in chronological:
        action_counts[event.action] += 1
        item = catalog.get(event.content_id)
        if item is None:
            content_type = event.get_metadata().get("content_type")
            if content_type:
                type_counts[str(content_type).lower()] += 1
            continue
        type_counts[item.type] += 1
        for category in sorted(item.categories):
            category_counts[category] += 1
        if item.difficulty:
            difficulty_counts[item.difficulty] += 1

    # --- 2. Viewed / bookmarked, most recent first ---
    most_recent_first = list(reversed(chronological))
    viewed = _dedupe(e.content_id for e in most_recent_first if e.action in config.view_actions)
    bookmarked = _dedupe(e.content_id for e in most_recent_first if e.action in config.bookmark_actions)

    top_n = config.preferred_top_n
    return UserProfile(
        user_id=user_id,
        preferred_types=_top(type_counts, top_n),
        preferred_categories=_top(category_counts, top_n),
        preferred_difficulty=_top(difficulty_counts, top_n),
        viewed_content_ids=viewed,
        bookmarked_content_ids=bookmarked,
        interaction_counts=dict(action_counts),
        built_at=now,
    )


def load_user_profile(
    user_id: str,
    event_reader: EventReader,
    catalog: Mapping[str, ContentItem],
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> UserProfile:
    """
    Read the user's events inside the lookback window and build a profile.

    Raises whatever the event reader raises; the engine turns that into an
    empty profile and a degraded result.
    """
    config = resolve_config(config)
    now = now or utc_now()
    since = now - timedelta(days=config.profile_lookback_days)
    events = event_reader.events_for_user(user_id, since)
    profile = build_user_profile(user_id, events, catalog, config, now)
    logger.info(
        "[profile] BUILT user_id=%s viewed=%s bookmarked=%s types=%s",
        user_id, len(profile.viewed_content_ids), len(profile.bookmarked_content_ids),
        profile.preferred_types,
    )
    return profile
