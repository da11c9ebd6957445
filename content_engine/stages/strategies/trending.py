"""
Trending strategy: engagement counts across all users inside a time window.

engagement = views * w_view + shares * w_share + bookmarks * w_bookmark

Only the literal "view", "share" and "bookmark" actions count; plays feed
profiles but not trending. Scores are normalized by the top engagement in the
window; raw counts and engagement are kept in signals.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from ...models.config import RecommendationConfig, resolve_config
from ...models.event import InteractionEvent
from ...models.scoring import RecommendationScore

STRATEGY_TRENDING = "trending"


def count_engagement(
    events: Iterable[InteractionEvent],
    config: Optional[RecommendationConfig] = None,
) -> Dict[str, Dict[str, int]]:
    """content_id -> {"view": n, "share": n, "bookmark": n} for counted actions."""
    config = resolve_config(config)
    counted = config.trending.as_action_map()
    counts: Dict[str, Dict[str, int]] = defaultdict(lambda: {action: 0 for action in counted})
    for event in events:
        if not config.counts_event_type(event.event_type):
            continue
        if event.action in counted and event.content_id:
            counts[event.content_id][event.action] += 1
    return dict(counts)


def rank_trending(
    events: Iterable[InteractionEvent],
    limit: Optional[int],
    config: Optional[RecommendationConfig] = None,
) -> List[RecommendationScore]:
    """Rank content by weighted engagement, ties by content id. limit=None keeps all."""
    config = resolve_config(config)
    weights = config.trending.as_action_map()
    counts = count_engagement(events, config)

    engagement = {
        cid: sum(c[action] * weights[action] for action in weights)
        for cid, c in counts.items()
    }
    ranked = sorted(
        (cid for cid, value in engagement.items() if value > 0),
        key=lambda cid: (-engagement[cid], cid),
    )[:limit]
    if not ranked:
        return []

    top = engagement[ranked[0]]
    out = []
    for cid in ranked:
        c = counts[cid]
        out.append(RecommendationScore(
            content_id=cid,
            score=engagement[cid] / top,
            reasons=[f"{c['view']} views, {c['share']} shares, {c['bookmark']} bookmarks"],
            signals={
                "views": float(c["view"]),
                "shares": float(c["share"]),
                "bookmarks": float(c["bookmark"]),
                "engagement": float(engagement[cid]),
            },
            strategy=STRATEGY_TRENDING,
        ))
    return out
