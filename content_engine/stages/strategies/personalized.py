"""
Personalized strategy: a deterministic, auditable weighted sum per candidate.

Signals (weights from config.personalized):
- preferred_type: candidate type is in the profile's preferred types
- preferred_category: candidate categories intersect preferred categories
- preferred_difficulty: candidate difficulty is a preferred difficulty
- viewed_similarity: weight * max index similarity to the most recently viewed items
- recently_published: created within recency_window_days of now

Candidates are the catalog snapshot minus exclusions minus viewed content.
Totals at or below min_personalized_score are dropped; the rest are sorted by
score, then by most recent created_at, then by id.

Users with no profile signal at all get rank_latest instead: the newest
published items, so a cold start still sees something.
"""

from datetime import datetime
from typing import Collection, List, Optional, Sequence

from ...models.config import RecommendationConfig, resolve_config
from ...models.content import ContentItem
from ...models.profile import UserProfile
from ...models.scoring import RecommendationScore
from ...utils.dates import utc_now, within_days
from ..similarity_index import SimilarityIndex

STRATEGY_PERSONALIZED = "personalized"

REASON_INTERESTS = "Matches your interests"
REASON_SIMILAR_VIEWED = "Similar to content you've viewed"
REASON_RECENT = "Recently published"
# Given only when weak viewed-similarity is the sole contributor, so every
# positive score carries a reason.
REASON_RELATED_ACTIVITY = "Related to your recent activity"
# Given to every item of the cold-start list.
REASON_LATEST = "Latest from the catalog"


def score_candidate(
    candidate: ContentItem,
    profile: UserProfile,
    index: SimilarityIndex,
    recent_viewed: Sequence[str],
    config: RecommendationConfig,
    now: datetime,
) -> RecommendationScore:
    """Score one candidate against a profile. Score is a non-negative, unnormalized sum."""
    weights = config.personalized
    score = 0.0
    reasons: List[str] = []
    signals = {}

    if candidate.type in profile.preferred_types:
        score += weights.preferred_type
        signals["preferred_type"] = weights.preferred_type
        reasons.append(f"Matches your {candidate.type} preference")

    if candidate.categories.intersection(profile.preferred_categories):
        score += weights.preferred_category
        signals["preferred_category"] = weights.preferred_category
        reasons.append(REASON_INTERESTS)

    if candidate.difficulty and candidate.difficulty in profile.preferred_difficulty:
        score += weights.preferred_difficulty
        signals["preferred_difficulty"] = weights.preferred_difficulty
        reasons.append(f"{candidate.difficulty} level content")

    max_similarity = max(
        (index.similarity(candidate.id, viewed_id) for viewed_id in recent_viewed),
        default=0.0,
    )
    if max_similarity > 0.0:
        contribution = weights.viewed_similarity * max_similarity
        score += contribution
        signals["viewed_similarity"] = contribution
        if max_similarity > config.similar_reason_threshold:
            reasons.append(REASON_SIMILAR_VIEWED)

    if within_days(candidate.created_at, config.recency_window_days, now):
        score += weights.recently_published
        signals["recently_published"] = weights.recently_published
        reasons.append(REASON_RECENT)

    if score > 0.0 and not reasons:
        reasons.append(REASON_RELATED_ACTIVITY)

    return RecommendationScore(
        content_id=candidate.id,
        score=score,
        reasons=reasons,
        signals=signals,
        strategy=STRATEGY_PERSONALIZED,
    )


def _created_ts(item: Optional[ContentItem]) -> float:
    if item is None or item.created_at is None:
        return float("-inf")
    return item.created_at.timestamp()


def rank_personalized(
    index: SimilarityIndex,
    profile: UserProfile,
    limit: Optional[int],
    exclude_ids: Collection[str] = (),
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> List[RecommendationScore]:
    """
    Rank the catalog snapshot for one user.

    Never returns an excluded id or an id in profile.viewed_content_ids.
    limit=None returns every candidate above the threshold.
    """
    config = resolve_config(config)
    now = now or utc_now()
    excluded = set(exclude_ids) | set(profile.viewed_content_ids)
    recent_viewed = profile.viewed_content_ids[: config.recent_views_limit]

    scored = []
    for candidate in index.items.values():
        if candidate.id in excluded:
            continue
        rec = score_candidate(candidate, profile, index, recent_viewed, config, now)
        if rec.score > config.min_personalized_score:
            scored.append(rec)

    scored.sort(
        key=lambda r: (-r.score, -_created_ts(index.get_item(r.content_id)), r.content_id)
    )
    return scored[:limit]


def rank_latest(
    index: SimilarityIndex,
    limit: Optional[int],
    exclude_ids: Collection[str] = (),
    now: Optional[datetime] = None,
) -> List[RecommendationScore]:
    """
    Un-personalized fallback: newest items first, ties by id.

    score = 1 / (1 + age in days), so it decays with age; undated items come
    last with score 0.
    """
    now = now or utc_now()
    excluded = set(exclude_ids)
    candidates = [item for item in index.items.values() if item.id not in excluded]
    candidates.sort(key=lambda item: (-_created_ts(item), item.id))

    out = []
    for item in candidates[:limit]:
        signals = {}
        score = 0.0
        if item.created_at is not None:
            age_days = max((now - item.created_at).total_seconds() / 86400.0, 0.0)
            score = 1.0 / (1.0 + age_days)
            signals["age_days"] = age_days
        out.append(RecommendationScore(
            content_id=item.id,
            score=score,
            reasons=[REASON_LATEST],
            signals=signals,
            strategy=STRATEGY_PERSONALIZED,
        ))
    return out
