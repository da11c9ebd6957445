"""Pure helpers: engine results to API response models."""

from content_engine import ContentItem, RecommendationBundle, RecommendationScore, StrategyResult

from .models import BundleResponse, ContentCard, RecommendationItem, StrategyResponse

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def to_content_card(item: ContentItem) -> ContentCard:
    return ContentCard(
        id=item.id,
        title=item.title,
        slug=item.slug,
        type=item.type,
        categories=sorted(item.categories),
        tags=sorted(item.tags),
        difficulty=item.difficulty,
        length_metric=item.length_metric,
        created_at=item.created_at.isoformat() if item.created_at else None,
    )


def to_recommendation_item(rec: RecommendationScore) -> RecommendationItem:
    return RecommendationItem(
        content_id=rec.content_id,
        score=round(rec.score, 4),
        reasons=list(rec.reasons),
        signals={k: round(v, 4) for k, v in rec.signals.items()},
        strategy=rec.strategy,
        content=to_content_card(rec.content) if rec.content is not None else None,
    )


def to_strategy_response(result: StrategyResult) -> StrategyResponse:
    return StrategyResponse(
        strategy=result.strategy,
        status=result.status,
        error=result.error,
        recommendations=[to_recommendation_item(r) for r in result.recommendations],
    )


def to_bundle_response(bundle: RecommendationBundle, limit: int) -> BundleResponse:
    return BundleResponse(
        results={name: to_strategy_response(r) for name, r in bundle.results.items()},
        merged=[to_recommendation_item(r) for r in bundle.merged(limit)],
        degraded=bundle.degraded,
    )
