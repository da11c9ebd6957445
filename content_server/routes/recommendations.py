"""Recommendation endpoints: one per strategy plus the fan-out request."""

from typing import List

from fastapi import APIRouter, HTTPException, Query

from ..models import BundleResponse, RecommendationRequest, StrategyResponse
from ..state import get_state
from ..utils import DEFAULT_LIMIT, MAX_LIMIT, to_bundle_response, to_strategy_response

router = APIRouter()


def _split_ids(values: List[str]) -> List[str]:
    """Accept both ?exclude=a&exclude=b and ?exclude=a,b."""
    out = []
    for value in values:
        out.extend(v.strip() for v in value.split(",") if v.strip())
    return out


@router.get("/similar/{content_id}", response_model=StrategyResponse)
def similar(content_id: str, limit: int = Query(DEFAULT_LIMIT, ge=0, le=MAX_LIMIT)):
    """Items most similar to content_id. Unknown ids return an empty list."""
    result = get_state().engine.content_based(content_id, limit)
    return to_strategy_response(result)


@router.get("/personalized/{user_id}", response_model=StrategyResponse)
def personalized(
    user_id: str,
    limit: int = Query(DEFAULT_LIMIT, ge=0, le=MAX_LIMIT),
    exclude: List[str] = Query(default=[]),
):
    """Recommendations from the user's profile, never including viewed or excluded ids."""
    result = get_state().engine.personalized(user_id, limit, _split_ids(exclude))
    return to_strategy_response(result)


@router.get("/trending", response_model=StrategyResponse)
def trending(
    window: str = Query("week"),
    limit: int = Query(DEFAULT_LIMIT, ge=0, le=MAX_LIMIT),
):
    """Most engaged-with content in the window (day, week, month)."""
    try:
        result = get_state().engine.trending(window, limit)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return to_strategy_response(result)


@router.post("", response_model=BundleResponse)
async def recommend(request: RecommendationRequest):
    """Run several strategies concurrently; returns per-strategy results and a merged list."""
    try:
        bundle = await get_state().engine.recommend(request)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return to_bundle_response(bundle, request.limit)
