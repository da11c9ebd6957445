"""Cache control endpoints: index rebuild and profile invalidation."""

import logging

from fastapi import APIRouter, HTTPException

from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/index/rebuild")
def rebuild_index():
    """Rebuild the similarity index from the catalog. The old index keeps serving on failure."""
    state = get_state()
    try:
        index = state.engine.rebuild_index()
    except Exception as e:
        logger.warning("[admin] INDEX_REBUILD_FAILED error=%s: %s", type(e).__name__, e)
        raise HTTPException(status_code=503, detail=f"Index rebuild failed: {e}")
    return {
        "status": "rebuilt",
        "items": len(index),
        "built_at": index.built_at.isoformat(),
        "weights_version": index.weights_version,
    }


@router.delete("/profiles/{user_id}")
def invalidate_profile(user_id: str):
    """Drop a cached user profile; it is rebuilt on the next personalized request."""
    invalidated = get_state().engine.invalidate_profile(user_id)
    return {"user_id": user_id, "invalidated": invalidated}
