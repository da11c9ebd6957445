"""Stats endpoint."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/stats")
def get_stats():
    """Get current index and cache statistics."""
    state = get_state()
    return {
        "loaded": state.is_loaded,
        **state.engine.stats(),
    }
