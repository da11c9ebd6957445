"""Root and health endpoint."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    stats = state.engine.stats()
    return {
        "name": "Content Recommendation Engine API",
        "version": "1.0.0",
        "status": "loaded" if state.is_loaded else "index_not_built",
        "index": {
            "items": stats["index_items"],
            "built_at": stats["index_built_at"],
            "weights_version": stats["weights_version"],
        },
        "endpoints": {
            "recommendations": [
                "/api/recommendations/similar/{content_id}",
                "/api/recommendations/personalized/{user_id}",
                "/api/recommendations/trending",
                "/api/recommendations",
            ],
            "admin": ["/api/index/rebuild", "/api/profiles/{user_id}"],
            "stats": ["/api/stats"],
        },
    }
