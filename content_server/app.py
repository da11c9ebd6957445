"""
Content Recommendation Engine API: FastAPI app factory.

Use: uvicorn content_server.app:app
Or:  from content_server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app = FastAPI(
        title="Content Recommendation Engine API",
        description="Content-based, personalized and trending recommendations",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def build_index():
        state = get_state()
        if not state.config.build_index_on_startup:
            logger.info("[startup] Index build deferred to first request")
            return
        try:
            # Stores were just loaded; only the index needs building.
            index = state.engine.index_cache.rebuild()
            logger.info("[startup] Index built: %s items (weights %s)", len(index), index.weights_version)
        except Exception as e:
            logger.warning("[startup] Index build failed, will retry on first request: %s", e)

    return app


app = create_app()
