#!/usr/bin/env python3
"""
Content Recommendation Engine API: entrypoint for `python -m content_server.server`.

For uvicorn use content_server.app:app.
"""

import uvicorn

from .app import app
from .config import get_config

if __name__ == "__main__":
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
