"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Reads a project-root .env file with python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from content_engine import RecommendationConfig

BASE_DIR = Path(__file__).resolve().parent.parent

root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)


def _bool_env(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Catalog: directory with episodes.json, insights.json, downloadable_pdfs.json
    catalog_dir: Path = BASE_DIR / "data"
    # Analytics events export; None serves with no event history
    events_json_path: Optional[Path] = None
    # JSON weight table merged over the engine defaults
    recommender_config_path: Optional[Path] = None

    build_index_on_startup: bool = True

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_dir=_path_env("CATALOG_DIR", BASE_DIR / "data"),
            events_json_path=_path_env("EVENTS_JSON_PATH"),
            recommender_config_path=_path_env("RECOMMENDER_CONFIG_PATH"),
            build_index_on_startup=_bool_env("BUILD_INDEX_ON_STARTUP", True),
        )

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if not self.catalog_dir.is_dir():
            errors.append(f"Catalog directory not found: {self.catalog_dir}")
        if self.events_json_path and not self.events_json_path.exists():
            errors.append(f"Events JSON not found: {self.events_json_path}")
        if self.recommender_config_path and not self.recommender_config_path.exists():
            errors.append(f"Recommender config not found: {self.recommender_config_path}")
        return len(errors) == 0, errors

    def load_recommender_config(self) -> RecommendationConfig:
        """Engine config from RECOMMENDER_CONFIG_PATH, or the defaults."""
        if not self.recommender_config_path:
            return RecommendationConfig()
        with open(self.recommender_config_path) as f:
            return RecommendationConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
