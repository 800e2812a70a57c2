"""
Sphinxsearch Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic_settings import BaseSettings


class SphinxSettings(BaseSettings):
    """Search client configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_ENV: str = "development"
    LOG_LEVEL: str = "info"

    # =========================================================================
    # SEARCHD (Sphinx daemon)
    # =========================================================================
    SPHINX_HOST: str = "localhost"
    SPHINX_PORT: int = 9312
    # Takes precedence over host/port when set
    SPHINX_SOCKET: Optional[str] = None
    SPHINX_MAX_MATCHES: int = 20000

    # Label -> index name as defined in sphinx.conf, JSON encoded in the env:
    # SPHINX_INDEXES='{"Articles": "articles_main"}'
    SPHINX_INDEXES: Dict[str, str] = {}

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> SphinxSettings:
    """Get cached settings instance."""
    return SphinxSettings()
