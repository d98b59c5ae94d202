"""Configuration for latestview.

Settings come from three places, highest priority first:

1. ``LATESTVIEW_*`` environment variables (``LATESTVIEW_ROOT_DIR``,
   ``LATESTVIEW_POLL_INTERVAL``, ...)
2. ``~/.latestview/config.json``
3. The defaults declared on :class:`Settings`

Created: 2026-10-19
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "LATESTVIEW_"


def get_config_dir() -> Path:
    """Directory holding ``config.json``. Not created on read."""
    return Path.home() / ".latestview"


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


class Settings(BaseSettings):
    """Server and follower settings."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    # Directory service
    root_dir: Path = Field(default_factory=Path.cwd)
    extensions: list[str] = Field(default_factory=list)
    show_hidden: bool = True

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8888

    # Follower
    server_url: str = "http://127.0.0.1:8888"
    poll_interval: float = Field(default=2.0, gt=0)
    request_timeout: float = Field(default=10.0, gt=0)

    log_level: str = "INFO"

    @field_validator("root_dir", mode="after")
    @classmethod
    def _expand_root(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("extensions", mode="after")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        # ".JSON", "json" and ".json" all mean the same filter
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Build settings from the config file, letting env vars win."""
        config_path = path or get_config_path()
        file_values: dict = {}
        if config_path.exists():
            try:
                file_values = json.loads(config_path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable config %s: %s", config_path, e)
                file_values = {}
            if not isinstance(file_values, dict):
                logger.warning("Ignoring config %s: expected a JSON object", config_path)
                file_values = {}

        # Init kwargs outrank env in pydantic-settings, so drop file keys
        # that the environment already sets.
        overrides = {
            key: value
            for key, value in file_values.items()
            if key in cls.model_fields and f"{ENV_PREFIX}{key.upper()}" not in os.environ
        }
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings. Call ``get_settings.cache_clear()`` to reload."""
    return Settings.load()
