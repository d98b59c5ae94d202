# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-19

from __future__ import annotations

from latestview.config import get_settings
from latestview.directory import DirectoryService


def get_directory_service() -> DirectoryService:
    """Directory service built from the current settings.

    Tests swap it out with ``app.dependency_overrides``.
    """
    return DirectoryService.from_settings(get_settings())
