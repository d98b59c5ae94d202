# API v1 router aggregation.
# Created: 2026-10-19
#
# mount_v1_routers(app) registers all domain routers at /api/v1/ (canonical).
# The files router is also mounted at /api/ as an alias.

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

# (module_path, attr_name, alias_prefix or None)
_V1_ROUTERS: list[tuple[str, str, str | None]] = [
    ("latestview.api.v1.health", "router", None),
    ("latestview.api.v1.files", "router", "/api"),
]


def mount_v1_routers(app: FastAPI) -> None:
    """Mount all v1 domain routers on *app* at ``/api/v1``."""
    for module_path, attr_name, alias_prefix in _V1_ROUTERS:
        mod = importlib.import_module(module_path)
        router = getattr(mod, attr_name)
        app.include_router(router, prefix="/api/v1")
        if alias_prefix:
            app.include_router(router, prefix=alias_prefix, include_in_schema=False)
        logger.debug("Mounted v1 router: %s", module_path)
