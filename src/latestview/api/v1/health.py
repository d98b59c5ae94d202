# Health router.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import APIRouter, Depends

from latestview.api.deps import get_directory_service
from latestview.api.v1.schemas.health import HealthSummary
from latestview.directory import DirectoryService

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthSummary)
def get_health_status(service: DirectoryService = Depends(get_directory_service)):
    """Report whether the browsed root directory is reachable."""
    if not service.root.is_dir():
        return HealthSummary(status="degraded", root=str(service.root), error="Root is not a directory")
    return HealthSummary(root=str(service.root))
