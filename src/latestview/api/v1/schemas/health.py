# Health schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel


class HealthSummary(BaseModel):
    status: str = "ok"
    root: str = ""
    error: str | None = None
