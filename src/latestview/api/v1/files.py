# Files router: directory listing and file reads.
# Created: 2026-10-19

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from latestview.api.deps import get_directory_service
from latestview.api.v1.schemas.common import ErrorResponse
from latestview.api.v1.schemas.files import ContentResponse, ListingResponse
from latestview.directory import DirectoryService, PathNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/files",
    response_model=ListingResponse | ContentResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_files(
    path: str | None = None,
    action: Literal["read"] | None = None,
    service: DirectoryService = Depends(get_directory_service),
):
    """List a directory (default: the configured root) or read one file.

    ``?path=P`` lists ``P``; ``?path=P&action=read`` returns the file's text.
    """
    try:
        if action == "read":
            return ContentResponse(content=service.read_file(path))
        return ListingResponse.from_listing(service.list_directory(path))
    except PathNotFoundError as e:
        logger.info("GET /files: %s", e)
        return _error(404, str(e))
    except Exception as e:
        logger.exception("GET /files failed for path=%r action=%r", path, action)
        return _error(500, str(e) or e.__class__.__name__)
