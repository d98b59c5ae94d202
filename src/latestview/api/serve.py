"""API server for ``latestview serve``.

Builds the FastAPI app with the ``/api/v1/`` routers and CORS so a browser
viewer served from another origin (a dev server on localhost) can poll
``/api/v1/files``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def create_api_app():
    """Build the FastAPI application."""
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    from latestview import __version__
    from latestview.api.v1 import mount_v1_routers

    app = FastAPI(
        title="latestview API",
        description="Directory listing by recency and file reads for the latestview viewer.",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    # --- CORS -----------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # --- Mount all /api/v1/ routers -------------------------------------
    mount_v1_routers(app)

    return app


def run_api_server(
    host: str = "127.0.0.1",
    port: int = 8888,
    dev: bool = False,
) -> None:
    """Start the API server under uvicorn."""
    import uvicorn

    from latestview.config import get_settings

    logger.info("Serving %s on http://%s:%d/api/v1/files", get_settings().root_dir, host, port)
    logger.info("API docs: http://%s:%d/api/v1/docs", host, port)

    if dev:
        import pathlib

        src_dir = str(pathlib.Path(__file__).resolve().parent.parent)
        uvicorn.run(
            "latestview.api.serve:create_api_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            reload_dirs=[src_dir],
            reload_includes=["*.py"],
            log_level="debug",
        )
    else:
        app = create_api_app()
        uvicorn.run(app, host=host, port=port, log_config=None)
