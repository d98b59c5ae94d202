"""latestview entry point.

Examples:
  latestview serve --root ./out/json        Serve a directory on :8888
  latestview follow                          Follow the newest file on the server root
  latestview follow --path reports --no-follow
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from latestview.config import ENV_PREFIX, Settings, get_settings
from latestview.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return get_version("latestview")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="latestview",
        description="Browse a directory over HTTP and follow its most recently modified file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--version", "-v", action="version", version=_package_version())
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the files API server")
    serve.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Port (default: 8888)")
    serve.add_argument("--root", default=None, help="Directory to serve (default: cwd)")
    serve.add_argument(
        "--ext",
        action="append",
        default=None,
        help="Only list files with this extension (repeatable, e.g. --ext .json)",
    )
    serve.add_argument("--dev", action="store_true", help="Development mode with auto-reload")

    follow = sub.add_parser("follow", help="Poll a server and show its newest file")
    follow.add_argument("--server", default=None, help="Server URL (default: http://127.0.0.1:8888)")
    follow.add_argument("--path", default=None, help="Directory to follow (default: server root)")
    follow.add_argument(
        "--interval", type=float, default=None, help="Seconds between polls (default: 2.0)"
    )
    follow.add_argument(
        "--no-follow", action="store_true", help="List only; do not auto-load the newest file"
    )
    return parser


def _apply_serve_overrides(args: argparse.Namespace) -> Settings:
    # Exported so a --dev reload worker picks the same values up.
    if args.root:
        os.environ[f"{ENV_PREFIX}ROOT_DIR"] = args.root
    if args.ext:
        os.environ[f"{ENV_PREFIX}EXTENSIONS"] = json.dumps(args.ext)
    get_settings.cache_clear()
    return get_settings()


def run_serve(args: argparse.Namespace) -> None:
    from latestview.api.serve import run_api_server

    settings = _apply_serve_overrides(args)
    run_api_server(
        host=args.host or settings.host,
        port=args.port or settings.port,
        dev=args.dev,
    )


async def run_follow(args: argparse.Namespace) -> None:
    from latestview.follow.client import FilesClient
    from latestview.follow.console import ConsoleView
    from latestview.follow.controller import FollowController

    settings = get_settings()
    async with FilesClient(
        base_url=args.server or settings.server_url, timeout=settings.request_timeout
    ) as client:
        controller = FollowController(
            client,
            path=args.path,
            poll_interval=args.interval or settings.poll_interval,
            auto_follow=not args.no_follow,
            on_change=ConsoleView(),
        )
        await controller.start()
        try:
            await asyncio.Event().wait()
        finally:
            await controller.stop()


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    setup_logging(level=args.log_level or get_settings().log_level)

    if args.command == "serve":
        run_serve(args)
    elif args.command == "follow":
        try:
            asyncio.run(run_follow(args))
        except KeyboardInterrupt:
            logger.info("Interrupted")


if __name__ == "__main__":
    main()
