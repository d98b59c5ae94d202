"""Poll-and-auto-select controller.

Lists the current directory once on start and then every ``poll_interval``
seconds. When auto-follow is on and the newest file of a listing differs
from the last file it auto-loaded, the controller reads that file and makes
it the selection.

Precedence: opening a file by hand selects it but leaves
``last_auto_loaded_path`` alone, so the next listing whose newest file is a
different (newer) file replaces the manual selection.

Every tick and every read runs as its own task, so a slow read never delays
the timer. Out-of-order responses are handled with two counters kept on the
session: a listing is dropped if a later tick's listing was already applied
or the user navigated away, and a read is dropped if a read issued after it
is already on screen. A read that fails changes nothing, so it cannot hide
an earlier read that is still in flight.

Created: 2026-10-19
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from latestview.directory import Entry, Listing
from latestview.follow.client import FilesClientError
from latestview.follow.session import Session

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Session], Awaitable[None] | None]

DEFAULT_POLL_INTERVAL = 2.0


class FilesBackend(Protocol):
    async def list_directory(self, path: str | None = None) -> Listing: ...

    async def read_file(self, path: str) -> str: ...


class FollowController:
    """Drive one :class:`Session` against a files backend."""

    def __init__(
        self,
        client: FilesBackend,
        path: str | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        auto_follow: bool = True,
        on_change: ChangeCallback | None = None,
    ):
        self.client = client
        self.initial_path = path
        self.poll_interval = poll_interval
        self.initial_auto_follow = auto_follow
        self.on_change = on_change
        self.session: Session | None = None
        self._timer_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    # ── Lifecycle ──────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    def activate(self) -> Session:
        """Create a fresh session without starting the timer."""
        if self.session is None:
            self.session = Session(
                current_path=self.initial_path,
                auto_follow_enabled=self.initial_auto_follow,
            )
        return self.session

    async def start(self) -> None:
        """Activate the session and start polling (first tick is immediate)."""
        if self.running:
            return
        self.activate()
        self._timer_task = asyncio.create_task(self._timer_loop())
        logger.info(
            "Following %s every %.1fs", self.initial_path or "<server root>", self.poll_interval
        )

    async def stop(self) -> None:
        """Cancel the timer, let in-flight requests finish, drop the session."""
        if self._timer_task:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None
        await self.wait_idle()
        self.session = None
        logger.info("Follower stopped")

    async def wait_idle(self) -> None:
        """Wait until no tick or read task is pending."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # ── User actions ───────────────────────────────────────────────────

    def set_auto_follow(self, enabled: bool) -> None:
        """Turn auto-follow on or off. The next poll decides whether to load."""
        session = self._require_session()
        session.auto_follow_enabled = enabled
        logger.debug("Auto-follow %s", "enabled" if enabled else "disabled")

    async def open_entry(self, entry: Entry) -> None:
        """Navigate into a directory or display a file."""
        session = self._require_session()
        if entry.is_directory:
            await self._navigate(session, entry.path)
        else:
            session.read_seq += 1
            await self._read(session, entry.path, session.generation, session.read_seq, auto=False)

    async def navigate(self, path: str) -> None:
        """List ``path`` and make it the current directory."""
        await self._navigate(self._require_session(), path)

    # ── Polling ────────────────────────────────────────────────────────

    async def poll_once(self) -> None:
        """One poll tick: list the current directory and maybe auto-load."""
        session = self._require_session()
        session.generation += 1
        generation = session.generation
        path = session.current_path

        try:
            listing = await self.client.list_directory(path)
        except FilesClientError as e:
            logger.warning("Listing %s failed: %s", path or "<server root>", e)
            return

        if session is not self.session:
            return
        if session.current_path != path:
            logger.debug("Dropping listing of %s: navigated to %s", path, session.current_path)
            return
        if generation < session.applied_generation:
            logger.debug(
                "Dropping listing from tick %d (tick %d applied)",
                generation,
                session.applied_generation,
            )
            return

        session.applied_generation = generation
        session.current_path = listing.path
        session.entries = list(listing.entries)
        await self._notify(session)

        if session.auto_follow_enabled:
            self._follow_newest(session, listing, generation)

    async def _timer_loop(self) -> None:
        while True:
            self._track(asyncio.create_task(self._tick()))
            await asyncio.sleep(self.poll_interval)

    async def _tick(self) -> None:
        try:
            await self.poll_once()
        except Exception:
            logger.exception("Poll tick failed")

    def _follow_newest(self, session: Session, listing: Listing, generation: int) -> None:
        newest = listing.newest_file()
        if newest is None:
            return
        if newest.path == session.last_auto_loaded_path:
            return
        if newest.path == session.pending_auto_path:
            return

        session.read_seq += 1
        session.auto_read_seq = session.read_seq
        session.pending_auto_path = newest.path
        logger.info("Newest file is now %s", newest.name)
        self._track(
            asyncio.create_task(self._auto_read(session, newest.path, generation, session.read_seq))
        )

    async def _auto_read(self, session: Session, path: str, generation: int, seq: int) -> None:
        try:
            await self._read(session, path, generation, seq, auto=True)
        except Exception:
            logger.exception("Auto-load of %s failed", path)

    # ── Requests ───────────────────────────────────────────────────────

    async def _navigate(self, session: Session, path: str) -> None:
        try:
            listing = await self.client.list_directory(path)
        except FilesClientError as e:
            logger.warning("Opening %s failed: %s", path, e)
            return
        if session is not self.session:
            return
        session.current_path = listing.path
        session.entries = list(listing.entries)
        await self._notify(session)

    async def _read(
        self, session: Session, path: str, generation: int, seq: int, auto: bool
    ) -> None:
        session.reads_in_flight += 1
        try:
            content = await self.client.read_file(path)
        except FilesClientError as e:
            logger.warning("Reading %s failed: %s", path, e)
            return
        finally:
            session.reads_in_flight -= 1
            if auto and session.pending_auto_path == path:
                session.pending_auto_path = None

        if seq < session.displayed_seq:
            logger.debug("Dropping stale read of %s (tick %d, read %d)", path, generation, seq)
            # A later auto-read would have bumped auto_read_seq, so what is
            # on screen came from a manual open: that choice stands until a
            # different newest file appears.
            if auto and seq == session.auto_read_seq:
                session.last_auto_loaded_path = path
            return

        session.displayed_seq = seq
        session.selected_path = path
        session.content = content
        if auto:
            session.last_auto_loaded_path = path
        await self._notify(session)

    # ── Helpers ────────────────────────────────────────────────────────

    def _require_session(self) -> Session:
        if self.session is None:
            raise RuntimeError("FollowController is not active; call start() or activate()")
        return self.session

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _notify(self, session: Session) -> None:
        if self.on_change is None:
            return
        try:
            result = self.on_change(session)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception("on_change callback failed")
