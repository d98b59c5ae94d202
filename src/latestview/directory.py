"""Directory service: list a directory by recency and read files.

Listings put directories first, then files, each group ordered by
descending modification time. Ties keep the filesystem enumeration order.
Entries are rebuilt on every call; nothing is cached between listings.

Created: 2026-10-19
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from latestview.config import Settings

logger = logging.getLogger(__name__)


# ============================================================================
# Errors
# ============================================================================


class DirectoryServiceError(Exception):
    """Base class for directory service failures."""


class PathNotFoundError(DirectoryServiceError):
    """The requested path does not exist."""

    def __init__(self, path: Path | str, message: str | None = None):
        self.path = str(path)
        super().__init__(message or f"Path not found: {self.path}")


class IsADirectoryMismatchError(PathNotFoundError):
    """A read was requested on a directory."""

    def __init__(self, path: Path | str):
        super().__init__(path, f"Not a file: {path}")


# ============================================================================
# Models
# ============================================================================


@dataclass(frozen=True)
class Entry:
    """One file or directory surfaced by a listing."""

    name: str
    path: str
    is_directory: bool
    mtime: int  # milliseconds since the epoch
    mtime_ns: int = field(default=0, repr=False, compare=False)


@dataclass(frozen=True)
class Listing:
    """Result of listing a directory."""

    path: str
    entries: list[Entry] = field(default_factory=list)

    def newest_file(self) -> Entry | None:
        return newest_file(self.entries)


def newest_file(entries: Iterable[Entry]) -> Entry | None:
    """First non-directory entry of a sorted listing: the most recent file."""
    for entry in entries:
        if not entry.is_directory:
            return entry
    return None


# ============================================================================
# Stat policy
# ============================================================================


def skip_unstatable_entries(children: Iterable[Path]) -> Iterator[tuple[Path, int, bool]]:
    """Yield ``(child, mtime_ns, is_dir)`` for every child that can be stat'd.

    Broken symlinks, entries removed mid-listing and permission failures are
    dropped from the listing rather than failing it.
    """
    for child in children:
        try:
            st = child.stat()
        except OSError as e:
            logger.debug("Skipping unstatable entry %s: %s", child, e)
            continue
        yield child, st.st_mtime_ns, stat.S_ISDIR(st.st_mode)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Directories first, then files; newest first inside each group."""
    # sorted() is stable, so equal keys keep enumeration order
    return sorted(entries, key=lambda e: (not e.is_directory, -e.mtime_ns))


# ============================================================================
# Service
# ============================================================================


class DirectoryService:
    """Filesystem-backed listing and reading, rooted at ``root``.

    Relative paths are resolved against ``root``; an empty path means
    ``root`` itself. ``extensions`` limits which files are listed
    (directories are always listed) and ``show_hidden`` controls whether
    dot-entries appear.
    """

    def __init__(
        self,
        root: Path | str,
        extensions: Iterable[str] | None = None,
        show_hidden: bool = True,
    ):
        self.root = Path(root).expanduser().resolve()
        self.extensions = tuple(ext.lower() for ext in (extensions or ()))
        self.show_hidden = show_hidden

    @classmethod
    def from_settings(cls, settings: Settings) -> DirectoryService:
        return cls(
            root=settings.root_dir,
            extensions=settings.extensions,
            show_hidden=settings.show_hidden,
        )

    def resolve(self, path: str | None) -> Path:
        """Turn a request path into an absolute, normalized path."""
        if not path:
            return self.root
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.root / candidate
        return candidate.resolve()

    def list_directory(self, path: str | None = None) -> Listing:
        """List the direct children of ``path``.

        If ``path`` names a file, the listing is empty and carries the
        file's parent directory so the caller can reconcile its state.
        """
        target = self.resolve(path)
        if not target.exists():
            raise PathNotFoundError(target)
        if not target.is_dir():
            return Listing(path=str(target.parent), entries=[])

        entries = [
            Entry(
                name=child.name,
                path=str(child),
                is_directory=is_dir,
                mtime=mtime_ns // 1_000_000,
                mtime_ns=mtime_ns,
            )
            for child, mtime_ns, is_dir in skip_unstatable_entries(target.iterdir())
            if self._visible(child.name, is_dir)
        ]
        return Listing(path=str(target), entries=sort_entries(entries))

    def read_file(self, path: str | None) -> str:
        """Return the whole text of the file at ``path``.

        Bytes that are not valid UTF-8 are replaced rather than rejected.
        """
        target = self.resolve(path)
        if target.is_dir():
            raise IsADirectoryMismatchError(target)
        try:
            data = target.read_bytes()
        except (FileNotFoundError, NotADirectoryError) as e:
            # NotADirectoryError: a parent component is a file
            raise PathNotFoundError(target) from e
        except IsADirectoryError as e:
            raise IsADirectoryMismatchError(target) from e
        return data.decode("utf-8", errors="replace")

    def _visible(self, name: str, is_dir: bool) -> bool:
        if not self.show_hidden and name.startswith("."):
            return False
        if is_dir or not self.extensions:
            return True
        return name.lower().endswith(self.extensions)
