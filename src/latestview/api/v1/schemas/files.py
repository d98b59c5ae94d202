# File listing schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel

from latestview.directory import Entry, Listing


class FileEntry(BaseModel):
    """A single file or directory entry."""

    name: str
    path: str
    isDirectory: bool = False
    mtime: int = 0

    @classmethod
    def from_entry(cls, entry: Entry) -> FileEntry:
        return cls(
            name=entry.name,
            path=entry.path,
            isDirectory=entry.is_directory,
            mtime=entry.mtime,
        )


class ListingResponse(BaseModel):
    """Directory listing, newest files first."""

    path: str
    files: list[FileEntry] = []

    @classmethod
    def from_listing(cls, listing: Listing) -> ListingResponse:
        return cls(path=listing.path, files=[FileEntry.from_entry(e) for e in listing.entries])


class ContentResponse(BaseModel):
    """Text content of a single file."""

    content: str
