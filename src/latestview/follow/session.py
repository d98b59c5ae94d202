# Follower session state.
# Created: 2026-10-19

from __future__ import annotations

from dataclasses import dataclass, field

from latestview.directory import Entry, newest_file


@dataclass
class Session:
    """State of one follower, owned and mutated only by its controller.

    ``generation`` counts poll ticks and ``read_seq`` counts issued reads.
    ``displayed_seq`` is the sequence number of the read whose content is
    shown; a read response is applied only if it was issued after that one,
    so a failed read never hides another. A listing is applied only if no
    later tick's listing was applied.
    """

    current_path: str | None = None
    entries: list[Entry] = field(default_factory=list)
    selected_path: str | None = None
    content: str | None = None
    auto_follow_enabled: bool = True
    last_auto_loaded_path: str | None = None

    generation: int = 0
    applied_generation: int = 0
    read_seq: int = 0
    auto_read_seq: int = 0
    displayed_seq: int = 0
    pending_auto_path: str | None = None
    reads_in_flight: int = 0

    @property
    def loading(self) -> bool:
        return self.reads_in_flight > 0

    def newest_file(self) -> Entry | None:
        """Most recently modified file of the current listing."""
        return newest_file(self.entries)
