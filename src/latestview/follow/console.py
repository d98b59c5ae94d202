# Rich console view for a follower session.
# Created: 2026-10-19

from __future__ import annotations

import json
from datetime import datetime
from pathlib import PurePath

from rich.console import Console, Group
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from latestview.follow.session import Session


def _format_mtime(mtime_ms: int) -> str:
    return datetime.fromtimestamp(mtime_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def render_listing(session: Session) -> Table:
    """Listing table; the newest file carries a NEW badge."""
    newest = session.newest_file()
    table = Table(title=session.current_path or "", title_justify="left", expand=True)
    table.add_column("Name", overflow="fold")
    table.add_column("Modified", no_wrap=True)
    table.add_column("", no_wrap=True)

    for entry in session.entries:
        name = Text(entry.name + ("/" if entry.is_directory else ""))
        if entry.path == session.selected_path:
            name.stylize("bold blue")
        badge = Text("NEW", style="bold green") if newest is not None and entry is newest else ""
        table.add_row(name, _format_mtime(entry.mtime), badge)

    if not session.entries:
        table.add_row(Text("No files found", style="dim"), "", "")
    return table


def render_content(session: Session):
    """Selected file body, pretty-printed when it parses as JSON."""
    if session.selected_path is None or session.content is None:
        return Panel(Text("Nothing selected", style="dim"))
    title = PurePath(session.selected_path).name
    try:
        json.loads(session.content)
    except ValueError:
        body = Text(session.content)
    else:
        body = JSON(session.content)
    return Panel(body, title=title, title_align="left")


class ConsoleView:
    """Re-render the session whenever what is shown has changed."""

    def __init__(self, console: Console | None = None, show_listing: bool = True):
        self.console = console or Console()
        self.show_listing = show_listing
        self._last_listing: tuple | None = None
        self._last_selection: tuple | None = None

    def __call__(self, session: Session) -> None:
        listing_key = (session.current_path, tuple(session.entries))
        selection_key = (session.selected_path, session.content)
        if listing_key == self._last_listing and selection_key == self._last_selection:
            return

        parts = []
        if self.show_listing and listing_key != self._last_listing:
            parts.append(render_listing(session))
        if selection_key != self._last_selection:
            parts.append(render_content(session))
        self._last_listing = listing_key
        self._last_selection = selection_key
        self.console.print(Group(*parts))
