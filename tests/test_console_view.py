# Tests for the Rich console view.
# Created: 2026-10-19

from rich.console import Console

from latestview.directory import Entry
from latestview.follow.console import ConsoleView, render_content, render_listing
from latestview.follow.session import Session


def _session(**kwargs):
    defaults = {
        "current_path": "/data",
        "entries": [
            Entry("sub", "/data/sub", True, 3_000),
            Entry("new.json", "/data/new.json", False, 2_000),
            Entry("old.json", "/data/old.json", False, 1_000),
        ],
    }
    defaults.update(kwargs)
    return Session(**defaults)


def _render(renderable) -> str:
    console = Console(record=True, width=100)
    console.print(renderable)
    return console.export_text()


class TestRenderListing:
    def test_new_badge_on_newest_file_only(self):
        text = _render(render_listing(_session()))
        lines = [line for line in text.splitlines() if "NEW" in line]
        assert len(lines) == 1
        assert "new.json" in lines[0]

    def test_directories_have_slash(self):
        assert "sub/" in _render(render_listing(_session()))

    def test_empty_listing(self):
        assert "No files found" in _render(render_listing(_session(entries=[])))


class TestRenderContent:
    def test_nothing_selected(self):
        assert "Nothing selected" in _render(render_content(_session()))

    def test_json_content(self):
        session = _session(selected_path="/data/new.json", content='{"total": 3}')
        text = _render(render_content(session))
        assert "new.json" in text
        assert '"total": 3' in text

    def test_plain_text_content(self):
        session = _session(selected_path="/data/notes.txt", content="not json at all")
        assert "not json at all" in _render(render_content(session))


class TestConsoleView:
    def test_prints_only_on_change(self):
        console = Console(record=True, width=100)
        view = ConsoleView(console=console)
        session = _session()

        view(session)
        first = console.export_text()
        assert "new.json" in first

        view(session)
        assert console.export_text() == ""

        session.selected_path = "/data/new.json"
        session.content = "hello"
        view(session)
        assert "hello" in console.export_text()
