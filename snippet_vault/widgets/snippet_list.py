"""List rows for the snippet sidebar."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Label, ListItem

from ..core.models import Snippet


def summary_line(snippet: Snippet) -> str:
    """``JS · a, b`` style subtitle shown under each title."""
    tags = ", ".join(snippet.tag_list) or "no tags"
    return f"{snippet.lang.upper()} · {tags}"


class SnippetListItem(ListItem):
    """One snippet in the list; remembers which snippet it shows."""

    def __init__(self, snippet: Snippet, active: bool = False) -> None:
        super().__init__(classes="snippet-item active" if active else "snippet-item")
        self.snippet_id = snippet.id
        self._title = snippet.title
        self._summary = summary_line(snippet)

    def compose(self) -> ComposeResult:
        yield Label(self._title, classes="snippet-title", markup=False)
        yield Label(self._summary, classes="snippet-sub", markup=False)
