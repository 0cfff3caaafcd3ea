"""Widget and screen classes used by the app."""

from .screens import ConfirmScreen, SnippetEditorScreen
from .snippet_list import SnippetListItem

__all__ = ["ConfirmScreen", "SnippetEditorScreen", "SnippetListItem"]
