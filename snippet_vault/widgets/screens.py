"""Modal screens: the snippet editor form and the delete confirmation."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static, TextArea

from ..core.errors import ValidationError
from ..core.models import LANGUAGES, Snippet, SnippetDraft, validate_for_save


class SnippetEditorScreen(ModalScreen[SnippetDraft | None]):
    """New/edit form.  Dismisses with a validated draft, or None on cancel.

    Invalid input keeps the form open and shows a toast instead.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("ctrl+s", "save", "Save", show=True),
    ]

    def __init__(self, snippet: Snippet | None = None, default_lang: str = "js") -> None:
        super().__init__()
        self.snippet = snippet
        self._default_lang = default_lang

    @property
    def editing(self) -> bool:
        return self.snippet is not None

    def compose(self) -> ComposeResult:
        snippet = self.snippet
        lang = snippet.lang if snippet else self._default_lang
        langs = list(LANGUAGES)
        if lang not in langs:
            langs.append(lang)

        with Vertical(id="editor-modal"):
            yield Static("Edit Snippet" if self.editing else "New Snippet", id="editor-title")
            yield Label("Title")
            yield Input(snippet.title if snippet else "", placeholder="Title", id="title-input")
            yield Label("Language")
            yield Select(
                [(name.upper(), name) for name in langs],
                value=lang,
                allow_blank=False,
                id="lang-input",
            )
            yield Label("Tags (comma separated)")
            yield Input(snippet.tags if snippet else "", placeholder="e.g. dom, util", id="tags-input")
            yield Label("Content")
            yield TextArea(
                snippet.content if snippet else "",
                id="content-input",
                soft_wrap=False,
                show_line_numbers=True,
                tab_behavior="indent",
            )
            with Horizontal(id="editor-buttons"):
                yield Button("Save", variant="primary", id="save-btn")
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()

    def draft(self) -> SnippetDraft:
        """Current form contents, unvalidated."""
        lang = self.query_one("#lang-input", Select).value
        return SnippetDraft(
            title=self.query_one("#title-input", Input).value,
            lang=lang if isinstance(lang, str) else self._default_lang,
            tags=self.query_one("#tags-input", Input).value,
            content=self.query_one("#content-input", TextArea).text,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "save-btn":
            self.action_save()
        elif event.button.id == "cancel-btn":
            self.action_cancel()

    def action_save(self) -> None:
        try:
            draft = validate_for_save(self.draft())
        except ValidationError as exc:
            self.notify(str(exc), severity="error")
            return
        self.dismiss(draft)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question.  Dismisses with True only on an explicit yes."""

    BINDINGS = [
        Binding("escape", "answer(False)", show=False),
        Binding("y", "answer(True)", show=False),
        Binding("n", "answer(False)", show=False),
    ]

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-modal"):
            yield Static(self.question, id="confirm-question")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", id="confirm-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-yes")

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)
