"""Snippet Vault terminal UI."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Input, ListView, Select, Static, TextArea

from .core.errors import NotFoundError, SnippetVaultError
from .core.models import LANGUAGES, SnippetDraft
from .core.persistence import FileSlots, SnippetPersistence
from .core.query import filter_snippets, languages
from .core.selection import SelectionState
from .core.store import SnippetStore, StoreEvent
from .features.export import write_snippet
from .log import logger
from .platform import copy_to_clipboard
from .preferences import Preferences, load_preferences, save_dark_theme
from .theme import THEMES, theme_name
from .widgets import ConfirmScreen, SnippetEditorScreen, SnippetListItem

_VIEWER_ACTIONS = ("copy-btn", "download-btn", "edit-btn", "delete-btn")


class SnippetVaultApp(App):
    """Browse, search and edit a personal snippet collection."""

    CSS_PATH = "styles.tcss"
    TITLE = "Snippet Vault"

    BINDINGS = [
        Binding("ctrl+k", "focus_search", "Search", show=True, priority=True),
        Binding("ctrl+n", "new_snippet", "New", show=True, priority=True),
        Binding("ctrl+e", "edit_snippet", "Edit", show=True),
        Binding("ctrl+d", "delete_snippet", "Delete", show=True),
        Binding("ctrl+y", "copy_snippet", "Copy", show=True),
        Binding("ctrl+o", "download_snippet", "Download", show=False),
        Binding("f2", "toggle_theme", "Theme", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        store: SnippetStore | None = None,
        *,
        prefs: Preferences | None = None,
        prefs_path: Path | None = None,
        download_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self._prefs_path = prefs_path
        self._prefs = prefs or load_preferences(prefs_path)
        if store is None:
            slots = FileSlots(self._prefs.storage.resolve_data_dir())
            store = SnippetStore(SnippetPersistence(slots))
        self.store = store
        self.selection = SelectionState(store)
        self.selection.follow()
        self.download_dir = download_dir or Path.cwd()
        self._search_text = ""
        self._lang_filter = ""
        self._dark = self._prefs.display.dark

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Horizontal(id="main-container"):
            with Vertical(id="sidebar"):
                yield Input(placeholder="Search (Ctrl+K)", id="search-input")
                yield Select(
                    [(lang.upper(), lang) for lang in LANGUAGES],
                    prompt="All languages",
                    id="lang-filter",
                )
                yield ListView(id="snippet-list")
                yield Static("No snippets yet. Press Ctrl+N to add one.", id="empty-state")
            with Vertical(id="viewer"):
                yield Static("Select a snippet", id="viewer-title", markup=False)
                yield Static("", id="viewer-meta", markup=False)
                yield TextArea("", id="viewer-code", read_only=True, soft_wrap=False)
                with Horizontal(id="viewer-actions"):
                    yield Button("Copy", id="copy-btn", disabled=True)
                    yield Button("Download", id="download-btn", disabled=True)
                    yield Button("Edit", id="edit-btn", disabled=True)
                    yield Button("Delete", id="delete-btn", variant="error", disabled=True)
                    yield Button("Theme", id="theme-btn")
        yield Footer()

    async def on_mount(self) -> None:
        for theme in THEMES:
            self.register_theme(theme)
        self.theme = theme_name(self._dark)
        self.store.subscribe(self._on_store_event)
        self._refresh_lang_filter()
        snippets = self.store.get_all()
        if snippets:
            self.selection.select(snippets[0].id)
        await self.refresh_list()
        self.refresh_viewer()

    # ── Views ───────────────────────────────────────────────────

    def visible_snippets(self):
        return filter_snippets(self.store.get_all(), self._search_text, self._lang_filter)

    async def refresh_list(self) -> None:
        """Rebuild the list from the current search, filter and selection."""
        visible = self.visible_snippets()
        active_id = self.selection.selected_id
        list_view = self.query_one("#snippet-list", ListView)
        await list_view.clear()
        await list_view.extend(SnippetListItem(s, active=s.id == active_id) for s in visible)
        self.query_one("#empty-state", Static).display = not visible

    def refresh_viewer(self) -> None:
        snippet = self.selection.active()
        title = self.query_one("#viewer-title", Static)
        meta = self.query_one("#viewer-meta", Static)
        code = self.query_one("#viewer-code", TextArea)
        if snippet is None:
            title.update("Select a snippet")
            meta.update("")
            code.load_text("")
        else:
            title.update(snippet.title)
            saved = snippet.updated_at.astimezone().strftime("%Y-%m-%d %H:%M")
            parts = [snippet.lang.upper(), *(f"#{t}" for t in snippet.tag_list), f"Saved {saved}"]
            meta.update("  ".join(parts))
            code.load_text(snippet.content)
            code.scroll_home(animate=False)
        for button_id in _VIEWER_ACTIONS:
            self.query_one(f"#{button_id}", Button).disabled = snippet is None

    def _on_store_event(self, event: StoreEvent) -> None:
        logger.debug("store event %s %s", event.kind, event.snippet_id)
        self._refresh_lang_filter()

    def _refresh_lang_filter(self) -> None:
        """Offer any custom languages present in the collection."""
        extra = [lang for lang in languages(self.store.get_all()) if lang not in LANGUAGES]
        options = [*LANGUAGES, *extra]
        select = self.query_one("#lang-filter", Select)
        select.set_options([(lang.upper(), lang) for lang in options])
        if self._lang_filter in options:
            select.value = self._lang_filter
        else:
            self._lang_filter = ""

    async def select_snippet(self, snippet_id: str) -> None:
        try:
            self.selection.select(snippet_id)
        except NotFoundError:
            self.selection.clear()
        await self.refresh_list()
        self.refresh_viewer()

    # ── Events ──────────────────────────────────────────────────

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self._search_text = event.value
            await self.refresh_list()

    async def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "lang-filter":
            self._lang_filter = event.value if isinstance(event.value, str) else ""
            await self.refresh_list()

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        item = event.item
        if isinstance(item, SnippetListItem):
            await self.select_snippet(item.snippet_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "copy-btn": self.action_copy_snippet,
            "download-btn": self.action_download_snippet,
            "edit-btn": self.action_edit_snippet,
            "delete-btn": self.action_delete_snippet,
            "theme-btn": self.action_toggle_theme,
        }
        action = actions.get(event.button.id or "")
        if action is not None:
            action()

    # ── Actions ─────────────────────────────────────────────────

    def _on_main_screen(self) -> bool:
        return len(self.screen_stack) <= 1

    def action_focus_search(self) -> None:
        if not self._on_main_screen():
            return
        self.query_one("#search-input", Input).focus()

    def action_new_snippet(self) -> None:
        if not self._on_main_screen():
            return
        self.push_screen(
            SnippetEditorScreen(default_lang=self._prefs.editor.default_lang),
            self._save_new,
        )

    def action_edit_snippet(self) -> None:
        snippet = self.selection.active()
        if snippet is None or not self._on_main_screen():
            return
        editing_id = snippet.id

        async def save_edit(draft: SnippetDraft | None) -> None:
            if draft is None:
                return
            try:
                self.store.update(editing_id, draft)
            except SnippetVaultError as exc:
                self.notify(str(exc), severity="error")
                return
            self.notify("Snippet updated")
            await self.select_snippet(editing_id)

        self.push_screen(SnippetEditorScreen(snippet), save_edit)

    async def _save_new(self, draft: SnippetDraft | None) -> None:
        if draft is None:
            return
        try:
            snippet = self.store.create(draft)
        except SnippetVaultError as exc:
            self.notify(str(exc), severity="error")
            return
        self.notify("Snippet saved")
        await self.select_snippet(snippet.id)

    def action_delete_snippet(self) -> None:
        snippet = self.selection.active()
        if snippet is None or not self._on_main_screen():
            return
        doomed_id = snippet.id

        async def confirmed(answer: bool | None) -> None:
            if not answer:
                return
            try:
                self.store.delete(doomed_id)
            except SnippetVaultError as exc:
                self.notify(str(exc), severity="error")
                return
            # The selection follows the store, so it is already cleared.
            await self.refresh_list()
            self.refresh_viewer()
            self.notify("Snippet deleted")

        self.push_screen(ConfirmScreen("Delete this snippet? This cannot be undone."), confirmed)

    def action_copy_snippet(self) -> None:
        snippet = self.selection.active()
        if snippet is None or not self._on_main_screen():
            return
        if copy_to_clipboard(snippet.content):
            self.notify("Copied to clipboard")
        else:
            self.notify("Copy failed, try manually", severity="warning")

    def action_download_snippet(self) -> None:
        snippet = self.selection.active()
        if snippet is None or not self._on_main_screen():
            return
        try:
            path = write_snippet(snippet, self.download_dir)
        except OSError as exc:
            logger.debug("download of %s failed", snippet.id, exc_info=True)
            self.notify(f"Download failed: {exc}", severity="error")
            return
        self.notify(f"Saved to {path}")

    def action_toggle_theme(self) -> None:
        self._dark = not self._dark
        self.theme = theme_name(self._dark)
        self._prefs.display.dark = self._dark
        save_dark_theme(self._dark, self._prefs_path)


def run_app(data_dir: Path | None = None) -> None:
    """Run the Snippet Vault application."""
    prefs = load_preferences()
    if data_dir is not None:
        prefs.storage.data_dir = str(data_dir)
    app = SnippetVaultApp(prefs=prefs)
    app.run()
