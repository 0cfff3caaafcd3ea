"""Which snippet, if any, is shown in the detail view."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .errors import NotFoundError
from .models import Snippet
from .store import SnippetStore, StoreEvent


@dataclass(frozen=True)
class NoSelection:
    """Nothing is selected."""


@dataclass(frozen=True)
class Selected:
    """The snippet with ``snippet_id`` is active."""

    snippet_id: str


SelectionValue = NoSelection | Selected

NO_SELECTION = NoSelection()


class SelectionState:
    """Single-selection state machine over a :class:`SnippetStore`.

    The store knows nothing about selection.  Call :meth:`follow` to have
    deletions clear the selection automatically; otherwise whoever deletes
    the active snippet must call :meth:`clear`.
    """

    def __init__(self, store: SnippetStore) -> None:
        self._store = store
        self._state: SelectionValue = NO_SELECTION
        self._unsubscribe: Callable[[], None] | None = None

    def current(self) -> SelectionValue:
        return self._state

    @property
    def selected_id(self) -> str | None:
        return self._state.snippet_id if isinstance(self._state, Selected) else None

    def active(self) -> Snippet | None:
        """The selected snippet, or None."""
        snippet_id = self.selected_id
        return self._store.get_by_id(snippet_id) if snippet_id is not None else None

    def select(self, snippet_id: str) -> Selected:
        """Make *snippet_id* active.

        Raises:
            NotFoundError: the store has no such snippet; state is unchanged.
        """
        if self._store.get_by_id(snippet_id) is None:
            raise NotFoundError(snippet_id)
        self._state = Selected(snippet_id)
        return self._state

    def clear(self) -> None:
        self._state = NO_SELECTION

    # -- store coupling -------------------------------------------------------

    def follow(self) -> None:
        """Subscribe to the store so deleting the active snippet clears it."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_store_event)

    def unfollow(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_store_event(self, event: StoreEvent) -> None:
        if event.kind == "cleared" or (
            event.kind == "deleted" and event.snippet_id == self.selected_id
        ):
            self.clear()
