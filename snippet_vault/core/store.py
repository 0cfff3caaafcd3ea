"""The snippet store: sole owner and mutator of the collection.

Every mutation follows the same sequence: compute the new collection,
persist it, and only then swap it in and notify subscribers.  A validation
failure stops before anything is touched; a persistence failure propagates
and leaves the in-memory collection as it was.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime

from .errors import NotFoundError
from .models import Snippet, SnippetDraft, truncate_to_millis, utc_now, validate_for_save
from .persistence import SnippetPersistence
from ..log import logger

_MAX_ID_ATTEMPTS = 100


def new_snippet_id() -> str:
    """Random opaque id, e.g. ``s_3f9a1c0b7d2e``."""
    return "s_" + uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class StoreEvent:
    """Emitted to subscribers after a mutation has been persisted."""

    kind: str  # "created", "updated", "deleted" or "cleared"
    snippet_id: str | None = None


StoreListener = Callable[[StoreEvent], None]


class SnippetStore:
    """Ordered snippet collection, newest first."""

    def __init__(
        self,
        persistence: SnippetPersistence,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        initial: Iterable[Snippet] | None = None,
    ) -> None:
        self._persistence = persistence
        self._clock = clock or utc_now
        self._id_factory = id_factory or new_snippet_id
        self._snippets: list[Snippet] = list(initial) if initial is not None else persistence.load()
        self._listeners: list[StoreListener] = []
        logger.debug("store opened with %d snippet(s)", len(self._snippets))

    # -- queries --------------------------------------------------------------

    def get_all(self) -> list[Snippet]:
        """Snapshot of the collection in display order."""
        return list(self._snippets)

    def get_by_id(self, snippet_id: str) -> Snippet | None:
        for snippet in self._snippets:
            if snippet.id == snippet_id:
                return snippet
        return None

    def __len__(self) -> int:
        return len(self._snippets)

    def __contains__(self, snippet_id: object) -> bool:
        return any(s.id == snippet_id for s in self._snippets)

    # -- mutations ------------------------------------------------------------

    def create(self, fields: SnippetDraft | Mapping[str, object]) -> Snippet:
        """Validate *fields* and add a new snippet at the front.

        Raises:
            ValidationError: title or content is empty.
        """
        draft = validate_for_save(fields)
        now = self._now()
        snippet = Snippet(
            id=self._fresh_id(),
            title=draft.title,
            lang=draft.lang,
            tags=draft.tags,
            content=draft.content,
            created_at=now,
            updated_at=now,
        )
        self._commit([snippet, *self._snippets])
        logger.debug("created snippet %s", snippet.id)
        self._emit(StoreEvent("created", snippet.id))
        return snippet

    def update(self, snippet_id: str, fields: SnippetDraft | Mapping[str, object]) -> Snippet:
        """Replace the editable fields of an existing snippet in place.

        Raises:
            NotFoundError: no snippet has *snippet_id*.
            ValidationError: title or content is empty.
        """
        index = self._index_of(snippet_id)
        if index is None:
            raise NotFoundError(snippet_id)
        draft = validate_for_save(fields)
        current = self._snippets[index]
        updated = replace(
            current,
            title=draft.title,
            lang=draft.lang,
            tags=draft.tags,
            content=draft.content,
            # A clock that steps backwards must not break updated >= created.
            updated_at=max(self._now(), current.updated_at),
        )
        snippets = list(self._snippets)
        snippets[index] = updated
        self._commit(snippets)
        logger.debug("updated snippet %s", snippet_id)
        self._emit(StoreEvent("updated", snippet_id))
        return updated

    def delete(self, snippet_id: str) -> bool:
        """Remove a snippet.  Unknown ids are ignored.

        Returns True when something was removed.
        """
        index = self._index_of(snippet_id)
        if index is None:
            return False
        self._commit(self._snippets[:index] + self._snippets[index + 1 :])
        logger.debug("deleted snippet %s", snippet_id)
        self._emit(StoreEvent("deleted", snippet_id))
        return True

    def clear_all(self) -> None:
        """Drop every snippet and the stored copy."""
        self._persistence.clear()
        self._snippets = []
        logger.info("cleared all snippets")
        self._emit(StoreEvent("cleared"))

    # -- notifications --------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Call *listener* after every committed mutation.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # -- internals ------------------------------------------------------------

    def _commit(self, snippets: list[Snippet]) -> None:
        self._persistence.save(snippets)
        self._snippets = snippets

    def _index_of(self, snippet_id: str) -> int | None:
        for i, snippet in enumerate(self._snippets):
            if snippet.id == snippet_id:
                return i
        return None

    def _now(self) -> datetime:
        return truncate_to_millis(self._clock())

    def _fresh_id(self) -> str:
        taken = {s.id for s in self._snippets}
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in taken:
                return candidate
            logger.debug("id collision on %r, regenerating", candidate)
        raise RuntimeError(f"could not generate a unique snippet id in {_MAX_ID_ATTEMPTS} attempts")
