"""Snippet collection persistence."""

from __future__ import annotations

from collections.abc import Iterable

from ._base import JsonStore, KeyValueSlots
from ..models import Snippet
from ...log import logger

SNIPPETS_KEY = "snippetVault_v1"


class SnippetPersistence(JsonStore):
    """The whole snippet collection as one JSON array in one slot."""

    def __init__(self, slots: KeyValueSlots, key: str = SNIPPETS_KEY) -> None:
        super().__init__(slots, key)

    def _default(self) -> list:  # type: ignore[override]  # noqa: PLR6301
        return []

    def load(self) -> list[Snippet]:
        """Load the stored collection.

        Anything that is not a valid collection (wrong shape, bad entry,
        duplicate id) is treated as if nothing were stored.
        """
        raw = self.load_raw()
        if not isinstance(raw, list):
            logger.warning("slot %r is not a snippet list; starting empty", self.key)
            return []
        snippets: list[Snippet] = []
        seen: set[str] = set()
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                logger.warning("entry %d in slot %r is not an object; starting empty", index, self.key)
                return []
            try:
                snippet = Snippet.from_dict(entry)
            except ValueError as exc:
                logger.warning("entry %d in slot %r is invalid (%s); starting empty", index, self.key, exc)
                return []
            if snippet.id in seen:
                logger.warning("duplicate snippet id %r in slot %r; starting empty", snippet.id, self.key)
                return []
            seen.add(snippet.id)
            snippets.append(snippet)
        return snippets

    def save(self, snippets: Iterable[Snippet]) -> None:
        """Persist the full collection, overwriting what was there."""
        self.save_raw([s.to_dict() for s in snippets])

    def clear(self) -> None:
        """Forget the stored collection."""
        self.remove()
