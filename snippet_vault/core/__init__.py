"""Snippet core: entity, persistence, store, query and selection."""

from .errors import (
    NotFoundError,
    PersistenceError,
    SnippetVaultError,
    ValidationError,
    ValidationReason,
)
from .models import LANGUAGES, Snippet, SnippetDraft, normalize_tags, validate_for_save
from .persistence import FileSlots, MemorySlots, SnippetPersistence
from .query import filter_snippets, languages
from .selection import NO_SELECTION, NoSelection, Selected, SelectionState
from .store import SnippetStore, StoreEvent

__all__ = [
    "FileSlots",
    "LANGUAGES",
    "MemorySlots",
    "NO_SELECTION",
    "NoSelection",
    "NotFoundError",
    "PersistenceError",
    "Selected",
    "SelectionState",
    "Snippet",
    "SnippetDraft",
    "SnippetPersistence",
    "SnippetStore",
    "SnippetVaultError",
    "StoreEvent",
    "ValidationError",
    "ValidationReason",
    "filter_snippets",
    "languages",
    "normalize_tags",
    "validate_for_save",
]
