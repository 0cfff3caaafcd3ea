"""Persistence layer: slots hold strings, stores own the data format."""

from ._base import FileSlots, JsonStore, KeyValueSlots, MemorySlots
from .snippets import SNIPPETS_KEY, SnippetPersistence

__all__ = [
    "FileSlots",
    "JsonStore",
    "KeyValueSlots",
    "MemorySlots",
    "SNIPPETS_KEY",
    "SnippetPersistence",
]
