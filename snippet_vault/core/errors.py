"""Exceptions raised by the snippet core."""

from __future__ import annotations

from enum import Enum


class SnippetVaultError(Exception):
    """Base class for every error raised by the snippet core."""


class ValidationReason(str, Enum):
    """Why a snippet draft was rejected."""

    EMPTY_TITLE = "empty_title"
    EMPTY_CONTENT = "empty_content"


_REASON_MESSAGES = {
    ValidationReason.EMPTY_TITLE: "Title is required",
    ValidationReason.EMPTY_CONTENT: "Content is required",
}


class ValidationError(SnippetVaultError, ValueError):
    """A draft cannot be saved.  Nothing was mutated."""

    def __init__(self, reason: ValidationReason) -> None:
        super().__init__(_REASON_MESSAGES[reason])
        self.reason = reason


class NotFoundError(SnippetVaultError, LookupError):
    """No snippet has the given id."""

    def __init__(self, snippet_id: str) -> None:
        super().__init__(f"Snippet '{snippet_id}' not found")
        self.snippet_id = snippet_id


class PersistenceError(SnippetVaultError, OSError):
    """Writing to (or removing) a storage slot failed."""
