"""Snippet Vault: a personal, searchable store of code snippets."""

__version__ = "0.1.0"
