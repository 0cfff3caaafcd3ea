"""Shared test fixtures for the snippet-vault test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from snippet_vault.core.persistence import FileSlots, MemorySlots, SnippetPersistence
from snippet_vault.core.store import SnippetStore


class FakeClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.step = timedelta(seconds=1)

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def slots() -> MemorySlots:
    return MemorySlots()


@pytest.fixture
def persistence(slots: MemorySlots) -> SnippetPersistence:
    return SnippetPersistence(slots)


@pytest.fixture
def store(persistence: SnippetPersistence, clock: FakeClock) -> SnippetStore:
    return SnippetStore(persistence, clock=clock)


@pytest.fixture
def file_persistence(tmp_path: Path) -> SnippetPersistence:
    return SnippetPersistence(FileSlots(tmp_path / "data"))


@pytest.fixture
def sample_fields():
    """Draft fields for a handful of snippets, oldest first."""
    return [
        {"title": "Debounce", "lang": "js", "tags": "util, timing", "content": "function debounce(fn) {}"},
        {"title": "Center a div", "lang": "css", "tags": "layout", "content": ".c { display: grid; place-items: center; }"},
        {"title": "Read JSON", "lang": "python", "tags": "io,json", "content": "json.loads(path.read_text())"},
        {"title": "Boilerplate", "lang": "html", "tags": "", "content": "<!doctype html>\n<html></html>\n"},
    ]


@pytest.fixture
def populated_store(store: SnippetStore, sample_fields) -> SnippetStore:
    for fields in sample_fields:
        store.create(fields)
    return store
