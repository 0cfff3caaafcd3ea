"""Storage slots and the base JSON store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from ..errors import PersistenceError
from ...log import logger


class KeyValueSlots(Protocol):
    """Durable string values addressed by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class FileSlots:
    """One ``<key>.json`` file per key under *root*.

    Reads that fail are reported as an absent slot.  Writes go to a temporary
    file that is then renamed over the target, so a crash mid-write leaves
    the previous value intact.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            if path.exists():
                return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("failed to read slot %s", path, exc_info=True)
        return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except (OSError, UnicodeError) as exc:
            raise PersistenceError(f"failed to write {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"failed to remove {path}: {exc}") from exc


class MemorySlots:
    """Dict-backed slots (nothing survives the process)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonStore:
    """A JSON document kept in a single slot.

    Subclasses override ``_default()`` to provide the empty-state value
    (``{}`` for dicts, ``[]`` for lists).
    """

    def __init__(self, slots: KeyValueSlots, key: str) -> None:
        self.slots = slots
        self.key = key

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict | list:
        """Read and parse the slot, returning ``_default()`` when absent or invalid."""
        raw = self.slots.get(self.key)
        if raw is None:
            return self._default()
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, RecursionError):
            logger.warning("slot %r does not hold valid JSON; ignoring it", self.key)
            logger.debug("invalid JSON in slot %r", self.key, exc_info=True)
        return self._default()

    def save_raw(self, data: dict | list) -> None:
        """Write *data* as pretty-printed JSON, replacing the slot."""
        self.slots.set(self.key, json.dumps(data, indent=2, ensure_ascii=False))

    def remove(self) -> None:
        self.slots.remove(self.key)

    # -- override point -------------------------------------------------------

    def _default(self) -> dict | list:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
