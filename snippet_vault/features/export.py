"""Writing snippets out to files.

Pure helpers plus one writer; no app state.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path

from ..core.models import Snippet

_EXTENSIONS: dict[str, str] = {
    "js": "js",
    "ts": "ts",
    "html": "html",
    "css": "css",
    "python": "py",
}

_UNSAFE = re.compile(r"[^\w-]", re.ASCII)


def extension_for(lang: str) -> str:
    """File extension for a snippet language (``txt`` when unknown)."""
    return _EXTENSIONS.get(lang, "txt")


def export_filename(snippet: Snippet) -> str:
    """Download filename: the title made filesystem-safe plus an extension.

    A js snippet titled ``Hello world!`` becomes ``Hello_world_.js``.
    """
    stem = _UNSAFE.sub("_", snippet.title) or "snippet"
    return f"{stem}.{extension_for(snippet.lang)}"


def write_snippet(snippet: Snippet, directory: Path) -> Path:
    """Write *snippet*'s content to *directory* and return the file path.

    The content is written verbatim; an existing file of the same name is
    overwritten.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(snippet)
    path.write_text(snippet.content, encoding="utf-8", newline="")
    return path


def export_json(snippets: Iterable[Snippet]) -> str:
    """The collection in its stored JSON layout (for backups)."""
    return json.dumps([s.to_dict() for s in snippets], indent=2, ensure_ascii=False)
