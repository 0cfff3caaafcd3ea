"""Filtering the collection for display.

Pure functions: nothing here mutates the collection or reorders it.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Snippet


def matches(snippet: Snippet, search_text: str = "", lang_filter: str = "") -> bool:
    """True when *snippet* passes the language filter and the text search."""
    if lang_filter and snippet.lang != lang_filter:
        return False
    query = search_text.strip().lower()
    if not query:
        return True
    return (
        query in snippet.title.lower()
        or query in snippet.tags.lower()
        or query in snippet.content.lower()
    )


def filter_snippets(
    collection: Iterable[Snippet],
    search_text: str = "",
    lang_filter: str = "",
) -> list[Snippet]:
    """Return the snippets matching *search_text* and *lang_filter*, in order.

    *search_text* is trimmed and matched case-insensitively as a substring of
    the title, the joined tags or the content; blank text matches everything.
    A non-empty *lang_filter* keeps only snippets with exactly that language.
    """
    search_text = search_text or ""
    lang_filter = lang_filter or ""
    return [s for s in collection if matches(s, search_text, lang_filter)]


def languages(collection: Iterable[Snippet]) -> list[str]:
    """Distinct languages in the collection, in first-seen order."""
    seen: dict[str, None] = {}
    for snippet in collection:
        seen.setdefault(snippet.lang, None)
    return list(seen)
