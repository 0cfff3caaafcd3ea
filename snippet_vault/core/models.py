"""Snippet entity and draft validation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from .errors import ValidationError, ValidationReason

DEFAULT_LANG = "plain"

# Languages offered by the filter and the editor form.  The store itself
# accepts any string.
LANGUAGES: tuple[str, ...] = ("js", "ts", "html", "css", "python", "plain")


def normalize_tags(tags: str | Sequence[str] | None) -> str:
    """Return the canonical comma-joined form of *tags*.

    Entries are trimmed and empty ones dropped.  Order and duplicates are
    kept: ``"a, b ,b"`` becomes ``"a,b,b"``.
    """
    if not tags:
        return ""
    if isinstance(tags, str):
        parts = tags.split(",")
    else:
        parts = [p for tag in tags for p in str(tag).split(",")]
    return ",".join(p.strip() for p in parts if p.strip())


def split_tags(tags: str) -> list[str]:
    """Split a stored tag string into its entries."""
    return [t.strip() for t in tags.split(",") if t.strip()] if tags else []


def utc_now() -> datetime:
    """Current UTC time at millisecond precision."""
    return truncate_to_millis(datetime.now(timezone.utc))


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision (the stored timestamp format has none).

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a ``Z`` suffix."""
    value = truncate_to_millis(value).astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Inverse of :func:`format_timestamp`; also accepts explicit offsets.

    Raises ``ValueError`` for anything that is not an ISO-8601 timestamp,
    including ones that fall outside the representable range once in UTC.
    """
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return truncate_to_millis(datetime.fromisoformat(text)).astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {text!r}") from exc


@dataclass(frozen=True)
class SnippetDraft:
    """User-editable snippet fields, as submitted by a form."""

    title: str = ""
    lang: str = DEFAULT_LANG
    tags: str = ""
    content: str = ""

    @classmethod
    def from_mapping(cls, fields: Mapping[str, object]) -> SnippetDraft:
        tags = fields.get("tags") or ""
        lang = fields.get("lang")
        return cls(
            title=str(fields.get("title") or ""),
            lang=DEFAULT_LANG if lang is None else str(lang),
            tags=tags if isinstance(tags, str) else normalize_tags(tags),  # type: ignore[arg-type]
            content=str(fields.get("content") or ""),
        )


@dataclass(frozen=True)
class Snippet:
    """A stored snippet.  Instances are immutable; edits produce new ones."""

    id: str
    title: str
    lang: str
    tags: str
    content: str
    created_at: datetime
    updated_at: datetime

    @property
    def tag_list(self) -> list[str]:
        return split_tags(self.tags)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the on-disk object layout."""
        return {
            "id": self.id,
            "title": self.title,
            "lang": self.lang,
            "tags": self.tags,
            "content": self.content,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Snippet:
        """Build a snippet from its on-disk object.

        Raises ``ValueError`` when a field is missing, has the wrong type, or
        breaks an entity invariant.
        """
        values: dict[str, str] = {}
        for key in ("id", "title", "lang", "content", "createdAt", "updatedAt"):
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string")
            values[key] = value
        tags = data.get("tags") or ""
        if not isinstance(tags, str):
            raise ValueError("field 'tags' must be a string")
        if not values["id"]:
            raise ValueError("empty id")
        if not values["title"].strip() or not values["content"]:
            raise ValueError(f"snippet {values['id']!r} has no title or content")

        created_at = parse_timestamp(values["createdAt"])
        updated_at = parse_timestamp(values["updatedAt"])
        if updated_at < created_at:
            raise ValueError(f"snippet {values['id']!r} updated before it was created")
        return cls(
            id=values["id"],
            title=values["title"],
            lang=values["lang"],
            tags=tags,
            content=values["content"],
            created_at=created_at,
            updated_at=updated_at,
        )


def validate_for_save(fields: SnippetDraft | Mapping[str, object]) -> SnippetDraft:
    """Check and normalize a draft before it is stored.

    The title is trimmed and must not end up empty; content must not be
    empty (whitespace is significant and kept as-is); tags are put in
    canonical form.  Raises :class:`ValidationError` otherwise.
    """
    draft = fields if isinstance(fields, SnippetDraft) else SnippetDraft.from_mapping(fields)
    title = draft.title.strip()
    if not title:
        raise ValidationError(ValidationReason.EMPTY_TITLE)
    if not draft.content:
        raise ValidationError(ValidationReason.EMPTY_CONTENT)
    return SnippetDraft(
        title=title,
        lang=draft.lang,
        tags=normalize_tags(draft.tags),
        content=draft.content,
    )
