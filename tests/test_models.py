"""Tests for snippet_vault.core.models -- entity shape and draft validation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from snippet_vault.core.errors import ValidationError, ValidationReason
from snippet_vault.core.models import (
    DEFAULT_LANG,
    Snippet,
    SnippetDraft,
    format_timestamp,
    normalize_tags,
    parse_timestamp,
    split_tags,
    validate_for_save,
)


def _snippet(**overrides) -> Snippet:
    ts = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    values = dict(
        id="s_abc",
        title="Hi",
        lang="js",
        tags="a,b",
        content="console.log(1)",
        created_at=ts,
        updated_at=ts,
    )
    values.update(overrides)
    return Snippet(**values)


# -- tags --------------------------------------------------------------------


class TestNormalizeTags:
    def test_trims_and_joins(self):
        assert normalize_tags("a, b ,b") == "a,b,b"

    def test_drops_empty_entries(self):
        assert normalize_tags(" , a,, ,b, ") == "a,b"

    def test_keeps_order_and_duplicates(self):
        assert normalize_tags("z,a,z") == "z,a,z"

    def test_empty(self):
        assert normalize_tags("") == ""
        assert normalize_tags("  ,  ") == ""
        assert normalize_tags(None) == ""

    def test_sequence_input(self):
        assert normalize_tags([" a ", "", "b,c"]) == "a,b,c"

    def test_split_tags(self):
        assert split_tags("a,b,b") == ["a", "b", "b"]
        assert split_tags("") == []


# -- validate_for_save -------------------------------------------------------


class TestValidateForSave:
    def test_valid_draft_normalized(self):
        draft = validate_for_save(
            {"title": "  Hi  ", "lang": "js", "tags": "a, b ,b", "content": "console.log(1)"}
        )
        assert draft == SnippetDraft(title="Hi", lang="js", tags="a,b,b", content="console.log(1)")

    def test_empty_title(self):
        with pytest.raises(ValidationError) as info:
            validate_for_save({"title": "", "content": "x"})
        assert info.value.reason is ValidationReason.EMPTY_TITLE

    def test_whitespace_title(self):
        with pytest.raises(ValidationError) as info:
            validate_for_save(SnippetDraft(title="   ", content="x"))
        assert info.value.reason is ValidationReason.EMPTY_TITLE

    def test_empty_content(self):
        with pytest.raises(ValidationError) as info:
            validate_for_save({"title": "T", "content": ""})
        assert info.value.reason is ValidationReason.EMPTY_CONTENT

    def test_title_checked_before_content(self):
        with pytest.raises(ValidationError) as info:
            validate_for_save({"title": "", "content": ""})
        assert info.value.reason is ValidationReason.EMPTY_TITLE

    def test_whitespace_content_is_kept(self):
        draft = validate_for_save({"title": "T", "content": "  \n\tx  \n"})
        assert draft.content == "  \n\tx  \n"

    def test_whitespace_only_content_is_allowed(self):
        assert validate_for_save({"title": "T", "content": "   "}).content == "   "

    def test_missing_lang_defaults(self):
        assert validate_for_save({"title": "T", "content": "x"}).lang == DEFAULT_LANG

    def test_any_lang_accepted(self):
        assert validate_for_save({"title": "T", "lang": "cobol", "content": "x"}).lang == "cobol"

    def test_explicit_empty_lang_kept(self):
        assert validate_for_save({"title": "T", "lang": "", "content": "x"}).lang == ""
        assert SnippetDraft.from_mapping({"lang": ""}).lang == SnippetDraft(lang="").lang

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_for_save({"title": "", "content": "x"})


# -- timestamps ----------------------------------------------------------------


class TestTimestamps:
    def test_format_uses_z_and_millis(self):
        ts = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2024-01-02T03:04:05.678Z"

    def test_format_converts_to_utc(self):
        ts = datetime(2024, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(ts) == "2024-01-02T03:00:00.000Z"

    def test_parse_z_suffix(self):
        assert parse_timestamp("2024-01-02T03:04:05.678Z") == datetime(
            2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc
        )

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")

    def test_parse_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("0001-01-01T00:00:00+01:00")


# -- Snippet ---------------------------------------------------------------------


class TestSnippet:
    def test_to_dict_layout(self):
        assert _snippet().to_dict() == {
            "id": "s_abc",
            "title": "Hi",
            "lang": "js",
            "tags": "a,b",
            "content": "console.log(1)",
            "createdAt": "2024-01-02T03:04:05.678Z",
            "updatedAt": "2024-01-02T03:04:05.678Z",
        }

    def test_from_dict_inverse(self):
        s = _snippet()
        assert Snippet.from_dict(s.to_dict()) == s

    def test_from_dict_missing_tags_defaults_empty(self):
        data = _snippet().to_dict()
        del data["tags"]
        assert Snippet.from_dict(data).tags == ""

    @pytest.mark.parametrize("field", ["id", "title", "lang", "content", "createdAt", "updatedAt"])
    def test_from_dict_requires_field(self, field):
        data = _snippet().to_dict()
        del data[field]
        with pytest.raises(ValueError):
            Snippet.from_dict(data)

    def test_from_dict_rejects_non_string(self):
        data = _snippet().to_dict()
        data["title"] = 42
        with pytest.raises(ValueError):
            Snippet.from_dict(data)

    def test_from_dict_rejects_empty_content(self):
        data = _snippet().to_dict()
        data["content"] = ""
        with pytest.raises(ValueError):
            Snippet.from_dict(data)

    def test_from_dict_rejects_updated_before_created(self):
        data = _snippet().to_dict()
        data["updatedAt"] = "2020-01-01T00:00:00.000Z"
        with pytest.raises(ValueError):
            Snippet.from_dict(data)

    def test_tag_list(self):
        assert _snippet(tags="x,y,x").tag_list == ["x", "y", "x"]

    def test_frozen(self):
        with pytest.raises(AttributeError):
            _snippet().title = "changed"  # type: ignore[misc]
