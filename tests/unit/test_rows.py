"""Tests for entry-type and entry rows."""

from collections.abc import Callable

import pytest

from bibsql.models import BibEntry, EntryType
from bibsql.sql.literals import escape_value, value_literal
from bibsql.sql.rows import (
    FieldRole,
    emit_entry_rows,
    emit_entry_type_rows,
    entry_row,
    entry_type_roles,
)

_FIELDS = ("author", "title", "editor")

# ---------------------------------------------------------------------------
# Role coding
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_article_and_book_roles(article: EntryType, book: EntryType) -> None:
    """Each slot holds the field's role for the type, or None."""
    assert entry_type_roles(article, _FIELDS) == [FieldRole.REQUIRED, FieldRole.REQUIRED, None]
    assert entry_type_roles(book, _FIELDS) == [None, FieldRole.REQUIRED, FieldRole.OPTIONAL]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("roles", "expected"),
    [
        pytest.param({"required": ("f",), "optional": ("f",)}, "opt", id="optional_over_required"),
        pytest.param({"optional": ("f",), "general": ("f",)}, "gen", id="general_over_optional"),
        pytest.param({"general": ("f",), "utility": ("f",)}, "uti", id="utility_over_general"),
        pytest.param(
            {"required": ("f",), "optional": ("f",), "general": ("f",), "utility": ("f",)},
            "uti",
            id="utility_over_all",
        ),
        pytest.param({"required": ("f",), "general": ("f",)}, "gen", id="general_over_required"),
    ],
)
def test_last_role_swept_wins(roles: dict, expected: str) -> None:
    """A field listed under several roles keeps the last one swept."""
    entry_type = EntryType(name="T", **roles)

    assert entry_type_roles(entry_type, ("f",)) == [FieldRole(expected)]


@pytest.mark.unit
def test_roles_match_field_list_width(article: EntryType) -> None:
    """Exactly one slot per field, each a role or None."""
    fields = ("a", "author", "b", "title", "c")
    roles = entry_type_roles(article, fields)

    assert len(roles) == len(fields)
    assert all(role is None or isinstance(role, FieldRole) for role in roles)


@pytest.mark.unit
def test_unknown_role_field_is_ignored() -> None:
    """A role-list field missing from the field list is skipped."""
    entry_type = EntryType(name="T", required=("title", "ghost"))

    assert entry_type_roles(entry_type, ("title",)) == [FieldRole.REQUIRED]


@pytest.mark.unit
def test_entry_type_rows(article: EntryType, book: EntryType) -> None:
    """Labels are lowercased; absent roles are NULL."""
    rows = emit_entry_type_rows([article, book], _FIELDS)

    assert rows == [
        'INSERT INTO entry_types (label, author, title, editor) VALUES ("article", "req", "req", NULL);',
        'INSERT INTO entry_types (label, author, title, editor) VALUES ("book", NULL, "req", "opt");',
    ]


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_escape_only_double_quotes() -> None:
    """Double quotes gain a backslash; nothing else changes."""
    assert escape_value('He said "hi"') == r"He said \"hi\""
    assert escape_value("back\\slash\ttab\nline") == "back\\slash\ttab\nline"
    assert escape_value("it's") == "it's"


@pytest.mark.unit
def test_value_literal() -> None:
    """None renders as NULL, strings are quoted."""
    assert value_literal(None) == "NULL"
    assert value_literal("") == '""'
    assert value_literal('"') == r'"\""'


# ---------------------------------------------------------------------------
# Entry rows
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_entry_row_values_in_field_order(make_entry: Callable[..., BibEntry]) -> None:
    """Values follow the field list; missing fields are NULL."""
    entry = make_entry("e1", cite_key="Doe2020", title="Study", author="Doe")

    assert entry_row(entry, _FIELDS) == (
        "INSERT INTO entries (jabref_eid, entry_types_id, cite_key, author, title, editor) "
        'VALUES ("e1", '
        '(SELECT entry_types_id FROM entry_types WHERE label="article"), '
        '"Doe2020", "Doe", "Study", NULL);'
    )


@pytest.mark.unit
def test_entry_row_escapes_values(make_entry: Callable[..., BibEntry]) -> None:
    """Quotes inside values are escaped in the row."""
    entry = make_entry(title='He said "hi"')

    assert r'"He said \"hi\""' in entry_row(entry, _FIELDS)


@pytest.mark.unit
def test_entry_row_absent_cite_key_and_none_value(make_entry: Callable[..., BibEntry]) -> None:
    """A missing cite key and an explicit None value both render NULL."""
    entry = make_entry("e9", author=None)

    row = entry_row(entry, ("author",))

    assert row.endswith('VALUES ("e9", (SELECT entry_types_id FROM entry_types WHERE label="article"), NULL, NULL);')


@pytest.mark.unit
def test_entry_rows_keep_given_order(make_entry: Callable[..., BibEntry]) -> None:
    """Rows are not re-sorted."""
    entries = [make_entry("z"), make_entry("a"), make_entry("m")]

    rows = emit_entry_rows(entries, _FIELDS)

    assert [row.split('VALUES ("')[1].split('"')[0] for row in rows] == ["z", "a", "m"]


@pytest.mark.unit
def test_fields_outside_schema_are_not_exported(make_entry: Callable[..., BibEntry]) -> None:
    """Only fields in the field list produce values."""
    entry = make_entry(author="Doe", comment="private")

    row = entry_row(entry, ("author",))

    assert "private" not in row
    assert "comment" not in row
