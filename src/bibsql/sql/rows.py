"""INSERT statements for the ``entry_types`` and ``entries`` tables.

Row values are aligned with schema columns by position only, so both
emitters take the same ordered field list the schema was built from.
"""

from collections.abc import Iterable, Sequence
from enum import StrEnum

from bibsql.models import BibEntry, EntryType
from bibsql.sql.fields import role_lists
from bibsql.sql.literals import NULL, quote, value_literal

__all__ = [
    "FieldRole",
    "emit_entry_rows",
    "emit_entry_type_rows",
    "entry_row",
    "entry_type_roles",
    "entry_type_row",
]


class FieldRole(StrEnum):
    """Role codes stored in the per-field columns of ``entry_types``.

    Declaration order is the sweep order; a later role overwrites an
    earlier one for the same field.
    """

    REQUIRED = "req"
    OPTIONAL = "opt"
    GENERAL = "gen"
    UTILITY = "uti"


def entry_type_roles(entry_type: EntryType, fields: Sequence[str]) -> list[FieldRole | None]:
    """Compute the role code of every field for one entry type.

    Parameters
    ----------
    entry_type : EntryType
        Type to code.
    fields : Sequence[str]
        Ordered field list.

    Returns
    -------
    list[FieldRole | None]
        One slot per field: the role of that field for this type, or None.
        A field listed under several roles keeps the last one swept
        (utility over general over optional over required). Role-list
        entries missing from ``fields`` are ignored.
    """
    position = {name: i for i, name in enumerate(fields)}
    roles: list[FieldRole | None] = [None] * len(fields)

    for role, names in zip(FieldRole, role_lists(entry_type), strict=True):
        for name in names:
            index = position.get(name)
            if index is not None:
                roles[index] = role
    return roles


def entry_type_row(entry_type: EntryType, fields: Sequence[str]) -> str:
    """Build the INSERT statement for one entry type."""
    columns = ", ".join(["label", *fields])
    values = [quote(entry_type.label)]
    for role in entry_type_roles(entry_type, fields):
        values.append(NULL if role is None else quote(role.value))
    return f"INSERT INTO entry_types ({columns}) VALUES ({', '.join(values)});"


def emit_entry_type_rows(entry_types: Iterable[EntryType], fields: Sequence[str]) -> list[str]:
    """Emit one ``entry_types`` row per type, in iteration order."""
    return [entry_type_row(entry_type, fields) for entry_type in entry_types]


def entry_row(entry: BibEntry, fields: Sequence[str]) -> str:
    """Build the INSERT statement for one entry.

    The entry-type id is resolved inside the statement by matching the
    lowercased type name against ``entry_types.label``.
    """
    columns = ", ".join(["jabref_eid", "entry_types_id", "cite_key", *fields])
    values = [
        quote(entry.entry_id),
        f"(SELECT entry_types_id FROM entry_types WHERE label={quote(entry.entry_type.label)})",
        NULL if entry.cite_key is None else quote(entry.cite_key),
    ]
    values.extend(value_literal(entry.get_field(name)) for name in fields)
    return f"INSERT INTO entries ({columns}) VALUES ({', '.join(values)});"


def emit_entry_rows(entries: Iterable[BibEntry], fields: Sequence[str]) -> list[str]:
    """Emit one ``entries`` row per entry.

    Entries are written in the order given; callers sort beforehand
    (see ``Library.select_entries``).
    """
    return [entry_row(entry, fields) for entry in entries]
