"""Table definitions for the exported database.

Four tables are created: ``entry_types``, ``entries``, ``groups`` and
``entry_group``. Each CREATE is preceded by an unconditional
``DROP TABLE IF EXISTS`` so a script can be replayed against the same
database.
"""

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "ROLE_CODE_TYPE",
    "TABLE_NAMES",
    "VALUE_TYPE",
    "SchemaOptions",
    "emit_schema",
    "field_columns",
]

TABLE_NAMES = ("entry_types", "entries", "groups", "entry_group")

ROLE_CODE_TYPE = "VARCHAR(3) DEFAULT NULL"
VALUE_TYPE = "TEXT DEFAULT NULL"


@dataclass(frozen=True)
class SchemaOptions:
    """Column widths and foreign-key style for the emitted schema.

    Attributes
    ----------
    eid_width : int
        Width of the ``entries.jabref_eid`` column.
    cite_key_width : int
        Width of the ``entries.cite_key`` column.
    group_label_width : int
        Width of the ``groups.label`` column.
    legacy_foreign_keys : bool
        Reproduce the legacy schema's references to ``entry_type`` and
        ``entry_fields`` (tables that are never created) and its
        auto-increment ``entry_group.entries_id``. When False, the
        references point at the tables actually created.
    """

    eid_width: int = 10
    cite_key_width: int = 30
    group_label_width: int = 100
    legacy_foreign_keys: bool = True


def field_columns(fields: Sequence[str], datatype: str) -> list[str]:
    """Column definitions for the per-field columns, in field order."""
    return [f"{name} {datatype}" for name in fields]


def _drop_and_create(table: str, columns: list[str]) -> list[str]:
    return [
        f"DROP TABLE IF EXISTS {table};",
        f"CREATE TABLE {table} ({', '.join(columns)});",
    ]


def emit_schema(fields: Sequence[str], options: SchemaOptions | None = None) -> list[str]:
    """Emit DROP/CREATE statements for all four tables.

    Parameters
    ----------
    fields : Sequence[str]
        Ordered field list. Per-field columns of ``entry_types`` and
        ``entries`` appear in exactly this order.
    options : SchemaOptions | None, optional
        Column widths and foreign-key style. Defaults apply when None.

    Returns
    -------
    list[str]
        Eight single-line statements: a DROP and a CREATE per table.
    """
    if options is None:
        options = SchemaOptions()

    if options.legacy_foreign_keys:
        entry_types_ref = "entry_type"
        entries_ref = "entry_fields"
        link_entries_id = "entries_id INTEGER NOT NULL AUTO_INCREMENT"
    else:
        entry_types_ref = "entry_types"
        entries_ref = "entries"
        link_entries_id = "entries_id INTEGER NOT NULL"

    entry_types_columns = [
        "entry_types_id INT UNSIGNED NOT NULL AUTO_INCREMENT",
        "label TEXT",
        *field_columns(fields, ROLE_CODE_TYPE),
        "PRIMARY KEY (entry_types_id)",
    ]

    entries_columns = [
        "entries_id INTEGER NOT NULL AUTO_INCREMENT",
        f"jabref_eid VARCHAR({options.eid_width}) DEFAULT NULL",
        "entry_types_id INTEGER DEFAULT NULL",
        f"cite_key VARCHAR({options.cite_key_width}) DEFAULT NULL",
        *field_columns(fields, VALUE_TYPE),
        "PRIMARY KEY (entries_id)",
        f"FOREIGN KEY (entry_types_id) REFERENCES {entry_types_ref}(entry_types_id)",
    ]

    groups_columns = [
        "groups_id INTEGER NOT NULL AUTO_INCREMENT",
        f"label VARCHAR({options.group_label_width}) DEFAULT NULL",
        "parent_id INTEGER DEFAULT NULL",
        "PRIMARY KEY (groups_id)",
    ]

    entry_group_columns = [
        link_entries_id,
        "groups_id INTEGER DEFAULT NULL",
        f"FOREIGN KEY (entries_id) REFERENCES {entries_ref}(entries_id)",
        "FOREIGN KEY (groups_id) REFERENCES groups(groups_id)",
    ]

    statements: list[str] = []
    for table, columns in zip(
        TABLE_NAMES,
        (entry_types_columns, entries_columns, groups_columns, entry_group_columns),
        strict=True,
    ):
        statements.extend(_drop_and_create(table, columns))
    return statements
