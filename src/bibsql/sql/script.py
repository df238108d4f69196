"""Assemble the full SQL script and write it to disk."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from bibsql.models import Library
from bibsql.sql.fields import collect_fields
from bibsql.sql.groups import emit_group_rows, emit_membership_rows
from bibsql.sql.rows import emit_entry_rows, emit_entry_type_rows
from bibsql.sql.schema import SchemaOptions, emit_schema

__all__ = [
    "SqlScript",
    "build_script",
    "library_entry_rows",
    "library_group_rows",
    "library_membership_rows",
    "write_sql_file",
]


@dataclass(frozen=True)
class SqlScript:
    """Statements of one export, grouped by section in output order.

    Attributes
    ----------
    fields : tuple[str, ...]
        Ordered field list the schema and rows were built from.
    schema : tuple[str, ...]
        DROP/CREATE statements.
    entry_types : tuple[str, ...]
        ``entry_types`` rows.
    entries : tuple[str, ...]
        ``entries`` rows.
    groups : tuple[str, ...]
        ``groups`` rows in pre-order.
    memberships : tuple[str, ...]
        ``entry_group`` rows in pre-order.
    """

    fields: tuple[str, ...]
    schema: tuple[str, ...]
    entry_types: tuple[str, ...]
    entries: tuple[str, ...]
    groups: tuple[str, ...]
    memberships: tuple[str, ...]

    def statements(self) -> list[str]:
        """All statements in output order."""
        return [
            *self.schema,
            *self.entry_types,
            *self.entries,
            *self.groups,
            *self.memberships,
        ]

    def to_text(self) -> str:
        """Script text: one statement per line, trailing newline."""
        return "".join(f"{statement}\n" for statement in self.statements())


def build_script(
    library: Library,
    keys: Iterable[str] | None = None,
    options: SchemaOptions | None = None,
    start_group_id: int = 1,
) -> SqlScript:
    """Build every statement for exporting ``library``.

    Parameters
    ----------
    library : Library
        Source model.
    keys : Iterable[str] | None, optional
        Entry ids to export. All entries when None.
    options : SchemaOptions | None, optional
        Schema options. Defaults apply when None.
    start_group_id : int, optional
        Id assigned to the root group, by default 1.

    Returns
    -------
    SqlScript
        All statements, grouped by section.
    """
    fields = collect_fields(library.entry_types)

    return SqlScript(
        fields=fields,
        schema=tuple(emit_schema(fields, options)),
        entry_types=tuple(emit_entry_type_rows(library.entry_types, fields)),
        entries=tuple(library_entry_rows(library, fields, keys)),
        groups=tuple(library_group_rows(library, start_group_id)),
        memberships=tuple(library_membership_rows(library, start_group_id)),
    )


def library_entry_rows(
    library: Library,
    fields: tuple[str, ...],
    keys: Iterable[str] | None = None,
) -> list[str]:
    """Select, sort and emit the ``entries`` rows of a library."""
    return emit_entry_rows(library.select_entries(keys), fields)


def library_group_rows(library: Library, start_group_id: int = 1) -> list[str]:
    """Emit the ``groups`` rows, or none when the library has no tree."""
    if library.groups is None:
        return []
    rows, _ = emit_group_rows(library.groups, start_group_id)
    return rows


def library_membership_rows(library: Library, start_group_id: int = 1) -> list[str]:
    """Emit the ``entry_group`` rows, or none when the library has no tree."""
    if library.groups is None:
        return []
    rows, _ = emit_membership_rows(library.groups, start_group_id)
    return rows


def write_sql_file(script: SqlScript, output_path: Path, encoding: str = "utf-8") -> int:
    """Write the script to ``output_path``, replacing any existing file.

    Parameters
    ----------
    script : SqlScript
        Script to write.
    output_path : Path
        Destination file. Parent directories are created.
    encoding : str, optional
        Output encoding, by default "utf-8".

    Returns
    -------
    int
        Number of bytes written.
    """
    data = script.to_text().encode(encoding)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        f.write(data)
    return len(data)
