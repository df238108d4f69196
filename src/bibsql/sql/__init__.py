"""SQL statement generation for bibliographic libraries."""

from bibsql.sql.fields import collect_fields
from bibsql.sql.groups import (
    GroupVisit,
    emit_group_rows,
    emit_membership_rows,
    iter_groups,
)
from bibsql.sql.literals import NULL, escape_value
from bibsql.sql.rows import (
    FieldRole,
    emit_entry_rows,
    emit_entry_type_rows,
    entry_type_roles,
)
from bibsql.sql.schema import SchemaOptions, emit_schema
from bibsql.sql.script import (
    SqlScript,
    build_script,
    library_entry_rows,
    library_group_rows,
    library_membership_rows,
    write_sql_file,
)

__all__ = [
    "NULL",
    "FieldRole",
    "GroupVisit",
    "SchemaOptions",
    "SqlScript",
    "build_script",
    "collect_fields",
    "emit_entry_rows",
    "emit_entry_type_rows",
    "emit_group_rows",
    "emit_membership_rows",
    "emit_schema",
    "entry_type_roles",
    "escape_value",
    "iter_groups",
    "library_entry_rows",
    "library_group_rows",
    "library_membership_rows",
    "write_sql_file",
]
