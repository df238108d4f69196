"""Export bibliographic libraries as SQL scripts.

This package provides:
- Data models (bibsql.models): entry types, entries, group tree
- Parsing (bibsql.parse): JSON library documents
- SQL generation (bibsql.sql): schema, rows and group flattening
- Engine (bibsql.engine): audited export runs
- Audit (bibsql.audit): event log and run manifest
- CLI (bibsql.cli): command-line interface
- Public API (bibsql.api): high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from bibsql.api import (
    ExportError,
    LibraryError,
    export_sql,
    load_library,
    render_sql,
)
from bibsql.models import BibEntry, EntryType, GroupKind, GroupNode, Library

__all__ = [
    "__version__",
    "__license__",
    "BibEntry",
    "EntryType",
    "GroupKind",
    "GroupNode",
    "Library",
    "ExportError",
    "LibraryError",
    "export_sql",
    "load_library",
    "render_sql",
]
