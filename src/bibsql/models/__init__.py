"""Shared data types for bibsql.

This package contains the read-only bibliographic model the exporter
consumes and the standard BibTeX entry-type catalog.
"""

from bibsql.models.library import (
    BibEntry,
    EntryType,
    GroupKind,
    GroupNode,
    Library,
)
from bibsql.models.standard_types import (
    GENERAL_FIELDS,
    STANDARD_ENTRY_TYPES,
    UTILITY_FIELDS,
    standard_entry_type,
)

__all__ = [
    # Model
    "BibEntry",
    "EntryType",
    "GroupKind",
    "GroupNode",
    "Library",
    # Standard catalog
    "GENERAL_FIELDS",
    "STANDARD_ENTRY_TYPES",
    "UTILITY_FIELDS",
    "standard_entry_type",
]
