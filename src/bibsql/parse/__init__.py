"""Library document loading.

Main entry points:
- load_library: Read and validate a JSON library document
- library_from_dict: Validate an already decoded document
"""

from bibsql.parse.library import (
    LIBRARY_SCHEMA,
    LibraryError,
    library_from_dict,
    load_library,
)

__all__ = [
    "LIBRARY_SCHEMA",
    "LibraryError",
    "library_from_dict",
    "load_library",
]
