"""Common utility functions for bibsql.

Hashing and timestamp helpers shared by the audit trail and the exporter.
"""

from bibsql.utils.hashing import calculate_file_sha256, format_sha256
from bibsql.utils.timestamps import get_iso_timestamp

__all__ = [
    "calculate_file_sha256",
    "format_sha256",
    "get_iso_timestamp",
]
