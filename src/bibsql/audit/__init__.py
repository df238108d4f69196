"""Audit trail for exports.

Main Components
---------------
- ExportContext: Context manager for one audited export
- AuditLogger: JSONL event logger
- ManifestWriter: Run manifest builder
"""

from bibsql.audit.context import ExportContext
from bibsql.audit.helpers import generate_run_id
from bibsql.audit.logger import AuditLogger
from bibsql.audit.manifest import ManifestWriter

__all__ = [
    "AuditLogger",
    "ExportContext",
    "ManifestWriter",
    "generate_run_id",
]
