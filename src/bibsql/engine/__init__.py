"""Export orchestration.

This package provides the main entry point for running an audited SQL
export, including configuration and result types.
"""

from bibsql.engine.config import ExportConfig, ExportResult
from bibsql.engine.runner import run_export

__all__ = [
    "ExportConfig",
    "ExportResult",
    "run_export",
]
