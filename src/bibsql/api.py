"""Public API for exporting bibliographic libraries as SQL.

This module provides the main public API for bibsql, enabling:
- Loading JSON library documents
- Rendering a library as SQL text
- Running an audited export to a file
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from bibsql.models import Library
from bibsql.parse import LibraryError, load_library
from bibsql.sql.script import build_script

if TYPE_CHECKING:
    from bibsql.engine.config import ExportConfig, ExportResult

__all__ = [
    "ExportError",
    "LibraryError",
    "export_sql",
    "load_library",
    "render_sql",
]


class ExportError(Exception):
    """Raised when an export fails."""

    def __init__(
        self,
        message: str,
        run_id: str | None = None,
    ) -> None:
        """Initialize export error.

        Parameters
        ----------
        message : str
            Error message.
        run_id : str | None, optional
            Audit run id of the failed export, if auditing was enabled.
        """
        super().__init__(message)
        self.run_id = run_id


def render_sql(
    library: Library,
    keys: Iterable[str] | None = None,
    config: ExportConfig | None = None,
) -> str:
    """Render a library as SQL text.

    Parameters
    ----------
    library : Library
        Source model.
    keys : Iterable[str] | None, optional
        Entry ids to export. All entries when None.
    config : ExportConfig | None, optional
        Schema widths, foreign-key style and root group id are taken from
        it. ``encoding`` and ``audit_dir`` do not apply to text rendering.

    Returns
    -------
    str
        One statement per line.

    Examples
    --------
        >>> from bibsql import load_library, render_sql
        >>> from bibsql.engine import ExportConfig
        >>> library = load_library("library.json")
        >>> print(render_sql(library, config=ExportConfig(legacy_foreign_keys=False)))
    """
    if config is None:
        return build_script(library, keys).to_text()
    return build_script(
        library,
        keys,
        options=config.schema_options(),
        start_group_id=config.start_group_id,
    ).to_text()


def export_sql(
    library: Library | str | Path,
    output_path: str | Path,
    *,
    keys: Iterable[str] | None = None,
    config: ExportConfig | None = None,
) -> ExportResult:
    """Export a library, or a library document on disk, to a SQL file.

    Parameters
    ----------
    library : Library | str | Path
        Library model, or path to a JSON library document.
    output_path : str | Path
        Destination SQL file, overwritten if present.
    keys : Iterable[str] | None, optional
        Entry ids to export. All entries when None.
    config : ExportConfig | None, optional
        Export configuration. If None, uses defaults.

    Returns
    -------
    ExportResult
        Export statistics.

    Raises
    ------
    FileNotFoundError
        If a library path does not exist.
    LibraryError
        If the library document is invalid.
    ExportError
        If the export fails.

    Examples
    --------
        >>> from bibsql import export_sql
        >>> result = export_sql("library.json", "library.sql")
        >>> print(result.total_entries, result.total_groups)
    """
    from bibsql.engine import run_export

    if not isinstance(library, Library):
        library = load_library(library)

    result = run_export(library, output_path, config=config, keys=keys)

    if not result.success:
        raise ExportError(f"Export failed: {result.error_message}", run_id=result.run_id)

    return result
