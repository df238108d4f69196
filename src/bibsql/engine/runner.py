"""End-to-end SQL export runner.

Runs the export as a fixed sequence of stages, each recorded in the audit
trail when one is configured:

    collect_fields -> schema -> entry_types -> entries -> groups
    -> entry_group -> write

Any failure stops the export. The runner records it and returns a failed
ExportResult without retrying. The script is encoded in full before the
output file is opened, so an encoding failure leaves no file behind; only
an I/O error during the write itself can leave a truncated file.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from bibsql.audit import ExportContext
from bibsql.engine.config import ExportConfig, ExportResult
from bibsql.models import Library
from bibsql.sql.fields import collect_fields
from bibsql.sql.rows import emit_entry_type_rows
from bibsql.sql.schema import emit_schema
from bibsql.sql.script import (
    SqlScript,
    library_entry_rows,
    library_group_rows,
    library_membership_rows,
    write_sql_file,
)

__all__ = ["run_export"]


@contextmanager
def _stage(run: ExportContext | None, name: str) -> Iterator[dict[str, int]]:
    """Time a stage and record its counters if auditing is enabled."""
    counters: dict[str, int] = {}
    if run:
        run.start_stage(name)
    yield counters
    if run:
        run.finish_stage(name, counters=counters)


def _run_stages(
    library: Library,
    output_path: Path,
    config: ExportConfig,
    keys: Iterable[str] | None,
    run: ExportContext | None,
) -> ExportResult:
    with _stage(run, "collect_fields") as counters:
        fields = collect_fields(library.entry_types)
        counters["fields"] = len(fields)

    with _stage(run, "schema") as counters:
        schema = emit_schema(fields, config.schema_options())
        counters["statements"] = len(schema)

    with _stage(run, "entry_types") as counters:
        entry_type_rows = emit_entry_type_rows(library.entry_types, fields)
        counters["statements"] = len(entry_type_rows)

    with _stage(run, "entries") as counters:
        entry_rows = library_entry_rows(library, fields, keys)
        counters["entries_available"] = len(library.entries)
        counters["statements"] = len(entry_rows)

    with _stage(run, "groups") as counters:
        group_rows = library_group_rows(library, config.start_group_id)
        counters["statements"] = len(group_rows)

    with _stage(run, "entry_group") as counters:
        membership_rows = library_membership_rows(library, config.start_group_id)
        counters["statements"] = len(membership_rows)

    script = SqlScript(
        fields=fields,
        schema=tuple(schema),
        entry_types=tuple(entry_type_rows),
        entries=tuple(entry_rows),
        groups=tuple(group_rows),
        memberships=tuple(membership_rows),
    )
    total_statements = len(script.statements())

    with _stage(run, "write") as counters:
        counters["bytes"] = write_sql_file(script, output_path, config.encoding)
        counters["statements"] = total_statements

    if run:
        run.add_artifact(output_path, statement_count=total_statements)

    return ExportResult(
        success=True,
        output_path=str(output_path),
        total_entry_types=len(entry_type_rows),
        total_entries=len(entry_rows),
        total_fields=len(fields),
        total_groups=len(group_rows),
        total_memberships=len(membership_rows),
        total_statements=total_statements,
        run_id=run.run_id if run else None,
    )


def run_export(
    library: Library,
    output_path: Path | str,
    config: ExportConfig | None = None,
    keys: Iterable[str] | None = None,
) -> ExportResult:
    """Export a library as a SQL script.

    Parameters
    ----------
    library : Library
        Source model.
    output_path : Path | str
        Destination SQL file, overwritten if present.
    config : ExportConfig | None, optional
        Export configuration. If None, uses defaults.
    keys : Iterable[str] | None, optional
        Entry ids to export. All entries when None.

    Returns
    -------
    ExportResult
        Export statistics, or the error message when the export failed.

    Examples
    --------
        >>> from bibsql.engine import ExportConfig, run_export
        >>> result = run_export(library, "library.sql", ExportConfig(audit_dir=Path("audit")))
        >>> if result.success:
        ...     print(f"Wrote {result.total_statements} statements")
    """
    output_path = Path(output_path)

    if config is None:
        config = ExportConfig()

    run: ExportContext | None = None
    if config.audit_dir is not None:
        run = ExportContext.start(config.audit_dir, parameters=config.to_dict())

    try:
        result = _run_stages(library, output_path, config, keys, run)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if run:
            stage = run.audit_logger.current_stage
            run.record_error(e, stage=stage, include_traceback=True)
            run.finish(status="failed")
        return ExportResult(
            success=False,
            output_path=str(output_path),
            run_id=run.run_id if run else None,
            error_message=error_msg,
        )

    if run:
        run.finish(status="success", statements_written=result.total_statements)
    return result
