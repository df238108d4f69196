"""Command-line interface for bibsql.

Provides CLI commands for exporting libraries as SQL.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibsql")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"


def _split_keys(keys: str | None) -> list[str] | None:
    if keys is None:
        return None
    return [k.strip() for k in keys.split(",") if k.strip()]


@click.group()
@click.version_option(version=__version__, prog_name="bibsql")
def cli() -> None:
    """Export bibliographic libraries as SQL scripts.

    Use 'bibsql COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("library_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output SQL file path",
)
@click.option(
    "--keys",
    type=str,
    default=None,
    help="Comma-separated entry ids to export (default: all entries)",
)
@click.option(
    "--encoding",
    type=str,
    default="utf-8",
    help="Output encoding (default: utf-8)",
)
@click.option(
    "--audit-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Write events.jsonl and run.json to this directory",
)
@click.option(
    "--fix-foreign-keys",
    is_flag=True,
    help="Reference the created tables instead of the legacy table names",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def export(
    library_path: str,
    output: str,
    keys: str | None,
    encoding: str,
    audit_dir: str | None,
    fix_foreign_keys: bool,
    verbose: bool,
) -> None:
    """Export the JSON library at LIBRARY_PATH as a MySQL script.

    The script drops and recreates the entry_types, entries, groups and
    entry_group tables, then inserts one row per entry type, entry, group
    and explicit group membership.

    Examples
    --------
        bibsql export library.json -o library.sql
        bibsql export library.json -o subset.sql --keys e1,e7 --audit-dir audit
    """
    from bibsql.engine import ExportConfig, run_export
    from bibsql.parse import load_library

    try:
        config = ExportConfig(
            encoding=encoding,
            legacy_foreign_keys=not fix_foreign_keys,
            audit_dir=Path(audit_dir) if audit_dir else None,
        )

        if verbose:
            click.echo(f"Loading: {library_path}", err=True)

        library = load_library(library_path)

        if verbose:
            click.echo(
                f"  {len(library.entry_types)} entry types, {len(library.entries)} entries",
                err=True,
            )
            click.echo(f"Writing to: {output}", err=True)

        result = run_export(library, output, config=config, keys=_split_keys(keys))

    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if not result.success:
        click.secho(f"✗ Export failed: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo(f"  Fields: {result.total_fields}", err=True)
        click.echo(f"  Groups: {result.total_groups}", err=True)
        click.echo(f"  Memberships: {result.total_memberships}", err=True)
        if result.run_id:
            click.echo(f"  Audit run: {result.run_id}", err=True)

    click.secho(
        f"✓ Wrote {result.total_statements} statements "
        f"({result.total_entries} entries) to {output}",
        fg="green",
    )


@cli.command()
@click.option(
    "--fix-foreign-keys",
    is_flag=True,
    help="Reference the created tables instead of the legacy table names",
)
def schema(fix_foreign_keys: bool) -> None:
    """Print the table definitions for the standard BibTeX entry types."""
    from bibsql.models import STANDARD_ENTRY_TYPES
    from bibsql.sql import SchemaOptions, collect_fields, emit_schema

    fields = collect_fields(STANDARD_ENTRY_TYPES)
    for statement in emit_schema(fields, SchemaOptions(legacy_foreign_keys=not fix_foreign_keys)):
        click.echo(statement)


@cli.command()
@click.argument("library_path", type=click.Path(exists=True, dir_okay=False), required=False)
def fields(library_path: str | None) -> None:
    """Print the ordered field list, one field per line.

    Uses the entry types of LIBRARY_PATH, or the standard BibTeX types when
    no library is given.
    """
    from bibsql.models import STANDARD_ENTRY_TYPES
    from bibsql.parse import load_library
    from bibsql.sql import collect_fields

    if library_path is None:
        entry_types = STANDARD_ENTRY_TYPES
    else:
        try:
            entry_types = load_library(library_path).entry_types
        except Exception as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)

    for name in collect_fields(entry_types):
        click.echo(name)


if __name__ == "__main__":
    cli()
