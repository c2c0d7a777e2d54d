"""
CLI commands for importing and exporting weld CSV files.

Registered on the Flask CLI as ``flask welds ...``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from flask.cli import with_appcontext

from weldlog.errors import WeldLogError
from weldlog.importer.pipeline import build_import_template, export_welds_to_csv, import_welds_from_path
from weldlog.services.weld_store import parse_date_bound


@click.group(name="welds")
def welds_cli():
    """Weld log CSV import/export commands."""


@welds_cli.command("import-csv")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@with_appcontext
def import_csv_command(csv_path: Path):
    """Import weld rows from CSV_PATH and print the import report as JSON."""

    try:
        report = import_welds_from_path(csv_path.resolve())
    except WeldLogError as exc:
        raise click.ClickException(f"Import failed: {exc.message}") from exc
    click.echo(json.dumps(report.as_dict(), indent=2))


@welds_cli.command("export-csv")
@click.option("--from", "date_from", default=None, help="Earliest weld date to include (YYYY-MM-DD).")
@click.option("--to", "date_to", default=None, help="Latest weld date to include (YYYY-MM-DD).")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Destination file. Defaults to welding-data-<today>.csv in the working directory.",
)
@with_appcontext
def export_csv_command(date_from: Optional[str], date_to: Optional[str], output_path: Optional[Path]):
    """Export welds within the date range to a CSV file."""

    try:
        export = export_welds_to_csv(
            parse_date_bound(date_from, "date_from"),
            parse_date_bound(date_to, "date_to"),
        )
    except WeldLogError as exc:
        raise click.ClickException(exc.message) from exc

    target = output_path or Path.cwd() / export.dated_filename
    target.write_text(export.content, encoding="utf-8", newline="")
    click.echo(json.dumps({"rows": export.row_count, "path": str(target)}))


@welds_cli.command("template")
@with_appcontext
def template_command():
    """Print the header-only import template."""

    click.echo(build_import_template())
