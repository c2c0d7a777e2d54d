"""Export stored welds as CSV using the canonical column layout."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from flask import current_app

from weldlog.errors import NotFoundError
from weldlog.importer.contracts import WELD_CANONICAL_FIELDS, FieldSpec
from weldlog.models import Weld
from weldlog.services.weld_store import WeldStore

from .import_service import resolve_alias_table

CSV_MIMETYPE = "text/csv"
DEFAULT_EXPORT_FILENAME = "welding-data.csv"
TEMPLATE_FILENAME = "weld-import-template.csv"
_HEADER_SPECIALS = (",", '"', "\n", "\r")


class ExportNotFound(NotFoundError):
    """Raised when no stored welds match the export filter."""

    def __init__(self, message: str = "No data found for export") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CSVExport:
    content: str
    row_count: int
    exported_on: date
    filename: str = DEFAULT_EXPORT_FILENAME
    mimetype: str = CSV_MIMETYPE

    @property
    def dated_filename(self) -> str:
        """Filename carrying the export date, e.g. ``welding-data-2024-01-16.csv``."""

        stem = self.filename[:-4] if self.filename.lower().endswith(".csv") else self.filename
        return f"{stem}-{self.exported_on.isoformat()}.csv"


def format_export_value(value: object | None) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def quote_csv_value(value: object | None) -> str:
    """Wrap a value in double quotes, doubling embedded quotes."""

    return '"' + format_export_value(value).replace('"', '""') + '"'


def _format_header(header: str) -> str:
    # Canonical headers never need quoting; custom display names might
    if any(char in header for char in _HEADER_SPECIALS):
        return quote_csv_value(header)
    return header


def encode_csv(headers: Sequence[str], rows: Iterable[Sequence[object | None]]) -> str:
    """Header row joined raw, every data value quoted, rows joined with ``\\n``."""

    lines = [",".join(_format_header(header) for header in headers)]
    lines.extend(",".join(quote_csv_value(value) for value in row) for row in rows)
    return "\n".join(lines)


def project_weld(weld: Weld, alias_table: Sequence[FieldSpec] = WELD_CANONICAL_FIELDS) -> list[object | None]:
    """Pick the export values of one weld in alias-table order."""

    custom_values = weld.custom_fields or {}
    return [custom_values.get(spec.name) if spec.custom else getattr(weld, spec.name) for spec in alias_table]


def export_welds_to_csv(
    date_from: date | None = None,
    date_to: date | None = None,
    *,
    store: WeldStore | None = None,
    alias_table: Sequence[FieldSpec] | None = None,
    exported_on: date | None = None,
) -> CSVExport:
    """
    Build a CSV document for welds dated within the inclusive bounds.

    Raises:
        ExportNotFound: when no weld matches; an empty CSV is never produced.
    """

    store = store or WeldStore()
    table = tuple(alias_table) if alias_table is not None else resolve_alias_table()
    welds = store.query(date_from=date_from, date_to=date_to)
    if not welds:
        raise ExportNotFound()

    content = encode_csv(
        [spec.header for spec in table],
        (project_weld(weld, table) for weld in welds),
    )
    current_app.logger.info(
        "CSV export generated: rows=%s date_from=%s date_to=%s", len(welds), date_from, date_to
    )
    return CSVExport(
        content=content,
        row_count=len(welds),
        exported_on=exported_on or date.today(),
        filename=current_app.config.get("WELD_EXPORT_FILENAME", DEFAULT_EXPORT_FILENAME),
    )


def build_import_template(alias_table: Sequence[FieldSpec] | None = None) -> str:
    """Header-only CSV listing the preferred import headers."""

    table = tuple(alias_table) if alias_table is not None else resolve_alias_table()
    return encode_csv([spec.header for spec in table], ())
