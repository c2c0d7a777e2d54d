"""Import weld rows from an uploaded CSV into the store.

The file is parsed and mapped completely before anything is written, so a
stream-level failure aborts the import with nothing persisted. Rows without a
date are skipped without being counted. Every remaining row is inserted on its
own, in file order; a rejected row is recorded in the report and the loop
carries on with the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Sequence

from flask import current_app
from werkzeug.datastructures import FileStorage

from weldlog.importer.adapters import WeldCSVAdapter, WeldCSVRow
from weldlog.importer.contracts import (
    WELD_CANONICAL_FIELDS,
    FieldSpec,
    build_custom_field_specs,
    get_weld_alias_table,
)
from weldlog.services.field_registry import FieldRegistryService
from weldlog.services.weld_store import WeldStore, WeldStoreError
from weldlog.utils.uploads import CSV_UPLOAD_SUBDIR, cleanup_upload, persist_upload

IMPORT_COMPLETED_MESSAGE = "CSV import completed"


@dataclass(frozen=True)
class RowError:
    row: int
    error: str

    def as_dict(self) -> dict[str, object]:
        return {"row": self.row, "error": self.error}


@dataclass
class ImportReport:
    """Outcome of one import invocation."""

    total_rows: int = 0
    success_count: int = 0
    error_count: int = 0
    rows_without_date: int = 0
    errors: list[RowError] = field(default_factory=list)
    message: str = IMPORT_COMPLETED_MESSAGE

    def record_success(self) -> None:
        self.total_rows += 1
        self.success_count += 1

    def record_failure(self, row: int, error: str) -> None:
        self.total_rows += 1
        self.error_count += 1
        self.errors.append(RowError(row=row, error=error))

    def as_dict(self) -> dict[str, object]:
        """JSON payload returned by the upload endpoint; ``errors`` only when non-empty."""

        payload: dict[str, object] = {
            "message": self.message,
            "totalRows": self.total_rows,
            "successCount": self.success_count,
            "errorCount": self.error_count,
        }
        if self.errors:
            payload["errors"] = [error.as_dict() for error in self.errors]
        return payload


def resolve_alias_table(registry: FieldRegistryService | None = None) -> tuple[FieldSpec, ...]:
    """
    Return the alias table for the current app.

    Registered custom fields are appended only when
    ``WELD_CSV_CUSTOM_FIELDS_ENABLED`` is set; otherwise the pipeline handles
    exactly the canonical columns.
    """

    if not current_app.config.get("WELD_CSV_CUSTOM_FIELDS_ENABLED", False):
        return WELD_CANONICAL_FIELDS
    registry = registry or FieldRegistryService()
    return get_weld_alias_table(build_custom_field_specs(registry.list_fields()))


def _read_candidates(adapter: WeldCSVAdapter) -> list[WeldCSVRow]:
    return [row for row in adapter.iter_rows() if row.mapped.is_importable]


def import_welds_from_csv(
    file_obj: IO,
    *,
    store: WeldStore | None = None,
    alias_table: Sequence[FieldSpec] | None = None,
) -> ImportReport:
    """
    Import weld rows from a CSV stream (bytes or text).

    Raises:
        CSVStreamError: when the stream cannot be decoded or parsed as CSV.
    """

    store = store or WeldStore()
    table = tuple(alias_table) if alias_table is not None else resolve_alias_table()
    adapter = WeldCSVAdapter(file_obj, alias_table=table)
    candidates = _read_candidates(adapter)

    if adapter.header is not None and adapter.header.unrecognized:
        current_app.logger.info(
            "CSV import ignoring unrecognized columns: %s", ", ".join(adapter.header.unrecognized)
        )

    report = ImportReport(rows_without_date=adapter.statistics.rows_without_date)
    for row in candidates:
        try:
            store.insert(row.mapped.as_record())
        except WeldStoreError as exc:
            current_app.logger.warning(
                "CSV import row %s (line %s) rejected: %s", row.sequence_number, row.source_line, exc
            )
            report.record_failure(row.sequence_number, str(exc))
        else:
            report.record_success()

    current_app.logger.info(
        "CSV import completed: rows_read=%s attempted=%s succeeded=%s failed=%s skipped_without_date=%s",
        adapter.statistics.rows_read,
        report.total_rows,
        report.success_count,
        report.error_count,
        report.rows_without_date,
    )
    return report


def import_welds_from_path(path: Path, **kwargs) -> ImportReport:
    with Path(path).open("rb") as handle:
        return import_welds_from_csv(handle, **kwargs)


def import_welds_from_upload(file_storage: FileStorage, app, **kwargs) -> ImportReport:
    """
    Persist an uploaded CSV to a temporary file, import it and always remove the file.
    """

    upload_path = persist_upload(file_storage, app, subdir=CSV_UPLOAD_SUBDIR, default_suffix=".csv")
    try:
        return import_welds_from_path(upload_path, **kwargs)
    finally:
        cleanup_upload(upload_path)
