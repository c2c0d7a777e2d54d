"""CSV adapter for weld log imports.

Streams rows from an uploaded CSV, numbers them in file order (the header line
is not counted, the first data row is row 1) and maps each through the row
mapper. Anything that prevents the file from being read as CSV surfaces as a
single :class:`CSVStreamError`; per-row problems are left to the pipeline.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import IO, Iterator, Sequence

from weldlog.errors import WeldLogError
from weldlog.importer.contracts import WELD_CANONICAL_FIELDS, FieldSpec, resolve_headers
from weldlog.importer.row_mapper import MappedRow, map_row


class CSVAdapterError(WeldLogError):
    """Base exception for CSV adapter failures."""

    code = "csv_error"


class CSVStreamError(CSVAdapterError):
    """Raised when the CSV source cannot be decoded or parsed."""

    code = "csv_stream_error"

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class HeaderResolution:
    raw_headers: tuple[str, ...]
    resolved_fields: tuple[str | None, ...]

    @property
    def unrecognized(self) -> tuple[str, ...]:
        return tuple(header for header, name in zip(self.raw_headers, self.resolved_fields) if name is None)


@dataclass(frozen=True)
class WeldCSVRow:
    """Represents a parsed CSV row with its mapped candidate record."""

    sequence_number: int
    source_line: int
    mapped: MappedRow


@dataclass
class WeldCSVStatistics:
    """Accumulated statistics from CSV parsing."""

    rows_read: int = 0
    rows_without_date: int = 0


def _as_text_stream(file_obj: IO) -> IO[str]:
    if isinstance(file_obj, io.TextIOBase):
        return file_obj
    # utf-8-sig drops a leading byte order mark written by spreadsheet tools
    return io.TextIOWrapper(file_obj, encoding="utf-8-sig", newline="")


class WeldCSVAdapter:
    """CSV reader that maps rows onto the weld contract."""

    def __init__(self, file_obj: IO, *, alias_table: Sequence[FieldSpec] = WELD_CANONICAL_FIELDS) -> None:
        self._file_obj = file_obj
        self._alias_table = tuple(alias_table)
        self._header_result: HeaderResolution | None = None
        self.statistics = WeldCSVStatistics()

    @property
    def header(self) -> HeaderResolution | None:
        return self._header_result

    def _prepare_reader(self, text_stream: IO[str]) -> csv.DictReader:
        reader = csv.DictReader(text_stream, strict=True)
        try:
            fieldnames = reader.fieldnames
        except (csv.Error, UnicodeDecodeError) as exc:
            raise CSVStreamError(f"Failed to read CSV header: {exc}", line_number=reader.line_num or 1) from exc
        if not fieldnames:
            raise CSVStreamError("CSV file is empty or missing a header row.")

        raw_headers = tuple(fieldnames)
        self._header_result = HeaderResolution(
            raw_headers=raw_headers,
            resolved_fields=resolve_headers(raw_headers, self._alias_table),
        )
        return reader

    def iter_rows(self) -> Iterator[WeldCSVRow]:
        text_stream = _as_text_stream(self._file_obj)
        reader = self._prepare_reader(text_stream)
        sequence_number = 0
        while True:
            # First physical line of the next record
            start_line = reader.line_num + 1
            try:
                raw_row = next(reader)
            except StopIteration:
                break
            except (csv.Error, UnicodeDecodeError) as exc:
                raise CSVStreamError(f"Failed to read CSV file: {exc}", line_number=start_line) from exc

            sequence_number += 1
            mapped = map_row(raw_row, self._alias_table)
            self.statistics.rows_read += 1
            if not mapped.is_importable:
                self.statistics.rows_without_date += 1

            yield WeldCSVRow(
                sequence_number=sequence_number,
                source_line=start_line,
                mapped=mapped,
            )
