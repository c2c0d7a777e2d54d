import io

import pytest

from weldlog.importer.adapters import CSVStreamError, WeldCSVAdapter


def _make_csv(contents: str) -> io.StringIO:
    stream = io.StringIO(contents)
    stream.seek(0)
    return stream


def test_adapter_numbers_rows_and_maps_values():
    csv_stream = _make_csv("DATE,WELD #,WELDER\n" "2024-01-15,W001,John Doe\n" "2024-01-16,W002,Jane Smith\n")

    adapter = WeldCSVAdapter(csv_stream)
    rows = list(adapter.iter_rows())

    assert adapter.header is not None
    assert adapter.header.resolved_fields == ("date", "weld_number", "welder")
    assert [row.sequence_number for row in rows] == [1, 2]
    assert rows[0].mapped.values == {"date": "2024-01-15", "weld_number": "W001", "welder": "John Doe"}
    assert [row.source_line for row in rows] == [2, 3]
    assert adapter.statistics.rows_read == 2
    assert adapter.statistics.rows_without_date == 0


def test_adapter_reports_unrecognized_headers():
    adapter = WeldCSVAdapter(_make_csv("DATE,Notes\n2024-01-15,hello\n"))
    list(adapter.iter_rows())

    assert adapter.header.unrecognized == ("Notes",)


def test_adapter_counts_rows_without_date():
    csv_stream = _make_csv("DATE,WELD #\n" "2024-01-15,W001\n" ",W002\n" "2024-01-17,W003\n")

    adapter = WeldCSVAdapter(csv_stream)
    rows = list(adapter.iter_rows())

    assert len(rows) == 3
    assert [row.mapped.is_importable for row in rows] == [True, False, True]
    assert adapter.statistics.rows_without_date == 1


def test_adapter_handles_quoted_commas_and_bom_bytes():
    payload = '\ufeffDATE,WELDER\n2024-01-15,"Doe, John"\n'.encode("utf-8")

    rows = list(WeldCSVAdapter(io.BytesIO(payload)).iter_rows())

    assert rows[0].mapped.values == {"date": "2024-01-15", "welder": "Doe, John"}


def test_adapter_rejects_empty_file():
    adapter = WeldCSVAdapter(_make_csv(""))

    with pytest.raises(CSVStreamError) as excinfo:
        list(adapter.iter_rows())

    assert "missing a header row" in str(excinfo.value)
    assert excinfo.value.code == "csv_stream_error"


def test_adapter_raises_stream_error_on_malformed_quoting():
    adapter = WeldCSVAdapter(_make_csv('DATE,WELD #\n"2024-01-15"x,W001\n'))

    with pytest.raises(CSVStreamError) as excinfo:
        list(adapter.iter_rows())

    assert excinfo.value.line_number == 2


def test_adapter_raises_stream_error_on_undecodable_bytes():
    adapter = WeldCSVAdapter(io.BytesIO(b"DATE,WELD #\n\xff\xfe,W001\n"))

    with pytest.raises(CSVStreamError):
        list(adapter.iter_rows())


def test_adapter_reports_line_of_malformed_row_after_good_rows():
    adapter = WeldCSVAdapter(_make_csv('DATE,WELD #\n2024-01-15,W001\n2024-01-16,W002\n"2024-01-17"x,W003\n'))

    with pytest.raises(CSVStreamError) as excinfo:
        list(adapter.iter_rows())

    assert excinfo.value.line_number == 4
    assert "(line 4)" in str(excinfo.value)


def test_source_line_points_at_start_of_multiline_record():
    csv_stream = _make_csv('DATE,WELDER\n2024-01-15,"Doe,\nJohn"\n2024-01-16,Smith\n')

    rows = list(WeldCSVAdapter(csv_stream).iter_rows())

    assert [row.source_line for row in rows] == [2, 4]
    assert rows[0].mapped.values["welder"] == "Doe,\nJohn"
