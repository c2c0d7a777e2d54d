from datetime import date

import pytest

from weldlog.importer.contracts import get_weld_export_headers
from weldlog.importer.pipeline import ExportNotFound, build_import_template, export_welds_to_csv
from weldlog.importer.pipeline.export_service import encode_csv, quote_csv_value


def _data_lines(content):
    return content.split("\n")[1:]


def test_export_header_row_is_unquoted_legacy_headers(app, weld_factory):
    weld_factory()

    export = export_welds_to_csv()

    assert export.content.split("\n")[0] == ",".join(get_weld_export_headers())
    assert export.row_count == 1
    assert export.filename == "welding-data.csv"
    assert export.mimetype == "text/csv"


def test_export_quotes_every_value_and_leaves_missing_values_empty(app, weld_factory):
    weld_factory(date="2024-01-15", weld_number="W001", welder='John "JD" Doe')

    line = _data_lines(export_welds_to_csv().content)[0]
    cells = line.split('","')

    assert line.startswith('"2024-01-15"')
    assert '"John ""JD"" Doe"' in line
    assert len(cells) == 19


def test_export_orders_newest_date_first(app, weld_factory):
    weld_factory(date="2024-01-15", weld_number="W001")
    weld_factory(date="2024-03-01", weld_number="W002")
    weld_factory(date="2024-02-10", weld_number="W003")

    lines = _data_lines(export_welds_to_csv().content)

    assert [line.split(",")[5] for line in lines] == ['"W002"', '"W003"', '"W001"']


def test_same_date_rows_order_newest_insert_first(app, weld_factory):
    weld_factory(date="2024-01-15", weld_number="W001")
    weld_factory(date="2024-01-15", weld_number="W002")

    lines = _data_lines(export_welds_to_csv().content)

    assert [line.split(",")[5] for line in lines] == ['"W002"', '"W001"']


def test_export_date_bounds_are_inclusive(app, weld_factory):
    weld_factory(date="2024-01-14", weld_number="W000")
    weld_factory(date="2024-01-15", weld_number="W001")
    weld_factory(date="2024-01-20", weld_number="W002")
    weld_factory(date="2024-01-21", weld_number="W003")

    export = export_welds_to_csv(date(2024, 1, 15), date(2024, 1, 20))

    assert export.row_count == 2
    assert [line.split(",")[5] for line in _data_lines(export.content)] == ['"W002"', '"W001"']


def test_export_raises_not_found_when_no_rows(app):
    with pytest.raises(ExportNotFound) as excinfo:
        export_welds_to_csv()

    assert excinfo.value.message == "No data found for export"
    assert excinfo.value.status_code == 404


def test_inverted_bounds_raise_not_found(app, weld_factory):
    weld_factory(date="2024-01-15")

    with pytest.raises(ExportNotFound):
        export_welds_to_csv(date(2024, 2, 1), date(2024, 1, 1))


def test_dated_filename_uses_export_date(app, weld_factory):
    weld_factory()

    export = export_welds_to_csv(exported_on=date(2024, 1, 16))

    assert export.dated_filename == "welding-data-2024-01-16.csv"


def test_export_includes_custom_columns_when_enabled(app, weld_factory, field_factory):
    app.config["WELD_CSV_CUSTOM_FIELDS_ENABLED"] = True
    field_factory(field_name="heat_input", display_name="Heat Input")
    weld_factory(custom_fields={"heat_input": "1.2"})

    header, line = export_welds_to_csv().content.split("\n")

    assert header.endswith(",Heat Input")
    assert line.endswith(',"1.2"')


def test_quote_csv_value_doubles_embedded_quotes():
    assert quote_csv_value('say "hi"') == '"say ""hi"""'
    assert quote_csv_value(None) == '""'
    assert quote_csv_value(date(2024, 1, 15)) == '"2024-01-15"'


def test_encode_csv_quotes_headers_only_when_needed():
    content = encode_csv(["DATE", "Notes, misc"], [["2024-01-15", "a"]])

    assert content == 'DATE,"Notes, misc"\n"2024-01-15","a"'


def test_import_template_is_header_only(app):
    template = build_import_template()

    assert template == ",".join(get_weld_export_headers())
