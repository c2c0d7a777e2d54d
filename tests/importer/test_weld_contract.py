from types import SimpleNamespace

from weldlog.importer.contracts import (
    WELD_CANONICAL_FIELDS,
    build_custom_field_specs,
    get_weld_alias_map,
    get_weld_alias_table,
    get_weld_export_headers,
    get_weld_field_names,
    normalize_header,
    resolve_headers,
)
from weldlog.models import WELD_CORE_COLUMNS


def test_canonical_fields_cover_every_weld_column_in_order():
    assert get_weld_field_names() == WELD_CORE_COLUMNS
    assert len(WELD_CANONICAL_FIELDS) == 19


def test_export_headers_use_legacy_spellings():
    headers = get_weld_export_headers()

    assert headers[0] == "DATE"
    assert headers[4] == "GRADE /CLASS"
    assert headers[5] == "WELD #"
    assert headers[7] == "1st HT#"
    assert headers[-1] == "IPM"


def test_each_field_lists_legacy_header_before_snake_case_name():
    for spec in WELD_CANONICAL_FIELDS:
        assert spec.headers() == (spec.header, spec.name)


def test_normalize_header_ignores_case_spacing_and_bom():
    assert normalize_header("\ufeff Weld Number ") == "weld_number"
    assert normalize_header("PRE-HEAT") == "pre_heat"
    assert normalize_header("type.fit") == "type_fit"


def test_resolve_headers_marks_unknown_columns():
    resolved = resolve_headers(["DATE", "weld number", "Notes"])

    assert resolved == ("date", "weld_number", None)


def test_alias_map_first_spec_wins_on_collision():
    alias_map = get_weld_alias_map()

    assert alias_map["weld_#"] == "weld_number"
    assert alias_map["date"] == "date"


def test_custom_specs_skip_canonical_names_and_prefer_display_name():
    definitions = [
        SimpleNamespace(field_name="heat_input", display_name="Heat Input"),
        SimpleNamespace(field_name="welder", display_name="Welder Name"),
        SimpleNamespace(field_name="inspector", display_name=""),
    ]

    specs = build_custom_field_specs(definitions)

    assert [spec.name for spec in specs] == ["heat_input", "inspector"]
    assert specs[0].headers() == ("Heat Input", "heat_input")
    assert specs[1].headers() == ("inspector",)
    assert all(spec.custom for spec in specs)


def test_alias_table_appends_custom_specs_after_canonical_fields():
    custom = build_custom_field_specs([SimpleNamespace(field_name="heat_input", display_name="Heat Input")])

    assert get_weld_alias_table() is WELD_CANONICAL_FIELDS
    table = get_weld_alias_table(custom)
    assert table[:19] == WELD_CANONICAL_FIELDS
    assert table[-1].name == "heat_input"
