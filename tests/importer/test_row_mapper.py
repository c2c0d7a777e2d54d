from types import SimpleNamespace

from weldlog.importer.contracts import build_custom_field_specs, get_weld_alias_table
from weldlog.importer.row_mapper import map_row


def test_legacy_headers_map_to_canonical_names():
    mapped = map_row({"DATE": "2024-01-15", "WELD #": "W001", "WELDER": "John Doe", "1st HT#": "H123"})

    assert mapped.values == {
        "date": "2024-01-15",
        "weld_number": "W001",
        "welder": "John Doe",
        "first_ht_number": "H123",
    }
    assert mapped.is_importable


def test_snake_case_headers_are_accepted():
    mapped = map_row({"date": "2024-01-15", "weld_number": "W002", "pre_heat": "150F"})

    assert mapped.values == {"date": "2024-01-15", "weld_number": "W002", "pre_heat": "150F"}


def test_legacy_header_wins_over_snake_case_when_both_present():
    mapped = map_row({"date": "2024-02-01", "DATE": "2024-01-15", "weld_number": "W9", "WELD #": "W1"})

    assert mapped.date == "2024-01-15"
    assert mapped.values["weld_number"] == "W1"


def test_empty_legacy_value_falls_back_to_next_alias():
    mapped = map_row({"DATE": "   ", "date": "2024-03-01"})

    assert mapped.date == "2024-03-01"


def test_headers_match_case_and_space_insensitively():
    mapped = map_row({" Date ": "2024-01-15", "Weld Number": "W3", "type fit": "BW"})

    assert mapped.values == {"date": "2024-01-15", "weld_number": "W3", "type_fit": "BW"}


def test_values_are_stripped_and_blank_values_omitted():
    mapped = map_row({"DATE": " 2024-01-15 ", "WELDER": "  ", "VT": None, "Amps": " 120 "})

    assert mapped.values == {"date": "2024-01-15", "amps": "120"}


def test_row_without_date_is_not_importable():
    mapped = map_row({"WELD #": "W004", "WELDER": "Jane"})

    assert mapped.date is None
    assert not mapped.is_importable


def test_unknown_and_surplus_columns_are_ignored():
    mapped = map_row({"DATE": "2024-01-15", "Notes": "ignore me", None: ["extra"]})

    assert mapped.values == {"date": "2024-01-15"}
    assert mapped.as_record() == {"date": "2024-01-15"}


def test_custom_fields_collected_separately_when_in_alias_table():
    table = get_weld_alias_table(
        build_custom_field_specs([SimpleNamespace(field_name="heat_input", display_name="Heat Input")])
    )

    mapped = map_row({"DATE": "2024-01-15", "Heat Input": "1.2 kJ/mm"}, table)

    assert mapped.values == {"date": "2024-01-15"}
    assert mapped.custom_fields == {"heat_input": "1.2 kJ/mm"}
    assert mapped.as_record() == {"date": "2024-01-15", "custom_fields": {"heat_input": "1.2 kJ/mm"}}
