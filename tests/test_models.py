from datetime import date

from weldlog.models import WELD_CORE_COLUMNS, FieldDefinition, FieldType, Weld, db


def test_weld_to_dict_serializes_dates_and_columns(app, weld_factory):
    weld = weld_factory(date="2024-01-15", weld_number="W001", custom_fields={"heat_input": "1.2"})

    payload = weld.to_dict()

    assert payload["date"] == "2024-01-15"
    assert payload["custom_fields"] == {"heat_input": "1.2"}
    assert set(WELD_CORE_COLUMNS) <= set(payload)
    assert payload["created_at"] is not None


def test_weld_safe_create_and_delete(app):
    weld, error = Weld.safe_create(date=date(2024, 1, 15), weld_number="W001")

    assert error is None
    assert weld.id is not None

    success, error = weld.safe_delete()
    assert success is True
    assert Weld.query.count() == 0


def test_field_definition_safe_create_reports_duplicates(app, field_factory):
    field_factory(field_name="heat_input")

    field, error = FieldDefinition.safe_create(field_name="heat_input", display_name="Dup")

    assert field is None
    assert error.startswith("Duplicate or invalid value")


def test_field_definition_to_dict_and_order(app, field_factory):
    field_factory(field_name="b_field", display_name="B", field_order=1)
    field_factory(field_name="a_field", display_name="A", field_order=0, field_type=FieldType.SELECT)

    ordered = FieldDefinition.ordered_query().all()

    assert [f.field_name for f in ordered] == ["a_field", "b_field"]
    assert ordered[0].to_dict()["field_type"] == "select"
    assert FieldDefinition.find_by_name("b_field") is ordered[1]


def test_weld_safe_update(app, weld_factory):
    weld = weld_factory(welder="John Doe")

    success, error = weld.safe_update(welder="Jane Smith")

    assert success and error is None
    assert db.session.get(Weld, weld.id).welder == "Jane Smith"
