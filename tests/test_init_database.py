from scripts.init_database import create_default_field_definitions
from weldlog.importer.contracts import get_weld_field_names
from weldlog.models import FieldDefinition, FieldType


def test_seeds_one_definition_per_weld_column(app):
    created = create_default_field_definitions()

    assert len(created) == 19
    ordered = FieldDefinition.ordered_query().all()
    assert tuple(f.field_name for f in ordered) == get_weld_field_names()
    assert ordered[0].field_type == FieldType.DATE
    assert ordered[0].is_required is True
    assert ordered[5].display_name == "WELD #"


def test_seeding_is_idempotent(app):
    create_default_field_definitions()

    assert create_default_field_definitions() == []
    assert FieldDefinition.query.count() == 19
