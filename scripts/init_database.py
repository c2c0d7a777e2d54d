# scripts/init_database.py

"""
Database initialization script.
This script creates all tables and seeds default data:
- One field definition per built-in weld column, in CSV column order
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app  # noqa: E402
from weldlog.importer.contracts import get_weld_field_specs  # noqa: E402
from weldlog.models import FieldDefinition, FieldType, db  # noqa: E402

# Columns that get a non-text input widget on the entry form
DEFAULT_FIELD_TYPES = {
    "date": FieldType.DATE,
    "amps": FieldType.NUMBER,
    "volts": FieldType.NUMBER,
    "ipm": FieldType.NUMBER,
}


def create_default_field_definitions():
    """Create a field definition for every built-in weld column that lacks one"""
    created = []
    for order, spec in enumerate(get_weld_field_specs()):
        if FieldDefinition.query.filter_by(field_name=spec.name).first():
            continue
        field = FieldDefinition(
            field_name=spec.name,
            display_name=spec.header,
            field_type=DEFAULT_FIELD_TYPES.get(spec.name, FieldType.TEXT),
            is_required=spec.name == "date",
            is_editable=True,
            field_order=order,
        )
        db.session.add(field)
        created.append(field)

    db.session.commit()
    return created


def init_database():
    """Initialize database with all default data"""
    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("Database tables created")

        print("Creating default field definitions...")
        fields = create_default_field_definitions()
        print(f"Created {len(fields)} default field definitions")

        print("\nDatabase initialization complete!")
        print("\nNext steps:")
        print("  1. Import existing weld logs: flask --app app welds import-csv <path>")
        print("  2. Or start the API server: python app.py")


if __name__ == "__main__":
    init_database()
