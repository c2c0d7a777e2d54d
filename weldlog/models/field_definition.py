# weldlog/models/field_definition.py

from enum import Enum as PyEnum

from flask import current_app
from sqlalchemy import Enum
from sqlalchemy.exc import SQLAlchemyError

from .base import BaseModel, db


class FieldType(PyEnum):
    """Input widget types available to user-defined fields"""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"

    @classmethod
    def values(cls):
        return tuple(member.value for member in cls)


class FieldDefinition(BaseModel):
    """User-configurable metadata describing one weld entry field"""

    __tablename__ = "field_definitions"

    id = db.Column(db.Integer, primary_key=True)
    field_name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(200), nullable=False)
    field_type = db.Column(
        Enum(FieldType, name="field_type_enum", values_callable=lambda enum: [m.value for m in enum]),
        default=FieldType.TEXT,
        nullable=False,
    )
    is_required = db.Column(db.Boolean, default=False, nullable=False)
    is_editable = db.Column(db.Boolean, default=True, nullable=False)
    field_order = db.Column(db.Integer, default=0, nullable=False, index=True)
    validation_rules = db.Column(db.JSON, nullable=True)  # e.g. {"options": [...]} for select fields

    def __repr__(self):
        return f"<FieldDefinition {self.field_name} order={self.field_order}>"

    def to_dict(self):
        return {
            "id": self.id,
            "field_name": self.field_name,
            "display_name": self.display_name,
            "field_type": self.field_type.value if self.field_type else None,
            "is_required": bool(self.is_required),
            "is_editable": bool(self.is_editable),
            "field_order": self.field_order,
            "validation_rules": self.validation_rules,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @staticmethod
    def ordered_query():
        """Query in display order, ties broken by id"""
        return FieldDefinition.query.order_by(FieldDefinition.field_order.asc(), FieldDefinition.id.asc())

    @staticmethod
    def find_by_name(field_name):
        """Find a field definition by name with error handling"""
        try:
            return FieldDefinition.query.filter_by(field_name=field_name).first()
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error finding field definition {field_name}: {str(e)}")
            return None
