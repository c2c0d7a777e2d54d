# weldlog/models/__init__.py
"""
Database models package
"""

from .base import BaseModel, db
from .field_definition import FieldDefinition, FieldType
from .weld import WELD_CORE_COLUMNS, Weld

__all__ = [
    "db",
    "BaseModel",
    "Weld",
    "WELD_CORE_COLUMNS",
    "FieldDefinition",
    "FieldType",
]
