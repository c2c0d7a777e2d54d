"""Persistence-facing services used by routes, the CLI and the CSV pipeline."""

from .field_registry import FieldConflict, FieldNotFound, FieldRegistryService, FieldValidationError
from .weld_store import WeldNotFound, WeldStore, WeldStoreError, WeldValidationError

__all__ = [
    "FieldConflict",
    "FieldNotFound",
    "FieldRegistryService",
    "FieldValidationError",
    "WeldNotFound",
    "WeldStore",
    "WeldStoreError",
    "WeldValidationError",
]
