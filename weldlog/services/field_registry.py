# weldlog/services/field_registry.py
"""
Field Registry Service - manage user-defined weld field definitions
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from weldlog.errors import ConflictError, NotFoundError, UpstreamStoreError, ValidationError
from weldlog.models import FieldDefinition, FieldType, db

FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
FIELD_NAME_MAX_LENGTH = 100
DISPLAY_NAME_MAX_LENGTH = 200


class FieldValidationError(ValidationError):
    """Raised when a field definition payload is invalid."""


class FieldNotFound(NotFoundError):
    """Raised when a field definition id does not exist."""

    def __init__(self, field_id: Any) -> None:
        super().__init__("Field not found")
        self.field_id = field_id


class FieldConflict(ConflictError):
    """Raised when a field name is already registered."""


def _coerce_flag(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in {"true", "false", "1", "0", "yes", "no"}:
        return value.strip().lower() in {"true", "1", "yes"}
    raise FieldValidationError(f"{name} must be a boolean")


def _coerce_order(value: Any, name: str = "field_order") -> int:
    if isinstance(value, bool):
        raise FieldValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise FieldValidationError(f"{name} must be an integer") from None


class FieldRegistryService:
    """Service for managing field definitions consulted by forms and the CSV pipeline"""

    def list_fields(self) -> List[FieldDefinition]:
        """Return every field definition in display order"""
        try:
            return FieldDefinition.ordered_query().all()
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error fetching fields: {str(e)}")
            raise UpstreamStoreError("Failed to fetch fields") from e

    def get_field(self, field_id: int) -> FieldDefinition:
        try:
            field = db.session.get(FieldDefinition, field_id)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error fetching field {field_id}: {str(e)}")
            raise UpstreamStoreError("Failed to fetch field") from e
        if field is None:
            raise FieldNotFound(field_id)
        return field

    def create_field(self, payload: Mapping[str, Any]) -> FieldDefinition:
        """
        Validate and persist a new field definition.

        When ``field_order`` is omitted the field is appended after the
        current last field.
        """
        values = self._validate(payload, partial=False)
        if FieldDefinition.find_by_name(values["field_name"]) is not None:
            raise FieldConflict(f'Field "{values["field_name"]}" already exists')
        if "field_order" not in values:
            values["field_order"] = FieldDefinition.query.count()

        field, error = FieldDefinition.safe_create(**values)
        if field is None:
            if error and error.startswith("Duplicate"):
                raise FieldConflict(f'Field "{values["field_name"]}" already exists')
            raise UpstreamStoreError(error or "Failed to create field")
        current_app.logger.info(f"Created field definition {field.field_name} (ID: {field.id})")
        return field

    def update_field(self, field_id: int, payload: Mapping[str, Any]) -> FieldDefinition:
        """Update mutable attributes; ``field_name`` is immutable once created"""
        field = self.get_field(field_id)
        values = self._validate(payload, partial=True)
        new_name = values.pop("field_name", None)
        if new_name is not None and new_name != field.field_name:
            raise FieldValidationError("field_name cannot be changed after creation")

        success, error = field.safe_update(**values)
        if not success:
            raise UpstreamStoreError(error or "Failed to update field")
        current_app.logger.info(f"Updated field definition {field.field_name} (ID: {field.id})")
        return field

    def delete_field(self, field_id: int) -> None:
        field = self.get_field(field_id)
        field_name = field.field_name
        success, error = field.safe_delete()
        if not success:
            raise UpstreamStoreError(error or "Failed to delete field")
        current_app.logger.info(f"Deleted field definition {field_name} (ID: {field_id})")

    def reorder_fields(self, field_orders: Iterable[Mapping[str, Any]]) -> List[FieldDefinition]:
        """
        Apply a batch of ``{id, order}`` pairs and re-derive a dense order.

        Fields are sorted by (requested order, id); fields not mentioned keep
        their current order as the sort key. The result is written back as
        0..N-1. Unknown ids abort the whole batch.
        """
        if field_orders is None or isinstance(field_orders, (str, bytes, Mapping)):
            raise FieldValidationError("fieldOrders must be a list of {id, order} objects")

        requested: dict[int, int] = {}
        for entry in field_orders:
            if not isinstance(entry, Mapping) or "id" not in entry or "order" not in entry:
                raise FieldValidationError("fieldOrders must be a list of {id, order} objects")
            requested[_coerce_order(entry["id"], "id")] = _coerce_order(entry["order"], "order")

        fields = self.list_fields()
        fields_by_id = {field.id: field for field in fields}
        missing = sorted(field_id for field_id in requested if field_id not in fields_by_id)
        if missing:
            raise FieldNotFound(missing[0])

        ranked = sorted(fields, key=lambda f: (requested.get(f.id, f.field_order), f.id))
        try:
            for position, field in enumerate(ranked):
                field.field_order = position
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error reordering fields: {str(e)}")
            raise UpstreamStoreError("Failed to reorder fields") from e

        current_app.logger.info(f"Reordered {len(requested)} field definitions")
        return ranked

    def _validate(self, payload: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise FieldValidationError("Invalid JSON data")

        values: dict[str, Any] = {}

        if "field_name" in payload or not partial:
            field_name = str(payload.get("field_name") or "").strip()
            if not field_name:
                raise FieldValidationError("Field name and display name are required")
            if len(field_name) > FIELD_NAME_MAX_LENGTH:
                raise FieldValidationError(f"field_name must be {FIELD_NAME_MAX_LENGTH} characters or less")
            if not FIELD_NAME_PATTERN.match(field_name):
                raise FieldValidationError(
                    "field_name must start with a letter or underscore and contain only letters, digits and underscores"
                )
            values["field_name"] = field_name

        if "display_name" in payload or not partial:
            display_name = str(payload.get("display_name") or "").strip()
            if not display_name:
                raise FieldValidationError("Field name and display name are required")
            if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
                raise FieldValidationError(f"display_name must be {DISPLAY_NAME_MAX_LENGTH} characters or less")
            values["display_name"] = display_name

        if "field_type" in payload or not partial:
            raw_type = payload.get("field_type") or FieldType.TEXT.value
            try:
                values["field_type"] = FieldType(str(raw_type).strip().lower())
            except ValueError:
                raise FieldValidationError(
                    f"field_type must be one of: {', '.join(FieldType.values())}"
                ) from None

        for flag in ("is_required", "is_editable"):
            if payload.get(flag) is not None:
                values[flag] = _coerce_flag(payload[flag], flag)

        if payload.get("field_order") is not None:
            values["field_order"] = _coerce_order(payload["field_order"])

        if "validation_rules" in payload:
            rules = payload.get("validation_rules")
            if rules is not None and not isinstance(rules, Mapping):
                raise FieldValidationError("validation_rules must be an object")
            values["validation_rules"] = dict(rules) if rules else None

        return values
