# weldlog/services/weld_store.py
"""
Weld Store - persistence of weld records on top of Flask-SQLAlchemy
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from weldlog.errors import NotFoundError, UpstreamStoreError, ValidationError
from weldlog.models import WELD_CORE_COLUMNS, Weld, db

# Accepted spellings for the weld date, tried in order
DATE_INPUT_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")

WRITABLE_COLUMNS = (*WELD_CORE_COLUMNS, "custom_fields", "image_path")


class WeldStoreError(UpstreamStoreError):
    """Raised when the store rejects a weld record."""


class WeldNotFound(NotFoundError):
    """Raised when a weld id does not exist."""

    def __init__(self, weld_id: int) -> None:
        super().__init__("Weld not found")
        self.weld_id = weld_id


class WeldValidationError(ValidationError):
    """Raised when a weld payload fails validation before reaching the database."""


def parse_weld_date(value: Any) -> date:
    """
    Coerce a date value into ``datetime.date``.

    Accepts ``date``/``datetime`` objects, ISO-8601 dates, ISO-8601 datetimes
    (the date part is kept) and ``MM/DD/YYYY``. Raises ``ValueError`` otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise ValueError("date is required")

    text = str(value).strip()
    if not text:
        raise ValueError("date is required")

    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f'invalid input syntax for type date: "{text}"') from None


def parse_date_bound(value: Optional[str], name: str) -> Optional[date]:
    """Parse an optional query-string date bound, raising a validation error on bad input."""
    if value is None or str(value).strip() == "":
        return None
    try:
        return parse_weld_date(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {name}: {exc}") from exc


def _clean_payload(values: Mapping[str, Any]) -> dict[str, Any]:
    """Keep known columns, turning empty strings into NULL like the entry forms do."""
    cleaned: dict[str, Any] = {}
    for column in WRITABLE_COLUMNS:
        if column not in values:
            continue
        value = values[column]
        if column == "custom_fields":
            if value in (None, "", {}):
                value = None
            elif not isinstance(value, dict):
                raise WeldValidationError("custom_fields must be an object")
        elif isinstance(value, str):
            value = value.strip() or None
        elif value is not None and not isinstance(value, (date, datetime)):
            value = str(value)
        cleaned[column] = value
    return cleaned


@dataclass
class WeldPage:
    items: list[Weld]
    page: int
    limit: int


class WeldStore:
    """Persistence operations for weld records"""

    def insert(self, values: Mapping[str, Any]) -> Weld:
        """
        Insert a new weld and commit.

        Raises:
            WeldStoreError: when the record is rejected (bad date, constraint
                violation, lost connection). The session is rolled back first.
        """
        payload = _clean_payload(values)
        try:
            payload["date"] = parse_weld_date(payload.get("date"))
        except ValueError as exc:
            raise WeldStoreError(str(exc)) from exc

        weld = Weld(**payload)
        try:
            db.session.add(weld)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.warning("Weld insert rejected: %s", e)
            raise WeldStoreError(str(getattr(e, "orig", None) or e)) from e
        return weld

    def query(self, date_from: Optional[date] = None, date_to: Optional[date] = None) -> list[Weld]:
        """Return welds within the inclusive date bounds, newest first"""
        try:
            return self._filtered(date_from, date_to).all()
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error querying welds: {str(e)}")
            raise WeldStoreError("Failed to query welds") from e

    def search(
        self,
        *,
        search: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: int = 1,
        limit: int = 50,
    ) -> WeldPage:
        """Paginated listing with a free-text filter on weld number, welder and fit type"""
        page = max(1, page)
        limit = max(1, limit)
        query = self._filtered(date_from, date_to)
        if search:
            term = f"%{search.strip()}%"
            query = query.filter(
                or_(Weld.weld_number.ilike(term), Weld.welder.ilike(term), Weld.type_fit.ilike(term))
            )
        try:
            items = query.limit(limit).offset((page - 1) * limit).all()
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error listing welds: {str(e)}")
            raise WeldStoreError("Failed to fetch welds") from e
        return WeldPage(items=items, page=page, limit=limit)

    def get(self, weld_id: int) -> Weld:
        try:
            weld = db.session.get(Weld, weld_id)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error fetching weld {weld_id}: {str(e)}")
            raise WeldStoreError("Failed to fetch weld") from e
        if weld is None:
            raise WeldNotFound(weld_id)
        return weld

    def create(self, values: Mapping[str, Any]) -> Weld:
        """Create from API input; unlike ``insert`` a bad date is a validation error"""
        try:
            parse_weld_date(values.get("date"))
        except ValueError as exc:
            raise WeldValidationError(str(exc)) from exc
        return self.insert(values)

    def update(self, weld_id: int, values: Mapping[str, Any]) -> Weld:
        """Update the writable columns present in ``values``; other columns keep their value"""
        weld = self.get(weld_id)
        payload = _clean_payload(values)
        try:
            payload["date"] = parse_weld_date(payload.get("date", weld.date))
        except ValueError as exc:
            raise WeldValidationError(str(exc)) from exc

        success, error = weld.safe_update(**payload)
        if not success:
            raise WeldStoreError(error or "Failed to update weld")
        return weld

    def delete(self, weld_id: int) -> None:
        weld = self.get(weld_id)
        success, error = weld.safe_delete()
        if not success:
            raise WeldStoreError(error or "Failed to delete weld")

    @staticmethod
    def _filtered(date_from: Optional[date], date_to: Optional[date]):
        query = Weld.query
        if date_from is not None:
            query = query.filter(Weld.date >= date_from)
        if date_to is not None:
            query = query.filter(Weld.date <= date_to)
        return query.order_by(Weld.date.desc(), Weld.created_at.desc(), Weld.id.desc())
