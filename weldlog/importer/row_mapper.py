"""Map raw CSV rows onto the canonical weld record.

Resolution is a pure function of the row and the alias table:

* for each field, aliases are tried in the order the table lists them and the
  first one carrying a non-empty value wins;
* exact header matches are tried before case/space-insensitive matches, so a
  row holding both ``DATE`` and ``date`` always resolves to ``DATE``;
* fields without a usable value are left out of the candidate entirely.

No type coercion happens here; values are kept as stripped strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .contracts import DATE_FIELD, WELD_CANONICAL_FIELDS, FieldSpec, normalize_header


@dataclass(frozen=True)
class MappedRow:
    """Candidate weld values resolved from one CSV row."""

    values: dict[str, str]
    custom_fields: dict[str, str] = field(default_factory=dict)

    @property
    def date(self) -> str | None:
        return self.values.get(DATE_FIELD)

    @property
    def is_importable(self) -> bool:
        """A row can be imported only when it resolved a non-empty date."""

        return bool(self.date)

    def as_record(self) -> dict[str, object]:
        """Return the store payload: canonical values plus ``custom_fields`` when present."""

        record: dict[str, object] = dict(self.values)
        if self.custom_fields:
            record["custom_fields"] = dict(self.custom_fields)
        return record


def _clean_value(value: object | None) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _sanitize_header(header: str) -> str:
    return header.lstrip("\ufeff").strip()


def _index_row(row: Mapping[object, object | None]) -> tuple[dict[str, object | None], dict[str, list[object | None]]]:
    exact: dict[str, object | None] = {}
    normalized: dict[str, list[object | None]] = {}
    for raw_key, value in row.items():
        # DictReader files surplus cells under a None key
        if not isinstance(raw_key, str):
            continue
        key = _sanitize_header(raw_key)
        exact.setdefault(key, value)
        normalized.setdefault(normalize_header(key), []).append(value)
    return exact, normalized


def _resolve(spec: FieldSpec, exact: dict[str, object | None], normalized: dict[str, list[object | None]]) -> str | None:
    aliases = spec.headers()
    for alias in aliases:
        value = _clean_value(exact.get(alias))
        if value is not None:
            return value
    for alias in aliases:
        for candidate in normalized.get(normalize_header(alias), ()):
            value = _clean_value(candidate)
            if value is not None:
                return value
    return None


def map_row(row: Mapping[object, object | None], alias_table: Sequence[FieldSpec] = WELD_CANONICAL_FIELDS) -> MappedRow:
    """Resolve one CSV row into a :class:`MappedRow` using ``alias_table``."""

    exact, normalized = _index_row(row)
    values: dict[str, str] = {}
    custom_fields: dict[str, str] = {}
    for spec in alias_table:
        value = _resolve(spec, exact, normalized)
        if value is None:
            continue
        if spec.custom:
            custom_fields[spec.name] = value
        else:
            values[spec.name] = value
    return MappedRow(values=values, custom_fields=custom_fields)
