"""Canonical CSV contract helpers for the weld importer."""

from __future__ import annotations

from .weld import (
    DATE_FIELD,
    WELD_CANONICAL_FIELDS,
    FieldSpec,
    build_custom_field_specs,
    get_weld_alias_map,
    get_weld_alias_table,
    get_weld_export_headers,
    get_weld_field_names,
    get_weld_field_specs,
    normalize_header,
    resolve_headers,
)

__all__ = [
    "DATE_FIELD",
    "FieldSpec",
    "WELD_CANONICAL_FIELDS",
    "build_custom_field_specs",
    "get_weld_alias_map",
    "get_weld_alias_table",
    "get_weld_export_headers",
    "get_weld_field_names",
    "get_weld_field_specs",
    "normalize_header",
    "resolve_headers",
]
