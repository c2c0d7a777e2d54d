"""Canonical weld CSV contract.

Single source of truth for the 19 canonical weld columns: the storage column
each maps to, the header written on export, and the ordered header spellings
accepted on import. Alias order is the tie-break rule when a CSV carries more
than one spelling for the same column.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Tuple

DATE_FIELD = "date"


@dataclass(frozen=True)
class FieldSpec:
    """Metadata describing a canonical (or registered custom) CSV column."""

    name: str
    header: str
    aliases: Tuple[str, ...] = ()
    description: str = ""
    custom: bool = False

    def headers(self) -> Tuple[str, ...]:
        """Return the preferred header followed by the fallback aliases, in priority order."""

        ordered: list[str] = []
        for candidate in (self.header, *self.aliases):
            if candidate not in ordered:
                ordered.append(candidate)
        return tuple(ordered)


WELD_CANONICAL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(name="date", header="DATE", aliases=("date",), description="Weld date (ISO-8601)."),
    FieldSpec(name="type_fit", header="TYPE FIT", aliases=("type_fit",), description="Fit-up type."),
    FieldSpec(name="wps", header="WPS", aliases=("wps",), description="Welding procedure specification."),
    FieldSpec(name="pipe_dia", header="PIPE DIA", aliases=("pipe_dia",), description="Pipe diameter."),
    FieldSpec(
        name="grade_class",
        header="GRADE /CLASS",
        aliases=("grade_class",),
        description="Material grade / class.",
    ),
    FieldSpec(name="weld_number", header="WELD #", aliases=("weld_number",), description="Weld identifier."),
    FieldSpec(name="welder", header="WELDER", aliases=("welder",), description="Welder name or stencil."),
    FieldSpec(
        name="first_ht_number",
        header="1st HT#",
        aliases=("first_ht_number",),
        description="Heat number of the first joint.",
    ),
    FieldSpec(
        name="first_length",
        header="1st Length",
        aliases=("first_length",),
        description="Length of the first joint.",
    ),
    FieldSpec(name="jt_number", header="JT", aliases=("jt_number",), description="Joint number."),
    FieldSpec(
        name="second_ht_number",
        header="2nd HT#",
        aliases=("second_ht_number",),
        description="Heat number of the second joint.",
    ),
    FieldSpec(
        name="second_length",
        header="2nd Length",
        aliases=("second_length",),
        description="Length of the second joint.",
    ),
    FieldSpec(name="pre_heat", header="PRE HEAT", aliases=("pre_heat",), description="Preheat temperature."),
    FieldSpec(name="vt", header="VT", aliases=("vt",), description="Visual test result."),
    FieldSpec(name="process", header="Process", aliases=("process",), description="Welding process."),
    FieldSpec(name="nde_number", header="NDE", aliases=("nde_number",), description="NDE report number."),
    FieldSpec(name="amps", header="Amps", aliases=("amps",), description="Amperage."),
    FieldSpec(name="volts", header="Volts", aliases=("volts",), description="Voltage."),
    FieldSpec(name="ipm", header="IPM", aliases=("ipm",), description="Travel speed (inches per minute)."),
)


def get_weld_field_specs() -> Tuple[FieldSpec, ...]:
    """Return the canonical weld field specs in export order."""

    return WELD_CANONICAL_FIELDS


def get_weld_field_names() -> Tuple[str, ...]:
    return tuple(field.name for field in WELD_CANONICAL_FIELDS)


def get_weld_export_headers() -> Tuple[str, ...]:
    """Preferred header labels written on export."""

    return tuple(field.header for field in WELD_CANONICAL_FIELDS)


def normalize_header(header: str) -> str:
    """Normalize a CSV header for comparison (case/space/underscore agnostic)."""

    token = header.lstrip("\ufeff").strip().lower()
    for char in (" ", "-", "."):
        token = token.replace(char, "_")
    return token


def build_custom_field_specs(definitions: Iterable[object]) -> Tuple[FieldSpec, ...]:
    """
    Build alias entries for registered field definitions that are not canonical columns.

    ``definitions`` are objects exposing ``field_name`` and ``display_name``
    (``FieldDefinition`` rows in practice). The display name is the preferred
    header, the raw field name is the fallback.
    """

    canonical = set(get_weld_field_names())
    specs: list[FieldSpec] = []
    for definition in definitions:
        field_name = getattr(definition, "field_name", None)
        if not field_name or field_name in canonical:
            continue
        display_name = (getattr(definition, "display_name", None) or "").strip() or field_name
        specs.append(FieldSpec(name=field_name, header=display_name, aliases=(field_name,), custom=True))
    return tuple(specs)


def get_weld_alias_table(custom_specs: Sequence[FieldSpec] = ()) -> Tuple[FieldSpec, ...]:
    """
    Return the alias table used by import and export.

    The static canonical table always comes first; custom field specs are
    appended only when the caller supplies them.
    """

    if not custom_specs:
        return WELD_CANONICAL_FIELDS
    return (*WELD_CANONICAL_FIELDS, *custom_specs)


def get_weld_alias_map(alias_table: Sequence[FieldSpec] = WELD_CANONICAL_FIELDS) -> Mapping[str, str]:
    """Map normalized header tokens to field names (first spec wins on collisions)."""

    mapping: dict[str, str] = {}
    for field in alias_table:
        for header in field.headers():
            mapping.setdefault(normalize_header(header), field.name)
    return mapping


def resolve_headers(headers: Sequence[str], alias_table: Sequence[FieldSpec] = WELD_CANONICAL_FIELDS) -> Tuple[str | None, ...]:
    """Resolve raw headers to field names using aliases; unknown headers resolve to None."""

    alias_map = get_weld_alias_map(alias_table)
    return tuple(alias_map.get(normalize_header(header)) for header in headers)
