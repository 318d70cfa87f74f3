"""Declarative field tables shared by the family parsers.

A ``CommandSchema`` lists the markers a sub-command understands and how each
field behaves when its marker is absent, present with nothing after it, or
present with a value. ``apply_schema`` walks the table and returns the typed
payload plus any advisory messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import FieldState, ScannedField, find_marker, scan_field

NO_DEFAULT = object()

# How a field reacts to ``marker`` followed by nothing.
EMPTY_CONVERT = "convert"  # run the converter on "" and let it raise
EMPTY_KEEP = "keep"  # leave the field unset and emit the advisory
EMPTY_REJECT = "reject"  # raise the schema's empty_kind
EMPTY_TEXT = "text"  # store ""


def _identity(value: str) -> str:
    return value


@dataclass(frozen=True)
class FieldSpec:
    name: str
    marker: str
    convert: Callable[[str], Any] = _identity
    required: bool = False
    default: Any = NO_DEFAULT
    on_empty: str = EMPTY_CONVERT
    advisory: Optional[str] = None


@dataclass(frozen=True)
class CommandSchema:
    markers: Tuple[str, ...]
    fields: Tuple[FieldSpec, ...]
    positional: bool = False
    missing_kind: ErrorKind = ErrorKind.MISSING_REQUIRED_FIELD
    empty_kind: ErrorKind = ErrorKind.MISSING_EDIT_INPUT

    def has_any_marker(self, body: str) -> bool:
        return any(find_marker(body, spec.marker) != -1 for spec in self.fields)


def apply_schema(body: str, schema: CommandSchema) -> Tuple[Dict[str, Any], List[str]]:
    """Extract every field of ``schema`` from ``body``.

    Raises ``ParseError`` on the first field that fails; nothing is returned
    partially.
    """

    if schema.positional:
        scanned = _scan_positional(body, schema)
    else:
        scanned = [scan_field(body, spec.marker, schema.markers) for spec in schema.fields]

    payload: Dict[str, Any] = {}
    advisories: List[str] = []
    for spec, field_value in zip(schema.fields, scanned):
        if field_value.absent:
            if spec.required:
                raise ParseError(schema.missing_kind, detail=spec.marker)
            if spec.default is not NO_DEFAULT:
                payload[spec.name] = spec.default
            continue
        if field_value.empty:
            if spec.on_empty == EMPTY_KEEP:
                if spec.advisory:
                    advisories.append(spec.advisory)
                continue
            if spec.on_empty == EMPTY_REJECT:
                raise ParseError(schema.empty_kind, detail=spec.marker)
            if spec.on_empty == EMPTY_TEXT:
                payload[spec.name] = ""
                continue
        payload[spec.name] = spec.convert(field_value.raw)
    return payload, advisories


def _scan_positional(body: str, schema: CommandSchema) -> List[ScannedField]:
    """Read fields in declared order; each value stops at the next declared marker."""

    results: List[ScannedField] = []
    cursor = 0
    specs: Sequence[FieldSpec] = schema.fields
    for position, spec in enumerate(specs):
        start = find_marker(body, spec.marker, cursor)
        if start == -1:
            results.append(ScannedField(FieldState.ABSENT))
            continue
        value_start = start + len(spec.marker)
        end = len(body)
        for following in specs[position + 1:]:
            candidate = find_marker(body, following.marker, value_start)
            if candidate != -1:
                end = candidate
                break
        value = body[value_start:end].strip()
        results.append(ScannedField(FieldState.PRESENT, value) if value else ScannedField(FieldState.EMPTY))
        cursor = end
    return results


__all__ = [
    "NO_DEFAULT",
    "EMPTY_CONVERT",
    "EMPTY_KEEP",
    "EMPTY_REJECT",
    "EMPTY_TEXT",
    "FieldSpec",
    "CommandSchema",
    "apply_schema",
]
