"""Shared helper utilities for command parsing."""

from .scanner import (
    FieldState,
    ScannedField,
    extract,
    extract_token,
    find_marker,
    next_boundary,
    scan_field,
    split_command,
    value_end,
)
from .validators import (
    parse_date,
    parse_identifier,
    parse_importance,
    parse_index,
    parse_quantity,
    parse_time,
    require_text,
)

__all__ = [
    "FieldState",
    "ScannedField",
    "extract",
    "extract_token",
    "find_marker",
    "next_boundary",
    "scan_field",
    "split_command",
    "value_end",
    "parse_date",
    "parse_identifier",
    "parse_importance",
    "parse_index",
    "parse_quantity",
    "parse_time",
    "require_text",
]
