"""Helpers for normalizing parser payloads before logging or display."""

from __future__ import annotations

from datetime import date, time
from typing import Any, Dict

FIELD_LABELS = {
    "identifier": "patient ID",
    "start_time": "start",
    "end_time": "end",
    "by_date": "due date",
    "by_time": "due time",
    "medicine_name": "medicine",
    "updated_name": "new name",
    "updated_quantity": "new quantity",
    "search_keyword": "keyword",
    "search_by": "search by",
    "sort_by": "sort by",
    "test_name": "test",
    "test_result": "result",
}


def serialize_value(key: str, value: Any) -> Any:
    """Convert typed payload values into JSON-safe scalars."""

    if key == "identifier" and isinstance(value, int):
        return f"{value:04d}"
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


def serialize_payload(payload: Dict[str, Any] | None) -> Dict[str, Any]:
    """Return a shallow copy with dates, times and identifiers rendered as text."""

    if not payload:
        return {}
    return {key: serialize_value(key, value) for key, value in payload.items()}


def describe_payload(payload: Dict[str, Any] | None) -> str:
    """Render ``key: value`` pairs with human-friendly labels for the CLI."""

    parts = []
    for key, value in serialize_payload(payload).items():
        label = FIELD_LABELS.get(key, key.replace("_", " "))
        parts.append(f"{label}: {value}")
    return ", ".join(parts)


__all__ = ["FIELD_LABELS", "serialize_value", "serialize_payload", "describe_payload"]
