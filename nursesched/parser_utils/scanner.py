"""Marker scanning helpers shared across every command family.

A command body is a flat string such as ``id/0123 s/09:00 e/10:00``. Each
field starts with a short marker (``id/``, ``s/`` ...) and its value runs up to
the next marker or the end of the body. Markers only count when they start the
body or follow whitespace, which keeps ``d/`` from matching inside ``id/`` and
``n/`` from matching inside ``mn/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from nursesched.errors import ErrorKind, ParseError


class FieldState(Enum):
    """Outcome of looking for one marker inside a command body."""

    ABSENT = "absent"
    EMPTY = "empty"
    PRESENT = "present"


@dataclass(frozen=True)
class ScannedField:
    state: FieldState
    raw: str = ""

    @property
    def absent(self) -> bool:
        return self.state is FieldState.ABSENT

    @property
    def empty(self) -> bool:
        return self.state is FieldState.EMPTY


def find_marker(body: str, marker: str, start: int = 0) -> int:
    """Return the first position of ``marker`` at or after ``start``, or ``-1``."""

    position = body.find(marker, max(start, 0))
    while position != -1:
        if position == 0 or body[position - 1].isspace():
            return position
        position = body.find(marker, position + 1)
    return -1


def next_boundary(body: str, start: int, markers: Sequence[str]) -> int:
    """Return where the field value beginning at ``start`` ends.

    Every marker is considered at once; the earliest occurrence wins and the
    end of the body is used when no marker follows.
    """

    boundary = len(body)
    for marker in markers:
        position = find_marker(body, marker, start)
        if position != -1 and position < boundary:
            boundary = position
    return boundary


def scan_field(body: str, marker: str, markers: Sequence[str]) -> ScannedField:
    """Locate ``marker`` and classify its value as absent, empty or present."""

    position = find_marker(body, marker)
    if position == -1:
        return ScannedField(FieldState.ABSENT)
    value_start = position + len(marker)
    value = body[value_start:next_boundary(body, value_start, markers)].strip()
    if not value:
        return ScannedField(FieldState.EMPTY)
    return ScannedField(FieldState.PRESENT, value)


def value_end(body: str, marker: str, markers: Sequence[str]) -> int:
    """Return the boundary that closes the value of ``marker`` (``-1`` when absent)."""

    position = find_marker(body, marker)
    if position == -1:
        return -1
    return next_boundary(body, position + len(marker), markers)


def extract(body: str, start_marker: str, end_marker: Optional[str] = None) -> str:
    """Return the trimmed text between ``start_marker`` and ``end_marker``.

    Without an end marker, or when it does not follow the start marker, the
    value runs to the end of the body.
    """

    position = find_marker(body, start_marker)
    if position == -1:
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail=start_marker)
    start = position + len(start_marker)
    end = find_marker(body, end_marker, start) if end_marker else -1
    if end == -1:
        return body[start:].strip()
    return body[start:end].strip()


def extract_token(body: str, marker: str) -> str:
    """Return the single whitespace-delimited token following ``marker``."""

    position = find_marker(body, marker)
    if position == -1:
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail=marker)
    start = position + len(marker)
    remainder = body[start:]
    if not remainder or remainder[0].isspace():
        return ""
    return remainder.split(None, 1)[0]


def split_command(line: str) -> tuple[str, str]:
    """Drop the family token and return ``(sub_command, body)``.

    The sub-command is lowercased; the body keeps its original spacing apart
    from the leading whitespace run.
    """

    parts = line.strip().split(None, 1)
    if len(parts) < 2:
        return "", ""
    rest = parts[1].split(None, 1)
    sub_command = rest[0].lower()
    body = rest[1] if len(rest) > 1 else ""
    return sub_command, body


__all__ = [
    "FieldState",
    "ScannedField",
    "find_marker",
    "next_boundary",
    "scan_field",
    "value_end",
    "extract",
    "extract_token",
    "split_command",
]
