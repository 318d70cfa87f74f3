"""Value validators that turn raw field text into typed values.

Every helper either returns the converted value or raises ``ParseError`` with
exactly one ``ErrorKind``; ``ValueError`` from the conversion never escapes.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time

from nursesched.errors import ErrorKind, ParseError

logger = logging.getLogger(__name__)

_MAX_INDEX_LENGTH = 10
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_PATTERN = re.compile(r"[0-9]{4}")
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}(?::[0-9]{2})?")
_ASCII_DIGITS = frozenset("0123456789")


def parse_index(text: str, *, zero_kind: ErrorKind = ErrorKind.NEGATIVE_INDEX) -> int:
    """Convert a 1-based index typed by the user into a 0-based list index.

    ``zero_kind`` lets a family report ``"0"`` differently from negative input;
    appointments decrement first and report it as a negative index while
    patients report a dedicated zero-index error.
    """

    value = (text or "").strip()
    if not value:
        raise ParseError(ErrorKind.MISSING_INDEX_PARAMETER)
    if len(value) > _MAX_INDEX_LENGTH:
        logger.warning("Index value too large: %s", value)
        raise ParseError(ErrorKind.INDEX_TOO_LARGE)
    if not _INTEGER_PATTERN.fullmatch(value):
        logger.warning("Invalid index format: %s", value)
        raise ParseError(ErrorKind.INVALID_INDEX_PARAMETER, detail=value)
    index = int(value) - 1
    if index == -1:
        raise ParseError(zero_kind)
    if index < 0:
        logger.warning("Negative index: %s", value)
        raise ParseError(ErrorKind.NEGATIVE_INDEX)
    return index


def parse_identifier(text: str) -> int:
    """Validate a 4-digit patient identifier and return it as an integer."""

    value = (text or "").strip()
    if any(char.isspace() for char in value):
        if all(char in _ASCII_DIGITS or char.isspace() for char in value):
            raise ParseError(ErrorKind.ID_CONTAINS_SPACES)
        raise ParseError(ErrorKind.INVALID_ID_CHARS)
    if any(char not in _ASCII_DIGITS for char in value):
        raise ParseError(ErrorKind.INVALID_ID_CHARS)
    if not _ID_PATTERN.fullmatch(value):
        raise ParseError(ErrorKind.INVALID_ID_LENGTH)
    return int(value)


def parse_importance(text: str) -> int:
    value = (text or "").strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        logger.warning("Invalid importance format: %s", value)
        raise ParseError(ErrorKind.INVALID_IMPORTANCE_FORMAT)
    importance = int(value)
    if importance < 1 or importance > 3:
        logger.warning("Importance out of range: %s", importance)
        raise ParseError(ErrorKind.INVALID_IMPORTANCE_FORMAT)
    return importance


def parse_date(text: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` calendar date."""

    value = (text or "").strip()
    if not _DATE_PATTERN.fullmatch(value):
        raise ParseError(ErrorKind.INVALID_DATETIME_FORMAT, detail=value or None)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ParseError(ErrorKind.INVALID_DATETIME_FORMAT, detail=value) from exc


def parse_time(text: str) -> time:
    """Parse an ISO ``HH:MM`` or ``HH:MM:SS`` time of day."""

    value = (text or "").strip()
    if not _TIME_PATTERN.fullmatch(value):
        raise ParseError(ErrorKind.INVALID_DATETIME_FORMAT, detail=value or None)
    pattern = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    try:
        return datetime.strptime(value, pattern).time()
    except ValueError as exc:
        raise ParseError(ErrorKind.INVALID_DATETIME_FORMAT, detail=value) from exc


def parse_quantity(text: str) -> int:
    """Parse a strictly positive whole-number quantity."""

    value = (text or "").strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ParseError(ErrorKind.INVALID_QUANTITY, detail=value or None)
    quantity = int(value)
    if quantity <= 0:
        raise ParseError(ErrorKind.NEGATIVE_MEDICINE_QUANTITY)
    return quantity


def require_text(text: str, kind: ErrorKind = ErrorKind.MISSING_REQUIRED_FIELD) -> str:
    value = (text or "").strip()
    if not value:
        raise ParseError(kind)
    return value


__all__ = [
    "parse_index",
    "parse_identifier",
    "parse_importance",
    "parse_date",
    "parse_time",
    "parse_quantity",
    "require_text",
]
