"""Task command parsing (``task add|mark|unmark|list``).

``task add`` takes a free-text description before the first marker, e.g.
``task add Restock ward B d/2024-05-01 t/14:00``.
"""

from __future__ import annotations

import logging
from typing import Optional

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import next_boundary, split_command
from nursesched.parser_utils.validators import parse_date, parse_index, parse_time
from nursesched.parsers.schema import CommandSchema, FieldSpec, apply_schema
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

FAMILY = "task"
FIELD_MARKERS = ("d/", "t/")

ADD_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    fields=(
        FieldSpec("by_date", "d/", parse_date, required=True),
        FieldSpec("by_time", "t/", parse_time, required=True),
    ),
)


def parse(line: str) -> Optional[ParsedCommand]:
    action, body = split_command(line)
    if action == "add":
        return _parse_add(body)
    if action in {"mark", "unmark"}:
        return ParsedCommand(FAMILY, action, index=parse_index(body))
    if action == "list":
        return ParsedCommand(FAMILY, action)
    logger.warning("Unrecognized task command: %s", action)
    return None


def _parse_add(body: str) -> ParsedCommand:
    description = body[:next_boundary(body, 0, FIELD_MARKERS)].strip()
    if not description:
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail="description")
    payload, _ = apply_schema(body, ADD_SCHEMA)
    payload["description"] = description
    payload["done"] = False
    return ParsedCommand(FAMILY, "add", payload=payload)


__all__ = ["FAMILY", "FIELD_MARKERS", "ADD_SCHEMA", "parse"]
