"""Shift command parsing (``shift add|del|list``)."""

from __future__ import annotations

import logging
from typing import Optional

from nursesched.parser_utils.scanner import split_command
from nursesched.parser_utils.validators import parse_date, parse_index, parse_time
from nursesched.parsers.schema import EMPTY_TEXT, CommandSchema, FieldSpec, apply_schema
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

FAMILY = "shift"
FIELD_MARKERS = ("s/", "e/", "d/", "n/")

ADD_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    fields=(
        FieldSpec("start_time", "s/", parse_time, required=True),
        FieldSpec("end_time", "e/", parse_time, required=True),
        FieldSpec("date", "d/", parse_date, required=True),
        FieldSpec("notes", "n/", default="", on_empty=EMPTY_TEXT),
    ),
)


def parse(line: str) -> Optional[ParsedCommand]:
    action, body = split_command(line)
    if action == "add":
        payload, _ = apply_schema(body, ADD_SCHEMA)
        return ParsedCommand(FAMILY, action, payload=payload)
    if action == "del":
        return ParsedCommand(FAMILY, action, index=parse_index(body))
    if action == "list":
        return ParsedCommand(FAMILY, action)
    logger.warning("Unrecognized shift command: %s", action)
    return None


__all__ = ["FAMILY", "FIELD_MARKERS", "ADD_SCHEMA", "parse"]
