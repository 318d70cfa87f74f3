"""Appointment command parsing (``appt ...``)."""

from __future__ import annotations

import logging
from typing import Optional

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import find_marker, scan_field, split_command, value_end
from nursesched.parser_utils.validators import (
    parse_date,
    parse_identifier,
    parse_importance,
    parse_index,
    parse_time,
)
from nursesched.parsers.schema import (
    EMPTY_KEEP,
    EMPTY_TEXT,
    CommandSchema,
    FieldSpec,
    apply_schema,
)
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

FAMILY = "appointment"
FIELD_MARKERS = ("aid/", "id/", "s/", "e/", "d/", "im/", "n/")
FIND_MARKERS = ("id/", "p/")
INDEX_MARKER = "aid/"
SORT_MARKER = "by/"
SORT_KEYS = ("time", "importance")
DEFAULT_IMPORTANCE = 2

ADD_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    fields=(
        FieldSpec("identifier", "id/", parse_identifier, required=True),
        FieldSpec("start_time", "s/", parse_time, required=True),
        FieldSpec("end_time", "e/", parse_time, required=True),
        FieldSpec("date", "d/", parse_date, required=True),
        FieldSpec("importance", "im/", parse_importance, default=DEFAULT_IMPORTANCE),
        FieldSpec("notes", "n/", default="", on_empty=EMPTY_TEXT),
    ),
)

EDIT_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    fields=(
        FieldSpec(
            "identifier",
            "id/",
            parse_identifier,
            on_empty=EMPTY_KEEP,
            advisory="No ID found in id field. Defaulting to previous ID.",
        ),
        FieldSpec("start_time", "s/", parse_time),
        FieldSpec("end_time", "e/", parse_time),
        FieldSpec("date", "d/", parse_date),
        FieldSpec("importance", "im/", parse_importance),
        FieldSpec(
            "notes",
            "n/",
            on_empty=EMPTY_KEEP,
            advisory="No notes found in notes field. Defaulting to previous note.",
        ),
    ),
)


def parse(line: str) -> Optional[ParsedCommand]:
    """WHAT: classify an ``appt`` line into add/del/mark/unmark/list/sort/find/edit.
    WHY: the caller needs one typed command or one error kind per line; ``None``
    tells it the sub-command is not an appointment command at all.
    HOW: split off the sub-command, run the add/edit field tables, and read
    ``aid/`` indexes, ``by/`` sort keys and ``id/``|``p/`` find keys directly.
    """

    action, body = split_command(line)
    logger.info("Extracting appointment inputs: action=%s body=%s", action, body)

    if action == "add":
        payload, _ = apply_schema(body, ADD_SCHEMA)
        return ParsedCommand(FAMILY, action, payload=payload)
    if action in {"del", "mark", "unmark"}:
        return ParsedCommand(FAMILY, action, index=_parse_prefixed_index(body))
    if action == "list":
        return ParsedCommand(FAMILY, action)
    if action == "sort":
        return ParsedCommand(FAMILY, action, payload={"sort_by": _parse_sort_key(body)})
    if action == "find":
        return ParsedCommand(FAMILY, action, payload=_parse_find(body))
    if action == "edit":
        return _parse_edit(body)

    logger.warning("Unrecognized appointment command: %s", action)
    return None


def _parse_prefixed_index(body: str) -> int:
    """del/mark/unmark take ``aid/INDEX``; bare digits are rejected."""

    text = body.strip()
    if not text.lower().startswith(INDEX_MARKER) or len(text) <= len(INDEX_MARKER):
        logger.warning("Missing index field in command: %s", body)
        raise ParseError(ErrorKind.MISSING_INDEX_PARAMETER)
    return parse_index(text[len(INDEX_MARKER):])


def _parse_sort_key(body: str) -> str:
    position = find_marker(body, SORT_MARKER)
    if position == -1:
        raise ParseError(ErrorKind.INVALID_SORT_FORMAT)
    sort_by = body[position + len(SORT_MARKER):].strip().lower()
    if sort_by not in SORT_KEYS:
        logger.warning("Invalid sort parameter: %s", sort_by)
        raise ParseError(ErrorKind.INVALID_SORT_PARAMETER, detail=sort_by or None)
    return sort_by


def _parse_find(body: str) -> dict:
    by_id = scan_field(body, "id/", FIND_MARKERS)
    by_name = scan_field(body, "p/", FIND_MARKERS)
    if by_id.absent == by_name.absent:
        raise ParseError(ErrorKind.INVALID_FIND_PARAMETER)
    if not by_id.absent:
        parse_identifier(by_id.raw)
        return {"search_keyword": by_id.raw, "search_by": "id"}
    if by_name.empty:
        raise ParseError(ErrorKind.MISSING_NAME_PARAMETER)
    return {"search_keyword": by_name.raw, "search_by": "name"}


def _parse_edit(body: str) -> ParsedCommand:
    if not body.strip() or find_marker(body, INDEX_MARKER) == -1:
        logger.warning("Missing index field in edit command: %s", body)
        raise ParseError(ErrorKind.INVALID_APPT_EDIT_FORMAT)

    index_field = scan_field(body, INDEX_MARKER, FIELD_MARKERS)
    if index_field.empty:
        logger.warning("Missing index number after %s prefix", INDEX_MARKER)
        raise ParseError(ErrorKind.MISSING_INDEX_PARAMETER)
    index = parse_index(index_field.raw)

    index_start = find_marker(body, INDEX_MARKER)
    index_end = value_end(body, INDEX_MARKER, FIELD_MARKERS)
    remainder = f"{body[:index_start]} {body[index_end:]}".strip()
    if not remainder or not EDIT_SCHEMA.has_any_marker(remainder):
        raise ParseError(ErrorKind.INVALID_APPT_EDIT_FORMAT, detail="at least one optional field is required")

    payload, advisories = apply_schema(remainder, EDIT_SCHEMA)
    return ParsedCommand(FAMILY, "edit", index=index, payload=payload, advisories=tuple(advisories))


__all__ = ["FAMILY", "FIELD_MARKERS", "ADD_SCHEMA", "EDIT_SCHEMA", "parse"]
