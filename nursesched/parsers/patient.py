"""Patient profile command parsing (``pf ...``).

Sub-commands: ``add``, ``del``, ``list``, ``search``, ``edit`` and the nested
``result add|del|list`` family for medical test results.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import extract_token, find_marker, split_command, value_end
from nursesched.parser_utils.validators import parse_identifier, parse_index, require_text
from nursesched.parsers.schema import (
    EMPTY_REJECT,
    EMPTY_TEXT,
    CommandSchema,
    FieldSpec,
    apply_schema,
)
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

FAMILY = "patient"
FIELD_MARKERS = ("id/", "p/", "a/", "g/", "c/", "n/")
ID_MARKER = "id/"
SEARCH_LENGTH = len(ID_MARKER) + 4
RESULT_ACTIONS = ("add", "del", "list")


class PatientDirectory(Protocol):
    """Read-only view of the patient store used to confirm identifiers."""

    def has_patient(self, identifier: int) -> bool:
        ...


def _gender(value: str) -> str:
    return value.upper()


ADD_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    positional=True,
    empty_kind=ErrorKind.EMPTY_PATIENT_FIELDS,
    fields=(
        FieldSpec("identifier", "id/", parse_identifier, required=True),
        FieldSpec("name", "p/", required=True, on_empty=EMPTY_REJECT),
        FieldSpec("age", "a/", required=True, on_empty=EMPTY_REJECT),
        FieldSpec("gender", "g/", _gender, required=True, on_empty=EMPTY_REJECT),
        FieldSpec("contact", "c/", required=True, on_empty=EMPTY_REJECT),
        FieldSpec("notes", "n/", default="", on_empty=EMPTY_TEXT),
    ),
)

EDIT_SCHEMA = CommandSchema(
    markers=FIELD_MARKERS,
    empty_kind=ErrorKind.MISSING_EDIT_INPUT,
    fields=(
        FieldSpec("name", "p/", on_empty=EMPTY_REJECT),
        FieldSpec("age", "a/", on_empty=EMPTY_REJECT),
        FieldSpec("gender", "g/", _gender, on_empty=EMPTY_REJECT),
        FieldSpec("contact", "c/", on_empty=EMPTY_REJECT),
        FieldSpec("notes", "n/", on_empty=EMPTY_REJECT),
    ),
)


def parse(line: str, directory: Optional[PatientDirectory] = None) -> Optional[ParsedCommand]:
    """WHAT: classify a ``pf`` line, including the nested ``result`` commands.
    WHY: patient records need every field validated before anything is stored,
    and test results must point at a patient that exists.
    HOW: read ``add`` fields in declared order, check ``edit`` fields against the
    edit table, and consult ``directory`` once per ``result`` call after every
    field has been validated.
    """

    if not line.strip():
        raise ParseError(ErrorKind.EMPTY_INPUT)

    action, body = split_command(line)
    logger.info("Extracting patient inputs: action=%s body=%s", action, body)

    if action == "add":
        payload, _ = apply_schema(body, ADD_SCHEMA)
        return ParsedCommand(FAMILY, action, payload=payload)
    if action == "del":
        return ParsedCommand(FAMILY, action, index=parse_index(body, zero_kind=ErrorKind.ZERO_INDEX))
    if action == "list":
        return ParsedCommand(FAMILY, action)
    if action == "search":
        return ParsedCommand(FAMILY, action, payload={"identifier": _parse_search_id(body)})
    if action == "edit":
        return _parse_edit(body)
    if action == "result":
        return _parse_result(body, directory)

    logger.warning("Unrecognized patient command: %s", action)
    return None


def _parse_search_id(body: str) -> int:
    # Structural check on the whole remainder: exactly "id/" plus four characters.
    if len(body) != SEARCH_LENGTH:
        raise ParseError(ErrorKind.INVALID_ID_LENGTH)
    if not body.startswith(ID_MARKER):
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail=ID_MARKER)
    return parse_identifier(body[len(ID_MARKER):])


def _parse_edit(body: str) -> ParsedCommand:
    id_start = find_marker(body, ID_MARKER)
    if id_start == -1:
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail=ID_MARKER)
    id_end = value_end(body, ID_MARKER, FIELD_MARKERS)
    identifier = parse_identifier(body[id_start + len(ID_MARKER):id_end])

    remainder = f"{body[:id_start]} {body[id_end:]}".strip()
    if not remainder or not EDIT_SCHEMA.has_any_marker(remainder):
        raise ParseError(ErrorKind.EMPTY_EDIT_DETAILS)

    payload, _ = apply_schema(remainder, EDIT_SCHEMA)
    payload["identifier"] = identifier
    return ParsedCommand(FAMILY, "edit", payload=payload)


def _parse_result(body: str, directory: Optional[PatientDirectory]) -> Optional[ParsedCommand]:
    parts = body.split(None, 1)
    if len(parts) < 2:
        raise ParseError(ErrorKind.INVALID_COMMAND, detail="pf result add|del|list id/PATIENT_ID")
    nested, remaining = parts[0].lower(), parts[1]
    if nested not in RESULT_ACTIONS:
        logger.warning("Unrecognized patient result command: %s", nested)
        return None

    identifier = parse_identifier(_single_token(remaining, ID_MARKER))
    payload = {"identifier": identifier}
    if nested == "add":
        payload["test_name"] = _single_token(remaining, "t/")
        payload["test_result"] = _single_token(remaining, "r/")

    if directory is None or not directory.has_patient(identifier):
        logger.warning("Patient %04d not found for result %s", identifier, nested)
        raise ParseError(ErrorKind.PATIENT_NOT_FOUND, detail=f"{identifier:04d}")
    return ParsedCommand(FAMILY, f"result {nested}", payload=payload)


def _single_token(body: str, marker: str) -> str:
    value = extract_token(body, marker)
    if not value:
        raise ParseError(ErrorKind.MISSING_REQUIRED_FIELD, detail=marker)
    return require_text(value)


__all__ = ["FAMILY", "FIELD_MARKERS", "PatientDirectory", "ADD_SCHEMA", "EDIT_SCHEMA", "parse"]
