"""Medicine inventory command parsing (``medicine ...``).

Unlike appointments and patients, every extraction failure inside a
sub-command collapses into that sub-command's single format error. Only a
non-positive quantity keeps its own error kind.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import extract
from nursesched.parser_utils.validators import parse_quantity, require_text
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

FAMILY = "medicine"

FORMAT_ERRORS: Dict[str, ErrorKind] = {
    "add": ErrorKind.INVALID_MEDICINE_ADD_FORMAT,
    "remove": ErrorKind.INVALID_MEDICINE_REMOVE_FORMAT,
    "find": ErrorKind.INVALID_MEDICINE_FIND_FORMAT,
    "delete": ErrorKind.INVALID_MEDICINE_DELETE_FORMAT,
    "edit": ErrorKind.INVALID_MEDICINE_EDIT_FORMAT,
    "restock": ErrorKind.INVALID_MEDICINE_RESTOCK_FORMAT,
}


def parse(line: str) -> Optional[ParsedCommand]:
    """WHAT: classify a ``medicine`` line into an inventory command.
    WHY: the inventory screen shows one usage hint per sub-command, so any
    extraction failure is reported as that sub-command's format error.
    HOW: lowercase the line, dispatch through ``_HANDLERS`` and re-raise field
    errors as ``FORMAT_ERRORS[action]``, keeping non-positive quantities as-is.
    """

    if not line.strip():
        raise ParseError(ErrorKind.EMPTY_INPUT)

    parts = line.strip().lower().split(None, 1)
    if len(parts) < 2:
        logger.warning("Invalid medicine command format: %s", line)
        raise ParseError(ErrorKind.INVALID_MEDICINE_FORMAT)
    command_parts = parts[1].split(None, 1)
    action = command_parts[0]
    body = command_parts[1] if len(command_parts) > 1 else ""
    logger.info("Medicine command extracted: action=%s body=%s", action, body)

    if action == "list":
        return ParsedCommand(FAMILY, action)
    handler = _HANDLERS.get(action)
    if handler is None:
        logger.warning("Unknown medicine command received: %s", action)
        return None

    try:
        payload = handler(body)
    except ParseError as exc:
        if exc.kind is ErrorKind.NEGATIVE_MEDICINE_QUANTITY:
            raise
        logger.error("Failed to parse medicine %s command: %s", action, body)
        raise ParseError(FORMAT_ERRORS[action]) from exc
    return ParsedCommand(FAMILY, action, payload=payload)


def _name_and_quantity(body: str) -> dict:
    return {
        "medicine_name": require_text(extract(body, "mn/", "q/")),
        "quantity": parse_quantity(extract(body, "q/")),
    }


def _name_only(body: str) -> dict:
    return {"medicine_name": require_text(extract(body, "mn/"))}


def _edit(body: str) -> dict:
    return {
        "medicine_name": require_text(extract(body, "mn/", "un/")),
        "updated_name": require_text(extract(body, "un/", "uq/")),
        "updated_quantity": parse_quantity(extract(body, "uq/")),
    }


def _restock(body: str) -> dict:
    return {"quantity": parse_quantity(extract(body, "q/"))}


_HANDLERS: Dict[str, Callable[[str], dict]] = {
    "add": _name_and_quantity,
    "remove": _name_and_quantity,
    "find": _name_only,
    "delete": _name_only,
    "edit": _edit,
    "restock": _restock,
}


__all__ = ["FAMILY", "FORMAT_ERRORS", "parse"]
