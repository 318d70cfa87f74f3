"""Command parser that turns one input line into a ``ParsedCommand``."""

from __future__ import annotations

import logging
from typing import Optional

from nursesched.errors import ErrorKind, ParseError
from nursesched.parsers import appointment, medicine, patient, shift, task
from nursesched.parsers.patient import PatientDirectory
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

EXIT_TOKEN = "exit"
FAMILY_TOKENS = {
    "appt": appointment.FAMILY,
    "pf": patient.FAMILY,
    "medicine": medicine.FAMILY,
    "shift": shift.FAMILY,
    "task": task.FAMILY,
}


def family_token(line: str) -> str:
    """Return the lowercased leading token of ``line`` ("" for blank input)."""

    parts = line.strip().split(None, 1)
    return parts[0].lower() if parts else ""


def parse_command(line: str, *, directory: Optional[PatientDirectory] = None) -> Optional[ParsedCommand]:
    """Route a raw line to its family parser.

    WHAT: pick the family from the leading token and delegate to that parser.
    HOW: blank input raises ``EMPTY_INPUT``; ``exit`` yields the exit command;
    unknown tokens and unknown sub-commands yield ``None``; malformed
    sub-commands raise ``ParseError`` from the family parser.
    """

    if line is None or not line.strip():
        raise ParseError(ErrorKind.EMPTY_INPUT)

    token = family_token(line)
    if token == EXIT_TOKEN:
        return ParsedCommand("exit", "exit")

    family = FAMILY_TOKENS.get(token)
    if family is None:
        logger.warning("Unknown command family: %s", token)
        return None

    if family == appointment.FAMILY:
        result = appointment.parse(line)
    elif family == patient.FAMILY:
        result = patient.parse(line, directory)
    elif family == medicine.FAMILY:
        result = medicine.parse(line)
    elif family == shift.FAMILY:
        result = shift.parse(line)
    else:
        result = task.parse(line)

    if result is not None:
        logger.info("Parsed %s %s", result.family, result.action)
    return result


__all__ = ["EXIT_TOKEN", "FAMILY_TOKENS", "family_token", "parse_command", "ParsedCommand"]
