"""Error taxonomy shared by every command family parser."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Every way a command line can be rejected, paired with its user-facing message."""

    EMPTY_INPUT = "Input cannot be empty."
    INVALID_COMMAND = "Invalid command format! Please check the command and try again."
    MISSING_REQUIRED_FIELD = "Missing required field(s) for this command."
    INVALID_DATETIME_FORMAT = "Invalid date or time format! Use YYYY-MM-DD for dates and HH:MM for times."

    INVALID_ID_LENGTH = "Patient ID must be exactly 4 digits long."
    INVALID_ID_CHARS = "Patient ID must contain only digits."
    ID_CONTAINS_SPACES = "Patient ID must not contain spaces."

    MISSING_INDEX_PARAMETER = "Missing index! Please provide the index of the item."
    INVALID_INDEX_PARAMETER = "Invalid index! The index must be a positive whole number."
    INDEX_TOO_LARGE = "Index is too large!"
    NEGATIVE_INDEX = "Index must be a positive number."
    ZERO_INDEX = "Index cannot be zero. Indexes start from 1."

    INVALID_IMPORTANCE_FORMAT = "Importance must be 1 (low), 2 (medium) or 3 (high)."
    INVALID_SORT_PARAMETER = "Sort parameter must be 'time' or 'importance'."
    INVALID_SORT_FORMAT = "Invalid sort format! Use: appt sort by/[time|importance]"
    INVALID_FIND_PARAMETER = "Find needs exactly one of id/[PATIENT_ID] or p/[PATIENT_NAME]."
    MISSING_NAME_PARAMETER = "Missing patient name after p/."
    INVALID_APPT_EDIT_FORMAT = (
        "Invalid edit format! Use: appt edit aid/INDEX [id/ID] [s/START] [e/END] [d/DATE] [im/IMPORTANCE] [n/NOTES]"
    )

    EMPTY_PATIENT_FIELDS = "Patient name, age, gender and contact cannot be empty."
    MISSING_EDIT_INPUT = "Edited fields cannot be empty."
    EMPTY_EDIT_DETAILS = "Please provide at least one field to edit."
    PATIENT_NOT_FOUND = "No patient found with the given ID."

    INVALID_QUANTITY = "Quantity must be a whole number."
    NEGATIVE_MEDICINE_QUANTITY = "Medicine quantity must be greater than zero."
    INVALID_MEDICINE_FORMAT = "Invalid medicine command format!"
    INVALID_MEDICINE_ADD_FORMAT = "Invalid format! Use: medicine add mn/MEDICINE_NAME q/QUANTITY"
    INVALID_MEDICINE_REMOVE_FORMAT = "Invalid format! Use: medicine remove mn/MEDICINE_NAME q/QUANTITY"
    INVALID_MEDICINE_FIND_FORMAT = "Invalid format! Use: medicine find mn/MEDICINE_NAME"
    INVALID_MEDICINE_DELETE_FORMAT = "Invalid format! Use: medicine delete mn/MEDICINE_NAME"
    INVALID_MEDICINE_EDIT_FORMAT = (
        "Invalid format! Use: medicine edit mn/MEDICINE_NAME un/UPDATED_NAME uq/UPDATED_QUANTITY"
    )
    INVALID_MEDICINE_RESTOCK_FORMAT = "Invalid format! Use: medicine restock q/QUANTITY"

    @property
    def message(self) -> str:
        return self.value


class ParseError(RuntimeError):
    """Raised when a command line cannot be turned into a ``ParsedCommand``."""

    def __init__(self, kind: ErrorKind, *, detail: Optional[str] = None) -> None:
        message = kind.message if detail is None else f"{kind.message} ({detail})"
        super().__init__(message)
        self.kind = kind
        self.detail = detail
        self.user_message = message

    def to_metadata(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind.name}
        if self.detail:
            payload["detail"] = self.detail
        return payload


__all__ = ["ErrorKind", "ParseError"]
