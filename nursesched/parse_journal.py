"""Structured JSONL journal of every command line the parser sees.

Each line typed in a session becomes one ``ParseRecord``: the raw input, the
family/action it resolved to (if any), whether it was accepted, and the error
kind when it was rejected. Patient contacts and identifiers flow through these
records, so the journal redacts them before anything reaches disk.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, IO, Iterable, List, Pattern

from nursesched.errors import ParseError
from nursesched.parsers.types import ParsedCommand

STATUS_PARSED = "parsed"
STATUS_REJECTED = "rejected"
STATUS_UNRECOGNIZED = "unrecognized"

_KNOWN_PATTERNS: Dict[str, Pattern[str]] = {
    "email": re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE),
    "phone": re.compile(r"(?<![\d-])\+?\d(?:[\s().]*\d){7,}(?![\d-])"),
    "patient_id": re.compile(r"(?<![A-Za-z])id/\s*\d{1,4}\b", re.IGNORECASE),
}
_PATTERN_PRIORITY: Dict[str, int] = {
    "email": 0,
    "patient_id": 1,
    "phone": 2,
}
_REDACT_FIELDS = {"line", "payload", "error_detail"}
_REDACT_PAYLOAD_KEYS = {"identifier", "name", "contact", "notes", "search_keyword"}
# Error kinds whose detail is a bare patient identifier.
_IDENTIFIER_ERROR_KINDS = {"PATIENT_NOT_FOUND"}


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class ParseRecord:
    """One journal row describing how a single command line was handled."""

    timestamp: str
    line: str
    status: str
    family: str | None = None
    action: str | None = None
    index: int | None = None
    payload: Dict[str, Any] = field(default_factory=dict)
    advisories: List[str] = field(default_factory=list)
    error_kind: str | None = None
    error_detail: str | None = None

    @classmethod
    def parsed(cls, line: str, command: ParsedCommand) -> "ParseRecord":
        return cls(
            timestamp=_utc_now(),
            line=line,
            status=STATUS_PARSED,
            family=command.family,
            action=command.action,
            index=command.index,
            payload=command.to_payload(),
            advisories=list(command.advisories),
        )

    @classmethod
    def rejected(cls, line: str, error: ParseError, *, family: str | None = None) -> "ParseRecord":
        return cls(
            timestamp=_utc_now(),
            line=line,
            status=STATUS_REJECTED,
            family=family,
            error_kind=error.kind.name,
            error_detail=error.detail,
        )

    @classmethod
    def unrecognized(cls, line: str, *, family: str | None = None) -> "ParseRecord":
        return cls(timestamp=_utc_now(), line=line, status=STATUS_UNRECOGNIZED, family=family)


class ParseJournal:
    """Append ``ParseRecord`` rows to a JSONL file with redaction and rotation."""

    def __init__(
        self,
        *,
        path: Path,
        enabled: bool = True,
        redact: bool = True,
        patterns: Iterable[str] | None = None,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._path = path
        self._enabled = enabled
        self._redact = redact
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        selected = tuple(patterns) if patterns else _KNOWN_PATTERNS.keys()
        self._redaction_patterns = [
            (key, _KNOWN_PATTERNS[key])
            for key in selected
            if key in _KNOWN_PATTERNS
        ]
        self._redaction_patterns.sort(key=lambda item: _PATTERN_PRIORITY.get(item[0], 10))

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def path(self) -> Path:
        return self._path

    def record(self, entry: ParseRecord) -> None:
        if not self._enabled:
            return
        self._append_json_line(asdict(entry))

    def _append_json_line(self, payload: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        prepared = self._prepare_payload(payload)
        line = json.dumps(prepared, ensure_ascii=False)
        self._rotate_if_needed(len(line.encode("utf-8")) + 1)
        with self._open_file(self._path) as handle:
            handle.write(line)
            handle.write("\n")

    @staticmethod
    def _open_file(path: Path) -> IO[str]:
        return path.open("a", encoding="utf-8")

    def _prepare_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive payload keys and scrub free text before writing."""

        if not self._redact:
            return payload
        redacted: Dict[str, Any] = {}
        for key, value in payload.items():
            if key == "payload" and isinstance(value, dict):
                value = {
                    name: "[REDACTED]" if name in _REDACT_PAYLOAD_KEYS else item
                    for name, item in value.items()
                }
            if key == "error_detail" and value and payload.get("error_kind") in _IDENTIFIER_ERROR_KINDS:
                value = "[REDACTED]"
            if key in _REDACT_FIELDS and self._redaction_patterns:
                redacted[key] = self._scrub_value(value)
            else:
                redacted[key] = value
        return redacted

    def _scrub_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._scrub_value(val) for key, val in value.items()}
        if isinstance(value, list):
            return [self._scrub_value(item) for item in value]
        if isinstance(value, str):
            return self._scrub_string(value)
        return value

    def _scrub_string(self, value: str) -> str:
        sanitized = value
        for key, pattern in self._redaction_patterns:
            token = f"[REDACTED_{key.upper()}]"
            sanitized = pattern.sub(token, sanitized)
        return sanitized

    def _rotate_if_needed(self, incoming_bytes: int) -> None:
        """Keep the journal under ``max_bytes`` by shifting numbered backups."""

        if self._max_bytes <= 0:
            return
        if not self._path.exists():
            return

        current_size = self._path.stat().st_size
        if current_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            self._path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            src = Path(f"{self._path}.{index}")
            dst = Path(f"{self._path}.{index + 1}")
            if src.exists():
                src.replace(dst)

        rotated = Path(f"{self._path}.1")
        if rotated.exists():
            rotated.unlink()
        self._path.replace(rotated)


__all__ = [
    "STATUS_PARSED",
    "STATUS_REJECTED",
    "STATUS_UNRECOGNIZED",
    "ParseRecord",
    "ParseJournal",
]
