"""Centralize defaults and environment lookups for the command interpreter."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_JOURNAL_ENABLED: bool = True
_DEFAULT_LOG_REDACTION_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_JOURNAL_FILENAME = "parser.jsonl"
_DEFAULT_LOG_REDACTION_PATTERNS = "phone,email,patient_id"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _read_flag(source: Dict[str, str], key: str, default: bool) -> bool:
    raw = source.get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _FALSY:
        return False
    if normalized in _TRUTHY:
        return True
    return default


def _read_int(source: Dict[str, str], key: str, default: int) -> int:
    raw = source.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, 0)


# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def get_log_level(env: Dict[str, str] | None = None) -> int:
    """Return the ``logging`` level for console diagnostics.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.

    Returns:
        A numeric ``logging`` level; unknown names fall back to ``WARNING``.
    """

    source = env if env is not None else os.environ
    raw = (source.get("NURSESCHED_LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


def is_journal_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether parsed lines are written to the JSONL journal."""

    source = env if env is not None else os.environ
    return _read_flag(source, "NURSESCHED_JOURNAL_ENABLED", _DEFAULT_JOURNAL_ENABLED)


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    """Return the base directory for the parse journal."""

    source = env if env is not None else os.environ
    override = source.get("NURSESCHED_LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_journal_path(env: Dict[str, str] | None = None) -> Path:
    return get_log_dir(env) / _JOURNAL_FILENAME


def is_log_redaction_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether patient details should be scrubbed before logging."""

    source = env if env is not None else os.environ
    return _read_flag(source, "NURSESCHED_LOG_REDACTION_ENABLED", _DEFAULT_LOG_REDACTION_ENABLED)


def get_log_redaction_patterns(env: Dict[str, str] | None = None) -> List[str]:
    """Return the list of redaction pattern keys to apply."""

    source = env if env is not None else os.environ
    raw = source.get("NURSESCHED_LOG_REDACTION_PATTERNS")
    values = raw if raw is not None else _DEFAULT_LOG_REDACTION_PATTERNS
    return [segment.strip().lower() for segment in values.split(",") if segment.strip()]


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum journal size in bytes before rotating (0 disables rotation)."""

    source = env if env is not None else os.environ
    return _read_int(source, "NURSESCHED_LOG_MAX_BYTES", _DEFAULT_LOG_MAX_BYTES)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    source = env if env is not None else os.environ
    return _read_int(source, "NURSESCHED_LOG_BACKUP_COUNT", _DEFAULT_LOG_BACKUP_COUNT)
