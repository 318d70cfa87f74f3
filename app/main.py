"""Assemble the parser journal and run the interactive CLI loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from app.config import (
    get_journal_path,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_log_redaction_patterns,
    is_journal_enabled,
    is_log_redaction_enabled,
)
from nursesched.command_parser import family_token, parse_command
from nursesched.errors import ParseError
from nursesched.parse_journal import ParseJournal, ParseRecord
from nursesched.parser_payloads import describe_payload
from nursesched.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

UNRECOGNIZED_MESSAGE = (
    'Unknown command! Commands start with "appt", "pf", "medicine", "shift" or "task" ("exit" to quit).'
)


@dataclass
class SessionDirectory:
    """Patient identifiers added during this session, in insertion order.

    Only answers "does this patient exist" for ``pf result`` commands; the real
    patient store lives outside the parser.
    """

    identifiers: List[int] = field(default_factory=list)

    def has_patient(self, identifier: int) -> bool:
        return identifier in self.identifiers

    def observe(self, command: ParsedCommand) -> None:
        if command.family != "patient":
            return
        if command.action == "add":
            self.identifiers.append(command.payload["identifier"])
        elif command.action == "del" and command.index is not None and command.index < len(self.identifiers):
            self.identifiers.pop(command.index)


def build_journal() -> ParseJournal:
    """Wire the journal from ``app.config`` settings."""

    return ParseJournal(
        path=get_journal_path(),
        enabled=is_journal_enabled(),
        redact=is_log_redaction_enabled(),
        patterns=get_log_redaction_patterns(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )


def handle_line(line: str, directory: SessionDirectory, journal: ParseJournal) -> Tuple[str, bool]:
    """Parse one line and return ``(response, should_exit)``.

    Failures are rendered as a single line and never end the session.
    """

    try:
        command = parse_command(line, directory=directory)
    except ParseError as exc:
        journal.record(ParseRecord.rejected(line, exc, family=family_token(line) or None))
        return f"Error: {exc.user_message}", False

    if command is None:
        journal.record(ParseRecord.unrecognized(line, family=family_token(line) or None))
        return UNRECOGNIZED_MESSAGE, False

    journal.record(ParseRecord.parsed(line, command))
    if command.family == "exit":
        return "Goodbye!", True

    directory.observe(command)
    return format_command(command), False


def format_command(command: ParsedCommand) -> str:
    lines = [f"{command.family} {command.action}"]
    details = describe_payload(command.payload)
    if command.index is not None:
        details = f"index: {command.index + 1}" + (f", {details}" if details else "")
    if details:
        lines[0] += f" -> {details}"
    lines.extend(command.advisories)
    return "\n".join(lines)


# -- Interactive CLI loop ------------------------------------------------------
def main() -> None:
    """Read commands from stdin until ``exit`` or EOF, echoing the parsed result."""

    logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    journal = build_journal()
    directory = SessionDirectory()
    print("NurseSched ready. Type 'exit' to stop.")

    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if not line.strip():
            continue

        response, should_exit = handle_line(line, directory, journal)
        print(response)
        if should_exit:
            break


if __name__ == "__main__":
    main()
