"""Shared dataclasses for parser outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from nursesched.parser_payloads import serialize_payload

FAMILY_ACTIONS: Dict[str, FrozenSet[str]] = {
    "appointment": frozenset({"add", "del", "mark", "unmark", "list", "sort", "find", "edit"}),
    "patient": frozenset({"add", "del", "list", "search", "edit", "result add", "result del", "result list"}),
    "medicine": frozenset({"add", "remove", "list", "find", "delete", "edit", "restock"}),
    "shift": frozenset({"add", "del", "list"}),
    "task": frozenset({"add", "mark", "unmark", "list"}),
    "exit": frozenset({"exit"}),
}


@dataclass(frozen=True)
class ParsedCommand:
    """Typed result of classifying one command line.

    ``payload`` only holds fields that were set. A field missing from the
    payload means "leave the stored value untouched" for edit commands.
    """

    family: str
    action: str
    index: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    advisories: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        actions = FAMILY_ACTIONS.get(self.family)
        if actions is None:
            raise ValueError(f"Unknown command family '{self.family}'")
        if self.action not in actions:
            raise ValueError(f"'{self.action}' is not a {self.family} command")
        if self.index is not None and self.index < 0:
            raise ValueError("Parsed index must be zero or greater")

    def get(self, name: str, default: Any = None) -> Any:
        return self.payload.get(name, default)

    def is_set(self, name: str) -> bool:
        return name in self.payload

    def to_payload(self) -> Dict[str, Any]:
        """Return a JSON-friendly view used by the journal and the CLI."""

        data: Dict[str, Any] = {"family": self.family, "action": self.action}
        if self.index is not None:
            data["index"] = self.index
        data.update(serialize_payload(self.payload))
        return data


__all__ = ["FAMILY_ACTIONS", "ParsedCommand"]
