import pytest

from nursesched.parsers.types import FAMILY_ACTIONS, ParsedCommand


def test_unknown_action_is_rejected():
    with pytest.raises(ValueError):
        ParsedCommand("appointment", "reschedule")


def test_unknown_family_is_rejected():
    with pytest.raises(ValueError):
        ParsedCommand("nope", "list")


def test_negative_index_is_rejected():
    with pytest.raises(ValueError):
        ParsedCommand("shift", "del", index=-1)


def test_every_declared_action_constructs():
    for family, actions in FAMILY_ACTIONS.items():
        for action in actions:
            assert ParsedCommand(family, action).action == action


def test_payload_accessors():
    command = ParsedCommand("task", "mark", index=0)
    assert command.index == 0
    assert command.get("done") is None
    assert not command.is_set("done")
    assert command.to_payload() == {"family": "task", "action": "mark", "index": 0}
