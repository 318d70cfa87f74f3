from datetime import date, time

import pytest

from nursesched.errors import ErrorKind, ParseError
from nursesched.parsers import appointment


def _error(line):
    with pytest.raises(ParseError) as excinfo:
        appointment.parse(line)
    return excinfo.value


def test_add_with_all_fields():
    result = appointment.parse("appt add id/0123 s/09:00 e/10:00 d/2024-05-01 im/1 n/checkup")
    assert result is not None
    assert result.family == "appointment"
    assert result.action == "add"
    assert result.index is None
    assert result.payload == {
        "identifier": 123,
        "start_time": time(9, 0),
        "end_time": time(10, 0),
        "date": date(2024, 5, 1),
        "importance": 1,
        "notes": "checkup",
    }


def test_add_defaults_importance_and_notes():
    result = appointment.parse("appt add d/2024-05-01 e/10:00 s/09:00 id/0042")
    assert result.payload["importance"] == 2
    assert result.payload["notes"] == ""
    assert result.payload["identifier"] == 42


def test_add_keeps_spaces_inside_notes():
    result = appointment.parse("appt add id/0123 s/09:00 e/10:00 d/2024-05-01 n/bring  x-ray and/or scans")
    assert result.payload["notes"] == "bring  x-ray and/or scans"


def test_add_missing_marker_is_missing_required_field():
    error = _error("appt add id/0123 s/09:00 d/2024-05-01")
    assert error.kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert error.detail == "e/"
    assert _error("appt add").kind is ErrorKind.MISSING_REQUIRED_FIELD


def test_add_rejects_malformed_time_and_date():
    assert _error("appt add id/0123 s/9am e/10:00 d/2024-05-01").kind is ErrorKind.INVALID_DATETIME_FORMAT
    assert _error("appt add id/0123 s/09:00 e/10:00 d/01-05-2024").kind is ErrorKind.INVALID_DATETIME_FORMAT


def test_add_rejects_bad_identifier_and_importance():
    assert _error("appt add id/12 s/09:00 e/10:00 d/2024-05-01").kind is ErrorKind.INVALID_ID_LENGTH
    assert _error("appt add id/0123 s/09:00 e/10:00 d/2024-05-01 im/5").kind is ErrorKind.INVALID_IMPORTANCE_FORMAT


@pytest.mark.parametrize("action", ["del", "mark", "unmark"])
def test_index_commands_need_aid_prefix(action):
    result = appointment.parse(f"appt {action} aid/3")
    assert result.action == action
    assert result.index == 2
    assert _error(f"appt {action} 3").kind is ErrorKind.MISSING_INDEX_PARAMETER
    assert _error(f"appt {action} aid/").kind is ErrorKind.MISSING_INDEX_PARAMETER
    assert _error(f"appt {action}").kind is ErrorKind.MISSING_INDEX_PARAMETER


def test_index_command_errors():
    assert _error("appt del aid/0").kind is ErrorKind.NEGATIVE_INDEX
    assert _error("appt del aid/-2").kind is ErrorKind.NEGATIVE_INDEX
    assert _error("appt del aid/x1").kind is ErrorKind.INVALID_INDEX_PARAMETER
    assert _error("appt del aid/12345678901").kind is ErrorKind.INDEX_TOO_LARGE
    assert appointment.parse("appt mark AID/1").index == 0


def test_list():
    result = appointment.parse("appt list")
    assert result.action == "list"
    assert result.payload == {}


def test_sort():
    assert appointment.parse("appt sort by/time").payload == {"sort_by": "time"}
    assert appointment.parse("appt sort by/IMPORTANCE").payload == {"sort_by": "importance"}
    assert _error("appt sort by/date").kind is ErrorKind.INVALID_SORT_PARAMETER
    assert _error("appt sort").kind is ErrorKind.INVALID_SORT_FORMAT
    assert _error("appt sort time").kind is ErrorKind.INVALID_SORT_FORMAT


def test_find_by_id_or_name():
    by_id = appointment.parse("appt find id/0123")
    assert by_id.payload == {"search_keyword": "0123", "search_by": "id"}
    by_name = appointment.parse("appt find p/Jane Doe")
    assert by_name.payload == {"search_keyword": "Jane Doe", "search_by": "name"}


def test_find_errors():
    assert _error("appt find").kind is ErrorKind.INVALID_FIND_PARAMETER
    assert _error("appt find jane").kind is ErrorKind.INVALID_FIND_PARAMETER
    assert _error("appt find id/0123 p/jane").kind is ErrorKind.INVALID_FIND_PARAMETER
    assert _error("appt find p/").kind is ErrorKind.MISSING_NAME_PARAMETER
    assert _error("appt find id/12a4").kind is ErrorKind.INVALID_ID_CHARS


def test_edit_overwrites_given_fields_only():
    result = appointment.parse("appt edit aid/2 s/11:00 im/3")
    assert result.action == "edit"
    assert result.index == 1
    assert result.payload == {"start_time": time(11, 0), "importance": 3}
    assert not result.is_set("notes")
    assert not result.is_set("identifier")
    assert result.advisories == ()


def test_edit_importance_absent_empty_and_value():
    assert not appointment.parse("appt edit aid/1 n/x").is_set("importance")
    assert _error("appt edit aid/1 im/ n/x").kind is ErrorKind.INVALID_IMPORTANCE_FORMAT
    assert appointment.parse("appt edit aid/1 im/2").payload["importance"] == 2


def test_edit_empty_notes_and_identifier_keep_previous_values():
    result = appointment.parse("appt edit aid/1 id/ d/2024-06-01 n/")
    assert result.payload == {"date": date(2024, 6, 1)}
    assert "No ID found in id field. Defaulting to previous ID." in result.advisories
    assert "No notes found in notes field. Defaulting to previous note." in result.advisories


def test_edit_fields_may_precede_index():
    result = appointment.parse("appt edit id/0456 aid/4 e/12:30")
    assert result.index == 3
    assert result.payload == {"identifier": 456, "end_time": time(12, 30)}


def test_edit_errors():
    assert _error("appt edit").kind is ErrorKind.INVALID_APPT_EDIT_FORMAT
    assert _error("appt edit s/09:00").kind is ErrorKind.INVALID_APPT_EDIT_FORMAT
    assert _error("appt edit aid/1").kind is ErrorKind.INVALID_APPT_EDIT_FORMAT
    assert _error("appt edit aid/ s/09:00").kind is ErrorKind.MISSING_INDEX_PARAMETER
    assert _error("appt edit aid/1 s/").kind is ErrorKind.INVALID_DATETIME_FORMAT


def test_unknown_subcommand_returns_none():
    assert appointment.parse("appt reschedule aid/1") is None
    assert appointment.parse("appt") is None
