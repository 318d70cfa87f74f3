import pytest

from nursesched.errors import ErrorKind, ParseError
from nursesched.parsers import patient


class StubDirectory:
    """Patient directory stub that records every lookup."""

    def __init__(self, *identifiers):
        self.identifiers = set(identifiers)
        self.lookups = []

    def has_patient(self, identifier):
        self.lookups.append(identifier)
        return identifier in self.identifiers


def _error(line, directory=None):
    with pytest.raises(ParseError) as excinfo:
        patient.parse(line, directory)
    return excinfo.value


def test_add_reads_fields_in_order():
    result = patient.parse("pf add id/0123 p/John Doe a/30 g/m c/9123 4567 n/allergic to penicillin")
    assert result.family == "patient"
    assert result.action == "add"
    assert result.payload == {
        "identifier": 123,
        "name": "John Doe",
        "age": "30",
        "gender": "M",
        "contact": "9123 4567",
        "notes": "allergic to penicillin",
    }


def test_add_notes_are_optional():
    result = patient.parse("pf add id/0001 p/Ann a/71 g/f c/98765432")
    assert result.payload["notes"] == ""
    assert result.payload["contact"] == "98765432"


def test_add_errors():
    assert _error("pf add p/John a/30 g/m c/123").kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf add id/0123 p/John a/30 c/123").kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf add").kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf add id/123 p/John a/30 g/m c/123").kind is ErrorKind.INVALID_ID_LENGTH
    assert _error("pf add id/01a3 p/John a/30 g/m c/123").kind is ErrorKind.INVALID_ID_CHARS
    assert _error("pf add id/0123 p/ a/30 g/m c/123").kind is ErrorKind.EMPTY_PATIENT_FIELDS


def test_del_uses_bare_index():
    assert patient.parse("pf del 1").index == 0
    assert patient.parse("pf del 12").index == 11
    assert _error("pf del 0").kind is ErrorKind.ZERO_INDEX
    assert _error("pf del -4").kind is ErrorKind.NEGATIVE_INDEX
    assert _error("pf del two").kind is ErrorKind.INVALID_INDEX_PARAMETER
    assert _error("pf del").kind is ErrorKind.MISSING_INDEX_PARAMETER


def test_list():
    assert patient.parse("pf list").action == "list"


def test_search_requires_exact_structure():
    assert patient.parse("pf search id/0123").payload == {"identifier": 123}
    assert _error("pf search id/012").kind is ErrorKind.INVALID_ID_LENGTH
    assert _error("pf search id/01234").kind is ErrorKind.INVALID_ID_LENGTH
    assert _error("pf search 0123").kind is ErrorKind.INVALID_ID_LENGTH
    assert _error("pf search xx/0123").kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf search id/01b3").kind is ErrorKind.INVALID_ID_CHARS


def test_edit_only_sets_given_fields():
    result = patient.parse("pf edit id/0123 a/31 g/f")
    assert result.action == "edit"
    assert result.payload == {"identifier": 123, "age": "31", "gender": "F"}
    assert not result.is_set("name")
    assert not result.is_set("notes")


def test_edit_empty_field_is_rejected():
    assert _error("pf edit id/0123 p/ a/31").kind is ErrorKind.MISSING_EDIT_INPUT
    assert _error("pf edit id/0123 n/").kind is ErrorKind.MISSING_EDIT_INPUT


def test_edit_errors():
    assert _error("pf edit p/Jane").kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf edit id/0123").kind is ErrorKind.EMPTY_EDIT_DETAILS
    assert _error("pf edit id/99 p/Jane").kind is ErrorKind.INVALID_ID_LENGTH


def test_result_add_checks_directory():
    directory = StubDirectory(123)
    result = patient.parse("pf result add id/0123 t/bloodtest r/normal", directory)
    assert result.action == "result add"
    assert result.payload == {"identifier": 123, "test_name": "bloodtest", "test_result": "normal"}
    assert directory.lookups == [123]


def test_result_list_and_del():
    directory = StubDirectory(7)
    assert patient.parse("pf result list id/0007", directory).action == "result list"
    assert patient.parse("pf result del id/0007", directory).action == "result del"


def test_result_unknown_patient():
    assert _error("pf result add id/0456 t/xray r/clear", StubDirectory(123)).kind is ErrorKind.PATIENT_NOT_FOUND
    assert _error("pf result list id/0456").kind is ErrorKind.PATIENT_NOT_FOUND


def test_result_errors():
    directory = StubDirectory(123)
    assert _error("pf result add id/0123 t/xray", directory).kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf result add id/0123 t/ r/ok", directory).kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf result add t/xray r/ok", directory).kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert _error("pf result", directory).kind is ErrorKind.INVALID_COMMAND
    assert _error("pf result list", directory).kind is ErrorKind.INVALID_COMMAND
    assert patient.parse("pf result purge id/0123", directory) is None
    assert directory.lookups == []


def test_unknown_subcommand_returns_none():
    assert patient.parse("pf discharge id/0123") is None
    assert patient.parse("pf") is None
