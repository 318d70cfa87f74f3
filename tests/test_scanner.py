import pytest

from nursesched.errors import ErrorKind, ParseError
from nursesched.parser_utils.scanner import (
    FieldState,
    extract,
    extract_token,
    find_marker,
    next_boundary,
    scan_field,
    split_command,
)

APPT_MARKERS = ("aid/", "id/", "s/", "e/", "d/", "im/", "n/")
BODY = "s/09:00 e/10:00 d/2024-05-01 n/hello world"


def test_start_field_stops_at_next_marker():
    start = find_marker(BODY, "s/") + 2
    end = next_boundary(BODY, start, APPT_MARKERS)
    assert BODY[start:end].strip() == "09:00"


def test_last_field_runs_to_end_of_body():
    start = find_marker(BODY, "n/") + 2
    assert next_boundary(BODY, start, APPT_MARKERS) == len(BODY)
    assert BODY[start:].strip() == "hello world"


def test_boundary_uses_earliest_marker_regardless_of_order():
    body = "n/call family d/2024-05-01 s/09:00"
    start = find_marker(body, "n/") + 2
    assert body[start:next_boundary(body, start, APPT_MARKERS)].strip() == "call family"


def test_marker_inside_longer_marker_is_ignored():
    body = "id/0123 s/09:00 d/2024-05-01"
    assert find_marker(body, "d/") == body.index(" d/") + 1
    assert find_marker("aid/3 e/10:00", "id/") == -1
    assert find_marker("mn/panadol un/aspirin", "n/") == -1


def test_scan_field_distinguishes_absent_empty_and_present():
    assert scan_field("s/09:00", "im/", APPT_MARKERS).state is FieldState.ABSENT
    assert scan_field("im/ n/x", "im/", APPT_MARKERS).state is FieldState.EMPTY
    present = scan_field("im/2 n/x", "im/", APPT_MARKERS)
    assert present.state is FieldState.PRESENT
    assert present.raw == "2"


def test_extract_between_markers_and_to_end():
    body = "mn/paracetamol 500mg q/20"
    assert extract(body, "mn/", "q/") == "paracetamol 500mg"
    assert extract(body, "q/") == "20"
    assert extract("mn/panadol", "mn/", "q/") == "panadol"


def test_extract_missing_start_marker_raises():
    with pytest.raises(ParseError) as excinfo:
        extract("q/5", "mn/")
    assert excinfo.value.kind is ErrorKind.MISSING_REQUIRED_FIELD
    assert excinfo.value.detail == "mn/"


def test_extract_token_stops_at_whitespace():
    body = "id/0123 t/bloodtest r/normal extra words"
    assert extract_token(body, "t/") == "bloodtest"
    assert extract_token(body, "r/") == "normal"
    assert extract_token("t/ r/x", "t/") == ""


def test_split_command_drops_family_token():
    assert split_command("appt ADD id/0123 s/09:00") == ("add", "id/0123 s/09:00")
    assert split_command("  appt   list  ") == ("list", "")
    assert split_command("appt") == ("", "")
