from __future__ import annotations

import pytest

from themesync.domain.errors import ParseError
from themesync.domain.pid import parse_leading_int, parse_pid


def test_parse_full_pid() -> None:
    parsed = parse_pid("Theme_Attributes-115-0-LATEST")

    assert parsed.full_pid == "Theme_Attributes-115-0-LATEST"
    assert parsed.entity_name == "Theme_Attributes"
    assert parsed.id == 115
    assert parsed.version == 0
    assert parsed.tag == "LATEST"


def test_parse_partial_pid_leaves_missing_parts_empty() -> None:
    parsed = parse_pid("Theme_Attributes-7")

    assert parsed.entity_name == "Theme_Attributes"
    assert parsed.id == 7
    assert parsed.version is None
    assert parsed.tag is None


def test_non_numeric_positions_become_none() -> None:
    parsed = parse_pid("Theme_Attributes-abc-1x-LATEST")

    assert parsed.id is None
    assert parsed.version == 1


@pytest.mark.parametrize("pid", [None, "", "   "])
def test_empty_pid_is_rejected(pid: str | None) -> None:
    with pytest.raises(ParseError):
        parse_pid(pid)


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="PID is empty"):
        parse_pid("")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("003", 3), ("12a", 12), (" 4", 4), ("-2", -2), ("x1", None), ("", None), (None, None)],
)
def test_parse_leading_int(value: str | None, expected: int | None) -> None:
    assert parse_leading_int(value) == expected
