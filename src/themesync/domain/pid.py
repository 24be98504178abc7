"""Parsing of theme PIDs such as ``Theme_Attributes-115-0-LATEST``."""

from __future__ import annotations

import re

from .errors import ParseError
from .model import ClassificationId

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def parse_leading_int(value: str | None) -> int | None:
    """Parse the integer prefix of ``value`` (``"003"`` -> 3, ``"12a"`` -> 12)."""

    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_pid(pid: str | None) -> ClassificationId:
    """Split a PID positionally on ``-``.

    Missing or non-numeric positions become ``None``; only an empty PID is an error.
    """

    if pid is None or not pid.strip():
        raise ParseError("PID is empty")

    parts = pid.split("-")

    def part(index: int) -> str | None:
        return parts[index] if len(parts) > index and parts[index] else None

    return ClassificationId(
        full_pid=pid,
        entity_name=parts[0],
        id=parse_leading_int(part(1)),
        version=parse_leading_int(part(2)),
        tag=part(3),
    )
