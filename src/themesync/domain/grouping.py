"""Partition colorways by their owning style."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ColorwayRecord


def group_by_style(colorways: Iterable[ColorwayRecord]) -> dict[int, list[ColorwayRecord]]:
    grouped: dict[int, list[ColorwayRecord]] = {}
    for colorway in colorways:
        grouped.setdefault(colorway.style_id, []).append(colorway)
    return grouped


def distinct_theme_ids(colorways: Iterable[ColorwayRecord]) -> list[int]:
    """Non-null theme ids in first-seen order."""

    return list(
        dict.fromkeys(colorway.theme_id for colorway in colorways if colorway.theme_id is not None)
    )
