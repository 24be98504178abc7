"""Pure decision rules for a style's status and theme reference.

Two rules run independently over the same colorway set:

- status promotion: a pending style becomes promoted once an active colorway
  carries a theme other than the retired one;
- theme reassignment: a style whose theme is not backed by any active colorway
  takes the first theme produced by :data:`THEME_TIERS`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from themesync.domain.grouping import distinct_theme_ids
from themesync.domain.model import (
    RETIRED_THEME_ID,
    STYLE_STATUS_PENDING,
    STYLE_STATUS_PROMOTED,
    ColorwayRecord,
    ReconciliationDecision,
    StyleRecord,
)


@dataclass(slots=True, frozen=True)
class ColorwaySplit:
    """Distinct theme ids of a style's active and passive colorways."""

    active_theme_ids: tuple[int, ...]
    passive_theme_ids: tuple[int, ...]

    @classmethod
    def of(cls, colorways: Sequence[ColorwayRecord]) -> ColorwaySplit:
        return cls(
            active_theme_ids=tuple(distinct_theme_ids(c for c in colorways if c.is_active)),
            passive_theme_ids=tuple(distinct_theme_ids(c for c in colorways if not c.is_active)),
        )


ThemeTier = Callable[[ColorwaySplit], tuple[int, ...]]


def _without_retired(theme_ids: tuple[int, ...]) -> tuple[int, ...]:
    return tuple(theme_id for theme_id in theme_ids if theme_id != RETIRED_THEME_ID)


def _retired_only(theme_ids: tuple[int, ...]) -> tuple[int, ...]:
    return (RETIRED_THEME_ID,) if RETIRED_THEME_ID in theme_ids else ()


def active_non_retired(split: ColorwaySplit) -> tuple[int, ...]:
    return _without_retired(split.active_theme_ids)


def active_retired(split: ColorwaySplit) -> tuple[int, ...]:
    return _retired_only(split.active_theme_ids)


def passive_non_retired(split: ColorwaySplit) -> tuple[int, ...]:
    return _without_retired(split.passive_theme_ids)


def passive_retired(split: ColorwaySplit) -> tuple[int, ...]:
    return _retired_only(split.passive_theme_ids)


THEME_TIERS: tuple[ThemeTier, ...] = (
    active_non_retired,
    active_retired,
    passive_non_retired,
    passive_retired,
)


def colorways_of_style(
    style_id: int, colorways: Sequence[ColorwayRecord]
) -> list[ColorwayRecord]:
    return [colorway for colorway in colorways if colorway.style_id == style_id]


def decide_status(style: StyleRecord, split: ColorwaySplit) -> int | None:
    if style.status != STYLE_STATUS_PENDING:
        return None
    if active_non_retired(split):
        return STYLE_STATUS_PROMOTED
    return None


def decide_theme(
    style: StyleRecord,
    split: ColorwaySplit,
    tiers: Sequence[ThemeTier] = THEME_TIERS,
) -> int | None:
    if style.theme_id is not None and style.theme_id in split.active_theme_ids:
        return None
    for tier in tiers:
        candidates = tier(split)
        if candidates:
            return candidates[0]
    return None


def decide(style: StyleRecord, colorways: Sequence[ColorwayRecord]) -> ReconciliationDecision:
    """Compute the status/theme mutation for ``style``.

    Colorways belonging to other styles are ignored.
    """

    split = ColorwaySplit.of(colorways_of_style(style.style_id, colorways))
    return ReconciliationDecision(
        style_id=style.style_id,
        status_update=decide_status(style, split),
        theme_id_update=decide_theme(style, split),
    )
