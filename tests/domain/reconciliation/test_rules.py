from __future__ import annotations

import pytest

from themesync.domain.model import RETIRED_THEME_ID, STYLE_STATUS_PROMOTED
from themesync.domain.reconciliation.rules import (
    THEME_TIERS,
    ColorwaySplit,
    active_non_retired,
    active_retired,
    decide,
    decide_status,
    decide_theme,
    passive_non_retired,
    passive_retired,
)

from tests.support.fakes import make_colorway, make_style


@pytest.mark.parametrize("status", [None, 0, 2, 3, 99])
def test_status_rule_ignores_styles_that_are_not_pending(status: int | None) -> None:
    style = make_style(1, status=status, theme_id=4)
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    decision = decide(style, colorways)

    assert decision.status_update is None


def test_pending_style_with_active_non_retired_theme_is_promoted() -> None:
    style = make_style(1, status=1, theme_id=7)
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    assert decide(style, colorways).status_update == STYLE_STATUS_PROMOTED


def test_pending_style_with_only_retired_or_passive_themes_stays_pending() -> None:
    style = make_style(1, status=1, theme_id=None)
    colorways = [
        make_colorway(10, style_id=1, theme_id=RETIRED_THEME_ID),
        make_colorway(11, style_id=1, theme_id=8, status=2),
    ]

    assert decide(style, colorways).status_update is None


def test_no_theme_update_when_every_active_colorway_matches_style_theme() -> None:
    style = make_style(1, status=2, theme_id=4)
    colorways = [
        make_colorway(10, style_id=1, theme_id=4),
        make_colorway(11, style_id=1, theme_id=4),
        make_colorway(12, style_id=1, theme_id=9, status=0),
    ]

    assert decide(style, colorways).theme_id_update is None


def test_non_retired_active_theme_beats_retired_active_theme() -> None:
    style = make_style(1, status=2, theme_id=3)
    colorways = [
        make_colorway(10, style_id=1, theme_id=RETIRED_THEME_ID),
        make_colorway(11, style_id=1, theme_id=7),
    ]

    assert decide(style, colorways).theme_id_update == 7


def test_retired_theme_is_chosen_when_it_is_the_only_active_theme() -> None:
    style = make_style(1, status=2, theme_id=3)
    colorways = [make_colorway(10, style_id=1, theme_id=RETIRED_THEME_ID)]

    assert decide(style, colorways).theme_id_update == RETIRED_THEME_ID


def test_passive_non_retired_theme_wins_without_active_colorways() -> None:
    style = make_style(1, status=2, theme_id=3)
    colorways = [
        make_colorway(10, style_id=1, theme_id=RETIRED_THEME_ID, status=0),
        make_colorway(11, style_id=1, theme_id=9, status=0),
    ]

    assert decide(style, colorways).theme_id_update == 9


def test_passive_retired_theme_is_the_last_resort() -> None:
    style = make_style(1, status=2, theme_id=3)
    colorways = [make_colorway(10, style_id=1, theme_id=RETIRED_THEME_ID, status=None)]

    assert decide(style, colorways).theme_id_update == RETIRED_THEME_ID


def test_no_colorways_means_no_changes() -> None:
    style = make_style(1, status=1, theme_id=3)

    decision = decide(style, [])

    assert decision.theme_id_update is None
    assert decision.status_update is None
    assert not decision.has_changes


def test_colorways_of_other_styles_are_ignored() -> None:
    style = make_style(1, status=1, theme_id=3)
    colorways = [make_colorway(10, style_id=2, theme_id=7)]

    assert not decide(style, colorways).has_changes


def test_colorways_without_theme_do_not_produce_candidates() -> None:
    style = make_style(1, status=1, theme_id=3)
    colorways = [make_colorway(10, style_id=1, theme_id=None)]

    assert not decide(style, colorways).has_changes


def test_pending_style_already_on_active_theme_is_only_promoted() -> None:
    style = make_style(5, status=1, theme_id=3)
    colorways = [make_colorway(50, style_id=5, theme_id=3)]

    decision = decide(style, colorways)

    assert decision.status_update == STYLE_STATUS_PROMOTED
    assert decision.theme_id_update is None
    assert decision.fields() == {"Status": STYLE_STATUS_PROMOTED}


def test_rules_are_independent() -> None:
    style = make_style(1, status=1, theme_id=3)
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    decision = decide(style, colorways)

    assert decision.fields() == {"Status": STYLE_STATUS_PROMOTED, "ThemeId": 7}


def test_first_seen_order_breaks_ties_within_a_tier() -> None:
    style = make_style(1, status=2, theme_id=3)
    colorways = [
        make_colorway(10, style_id=1, theme_id=8),
        make_colorway(11, style_id=1, theme_id=6),
    ]

    assert decide(style, colorways).theme_id_update == 8


def test_tiers_in_isolation() -> None:
    split = ColorwaySplit(
        active_theme_ids=(RETIRED_THEME_ID, 7), passive_theme_ids=(9, RETIRED_THEME_ID)
    )

    assert active_non_retired(split) == (7,)
    assert active_retired(split) == (RETIRED_THEME_ID,)
    assert passive_non_retired(split) == (9,)
    assert passive_retired(split) == (RETIRED_THEME_ID,)
    assert THEME_TIERS == (active_non_retired, active_retired, passive_non_retired, passive_retired)


def test_split_separates_active_and_passive_theme_ids() -> None:
    colorways = [
        make_colorway(10, style_id=1, theme_id=4),
        make_colorway(11, style_id=1, theme_id=4),
        make_colorway(12, style_id=1, theme_id=5, status=2),
    ]

    split = ColorwaySplit.of(colorways)

    assert split.active_theme_ids == (4,)
    assert split.passive_theme_ids == (5,)


def test_custom_tier_order_is_respected() -> None:
    style = make_style(1, status=2, theme_id=3)
    split = ColorwaySplit(active_theme_ids=(7,), passive_theme_ids=(9,))

    assert decide_theme(style, split, tiers=(passive_non_retired, active_non_retired)) == 9
    assert decide_status(style, split) is None
