from __future__ import annotations

from themesync.domain.grouping import distinct_theme_ids, group_by_style

from tests.support.fakes import make_colorway


def test_group_by_style_preserves_order() -> None:
    colorways = [
        make_colorway(1, style_id=20, theme_id=3),
        make_colorway(2, style_id=10, theme_id=3),
        make_colorway(3, style_id=20, theme_id=4),
    ]

    grouped = group_by_style(colorways)

    assert list(grouped) == [20, 10]
    assert [c.id for c in grouped[20]] == [1, 3]
    assert [c.id for c in grouped[10]] == [2]


def test_group_by_style_of_nothing_is_empty() -> None:
    assert group_by_style([]) == {}


def test_distinct_theme_ids_skips_missing_themes() -> None:
    colorways = [
        make_colorway(1, style_id=1, theme_id=5),
        make_colorway(2, style_id=1, theme_id=None),
        make_colorway(3, style_id=1, theme_id=2),
        make_colorway(4, style_id=1, theme_id=5),
    ]

    assert distinct_theme_ids(colorways) == [5, 2]
