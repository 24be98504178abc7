from __future__ import annotations

import asyncio

from themesync.domain.reconciliation import StyleReconciler

from tests.support.fakes import FakeColorwayStore, make_colorway, make_style


def test_reconcile_patches_then_reindexes() -> None:
    store = FakeColorwayStore(styles={1: make_style(1, status=1, theme_id=3)})
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    result = asyncio.run(StyleReconciler(store).reconcile_style(1, colorways))

    assert result.updated
    assert result.reindexed
    assert result.error is None
    assert store.style_patches == [(1, {"Status": 2, "ThemeId": 7})]
    assert store.reindexed == [1]
    assert store.calls == ["style:1", "patch_style:1", "reindex:1"]


def test_reconcile_without_changes_writes_nothing() -> None:
    store = FakeColorwayStore(styles={1: make_style(1, status=2, theme_id=7)})
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    result = asyncio.run(StyleReconciler(store).reconcile_style(1, colorways))

    assert not result.updated
    assert result.reason == "no_changes"
    assert store.style_patches == []
    assert store.reindexed == []


def test_reconcile_missing_style_is_reported() -> None:
    store = FakeColorwayStore()

    result = asyncio.run(StyleReconciler(store).reconcile_style(99, []))

    assert result.reason == "style_not_found"
    assert not result.updated


def test_reconcile_records_fetch_failure() -> None:
    store = FakeColorwayStore(failing_style_fetches={1})

    result = asyncio.run(StyleReconciler(store).reconcile_style(1, []))

    assert result.error is not None
    assert "HTTP 500" in result.error
    assert not result.updated


def test_failed_patch_skips_reindex() -> None:
    store = FakeColorwayStore(
        styles={1: make_style(1, status=1, theme_id=7)}, failing_style_patches={1}
    )
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    result = asyncio.run(StyleReconciler(store).reconcile_style(1, colorways))

    assert not result.updated
    assert result.error is not None
    assert result.decision is not None
    assert result.decision.status_update == 2
    assert store.reindexed == []


def test_reindex_failure_keeps_the_patch() -> None:
    store = FakeColorwayStore(
        styles={1: make_style(1, status=1, theme_id=7)}, failing_reindex={1}
    )
    colorways = [make_colorway(10, style_id=1, theme_id=7)]

    result = asyncio.run(StyleReconciler(store).reconcile_style(1, colorways))

    assert result.updated
    assert not result.reindexed
    assert result.error is not None
    assert store.style_patches == [(1, {"Status": 2})]


def test_reconcile_with_all_colorways_loads_the_style_colorways() -> None:
    store = FakeColorwayStore(
        styles={1: make_style(1, status=1, theme_id=3)},
        style_colorways={
            1: [
                make_colorway(10, style_id=1, theme_id=3, status=0),
                make_colorway(11, style_id=1, theme_id=7),
            ]
        },
    )

    result = asyncio.run(StyleReconciler(store).reconcile_with_all_colorways(1))

    assert result.updated
    assert store.style_patches == [(1, {"Status": 2, "ThemeId": 7})]
    assert store.calls == ["style+colorways:1", "patch_style:1", "reindex:1"]


def test_reconcile_with_all_colorways_records_fetch_failure() -> None:
    store = FakeColorwayStore(
        styles={1: make_style(1, status=1, theme_id=3)}, failing_style_fetches={1}
    )

    result = asyncio.run(StyleReconciler(store).reconcile_with_all_colorways(1))

    assert result.error is not None
    assert "HTTP 500" in result.error
    assert not result.updated
    assert store.style_patches == []


def test_reconcile_with_all_colorways_reports_missing_style() -> None:
    result = asyncio.run(StyleReconciler(FakeColorwayStore()).reconcile_with_all_colorways(8))

    assert result.reason == "style_not_found"
