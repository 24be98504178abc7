"""Application services that push theme attributes into colorways and reconcile styles."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import SyncError, ThemeSyncError, UpstreamFetchError
from .formatting import ThemeAttributesReport, build_theme_attributes_report
from .grouping import distinct_theme_ids, group_by_style
from .patches import build_batch_patch, build_colorway_patch, extract_descriptions
from .reconciliation import StyleReconciler, StyleReconciliation

if TYPE_CHECKING:
    from .attributes import AttributeMapper
    from .model import (
        ColorwayPatch,
        ColorwayRecord,
        StyleRecord,
        ThemeAttributes,
        ThemeDescriptions,
        ThemeInfo,
    )
    from .ports import ColorwayStore

log = getLogger(__name__)


@dataclass(slots=True)
class ThemeColorways:
    """A theme's colorways as fetched from PLM, grouped by style."""

    theme_id: int
    theme: ThemeInfo | None
    colorways: list[ColorwayRecord]
    by_style: dict[int, list[ColorwayRecord]]

    @property
    def total_colorways(self) -> int:
        return len(self.colorways)

    @property
    def total_styles(self) -> int:
        return len(self.by_style)


@dataclass(slots=True)
class ThemeAttributeView:
    collected: ThemeColorways
    attributes: ThemeAttributes


@dataclass(slots=True)
class StylePatchResult:
    style_id: int
    success: bool
    updated_count: int = 0
    error: str | None = None


@dataclass(slots=True)
class ThemeUpdateResult:
    theme_id: int
    theme: ThemeInfo | None
    patch_results: list[StylePatchResult] = field(default_factory=list[StylePatchResult])
    reconciliations: list[StyleReconciliation] = field(
        default_factory=list[StyleReconciliation]
    )

    @property
    def total_styles(self) -> int:
        return len(self.patch_results)

    @property
    def successful_styles(self) -> int:
        return sum(1 for result in self.patch_results if result.success)

    @property
    def failed_styles(self) -> int:
        return self.total_styles - self.successful_styles

    @property
    def total_updated_colorways(self) -> int:
        return sum(result.updated_count for result in self.patch_results if result.success)

    @property
    def styles_updated(self) -> int:
        return sum(1 for result in self.reconciliations if result.updated)

    @property
    def success(self) -> bool:
        return self.failed_styles == 0


@dataclass(slots=True)
class StyleUpdateResult:
    style: StyleRecord
    total_colorways: int
    updated_colorways: int
    unique_themes: int
    reconciliation: StyleReconciliation
    skipped_colorway_ids: list[int] = field(default_factory=list[int])

    @property
    def style_id(self) -> int:
        return self.style.style_id


async def collect_theme(theme_id: int, *, store: ColorwayStore) -> ThemeColorways:
    colorways = await store.fetch_colorways_for_theme(theme_id)
    theme = next((colorway.theme for colorway in colorways if colorway.theme is not None), None)
    by_style = group_by_style(colorways)
    log.info(
        "Theme %s: %s colorway(s) across %s style(s)", theme_id, len(colorways), len(by_style)
    )
    return ThemeColorways(theme_id=theme_id, theme=theme, colorways=colorways, by_style=by_style)


async def describe_theme_attributes(
    theme_id: int,
    *,
    store: ColorwayStore,
    mapper: AttributeMapper,
) -> ThemeAttributeView:
    collected = await collect_theme(theme_id, store=store)
    attributes = await mapper.resolve_theme(collected.theme)
    return ThemeAttributeView(collected=collected, attributes=attributes)


async def update_theme_colorways(
    theme_id: int,
    *,
    store: ColorwayStore,
    mapper: AttributeMapper,
) -> ThemeUpdateResult:
    """Copy a theme's attribute descriptions onto its colorways, style by style.

    Each style's colorways go out in one PATCH; a failed style is recorded and the
    rest continue. Every affected style is then reconciled against all of its
    own colorways, whatever theme they carry.
    """

    collected = await collect_theme(theme_id, store=store)
    attributes = await mapper.resolve_theme(collected.theme)
    if not attributes.mapped:
        detail = f": {attributes.error}" if attributes.error else ""
        raise SyncError(f"No mapped attributes for theme {theme_id}{detail}")
    if not collected.by_style:
        raise SyncError(f"No styles found for theme {theme_id}")

    descriptions = extract_descriptions(attributes.mapped)
    log.debug("Theme %s descriptions: %s", theme_id, descriptions)
    result = ThemeUpdateResult(theme_id=theme_id, theme=collected.theme)

    for style_id, colorways in collected.by_style.items():
        patches = build_batch_patch(colorways, descriptions)
        try:
            await store.patch_colorways(patches)
        except ThemeSyncError as exc:
            log.warning("Colorway patch failed for style %s: %s", style_id, exc)
            result.patch_results.append(
                StylePatchResult(style_id=style_id, success=False, error=str(exc))
            )
            continue
        result.patch_results.append(
            StylePatchResult(style_id=style_id, success=True, updated_count=len(patches))
        )

    log.info(
        "Theme %s colorway patches: %s ok, %s failed, %s colorway(s) updated",
        theme_id,
        result.successful_styles,
        result.failed_styles,
        result.total_updated_colorways,
    )

    reconciler = StyleReconciler(store)
    for style_id in collected.by_style:
        result.reconciliations.append(await reconciler.reconcile_with_all_colorways(style_id))

    log.info(
        "Theme %s reconciliation: %s of %s style(s) updated",
        theme_id,
        result.styles_updated,
        len(result.reconciliations),
    )
    return result


async def _descriptions_by_theme(
    colorways: list[ColorwayRecord],
    mapper: AttributeMapper,
) -> dict[int, ThemeDescriptions]:
    resolved: dict[int, ThemeDescriptions] = {}
    for theme_id in distinct_theme_ids(colorways):
        carrier = next(
            (c for c in colorways if c.theme_id == theme_id and c.theme is not None), None
        )
        if carrier is None or carrier.theme is None or not carrier.theme.description:
            log.warning("Theme %s has no description, its colorways are skipped", theme_id)
            continue
        attributes = await mapper.resolve_theme(carrier.theme)
        if not attributes.ok:
            continue
        resolved[theme_id] = extract_descriptions(attributes.mapped)
    return resolved


async def update_style_colorways(
    style_id: int,
    *,
    store: ColorwayStore,
    mapper: AttributeMapper,
) -> StyleUpdateResult | None:
    """Refresh every colorway of one style from its own theme, then reconcile the style.

    Returns ``None`` when the style does not exist.
    """

    loaded = await store.fetch_style_with_colorways(style_id)
    if loaded is None:
        log.warning("Style %s not found", style_id)
        return None

    colorways = list(loaded.colorways)
    if not colorways:
        raise SyncError(f"Style {style_id} has no colorways")

    descriptions = await _descriptions_by_theme(colorways, mapper)

    patches: list[ColorwayPatch] = []
    skipped: list[int] = []
    for colorway in colorways:
        theme_descriptions = (
            descriptions.get(colorway.theme_id) if colorway.theme_id is not None else None
        )
        if theme_descriptions is None:
            skipped.append(colorway.id)
            continue
        patches.append(build_colorway_patch(colorway.id, theme_descriptions))

    if not patches:
        raise SyncError(f"No colorway of style {style_id} could be resolved to theme attributes")

    if skipped:
        log.info("Style %s: skipping colorway(s) without theme attributes: %s", style_id, skipped)
    await store.patch_colorways(patches)
    log.info("Style %s: patched %s of %s colorway(s)", style_id, len(patches), len(colorways))

    reconciliation = await StyleReconciler(store).reconcile_style(style_id, colorways)
    return StyleUpdateResult(
        style=loaded.style,
        total_colorways=len(colorways),
        updated_colorways=len(patches),
        unique_themes=len(distinct_theme_ids(colorways)),
        reconciliation=reconciliation,
        skipped_colorway_ids=skipped,
    )


async def format_theme_attributes(pid: str, *, mapper: AttributeMapper) -> ThemeAttributesReport:
    """Build the flat attribute report for one theme PID."""

    attributes = await mapper.load(pid)
    if not attributes.attributes:
        raise UpstreamFetchError(f"No attributes available for {pid}")
    return build_theme_attributes_report(pid, attributes.mapped)
