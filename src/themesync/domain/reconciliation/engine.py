"""Apply reconciliation decisions to styles through the PLM port."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from themesync.domain.errors import ThemeSyncError

from .rules import decide

if TYPE_CHECKING:
    from collections.abc import Sequence

    from themesync.domain.model import ColorwayRecord, ReconciliationDecision, StyleRecord
    from themesync.domain.ports import ColorwayStore

log = getLogger(__name__)


@dataclass(slots=True)
class StyleReconciliation:
    """Outcome of reconciling one style."""

    style_id: int
    updated: bool = False
    reindexed: bool = False
    decision: ReconciliationDecision | None = None
    reason: str | None = None
    error: str | None = None


@dataclass(slots=True)
class StyleReconciler:
    store: ColorwayStore

    async def reconcile_style(
        self,
        style_id: int,
        colorways: Sequence[ColorwayRecord],
    ) -> StyleReconciliation:
        """Fetch the style, decide, then PATCH changed fields and trigger a re-index.

        Failures are recorded on the result so sibling styles keep processing.
        """

        try:
            style = await self.store.fetch_style(style_id)
        except ThemeSyncError as exc:
            log.warning("Style %s lookup failed: %s", style_id, exc)
            return StyleReconciliation(style_id=style_id, error=str(exc))

        if style is None:
            log.warning("Style %s not found, no reconciliation", style_id)
            return StyleReconciliation(style_id=style_id, reason="style_not_found")

        return await self._apply(style_id, style, colorways)

    async def reconcile_with_all_colorways(self, style_id: int) -> StyleReconciliation:
        """Reconcile a style against every colorway it owns, across all themes."""

        try:
            loaded = await self.store.fetch_style_with_colorways(style_id)
        except ThemeSyncError as exc:
            log.warning("Style %s colorway lookup failed: %s", style_id, exc)
            return StyleReconciliation(style_id=style_id, error=str(exc))

        if loaded is None:
            log.warning("Style %s not found, no reconciliation", style_id)
            return StyleReconciliation(style_id=style_id, reason="style_not_found")

        return await self._apply(style_id, loaded.style, loaded.colorways)

    async def _apply(
        self,
        style_id: int,
        style: StyleRecord,
        colorways: Sequence[ColorwayRecord],
    ) -> StyleReconciliation:
        decision = decide(style, colorways)
        if not decision.has_changes:
            log.debug(
                "Style %s unchanged (status=%s, theme=%s)", style_id, style.status, style.theme_id
            )
            return StyleReconciliation(style_id=style_id, decision=decision, reason="no_changes")

        fields = decision.fields()
        log.info(
            "Style %s: status %s -> %s, theme %s -> %s",
            style_id,
            style.status,
            fields.get("Status", style.status),
            style.theme_id,
            fields.get("ThemeId", style.theme_id),
        )
        try:
            await self.store.patch_style(style_id, fields)
        except ThemeSyncError as exc:
            log.warning("Style %s patch failed: %s", style_id, exc)
            return StyleReconciliation(style_id=style_id, decision=decision, error=str(exc))

        try:
            await self.store.trigger_reindex(style_id)
        except ThemeSyncError as exc:
            log.warning("Style %s patched but re-index trigger failed: %s", style_id, exc)
            return StyleReconciliation(
                style_id=style_id, updated=True, decision=decision, error=str(exc)
            )

        return StyleReconciliation(
            style_id=style_id, updated=True, reindexed=True, decision=decision
        )
