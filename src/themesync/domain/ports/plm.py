"""Port for the product-lifecycle record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from themesync.domain.model import (
        ColorwayPatch,
        ColorwayRecord,
        StyleRecord,
        StyleWithColorways,
    )


@runtime_checkable
class ColorwayStore(Protocol):
    """Reads and writes styles and their colorways.

    Reads raise ``UpstreamFetchError`` and writes ``UpstreamWriteError``.
    """

    async def fetch_colorways_for_theme(self, theme_id: int) -> list[ColorwayRecord]: ...

    async def fetch_style(self, style_id: int) -> StyleRecord | None: ...

    async def fetch_style_with_colorways(self, style_id: int) -> StyleWithColorways | None: ...

    async def patch_style(self, style_id: int, fields: Mapping[str, int]) -> None: ...

    async def patch_colorways(self, patches: Sequence[ColorwayPatch]) -> None: ...

    async def trigger_reindex(self, style_id: int) -> None: ...
