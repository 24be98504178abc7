"""Translate PLM schemas into domain records and back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from themesync.domain.model import (
    ColorwayRecord,
    StyleRecord,
    StyleWithColorways,
    ThemeInfo,
)

from .schema import ColorwayPatchPayload, ReindexCustomData, ReindexTask

if TYPE_CHECKING:
    from collections.abc import Iterable

    from themesync.domain.model import ColorwayPatch

    from .schema import PlmColorway, PlmStyle, PlmTheme


def translate_theme(payload: PlmTheme | None, *, theme_id: int | None = None) -> ThemeInfo | None:
    if payload is None:
        return None
    return ThemeInfo(
        theme_id=payload.theme_id if payload.theme_id is not None else theme_id,
        name=payload.name,
        code=payload.code,
        description=payload.description,
    )


def translate_colorway(payload: PlmColorway) -> ColorwayRecord:
    return ColorwayRecord(
        id=payload.style_colorway_id,
        style_id=payload.style_id,
        theme_id=payload.theme_id,
        status=payload.colorway_status,
        code=payload.code,
        name=payload.name,
        hex=payload.hex_value,
        color_range_id=payload.colorrng_id,
        theme=translate_theme(payload.theme, theme_id=payload.theme_id),
    )


def translate_style(payload: PlmStyle) -> StyleRecord:
    return StyleRecord(style_id=payload.style_id, status=payload.status, theme_id=payload.theme_id)


def translate_style_with_colorways(payload: PlmStyle) -> StyleWithColorways:
    return StyleWithColorways(
        style=translate_style(payload),
        colorways=tuple(translate_colorway(colorway) for colorway in payload.style_colorways),
    )


def colorway_patch_payloads(patches: Iterable[ColorwayPatch]) -> list[dict[str, object]]:
    """Serialise patches; ``ColorwayUserField4`` only appears when set."""

    payloads: list[dict[str, object]] = []
    for patch in patches:
        model = ColorwayPatchPayload(
            style_colorway_id=patch.colorway_id,
            free_field_one=patch.free_field_one,
            free_field_two=patch.free_field_two,
            free_field_three=patch.free_field_three,
            free_field_four=patch.free_field_four,
            free_field_five=patch.free_field_five,
            colorway_user_field4=patch.life_stage_group,
        )
        exclude = {"colorway_user_field4"} if patch.life_stage_group is None else None
        payloads.append(model.model_dump(by_alias=True, exclude=exclude))
    return payloads


def reindex_task_payload(style_id: int, *, schema: str) -> dict[str, object]:
    task = ReindexTask(
        custom_data=[
            ReindexCustomData(key="cluster", value="styleoverview"),
            ReindexCustomData(key="moduleId", value=style_id),
            ReindexCustomData(key="schema", value=schema),
            ReindexCustomData(key="updateOrgLevelPath", value="true"),
        ]
    )
    return task.model_dump(by_alias=True)
