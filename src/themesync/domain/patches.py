"""Translate mapped theme attributes into colorway PATCH payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import ColorwayPatch, ThemeDescriptions
from .pid import parse_leading_int

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .model import ColorwayRecord, MappedAttribute

_DESCRIPTION_FIELDS = {
    "Cluster": "cluster",
    "LifeStyle": "lifestyle",
    "Hibrit": "hybrid",
    "Tema_Kisa_Kod": "short_code",
    "Ana_Tema": "parent_theme",
}
LIFE_STAGE_GROUP_ATTRIBUTE = "LifeStyleGrup"


def extract_descriptions(mapped: Iterable[MappedAttribute]) -> ThemeDescriptions:
    values: dict[str, str | int | None] = {}
    for attribute in mapped:
        target = _DESCRIPTION_FIELDS.get(attribute.name)
        if target is not None:
            values[target] = attribute.description or None
        elif attribute.name == LIFE_STAGE_GROUP_ATTRIBUTE:
            values["life_stage_group"] = parse_leading_int(attribute.raw_value)
    return ThemeDescriptions(**values)  # pyright: ignore[reportArgumentType]


def build_colorway_patch(colorway_id: int, descriptions: ThemeDescriptions) -> ColorwayPatch:
    # Zero is indistinguishable from "not set" and is omitted like None.
    life_stage_group = descriptions.life_stage_group or None
    return ColorwayPatch(
        colorway_id=colorway_id,
        free_field_one=descriptions.cluster,
        free_field_two=descriptions.lifestyle,
        free_field_three=descriptions.hybrid,
        free_field_four=descriptions.short_code,
        free_field_five=descriptions.parent_theme,
        life_stage_group=life_stage_group,
    )


def build_batch_patch(
    colorways: Sequence[ColorwayRecord],
    descriptions: ThemeDescriptions,
) -> list[ColorwayPatch]:
    return [build_colorway_patch(colorway.id, descriptions) for colorway in colorways]
