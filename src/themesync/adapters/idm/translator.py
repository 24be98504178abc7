"""Translate IDM schemas into attribute records and value lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from themesync.domain.model import AttributeRecord, AttributeType, ValueList, ValueListEntry

if TYPE_CHECKING:
    from themesync.domain.model import ValueListMap

    from .schema import IdmEntityResponse, IdmItemResponse


def translate_attributes(payload: IdmItemResponse) -> list[AttributeRecord]:
    if payload.item is None or payload.item.attrs is None:
        return []
    return [
        AttributeRecord(
            name=attr.name,
            type=AttributeType.from_idm_code(attr.type),
            raw_value=attr.value,
            qualifier=attr.qual,
        )
        for attr in payload.item.attrs.attr
    ]


def translate_value_lists(payload: IdmEntityResponse) -> ValueListMap:
    """Keep only attributes that carry a value set, keyed by attribute name."""

    if payload.entity is None or payload.entity.attrs is None:
        return {}
    value_lists: ValueListMap = {}
    for attr in payload.entity.attrs.attr:
        if attr.valueset is None or attr.valueset.value is None:
            continue
        value_lists[attr.name] = ValueList(
            name=attr.name,
            display_name=attr.desc or attr.name,
            entries=tuple(
                ValueListEntry(code=entry.name, description=entry.desc)
                for entry in attr.valueset.value
            ),
        )
    return value_lists
