"""Join IDM attribute codes to their value-list descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import ThemeSyncError
from .model import MappedAttribute, ThemeAttributes
from .pid import parse_pid

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import AttributeRecord, ThemeInfo, ValueListMap
    from .ports import AttributeStore

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ValueMatch:
    code: str | None
    description: str | None
    mapped: bool
    display_name: str | None = None


def map_value(attribute_name: str, code: str | None, value_lists: ValueListMap) -> ValueMatch:
    value_list = value_lists.get(attribute_name)
    if value_list is None:
        return ValueMatch(code=code, description=None, mapped=False)
    entry = value_list.find(code)
    return ValueMatch(
        code=code,
        description=entry.description if entry is not None else None,
        mapped=entry is not None,
        display_name=value_list.display_name,
    )


def join_value_lists(
    attributes: Iterable[AttributeRecord],
    value_lists: ValueListMap,
) -> list[MappedAttribute]:
    """Attach descriptions to ``attributes``; either input may be empty."""

    mapped: list[MappedAttribute] = []
    for attribute in attributes:
        match = map_value(attribute.name, attribute.raw_value, value_lists)
        mapped.append(
            MappedAttribute(
                name=attribute.name,
                type=attribute.type,
                raw_value=attribute.raw_value,
                description=match.description,
                mapped=match.mapped,
                qualifier=attribute.qualifier,
                display_name=match.display_name,
            )
        )
    return mapped


class AttributeMapper:
    """Fetches a theme's attributes and value lists and joins them."""

    def __init__(self, store: AttributeStore) -> None:
        self._store = store

    async def load(self, pid: str | None, *, theme_id: int | None = None) -> ThemeAttributes:
        classification = parse_pid(pid)
        attributes = await self._store.fetch_attributes_for_pid(classification.full_pid)
        value_lists = await self._store.fetch_value_lists(classification.entity_name)
        mapped = join_value_lists(attributes, value_lists)
        log.info(
            "Mapped %s attribute(s) of %s against %s value list(s), %s matched",
            len(mapped),
            classification.full_pid,
            len(value_lists),
            sum(1 for attribute in mapped if attribute.mapped),
        )
        return ThemeAttributes(
            theme_id=theme_id,
            classification=classification,
            attributes=list(attributes),
            value_lists=value_lists,
            mapped=mapped,
        )

    async def map_attributes(self, pid: str | None) -> list[MappedAttribute]:
        return (await self.load(pid)).mapped

    async def resolve_theme(self, theme: ThemeInfo | None) -> ThemeAttributes:
        """Map a theme's attributes, recording failures on the result."""

        theme_id = theme.theme_id if theme is not None else None
        pid = theme.description if theme is not None else None
        if not pid:
            log.warning("Theme %s has no description, skipping attribute mapping", theme_id)
            return ThemeAttributes(theme_id=theme_id, error="No theme description found")
        try:
            return await self.load(pid, theme_id=theme_id)
        except ThemeSyncError as exc:
            log.warning("Attribute mapping failed for theme %s: %s", theme_id, exc)
            return ThemeAttributes(theme_id=theme_id, error=str(exc))
