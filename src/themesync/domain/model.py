"""Domain records for styles, colorways, themes and their IDM attributes.

Records are produced by adapters from upstream payloads and are treated as
immutable by the domain services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Final

RETIRED_THEME_ID: Final[int] = 1172

STYLE_STATUS_PENDING: Final[int] = 1
STYLE_STATUS_PROMOTED: Final[int] = 2
COLORWAY_STATUS_ACTIVE: Final[int] = 1


class AttributeType(StrEnum):
    STRING = "string"
    INTEGER = "integer"
    DATE = "date"
    FLOAT = "float"

    @classmethod
    def from_idm_code(cls, code: str | None) -> AttributeType:
        """Translate IDM's numeric type codes; unknown codes are strings."""

        return _IDM_TYPE_CODES.get(code or "", cls.STRING)


_IDM_TYPE_CODES: Final[dict[str, AttributeType]] = {
    "3": AttributeType.INTEGER,
    "7": AttributeType.DATE,
    "10": AttributeType.FLOAT,
}


@dataclass(slots=True, frozen=True)
class ClassificationId:
    """Positional parse of ``<entityName>-<id>-<version>-<tag>``."""

    full_pid: str
    entity_name: str
    id: int | None = None
    version: int | None = None
    tag: str | None = None


@dataclass(slots=True, frozen=True)
class AttributeRecord:
    name: str
    type: AttributeType
    raw_value: str | None
    qualifier: str | None = None

    @property
    def parsed_value(self) -> str | int | float | date | None:
        return parse_attribute_value(self.raw_value, self.type)


@dataclass(slots=True, frozen=True)
class ValueListEntry:
    code: str
    description: str | None


@dataclass(slots=True, frozen=True)
class ValueList:
    name: str
    display_name: str
    entries: tuple[ValueListEntry, ...] = ()

    def find(self, code: str | None) -> ValueListEntry | None:
        for entry in self.entries:
            if entry.code == code:
                return entry
        return None


type ValueListMap = dict[str, ValueList]


@dataclass(slots=True, frozen=True)
class MappedAttribute:
    name: str
    type: AttributeType
    raw_value: str | None
    description: str | None
    mapped: bool
    qualifier: str | None = None
    display_name: str | None = None


@dataclass(slots=True, frozen=True)
class ThemeInfo:
    theme_id: int | None
    name: str | None = None
    code: str | None = None
    description: str | None = None


@dataclass(slots=True, frozen=True)
class ColorwayRecord:
    id: int
    style_id: int
    theme_id: int | None
    status: int | None
    code: str | None = None
    name: str | None = None
    hex: str | None = None
    color_range_id: int | None = None
    theme: ThemeInfo | None = None

    @property
    def is_active(self) -> bool:
        return self.status == COLORWAY_STATUS_ACTIVE


@dataclass(slots=True, frozen=True)
class StyleRecord:
    style_id: int
    status: int | None
    theme_id: int | None


@dataclass(slots=True, frozen=True)
class StyleWithColorways:
    style: StyleRecord
    colorways: tuple[ColorwayRecord, ...] = ()


@dataclass(slots=True, frozen=True)
class ReconciliationDecision:
    style_id: int
    status_update: int | None = None
    theme_id_update: int | None = None

    @property
    def has_changes(self) -> bool:
        return self.status_update is not None or self.theme_id_update is not None

    def fields(self) -> dict[str, int]:
        """Changed fields keyed by their upstream names."""

        changed: dict[str, int] = {}
        if self.status_update is not None:
            changed["Status"] = self.status_update
        if self.theme_id_update is not None:
            changed["ThemeId"] = self.theme_id_update
        return changed


@dataclass(slots=True, frozen=True)
class ThemeDescriptions:
    """Classification-derived fields copied onto every colorway of a theme."""

    cluster: str | None = None
    lifestyle: str | None = None
    hybrid: str | None = None
    short_code: str | None = None
    parent_theme: str | None = None
    life_stage_group: int | None = None


@dataclass(slots=True, frozen=True)
class ColorwayPatch:
    colorway_id: int
    free_field_one: str | None
    free_field_two: str | None
    free_field_three: str | None
    free_field_four: str | None
    free_field_five: str | None
    life_stage_group: int | None = None


@dataclass(slots=True)
class ThemeAttributes:
    """Mapping outcome for one theme; ``error`` is set instead of raising."""

    theme_id: int | None
    classification: ClassificationId | None = None
    attributes: list[AttributeRecord] = field(default_factory=list[AttributeRecord])
    value_lists: ValueListMap = field(default_factory=dict[str, ValueList])
    mapped: list[MappedAttribute] = field(default_factory=list[MappedAttribute])
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.mapped)


def parse_attribute_value(
    raw_value: str | None, attribute_type: AttributeType
) -> str | int | float | date | None:
    """Best-effort typed view of a raw IDM value; unparsable values stay raw."""

    if not raw_value:
        return raw_value
    try:
        match attribute_type:
            case AttributeType.INTEGER:
                return int(raw_value.strip())
            case AttributeType.FLOAT:
                return float(raw_value.strip())
            case AttributeType.DATE:
                return datetime.fromisoformat(raw_value.strip()).date()
            case _:
                return raw_value
    except ValueError:
        return raw_value
