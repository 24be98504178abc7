"""Flat theme summary built from mapped attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .pid import parse_leading_int

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import MappedAttribute

SEASON_ATTRIBUTE = "Sezon"


@dataclass(slots=True, frozen=True)
class FormattedTheme:
    theme_name: str | None = None
    theme_code: str | None = None
    theme_id: int | None = None
    in_store_date: str | None = None
    cluster: str | None = None
    cluster_description: str | None = None
    lifestyle: str | None = None
    lifestyle_description: str | None = None
    hybrid: str | None = None
    hybrid_description: str | None = None
    short_code: str | None = None
    short_code_description: str | None = None
    season: str | None = None
    season_description: str | None = None
    parent_theme: str | None = None
    parent_theme_description: str | None = None
    product_class: str | None = None
    product_class_description: str | None = None
    sub_season: str | None = None
    sub_season_description: str | None = None
    brand: str | None = None
    brand_description: str | None = None
    collection: str | None = None
    collection_description: str | None = None


@dataclass(slots=True, frozen=True)
class ThemeAttributesReport:
    batch_id: str
    processed_at: datetime
    themes: tuple[FormattedTheme, ...] = field(default_factory=tuple)


def format_in_store_date(value: str | None) -> str | None:
    """Render ISO dates as ``DD.MM.YYYY``; dotted or unparsable input is returned as-is."""

    if not value:
        return None
    if "." in value:
        return value
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return value
    return parsed.strftime("%d.%m.%Y")


def format_theme_data(mapped: Sequence[MappedAttribute]) -> FormattedTheme:
    by_name = {attribute.name: attribute for attribute in reversed(mapped)}

    def raw(name: str) -> str | None:
        attribute = by_name.get(name)
        return attribute.raw_value if attribute is not None else None

    def described(name: str) -> str | None:
        attribute = by_name.get(name)
        return attribute.description if attribute is not None else None

    return FormattedTheme(
        theme_name=raw("Tema_Adi"),
        theme_code=raw("Tema_Kodu"),
        theme_id=parse_leading_int(raw("ThemeId")),
        in_store_date=format_in_store_date(raw("InStoreDate")),
        cluster=raw("Cluster"),
        cluster_description=described("Cluster"),
        lifestyle=raw("LifeStyle"),
        lifestyle_description=described("LifeStyle"),
        hybrid=raw("Hibrit"),
        hybrid_description=described("Hibrit"),
        short_code=raw("Tema_Kisa_Kod"),
        short_code_description=described("Tema_Kisa_Kod"),
        # Upstream stores season code and description inverted.
        season=described(SEASON_ATTRIBUTE),
        season_description=raw(SEASON_ATTRIBUTE),
        parent_theme=raw("Ana_Tema"),
        parent_theme_description=described("Ana_Tema"),
        product_class=raw("Urun_Sinifi"),
        product_class_description=described("Urun_Sinifi"),
        sub_season=raw("Alt_Sezon"),
        sub_season_description=described("Alt_Sezon"),
        brand=raw("Marka"),
        brand_description=described("Marka"),
        collection=raw("Koleksiyon"),
        collection_description=described("Koleksiyon"),
    )


def build_theme_attributes_report(
    pid: str,
    mapped: Sequence[MappedAttribute],
    *,
    processed_at: datetime | None = None,
) -> ThemeAttributesReport:
    return ThemeAttributesReport(
        batch_id=pid,
        processed_at=processed_at or datetime.now(UTC),
        themes=(format_theme_data(mapped),),
    )
