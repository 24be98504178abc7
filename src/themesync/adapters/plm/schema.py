"""PLM OData payload schemas.

Upstream field names arrive both in PascalCase and camelCase depending on the
endpoint; the aliases below accept either so the translator sees one shape.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _either(name: str) -> AliasChoices:
    return AliasChoices(name, name[0].lower() + name[1:])


class PlmBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PlmTheme(PlmBaseModel):
    theme_id: int | None = Field(default=None, validation_alias=_either("ThemeId"))
    name: str | None = Field(default=None, validation_alias=_either("Name"))
    code: str | None = Field(default=None, validation_alias=_either("Code"))
    description: str | None = Field(default=None, validation_alias=_either("Description"))


class PlmColorway(PlmBaseModel):
    style_colorway_id: int = Field(validation_alias=_either("StyleColorwayId"))
    style_id: int = Field(validation_alias=_either("StyleId"))
    theme_id: int | None = Field(default=None, validation_alias=_either("ThemeId"))
    colorway_status: int | None = Field(default=None, validation_alias=_either("ColorwayStatus"))
    colorrng_id: int | None = Field(default=None, validation_alias=_either("ColorrngId"))
    code: str | None = Field(default=None, validation_alias=_either("Code"))
    name: str | None = Field(default=None, validation_alias=_either("Name"))
    hex_value: str | None = Field(default=None, validation_alias=_either("HexValue"))
    theme: PlmTheme | None = Field(default=None, validation_alias=_either("Theme"))


class PlmStyle(PlmBaseModel):
    style_id: int = Field(validation_alias=_either("StyleId"))
    status: int | None = Field(default=None, validation_alias=_either("Status"))
    theme_id: int | None = Field(default=None, validation_alias=_either("ThemeId"))
    style_colorways: list[PlmColorway] = Field(
        default_factory=list[PlmColorway], validation_alias=_either("StyleColorways")
    )


class ColorwayCollection(PlmBaseModel):
    value: list[PlmColorway] = Field(default_factory=list[PlmColorway])


class StyleCollection(PlmBaseModel):
    value: list[PlmStyle] = Field(default_factory=list[PlmStyle])


class ColorwayPatchPayload(BaseModel):
    """One element of the ``PATCH STYLECOLORWAYS`` array."""

    model_config = ConfigDict(populate_by_name=True)

    style_colorway_id: int = Field(serialization_alias="StyleColorwayId")
    free_field_one: str | None = Field(serialization_alias="FreeFieldOne")
    free_field_two: str | None = Field(serialization_alias="FreeFieldTwo")
    free_field_three: str | None = Field(serialization_alias="FreeFieldThree")
    free_field_four: str | None = Field(serialization_alias="FreeFieldFour")
    free_field_five: str | None = Field(serialization_alias="FreeFieldFive")
    colorway_user_field4: int | None = Field(
        default=None, serialization_alias="ColorwayUserField4"
    )


class ReindexCustomData(BaseModel):
    key: str
    value: str | int


class ReindexTask(BaseModel):
    """Job payload asking PLM to rebuild a style's search data."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(default="syncSearchData", serialization_alias="TaskId")
    is_system: bool = Field(default=True, serialization_alias="IsSystem")
    custom_data: list[ReindexCustomData] = Field(serialization_alias="CustomData")
    sequence: int = Field(default=1, serialization_alias="Sequence")
