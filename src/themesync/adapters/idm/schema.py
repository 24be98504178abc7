"""IDM item and datamodel payload schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IdmBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class IdmItemAttribute(IdmBaseModel):
    name: str
    type: str | None = None
    qual: str | None = None
    value: str | None = None


class IdmAttributeList(IdmBaseModel):
    attr: list[IdmItemAttribute] = Field(default_factory=list[IdmItemAttribute])


class IdmItem(IdmBaseModel):
    attrs: IdmAttributeList | None = None


class IdmItemResponse(IdmBaseModel):
    item: IdmItem | None = None


class IdmValueSetEntry(IdmBaseModel):
    name: str
    desc: str | None = None


class IdmValueSet(IdmBaseModel):
    value: list[IdmValueSetEntry] | None = None


class IdmEntityAttribute(IdmBaseModel):
    name: str
    desc: str | None = None
    type: str | None = None
    qual: str | None = None
    valueset: IdmValueSet | None = None


class IdmEntityAttributeList(IdmBaseModel):
    attr: list[IdmEntityAttribute] = Field(default_factory=list[IdmEntityAttribute])


class IdmEntity(IdmBaseModel):
    name: str | None = None
    attrs: IdmEntityAttributeList | None = None


class IdmEntityResponse(IdmBaseModel):
    entity: IdmEntity | None = None
