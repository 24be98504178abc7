"""Port for the attribute/value-list store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from themesync.domain.model import AttributeRecord, ValueListMap


@runtime_checkable
class AttributeStore(Protocol):
    async def fetch_attributes_for_pid(self, pid: str) -> list[AttributeRecord]: ...

    async def fetch_value_lists(self, entity_name: str) -> ValueListMap: ...
