"""Domain port definitions for adapters."""

from __future__ import annotations

from .idm import AttributeStore
from .plm import ColorwayStore

__all__ = ["AttributeStore", "ColorwayStore"]
