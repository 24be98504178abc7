"""IDM adapter: classification items and entity value lists."""

from __future__ import annotations

from .client import IdmClient

__all__ = ["IdmClient"]
