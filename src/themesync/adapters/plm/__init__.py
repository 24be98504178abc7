"""PLM adapter: styles, colorways and search re-index jobs."""

from __future__ import annotations

from .client import PlmClient

__all__ = ["PlmClient"]
