"""Style status/theme reconciliation."""

from __future__ import annotations

from .engine import StyleReconciler, StyleReconciliation
from .rules import THEME_TIERS, ColorwaySplit, decide, decide_status, decide_theme

__all__ = [
    "THEME_TIERS",
    "ColorwaySplit",
    "StyleReconciler",
    "StyleReconciliation",
    "decide",
    "decide_status",
    "decide_theme",
]
