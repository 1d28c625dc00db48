"""Derived-field calculation for the investment form."""

from .engine import EngineStatus, Patch, RecalculationEngine, derive, recompute
from .rules import (
    DEFAULT_RULES,
    DerivationRule,
    PRICE_DECOMPOSITION,
    numeric,
    round_yen,
)
from .tracking import EditState, EditTracker, is_overridable

__all__ = [
    "DEFAULT_RULES",
    "DerivationRule",
    "EditState",
    "EditTracker",
    "EngineStatus",
    "PRICE_DECOMPOSITION",
    "Patch",
    "RecalculationEngine",
    "derive",
    "is_overridable",
    "numeric",
    "recompute",
    "round_yen",
]
