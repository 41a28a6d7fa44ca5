"""Delta synchronization exports for odrivefs."""

from __future__ import annotations

from .engine import DEFAULT_INTERVAL_SEC, DeltaSyncEngine, EngineState, classify_changes
from .snapshot import DeltaSnapshot

__all__ = [
    "DeltaSnapshot",
    "DeltaSyncEngine",
    "EngineState",
    "DEFAULT_INTERVAL_SEC",
    "classify_changes",
]
