"""Runtime package: interactive loop and persisted startup config."""

from __future__ import annotations

from .loop import FinderSession, LoopAction, apply_key, run_finder

__all__ = ["FinderSession", "LoopAction", "apply_key", "run_finder"]
