"""Errors raised by the simulation core.

Only programmer errors live here. Ordinary game-flow failures (a blocked
move, nothing to pick up, attacking a corpse) are reported through
``ActionResult`` and boolean returns and never raise.
"""

from __future__ import annotations

from typing import Any


class FatalInvariantError(RuntimeError):
    """An internal invariant of the simulation was broken.

    These indicate a bug in the core or in a caller driving it, not a
    condition the player can cause. Nothing inside the core catches them;
    the outer layer is expected to restore the terminal (or whatever it
    holds) and terminate.

    Attributes:
        context: Structured details of the breach (entity reprs, location,
            expected and actual values) for the crash report.
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.context: dict[str, Any] = context
        if context:
            details = ", ".join(f"{key}={value!r}" for key, value in context.items())
            message = f"{message} ({details})"
        super().__init__(message)


class OccupancyError(FatalInvariantError):
    """Two actors or two static features were placed on the same cell."""


class DesyncError(FatalInvariantError):
    """An entity was not where the bookkeeping said it was."""


class TurnOrderError(FatalInvariantError):
    """An actor was ticked out of turn sequence."""


class InvalidStateError(FatalInvariantError):
    """The turn state machine was driven into an unmapped transition."""
