"""
Actions: what an actor intends to do, and what came of it.

A `MobAction` is a pure data object. It is produced either by the excluded
input layer (for the player) or by `Actor.tick` (for everyone else) and
carries no game logic. The `ActionRouter` looks up the executor for its kind
and the executor reports back with an `ActionResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from umbra.game.enums import ActionKind, BlockReason
from umbra.util.vector import Vector

if TYPE_CHECKING:
    from umbra.game.entities import Item


@dataclass(frozen=True, slots=True)
class MobAction:
    """A tagged request: ``kind`` plus the payload that kind needs.

    MOVE carries a delta `Vector`, DROP carries the `Item` to drop, every
    other kind carries nothing. Use the constructors rather than building
    one by hand.
    """

    kind: ActionKind
    payload: Vector | Item | None = None

    @classmethod
    def none(cls) -> MobAction:
        return cls(ActionKind.NONE)

    @classmethod
    def wait(cls) -> MobAction:
        return cls(ActionKind.WAIT)

    @classmethod
    def move(cls, delta: Vector) -> MobAction:
        if not isinstance(delta, Vector):
            raise TypeError(f"Move needs a Vector delta, got {delta!r}")
        return cls(ActionKind.MOVE, delta)

    @classmethod
    def drop(cls, item: Item) -> MobAction:
        return cls(ActionKind.DROP, item)

    @classmethod
    def drop_all(cls) -> MobAction:
        return cls(ActionKind.DROP_ALL)

    @classmethod
    def pick_up_all(cls) -> MobAction:
        return cls(ActionKind.PICK_UP_ALL)

    @property
    def delta(self) -> Vector:
        """The movement delta of a MOVE action."""
        if self.kind is not ActionKind.MOVE or not isinstance(self.payload, Vector):
            raise ValueError(f"{self} has no movement delta")
        return self.payload

    @property
    def item(self) -> Item:
        """The item of a DROP action."""
        if self.kind is not ActionKind.DROP or self.payload is None:
            raise ValueError(f"{self} has no item")
        return self.payload  # type: ignore[return-value]

    def __str__(self) -> str:
        if self.payload is None:
            return f"<MobAction {self.kind.name}>"
        return f"<MobAction {self.kind.name} {self.payload}>"


@dataclass
class ActionResult:
    """
    The mechanical outcome of one executed action.

    The router inspects it to decide on follow-up rules (a move blocked by
    an actor becomes an attack) and the turn manager reads
    ``consumes_turn`` to decide whether the player's turn is over.
    """

    succeeded: bool = True
    consumes_turn: bool = True
    blocked_by: Any | None = None
    block_reason: BlockReason | None = None

    @classmethod
    def failed(
        cls, reason: BlockReason, blocked_by: Any | None = None
    ) -> ActionResult:
        """A failure that leaves the actor free to try something else."""
        return cls(
            succeeded=False,
            consumes_turn=False,
            blocked_by=blocked_by,
            block_reason=reason,
        )
