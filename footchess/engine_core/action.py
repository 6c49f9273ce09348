"""
Action System - Moves, validation results and outcomes.

A Move is what a caller proposes. Validation answers with a tagged
result: ValidMove or InvalidMove. Callers branch on the type (or on
`.valid`); an invalid result always carries a displayable reason.

All state changes flow through the reducer, which returns a MoveOutcome.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from .state import GoalInfo, Piece, Position, Side

if TYPE_CHECKING:
    from .state import GameState


@dataclass(frozen=True)
class Move:
    """A proposed move: acting side, origin cell, destination cell."""
    side: Side
    origin: Position
    destination: Position

    @classmethod
    def of(cls, side: Side, origin: tuple[int, int], destination: tuple[int, int]) -> Move:
        """Factory from (row, col) tuples."""
        return cls(
            side=side,
            origin=Position(*origin),
            destination=Position(*destination),
        )

    def __str__(self) -> str:
        return f"{self.side.value} {self.origin}->{self.destination}"


class RejectionReason(Enum):
    """Machine-readable codes for rule violations."""
    NOT_YOUR_TURN = "not_your_turn"
    NO_PIECE_AT_ORIGIN = "no_piece_at_origin"
    OUT_OF_BOUNDS = "out_of_bounds"
    FRIENDLY_OCCUPIED = "friendly_occupied"
    OWN_GOAL = "own_goal"
    DEFENDER_CANNOT_SCORE = "defender_cannot_score"
    ILLEGAL_SHAPE = "illegal_shape"
    ILLEGAL_DISTANCE = "illegal_distance"
    PATH_BLOCKED = "path_blocked"


@dataclass(frozen=True)
class ValidMove:
    """The move is legal. Flags describe what it will do."""
    capture: bool = False
    goal: bool = False

    @property
    def valid(self) -> bool:
        return True


@dataclass(frozen=True)
class InvalidMove:
    """The move is illegal. `reason` is safe to show to the player."""
    reason: str
    code: RejectionReason

    @property
    def valid(self) -> bool:
        return False


MoveValidationResult = Union[ValidMove, InvalidMove]


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of applying a legal move.

    Contains:
    - The next state (a new object; the input state is untouched)
    - The captured piece, if the destination held an enemy
    - Goal info, if the move scored (the board in next_state is then fresh)
    """
    next_state: GameState
    captured_piece: Piece | None = None
    goal: GoalInfo | None = None

    @property
    def scored(self) -> bool:
        return self.goal is not None
