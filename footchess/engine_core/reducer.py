"""
Reducer - Applies moves to game state.

The reducer is the single point of state transition.
All moves must go through apply_move().

Design principles:
- Pure function: (state, move) -> outcome with a new state
- Re-validates before applying; an illegal move here is a caller bug
- Turn always passes to the mover's opponent, goal or not, so the
  conceding side kicks off the next epoch
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from .action import InvalidMove, Move, MoveOutcome
from .setup import seed_board
from .state import GameState, GoalInfo, MoveRecord, Side
from .validator import validate_move


DEFAULT_GOALS_TO_WIN = 3


class IllegalMoveError(ValueError):
    """
    Raised when apply_move() receives a move that does not validate.

    This is a contract violation by the caller, not a game condition.
    """

    def __init__(self, move: Move, rejection: InvalidMove):
        super().__init__(f"Illegal move {move}: {rejection.reason}")
        self.move = move
        self.rejection = rejection


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp for move records."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Reducer:
    """
    Reducer applies moves to game state.

    Stateless - all state is in GameState. The clock only stamps
    move records; inject a fixed one for reproducible histories.
    """
    clock: Callable[[], str] = field(default=utc_timestamp)

    def apply(self, state: GameState, move: Move) -> MoveOutcome:
        """
        Apply a legal move.

        Raises IllegalMoveError if the move does not validate against state.
        """
        validation = validate_move(state, move)
        if isinstance(validation, InvalidMove):
            logger.warning("Rejected unvalidated move {}: {}", move, validation.reason)
            raise IllegalMoveError(move, validation)

        piece = state.board.get(move.origin)
        board = state.board.clone()
        captured = board.get(move.destination)
        board.cells[move.origin.row][move.origin.col] = None
        board.cells[move.destination.row][move.destination.col] = piece

        score = dict(state.score)
        goal: GoalInfo | None = None
        if validation.goal:
            score[move.side] = score.get(move.side, 0) + 1
            goal = GoalInfo(scoring_side=move.side)
            # New epoch: fresh layout and identifiers
            board = seed_board()

        record = MoveRecord(
            move_number=len(state.history) + 1,
            side=move.side,
            origin=move.origin,
            destination=move.destination,
            piece_id=piece.piece_id,
            captured_piece_id=captured.piece_id if captured else None,
            goal=goal,
            timestamp=self.clock(),
        )

        next_state = GameState(
            board=board,
            turn=move.side.opponent,
            score=score,
            last_move=record,
            history=[*state.history, record],
            starting_side=state.starting_side,
        )

        return MoveOutcome(next_state=next_state, captured_piece=captured, goal=goal)


def apply_move(state: GameState, move: Move) -> MoveOutcome:
    """
    Convenience function to apply a move.

    Creates a Reducer and applies the move.
    """
    return Reducer().apply(state, move)


def pass_turn(state: GameState) -> GameState:
    """
    Hand the turn to the opponent without moving.

    Used when the side to move has no legal move. Board, score and
    history are unchanged; no move record is written.
    """
    logger.debug("{} has no legal move, passing", state.turn.value)
    return state.with_turn(state.turn.opponent)


def match_winner(state: GameState, goals_to_win: int = DEFAULT_GOALS_TO_WIN) -> Side | None:
    """Side that has reached goals_to_win, if any."""
    for side in (Side.HOME, Side.AWAY):
        if state.score_for(side) >= goals_to_win:
            return side
    return None
