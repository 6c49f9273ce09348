"""
Engine Core - Deterministic rule engine for the football board game.

The engine is the runtime that:
1. Creates the initial GameState
2. Validates proposed moves
3. Applies moves via the reducer (captures, goals, board resets)
4. Generates legal moves for hints and bots
"""

from .state import (
    BOARD_COLS,
    BOARD_ROWS,
    GOAL_COLS,
    GOAL_ROWS,
    Board,
    GameState,
    GoalInfo,
    MoveRecord,
    Piece,
    PieceType,
    Position,
    Side,
    opponent,
)
from .action import (
    InvalidMove,
    Move,
    MoveOutcome,
    MoveValidationResult,
    RejectionReason,
    ValidMove,
)
from .setup import create_initial_state, seed_board, squad_composition, assert_full_squads
from .validator import validate_move
from .reducer import IllegalMoveError, Reducer, apply_move, match_winner, pass_turn
from .action_generator import has_any_legal_move, is_legal, legal_moves, legal_moves_for_piece

__all__ = [
    "BOARD_COLS",
    "BOARD_ROWS",
    "GOAL_COLS",
    "GOAL_ROWS",
    "Board",
    "GameState",
    "GoalInfo",
    "MoveRecord",
    "Piece",
    "PieceType",
    "Position",
    "Side",
    "opponent",
    "InvalidMove",
    "Move",
    "MoveOutcome",
    "MoveValidationResult",
    "RejectionReason",
    "ValidMove",
    "create_initial_state",
    "seed_board",
    "squad_composition",
    "assert_full_squads",
    "validate_move",
    "IllegalMoveError",
    "Reducer",
    "apply_move",
    "match_winner",
    "pass_turn",
    "has_any_legal_move",
    "is_legal",
    "legal_moves",
    "legal_moves_for_piece",
]
