"""
Move Validator - Decides whether a proposed move is legal.

Pure function of (state, move). Checks run in a fixed order and stop at
the first failure:

1. Turn ownership (skipped in probe mode)
2. A piece of the acting side on the origin
3. Destination inside the grid
4. No friendly piece on the destination
5. Destination is not the mover's own goal
6. Only pieces that can score may enter the opponent goal
7. Piece geometry, including a clear path

Rule violations are returned as InvalidMove values, never raised.
"""

from __future__ import annotations
from typing import Callable

from .action import InvalidMove, Move, MoveValidationResult, RejectionReason, ValidMove
from .state import Board, GameState, Piece, PieceType, Position, is_opponent_goal, is_own_goal


def _vector(origin: Position, destination: Position) -> tuple[int, int]:
    return destination.row - origin.row, destination.col - origin.col


def _distance(d_row: int, d_col: int) -> int:
    return max(abs(d_row), abs(d_col))


def _is_straight(d_row: int, d_col: int) -> bool:
    return (d_row == 0) != (d_col == 0)


def _is_diagonal(d_row: int, d_col: int) -> bool:
    return d_row != 0 and abs(d_row) == abs(d_col)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def path_is_clear(board: Board, origin: Position, destination: Position) -> bool:
    """
    True if every cell strictly between origin and destination is empty.

    Only meaningful for straight or diagonal vectors.
    """
    d_row, d_col = _vector(origin, destination)
    step_row, step_col = _sign(d_row), _sign(d_col)
    current = origin.offset(step_row, step_col)
    while current != destination:
        if board.get(current) is not None:
            return False
        current = current.offset(step_row, step_col)
    return True


# Geometry checks return None when the move fits the piece, else an InvalidMove.
GeometryCheck = Callable[[Board, Position, Position], "InvalidMove | None"]


def _check_flanker(board: Board, origin: Position, destination: Position) -> InvalidMove | None:
    d_row, d_col = _vector(origin, destination)
    if not _is_straight(d_row, d_col):
        return InvalidMove(
            "Illegal shape for this piece type: flankers move in a straight line.",
            RejectionReason.ILLEGAL_SHAPE,
        )
    if _distance(d_row, d_col) > 2:
        return InvalidMove(
            "Illegal distance for this piece type: flankers move 1 or 2 squares.",
            RejectionReason.ILLEGAL_DISTANCE,
        )
    if not path_is_clear(board, origin, destination):
        return InvalidMove("Path is blocked.", RejectionReason.PATH_BLOCKED)
    return None


def _check_defender(board: Board, origin: Position, destination: Position) -> InvalidMove | None:
    d_row, d_col = _vector(origin, destination)
    if _distance(d_row, d_col) != 1:
        return InvalidMove(
            "Illegal distance for this piece type: defenders move to an adjacent square (distance must be 1).",
            RejectionReason.ILLEGAL_DISTANCE,
        )
    return None


def _check_midfielder(board: Board, origin: Position, destination: Position) -> InvalidMove | None:
    d_row, d_col = _vector(origin, destination)
    if not _is_diagonal(d_row, d_col):
        return InvalidMove(
            "Illegal shape for this piece type: midfielders move diagonally.",
            RejectionReason.ILLEGAL_SHAPE,
        )
    if not path_is_clear(board, origin, destination):
        return InvalidMove("Path is blocked.", RejectionReason.PATH_BLOCKED)
    return None


def _check_forward(board: Board, origin: Position, destination: Position) -> InvalidMove | None:
    d_row, d_col = _vector(origin, destination)
    if not (_is_straight(d_row, d_col) or _is_diagonal(d_row, d_col)):
        return InvalidMove(
            "Illegal shape for this piece type: forwards move in a straight line or diagonally.",
            RejectionReason.ILLEGAL_SHAPE,
        )
    if not path_is_clear(board, origin, destination):
        return InvalidMove("Path is blocked.", RejectionReason.PATH_BLOCKED)
    return None


GEOMETRY_CHECKS: dict[PieceType, GeometryCheck] = {
    PieceType.FLANKER: _check_flanker,
    PieceType.DEFENDER: _check_defender,
    PieceType.MIDFIELDER: _check_midfielder,
    PieceType.FORWARD: _check_forward,
}


def _check_destination(board: Board, piece: Piece, destination: Position) -> MoveValidationResult:
    if not destination.in_bounds:
        return InvalidMove("Out of bounds.", RejectionReason.OUT_OF_BOUNDS)

    target = board.get(destination)
    if target is not None and target.side is piece.side:
        return InvalidMove(
            "Destination occupied by your own piece.",
            RejectionReason.FRIENDLY_OCCUPIED,
        )

    if is_own_goal(piece.side, destination):
        return InvalidMove(
            "You cannot end a move inside your own goal.",
            RejectionReason.OWN_GOAL,
        )

    goal = is_opponent_goal(piece.side, destination)
    if goal and not piece.can_score:
        return InvalidMove("Defenders cannot score.", RejectionReason.DEFENDER_CANNOT_SCORE)

    return ValidMove(capture=target is not None, goal=goal)


def validate_move(
    state: GameState,
    move: Move,
    skip_turn_check: bool = False,
) -> MoveValidationResult:
    """
    Validate a move against a state.

    With skip_turn_check the move is judged as if it were the acting
    side's turn (legal-move probe).
    """
    if not skip_turn_check and move.side is not state.turn:
        return InvalidMove("Not your turn.", RejectionReason.NOT_YOUR_TURN)

    piece = state.board.get(move.origin)
    if piece is None or piece.side is not move.side:
        return InvalidMove(
            "There is no piece of yours on the origin square.",
            RejectionReason.NO_PIECE_AT_ORIGIN,
        )

    destination_check = _check_destination(state.board, piece, move.destination)
    if not destination_check.valid:
        return destination_check

    geometry_error = GEOMETRY_CHECKS[piece.piece_type](state.board, move.origin, move.destination)
    if geometry_error is not None:
        return geometry_error

    return destination_check
