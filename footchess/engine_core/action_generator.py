"""
Move Generator - Enumerates legal moves from a game state.

The generator is used by:
1. Bots to enumerate candidate moves
2. UI to show move hints for a selected piece
3. "No legal move - pass" detection

Every candidate is probed through the validator with the turn check
skipped, so the generator accepts exactly what the validator accepts
for that origin and side.
"""

from __future__ import annotations

from .action import Move
from .state import GameState, PieceType, Position, Side
from .validator import validate_move


ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_DIRECTIONS = ORTHOGONAL + DIAGONAL

# (directions, max steps or None for unbounded rays)
MOVEMENT_PATTERNS: dict[PieceType, tuple[tuple[tuple[int, int], ...], int | None]] = {
    PieceType.DEFENDER: (ALL_DIRECTIONS, 1),
    PieceType.FLANKER: (ORTHOGONAL, 2),
    PieceType.MIDFIELDER: (DIAGONAL, None),
    PieceType.FORWARD: (ALL_DIRECTIONS, None),
}


def _candidate_destinations(state: GameState, origin: Position, piece_type: PieceType) -> list[Position]:
    """
    Geometrically possible destinations for a piece type.

    Rays stop after the first occupied cell; that cell is still a
    candidate (it may hold an enemy to capture).
    """
    directions, max_steps = MOVEMENT_PATTERNS[piece_type]
    candidates = []
    for d_row, d_col in directions:
        step = 1
        while max_steps is None or step <= max_steps:
            candidate = origin.offset(d_row * step, d_col * step)
            if not candidate.in_bounds:
                break
            candidates.append(candidate)
            if state.board.get(candidate) is not None:
                break
            step += 1
    return candidates


def legal_moves_for_piece(state: GameState, position: Position) -> list[Position]:
    """
    Legal destinations for the piece at position.

    Judged as if it were the piece's side to move. Returns an empty
    list for an empty (or off-board) cell.
    """
    piece = state.board.get(position)
    if piece is None:
        return []

    probe_state = state if state.turn is piece.side else state.with_turn(piece.side)
    destinations = []
    for candidate in _candidate_destinations(state, position, piece.piece_type):
        probe = Move(side=piece.side, origin=position, destination=candidate)
        if validate_move(probe_state, probe, skip_turn_check=True).valid:
            destinations.append(candidate)
    return destinations


def legal_moves(state: GameState, side: Side) -> list[Move]:
    """All legal moves for a side, in row-major origin order."""
    moves = []
    for origin, _ in state.board.pieces(side):
        for destination in legal_moves_for_piece(state, origin):
            moves.append(Move(side=side, origin=origin, destination=destination))
    return moves


def has_any_legal_move(state: GameState, side: Side) -> bool:
    """True if the side can make at least one move."""
    for origin, _ in state.board.pieces(side):
        if legal_moves_for_piece(state, origin):
            return True
    return False


def is_legal(state: GameState, move: Move) -> bool:
    """Probe-mode legality of a single move (turn ownership not checked)."""
    return validate_move(state, move, skip_turn_check=True).valid
