"""
Game Setup - Creates the initial board and game state.

This module handles:
- The fixed per-side starting layout
- Deterministic piece identifiers ({side}-{type}-{ordinal})
- The 12-piece squad invariant (2 flankers, 4 defenders, 4 midfielders, 2 forwards)

Home's layout is defined once. Away's layout is Home's reflected across
the row axis: row' = (ROWS - 1) - row, column unchanged.
"""

from __future__ import annotations
from collections import Counter
from types import MappingProxyType

from .state import (
    BOARD_ROWS,
    Board,
    GameState,
    Piece,
    PieceType,
    Position,
    Side,
)


SQUAD_COMPOSITION: MappingProxyType = MappingProxyType({
    PieceType.FLANKER: 2,
    PieceType.DEFENDER: 4,
    PieceType.MIDFIELDER: 4,
    PieceType.FORWARD: 2,
})

SQUAD_SIZE = sum(SQUAD_COMPOSITION.values())


# Back row (row 11): flankers on the wings, defenders either side of the goal.
# The goal squares (11,3) and (11,4) stay empty.
HOME_LAYOUT: tuple[tuple[PieceType, Position], ...] = (
    (PieceType.FLANKER, Position(11, 0)),
    (PieceType.FLANKER, Position(11, 7)),
    (PieceType.DEFENDER, Position(11, 1)),
    (PieceType.DEFENDER, Position(11, 2)),
    (PieceType.DEFENDER, Position(11, 5)),
    (PieceType.DEFENDER, Position(11, 6)),
    (PieceType.MIDFIELDER, Position(10, 1)),
    (PieceType.MIDFIELDER, Position(10, 3)),
    (PieceType.MIDFIELDER, Position(10, 4)),
    (PieceType.MIDFIELDER, Position(10, 6)),
    (PieceType.FORWARD, Position(9, 2)),
    (PieceType.FORWARD, Position(9, 5)),
)


def _reflect(layout: tuple[tuple[PieceType, Position], ...]) -> tuple[tuple[PieceType, Position], ...]:
    return tuple(
        (piece_type, Position(BOARD_ROWS - 1 - position.row, position.col))
        for piece_type, position in layout
    )


LAYOUTS: MappingProxyType = MappingProxyType({
    Side.HOME: HOME_LAYOUT,
    Side.AWAY: _reflect(HOME_LAYOUT),
})


def build_piece_id(side: Side, piece_type: PieceType, ordinal: int) -> str:
    """Identifier for the ordinal-th piece (1-based) of a type for a side."""
    return f"{side.value}-{piece_type.value}-{ordinal}"


def seed_board() -> Board:
    """
    Build a fresh board from the static layouts.

    Ordinals are counted per (side, type) in layout order, so the
    result is identical on every call.
    """
    board = Board.empty()
    for side in (Side.HOME, Side.AWAY):
        counters: Counter = Counter()
        for piece_type, position in LAYOUTS[side]:
            counters[piece_type] += 1
            board.cells[position.row][position.col] = Piece(
                piece_id=build_piece_id(side, piece_type, counters[piece_type]),
                piece_type=piece_type,
                side=side,
            )
    assert_full_squads(board)
    return board


def squad_composition(board: Board, side: Side) -> dict[PieceType, int]:
    """Count pieces of each type that a side has on the board."""
    counts = {piece_type: 0 for piece_type in PieceType}
    for _, piece in board.pieces(side):
        counts[piece.piece_type] += 1
    return counts


def assert_full_squads(board: Board) -> None:
    """
    Check that both sides have exactly the starting squad.

    Raises ValueError otherwise. Only meaningful right after
    initialization or a goal reset; captures shrink squads mid-epoch.
    """
    for side in (Side.HOME, Side.AWAY):
        counts = squad_composition(board, side)
        if counts != dict(SQUAD_COMPOSITION):
            raise ValueError(
                f"{side.value} squad is {counts}, expected {dict(SQUAD_COMPOSITION)}"
            )


def create_initial_state(starting_side: Side = Side.HOME) -> GameState:
    """
    Create a new game.

    Fresh layout, zero score, empty history, starting_side to move.
    """
    return GameState(
        board=seed_board(),
        turn=starting_side,
        score={Side.HOME: 0, Side.AWAY: 0},
        last_move=None,
        history=[],
        starting_side=starting_side,
    )
