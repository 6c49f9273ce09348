"""
Pytest fixtures for footchess tests.
"""

import pytest
from typing import Callable

from ..engine_core.reducer import Reducer
from ..engine_core.setup import create_initial_state
from ..engine_core.state import Board, GameState, Piece, PieceType, Position, Side


def place(
    state: GameState,
    row: int,
    col: int,
    piece_type: PieceType,
    side: Side,
    piece_id: str | None = None,
) -> GameState:
    """Return a copy of state with a piece placed at (row, col)."""
    piece = Piece(
        piece_id=piece_id or f"{side.value}-{piece_type.value}-{row}{col}",
        piece_type=piece_type,
        side=side,
    )
    return state.with_board(state.board.with_piece(Position(row, col), piece))


@pytest.fixture
def initial_state() -> GameState:
    """Fresh game, Home to move."""
    return create_initial_state()


@pytest.fixture
def empty_state() -> GameState:
    """Empty board, Home to move, zero score."""
    return GameState(
        board=Board.empty(),
        turn=Side.HOME,
        score={Side.HOME: 0, Side.AWAY: 0},
    )


@pytest.fixture
def placer() -> Callable[..., GameState]:
    """Piece placement helper."""
    return place


@pytest.fixture
def reducer() -> Reducer:
    """Reducer with a fixed clock."""
    return Reducer(clock=lambda: "2024-01-01T00:00:00+00:00")
