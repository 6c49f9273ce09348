"""
Tests for board state and game setup.

Tests:
- Initial layout and squad composition
- Piece identifiers
- Board helpers
"""

import pytest

from ..engine_core.setup import (
    LAYOUTS,
    SQUAD_COMPOSITION,
    assert_full_squads,
    build_piece_id,
    create_initial_state,
    seed_board,
    squad_composition,
)
from ..engine_core.state import (
    BOARD_COLS,
    BOARD_ROWS,
    Board,
    GOAL_COLS,
    PieceType,
    Position,
    Side,
    is_opponent_goal,
    is_own_goal,
    opponent,
)


class TestInitialLayout:
    """Tests for the kick-off layout."""

    def test_each_side_has_full_squad(self):
        """Both sides start with 2 flankers, 4 defenders, 4 midfielders, 2 forwards."""
        board = seed_board()
        for side in (Side.HOME, Side.AWAY):
            assert board.count(side) == 12
            assert squad_composition(board, side) == dict(SQUAD_COMPOSITION)

    def test_layout_is_idempotent(self):
        """Two calls produce identical boards, identifiers included."""
        assert seed_board() == seed_board()

    def test_away_mirrors_home(self):
        """Away's layout is Home's reflected across the row axis."""
        board = seed_board()
        for position, piece in board.pieces(Side.HOME):
            mirror = board.get(Position(BOARD_ROWS - 1 - position.row, position.col))
            assert mirror is not None
            assert mirror.side == Side.AWAY
            assert mirror.piece_type == piece.piece_type

    def test_goal_squares_start_empty(self):
        """Nobody starts inside a goal."""
        board = seed_board()
        for row in (0, BOARD_ROWS - 1):
            for col in GOAL_COLS:
                assert board.get(Position(row, col)) is None

    def test_piece_ids_are_unique_and_deterministic(self):
        """Identifiers follow {side}-{type}-{ordinal}."""
        board = seed_board()
        ids = [piece.piece_id for _, piece in board.pieces()]
        assert len(ids) == len(set(ids)) == 24
        assert board.get(Position(11, 0)).piece_id == "home-flanker-1"
        assert board.get(Position(11, 7)).piece_id == "home-flanker-2"
        assert board.get(Position(0, 0)).piece_id == "away-flanker-1"
        assert build_piece_id(Side.AWAY, PieceType.FORWARD, 2) == "away-forward-2"

    def test_home_layout_rows(self):
        """Home occupies the bottom three rows."""
        rows = {position.row for _, position in LAYOUTS[Side.HOME]}
        assert rows == {9, 10, 11}

    def test_create_initial_state(self):
        """Fresh state: zero score, empty history, starting side to move."""
        state = create_initial_state(Side.AWAY)
        assert state.turn == Side.AWAY
        assert state.starting_side == Side.AWAY
        assert state.score == {Side.HOME: 0, Side.AWAY: 0}
        assert state.history == []
        assert state.last_move is None

    def test_assert_full_squads_rejects_short_squad(self):
        """A missing piece breaks the squad invariant."""
        board = seed_board().with_piece(Position(11, 0), None)
        with pytest.raises(ValueError):
            assert_full_squads(board)


class TestBoard:
    """Tests for Board and Position helpers."""

    def test_off_board_reads_return_none(self):
        """Reads outside the grid do not wrap."""
        board = seed_board()
        assert board.get(Position(-1, 0)) is None
        assert board.get(Position(0, BOARD_COLS)) is None
        assert board.get(Position(BOARD_ROWS, 0)) is None

    def test_with_piece_does_not_mutate(self):
        """with_piece returns a new board."""
        board = seed_board()
        cleared = board.with_piece(Position(11, 0), None)
        assert board.get(Position(11, 0)) is not None
        assert cleared.get(Position(11, 0)) is None

    def test_with_piece_rejects_off_board(self):
        """Writes must stay on the grid."""
        with pytest.raises(ValueError):
            Board.empty().with_piece(Position(12, 0), None)

    def test_wrong_shape_rejected(self):
        """Boards are always 12x8."""
        with pytest.raises(ValueError):
            Board(cells=[[None] * BOARD_COLS])

    def test_find(self):
        """Pieces can be located by id."""
        board = seed_board()
        assert board.find("away-forward-1") == Position(2, 2)
        assert board.find("nobody") is None

    def test_goal_helpers(self):
        """Home defends row 11, Away defends row 0."""
        assert is_own_goal(Side.HOME, Position(11, 3))
        assert is_opponent_goal(Side.HOME, Position(0, 4))
        assert not is_opponent_goal(Side.HOME, Position(0, 5))
        assert is_own_goal(Side.AWAY, Position(0, 3))

    def test_opponent(self):
        assert opponent(Side.HOME) == Side.AWAY
        assert Side.AWAY.opponent == Side.HOME


class TestStateCopies:
    """Derived states share nothing mutable with their source."""

    def test_with_turn_copies_containers(self, initial_state):
        copy = initial_state.with_turn(Side.AWAY)
        assert copy.score is not initial_state.score
        assert copy.history is not initial_state.history
        assert copy.board is not initial_state.board
        assert copy.board == initial_state.board

    def test_mutating_copy_leaves_source(self, initial_state):
        copy = initial_state.with_turn(Side.AWAY)
        copy.score[Side.HOME] = 5
        copy.history.append(None)
        copy.board.cells[11][0] = None

        assert initial_state.score[Side.HOME] == 0
        assert initial_state.history == []
        assert initial_state.board.get(Position(11, 0)) is not None

    def test_with_board_does_not_alias_argument(self, initial_state):
        board = Board.empty()
        copy = initial_state.with_board(board)
        board.cells[0][0] = initial_state.board.get(Position(11, 0))
        assert copy.board.get(Position(0, 0)) is None
