"""
Game State - Board, pieces and the per-game state snapshot.

Design principles:
- Immutable-friendly: all mutations return new state
- Serializable: every field is a primitive, an enum or a nested record
- Epoch-aware: a goal replaces the board but keeps score and history
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


BOARD_ROWS = 12
BOARD_COLS = 8

# Goal squares are the two center columns of each back row
GOAL_COLS = (3, 4)


class Side(Enum):
    """The two competing teams."""
    HOME = "home"
    AWAY = "away"

    @property
    def opponent(self) -> Side:
        return Side.AWAY if self is Side.HOME else Side.HOME


def opponent(side: Side) -> Side:
    """Return the other side."""
    return side.opponent


class PieceType(Enum):
    """Piece types, each with its own movement geometry."""
    FLANKER = "flanker"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"

    @property
    def can_score(self) -> bool:
        return self is not PieceType.DEFENDER


# Row each side defends. Home defends the bottom row, Away the top row.
GOAL_ROWS: dict[Side, int] = {
    Side.HOME: BOARD_ROWS - 1,
    Side.AWAY: 0,
}


@dataclass(frozen=True)
class Position:
    """A cell on the grid. May lie outside the board (e.g. a proposed move)."""
    row: int
    col: int

    @property
    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_ROWS and 0 <= self.col < BOARD_COLS

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def is_goal_square(position: Position, defended_by: Side) -> bool:
    """True if position is the goal square defended by the given side."""
    return position.row == GOAL_ROWS[defended_by] and position.col in GOAL_COLS


def is_own_goal(side: Side, position: Position) -> bool:
    return is_goal_square(position, side)


def is_opponent_goal(side: Side, position: Position) -> bool:
    return is_goal_square(position, side.opponent)


@dataclass(frozen=True)
class Piece:
    """
    A piece on the board.

    The identifier is stable within one epoch and reassigned when the
    board is reset after a goal.
    """
    piece_id: str
    piece_type: PieceType
    side: Side

    @property
    def can_score(self) -> bool:
        return self.piece_type.can_score


@dataclass
class Board:
    """
    A 12x8 grid of optional pieces.

    Cells are addressed by Position. Reads outside the grid return None
    rather than wrapping around.
    """
    cells: list[list[Piece | None]] = field(
        default_factory=lambda: [[None] * BOARD_COLS for _ in range(BOARD_ROWS)]
    )

    def __post_init__(self):
        if len(self.cells) != BOARD_ROWS or any(len(r) != BOARD_COLS for r in self.cells):
            raise ValueError(f"Board must be {BOARD_ROWS}x{BOARD_COLS}")

    @classmethod
    def empty(cls) -> Board:
        return cls()

    def get(self, position: Position) -> Piece | None:
        """Get the piece at position, or None if empty or off the board."""
        if not position.in_bounds:
            return None
        return self.cells[position.row][position.col]

    def is_empty(self, position: Position) -> bool:
        return self.get(position) is None

    def clone(self) -> Board:
        """Structural copy. Pieces are immutable, so rows are all we copy."""
        return Board(cells=[row.copy() for row in self.cells])

    def with_piece(self, position: Position, piece: Piece | None) -> Board:
        """Return new board with the cell set (or cleared when piece is None)."""
        if not position.in_bounds:
            raise ValueError(f"Position {position} is off the board")
        new_board = self.clone()
        new_board.cells[position.row][position.col] = piece
        return new_board

    def pieces(self, side: Side | None = None) -> Iterator[tuple[Position, Piece]]:
        """Iterate (position, piece) in row-major order, optionally for one side."""
        for row_idx, row in enumerate(self.cells):
            for col_idx, piece in enumerate(row):
                if piece is None:
                    continue
                if side is not None and piece.side is not side:
                    continue
                yield Position(row_idx, col_idx), piece

    def find(self, piece_id: str) -> Position | None:
        """Locate a piece by identifier."""
        for position, piece in self.pieces():
            if piece.piece_id == piece_id:
                return position
        return None

    def count(self, side: Side) -> int:
        return sum(1 for _ in self.pieces(side))


@dataclass(frozen=True)
class GoalInfo:
    """Goal descriptor attached to a move record or outcome."""
    scoring_side: Side


@dataclass(frozen=True)
class MoveRecord:
    """
    One entry of the append-only move log.

    move_number starts at 1 and always equals the history length after
    the record is appended.
    """
    move_number: int
    side: Side
    origin: Position
    destination: Position
    piece_id: str
    captured_piece_id: str | None = None
    goal: GoalInfo | None = None
    timestamp: str = ""


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Created once by create_initial_state() and afterwards only produced
    by the reducer. Never mutate a state that has been handed out.
    """
    board: Board
    turn: Side = Side.HOME
    score: dict[Side, int] = field(
        default_factory=lambda: {Side.HOME: 0, Side.AWAY: 0}
    )
    last_move: MoveRecord | None = None
    history: list[MoveRecord] = field(default_factory=list)
    starting_side: Side = Side.HOME

    @property
    def move_count(self) -> int:
        return len(self.history)

    def score_for(self, side: Side) -> int:
        return self.score.get(side, 0)

    def score_margin(self, side: Side) -> int:
        """Goals for side minus goals against it."""
        return self.score_for(side) - self.score_for(side.opponent)

    def with_turn(self, side: Side) -> GameState:
        """Return new state with a different side to move."""
        return self._copy_with(turn=side)

    def with_board(self, board: Board) -> GameState:
        return self._copy_with(board=board)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced. Nothing mutable is shared."""
        return GameState(
            board=kwargs.get("board", self.board).clone(),
            turn=kwargs.get("turn", self.turn),
            score=dict(kwargs.get("score", self.score)),
            last_move=kwargs.get("last_move", self.last_move),
            history=list(kwargs.get("history", self.history)),
            starting_side=kwargs.get("starting_side", self.starting_side),
        )
