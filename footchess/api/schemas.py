"""
Pydantic Schemas - The serializable snapshot boundary.

These models define the exact contract between callers (storage,
realtime transport, UI) and the engine. A snapshot is nested records
and arrays of primitives; converting to and from the engine's own
dataclasses is lossless.

Error Codes:
- ILLEGAL_MOVE: The proposed move breaks a rule (reason is displayable)
- INVALID_SNAPSHOT: The snapshot or move payload does not match the schema
- UNKNOWN_DIFFICULTY: Bot difficulty label not recognised
- UNKNOWN_STYLE: Bot style label not recognised
- UNKNOWN_SIDE: Side label is neither home nor away
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..engine_core.action import InvalidMove, Move, MoveOutcome, MoveValidationResult
from ..engine_core.state import (
    BOARD_COLS,
    BOARD_ROWS,
    Board,
    GameState,
    GoalInfo,
    MoveRecord,
    Piece,
    PieceType,
    Position,
    Side,
)


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    INVALID_SNAPSHOT = "INVALID_SNAPSHOT"
    UNKNOWN_DIFFICULTY = "UNKNOWN_DIFFICULTY"
    UNKNOWN_STYLE = "UNKNOWN_STYLE"
    UNKNOWN_SIDE = "UNKNOWN_SIDE"


# =============================================================================
# Shared Models
# =============================================================================

class PositionModel(BaseModel):
    """A board cell. Bounds are checked by the validator, not here."""
    row: int
    col: int

    @classmethod
    def from_position(cls, position: Position) -> "PositionModel":
        return cls(row=position.row, col=position.col)

    def to_position(self) -> Position:
        return Position(self.row, self.col)


class PieceModel(BaseModel):
    """A piece on the board."""
    id: str
    type: PieceType
    owner: Side
    can_score: bool

    @model_validator(mode="after")
    def _can_score_matches_type(self) -> "PieceModel":
        if self.can_score != self.type.can_score:
            raise ValueError(f"can_score must be {self.type.can_score} for {self.type.value}")
        return self

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceModel":
        return cls(
            id=piece.piece_id,
            type=piece.piece_type,
            owner=piece.side,
            can_score=piece.can_score,
        )

    def to_piece(self) -> Piece:
        return Piece(piece_id=self.id, piece_type=self.type, side=self.owner)


class MoveModel(BaseModel):
    """A proposed move. Serialized with `from` / `to` keys."""
    player: Side
    from_: PositionModel = Field(..., alias="from")
    to: PositionModel

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_move(cls, move: Move) -> "MoveModel":
        return cls(
            player=move.side,
            from_=PositionModel.from_position(move.origin),
            to=PositionModel.from_position(move.destination),
        )

    def to_move(self) -> Move:
        return Move(
            side=self.player,
            origin=self.from_.to_position(),
            destination=self.to.to_position(),
        )


class GoalModel(BaseModel):
    """Goal descriptor."""
    scoring_player: Side


class MoveRecordModel(BaseModel):
    """One entry of the move log."""
    move_number: int = Field(..., ge=1)
    player: Side
    from_: PositionModel = Field(..., alias="from")
    to: PositionModel
    piece_id: str
    captured_piece_id: Optional[str] = None
    goal: Optional[GoalModel] = None
    timestamp: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_record(cls, record: MoveRecord) -> "MoveRecordModel":
        return cls(
            move_number=record.move_number,
            player=record.side,
            from_=PositionModel.from_position(record.origin),
            to=PositionModel.from_position(record.destination),
            piece_id=record.piece_id,
            captured_piece_id=record.captured_piece_id,
            goal=GoalModel(scoring_player=record.goal.scoring_side) if record.goal else None,
            timestamp=record.timestamp,
        )

    def to_record(self) -> MoveRecord:
        return MoveRecord(
            move_number=self.move_number,
            side=self.player,
            origin=self.from_.to_position(),
            destination=self.to.to_position(),
            piece_id=self.piece_id,
            captured_piece_id=self.captured_piece_id,
            goal=GoalInfo(scoring_side=self.goal.scoring_player) if self.goal else None,
            timestamp=self.timestamp,
        )


class ScoreModel(BaseModel):
    """Goals per side."""
    home: int = Field(0, ge=0)
    away: int = Field(0, ge=0)


# =============================================================================
# Game State Snapshot
# =============================================================================

class GameStateSnapshot(BaseModel):
    """
    Opaque, serializable game state held by callers.

    Hand it back unchanged together with a move; persist the
    next_state from the response.
    """
    board: list[list[Optional[PieceModel]]]
    turn: Side
    score: ScoreModel = Field(default_factory=ScoreModel)
    last_move: Optional[MoveRecordModel] = None
    history: list[MoveRecordModel] = Field(default_factory=list)
    starting_player: Side = Side.HOME

    @field_validator("board")
    @classmethod
    def _board_shape(cls, board: list[list[Optional[PieceModel]]]) -> list[list[Optional[PieceModel]]]:
        if len(board) != BOARD_ROWS or any(len(row) != BOARD_COLS for row in board):
            raise ValueError(f"board must be {BOARD_ROWS} rows of {BOARD_COLS} cells")
        return board

    @model_validator(mode="after")
    def _history_matches_last_move(self) -> "GameStateSnapshot":
        if self.last_move is not None and self.last_move.move_number != len(self.history):
            raise ValueError(
                f"last_move.move_number ({self.last_move.move_number}) "
                f"must equal len(history) ({len(self.history)})"
            )
        ids = [cell.id for row in self.board for cell in row if cell is not None]
        if len(ids) != len(set(ids)):
            raise ValueError("piece ids must be unique on the board")
        return self

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateSnapshot":
        return cls(
            board=[
                [PieceModel.from_piece(cell) if cell else None for cell in row]
                for row in state.board.cells
            ],
            turn=state.turn,
            score=ScoreModel(home=state.score_for(Side.HOME), away=state.score_for(Side.AWAY)),
            last_move=MoveRecordModel.from_record(state.last_move) if state.last_move else None,
            history=[MoveRecordModel.from_record(r) for r in state.history],
            starting_player=state.starting_side,
        )

    def to_state(self) -> GameState:
        return GameState(
            board=Board(cells=[
                [cell.to_piece() if cell else None for cell in row]
                for row in self.board
            ]),
            turn=self.turn,
            score={Side.HOME: self.score.home, Side.AWAY: self.score.away},
            last_move=self.last_move.to_record() if self.last_move else None,
            history=[r.to_record() for r in self.history],
            starting_side=self.starting_player,
        )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = None


class ValidationResponse(BaseModel):
    """Result of validating a move. Either valid with flags, or invalid with a reason."""
    valid: bool
    capture: Optional[bool] = None
    goal: Optional[bool] = None
    reason: Optional[str] = None
    reason_code: Optional[str] = None

    @classmethod
    def from_result(cls, result: MoveValidationResult) -> "ValidationResponse":
        if isinstance(result, InvalidMove):
            return cls(valid=False, reason=result.reason, reason_code=result.code.value)
        return cls(valid=True, capture=result.capture, goal=result.goal)


class MoveOutcomeResponse(BaseModel):
    """Next snapshot plus what happened."""
    next_state: GameStateSnapshot
    captured_piece: Optional[PieceModel] = None
    goal: Optional[GoalModel] = None
    winner: Optional[Side] = Field(None, description="Set once a side reaches the match target")

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome, winner: Optional[Side] = None) -> "MoveOutcomeResponse":
        return cls(
            next_state=GameStateSnapshot.from_state(outcome.next_state),
            captured_piece=PieceModel.from_piece(outcome.captured_piece) if outcome.captured_piece else None,
            goal=GoalModel(scoring_player=outcome.goal.scoring_side) if outcome.goal else None,
            winner=winner,
        )


class LegalDestinationsResponse(BaseModel):
    """Move hints for one piece."""
    origin: PositionModel
    destinations: list[PositionModel] = Field(default_factory=list)


class LegalMovesResponse(BaseModel):
    """All legal moves for a side."""
    player: Side
    moves: list[MoveModel] = Field(default_factory=list)

    @property
    def must_pass(self) -> bool:
        return not self.moves


class BotMoveResponse(BaseModel):
    """Bot decision. move is None when the bot has to pass."""
    move: Optional[MoveModel] = None
    pass_required: bool = False
    difficulty: str
    style: str
    explanation: str = ""
