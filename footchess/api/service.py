"""
Engine Service - Boundary layer between callers and the rule engine.

The service:
1. Parses snapshots and moves (dicts or schema objects)
2. Calls the engine
3. Formats responses, turning rule violations into error responses

This layer is framework-agnostic and holds no game state: storage,
per-game write serialization and transport belong to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Union
import random

from loguru import logger
from pydantic import BaseModel, ValidationError

from .. import config
from ..bots.difficulty import Difficulty
from ..bots.football_bot import FootballBot
from ..bots.personality import get_style
from ..engine_core.action import InvalidMove
from ..engine_core.action_generator import legal_moves, legal_moves_for_piece
from ..engine_core.reducer import Reducer, match_winner, pass_turn
from ..engine_core.setup import create_initial_state
from ..engine_core.state import Side
from ..engine_core.validator import validate_move
from .schemas import (
    BotMoveResponse,
    ErrorCode,
    ErrorResponse,
    GameStateSnapshot,
    LegalDestinationsResponse,
    LegalMovesResponse,
    MoveModel,
    MoveOutcomeResponse,
    PositionModel,
    ValidationResponse,
)


SnapshotInput = Union[GameStateSnapshot, dict[str, Any]]
MoveInput = Union[MoveModel, dict[str, Any]]


class _InvalidPayload(Exception):
    def __init__(self, response: ErrorResponse):
        super().__init__(response.error)
        self.response = response


def _parse(model: type[BaseModel], payload: Any, label: str) -> Any:
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.warning("Rejected {} payload: {} error(s)", label, e.error_count())
        raise _InvalidPayload(ErrorResponse(
            error=f"Invalid {label}",
            error_code=ErrorCode.INVALID_SNAPSHOT,
            details={"errors": e.errors(include_url=False, include_context=False)},
        )) from e


def _parse_side(label: str | Side) -> Side:
    if isinstance(label, Side):
        return label
    try:
        return Side(label)
    except ValueError:
        logger.warning("Rejected side label {!r}", label)
        raise _InvalidPayload(ErrorResponse(
            error=f"Unknown side {label!r} (expected home or away)",
            error_code=ErrorCode.UNKNOWN_SIDE,
        )) from None


@dataclass
class EngineService:
    """
    Main service for game servers.

    Usage:
        service = EngineService()

        snapshot = service.new_game("home")
        response = service.submit_move(snapshot, {"player": "home", "from": {...}, "to": {...}})
        if isinstance(response, ErrorResponse):
            show(response.error)
        else:
            persist(response.next_state)
    """
    reducer: Reducer = field(default_factory=Reducer)
    goals_to_win: int = config.GOALS_TO_WIN
    rng: random.Random = field(default_factory=random.Random)

    def new_game(self, starting_player: str | Side = Side.HOME) -> GameStateSnapshot | ErrorResponse:
        """Create the snapshot of a fresh game."""
        try:
            side = _parse_side(starting_player)
        except _InvalidPayload as e:
            return e.response
        return GameStateSnapshot.from_state(create_initial_state(side))

    def validate(self, snapshot: SnapshotInput, move: MoveInput) -> ValidationResponse | ErrorResponse:
        """Check a move without applying it."""
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
            proposed = _parse(MoveModel, move, "move").to_move()
        except _InvalidPayload as e:
            return e.response
        return ValidationResponse.from_result(validate_move(state, proposed))

    def submit_move(self, snapshot: SnapshotInput, move: MoveInput) -> MoveOutcomeResponse | ErrorResponse:
        """
        Validate and apply a move.

        Rule violations come back as ILLEGAL_MOVE with the displayable
        reason; they are never raised.
        """
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
            proposed = _parse(MoveModel, move, "move").to_move()
        except _InvalidPayload as e:
            return e.response

        validation = validate_move(state, proposed)
        if isinstance(validation, InvalidMove):
            return ErrorResponse(
                error=validation.reason,
                error_code=ErrorCode.ILLEGAL_MOVE,
                details={"reason_code": validation.code.value},
            )

        outcome = self.reducer.apply(state, proposed)
        if outcome.goal is not None:
            logger.debug(
                "Goal by {}, score {}-{}",
                proposed.side.value,
                outcome.next_state.score_for(Side.HOME),
                outcome.next_state.score_for(Side.AWAY),
            )
        winner = match_winner(outcome.next_state, self.goals_to_win)
        return MoveOutcomeResponse.from_outcome(outcome, winner=winner)

    def legal_destinations(self, snapshot: SnapshotInput, position: PositionModel | dict[str, Any]) -> LegalDestinationsResponse | ErrorResponse:
        """Move hints for the piece at position."""
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
            origin = _parse(PositionModel, position, "position")
        except _InvalidPayload as e:
            return e.response
        destinations = legal_moves_for_piece(state, origin.to_position())
        return LegalDestinationsResponse(
            origin=origin,
            destinations=[PositionModel.from_position(d) for d in destinations],
        )

    def legal_moves(self, snapshot: SnapshotInput, player: str | Side) -> LegalMovesResponse | ErrorResponse:
        """All legal moves for a side; empty means that side must pass."""
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
            side = _parse_side(player)
        except _InvalidPayload as e:
            return e.response
        return LegalMovesResponse(
            player=side,
            moves=[MoveModel.from_move(m) for m in legal_moves(state, side)],
        )

    def bot_move(
        self,
        snapshot: SnapshotInput,
        player: str | Side,
        difficulty: str = config.DEFAULT_DIFFICULTY,
        style: str | None = None,
    ) -> BotMoveResponse | ErrorResponse:
        """
        Let the bot choose a move for player.

        Does not apply it: the caller submits it like any other move, or
        passes the turn when pass_required is set.
        """
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
            side = _parse_side(player)
        except _InvalidPayload as e:
            return e.response

        try:
            tier = Difficulty.parse(difficulty)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.UNKNOWN_DIFFICULTY)
        try:
            personality = get_style(style or config.DEFAULT_STYLE)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.UNKNOWN_STYLE)

        candidates = legal_moves(state, side)
        if not candidates:
            logger.debug("Bot {} has no legal move, pass required", side.value)
            return BotMoveResponse(
                pass_required=True,
                difficulty=tier.value,
                style=personality.name,
                explanation="No legal move available",
            )

        bot = FootballBot(side=side, difficulty=tier, personality=personality, rng=self.rng)
        decision = bot.select_move(state, candidates)
        return BotMoveResponse(
            move=MoveModel.from_move(decision.move),
            difficulty=tier.value,
            style=personality.name,
            explanation=decision.explanation,
        )

    def pass_turn(self, snapshot: SnapshotInput) -> GameStateSnapshot | ErrorResponse:
        """Flip the turn without moving (side to move has no legal move)."""
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
        except _InvalidPayload as e:
            return e.response
        return GameStateSnapshot.from_state(pass_turn(state))

    def winner(self, snapshot: SnapshotInput) -> Side | None | ErrorResponse:
        """Side that has reached the match target, if any."""
        try:
            state = _parse(GameStateSnapshot, snapshot, "snapshot").to_state()
        except _InvalidPayload as e:
            return e.response
        return match_winner(state, self.goals_to_win)
