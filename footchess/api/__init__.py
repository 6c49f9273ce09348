"""
API Module - Serializable boundary of the engine.

Callers (storage, realtime transport, UI):
1. Create a game and persist the snapshot
2. Submit moves together with the current snapshot
3. Persist the returned next_state
4. Ask for hints, legal moves or a bot move

The engine holds no state between calls.
"""

from .schemas import (
    # Shared
    PositionModel,
    PieceModel,
    MoveModel,
    MoveRecordModel,
    GoalModel,
    ScoreModel,
    GameStateSnapshot,
    # Responses
    ErrorCode,
    ErrorResponse,
    ValidationResponse,
    MoveOutcomeResponse,
    LegalDestinationsResponse,
    LegalMovesResponse,
    BotMoveResponse,
)
from .service import EngineService

__all__ = [
    # Shared
    "PositionModel",
    "PieceModel",
    "MoveModel",
    "MoveRecordModel",
    "GoalModel",
    "ScoreModel",
    "GameStateSnapshot",
    # Responses
    "ErrorCode",
    "ErrorResponse",
    "ValidationResponse",
    "MoveOutcomeResponse",
    "LegalDestinationsResponse",
    "LegalMovesResponse",
    "BotMoveResponse",
    # Service
    "EngineService",
]
