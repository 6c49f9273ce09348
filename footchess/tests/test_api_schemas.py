"""
Tests for the snapshot schemas.

Tests:
- Snapshot conversion in both directions
- JSON shape (primitive values, `from` key)
- Schema validation errors
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    GameStateSnapshot,
    MoveModel,
    MoveOutcomeResponse,
    PieceModel,
    ValidationResponse,
)
from ..engine_core.action import InvalidMove, Move, RejectionReason, ValidMove
from ..engine_core.reducer import Reducer
from ..engine_core.state import PieceType, Side


@pytest.fixture
def played_state(initial_state):
    """Two moves into a game."""
    reducer = Reducer(clock=lambda: "2024-01-01T00:00:00+00:00")
    state = reducer.apply(initial_state, Move.of(Side.HOME, (11, 2), (10, 2))).next_state
    return reducer.apply(state, Move.of(Side.AWAY, (0, 2), (1, 2))).next_state


class TestSnapshotConversion:
    """GameState <-> GameStateSnapshot."""

    def test_initial_state_converts_back(self, initial_state):
        snapshot = GameStateSnapshot.from_state(initial_state)
        assert snapshot.to_state() == initial_state

    def test_played_state_converts_back(self, played_state):
        snapshot = GameStateSnapshot.from_state(played_state)
        assert snapshot.to_state() == played_state

    def test_survives_json(self, played_state):
        """Persisting as JSON and reading back yields the same state."""
        payload = GameStateSnapshot.from_state(played_state).model_dump_json(by_alias=True)
        assert GameStateSnapshot.model_validate_json(payload).to_state() == played_state

    def test_json_shape(self, played_state):
        data = GameStateSnapshot.from_state(played_state).model_dump(mode="json", by_alias=True)
        assert data["turn"] == "home"
        assert data["score"] == {"home": 0, "away": 0}
        assert len(data["board"]) == 12
        assert all(len(row) == 8 for row in data["board"])
        assert data["board"][11][0] == {
            "id": "home-flanker-1",
            "type": "flanker",
            "owner": "home",
            "can_score": True,
        }
        assert data["board"][5][5] is None
        assert data["last_move"]["from"] == {"row": 0, "col": 2}
        assert data["last_move"]["move_number"] == 2
        assert data["starting_player"] == "home"


class TestSnapshotValidation:
    """Malformed snapshots are rejected."""

    @pytest.fixture
    def data(self, played_state):
        return GameStateSnapshot.from_state(played_state).model_dump(mode="json", by_alias=True)

    def test_wrong_board_shape(self, data):
        data["board"] = data["board"][:11]
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_wrong_row_width(self, data):
        data["board"][3] = [None] * 7
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_unknown_side(self, data):
        data["turn"] = "referee"
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_last_move_must_match_history(self, data):
        data["history"] = data["history"][:1]
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_duplicate_piece_ids(self, data):
        data["board"][5][5] = dict(data["board"][11][0])
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_negative_score(self, data):
        data["score"]["away"] = -1
        with pytest.raises(ValidationError):
            GameStateSnapshot.model_validate(data)

    def test_defender_flagged_as_scorer(self):
        with pytest.raises(ValidationError):
            PieceModel(id="x", type=PieceType.DEFENDER, owner=Side.HOME, can_score=True)


class TestMoveModel:
    """Moves at the boundary."""

    def test_from_alias(self):
        model = MoveModel.model_validate(
            {"player": "away", "from": {"row": 0, "col": 2}, "to": {"row": 1, "col": 2}}
        )
        assert model.to_move() == Move.of(Side.AWAY, (0, 2), (1, 2))

    def test_populate_by_name(self):
        model = MoveModel(player=Side.HOME, from_={"row": 11, "col": 2}, to={"row": 10, "col": 2})
        assert model.model_dump(mode="json", by_alias=True)["from"] == {"row": 11, "col": 2}

    def test_from_move(self):
        move = Move.of(Side.HOME, (9, 2), (5, 2))
        assert MoveModel.from_move(move).to_move() == move


class TestResponses:
    """Response constructors."""

    def test_validation_response_valid(self):
        response = ValidationResponse.from_result(ValidMove(capture=True, goal=False))
        assert response.valid and response.capture and response.goal is False
        assert response.reason is None

    def test_validation_response_invalid(self):
        response = ValidationResponse.from_result(
            InvalidMove("Path is blocked.", RejectionReason.PATH_BLOCKED)
        )
        assert not response.valid
        assert response.reason == "Path is blocked."
        assert response.reason_code == "path_blocked"

    def test_move_outcome_response(self, initial_state):
        outcome = Reducer().apply(initial_state, Move.of(Side.HOME, (11, 2), (10, 2)))
        response = MoveOutcomeResponse.from_outcome(outcome)
        assert response.next_state.turn == Side.AWAY
        assert response.goal is None
        assert response.winner is None
