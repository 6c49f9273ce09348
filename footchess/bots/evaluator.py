"""
Heuristic Evaluator - Scores candidate moves for bot decision-making.

A move is scored by applying it and looking at:
- Immediate result (goal, capture weighted by piece value)
- Forward progress and final position relative to the opponent goal
- Threats to the bot's own goal, piece safety and board control
- The opponent's best reply (lookahead tiers)
- The score margin (trailing bots push, leading bots consolidate)

Which terms are active comes from the DifficultyProfile; how much each
one matters is scaled by the Personality.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_moves
from ..engine_core.reducer import Reducer
from ..engine_core.state import (
    BOARD_ROWS,
    GOAL_COLS,
    GOAL_ROWS,
    GameState,
    PieceType,
    Position,
    Side,
    is_opponent_goal,
)
from .personality import MODERATE, Personality

if TYPE_CHECKING:
    from ..engine_core.action import Move, MoveOutcome
    from .difficulty import DifficultyProfile


PIECE_VALUES: dict[PieceType, int] = {
    PieceType.FORWARD: 30,
    PieceType.MIDFIELDER: 20,
    PieceType.FLANKER: 15,
    PieceType.DEFENDER: 10,
}

CENTER_ROWS = (5, 6)
CENTER_COLS = (3, 4)


def _fixed_clock() -> str:
    return ""


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Immediate result
    goal: float = 10000.0
    capture_base: float = 150.0
    capture_value: float = 2.0  # Per point of captured piece value

    # Movement
    progress_per_value: float = 0.5  # progress * piece value * this
    positional: float = 3.0

    # Defenders
    defender_overextension: float = -25.0  # Advancing more than 3 rows while not trailing
    defender_overextension_trailing: float = -5.0
    defender_retreat_when_leading: float = 10.0

    # Opponent replies
    opponent_goal_threat: float = -3000.0
    opponent_capture_threat: float = -200.0
    reply_goal: float = 8000.0
    reply_positional: float = 2.0

    # Score-adaptive play
    trailing_progress: float = 5.0
    trailing_capture: float = 30.0
    leading_threat: float = 3.0
    leading_overextension: float = -15.0


@dataclass
class MoveEvaluation:
    """
    Result of evaluating a candidate move.
    """
    move: Move
    total_score: float
    outcome: MoveOutcome
    feature_breakdown: dict[str, float] = field(default_factory=dict)


def piece_value(piece_type: PieceType) -> int:
    return PIECE_VALUES.get(piece_type, 10)


def forward_progress(origin: Position, destination: Position, side: Side) -> int:
    """Rows gained toward the opponent goal (negative when retreating)."""
    if side is Side.HOME:
        return origin.row - destination.row
    return destination.row - origin.row


def positional_bonus(destination: Position, side: Side) -> float:
    """Reward for ending close to the opponent goal and in the centre."""
    target_row = GOAL_ROWS[side.opponent]
    distance = abs(target_row - destination.row)
    column_bonus = 10 if destination.col in GOAL_COLS else 0
    center_bonus = 3 if 2 <= destination.col <= 5 else 0
    return max(0, 15 - distance) + column_bonus + center_bonus


def defensive_threat(state: GameState, side: Side) -> float:
    """How much enemy presence there is near side's own goal."""
    goal_row = GOAL_ROWS[side]
    threat = 0.0
    for position, piece in state.board.pieces(side.opponent):
        distance = abs(position.row - goal_row)
        if distance > 3:
            continue
        if position.col in GOAL_COLS:
            threat += 50 * (4 - distance)
        else:
            threat += 20 * (6 - distance)
    return threat


def board_control(state: GameState, side: Side) -> float:
    """Presence in the centre and in the opponent half."""
    control = 0.0
    half = BOARD_ROWS // 2
    for position, _ in state.board.pieces(side):
        if position.row in CENTER_ROWS and position.col in CENTER_COLS:
            control += 10
        in_opponent_half = position.row < half if side is Side.HOME else position.row >= half
        if in_opponent_half:
            control += 5
    return control


def piece_safety(state: GameState, position: Position, piece_id: str, side: Side) -> float:
    """Friendly pieces within two squares of the moved piece."""
    moved = state.board.get(position)
    if moved is None or moved.piece_id != piece_id:
        return 0.0
    safety = 0.0
    for d_row in range(-2, 3):
        for d_col in range(-2, 3):
            if d_row == 0 and d_col == 0:
                continue
            neighbour = state.board.get(position.offset(d_row, d_col))
            if neighbour is not None and neighbour.side is side:
                safety += 5
    return safety


class HeuristicEvaluator:
    """
    Evaluates candidate moves using weighted heuristics.

    Used by bots:
    1. Generate legal moves
    2. Apply each move to get the next state
    3. Score result, position and (optionally) the opponent's reply
    4. Select the move with the best score
    """

    def __init__(
        self,
        weights: EvaluationWeights | None = None,
        personality: Personality | None = None,
    ):
        self.weights = weights or EvaluationWeights()
        self.personality = personality or MODERATE
        self.reducer = Reducer(clock=_fixed_clock)

    def simulate(self, state: GameState, move: Move) -> MoveOutcome:
        """Apply move as if it were move.side's turn."""
        if state.turn is not move.side:
            state = state.with_turn(move.side)
        return self.reducer.apply(state, move)

    def evaluate_move(
        self,
        state: GameState,
        move: Move,
        profile: DifficultyProfile,
    ) -> MoveEvaluation:
        """
        Score a legal move for move.side. Noise is not included.
        """
        w = self.weights
        p = self.personality
        side = move.side
        outcome = self.simulate(state, move)
        next_state = outcome.next_state
        piece = state.board.get(move.origin)
        value = piece_value(piece.piece_type)
        progress = forward_progress(move.origin, move.destination, side)
        margin = state.score_margin(side)

        features: dict[str, float] = {}

        if outcome.goal is not None:
            features["goal"] = w.goal

        if outcome.captured_piece is not None:
            captured_value = piece_value(outcome.captured_piece.piece_type)
            features["capture"] = (w.capture_base + captured_value * w.capture_value) * p.capture

        if progress > 0:
            features["progress"] = progress * value * w.progress_per_value * p.progress

        features["positional"] = positional_bonus(move.destination, side) * w.positional * p.positional

        if profile.threat_weight:
            reduction = defensive_threat(state, side) - defensive_threat(next_state, side)
            features["threat"] = reduction * profile.threat_weight * p.threat

        if profile.safety_weight:
            safety = piece_safety(next_state, move.destination, piece.piece_id, side)
            features["safety"] = safety * profile.safety_weight * p.safety

        if profile.control_weight:
            gain = board_control(next_state, side) - board_control(state, side)
            features["control"] = gain * profile.control_weight * p.control

        if piece.piece_type is PieceType.DEFENDER:
            if progress > 3:
                features["defender_overextension"] = (
                    w.defender_overextension if margin >= 0 else w.defender_overextension_trailing
                )
            elif margin >= 1 and progress < 0:
                features["defender_retreat"] = w.defender_retreat_when_leading

        if profile.uses_lookahead:
            features.update(self._lookahead(next_state, side, profile))

        if margin < 0:
            if progress > 0:
                features["trailing_progress"] = progress * w.trailing_progress
            if outcome.captured_piece is not None:
                features["trailing_capture"] = w.trailing_capture
        elif margin >= 2:
            reduction = defensive_threat(state, side) - defensive_threat(next_state, side)
            features["leading_threat"] = reduction * w.leading_threat
            if progress > 2:
                features["leading_overextension"] = w.leading_overextension

        return MoveEvaluation(
            move=move,
            total_score=sum(features.values()),
            outcome=outcome,
            feature_breakdown=features,
        )

    def reply_score(self, state: GameState, move: Move) -> float:
        """
        Quick static score of a move, without applying it.

        Used to rate the opponent's replies and the bot's own follow-ups.
        """
        w = self.weights
        piece = state.board.get(move.origin)
        score = 0.0
        if is_opponent_goal(move.side, move.destination):
            score += w.reply_goal
        target = state.board.get(move.destination)
        if target is not None:
            score += w.capture_base + piece_value(target.piece_type) * w.capture_value
        progress = forward_progress(move.origin, move.destination, move.side)
        score += progress * piece_value(piece.piece_type) * w.progress_per_value
        score += positional_bonus(move.destination, move.side) * w.reply_positional
        return score

    def best_reply(self, state: GameState, side: Side) -> tuple[Move | None, float]:
        """Strongest reply for side by reply_score, or (None, 0) when stuck."""
        best_move: Move | None = None
        best_score = float("-inf")
        for reply in legal_moves(state, side):
            score = self.reply_score(state, reply)
            if score > best_score:
                best_move, best_score = reply, score
        if best_move is None:
            return None, 0.0
        return best_move, best_score

    def _lookahead(self, next_state: GameState, side: Side, profile: DifficultyProfile) -> dict[str, float]:
        """Penalties from the opponent's best reply in next_state."""
        w = self.weights
        opponent = side.opponent
        replies = legal_moves(next_state, opponent)
        if not replies:
            return {}

        features: dict[str, float] = {}
        best = float("-inf")
        can_score = False
        can_capture = False
        for reply in replies:
            if is_opponent_goal(opponent, reply.destination):
                can_score = True
            if next_state.board.get(reply.destination) is not None:
                can_capture = True
            best = max(best, self.reply_score(next_state, reply))

        caution = self.personality.caution
        if can_score:
            features["opponent_goal_threat"] = w.opponent_goal_threat * caution
        if can_capture:
            features["opponent_capture_threat"] = w.opponent_capture_threat * caution
        features["opponent_best_reply"] = -best * profile.lookahead_weight * caution
        return features

    def followup_score(self, evaluation: MoveEvaluation, side: Side) -> float:
        """
        Two-ply follow-up: after the opponent's best reply, how good is
        side's best next move? Zero when either side is stuck.
        """
        next_state = evaluation.outcome.next_state
        reply, _ = self.best_reply(next_state, side.opponent)
        if reply is None:
            return 0.0
        after_reply = self.simulate(next_state, reply).next_state
        _, score = self.best_reply(after_reply, side)
        return score
