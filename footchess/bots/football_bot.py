"""
Football Bot - Difficulty-tiered automa for the football board game.

The bot:
- Scores every legal move with the heuristic evaluator
- Looks at the opponent's best reply on medium and above
- Re-ranks its best few candidates with a 2-ply search on pro
- Adds noise and samples among the top moves on the lower tiers

The returned move always comes from the legal-move generator, so it
validates for the bot's side in probe mode.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from loguru import logger

from .. import config
from ..engine_core.action_generator import legal_moves as generate_legal_moves
from .difficulty import Difficulty, DifficultyProfile, get_profile
from .evaluator import HeuristicEvaluator, MoveEvaluation
from .personality import Personality, get_style
from .policy import BotDecision, BotPolicy

if TYPE_CHECKING:
    from ..engine_core.action import Move
    from ..engine_core.state import GameState, Side


@dataclass
class FootballBot(BotPolicy):
    """
    Automa with heuristic evaluation and a difficulty ladder.

    Usage:
        bot = FootballBot(side=Side.AWAY, difficulty="hard", personality=DEFENSIVE)
        decision = bot.select_move(state, legal_moves(state, Side.AWAY))
        print(decision.move, decision.explanation)
    """
    side: Side
    difficulty: Difficulty | str = config.DEFAULT_DIFFICULTY
    personality: Personality = None  # type: ignore
    evaluator: HeuristicEvaluator = None  # type: ignore
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        self.difficulty = Difficulty.parse(self.difficulty)
        if self.personality is None:
            self.personality = get_style(config.DEFAULT_STYLE)
        if self.evaluator is None:
            self.evaluator = HeuristicEvaluator(personality=self.personality)
        if self.rng is None:
            self.rng = random.Random()

    @property
    def profile(self) -> DifficultyProfile:
        return get_profile(self.difficulty)

    def get_name(self) -> str:
        return f"FootballBot({self.difficulty.value}, {self.personality.name})"

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        """
        Select a move for self.side.

        Process:
        1. Evaluate each legal move (with lookahead on medium and above)
        2. Re-rank the beam with a 2-ply follow-up (pro)
        3. Add tier noise and sort
        4. Sample among the top moves allowed by the tier
        """
        if not legal_moves:
            raise ValueError("No legal moves available")

        profile = self.profile
        evaluations = [
            self.evaluator.evaluate_move(state, move, profile)
            for move in legal_moves
        ]

        scored: list[tuple[MoveEvaluation, float]] = [
            (evaluation, evaluation.total_score + self._noise(profile))
            for evaluation in evaluations
        ]
        scored.sort(key=lambda item: item[1], reverse=True)

        if profile.beam_width:
            scored = self._rerank_beam(scored, profile)

        selected, score = self._select(scored, profile)

        logger.debug(
            "{} picked {} (score {:.1f}, {} candidates)",
            self.get_name(),
            selected.move,
            score,
            len(legal_moves),
        )

        return BotDecision(
            move=selected.move,
            explanation=self._generate_explanation(selected),
            confidence=1.0 if profile.deterministic else 1.0 / min(profile.top_k, len(scored)),
            evaluated_moves=len(legal_moves),
            best_score=score,
            evaluation_details=dict(selected.feature_breakdown),
        )

    def _noise(self, profile: DifficultyProfile) -> float:
        if not profile.noise:
            return 0.0
        return self.rng.random() * profile.noise

    def _rerank_beam(
        self,
        scored: list[tuple[MoveEvaluation, float]],
        profile: DifficultyProfile,
    ) -> list[tuple[MoveEvaluation, float]]:
        """Add the 2-ply follow-up score to the best few candidates."""
        beam = scored[:profile.beam_width]
        rest = scored[profile.beam_width:]
        reranked = []
        for evaluation, score in beam:
            followup = self.evaluator.followup_score(evaluation, self.side)
            evaluation.feature_breakdown["followup"] = followup * profile.followup_weight
            reranked.append((evaluation, score + followup * profile.followup_weight))
        reranked.sort(key=lambda item: item[1], reverse=True)
        return reranked + rest

    def _select(
        self,
        scored: list[tuple[MoveEvaluation, float]],
        profile: DifficultyProfile,
    ) -> tuple[MoveEvaluation, float]:
        """Pick among the top candidates allowed by the profile."""
        best_score = scored[0][1]
        candidates = scored[:max(1, profile.top_k)]
        if profile.score_window is not None:
            candidates = [c for c in candidates if c[1] >= best_score - profile.score_window]
        if len(candidates) == 1:
            return candidates[0]
        return self.rng.choice(candidates)

    def _generate_explanation(self, evaluation: MoveEvaluation) -> str:
        """Short human-readable reason for the choice."""
        features = evaluation.feature_breakdown
        if "goal" in features:
            return f"Scores a goal with {evaluation.move}"
        if "capture" in features:
            captured = evaluation.outcome.captured_piece
            return f"Captures {captured.piece_id} with {evaluation.move}"
        if features.get("threat", 0) > 0:
            return f"Reduces pressure on own goal with {evaluation.move}"
        if features.get("progress", 0) > 0:
            return f"Advances toward the opponent goal with {evaluation.move}"
        return f"Positional move {evaluation.move}"


def pick_bot_move(
    state: GameState,
    side: Side,
    difficulty: Difficulty | str = config.DEFAULT_DIFFICULTY,
    style: str | None = None,
    rng: random.Random | None = None,
) -> Move | None:
    """
    Choose a move for side, or None when side has no legal move.

    On None the caller passes the turn without invoking the reducer.
    """
    candidates = generate_legal_moves(state, side)
    if not candidates:
        return None
    bot = FootballBot(
        side=side,
        difficulty=difficulty,
        personality=get_style(style or config.DEFAULT_STYLE),
        rng=rng,
    )
    return bot.select_move(state, candidates).move
