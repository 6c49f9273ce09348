"""
Game Loop - Drives a full match between two bot policies.

The loop:
1. Asks the side to move for its legal moves
2. Passes the turn if there are none
3. Otherwise lets that side's policy pick a move and applies it
4. Stops on the goal target, the move limit, or when nobody can move

Used for self-play and for checking the difficulty ladder in aggregate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from .. import config
from ..engine_core.action_generator import legal_moves
from ..engine_core.reducer import Reducer, match_winner, pass_turn
from ..engine_core.setup import create_initial_state
from ..engine_core.state import GameState, Side

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy
    from ..engine_core.action import Move


class LoopState(Enum):
    """State of the game loop."""
    PLAYING = "playing"
    GOAL_TARGET_REACHED = "goal_target_reached"
    MOVE_LIMIT_REACHED = "move_limit_reached"
    BLOCKED = "blocked"


@dataclass
class TurnResult:
    """
    Result of playing one turn.

    move is None when the side to move had to pass.
    """
    side: Side
    loop_state: LoopState
    move: Move | None = None
    explanation: str = ""
    goal: bool = False
    capture: bool = False

    @property
    def passed(self) -> bool:
        return self.move is None


@dataclass
class MatchResult:
    """Summary of a finished match. winner is None for a draw."""
    winner: Side | None
    final_state: GameState
    moves_played: int = 0
    passes: int = 0
    goals: list[Side] = field(default_factory=list)
    loop_state: LoopState = LoopState.PLAYING


class GameLoop:
    """
    The match driver.

    Usage:
        loop = GameLoop(FootballBot(Side.HOME, "hard"), FootballBot(Side.AWAY, "easy"))
        result = loop.run()
        print(result.winner, result.final_state.score)
    """

    def __init__(
        self,
        home_policy: BotPolicy,
        away_policy: BotPolicy,
        goals_to_win: int = config.GOALS_TO_WIN,
        max_moves: int = config.MAX_MATCH_MOVES,
        state: GameState | None = None,
        reducer: Reducer | None = None,
    ):
        self.policies = {Side.HOME: home_policy, Side.AWAY: away_policy}
        self.goals_to_win = goals_to_win
        self.max_moves = max_moves
        self.game_state = state or create_initial_state()
        self.reducer = reducer or Reducer()
        self.loop_state = LoopState.PLAYING

        self.moves_played = 0
        self.passes = 0
        self.goals: list[Side] = []
        self._consecutive_passes = 0

    @property
    def finished(self) -> bool:
        return self.loop_state != LoopState.PLAYING

    def step(self) -> TurnResult:
        """Play one turn for the side to move."""
        if self.finished:
            raise RuntimeError(f"Match already over ({self.loop_state.value})")

        side = self.game_state.turn
        candidates = legal_moves(self.game_state, side)

        if not candidates:
            self.game_state = pass_turn(self.game_state)
            self.passes += 1
            self._consecutive_passes += 1
            if self._consecutive_passes >= 2:
                logger.debug("Neither side can move, stopping")
                self.loop_state = LoopState.BLOCKED
            return TurnResult(side=side, loop_state=self.loop_state)

        self._consecutive_passes = 0
        decision = self.policies[side].select_move(self.game_state, candidates)
        outcome = self.reducer.apply(self.game_state, decision.move)
        self.game_state = outcome.next_state
        self.moves_played += 1

        if outcome.goal is not None:
            self.goals.append(outcome.goal.scoring_side)
            logger.debug(
                "Goal by {} after {} moves, score {}-{}",
                side.value,
                self.moves_played,
                self.game_state.score_for(Side.HOME),
                self.game_state.score_for(Side.AWAY),
            )
            if match_winner(self.game_state, self.goals_to_win) is not None:
                self.loop_state = LoopState.GOAL_TARGET_REACHED

        if not self.finished and self.moves_played >= self.max_moves:
            self.loop_state = LoopState.MOVE_LIMIT_REACHED

        return TurnResult(
            side=side,
            loop_state=self.loop_state,
            move=decision.move,
            explanation=decision.explanation,
            goal=outcome.goal is not None,
            capture=outcome.captured_piece is not None,
        )

    def run(self) -> MatchResult:
        """Play turns until the match is over."""
        while not self.finished:
            self.step()

        winner = match_winner(self.game_state, self.goals_to_win)
        logger.debug(
            "Match over ({}): winner {}, {} moves, {} passes",
            self.loop_state.value,
            winner.value if winner else "none",
            self.moves_played,
            self.passes,
        )
        return MatchResult(
            winner=winner,
            final_state=self.game_state,
            moves_played=self.moves_played,
            passes=self.passes,
            goals=list(self.goals),
            loop_state=self.loop_state,
        )
