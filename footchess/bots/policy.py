"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the legal moves of the side it
plays, and returns a decision. Decisions include:
- Which move to make
- Explanation (for logs and debugging)
- How many candidates were considered
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

if TYPE_CHECKING:
    from ..engine_core.action import Move
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.
    """
    move: Move
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_moves: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects moves. Callers must not invoke
    select_move with an empty list; an empty list means the side passes.
    """

    @abstractmethod
    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        """
        Select a move from the legal moves.

        Args:
            state: Current game state
            legal_moves: Legal moves for the side this policy plays

        Returns:
            BotDecision with the selected move
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        if not legal_moves:
            raise ValueError("No legal moves available")

        move = self.rng.choice(legal_moves)
        return BotDecision(
            move=move,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_moves),
            evaluated_moves=len(legal_moves),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal move.

    Used for:
    - Deterministic testing
    """

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        if not legal_moves:
            raise ValueError("No legal moves available")

        return BotDecision(
            move=legal_moves[0],
            explanation="Selected first legal move",
            evaluated_moves=1,
        )
