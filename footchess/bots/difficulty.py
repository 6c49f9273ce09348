"""
Difficulty Ladder - How much a bot looks ahead and how noisy it is.

Tiers are ordered: every step up adds evaluation terms or lookahead
and removes randomness, never the other way round.

- easy: 1-ply heuristic, heavy noise, uniform pick among the top 5
- medium: defensive terms, opponent-reply lookahead, light noise, top 3
- hard: heavier defensive weights and lookahead, no noise, best move
- pro: hard, then a 2-ply re-rank of the best few candidates
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .. import config


class Difficulty(str, Enum):
    """Difficulty labels accepted at the boundary."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    PRO = "pro"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)

    @classmethod
    def parse(cls, label: str | Difficulty) -> Difficulty:
        """Parse a label; raises ValueError on unknown labels."""
        if isinstance(label, Difficulty):
            return label
        try:
            return cls(label.lower())
        except (ValueError, AttributeError):
            valid = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {label!r} (expected one of: {valid})") from None


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Search and selection parameters for one tier.

    Weights of 0 switch a term off entirely.
    """
    difficulty: Difficulty

    # Extra evaluation terms
    threat_weight: float = 0.0
    safety_weight: float = 0.0
    control_weight: float = 0.0

    # Opponent-reply lookahead (subtracted fraction of their best reply)
    lookahead_weight: float = 0.0

    # 2-ply re-rank (pro only)
    followup_weight: float = 0.0
    beam_width: int = 0

    # Selection
    noise: float = 0.0  # Uniform noise added to each score
    top_k: int = 1  # Pick uniformly among the k best...
    score_window: float | None = None  # ...restricted to those within this of the best

    @property
    def uses_lookahead(self) -> bool:
        return self.lookahead_weight > 0

    @property
    def deterministic(self) -> bool:
        return self.noise == 0 and self.top_k == 1


PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        difficulty=Difficulty.EASY,
        noise=30.0,
        top_k=5,
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        difficulty=Difficulty.MEDIUM,
        threat_weight=2.0,
        safety_weight=1.0,
        control_weight=2.0,
        lookahead_weight=0.3,
        noise=8.0,
        top_k=3,
        score_window=40.0,
    ),
    Difficulty.HARD: DifficultyProfile(
        difficulty=Difficulty.HARD,
        threat_weight=3.0,
        safety_weight=1.5,
        control_weight=2.0,
        lookahead_weight=0.6,
    ),
    Difficulty.PRO: DifficultyProfile(
        difficulty=Difficulty.PRO,
        threat_weight=3.0,
        safety_weight=1.5,
        control_weight=2.0,
        lookahead_weight=0.6,
        followup_weight=0.3,
        beam_width=config.PRO_BEAM_WIDTH,
    ),
}


def get_profile(difficulty: str | Difficulty) -> DifficultyProfile:
    """Profile for a difficulty label."""
    return PROFILES[Difficulty.parse(difficulty)]
