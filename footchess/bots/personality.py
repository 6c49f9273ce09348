"""
Bot Personalities - Configurable playing styles.

A style scales the evaluator's terms:
- How much the bot values forward progress and position
- How much it values captures
- How much it worries about threats to its own goal
- How cautious it is about the opponent's replies

Styles never touch legality, and goals always dominate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import random


@dataclass(frozen=True)
class Personality:
    """
    A playing style.

    Multipliers are applied on top of the difficulty profile;
    1.0 leaves a term unchanged.
    """
    name: str
    description: str = ""

    progress: float = 1.0
    positional: float = 1.0
    capture: float = 1.0
    threat: float = 1.0
    safety: float = 1.0
    control: float = 1.0
    caution: float = 1.0  # Scales the opponent-reply lookahead

    metadata: dict[str, Any] = field(default_factory=dict, compare=False)


# ============================================================================
# Predefined Personalities
# ============================================================================

MODERATE = Personality(
    name="moderate",
    description="Balanced play, adapts to the score",
)


DEFENSIVE = Personality(
    name="defensive",
    description="Keeps the defence compact and waits for mistakes",
    progress=0.7,
    positional=0.8,
    capture=0.9,
    threat=1.8,
    safety=1.5,
    caution=1.3,
)


OFFENSIVE = Personality(
    name="offensive",
    description="Pushes forwards and midfielders toward the opponent goal",
    progress=1.5,
    positional=1.4,
    capture=1.2,
    threat=0.6,
    safety=0.8,
    caution=0.8,
)


TACTICAL = Personality(
    name="tactical",
    description="Looks for favourable trades and protected pieces",
    capture=1.5,
    safety=1.3,
    caution=1.2,
)


COUNTERATTACK = Personality(
    name="counterattack",
    description="Absorbs pressure, then strikes on captures",
    progress=1.1,
    positional=0.8,
    capture=1.4,
    threat=1.3,
)


CONTROL = Personality(
    name="control",
    description="Fights for the centre and the opponent half",
    progress=0.8,
    positional=1.2,
    control=2.0,
)


STYLES: dict[str, Personality] = {
    "moderate": MODERATE,
    "defensive": DEFENSIVE,
    "offensive": OFFENSIVE,
    "tactical": TACTICAL,
    "counterattack": COUNTERATTACK,
    "control": CONTROL,
}


def get_style(name: str | None) -> Personality:
    """Look up a style by name; None gives the moderate style."""
    if name is None:
        return MODERATE
    try:
        return STYLES[name.lower()]
    except KeyError:
        valid = ", ".join(STYLES)
        raise ValueError(f"Unknown style {name!r} (expected one of: {valid})") from None


def choose_style(rng: random.Random | None = None) -> Personality:
    """Pick a style at random, as is done when a bot game is created."""
    rng = rng or random.Random()
    return STYLES[rng.choice(sorted(STYLES))]
