"""
Session Module - Runs whole matches.

A match is played between two bot policies, one per side, from the
standard kick-off until a side reaches the goal target, the move
limit is hit, or neither side can move.
"""

from .game_loop import GameLoop, LoopState, MatchResult, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "MatchResult",
    "TurnResult",
]
