"""
Bots module - Automa AI implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores candidate moves
- Difficulty: The easy / medium / hard / pro ladder
- Personality: Configurable playing styles
- FootballBot / pick_bot_move: The automa
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import HeuristicEvaluator, EvaluationWeights, MoveEvaluation
from .difficulty import Difficulty, DifficultyProfile, PROFILES, get_profile
from .personality import Personality, STYLES, choose_style, get_style
from .football_bot import FootballBot, pick_bot_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "MoveEvaluation",
    "Difficulty",
    "DifficultyProfile",
    "PROFILES",
    "get_profile",
    "Personality",
    "STYLES",
    "choose_style",
    "get_style",
    "FootballBot",
    "pick_bot_move",
]
