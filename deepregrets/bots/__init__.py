"""
Bots module - Automa AI implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores catches, destinations and positions
- AnglerBot: Deep Regrets automa
- Personality / Difficulty: Configurable play styles
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import HeuristicEvaluator, EvaluationWeights, CatchEvaluation
from .personality import Personality, PERSONALITIES, Difficulty, DIFFICULTIES
from .angler_bot import AnglerBot, create_bots

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "CatchEvaluation",
    "Personality",
    "PERSONALITIES",
    "Difficulty",
    "DIFFICULTIES",
    "AnglerBot",
    "create_bots",
]
