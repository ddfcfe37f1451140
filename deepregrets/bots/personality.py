"""
Bot Personalities and Difficulties - Configurable play styles.

Personalities adjust:
- Evaluation weights (what the bot values)
- Catch and descend thresholds (how greedy it fishes)
- Randomness (for unpredictability)

Difficulties adjust how noisy and how risk-averse the bot's judgement is.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .evaluator import EvaluationWeights


@dataclass
class Personality:
    """
    A bot personality that defines play style.
    """
    name: str
    description: str = ""

    # Evaluation weights
    weights: EvaluationWeights = field(default_factory=EvaluationWeights)

    # Sea behaviour
    good_catch_value: float = 3.0  # Catch right away above this expected value
    descend_value: float = 5.0  # Descend when the descent scores above this

    # Port behaviour
    minimum_purchase: int = 2  # Don't shop below this many fishbucks
    discard_regrets_at: int = 7

    randomness: float = 0.0  # Probability of a random legal action

    # Metadata
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Difficulty:
    """How sharp a bot plays."""
    name: str
    declaration_noise: float  # Scales random noise on sea/port values
    catch_risk: float  # Inflates regret penalties on catches
    descend_risk: float  # Multiplier on descend value
    discard_chance: float  # Chance to discard a regret at high madness
    reroll_below: float  # Reroll at port when average pips are below this
    reroll_chance: float


# ============================================================================
# Predefined Personalities
# ============================================================================

BALANCED = Personality(
    name="Balanced",
    description="Fishes what it can, makes port when the hold is full",
)


AGGRESSIVE = Personality(
    name="Aggressive",
    description="Dives deep and takes risky catches",
    weights=EvaluationWeights(
        regret_penalty=0.75,
        foul_penalty=0.25,
        per_depth_level=3.0,
        sea_base=6.0,
        opponent_penalty=-0.5,
    ),
    good_catch_value=2.0,
    descend_value=4.0,
    minimum_purchase=2,
    discard_regrets_at=10,
    randomness=0.05,
)


CONSERVATIVE = Personality(
    name="Conservative",
    description="Avoids regrets and banks fish early",
    weights=EvaluationWeights(
        regret_penalty=2.5,
        foul_penalty=1.0,
        force_pass_penalty=2.0,
        port_base=4.0,
        per_hand_fish=2.5,
        opponent_penalty=-0.1,
    ),
    good_catch_value=4.0,
    descend_value=6.0,
    minimum_purchase=3,
    discard_regrets_at=4,
)


# All predefined personalities
PERSONALITIES: dict[str, Personality] = {
    "balanced": BALANCED,
    "aggressive": AGGRESSIVE,
    "conservative": CONSERVATIVE,
}


EASY = Difficulty(
    name="easy",
    declaration_noise=0.3,
    catch_risk=0.5,
    descend_risk=0.8,
    discard_chance=0.3,
    reroll_below=2.0,
    reroll_chance=0.4,
)

MEDIUM = Difficulty(
    name="medium",
    declaration_noise=0.15,
    catch_risk=0.3,
    descend_risk=0.5,
    discard_chance=0.6,
    reroll_below=2.5,
    reroll_chance=0.6,
)

HARD = Difficulty(
    name="hard",
    declaration_noise=0.05,
    catch_risk=0.1,
    descend_risk=0.3,
    discard_chance=0.9,
    reroll_below=3.0,
    reroll_chance=0.8,
)

DIFFICULTIES: dict[str, Difficulty] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}
