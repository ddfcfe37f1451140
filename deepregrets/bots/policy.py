"""
Bot Policy - How an automa angler picks its next move.

A policy looks at the table and the candidate actions for its seat and
answers with a BotDecision: the action, a one-line reason for the log or
the CLI, and how sure it is. Policies are advisory and never mutate the
state they are shown.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..engine_core.action import ActionType
from ..engine_core.rng import GameRandom

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    One move chosen by a bot, with its reasoning attached.

    `evaluation_details` carries whatever the policy scored along the way,
    e.g. the sea and port values behind a declaration.
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_pass(self) -> bool:
        return self.action.action_type is ActionType.PASS


class BotPolicy(ABC):
    """Base class for anything that can fill a seat at the table."""

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Choose the seat's next move.

        Args:
            state: Table as it stands
            legal_actions: Candidates from the action generator

        Returns:
            BotDecision with the chosen action
        """

    def get_name(self) -> str:
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Picks uniformly among the candidates.

    With `avoid_passing` the angler only passes once passing is the sole
    candidate left, which keeps random days from ending on the first turn.
    """

    def __init__(self, seed: int | None = None, avoid_passing: bool = False):
        self.rng = GameRandom(seed)
        self.avoid_passing = avoid_passing

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("Nothing to choose from")

        pool = legal_actions
        if self.avoid_passing:
            pool = [a for a in legal_actions if a.action_type is not ActionType.PASS] or legal_actions

        action = self.rng.choice(pool)
        return BotDecision(
            action=action,
            explanation=f"Picked {action.action_type.value} at random",
            confidence=1.0 / len(pool),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """Always takes the first candidate; handy for replayable tests."""

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("Nothing to choose from")

        return BotDecision(
            action=legal_actions[0],
            explanation=f"Took the first option ({legal_actions[0].action_type.value})",
            evaluated_actions=1,
        )
