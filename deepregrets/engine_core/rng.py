"""
Randomness - The single injectable source of nondeterminism.

Shuffles, dice rolls, tackle-die faces and random regret selection all go
through a GameRandom so a seeded game replays identically.
"""

from __future__ import annotations
import random
from typing import Any, Sequence, TypeVar

T = TypeVar("T")


class GameRandom:
    """Seedable wrapper around random.Random."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy; the input is left untouched."""
        result = list(items)
        self._rng.shuffle(result)
        return result

    def roll(self, count: int, sides: int = 6) -> list[int]:
        return [self._rng.randint(1, sides) for _ in range(max(0, count))]

    def roll_face(self, faces: Sequence[int]) -> int:
        """Roll a die with a custom face distribution."""
        return faces[self._rng.randrange(len(faces))]

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def index(self, n: int) -> int:
        """Uniform index in [0, n)."""
        return self._rng.randrange(n)

    def getstate(self) -> Any:
        return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        self._rng.setstate(state)

    def copy(self) -> GameRandom:
        """Independent generator positioned at the same point of the stream."""
        clone = GameRandom(self.seed)
        clone.setstate(self.getstate())
        return clone
