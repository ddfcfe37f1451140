"""
Catalog Models - Immutable reference data definitions.

Every card and die in the game is described once here and looked up by id.
The engine never mutates these; runtime zones hold references to them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

from .abilities import Ability, DiscardTagged, parse_ability

Quality = Literal["fair", "foul"]
Size = Literal["small", "mid", "large"]
UpgradeType = Literal["rod", "reel", "supply"]


@dataclass(frozen=True)
class FishCard:
    """
    A fish definition.

    `abilities` keeps the authored tokens so the data table stays
    readable; `effects` is the typed form the engine resolves.
    """
    id: str
    name: str
    depth: int
    size: Size
    value: int
    base_value: int
    difficulty: int
    quality: Quality
    abilities: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    description: str = ""

    @property
    def effects(self) -> tuple[Ability, ...]:
        parsed = [parse_ability(token) for token in self.abilities]
        if "shark" in self.abilities and DiscardTagged("small") not in parsed:
            parsed.append(DiscardTagged("small"))
        return tuple(parsed)

    @property
    def is_foul(self) -> bool:
        return self.quality == "foul"


@dataclass(frozen=True)
class RegretCard:
    """A regret card. `value` is hidden and only matters at scoring."""
    id: str
    front_text: str
    value: int


@dataclass(frozen=True)
class UpgradeCard:
    """A rod, reel, or supply sold at the port shops."""
    id: str
    name: str
    type: UpgradeType
    cost: int
    effects: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class DinkCard:
    """A dink trinket. One-shot dinks are discarded when played."""
    id: str
    name: str
    timing: tuple[str, ...]
    effects: tuple[str, ...]
    one_shot: bool
    description: str = ""


@dataclass(frozen=True)
class TackleDie:
    """A purchasable special die with a custom face distribution."""
    id: str
    name: str
    color: str
    cost: int
    faces: tuple[int, ...]
    description: str = ""


@dataclass(frozen=True)
class StartingBonus:
    """Mechanical starting bonus of a captain."""
    extra_fishbucks: int = 0
    starting_rod: bool = False
    starting_reel: bool = False
    regret_shields: int = 0
    start_depth: int = 1
    extra_dinks: int = 0
    reroll_ones: bool = False
    base_max_dice: int = 3
    max_mount_slots: int = 3


@dataclass(frozen=True)
class Character:
    """A selectable captain."""
    id: str
    name: str
    title: str
    description: str = ""
    bonus_text: str = ""
    bonus: StartingBonus = field(default_factory=StartingBonus)
