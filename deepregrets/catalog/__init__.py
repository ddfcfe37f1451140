"""
Catalog - Immutable reference data looked up by id.
"""

from __future__ import annotations

from .abilities import (
    Ability,
    DiscardTagged,
    DrawDinks,
    DrawRegrets,
    EatDiscardRegret,
    EatReadyDie,
    ForcePass,
    Keyword,
    MadnessAdjust,
    StartErosion,
    parse_ability,
    parse_abilities,
)
from .cards import CHARACTERS, DINKS, REELS, REGRETS, RODS, SUPPLIES, TACKLE_DICE, UPGRADES_BY_TYPE
from .fish import ALL_FISH, FISH_BY_DEPTH, PLUG_FISH_ID
from .models import (
    Character,
    DinkCard,
    FishCard,
    RegretCard,
    StartingBonus,
    TackleDie,
    UpgradeCard,
)

_FISH_INDEX = {f.id: f for f in ALL_FISH}
_REGRET_INDEX = {r.id: r for r in REGRETS}
_UPGRADE_INDEX = {u.id: u for u in RODS + REELS + SUPPLIES}
_DINK_INDEX = {d.id: d for d in DINKS}
_TACKLE_INDEX = {t.id: t for t in TACKLE_DICE}
_CHARACTER_INDEX = {c.id: c for c in CHARACTERS}


def get_fish(fish_id: str) -> FishCard:
    return _FISH_INDEX[fish_id]


def get_regret(regret_id: str) -> RegretCard:
    return _REGRET_INDEX[regret_id]


def get_upgrade(upgrade_id: str) -> UpgradeCard:
    return _UPGRADE_INDEX[upgrade_id]


def get_dink(dink_id: str) -> DinkCard:
    return _DINK_INDEX[dink_id]


def get_tackle_die(die_id: str) -> TackleDie:
    return _TACKLE_INDEX[die_id]


def get_character(character_id: str) -> Character:
    return _CHARACTER_INDEX[character_id]


def fish_by_depth(depth: int) -> tuple[FishCard, ...]:
    return FISH_BY_DEPTH.get(depth, ())


__all__ = [
    "Ability",
    "ALL_FISH",
    "CHARACTERS",
    "Character",
    "DINKS",
    "DinkCard",
    "DiscardTagged",
    "DrawDinks",
    "DrawRegrets",
    "EatDiscardRegret",
    "EatReadyDie",
    "FISH_BY_DEPTH",
    "FishCard",
    "ForcePass",
    "Keyword",
    "MadnessAdjust",
    "PLUG_FISH_ID",
    "REELS",
    "REGRETS",
    "RODS",
    "RegretCard",
    "SUPPLIES",
    "StartErosion",
    "StartingBonus",
    "TACKLE_DICE",
    "TackleDie",
    "UPGRADES_BY_TYPE",
    "UpgradeCard",
    "fish_by_depth",
    "get_character",
    "get_dink",
    "get_fish",
    "get_regret",
    "get_tackle_die",
    "get_upgrade",
    "parse_abilities",
    "parse_ability",
]
