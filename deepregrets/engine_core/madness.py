"""
Madness - Regret-count tiers and the values derived from them.

The tier table below is the only place fish value modifiers, dice caps
and the port discount are defined. Everything else asks this module.

Regret count drives the tier; a player's ability-driven madness offset
shifts the tier index on top of it (clamped to the table).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .rules import DEFAULT_RULES, RulesConfig

if TYPE_CHECKING:
    from ..catalog import FishCard
    from .state import PlayerState


@dataclass(frozen=True)
class MadnessTier:
    """One row of the madness table (regret range inclusive)."""
    index: int
    min_regrets: int
    max_regrets: int | None  # None = unbounded
    fair_modifier: int
    foul_modifier: int
    max_dice: int
    port_discount: bool = False

    def contains(self, regret_count: int) -> bool:
        if regret_count < self.min_regrets:
            return False
        return self.max_regrets is None or regret_count <= self.max_regrets

    def modifier_for(self, fish: FishCard) -> int:
        return self.foul_modifier if fish.quality == "foul" else self.fair_modifier


TIERS: tuple[MadnessTier, ...] = (
    MadnessTier(0, 0, 0, fair_modifier=2, foul_modifier=-2, max_dice=4),
    MadnessTier(1, 1, 3, fair_modifier=1, foul_modifier=-1, max_dice=4),
    MadnessTier(2, 4, 6, fair_modifier=1, foul_modifier=0, max_dice=5),
    MadnessTier(3, 7, 9, fair_modifier=0, foul_modifier=1, max_dice=6),
    MadnessTier(4, 10, 12, fair_modifier=-1, foul_modifier=1, max_dice=7),
    MadnessTier(5, 13, None, fair_modifier=-2, foul_modifier=2, max_dice=8, port_discount=True),
)

MAX_TIER_INDEX = len(TIERS) - 1


# ============================================================================
# Regret-count functions
# ============================================================================

def tier_for(regret_count: int) -> MadnessTier:
    """Tier row containing the regret count. Negative counts act as zero."""
    count = max(0, regret_count)
    for tier in TIERS:
        if tier.contains(count):
            return tier
    return TIERS[-1]


def tier_index(regret_count: int) -> int:
    return tier_for(regret_count).index


def fair_modifier(regret_count: int) -> int:
    return tier_for(regret_count).fair_modifier


def foul_modifier(regret_count: int) -> int:
    return tier_for(regret_count).foul_modifier


def max_dice_for(regret_count: int) -> int:
    return tier_for(regret_count).max_dice


def has_port_discount(regret_count: int) -> bool:
    return tier_for(regret_count).port_discount


def adjusted_fish_value(fish: FishCard, regret_count: int) -> int:
    """Base value shifted by the quality modifier, never below zero."""
    return adjusted_value_at(fish, tier_for(regret_count))


def adjusted_value_at(fish: FishCard, tier: MadnessTier) -> int:
    return max(0, fish.base_value + tier.modifier_for(fish))


# ============================================================================
# Player-level derivation
# ============================================================================

def madness_level(regret_count: int, offset: int = 0) -> int:
    return min(MAX_TIER_INDEX, max(0, tier_index(regret_count) + offset))


def player_tier(player: PlayerState) -> MadnessTier:
    """The tier a player currently plays at (regrets plus madness offset)."""
    return TIERS[madness_level(len(player.regrets), player.madness_offset)]


def max_dice(player: PlayerState, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Dice cap: tier cap plus the captain's bonus over the rule set's floor."""
    bonus = player.base_max_dice - rules.default_base_max_dice
    return player_tier(player).max_dice + bonus


def recalculate_madness(player: PlayerState, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Refresh the derived madness fields. The only writer of both."""
    player.madness_level = madness_level(len(player.regrets), player.madness_offset)
    player.max_dice = max_dice(player, rules)
