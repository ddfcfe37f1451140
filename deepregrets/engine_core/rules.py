"""
Rules Configuration - Every tunable number of the rules engine.

Kept in one frozen dataclass so variants (house rules, tests) can be
injected into the reducer without touching module globals.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RulesConfig:
    """Numeric rules of the game."""
    # Economy
    fishbucks_cap: int = 10
    starting_fishbucks: int = 3
    port_discount: int = 1
    life_preserver_shop_discount: int = 2
    dink_shop_discount: int = 2
    cycle_market_cost: int = 1
    sell_bonus_per_hook: int = 1

    # Fishing
    descend_threshold: int = 3
    descend_threshold_floor: int = 1
    life_preserver_difficulty_reduction: int = 2
    auto_catch_max_difficulty: int = 3
    unreducible_fish_names: tuple[str, ...] = ("eel", "octopus", "kraken")
    max_depth: int = 3
    shoals_per_depth: int = 3

    # Dice and mounts
    default_base_max_dice: int = 3
    default_mount_slots: int = 3

    # Scoring
    lifeboat_regret_penalty: int = 10

    # Passing
    last_player_turns_at_sea: int = 2
    last_player_turns_at_port: int = 4

    # Market sizes
    shop_display_size: int = 2
    tackle_market_size: int = 3

    # Players
    min_players: int = 1
    max_players: int = 5


DEFAULT_RULES = RulesConfig()
