"""
Scoring - Pure, read-only score functions over a player.

Fish values always use the player's current madness tier. The regret
value is kept out of the total; it only drives the endgame forfeiture
and tie-breaks.
"""

from __future__ import annotations

from .madness import adjusted_value_at, player_tier
from .rules import DEFAULT_RULES, RulesConfig
from .state import MountedFish, PlayerState, ScoreBreakdown


def hand_fish_score(player: PlayerState) -> int:
    tier = player_tier(player)
    return sum(adjusted_value_at(fish, tier) for fish in player.hand_fish)


def mount_value(player: PlayerState, mount: MountedFish) -> int:
    """Modifier first, then the slot multiplier."""
    return adjusted_value_at(mount.fish, player_tier(player)) * mount.multiplier


def mounted_fish_score(player: PlayerState) -> int:
    return sum(mount_value(player, mount) for mount in player.mounted_fish)


def fishbuck_score(player: PlayerState) -> int:
    return player.fishbucks


def regret_value(player: PlayerState, rules: RulesConfig = DEFAULT_RULES) -> int:
    value = sum(regret.value for regret in player.regrets)
    if player.lifeboat_flipped:
        value += rules.lifeboat_regret_penalty
    return value


def total_score(player: PlayerState) -> int:
    return hand_fish_score(player) + mounted_fish_score(player) + fishbuck_score(player)


def score_breakdown(player: PlayerState, rules: RulesConfig = DEFAULT_RULES) -> ScoreBreakdown:
    hand = hand_fish_score(player)
    mounted = mounted_fish_score(player)
    bucks = fishbuck_score(player)
    return ScoreBreakdown(
        player_id=player.id,
        hand_fish=hand,
        mounted_fish=mounted,
        fishbucks=bucks,
        regret_value=regret_value(player, rules),
        regret_count=len(player.regrets),
        total=hand + mounted + bucks,
    )
