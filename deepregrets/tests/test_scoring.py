"""
Tests for scoring.
"""

from ..catalog import FishCard, get_fish
from ..engine_core.scoring import (
    fishbuck_score,
    hand_fish_score,
    mount_value,
    mounted_fish_score,
    regret_value,
    score_breakdown,
    total_score,
)
from ..engine_core.state import MountedFish
from .conftest import COD, MEDUSA, SARDINE, set_regrets


def make_fish(value: int, quality: str = "fair") -> FishCard:
    return FishCard(
        id=f"TEST-FISH-{value}",
        name="Test Fish",
        depth=1,
        size="mid",
        value=value,
        base_value=value,
        difficulty=1,
        quality=quality,
    )


class TestFishScores:
    """Tests for hand and mounted fish."""

    def test_hand_uses_current_tier(self, action_state):
        """Hand fish are valued at the player's madness tier."""
        player = action_state.players[0]
        player.hand_fish = [get_fish(SARDINE), get_fish(MEDUSA)]

        # Calm: sardine 1+2, medusa 5-2
        assert hand_fish_score(player) == 6

    def test_mount_applies_modifier_before_multiplier(self, action_state):
        """A value-5 fair fish in the third slot scores (5+2)*3."""
        player = action_state.players[0]
        mount = MountedFish(slot=2, multiplier=3, fish=make_fish(5))
        player.mounted_fish = [mount]

        assert mount_value(player, mount) == 21
        assert mounted_fish_score(player) == 21

    def test_mounts_follow_later_madness(self, action_state):
        """Mounted fish are revalued when madness changes."""
        player = action_state.players[0]
        player.mounted_fish = [MountedFish(slot=0, multiplier=1, fish=get_fish(COD))]
        assert mounted_fish_score(player) == 5

        set_regrets(player, "REG-001", "REG-002", "REG-003", "REG-004", "REG-005", "REG-006", "REG-007")
        assert mounted_fish_score(player) == 3


class TestTotals:
    """Tests for totals and the regret value."""

    def test_total_excludes_regrets(self, action_state):
        """Regrets never subtract from the total."""
        player = action_state.players[0]
        player.fishbucks = 4
        player.hand_fish = [get_fish(SARDINE)]
        set_regrets(player, "REG-004")

        # Tier 1: sardine 1+1
        assert total_score(player) == 6
        assert fishbuck_score(player) == 4

    def test_regret_value_sums_hidden_values(self, action_state):
        player = action_state.players[0]
        set_regrets(player, "REG-002", "REG-003")
        assert regret_value(player) == 3

    def test_flipped_lifeboat_adds_penalty(self, action_state):
        """A flipped lifeboat counts as ten extra regret value."""
        player = action_state.players[0]
        set_regrets(player, "REG-002", "REG-003")
        player.lifeboat_flipped = True
        assert regret_value(player) == 13

    def test_breakdown(self, action_state):
        """The breakdown reports each component."""
        player = action_state.players[0]
        player.fishbucks = 2
        player.hand_fish = [get_fish(SARDINE)]
        player.mounted_fish = [MountedFish(slot=1, multiplier=2, fish=get_fish(COD))]

        breakdown = score_breakdown(player)

        assert breakdown.player_id == player.id
        assert breakdown.hand_fish == 3
        assert breakdown.mounted_fish == 10
        assert breakdown.fishbucks == 2
        assert breakdown.total == 15
        assert breakdown.regret_count == 0
        assert breakdown.forfeited == 0
