"""
Tests for the madness tier table and the values derived from it.
"""

import pytest

from ..catalog import get_fish
from ..engine_core.action import Action, ActionType
from ..engine_core.madness import (
    TIERS,
    adjusted_fish_value,
    fair_modifier,
    foul_modifier,
    has_port_discount,
    madness_level,
    max_dice_for,
    recalculate_madness,
    tier_for,
    tier_index,
)
from ..engine_core.reducer import Reducer
from ..engine_core.rng import GameRandom
from ..engine_core.rules import RulesConfig
from .conftest import MEDUSA, SARDINE, ok, set_regrets


class TestTierTable:
    """Tests for regret count -> tier lookup."""

    @pytest.mark.parametrize("regrets,expected", [
        (0, 0), (1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (12, 4), (13, 5), (40, 5),
    ])
    def test_tier_boundaries(self, regrets, expected):
        """Every regret count lands in exactly one tier."""
        assert tier_index(regrets) == expected

    def test_negative_count_is_calm(self):
        """Negative counts behave like zero."""
        assert tier_for(-3).index == 0

    def test_tiers_are_contiguous(self):
        """Each tier starts right after the previous one ends."""
        for lower, upper in zip(TIERS, TIERS[1:]):
            assert upper.min_regrets == lower.max_regrets + 1
        assert TIERS[-1].max_regrets is None

    def test_modifiers_swing_from_fair_to_foul(self):
        """Calm anglers favour fair fish, mad ones favour foul fish."""
        assert fair_modifier(0) == 2
        assert foul_modifier(0) == -2
        assert fair_modifier(13) == -2
        assert foul_modifier(13) == 2

    def test_dice_cap_grows_with_madness(self):
        """The dice cap never shrinks as regrets pile up."""
        caps = [max_dice_for(n) for n in range(20)]
        assert caps == sorted(caps)
        assert max_dice_for(0) == 4
        assert max_dice_for(13) == 8

    def test_port_discount_only_at_the_top(self):
        """Only the deepest madness tier gets the port discount."""
        assert has_port_discount(13)
        assert not has_port_discount(12)


class TestFishValue:
    """Tests for madness-adjusted fish values."""

    def test_fair_fish_bonus_when_calm(self):
        """A calm angler adds the fair bonus."""
        assert adjusted_fish_value(get_fish(SARDINE), 0) == 3

    def test_foul_fish_penalty_when_calm(self):
        """A calm angler loses value on foul fish."""
        assert adjusted_fish_value(get_fish(MEDUSA), 0) == 3

    def test_value_never_negative(self):
        """Modifiers cannot push a fish below zero."""
        assert adjusted_fish_value(get_fish(SARDINE), 13) == 0


class TestPlayerMadness:
    """Tests for per-player derived fields."""

    def test_offset_shifts_level(self):
        """The madness offset adds to the tier index, clamped to the table."""
        assert madness_level(1, 1) == 2
        assert madness_level(0, -1) == 0
        assert madness_level(13, 3) == 5

    def test_recalculate_sets_level_and_cap(self, action_state):
        """Recalculation writes both derived fields."""
        player = action_state.players[0]
        set_regrets(player, "REG-001", "REG-002", "REG-003", "REG-004")

        assert player.madness_level == 2
        assert player.max_dice == 5

    def test_captain_bonus_raises_cap(self, action_state):
        """A captain with a larger dice pool keeps the bonus at every tier."""
        player = action_state.players[0]
        player.base_max_dice = 4
        recalculate_madness(player)

        assert player.max_dice == 5

    def test_cap_follows_rule_set_floor(self, action_state):
        """The captain bonus is measured against the injected rule set."""
        player = action_state.players[0]
        player.base_max_dice = 4

        recalculate_madness(player, RulesConfig(default_base_max_dice=4))

        assert player.max_dice == 4

    def test_rule_set_reaches_the_reducer(self, port_state):
        reducer = Reducer(rules=RulesConfig(default_base_max_dice=4), rng=GameRandom(1))
        player = port_state.players[0]
        player.base_max_dice = 4
        set_regrets(player, "REG-004")

        state = ok(reducer.apply(port_state, Action.simple(ActionType.DISCARD_REGRET, "player-1", regret_id="REG-004")))

        assert state.players[0].max_dice == 4
