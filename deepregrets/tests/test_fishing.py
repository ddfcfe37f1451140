"""
Tests for actions at sea.

Tests:
- Revealing shoals
- Descending (die thresholds, multi-level)
- Catching, missing, overfishing
- Fish abilities on catch
"""

from ..catalog import PLUG_FISH_ID, get_fish, get_regret, get_upgrade
from ..engine_core.action import Action
from ..engine_core.effect_resolver import catch_difficulty
from ..engine_core.reducer import Reducer
from ..engine_core.rng import GameRandom
from ..engine_core.rules import RulesConfig
from ..engine_core.state import DifficultyReduction
from .conftest import (
    COD,
    CUTTLEFISH,
    HALIBUT,
    MEDUSA,
    OCTOPUS,
    SARDINE,
    SHARK,
    empty_sea,
    ok,
    place_fish,
    set_regrets,
)


class TestReveal:
    """Tests for revealing the top fish of a shoal."""

    def test_reveal_marks_shoal(self, action_state, reducer):
        """Revealing exposes the top fish and selects the shoal."""
        action_state.players[0].fresh_dice = [3]
        place_fish(action_state, 1, 1, SARDINE, revealed=False)

        state = ok(reducer.apply(action_state, Action.reveal("player-1", 1, 1)))

        assert state.sea.is_revealed(1, 1)
        assert state.players[0].current_shoal == 1

    def test_reveal_needs_fresh_die(self, action_state, reducer):
        place_fish(action_state, 1, 0, SARDINE, revealed=False)

        result = reducer.apply(action_state, Action.reveal("player-1", 1, 0))

        assert not result.success

    def test_reveal_only_at_own_depth(self, action_state, reducer):
        action_state.players[0].fresh_dice = [3]

        result = reducer.apply(action_state, Action.reveal("player-1", 2, 0))

        assert not result.success
        assert "depth" in result.error


class TestDescend:
    """Tests for descending."""

    def test_descend_two_levels(self, action_state, reducer):
        """Each level costs one die showing 3 or more."""
        action_state.players[0].fresh_dice = [6, 4, 2, 5]

        state = ok(reducer.apply(action_state, Action.descend("player-1", 3)))
        player = state.players[0]

        assert player.current_depth == 3
        assert player.fresh_dice == [2, 5]
        assert player.spent_dice == [6, 4]

    def test_descend_without_enough_dice(self, action_state, reducer):
        """Two levels with a single qualifying die is rejected."""
        action_state.players[0].fresh_dice = [2, 2, 6]

        result = reducer.apply(action_state, Action.descend("player-1", 3))

        assert not result.success
        assert result.new_state is action_state
        assert action_state.players[0].current_depth == 1

    def test_descend_target_must_be_deeper(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6, 6]

        result = reducer.apply(action_state, Action.descend("player-1", 2))

        assert not result.success

    def test_move_deeper_at_bottom(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 3
        player.fresh_dice = [6]

        result = reducer.apply(action_state, Action.move_deeper("player-1"))

        assert not result.success

    def test_reel_lowers_threshold(self, action_state, reducer):
        """A Deep Sea Reel lets a 2 pay for a level."""
        player = action_state.players[0]
        player.equipped_reel = get_upgrade("REEL-002")
        player.fresh_dice = [2]

        state = ok(reducer.apply(action_state, Action.move_deeper("player-1")))

        assert state.players[0].current_depth == 2

    def test_rules_threshold_is_configurable(self, action_state):
        """A house rule can make descending harder."""
        reducer = Reducer(rules=RulesConfig(descend_threshold=5), rng=GameRandom(1))
        action_state.players[0].fresh_dice = [4, 4]

        result = reducer.apply(action_state, Action.move_deeper("player-1"))

        assert not result.success


class TestCatch:
    """Tests for catching fish."""

    def test_catch_spends_selected_dice(self, action_state, reducer):
        """A successful catch moves the fish to hand and spends the dice."""
        action_state.players[0].fresh_dice = [1, 2, 5]
        place_fish(action_state, 1, 0, COD, SARDINE)

        state = ok(reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [1, 2])))
        player = state.players[0]

        assert [f.id for f in player.hand_fish] == [COD]
        assert player.fresh_dice == [1]
        assert sorted(player.spent_dice) == [2, 5]
        assert state.sea.top_fish(1, 0).id == SARDINE
        assert not state.sea.is_revealed(1, 0)

    def test_input_state_untouched(self, action_state, reducer):
        """The reducer works on a copy."""
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, COD, SARDINE)

        ok(reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [0])))

        assert action_state.players[0].hand_fish == []
        assert action_state.sea.top_fish(1, 0).id == COD

    def test_catch_requires_revealed_shoal(self, action_state, reducer):
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, COD, revealed=False)

        result = reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [0]))

        assert not result.success
        assert "reveal" in result.error.lower()

    def test_catch_only_top_fish(self, action_state, reducer):
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, COD, SARDINE)

        result = reducer.apply(action_state, Action.catch("player-1", SARDINE, 1, 0, [0]))

        assert not result.success

    def test_invalid_die_index(self, action_state, reducer):
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, COD, SARDINE)

        result = reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [3]))

        assert not result.success

    def test_miss_spends_a_die_and_draws_dink(self, action_state, reducer):
        """Falling short spends the first fresh die and draws a dink."""
        action_state.players[0].fresh_dice = [1, 2, 5]
        place_fish(action_state, 1, 0, HALIBUT, SARDINE)

        result = reducer.apply(action_state, Action.catch("player-1", HALIBUT, 1, 0, [0]))
        player = result.new_state.players[0]

        assert result.success
        assert any("missed" in c for c in result.state_changes)
        assert player.hand_fish == []
        assert player.fresh_dice == [2, 5]
        assert player.spent_dice == [1]
        assert len(player.dinks) == 1
        assert result.new_state.sea.top_fish(1, 0).id == HALIBUT

    def test_overfishing_draws_regret(self, action_state, reducer):
        """Taking the last fish of a shoal costs a regret."""
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, SARDINE)

        result = reducer.apply(action_state, Action.catch("player-1", SARDINE, 1, 0, [0]))

        assert result.success
        assert len(result.new_state.players[0].regrets) == 1
        assert any("overfished" in c for c in result.state_changes)

    def test_regret_shield_absorbs_draw(self, action_state, reducer):
        action_state.players[0].fresh_dice = [6]
        action_state.players[0].regret_shields = 1
        place_fish(action_state, 1, 0, SARDINE)

        state = ok(reducer.apply(action_state, Action.catch("player-1", SARDINE, 1, 0, [0])))

        assert state.players[0].regrets == []
        assert state.players[0].regret_shields == 0

    def test_auto_catch_with_mechanical_reel(self, action_state, reducer):
        """Difficulty 3 or less is caught without dice."""
        player = action_state.players[0]
        player.equipped_reel = get_upgrade("REEL-003")
        player.fresh_dice = [1]
        place_fish(action_state, 1, 0, COD, SARDINE)

        state = ok(reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [])))

        assert [f.id for f in state.players[0].hand_fish] == [COD]
        assert state.players[0].fresh_dice == [1]

    def test_not_your_turn(self, action_state, reducer):
        action_state.players[1].fresh_dice = [6]
        place_fish(action_state, 1, 0, COD, SARDINE)

        result = reducer.apply(action_state, Action.catch("player-2", COD, 1, 0, [0]))

        assert not result.success
        assert "turn" in result.error.lower()


class TestLifePreserverReduction:
    """Tests for the life preserver's difficulty reduction."""

    def test_reduction_applies_once(self, action_state, reducer):
        """The reduction lowers the next catch and is then used up."""
        action_state.players[0].fresh_dice = [1]
        action_state.life_preserver_difficulty_reduction = DifficultyReduction("player-1", 2)
        place_fish(action_state, 1, 0, COD, SARDINE)

        state = ok(reducer.apply(action_state, Action.catch("player-1", COD, 1, 0, [0])))

        assert [f.id for f in state.players[0].hand_fish] == [COD]
        assert state.life_preserver_difficulty_reduction is None

    def test_unreducible_fish(self, action_state):
        """Octopuses ignore the reduction."""
        action_state.life_preserver_difficulty_reduction = DifficultyReduction("player-1", 2)
        player = action_state.players[0]

        assert catch_difficulty(action_state, player, get_fish(OCTOPUS), RulesConfig()) == 5
        assert catch_difficulty(action_state, player, get_fish(COD), RulesConfig()) == 1

    def test_reduction_belongs_to_one_player(self, action_state):
        action_state.life_preserver_difficulty_reduction = DifficultyReduction("player-2", 2)

        assert catch_difficulty(action_state, action_state.players[0], get_fish(COD), RulesConfig()) == 3


class TestFishAbilities:
    """Tests for abilities that trigger on catch."""

    def test_regret_draw(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6, 1]
        place_fish(action_state, 2, 0, CUTTLEFISH, MEDUSA)

        state = ok(reducer.apply(action_state, Action.catch("player-1", CUTTLEFISH, 2, 0, [0])))

        assert len(state.players[0].regrets) == 1

    def test_madness_increase(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6]
        place_fish(action_state, 2, 0, MEDUSA, CUTTLEFISH)

        state = ok(reducer.apply(action_state, Action.catch("player-1", MEDUSA, 2, 0, [0])))

        assert state.players[0].madness_offset == 1
        assert state.players[0].madness_level == 1

    def test_void_reel_blocks_madness(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6]
        player.equipped_reel = get_upgrade("REEL-004")
        place_fish(action_state, 2, 0, MEDUSA, CUTTLEFISH)

        state = ok(reducer.apply(action_state, Action.catch("player-1", MEDUSA, 2, 0, [0])))

        assert state.players[0].madness_offset == 0

    def test_shark_eats_small_fish(self, action_state, reducer):
        """Catching a shark discards a small fish from the hand."""
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6]
        player.hand_fish = [get_fish(SARDINE)]
        place_fish(action_state, 2, 0, SHARK, MEDUSA)

        state = ok(reducer.apply(action_state, Action.catch("player-1", SHARK, 2, 0, [0])))

        assert [f.id for f in state.players[0].hand_fish] == [SHARK]
        assert SARDINE in [f.id for f in state.sea.graveyards[1]]

    def test_harpoon_protects_small_fish(self, action_state, reducer):
        player = action_state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6]
        player.hand_fish = [get_fish(SARDINE)]
        player.equipped_rod = get_upgrade("ROD-004")
        place_fish(action_state, 2, 0, SHARK, MEDUSA)

        state = ok(reducer.apply(action_state, Action.catch("player-1", SHARK, 2, 0, [0])))

        assert len(state.players[0].hand_fish) == 2

    def test_plug_forces_pass_and_erosion(self, action_state, reducer):
        """The Plug ends the catcher's day at sea and starts erosion."""
        player = action_state.players[0]
        player.current_depth = 3
        player.fresh_dice = [6, 6]
        place_fish(action_state, 3, 0, PLUG_FISH_ID, "FISH-D3-ISOPOD-011")

        state = ok(reducer.apply(action_state, Action.catch("player-1", PLUG_FISH_ID, 3, 0, [0])))

        assert state.sea.plug_active
        assert state.players[0].has_passed
        assert state.fish_coin_owner == "player-1"

    def test_emptying_the_sea_ends_the_game(self, action_state, reducer):
        """Catching the last fish anywhere ends the game at once."""
        empty_sea(action_state)
        action_state.players[0].fresh_dice = [6]
        place_fish(action_state, 1, 0, SARDINE)

        state = ok(reducer.apply(action_state, Action.catch("player-1", SARDINE, 1, 0, [0])))

        assert state.is_game_over
        assert state.winner is not None
        assert len(state.final_scores) == 2


class TestRegretSupply:
    """Tests for where a drawn regret comes from."""

    def catch_cuttlefish(self, state, reducer):
        player = state.players[0]
        player.current_depth = 2
        player.fresh_dice = [6]
        place_fish(state, 2, 0, CUTTLEFISH, MEDUSA)
        return ok(reducer.apply(state, Action.catch("player-1", CUTTLEFISH, 2, 0, [0])))

    def test_discard_reshuffled_into_empty_deck(self, action_state, reducer):
        action_state.port.regrets_deck = []
        action_state.port.regrets_discard = [get_regret("REG-004")]

        state = self.catch_cuttlefish(action_state, reducer)

        assert [r.id for r in state.players[0].regrets] == ["REG-004"]
        assert state.port.regrets_discard == []
        assert state.port.regrets_deck == []

    def test_stolen_from_most_regretful(self, three_player_state, reducer):
        """With no cards left, the regret is taken from the angler holding the most."""
        three_player_state.port.regrets_deck = []
        three_player_state.port.regrets_discard = []
        set_regrets(three_player_state.players[1], "REG-001")
        set_regrets(three_player_state.players[2], "REG-001", "REG-002", "REG-003", "REG-004")
        assert three_player_state.players[2].madness_level == 2

        state = self.catch_cuttlefish(three_player_state, reducer)

        thief, bystander, victim = state.players
        assert len(thief.regrets) == 1
        assert thief.madness_level == 1
        assert len(bystander.regrets) == 1
        assert len(victim.regrets) == 3
        assert victim.madness_level == 1

    def test_no_regrets_anywhere(self, action_state, reducer):
        action_state.port.regrets_deck = []
        action_state.port.regrets_discard = []

        state = self.catch_cuttlefish(action_state, reducer)

        assert state.players[0].regrets == []
        assert [f.id for f in state.players[0].hand_fish] == [CUTTLEFISH]
