"""
Tests for candidate action generation.
"""

import pytest

from ..catalog import get_fish
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator, legal_actions, pick_catch_dice
from ..engine_core.state import GamePhase, LifePreserverGift, PassingReward
from .conftest import COD, HALIBUT, SARDINE, place_fish, set_regrets


def types_of(actions):
    return {a.action_type for a in actions}


class TestPickCatchDice:
    """Tests for choosing dice for a catch."""

    @pytest.mark.parametrize("dice,difficulty,bonus,expected", [
        ([1, 2, 5], 3, 0, [2]),
        ([1, 2, 5], 7, 0, [1, 2]),
        ([1, 2, 5], 8, 0, [0, 1, 2]),
        ([1, 1], 5, 0, None),
        ([2], 3, 1, [0]),
        ([], 1, 0, None),
    ])
    def test_fewest_highest_dice(self, dice, difficulty, bonus, expected):
        assert pick_catch_dice(dice, difficulty, bonus) == expected


class TestGenerate:
    """Tests for ActionGenerator.generate()."""

    def test_declaration_choices(self, action_state):
        action_state.phase = GamePhase.DECLARATION

        actions = legal_actions(action_state, "player-1")

        assert [a.payload["location"] for a in actions] == ["sea", "port"]
        assert legal_actions(action_state, "player-2") == []

    def test_not_your_turn(self, action_state):
        assert legal_actions(action_state, "player-2") == []

    def test_unknown_player(self, action_state):
        assert legal_actions(action_state, "player-9") == []

    def test_at_sea(self, action_state):
        """Catchable fish, reveals, descents and passing are offered."""
        action_state.players[0].fresh_dice = [6, 4, 2]
        place_fish(action_state, 1, 0, COD, SARDINE)
        place_fish(action_state, 1, 1, SARDINE, revealed=False)

        actions = legal_actions(action_state, "player-1")
        catches = [a for a in actions if a.action_type is ActionType.CATCH_FISH]

        assert catches == [Action.catch("player-1", COD, 1, 0, [0])]
        assert Action.reveal("player-1", 1, 1) in actions
        assert Action.descend("player-1", 2) in actions
        assert Action.descend("player-1", 3) in actions
        assert actions[-1] == Action.pass_turn("player-1")

    def test_uncatchable_fish_not_offered(self, action_state):
        action_state.players[0].fresh_dice = [1, 1]
        place_fish(action_state, 1, 0, HALIBUT, SARDINE)

        actions = legal_actions(action_state, "player-1")

        assert ActionType.CATCH_FISH not in types_of(actions)
        assert ActionType.DESCEND not in types_of(actions)

    def test_at_port(self, port_state):
        player = port_state.players[0]
        player.fresh_dice = [3, 3]
        player.hand_fish = [get_fish(COD)]
        set_regrets(player, "REG-004")

        actions = legal_actions(port_state, "player-1")
        kinds = types_of(actions)

        assert {
            ActionType.SELL_FISH,
            ActionType.MOUNT_FISH,
            ActionType.DISCARD_REGRET,
            ActionType.ROLL_DICE,
            ActionType.EAT_FISH,
            ActionType.PASS,
        } <= kinds
        assert ActionType.CATCH_FISH not in kinds
        assert Action.mount("player-1", COD, 0) in actions

    def test_passed_player_keeps_tokens(self, action_state):
        """After passing only dinks and the life preserver remain."""
        action_state.players[0].has_passed = True
        action_state.life_preserver_owner = "player-1"

        kinds = types_of(legal_actions(action_state, "player-1"))

        assert kinds == {ActionType.USE_LIFE_PRESERVER}

    def test_awaited_input_comes_first(self, action_state):
        action_state.pending_life_preserver_gift = LifePreserverGift(player_id="player-2")

        actions = legal_actions(action_state, "player-2")

        assert actions == [Action.give_life_preserver("player-2", "player-1")]

    def test_passing_reward_choices(self, action_state):
        action_state.pending_passing_reward = PassingReward(player_id="player-1")

        assert legal_actions(action_state, "player-1") == [
            Action.claim_passing_reward("player-1", "draw_dink")
        ]

    def test_generated_actions_apply(self, action_state, reducer):
        """Every generated sea action is accepted by the reducer."""
        action_state.players[0].fresh_dice = [6, 4, 2]
        place_fish(action_state, 1, 0, COD, SARDINE)

        for action in legal_actions(action_state, "player-1"):
            result = reducer.apply(action_state, action)
            assert result.success, (action, result.error)


class TestGenerateSystem:
    """Tests for ActionGenerator.generate_system()."""

    def test_start_phase(self, new_game):
        assert ActionGenerator().generate_system(new_game) == [Action.next_phase()]

    def test_action_phase(self, action_state):
        assert ActionGenerator().generate_system(action_state) == [Action.end_turn()]

    def test_waiting_on_gift(self, action_state):
        action_state.pending_life_preserver_gift = LifePreserverGift(player_id="player-1")

        assert ActionGenerator().generate_system(action_state) == []
