"""
Tests for saving and restoring game states.
"""

import json

import pytest
from pydantic import ValidationError

from ..catalog import get_fish
from ..engine_core.action import Action, ActionType
from ..engine_core.reducer import Reducer
from ..engine_core.rng import GameRandom
from ..engine_core.snapshot import dump_state, load_state, state_from_json, state_to_json
from ..engine_core.state import DiceRemoval, Day, Location, MountedFish, PassingReward
from .conftest import COD, SARDINE, ok, place_fish, set_regrets


class TestSnapshot:
    """Tests for state serialization."""

    def test_new_game_survives(self, new_game):
        assert state_from_json(state_to_json(new_game)) == new_game

    def test_mid_game_survives(self, action_state):
        """Pending records, revealed shoals and zones all come back."""
        player = action_state.players[0]
        player.location = Location.PORT
        player.hand_fish = [get_fish(SARDINE)]
        player.mounted_fish = [MountedFish(slot=1, multiplier=2, fish=get_fish(COD))]
        set_regrets(player, "REG-004", "REG-009")
        place_fish(action_state, 1, 2, COD, SARDINE)
        action_state.pending_dice_removal = DiceRemoval(player_id="player-1", count=2)
        action_state.pending_passing_reward = PassingReward(player_id="player-2", is_first_pass=True)
        action_state.day = Day.THURSDAY

        restored = load_state(dump_state(action_state))

        assert restored == action_state
        assert restored.sea.is_revealed(1, 2)
        assert restored.players[0].mounted_fish[0].fish.id == COD

    def test_dump_is_plain_json(self, new_game):
        data = dump_state(new_game)

        assert json.loads(json.dumps(data))["players"][0]["name"] == "Hugo"
        assert data["day"] == "monday"
        assert data["phase"] == "start"

    def test_restored_game_plays_on(self, action_state, reducer):
        action_state.players[0].fresh_dice = [6]
        restored = state_from_json(state_to_json(action_state))

        result = reducer.apply(restored, Action.move_deeper("player-1"))

        assert result.success

    def test_bad_data_rejected(self):
        with pytest.raises(ValidationError):
            load_state({"players": "nobody", "day": "someday"})

    def test_restored_game_replays_identically(self, action_state):
        """A restored mid-game state follows the same path as the live one."""
        hugo, alba = action_state.players
        hugo.fresh_dice = [6, 4]
        set_regrets(hugo, "REG-001", "REG-004")
        alba.location = Location.PORT
        alba.fresh_dice = [1, 1, 2]
        action_state.life_preserver_owner = "player-2"
        action_state.pending_passing_reward = PassingReward(player_id="player-1")
        actions = [
            Action.claim_passing_reward("player-1", "discard_regret"),
            Action.descend("player-1", 2),
            Action.end_turn(),
            Action.simple(ActionType.ROLL_DICE, "player-2"),
            Action.pass_turn("player-2"),
            Action.claim_passing_reward("player-2", "draw_dink"),
            Action.end_turn(),
        ]
        rng = GameRandom(9)
        live, restored = action_state, load_state(dump_state(action_state))
        live_reducer, restored_reducer = Reducer(rng=rng.copy()), Reducer(rng=rng.copy())

        for action in actions:
            live = ok(live_reducer.apply(live, action))
            restored = ok(restored_reducer.apply(restored, action))

        assert restored == live
        assert state_to_json(restored) == state_to_json(live)
