"""
Tests for turn order and passing.

Tests:
- First pass takes the fish coin and a reward
- Skipped anglers collect rewards
- The last angler's limited turns
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.state import Day, GamePhase, Location
from .conftest import ok, set_regrets


class TestPass:
    """Tests for passing."""

    def test_first_pass_takes_fish_coin(self, action_state, reducer):
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        assert state.players[0].has_passed
        assert state.fish_coin_owner == "player-1"
        assert state.pending_passing_reward.player_id == "player-1"
        assert state.pending_passing_reward.is_first_pass

    def test_last_angler_at_sea_gets_two_turns(self, action_state, reducer):
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        assert state.last_player_turns_remaining.player_id == "player-2"
        assert state.last_player_turns_remaining.turns == 2

    def test_last_angler_at_port_gets_four_turns(self, action_state, reducer):
        action_state.players[1].location = Location.PORT

        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        assert state.last_player_turns_remaining.turns == 4

    def test_cannot_pass_twice(self, action_state, reducer):
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))
        state = ok(reducer.apply(state, Action.claim_passing_reward("player-1", "draw_dink")))

        result = reducer.apply(state, Action.pass_turn("player-1"))

        assert not result.success
        assert "passed" in result.error

    def test_reward_must_be_claimed_first(self, action_state, reducer):
        """An owed reward blocks the owner's other actions."""
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        result = reducer.apply(state, Action.simple(ActionType.PLAY_DINK, "player-1", dink_id="DINK-001"))

        assert result.error_code == "PENDING_INPUT"

    def test_out_of_turn(self, action_state, reducer):
        result = reducer.apply(action_state, Action.pass_turn("player-2"))

        assert not result.success
        assert "turn" in result.error.lower()

    def test_solo_pass_ends_day(self, solo_state, reducer):
        """With one angler, passing ends the day."""
        state = ok(reducer.apply(solo_state, Action.pass_turn("player-1")))

        assert state.day is Day.TUESDAY
        assert state.phase is GamePhase.START


class TestPassingReward:
    """Tests for claiming the passing reward."""

    def test_draw_dink(self, action_state, reducer):
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        state = ok(reducer.apply(state, Action.claim_passing_reward("player-1", "draw_dink")))

        assert len(state.players[0].dinks) == 1
        assert state.pending_passing_reward is None

    def test_discard_regret(self, action_state, reducer):
        set_regrets(action_state.players[0], "REG-003")
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        state = ok(reducer.apply(state, Action.claim_passing_reward("player-1", "discard_regret")))

        assert state.players[0].regrets == []

    def test_unknown_choice(self, action_state, reducer):
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))

        result = reducer.apply(state, Action.claim_passing_reward("player-1", "take_a_nap"))

        assert result.error_code == "INVALID_PAYLOAD"

    def test_no_reward_waiting(self, action_state, reducer):
        result = reducer.apply(action_state, Action.claim_passing_reward("player-1", "draw_dink"))

        assert not result.success


class TestTurnOrder:
    """Tests for END_TURN."""

    def test_end_turn_moves_on(self, action_state, reducer):
        action_state.players[0].shop_visits = ["rod"]

        state = ok(reducer.apply(action_state, Action.end_turn()))

        assert state.current_player.id == "player-2"
        assert state.players[0].shop_visits == []

    def test_end_turn_wraps_around(self, three_player_state, reducer):
        state = three_player_state
        for expected in ("player-2", "player-3", "player-1"):
            state = ok(reducer.apply(state, Action.end_turn()))
            assert state.current_player.id == expected

    def test_other_player_cannot_end_turn(self, action_state, reducer):
        result = reducer.apply(action_state, Action.end_turn("player-2"))

        assert not result.success

    def test_skipped_angler_collects_reward(self, action_state, reducer):
        """A passed angler gets a reward each time the turn skips them."""
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))
        state = ok(reducer.apply(state, Action.claim_passing_reward("player-1", "draw_dink")))
        state = ok(reducer.apply(state, Action.end_turn()))
        assert state.current_player.id == "player-2"

        state = ok(reducer.apply(state, Action.end_turn()))

        assert state.current_player.id == "player-2"
        assert state.pending_passing_reward.player_id == "player-1"
        assert not state.pending_passing_reward.is_first_pass

    def test_last_angler_turns_run_out(self, action_state, reducer):
        """When the last angler's turns run out they pass and the day ends."""
        state = ok(reducer.apply(action_state, Action.pass_turn("player-1")))
        state = ok(reducer.apply(state, Action.claim_passing_reward("player-1", "draw_dink")))
        for _ in range(3):
            state = ok(reducer.apply(state, Action.end_turn()))

        assert state.day is Day.TUESDAY
        assert state.phase is GamePhase.START
