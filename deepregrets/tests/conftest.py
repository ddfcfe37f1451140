"""
Pytest fixtures for Deep Regrets tests.
"""

import pytest

from ..catalog import get_fish, get_regret
from ..engine_core.action import Action, ActionResult
from ..engine_core.madness import recalculate_madness
from ..engine_core.reducer import Reducer
from ..engine_core.rng import GameRandom
from ..engine_core.state import GamePhase, GameState, Location, PlayerState


SARDINE = "FISH-D1-SARDINE-001"  # value 1, difficulty 1, fair, small
HERRING = "FISH-D1-HERRING-006"  # value 1, difficulty 0, fair, small
COD = "FISH-D1-COD-005"  # value 3, difficulty 3, fair, large
HALIBUT = "FISH-D1-HALIBUT-013"  # value 3, difficulty 4, fair, large
MEDUSA = "FISH-D2-JELLYFISH-009"  # value 5, difficulty 2, foul, madness +1
CUTTLEFISH = "FISH-D2-CUTTLEFISH-011"  # value 6, difficulty 3, foul, draws a regret
MANTA = "FISH-D2-MANTA-004"  # value 6, difficulty 3, fair
SHARK = "FISH-D2-SHARK-002"  # value 8, difficulty 4, foul, discards a small fish
OCTOPUS = "FISH-D2-OCTOPUS-003"  # value 10, difficulty 5, foul, unreducible


# ============================================================================
# Helpers
# ============================================================================

def ok(result: ActionResult) -> GameState:
    """Unwrap a successful result."""
    assert result.success, result.error
    return result.new_state


def reset_player(player: PlayerState) -> None:
    """Strip captain bonuses and randomness so a test controls everything."""
    player.location = Location.SEA
    player.current_depth = 1
    player.current_shoal = None
    player.fresh_dice = []
    player.spent_dice = []
    player.tackle_dice = []
    player.fishbucks = 3
    player.hand_fish = []
    player.mounted_fish = []
    player.regrets = []
    player.madness_offset = 0
    player.equipped_rod = None
    player.equipped_reel = None
    player.supplies = []
    player.dinks = []
    player.active_effects = []
    player.regret_shields = 0
    player.reroll_ones = False
    player.base_max_dice = 3
    player.max_mount_slots = 3
    player.has_passed = False
    player.shop_visits = []
    recalculate_madness(player)


def set_regrets(player: PlayerState, *regret_ids: str) -> None:
    player.regrets = [get_regret(r) for r in regret_ids]
    recalculate_madness(player)


def place_fish(state: GameState, depth: int, shoal: int, *fish_ids: str, revealed: bool = True) -> None:
    """Replace one shoal's stack (top first)."""
    state.sea.shoals[depth][shoal] = [get_fish(f) for f in fish_ids]
    if revealed:
        state.sea.reveal(depth, shoal)
    else:
        state.sea.hide(depth, shoal)


def empty_sea(state: GameState) -> None:
    for depth, stacks in state.sea.shoals.items():
        for shoal in range(len(stacks)):
            stacks[shoal] = []
    state.sea.revealed_shoals.clear()


def to_action_phase(state: GameState) -> GameState:
    state.phase = GamePhase.ACTION
    state.current_player_index = 0
    state.first_player_index = 0
    state.life_preserver_owner = None
    state.pending_life_preserver_gift = None
    state.pending_passing_reward = None
    state.pending_dice_removal = None
    for player in state.players:
        reset_player(player)
    return state


def pass_everyone(reducer: Reducer, state: GameState) -> GameState:
    """Pass every angler in turn order until the day (or game) ends."""
    while not state.is_game_over and state.phase is GamePhase.ACTION:
        reward = state.pending_passing_reward
        if reward is not None:
            state = ok(reducer.apply(state, Action.claim_passing_reward(reward.player_id, "draw_dink")))
            continue
        current = state.current_player
        if current.has_passed:
            state = ok(reducer.apply(state, Action.end_turn()))
        else:
            state = ok(reducer.apply(state, Action.pass_turn(current.id)))
    return state


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def reducer() -> Reducer:
    """Reducer with a seeded random source."""
    return Reducer(rng=GameRandom(42))


@pytest.fixture
def new_game(reducer: Reducer) -> GameState:
    """A fresh two-player game (Hugo and Alba) on Monday morning."""
    return ok(reducer.apply(None, Action.init_game(["hugo", "alba"])))


@pytest.fixture
def action_state(new_game: GameState) -> GameState:
    """
    Two anglers in the action phase, both at sea on depth 1.

    Player-1 is up. Nobody holds dice, fish, regrets or equipment.
    """
    return to_action_phase(new_game.clone())


@pytest.fixture
def port_state(action_state: GameState) -> GameState:
    """Like action_state, but player-1 has made port."""
    action_state.players[0].location = Location.PORT
    return action_state


@pytest.fixture
def three_player_state(reducer: Reducer) -> GameState:
    state = ok(reducer.apply(None, Action.init_game(["hugo", "alba", "bert"])))
    return to_action_phase(state)


@pytest.fixture
def solo_state(reducer: Reducer) -> GameState:
    state = ok(reducer.apply(None, Action.init_game(["isla"])))
    return to_action_phase(state)
