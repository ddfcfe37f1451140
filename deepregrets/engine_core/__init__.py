"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Sets up a GameState from the catalog
2. Generates candidate actions
3. Applies actions via the reducer
4. Resolves regrets, madness and fish abilities
5. Scores the endgame
"""

from .state import GameState, PlayerState, SeaState, PortState, GamePhase, Day, Location
from .action import Action, ActionType, ActionResult, SYSTEM_PLAYER
from .reducer import Reducer, GameNotInitializedError, apply_action
from .action_generator import ActionGenerator, legal_actions
from .effect_resolver import EffectResolver
from .rng import GameRandom
from .rules import RulesConfig, DEFAULT_RULES
from .setup import setup_game
from .snapshot import dump_state, load_state, state_to_json, state_from_json

__all__ = [
    "GameState",
    "PlayerState",
    "SeaState",
    "PortState",
    "GamePhase",
    "Day",
    "Location",
    "Action",
    "ActionType",
    "ActionResult",
    "SYSTEM_PLAYER",
    "Reducer",
    "GameNotInitializedError",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "EffectResolver",
    "GameRandom",
    "RulesConfig",
    "DEFAULT_RULES",
    "setup_game",
    "dump_state",
    "load_state",
    "state_to_json",
    "state_from_json",
]
