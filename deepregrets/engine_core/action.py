"""
Action System - Actions and results.

Actions represent:
1. Player decisions (declare, fish, trade, pass)
2. Follow-up input the engine is waiting on (gifts, rewards, dice removal)
3. System actions (init, reset, next phase, end turn)

All state changes flow through actions. The external shape is the
tagged dict {type, playerId, payload}; Action is its internal form.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SYSTEM_PLAYER = "system"


class ActionType(Enum):
    """Types of actions in the system."""
    # Game lifecycle
    INIT_GAME = "INIT_GAME"
    RESET_GAME = "RESET_GAME"

    # Declaration
    DECLARE_LOCATION = "DECLARE_LOCATION"
    CHANGE_LOCATION = "CHANGE_LOCATION"

    # Sea
    REVEAL_FISH = "REVEAL_FISH"
    DESCEND = "DESCEND"
    MOVE_DEEPER = "MOVE_DEEPER"
    CATCH_FISH = "CATCH_FISH"
    EAT_FISH = "EAT_FISH"
    USE_CAN_OF_WORMS = "USE_CAN_OF_WORMS"
    ABANDON_SHIP = "ABANDON_SHIP"

    # Port
    SELL_FISH = "SELL_FISH"
    MOUNT_FISH = "MOUNT_FISH"
    BUY_UPGRADE = "BUY_UPGRADE"
    BUY_TACKLE_DICE = "BUY_TACKLE_DICE"
    CYCLE_MARKET = "CYCLE_MARKET"
    DRAW_DINK = "DRAW_DINK"
    DISCARD_REGRET = "DISCARD_REGRET"
    DISCARD_RANDOM_REGRET = "DISCARD_RANDOM_REGRET"
    ROLL_DICE = "ROLL_DICE"

    # Tokens and trinkets
    PLAY_DINK = "PLAY_DINK"
    USE_LIFE_PRESERVER = "USE_LIFE_PRESERVER"
    GIVE_LIFE_PRESERVER = "GIVE_LIFE_PRESERVER"

    # Awaited input
    CLAIM_PASSING_REWARD = "CLAIM_PASSING_REWARD"
    REMOVE_DIE = "REMOVE_DIE"

    # Flow
    PASS = "PASS"
    NEXT_PHASE = "NEXT_PHASE"
    END_TURN = "END_TURN"


# Actions a "system" actor may dispatch
SYSTEM_ACTIONS = frozenset({
    ActionType.INIT_GAME,
    ActionType.RESET_GAME,
    ActionType.NEXT_PHASE,
    ActionType.END_TURN,
})


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Payloads stay as plain dicts here; the reducer validates them against
    the per-type schema in payloads.py before dispatch.
    """
    action_type: ActionType
    player_id: str = SYSTEM_PLAYER
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Action:
        """
        Build from the external {type, playerId, payload} form.

        Raises ValueError for an unknown type.
        """
        action_type = ActionType(raw.get("type"))
        player_id = raw.get("playerId", raw.get("player_id", SYSTEM_PLAYER))
        return cls(
            action_type=action_type,
            player_id=player_id,
            payload=dict(raw.get("payload") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.action_type.value,
            "playerId": self.player_id,
            "payload": dict(self.payload),
        }

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def init_game(cls, characters: list[str], names: list[str] | None = None,
                  ai_players: list[bool] | None = None) -> Action:
        payload: dict[str, Any] = {"characters": characters}
        if names is not None:
            payload["names"] = names
        if ai_players is not None:
            payload["ai_players"] = ai_players
        return cls(ActionType.INIT_GAME, SYSTEM_PLAYER, payload)

    @classmethod
    def reset_game(cls) -> Action:
        return cls(ActionType.RESET_GAME)

    @classmethod
    def next_phase(cls) -> Action:
        return cls(ActionType.NEXT_PHASE)

    @classmethod
    def end_turn(cls, player_id: str = SYSTEM_PLAYER) -> Action:
        return cls(ActionType.END_TURN, player_id)

    @classmethod
    def declare(cls, player_id: str, location: str) -> Action:
        return cls(ActionType.DECLARE_LOCATION, player_id, {"location": location})

    @classmethod
    def reveal(cls, player_id: str, depth: int, shoal: int) -> Action:
        return cls(ActionType.REVEAL_FISH, player_id, {"depth": depth, "shoal": shoal})

    @classmethod
    def descend(cls, player_id: str, target_depth: int) -> Action:
        return cls(ActionType.DESCEND, player_id, {"target_depth": target_depth})

    @classmethod
    def move_deeper(cls, player_id: str) -> Action:
        return cls(ActionType.MOVE_DEEPER, player_id)

    @classmethod
    def catch(
        cls,
        player_id: str,
        fish_id: str,
        depth: int,
        shoal: int,
        dice_indices: list[int],
        tackle_dice_indices: list[int] | None = None,
    ) -> Action:
        return cls(ActionType.CATCH_FISH, player_id, {
            "fish_id": fish_id,
            "depth": depth,
            "shoal": shoal,
            "dice_indices": dice_indices,
            "tackle_dice_indices": tackle_dice_indices or [],
        })

    @classmethod
    def sell(cls, player_id: str, fish_id: str) -> Action:
        return cls(ActionType.SELL_FISH, player_id, {"fish_id": fish_id})

    @classmethod
    def mount(cls, player_id: str, fish_id: str, slot: int) -> Action:
        return cls(ActionType.MOUNT_FISH, player_id, {"fish_id": fish_id, "slot": slot})

    @classmethod
    def buy_upgrade(cls, player_id: str, upgrade_id: str) -> Action:
        return cls(ActionType.BUY_UPGRADE, player_id, {"upgrade_id": upgrade_id})

    @classmethod
    def buy_tackle_dice(cls, player_id: str, die_id: str, count: int = 1) -> Action:
        return cls(ActionType.BUY_TACKLE_DICE, player_id, {"die_id": die_id, "count": count})

    @classmethod
    def pass_turn(cls, player_id: str) -> Action:
        return cls(ActionType.PASS, player_id)

    @classmethod
    def use_life_preserver(cls, player_id: str, use_type: str | None = None) -> Action:
        payload = {"use_type": use_type} if use_type else {}
        return cls(ActionType.USE_LIFE_PRESERVER, player_id, payload)

    @classmethod
    def give_life_preserver(cls, player_id: str, target_player_id: str) -> Action:
        return cls(ActionType.GIVE_LIFE_PRESERVER, player_id,
                   {"target_player_id": target_player_id})

    @classmethod
    def claim_passing_reward(cls, player_id: str, choice: str) -> Action:
        return cls(ActionType.CLAIM_PASSING_REWARD, player_id, {"choice": choice})

    @classmethod
    def remove_die(cls, player_id: str, die_index: int) -> Action:
        return cls(ActionType.REMOVE_DIE, player_id, {"die_index": die_index})

    @classmethod
    def simple(cls, action_type: ActionType, player_id: str, **payload: Any) -> Action:
        """Factory for actions whose payload is just keyword fields."""
        return cls(action_type, player_id, dict(payload))


@dataclass
class ActionResult:
    """
    Result of applying an action.

    On failure `new_state` is the untouched input state, so callers can
    always continue from `result.new_state`.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # Human-readable changes (for UI/logs)
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        new_state: Any | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, new_state=new_state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
