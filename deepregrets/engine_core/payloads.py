"""
Action Payloads - One pydantic schema per action type.

The reducer validates every payload against its schema before dispatch;
a payload that fails shape validation is logged and dropped, so handlers
only ever see typed, complete parameters.

Both snake_case and camelCase keys are accepted (`fish_id` / `fishId`).
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .action import ActionType


# =============================================================================
# Enums
# =============================================================================

class LocationChoice(str, Enum):
    SEA = "sea"
    PORT = "port"


class LifePreserverUse(str, Enum):
    """How a life preserver is spent."""
    REDUCE_FISH_DIFFICULTY = "reduce_fish_difficulty"
    REDUCE_SHOP_COST = "reduce_shop_cost"
    FLIP_LIFEBOAT = "flip_lifeboat"


class RewardChoice(str, Enum):
    DRAW_DINK = "draw_dink"
    DISCARD_REGRET = "discard_regret"


# =============================================================================
# Base
# =============================================================================

class Payload(BaseModel):
    """Base payload: camelCase aliases, unknown keys ignored, immutable."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }


class EmptyPayload(Payload):
    pass


# =============================================================================
# Lifecycle
# =============================================================================

class InitGamePayload(Payload):
    characters: list[str] = Field(min_length=1, max_length=5)
    names: Optional[list[str]] = None
    ai_players: Optional[list[bool]] = None
    game_id: Optional[str] = None


# =============================================================================
# Declaration / sea
# =============================================================================

class DeclareLocationPayload(Payload):
    location: LocationChoice


class ShoalTargetPayload(Payload):
    depth: int = Field(ge=1, le=3)
    shoal: int = Field(ge=0)


class DescendPayload(Payload):
    target_depth: int = Field(ge=1, le=3)


class CatchFishPayload(Payload):
    fish_id: str
    depth: int = Field(ge=1, le=3)
    shoal: int = Field(ge=0)
    dice_indices: list[int] = Field(default_factory=list)
    tackle_dice_indices: list[int] = Field(default_factory=list)


class FishPayload(Payload):
    """Actions naming one fish from the hand (sell, eat)."""
    fish_id: str


# =============================================================================
# Port
# =============================================================================

class MountFishPayload(Payload):
    fish_id: str
    slot: int = Field(ge=0)


class BuyUpgradePayload(Payload):
    upgrade_id: str


class BuyTackleDicePayload(Payload):
    die_id: str
    count: int = Field(default=1, ge=1)


class DiscardRegretPayload(Payload):
    regret_id: str


# =============================================================================
# Tokens, trinkets, awaited input
# =============================================================================

class PlayDinkPayload(Payload):
    dink_id: str
    depth: Optional[int] = Field(default=None, ge=1, le=3)
    shoal: Optional[int] = Field(default=None, ge=0)


class UseLifePreserverPayload(Payload):
    use_type: Optional[LifePreserverUse] = None

    @property
    def resolved_use(self) -> LifePreserverUse:
        """An absent use type means the lifeboat flip."""
        return self.use_type or LifePreserverUse.FLIP_LIFEBOAT


class GiveLifePreserverPayload(Payload):
    target_player_id: str


class ClaimPassingRewardPayload(Payload):
    choice: RewardChoice


class RemoveDiePayload(Payload):
    die_index: int = Field(ge=0)


PAYLOAD_MODELS: dict[ActionType, type[Payload]] = {
    ActionType.INIT_GAME: InitGamePayload,
    ActionType.RESET_GAME: EmptyPayload,
    ActionType.DECLARE_LOCATION: DeclareLocationPayload,
    ActionType.CHANGE_LOCATION: DeclareLocationPayload,
    ActionType.REVEAL_FISH: ShoalTargetPayload,
    ActionType.DESCEND: DescendPayload,
    ActionType.MOVE_DEEPER: EmptyPayload,
    ActionType.CATCH_FISH: CatchFishPayload,
    ActionType.EAT_FISH: FishPayload,
    ActionType.USE_CAN_OF_WORMS: ShoalTargetPayload,
    ActionType.ABANDON_SHIP: EmptyPayload,
    ActionType.SELL_FISH: FishPayload,
    ActionType.MOUNT_FISH: MountFishPayload,
    ActionType.BUY_UPGRADE: BuyUpgradePayload,
    ActionType.BUY_TACKLE_DICE: BuyTackleDicePayload,
    ActionType.CYCLE_MARKET: EmptyPayload,
    ActionType.DRAW_DINK: EmptyPayload,
    ActionType.DISCARD_REGRET: DiscardRegretPayload,
    ActionType.DISCARD_RANDOM_REGRET: EmptyPayload,
    ActionType.ROLL_DICE: EmptyPayload,
    ActionType.PLAY_DINK: PlayDinkPayload,
    ActionType.USE_LIFE_PRESERVER: UseLifePreserverPayload,
    ActionType.GIVE_LIFE_PRESERVER: GiveLifePreserverPayload,
    ActionType.CLAIM_PASSING_REWARD: ClaimPassingRewardPayload,
    ActionType.REMOVE_DIE: RemoveDiePayload,
    ActionType.PASS: EmptyPayload,
    ActionType.NEXT_PHASE: EmptyPayload,
    ActionType.END_TURN: EmptyPayload,
}


def parse_payload(action_type: ActionType, payload: dict[str, Any] | None) -> Payload:
    """
    Validate a raw payload for the given action type.

    Raises pydantic.ValidationError on a malformed payload.
    """
    model = PAYLOAD_MODELS[action_type]
    return model.model_validate(payload or {})
