"""
Game State - The single aggregate the reducer owns.

Design principles:
- One GameState per game, passed explicitly (no module singletons)
- Serializable: every field, pending records included, round-trips
- Cards are referenced by their immutable catalog definitions
- Derived fields (madness level, max dice) are written only by madness.py
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..catalog import DinkCard, FishCard, RegretCard, UpgradeCard


class GamePhase(Enum):
    """Daily phase cycle; ENDGAME is terminal."""
    START = "start"
    REFRESH = "refresh"
    DECLARATION = "declaration"
    ACTION = "action"
    ENDGAME = "endgame"


class Day(Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @property
    def is_last(self) -> bool:
        return self is Day.SATURDAY

    def next(self) -> Day:
        days = list(Day)
        return days[min(days.index(self) + 1, len(days) - 1)]


class Location(Enum):
    SEA = "sea"
    PORT = "port"


@dataclass
class MountedFish:
    """A trophy on the wall. Slot i has multiplier i + 1."""
    slot: int
    multiplier: int
    fish: FishCard


@dataclass
class PlayerState:
    """
    State for a single angler.

    Mutated only by reducer handlers acting for this player
    (or by shared effects such as regret theft).
    """
    id: str
    name: str
    character_id: str
    is_ai: bool = False

    # Location
    location: Location = Location.SEA
    current_depth: int = 1
    current_shoal: int | None = None

    # Dice economy
    fresh_dice: list[int] = field(default_factory=list)
    spent_dice: list[int] = field(default_factory=list)
    tackle_dice: list[str] = field(default_factory=list)
    max_dice: int = 4
    base_max_dice: int = 3

    # Progression
    fishbucks: int = 0
    hand_fish: list[FishCard] = field(default_factory=list)
    mounted_fish: list[MountedFish] = field(default_factory=list)
    regrets: list[RegretCard] = field(default_factory=list)
    madness_level: int = 0
    madness_offset: int = 0

    # Equipment and trinkets
    equipped_rod: UpgradeCard | None = None
    equipped_reel: UpgradeCard | None = None
    supplies: list[UpgradeCard] = field(default_factory=list)
    dinks: list[DinkCard] = field(default_factory=list)
    active_effects: list[str] = field(default_factory=list)

    # Character rules
    regret_shields: int = 0
    reroll_ones: bool = False
    max_mount_slots: int = 3

    # Turn/day flags
    has_passed: bool = False
    lifeboat_flipped: bool = False
    can_of_worms_face_up: bool = False
    shop_visits: list[str] = field(default_factory=list)
    safety_net_used: bool = False
    abandon_ship_used: bool = False

    @property
    def equipment(self) -> list[UpgradeCard]:
        items = [u for u in (self.equipped_rod, self.equipped_reel) if u is not None]
        return items + list(self.supplies)

    def has_equipment_effect(self, effect: str) -> bool:
        return any(effect in item.effects for item in self.equipment)

    def count_equipment_effect(self, effect: str) -> int:
        return sum(item.effects.count(effect) for item in self.equipment)

    def has_dink_effect(self, effect: str) -> bool:
        return any(effect in dink.effects for dink in self.dinks)

    def count_dink_effect(self, effect: str) -> int:
        return sum(dink.effects.count(effect) for dink in self.dinks)

    def has_supply(self, supply_id: str) -> bool:
        return any(s.id == supply_id for s in self.supplies)

    def mount_in_slot(self, slot: int) -> MountedFish | None:
        for mount in self.mounted_fish:
            if mount.slot == slot:
                return mount
        return None

    def find_hand_fish(self, fish_id: str) -> FishCard | None:
        for fish in self.hand_fish:
            if fish.id == fish_id:
                return fish
        return None

    def consume_effect(self, effect: str) -> bool:
        """Remove one occurrence of an active effect. True if it was present."""
        if effect in self.active_effects:
            self.active_effects.remove(effect)
            return True
        return False

    @property
    def total_dice(self) -> int:
        return len(self.fresh_dice) + len(self.spent_dice)


@dataclass
class SeaState:
    """
    The three depths of shoals.

    Shoal stacks keep the interactable fish at index 0.
    """
    shoals: dict[int, list[list[FishCard]]] = field(default_factory=dict)
    graveyards: dict[int, list[FishCard]] = field(default_factory=dict)
    revealed_shoals: set[str] = field(default_factory=set)
    plug_active: bool = False
    plug_cursor_depth: int = 1
    plug_cursor_shoal: int = 0

    @staticmethod
    def shoal_key(depth: int, shoal: int) -> str:
        return f"{depth}-{shoal}"

    def get_shoal(self, depth: int, shoal: int) -> list[FishCard] | None:
        stacks = self.shoals.get(depth)
        if stacks is None or shoal < 0 or shoal >= len(stacks):
            return None
        return stacks[shoal]

    def top_fish(self, depth: int, shoal: int) -> FishCard | None:
        stack = self.get_shoal(depth, shoal)
        return stack[0] if stack else None

    def is_revealed(self, depth: int, shoal: int) -> bool:
        return self.shoal_key(depth, shoal) in self.revealed_shoals

    def reveal(self, depth: int, shoal: int) -> None:
        self.revealed_shoals.add(self.shoal_key(depth, shoal))

    def hide(self, depth: int, shoal: int) -> None:
        self.revealed_shoals.discard(self.shoal_key(depth, shoal))

    def all_empty(self) -> bool:
        return all(not stack for stacks in self.shoals.values() for stack in stacks)

    def fish_remaining(self) -> int:
        return sum(len(stack) for stacks in self.shoals.values() for stack in stacks)


@dataclass
class PortState:
    """Shops, tackle market and the shared decks."""
    shops: dict[str, list[UpgradeCard]] = field(default_factory=dict)
    shop_pools: dict[str, list[UpgradeCard]] = field(default_factory=dict)
    tackle_market: list[str] = field(default_factory=list)
    tackle_bag: list[str] = field(default_factory=list)
    dinks_deck: list[DinkCard] = field(default_factory=list)
    dinks_discard: list[DinkCard] = field(default_factory=list)
    regrets_deck: list[RegretCard] = field(default_factory=list)
    regrets_discard: list[RegretCard] = field(default_factory=list)


# ============================================================================
# Awaiting-input records
# ============================================================================

@dataclass
class DiceRemoval:
    """Player must move `count` fresh dice to spent (over their cap)."""
    player_id: str
    count: int


@dataclass
class LifePreserverGift:
    """Player won the life preserver roll and must hand it to someone else."""
    player_id: str


@dataclass
class PassingReward:
    """Player chooses: draw a dink, or discard a random regret."""
    player_id: str
    is_first_pass: bool = False


@dataclass
class LastPlayerTurns:
    player_id: str
    turns: int


@dataclass
class DifficultyReduction:
    """Life preserver bonus waiting for the player's next catch."""
    player_id: str
    amount: int


@dataclass
class ScoreBreakdown:
    player_id: str
    hand_fish: int = 0
    mounted_fish: int = 0
    fishbucks: int = 0
    regret_value: int = 0
    regret_count: int = 0
    total: int = 0
    forfeited: int = 0


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    All changes go through the reducer.
    """
    game_id: str = "game"
    players: list[PlayerState] = field(default_factory=list)
    current_player_index: int = 0
    first_player_index: int = 0
    day: Day = Day.MONDAY
    phase: GamePhase = GamePhase.START

    sea: SeaState = field(default_factory=SeaState)
    port: PortState = field(default_factory=PortState)

    # Singleton tokens
    life_preserver_owner: str | None = None
    fish_coin_owner: str | None = None

    # Awaiting-input records
    pending_dice_removal: DiceRemoval | None = None
    pending_life_preserver_gift: LifePreserverGift | None = None
    pending_passing_reward: PassingReward | None = None
    pending_skipped_rewards: list[str] = field(default_factory=list)
    last_player_turns_remaining: LastPlayerTurns | None = None
    life_preserver_difficulty_reduction: DifficultyReduction | None = None

    # Outcome
    is_game_over: bool = False
    winner: str | None = None
    final_scores: list[ScoreBreakdown] = field(default_factory=list)

    # History of successfully applied actions (external dict form)
    action_history: list[dict[str, Any]] = field(default_factory=list)
    seed: int | None = None

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: str) -> PlayerState | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int:
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i
        return -1

    def active_players(self) -> list[PlayerState]:
        return [p for p in self.players if not p.has_passed]

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
