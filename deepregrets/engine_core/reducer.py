"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through Reducer.apply() / Reducer.dispatch().

Design principles:
- (state, action) -> ActionResult; the input state is never mutated
- Payloads are shape-validated before dispatch
- Pending-input records gate every action
- Invalid actions are no-ops: the result carries the untouched input state
- Shared cascades (regrets, madness, abilities) live in EffectResolver
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import ValidationError

from ..catalog import get_character, get_tackle_die
from .action import SYSTEM_ACTIONS, SYSTEM_PLAYER, Action, ActionResult, ActionType
from .effect_resolver import (
    EFFECT_DIE_PLUS_ONE,
    EFFECT_DINK_SHOP_DISCOUNT,
    EFFECT_IGNORE_MADNESS,
    EFFECT_PRESERVER_SHOP_DISCOUNT,
    SHOP_CATEGORIES,
    EffectResolver,
    can_auto_catch,
    catch_difficulty,
    descend_threshold,
    upgrade_cost,
)
from .madness import adjusted_value_at, player_tier
from .payloads import LifePreserverUse, LocationChoice, Payload, RewardChoice, parse_payload
from .rng import GameRandom
from .rules import DEFAULT_RULES, RulesConfig
from .scoring import mount_value, regret_value, score_breakdown
from .setup import setup_game
from .state import (
    Day,
    DifficultyReduction,
    GamePhase,
    GameState,
    LastPlayerTurns,
    LifePreserverGift,
    Location,
    MountedFish,
    PassingReward,
    PlayerState,
)

logger = logging.getLogger(__name__)


class GameNotInitializedError(RuntimeError):
    """An action other than INIT_GAME was dispatched against no game."""


# Turn actions: action phase, current player, not yet passed
SEA_ACTIONS = frozenset({
    ActionType.REVEAL_FISH,
    ActionType.DESCEND,
    ActionType.MOVE_DEEPER,
    ActionType.CATCH_FISH,
    ActionType.ABANDON_SHIP,
})
PORT_ACTIONS = frozenset({
    ActionType.SELL_FISH,
    ActionType.MOUNT_FISH,
    ActionType.BUY_UPGRADE,
    ActionType.BUY_TACKLE_DICE,
    ActionType.CYCLE_MARKET,
    ActionType.DRAW_DINK,
    ActionType.DISCARD_REGRET,
    ActionType.DISCARD_RANDOM_REGRET,
    ActionType.ROLL_DICE,
})
TURN_ACTIONS = SEA_ACTIONS | PORT_ACTIONS | frozenset({
    ActionType.EAT_FISH,
    ActionType.USE_CAN_OF_WORMS,
    ActionType.PASS,
})
# Current player during the action phase, passed or not
CURRENT_PLAYER_ACTIONS = frozenset({
    ActionType.PLAY_DINK,
    ActionType.USE_LIFE_PRESERVER,
})
DECLARATION_ACTIONS = frozenset({
    ActionType.DECLARE_LOCATION,
    ActionType.CHANGE_LOCATION,
})

Handler = Callable[[Any, Action, Any], ActionResult]


def _fail(message: str) -> ActionResult:
    return ActionResult.failure(message, error_code="INVALID_ACTION")


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from its injected rules and random source.
    """
    rules: RulesConfig = field(default_factory=lambda: DEFAULT_RULES)
    rng: GameRandom = field(default_factory=GameRandom)

    def __post_init__(self):
        self.effects = EffectResolver(self.rules, self.rng)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def dispatch(self, state: GameState | None, raw: dict[str, Any]) -> ActionResult:
        """
        Apply an action given in external {type, playerId, payload} form.

        Unknown action types are logged and ignored.
        """
        try:
            action = Action.from_dict(raw)
        except ValueError:
            logger.warning("Ignoring unknown action type: %r", raw.get("type"))
            return ActionResult.failure(
                f"Unknown action type: {raw.get('type')}",
                error_code="UNKNOWN_ACTION",
                new_state=state,
            )
        return self.apply(state, action)

    def apply(self, state: GameState | None, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the input state and an
        error when the action does not apply.

        Raises:
            GameNotInitializedError: no state and the action is not INIT_GAME
        """
        if state is None and action.action_type is not ActionType.INIT_GAME:
            raise GameNotInitializedError(
                f"{action.action_type.value} dispatched before INIT_GAME"
            )

        try:
            payload = parse_payload(action.action_type, action.payload)
        except ValidationError as e:
            logger.warning(
                "Dropping %s with malformed payload: %s",
                action.action_type.value, e.errors(include_url=False),
            )
            return ActionResult.failure(
                f"Invalid payload for {action.action_type.value}",
                error_code="INVALID_PAYLOAD",
                new_state=state,
            )

        if state is not None:
            rejection = self._validate_action(state, action)
            if rejection:
                message, code = rejection
                logger.debug("Rejected %s from %s: %s", action.action_type.value, action.player_id, message)
                return ActionResult.failure(message, error_code=code, new_state=state)

        handler = self._get_handler(action.action_type)
        working = state.clone() if state is not None else None

        try:
            result = handler(working, action, payload)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR", new_state=state)

        if not result.success:
            logger.debug("No-op %s from %s: %s", action.action_type.value, action.player_id, result.error)
            return ActionResult.failure(
                result.error or "Action not applicable",
                error_code=result.error_code or "INVALID_ACTION",
                new_state=state,
            )

        new_state: GameState = result.new_state
        self._check_win_condition(new_state, result.state_changes)
        new_state.action_history.append(action.to_dict())
        return result

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action may be attempted in the current state.

        Returns (message, error_code) if not, None if it may proceed.
        """
        action_type = action.action_type
        if action_type in (ActionType.INIT_GAME, ActionType.RESET_GAME):
            return None

        if state.is_game_over:
            return "Game is over - no actions allowed", "GAME_OVER"

        if action.player_id == SYSTEM_PLAYER:
            if action_type not in SYSTEM_ACTIONS:
                return f"{action_type.value} needs a player", "UNKNOWN_PLAYER"
        else:
            player = state.get_player(action.player_id)
            if player is None:
                return f"Unknown player: {action.player_id}", "UNKNOWN_PLAYER"
            pending = self._pending_for(state, player.id)
            if pending is not None and action_type is not pending:
                return f"{player.name} must resolve {pending.value} first", "PENDING_INPUT"

        if action_type is ActionType.NEXT_PHASE:
            if state.pending_dice_removal or state.pending_life_preserver_gift:
                return "Waiting on a pending decision", "PENDING_INPUT"
        if action_type is ActionType.END_TURN and state.pending_dice_removal:
            return "Waiting on a dice removal", "PENDING_INPUT"

        if action_type is ActionType.END_TURN and action.player_id != SYSTEM_PLAYER:
            if state.current_player.id != action.player_id:
                return "Not your turn", "INVALID_ACTION"

        if action_type in DECLARATION_ACTIONS:
            if state.phase is not GamePhase.DECLARATION:
                return "Locations are declared during the declaration phase", "INVALID_ACTION"
            if state.current_player.id != action.player_id:
                return "Not your turn to declare", "INVALID_ACTION"
            if state.current_player.has_passed:
                return "Already declared", "INVALID_ACTION"

        if action_type in TURN_ACTIONS or action_type in CURRENT_PLAYER_ACTIONS:
            if state.phase is not GamePhase.ACTION:
                return f"{action_type.value} is only allowed in the action phase", "INVALID_ACTION"
            if state.current_player.id != action.player_id:
                return "Not your turn", "INVALID_ACTION"
            if action_type in TURN_ACTIONS and state.current_player.has_passed:
                return "You have already passed", "INVALID_ACTION"

        if action_type in SEA_ACTIONS and state.current_player.location is not Location.SEA:
            return f"{action_type.value} requires being at sea", "INVALID_ACTION"
        if action_type in PORT_ACTIONS and state.current_player.location is not Location.PORT:
            return f"{action_type.value} requires being at port", "INVALID_ACTION"

        return None

    def _pending_for(self, state: GameState, player_id: str) -> ActionType | None:
        """The only action a player may take while input is awaited from them."""
        if state.pending_dice_removal and state.pending_dice_removal.player_id == player_id:
            return ActionType.REMOVE_DIE
        if state.pending_life_preserver_gift and state.pending_life_preserver_gift.player_id == player_id:
            return ActionType.GIVE_LIFE_PRESERVER
        if state.pending_passing_reward and state.pending_passing_reward.player_id == player_id:
            return ActionType.CLAIM_PASSING_REWARD
        return None

    def _get_handler(self, action_type: ActionType) -> Handler:
        handlers: dict[ActionType, Handler] = {
            ActionType.INIT_GAME: self._handle_init_game,
            ActionType.RESET_GAME: self._handle_reset_game,
            ActionType.DECLARE_LOCATION: self._handle_declare_location,
            ActionType.CHANGE_LOCATION: self._handle_declare_location,
            ActionType.REVEAL_FISH: self._handle_reveal_fish,
            ActionType.DESCEND: self._handle_descend,
            ActionType.MOVE_DEEPER: self._handle_move_deeper,
            ActionType.CATCH_FISH: self._handle_catch_fish,
            ActionType.EAT_FISH: self._handle_eat_fish,
            ActionType.USE_CAN_OF_WORMS: self._handle_use_can_of_worms,
            ActionType.ABANDON_SHIP: self._handle_abandon_ship,
            ActionType.SELL_FISH: self._handle_sell_fish,
            ActionType.MOUNT_FISH: self._handle_mount_fish,
            ActionType.BUY_UPGRADE: self._handle_buy_upgrade,
            ActionType.BUY_TACKLE_DICE: self._handle_buy_tackle_dice,
            ActionType.CYCLE_MARKET: self._handle_cycle_market,
            ActionType.DRAW_DINK: self._handle_draw_dink,
            ActionType.DISCARD_REGRET: self._handle_discard_regret,
            ActionType.DISCARD_RANDOM_REGRET: self._handle_discard_regret,
            ActionType.ROLL_DICE: self._handle_roll_dice,
            ActionType.PLAY_DINK: self._handle_play_dink,
            ActionType.USE_LIFE_PRESERVER: self._handle_use_life_preserver,
            ActionType.GIVE_LIFE_PRESERVER: self._handle_give_life_preserver,
            ActionType.CLAIM_PASSING_REWARD: self._handle_claim_passing_reward,
            ActionType.REMOVE_DIE: self._handle_remove_die,
            ActionType.PASS: self._handle_pass,
            ActionType.NEXT_PHASE: self._handle_next_phase,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers[action_type]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _handle_init_game(self, state: GameState | None, action: Action, payload: Payload) -> ActionResult:
        try:
            new_state = setup_game(
                list(payload.characters),
                self.rng,
                self.rules,
                names=payload.names,
                ai_players=payload.ai_players,
                game_id=payload.game_id,
            )
        except ValueError as e:
            return _fail(str(e))
        return ActionResult.success_with_state(new_state, changes=["Game started"])

    def _handle_reset_game(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        new_state = setup_game(
            [p.character_id for p in state.players],
            self.rng,
            self.rules,
            names=[p.name for p in state.players],
            ai_players=[p.is_ai for p in state.players],
            game_id=state.game_id,
        )
        return ActionResult.success_with_state(new_state, changes=["Game reset"])

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def _handle_declare_location(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        changes: list[str] = []

        if payload.location is LocationChoice.PORT:
            self.effects.make_port(player)
            changes.append(f"{player.name} makes port")
        else:
            player.location = Location.SEA
            player.current_depth = self._declared_sea_depth(player)
            player.current_shoal = None
            changes.append(f"{player.name} heads to sea (depth {player.current_depth})")
        self.effects.sync_madness(state, player)
        player.has_passed = True

        next_index = self._next_index(state, state.current_player_index, lambda p: not p.has_passed)
        if next_index is None:
            self._enter_action(state, changes)
        else:
            state.current_player_index = next_index
        return ActionResult.success_with_state(state, changes)

    def _declared_sea_depth(self, player: PlayerState) -> int:
        start_depth = get_character(player.character_id).bonus.start_depth
        if player.has_equipment_effect("start_depth_2") or player.has_dink_effect("start_at_depth_2"):
            start_depth = max(start_depth, 2)
        return min(self.rules.max_depth, start_depth)

    # ------------------------------------------------------------------
    # Sea
    # ------------------------------------------------------------------

    def _handle_reveal_fish(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if not player.fresh_dice:
            return _fail("Revealing a fish needs at least one fresh die")
        if payload.depth != player.current_depth:
            return _fail("You can only reveal shoals at your depth")
        stack = state.sea.get_shoal(payload.depth, payload.shoal)
        if not stack:
            return _fail("Nothing to reveal in that shoal")
        if state.sea.is_revealed(payload.depth, payload.shoal):
            return _fail("Shoal is already revealed")

        state.sea.reveal(payload.depth, payload.shoal)
        player.current_shoal = payload.shoal
        return ActionResult.success_with_state(
            state, [f"{player.name} revealed {stack[0].name}"]
        )

    def _handle_descend(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        levels = payload.target_depth - player.current_depth
        if levels <= 0:
            return _fail("Descend target must be deeper than the current depth")
        return self._descend(state, player, levels)

    def _handle_move_deeper(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if player.current_depth >= self.rules.max_depth:
            return _fail("Already at the deepest depth")
        return self._descend(state, player, 1)

    def _descend(self, state: GameState, player: PlayerState, levels: int) -> ActionResult:
        threshold = descend_threshold(player, self.rules)
        qualifying = [i for i, value in enumerate(player.fresh_dice) if value >= threshold]
        if len(qualifying) < levels:
            return _fail(f"Descending {levels} level(s) needs {levels} dice of {threshold}+")

        used = set(qualifying[:levels])
        player.spent_dice.extend(player.fresh_dice[i] for i in sorted(used))
        player.fresh_dice = [v for i, v in enumerate(player.fresh_dice) if i not in used]
        player.current_depth += levels
        player.current_shoal = None
        return ActionResult.success_with_state(
            state, [f"{player.name} descended to depth {player.current_depth}"]
        )

    def _handle_catch_fish(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        sea = state.sea

        if payload.depth != player.current_depth:
            return _fail("You can only fish at your depth")
        stack = sea.get_shoal(payload.depth, payload.shoal)
        if not stack:
            return _fail("That shoal is empty")
        if not sea.is_revealed(payload.depth, payload.shoal):
            return _fail("Reveal the shoal before fishing it")
        fish = stack[0]
        if fish.id != payload.fish_id:
            return _fail("That fish is not on top of the shoal")

        dice_indices = sorted(set(payload.dice_indices))
        if any(i < 0 or i >= len(player.fresh_dice) for i in dice_indices):
            return _fail("Invalid die selection")
        tackle_indices = sorted(set(payload.tackle_dice_indices))
        if any(i < 0 or i >= len(player.tackle_dice) for i in tackle_indices):
            return _fail("Invalid tackle die selection")

        difficulty = catch_difficulty(state, player, fish, self.rules)
        auto_catch = can_auto_catch(player, fish, self.rules)
        plus_one = 1 if dice_indices and EFFECT_DIE_PLUS_ONE in player.active_effects else 0
        tackle_rolls = [self.effects.roll_tackle_die(player.tackle_dice[i]) for i in tackle_indices]
        total = sum(player.fresh_dice[i] for i in dice_indices) + plus_one + sum(tackle_rolls)

        if not auto_catch and (not dice_indices or total < difficulty):
            return self._miss(state, player, fish, total, difficulty)

        changes = [f"{player.name} caught {fish.name} ({total} vs {difficulty})"]
        used = set(dice_indices)
        player.spent_dice.extend(player.fresh_dice[i] for i in dice_indices)
        player.fresh_dice = [v for i, v in enumerate(player.fresh_dice) if i not in used]
        if plus_one:
            player.consume_effect(EFFECT_DIE_PLUS_ONE)
        for i in reversed(tackle_indices):
            state.port.tackle_bag.append(player.tackle_dice.pop(i))

        stack.pop(0)
        sea.hide(payload.depth, payload.shoal)
        player.hand_fish.append(fish)
        player.current_shoal = payload.shoal

        outcome = self.effects.resolve_catch(state, player, fish, payload.depth, payload.shoal)
        changes.extend(outcome.changes)
        if outcome.force_pass and not player.has_passed:
            changes.append(f"{player.name} must pass")
            self._pass(state, player, changes)
        if outcome.sea_emptied:
            changes.append("Every shoal is empty")
            self._end_game(state, changes)
        return ActionResult.success_with_state(state, changes)

    def _miss(self, state: GameState, player: PlayerState, fish, total: int, difficulty: int) -> ActionResult:
        """A failed catch spends the first fresh die and draws a dink."""
        changes = [f"{player.name} missed {fish.name} ({total} vs {difficulty})"]
        if player.fresh_dice:
            player.spent_dice.append(player.fresh_dice.pop(0))
        if self.effects.draw_dink(state, player):
            changes.append(f"{player.name} drew a dink")
        return ActionResult.success_with_state(state, changes)

    def _handle_eat_fish(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        fish = player.find_hand_fish(payload.fish_id)
        if fish is None:
            return _fail("That fish is not in your hand")
        player.hand_fish.remove(fish)
        state.sea.graveyards.setdefault(fish.depth, []).append(fish)
        changes = [f"{player.name} ate {fish.name}"]
        changes.extend(self.effects.resolve_eat(state, player, fish))
        return ActionResult.success_with_state(state, changes)

    def _handle_use_can_of_worms(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if not player.can_of_worms_face_up:
            return _fail("Your Can of Worms is face down")
        if not state.sea.get_shoal(payload.depth, payload.shoal):
            return _fail("Nothing to peek at in that shoal")
        state.sea.reveal(payload.depth, payload.shoal)
        player.can_of_worms_face_up = False
        return ActionResult.success_with_state(
            state, [f"{player.name} opened the Can of Worms on shoal {payload.depth}-{payload.shoal}"]
        )

    def _handle_abandon_ship(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if not player.has_equipment_effect("port_from_sea"):
            return _fail("Abandoning ship needs a Lifeboat")
        if player.abandon_ship_used:
            return _fail("Already abandoned ship today")
        player.abandon_ship_used = True
        self.effects.make_port(player)
        self.effects.sync_madness(state, player)
        return ActionResult.success_with_state(state, [f"{player.name} abandoned ship and made port"])

    # ------------------------------------------------------------------
    # Port
    # ------------------------------------------------------------------

    def _handle_sell_fish(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        fish = player.find_hand_fish(payload.fish_id)
        if fish is None:
            return _fail("That fish is not in your hand")

        value = adjusted_value_at(fish, player_tier(player))
        value += self.rules.sell_bonus_per_hook * player.count_dink_effect("sell_bonus_1")
        player.hand_fish.remove(fish)
        state.sea.graveyards.setdefault(fish.depth, []).append(fish)
        gained = self.effects.credit_fishbucks(player, value)

        changes = [f"{player.name} sold {fish.name} for ${gained}"]
        if fish.is_foul:
            changes.extend(self.effects.draw_regrets(state, player, 1))
        return ActionResult.success_with_state(state, changes)

    def _handle_mount_fish(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if payload.slot >= player.max_mount_slots:
            return _fail("No such mounting slot")
        if player.mount_in_slot(payload.slot) is not None:
            return _fail("That slot is already occupied")
        fish = player.find_hand_fish(payload.fish_id)
        if fish is None:
            return _fail("That fish is not in your hand")

        player.hand_fish.remove(fish)
        player.mounted_fish.append(MountedFish(slot=payload.slot, multiplier=payload.slot + 1, fish=fish))
        return ActionResult.success_with_state(
            state, [f"{player.name} mounted {fish.name} (x{payload.slot + 1})"]
        )

    def _handle_buy_upgrade(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        port = state.port
        upgrade = next(
            (u for display in port.shops.values() for u in display if u.id == payload.upgrade_id),
            None,
        )
        if upgrade is None:
            return _fail("That upgrade is not for sale")
        if upgrade.type in player.shop_visits:
            return _fail(f"Already visited the {upgrade.type} shop this turn")

        cost, consumed = upgrade_cost(player, upgrade.cost, self.rules)
        if player.fishbucks < cost:
            return _fail(f"{upgrade.name} costs ${cost}")

        player.fishbucks -= cost
        for effect in consumed:
            player.consume_effect(effect)

        if upgrade.type == "rod":
            if player.equipped_rod is not None:
                port.shop_pools.setdefault("rod", []).append(player.equipped_rod)
            player.equipped_rod = upgrade
        elif upgrade.type == "reel":
            if player.equipped_reel is not None:
                port.shop_pools.setdefault("reel", []).append(player.equipped_reel)
            player.equipped_reel = upgrade
        else:
            player.supplies.append(upgrade)

        for category in SHOP_CATEGORIES:
            port.shops[category] = [u for u in port.shops.get(category, []) if u.id != upgrade.id]
            port.shop_pools[category] = [u for u in port.shop_pools.get(category, []) if u.id != upgrade.id]
            self.effects.refill_shop(port, category)
        player.shop_visits.append(upgrade.type)
        self.effects.sync_madness(state, player)
        return ActionResult.success_with_state(state, [f"{player.name} bought {upgrade.name} for ${cost}"])

    def _handle_buy_tackle_dice(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        port = state.port
        if "tackle_dice" in player.shop_visits:
            return _fail("Already visited the tackle shop this turn")
        try:
            color = get_tackle_die(payload.die_id).color
        except KeyError:
            return _fail(f"Unknown tackle die: {payload.die_id}")

        spent = 0
        for unit in range(payload.count):
            index = next(
                (i for i, die_id in enumerate(port.tackle_market) if get_tackle_die(die_id).color == color),
                None,
            )
            if index is None:
                return _fail(f"No {color} tackle dice left in the market")
            die_id = port.tackle_market.pop(index)
            price = get_tackle_die(die_id).cost
            if unit == 0 and player.consume_effect(EFFECT_PRESERVER_SHOP_DISCOUNT):
                price = max(0, price - self.rules.life_preserver_shop_discount)
            if player.fishbucks < price:
                return _fail("Not enough fishbucks for the tackle dice")
            player.fishbucks -= price
            spent += price
            player.tackle_dice.append(die_id)
            self.effects.refill_tackle_market(port)

        player.shop_visits.append("tackle_dice")
        return ActionResult.success_with_state(
            state, [f"{player.name} bought {payload.count} {color} tackle dice for ${spent}"]
        )

    def _handle_cycle_market(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        port = state.port
        if player.fishbucks < self.rules.cycle_market_cost:
            return _fail("Not enough fishbucks to cycle the market")
        player.fishbucks -= self.rules.cycle_market_cost
        port.tackle_bag = self.rng.shuffle(port.tackle_bag + port.tackle_market)
        port.tackle_market = []
        self.effects.refill_tackle_market(port)
        return ActionResult.success_with_state(state, [f"{player.name} cycled the tackle market"])

    def _handle_draw_dink(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if self.effects.draw_dink(state, player) is None:
            return _fail("The dink deck is empty")
        return ActionResult.success_with_state(state, [f"{player.name} drew a dink"])

    def _handle_discard_regret(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if "regret" in player.shop_visits:
            return _fail("Already discarded a regret this turn")
        regret_id = getattr(payload, "regret_id", None)
        card = self.effects.discard_regret(state, player, regret_id)
        if card is None:
            return _fail("No such regret to discard")
        player.shop_visits.append("regret")
        return ActionResult.success_with_state(state, [f"{player.name} discarded a regret"])

    def _handle_roll_dice(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if "reroll" in player.shop_visits:
            return _fail("Already rerolled this turn")
        if not player.fresh_dice:
            return _fail("No fresh dice to roll")
        player.fresh_dice = self.effects.roll_dice(player, len(player.fresh_dice))
        player.shop_visits.append("reroll")
        return ActionResult.success_with_state(state, [f"{player.name} rerolled {player.fresh_dice}"])

    # ------------------------------------------------------------------
    # Dinks and the life preserver
    # ------------------------------------------------------------------

    def _handle_play_dink(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        dink = next((d for d in player.dinks if d.id == payload.dink_id), None)
        if dink is None:
            return _fail("That dink is not in your hand")
        if not dink.one_shot:
            return _fail(f"{dink.name} works passively")

        changes = [f"{player.name} played {dink.name}"]
        for effect in dink.effects:
            error = self._apply_dink_effect(state, player, effect, payload, changes)
            if error:
                return _fail(error)

        player.dinks.remove(dink)
        state.port.dinks_discard.append(dink)
        return ActionResult.success_with_state(state, changes)

    def _apply_dink_effect(
        self,
        state: GameState,
        player: PlayerState,
        effect: str,
        payload: Payload,
        changes: list[str],
    ) -> str | None:
        if effect == "gain_1_fishbuck":
            self.effects.credit_fishbucks(player, 1)
        elif effect == "ready_spent_die":
            if not player.spent_dice or len(player.fresh_dice) >= player.max_dice:
                return "No spent die can be readied"
            player.fresh_dice.append(player.spent_dice.pop(0))
        elif effect == "convert_one_to_six":
            if not player.fresh_dice:
                return "No fresh die to turn"
            lowest = player.fresh_dice.index(min(player.fresh_dice))
            player.fresh_dice[lowest] = 6
        elif effect == "reroll_failed_catch":
            if not player.spent_dice or len(player.fresh_dice) >= player.max_dice:
                return "No spent die to reroll"
            player.spent_dice.pop()
            player.fresh_dice.extend(self.effects.roll_dice(player, 1))
        elif effect == "peek_shoal_top":
            if player.location is not Location.SEA:
                return "Peeking needs you at sea"
            shoal = payload.shoal if payload.shoal is not None else (player.current_shoal or 0)
            if not state.sea.get_shoal(player.current_depth, shoal):
                return "Nothing to peek at"
            state.sea.reveal(player.current_depth, shoal)
        elif effect == "+1_die_value_once":
            player.active_effects.append(EFFECT_DIE_PLUS_ONE)
        elif effect == "ignore_madness_increase":
            player.active_effects.append(EFFECT_IGNORE_MADNESS)
        elif effect == "shop_discount":
            if player.location is not Location.PORT:
                return "Shop discounts are played at port"
            player.active_effects.append(EFFECT_DINK_SHOP_DISCOUNT)
        else:
            return f"Unplayable dink effect: {effect}"
        changes.append(effect)
        return None

    def _handle_use_life_preserver(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        if state.life_preserver_owner != player.id:
            return _fail("You do not hold the life preserver")

        use = payload.resolved_use
        if use is LifePreserverUse.REDUCE_FISH_DIFFICULTY:
            if player.location is not Location.SEA:
                return _fail("Difficulty reduction is used at sea")
            state.life_preserver_difficulty_reduction = DifficultyReduction(
                player_id=player.id, amount=self.rules.life_preserver_difficulty_reduction
            )
            state.life_preserver_owner = None
            return ActionResult.success_with_state(state, [f"{player.name} threw the life preserver at a fish"])

        if use is LifePreserverUse.REDUCE_SHOP_COST:
            if player.location is not Location.PORT:
                return _fail("Shop discount is used at port")
            player.active_effects.append(EFFECT_PRESERVER_SHOP_DISCOUNT)
            state.life_preserver_owner = None
            return ActionResult.success_with_state(state, [f"{player.name} bartered with the life preserver"])

        if player.lifeboat_flipped:
            return _fail("Lifeboat already flipped")
        player.lifeboat_flipped = True
        changes = [f"{player.name} flipped the lifeboat"]
        if self.effects.discard_regret(state, player):
            changes.append(f"{player.name} discarded a regret")
        return ActionResult.success_with_state(state, changes)

    def _handle_give_life_preserver(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        gift = state.pending_life_preserver_gift
        if gift is None or gift.player_id != action.player_id:
            return _fail("No life preserver to give")
        target = state.get_player(payload.target_player_id)
        if target is None or target.id == action.player_id:
            return _fail("The life preserver must go to another angler")
        state.life_preserver_owner = target.id
        state.pending_life_preserver_gift = None
        return ActionResult.success_with_state(state, [f"Life preserver handed to {target.name}"])

    # ------------------------------------------------------------------
    # Awaited input
    # ------------------------------------------------------------------

    def _handle_claim_passing_reward(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        reward = state.pending_passing_reward
        if reward is None or reward.player_id != action.player_id:
            return _fail("No passing reward waiting")
        player = state.get_player(action.player_id)
        changes: list[str] = []
        if payload.choice is RewardChoice.DRAW_DINK:
            if self.effects.draw_dink(state, player):
                changes.append(f"{player.name} drew a dink")
        elif self.effects.discard_regret(state, player):
            changes.append(f"{player.name} discarded a random regret")
        state.pending_passing_reward = None
        self._promote_skipped_reward(state)
        return ActionResult.success_with_state(state, changes)

    def _handle_remove_die(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        pending = state.pending_dice_removal
        if pending is None or pending.player_id != action.player_id:
            return _fail("No dice removal waiting")
        player = state.get_player(action.player_id)
        if payload.die_index >= len(player.fresh_dice):
            return _fail("Invalid die selection")
        player.spent_dice.append(player.fresh_dice.pop(payload.die_index))
        pending.count -= 1
        if pending.count <= 0 or len(player.fresh_dice) <= player.max_dice:
            state.pending_dice_removal = None
        return ActionResult.success_with_state(state, [f"{player.name} set aside a die"])

    # ------------------------------------------------------------------
    # Passing and turns
    # ------------------------------------------------------------------

    def _handle_pass(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        player = state.get_player(action.player_id)
        changes: list[str] = []
        self._pass(state, player, changes)
        return ActionResult.success_with_state(state, changes)

    def _pass(self, state: GameState, player: PlayerState, changes: list[str]) -> None:
        first_to_pass = not any(p.has_passed for p in state.players)
        player.has_passed = True
        player.shop_visits = []
        changes.append(f"{player.name} passed")

        if first_to_pass:
            state.fish_coin_owner = player.id
            changes.append(f"{player.name} takes the fish coin")
            if state.pending_passing_reward is None:
                state.pending_passing_reward = PassingReward(player_id=player.id, is_first_pass=True)
            else:
                state.pending_skipped_rewards.append(player.id)

        active = state.active_players()
        if len(active) == 1 and state.num_players > 1:
            last = active[0]
            turns = (
                self.rules.last_player_turns_at_sea
                if last.location is Location.SEA
                else self.rules.last_player_turns_at_port
            )
            state.last_player_turns_remaining = LastPlayerTurns(player_id=last.id, turns=turns)
            changes.append(f"{last.name} has {turns} turns left")
        elif not active:
            state.last_player_turns_remaining = None
            self._end_day(state, changes)

    def _handle_end_turn(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        if state.phase is not GamePhase.ACTION:
            return _fail("Turns only advance during the action phase")
        current = state.current_player
        current.shop_visits = []
        changes = [f"{current.name} ended their turn"]

        budget = state.last_player_turns_remaining
        if budget is not None and budget.player_id == current.id and not current.has_passed:
            budget.turns -= 1
            if budget.turns <= 0:
                state.last_player_turns_remaining = None
                self._pass(state, current, changes)

        if state.phase is GamePhase.ACTION and not state.is_game_over:
            self._advance_turn(state)
        return ActionResult.success_with_state(state, changes)

    def _advance_turn(self, state: GameState) -> None:
        """Move to the next unpassed angler, queueing rewards for those skipped."""
        if all(p.has_passed for p in state.players):
            return
        n = state.num_players
        index = state.current_player_index
        for _ in range(n):
            index = (index + 1) % n
            candidate = state.players[index]
            if not candidate.has_passed:
                break
            state.pending_skipped_rewards.append(candidate.id)
        state.current_player_index = index
        self._promote_skipped_reward(state)

    def _promote_skipped_reward(self, state: GameState) -> None:
        if state.pending_passing_reward is None and state.pending_skipped_rewards:
            player_id = state.pending_skipped_rewards.pop(0)
            state.pending_passing_reward = PassingReward(player_id=player_id, is_first_pass=False)

    def _next_index(
        self, state: GameState, start: int, predicate: Callable[[PlayerState], bool]
    ) -> int | None:
        n = state.num_players
        for offset in range(1, n + 1):
            index = (start + offset) % n
            if predicate(state.players[index]):
                return index
        return None

    # ------------------------------------------------------------------
    # Phases and days
    # ------------------------------------------------------------------

    def _handle_next_phase(self, state: GameState, action: Action, payload: Payload) -> ActionResult:
        changes: list[str] = []
        if state.phase is GamePhase.START:
            self._enter_refresh(state, changes)
        elif state.phase is GamePhase.REFRESH:
            self._enter_declaration(state, changes)
        elif state.phase is GamePhase.DECLARATION:
            return _fail("Waiting for every angler to declare")
        elif state.phase is GamePhase.ACTION:
            if not all(p.has_passed for p in state.players):
                return _fail("Not every angler has passed")
            self._end_day(state, changes)
        else:
            return _fail("The game has ended")
        return ActionResult.success_with_state(state, changes)

    def _enter_refresh(self, state: GameState, changes: list[str]) -> None:
        state.phase = GamePhase.REFRESH
        for player in state.players:
            if player.location is Location.SEA and player.current_depth > 1:
                player.current_depth -= 1
                player.current_shoal = None
            self.effects.sync_madness(state, player)
            self.effects.reroll_pool(player)

        if state.num_players >= 2:
            n = state.num_players
            best_index, best_sum = state.first_player_index, -1
            for offset in range(n):
                index = (state.first_player_index + offset) % n
                total = sum(state.players[index].fresh_dice)
                if total > best_sum:
                    best_index, best_sum = index, total
            winner = state.players[best_index]
            state.life_preserver_owner = winner.id
            state.pending_life_preserver_gift = LifePreserverGift(player_id=winner.id)
            changes.append(f"{winner.name} rolled highest ({best_sum}) and must give away the life preserver")
        logger.info("Refresh phase, %s", state.day.value)

    def _enter_declaration(self, state: GameState, changes: list[str]) -> None:
        state.phase = GamePhase.DECLARATION
        for player in state.players:
            player.location = Location.SEA
            player.current_depth = 1
            player.current_shoal = None
            player.has_passed = False
        state.current_player_index = state.first_player_index
        changes.append("Declare your destinations")
        logger.info("Declaration phase, %s", state.day.value)

    def _enter_action(self, state: GameState, changes: list[str]) -> None:
        state.phase = GamePhase.ACTION
        for player in state.players:
            player.has_passed = False
            player.shop_visits = []
        state.last_player_turns_remaining = None
        state.current_player_index = state.first_player_index
        changes.append("Action phase begins")
        logger.info("Action phase, %s", state.day.value)

    def _end_day(self, state: GameState, changes: list[str]) -> None:
        if state.day.is_last:
            self._end_game(state, changes)
            return
        state.day = state.day.next()
        state.phase = GamePhase.START
        changes.append(f"A new day dawns: {state.day.value.title()}")
        logger.info("Day advanced to %s", state.day.value)
        self._start_new_day(state, changes)

    def _start_new_day(self, state: GameState, changes: list[str]) -> None:
        sea = state.sea
        sea.revealed_shoals.clear()

        if sea.plug_active:
            eroded = self.effects.erode_plug(state)
            if eroded is not None:
                changes.append(f"The Plug washed away {eroded.name}")
            if sea.all_empty():
                changes.append("The sea has drained")
                self._end_game(state, changes)
                return

        self.effects.rotate_shops(state.port)

        for player in state.players:
            player.has_passed = False
            player.safety_net_used = False
            player.abandon_ship_used = False
            player.shop_visits = []
            if state.day in (Day.WEDNESDAY, Day.FRIDAY):
                player.can_of_worms_face_up = True
            if state.day in (Day.THURSDAY, Day.SATURDAY):
                die_id = self.effects.grant_free_tackle_die(state, player)
                if die_id:
                    changes.append(f"{player.name} found a {get_tackle_die(die_id).color} tackle die")

        coin_index = state.player_index(state.fish_coin_owner) if state.fish_coin_owner else -1
        if coin_index >= 0:
            state.first_player_index = coin_index
        else:
            state.first_player_index = (state.first_player_index + 1) % state.num_players
        state.current_player_index = state.first_player_index
        state.last_player_turns_remaining = None

    # ------------------------------------------------------------------
    # End of game
    # ------------------------------------------------------------------

    def _check_win_condition(self, state: GameState, changes: list[str]) -> None:
        if state.is_game_over:
            return
        if (
            state.day.is_last
            and state.phase is GamePhase.START
            and state.players
            and all(p.has_passed for p in state.players)
        ):
            self._end_game(state, changes)

    def _end_game(self, state: GameState, changes: list[str]) -> None:
        """
        Resolve final scoring.

        The angler with the highest regret value (ties: turn order) forfeits
        a mount: the lowest-value one in a two-player game, otherwise the
        highest. Winner by total, then lower regret value, then fewer regrets.
        """
        if state.is_game_over:
            return

        penalized: PlayerState | None = None
        for player in state.players:
            if penalized is None or regret_value(player, self.rules) > regret_value(penalized, self.rules):
                penalized = player

        forfeited = 0
        if penalized is not None and penalized.mounted_fish:
            valued = [(mount_value(penalized, m), m) for m in penalized.mounted_fish]
            if state.num_players == 2:
                forfeited, mount = min(valued, key=lambda pair: pair[0])
            else:
                forfeited, mount = max(valued, key=lambda pair: pair[0])
            penalized.mounted_fish.remove(mount)
            state.sea.graveyards.setdefault(mount.fish.depth, []).append(mount.fish)
            changes.append(f"{penalized.name} forfeits {mount.fish.name} ({forfeited} points)")

        final_scores = []
        for player in state.players:
            breakdown = score_breakdown(player, self.rules)
            if penalized is not None and player.id == penalized.id:
                breakdown.forfeited = forfeited
            final_scores.append(breakdown)

        ranking = sorted(
            range(state.num_players),
            key=lambda i: (
                -final_scores[i].total,
                final_scores[i].regret_value,
                final_scores[i].regret_count,
                i,
            ),
        )
        winner = state.players[ranking[0]] if ranking else None

        state.final_scores = final_scores
        state.is_game_over = True
        state.phase = GamePhase.ENDGAME
        state.winner = winner.name if winner else None
        changes.append(f"Game over. {state.winner} wins")
        logger.info("Game %s over, winner %s", state.game_id, state.winner)


def apply_action(
    state: GameState | None,
    action: Action,
    rng: GameRandom | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a reducer and applies the action.
    """
    reducer = Reducer(rules=rules, rng=rng or GameRandom())
    return reducer.apply(state, action)
