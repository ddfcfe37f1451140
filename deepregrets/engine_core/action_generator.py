"""
Action Generator - Enumerates candidate legal actions for a player.

The action generator is used by:
1. Bots to enumerate possible moves
2. The CLI to show what an angler may do
3. Tests (is this action among the legal ones?)

Catch actions are generated with one dice selection per fish: the fewest
highest dice that beat the difficulty. Every generated action passes the
reducer's validation; handlers may still reject some (e.g. a tackle die the
angler cannot afford), so callers fall back to PASS.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..catalog import get_tackle_die
from .action import SYSTEM_PLAYER, Action, ActionType
from .effect_resolver import (
    EFFECT_DIE_PLUS_ONE,
    can_auto_catch,
    catch_difficulty,
    descend_threshold,
    upgrade_cost,
)
from .rules import DEFAULT_RULES, RulesConfig
from .state import GamePhase, GameState, Location, PlayerState


def pick_catch_dice(fresh_dice: list[int], difficulty: int, bonus: int = 0) -> list[int] | None:
    """
    Indices of the fewest, highest fresh dice whose sum (+bonus) meets the
    difficulty. None if even every die falls short.
    """
    order = sorted(range(len(fresh_dice)), key=lambda i: -fresh_dice[i])
    chosen: list[int] = []
    total = bonus
    for i in order:
        chosen.append(i)
        total += fresh_dice[i]
        if total >= difficulty:
            return sorted(chosen)
    return None


@dataclass
class ActionGenerator:
    """Generates candidate actions against the current game state."""
    rules: RulesConfig = field(default_factory=lambda: DEFAULT_RULES)

    def generate(self, state: GameState, player_id: str) -> list[Action]:
        """
        Generate the actions a player may attempt now.

        Returns an empty list when nothing is expected of the player.
        """
        if state.is_game_over:
            return []
        player = state.get_player(player_id)
        if player is None:
            return []

        awaited = self._generate_awaited(state, player)
        if awaited is not None:
            return awaited

        if state.phase is GamePhase.DECLARATION:
            if state.current_player.id == player.id and not player.has_passed:
                return [Action.declare(player.id, "sea"), Action.declare(player.id, "port")]
            return []

        if state.phase is not GamePhase.ACTION or state.current_player.id != player.id:
            return []

        actions: list[Action] = []
        if not player.has_passed:
            if player.location is Location.SEA:
                actions.extend(self._generate_sea_actions(state, player))
            else:
                actions.extend(self._generate_port_actions(state, player))
            for fish in player.hand_fish:
                actions.append(Action.simple(ActionType.EAT_FISH, player.id, fish_id=fish.id))
        actions.extend(self._generate_token_actions(state, player))
        if not player.has_passed:
            actions.append(Action.pass_turn(player.id))
        return actions

    def generate_system(self, state: GameState) -> list[Action]:
        """The system action that moves the game on, if any."""
        if state.is_game_over or state.pending_dice_removal or state.pending_life_preserver_gift:
            return []
        if state.phase in (GamePhase.START, GamePhase.REFRESH):
            return [Action.next_phase()]
        if state.phase is GamePhase.ACTION:
            if all(p.has_passed for p in state.players):
                return [Action.next_phase()]
            return [Action.end_turn(SYSTEM_PLAYER)]
        return []

    # ------------------------------------------------------------------
    # Awaited input
    # ------------------------------------------------------------------

    def _generate_awaited(self, state: GameState, player: PlayerState) -> list[Action] | None:
        removal = state.pending_dice_removal
        if removal is not None and removal.player_id == player.id:
            return [Action.remove_die(player.id, i) for i in range(len(player.fresh_dice))]

        gift = state.pending_life_preserver_gift
        if gift is not None and gift.player_id == player.id:
            return [
                Action.give_life_preserver(player.id, other.id)
                for other in state.players
                if other.id != player.id
            ]

        reward = state.pending_passing_reward
        if reward is not None and reward.player_id == player.id:
            choices = [Action.claim_passing_reward(player.id, "draw_dink")]
            if player.regrets:
                choices.append(Action.claim_passing_reward(player.id, "discard_regret"))
            return choices
        return None

    # ------------------------------------------------------------------
    # Sea
    # ------------------------------------------------------------------

    def _generate_sea_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        actions: list[Action] = []
        depth = player.current_depth
        sea = state.sea

        for shoal, stack in enumerate(sea.shoals.get(depth, [])):
            if not stack:
                continue
            if not sea.is_revealed(depth, shoal):
                if player.fresh_dice:
                    actions.append(Action.reveal(player.id, depth, shoal))
                continue
            fish = stack[0]
            if can_auto_catch(player, fish, self.rules):
                actions.append(Action.catch(player.id, fish.id, depth, shoal, []))
                continue
            bonus = 1 if EFFECT_DIE_PLUS_ONE in player.active_effects else 0
            indices = pick_catch_dice(player.fresh_dice, catch_difficulty(state, player, fish, self.rules), bonus)
            if indices:
                actions.append(Action.catch(player.id, fish.id, depth, shoal, indices))

        if depth < self.rules.max_depth:
            threshold = descend_threshold(player, self.rules)
            qualifying = sum(1 for v in player.fresh_dice if v >= threshold)
            for target in range(depth + 1, self.rules.max_depth + 1):
                if qualifying >= target - depth:
                    actions.append(Action.descend(player.id, target))

        if player.can_of_worms_face_up:
            for shoal, stack in enumerate(sea.shoals.get(depth, [])):
                if stack and not sea.is_revealed(depth, shoal):
                    actions.append(Action.simple(ActionType.USE_CAN_OF_WORMS, player.id, depth=depth, shoal=shoal))

        if player.has_equipment_effect("port_from_sea") and not player.abandon_ship_used:
            actions.append(Action.simple(ActionType.ABANDON_SHIP, player.id))
        return actions

    # ------------------------------------------------------------------
    # Port
    # ------------------------------------------------------------------

    def _generate_port_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        actions: list[Action] = []
        port = state.port

        for fish in player.hand_fish:
            actions.append(Action.sell(player.id, fish.id))
            for slot in range(player.max_mount_slots):
                if player.mount_in_slot(slot) is None:
                    actions.append(Action.mount(player.id, fish.id, slot))
                    break

        for category, display in port.shops.items():
            if category in player.shop_visits:
                continue
            for upgrade in display:
                if upgrade_cost(player, upgrade.cost, self.rules)[0] <= player.fishbucks:
                    actions.append(Action.buy_upgrade(player.id, upgrade.id))

        if "tackle_dice" not in player.shop_visits:
            seen_colors: set[str] = set()
            for die_id in port.tackle_market:
                color = get_tackle_die(die_id).color
                if color not in seen_colors:
                    seen_colors.add(color)
                    actions.append(Action.buy_tackle_dice(player.id, die_id))

        if player.fishbucks >= self.rules.cycle_market_cost and (port.tackle_market or port.tackle_bag):
            actions.append(Action.simple(ActionType.CYCLE_MARKET, player.id))
        if port.dinks_deck or port.dinks_discard:
            actions.append(Action.simple(ActionType.DRAW_DINK, player.id))
        if player.regrets and "regret" not in player.shop_visits:
            actions.append(Action.simple(ActionType.DISCARD_RANDOM_REGRET, player.id))
            for regret in player.regrets:
                actions.append(Action.simple(ActionType.DISCARD_REGRET, player.id, regret_id=regret.id))
        if player.fresh_dice and "reroll" not in player.shop_visits:
            actions.append(Action.simple(ActionType.ROLL_DICE, player.id))
        return actions

    # ------------------------------------------------------------------
    # Dinks and the life preserver
    # ------------------------------------------------------------------

    def _generate_token_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        actions: list[Action] = []
        for dink in player.dinks:
            if dink.one_shot:
                actions.append(Action.simple(ActionType.PLAY_DINK, player.id, dink_id=dink.id))

        if state.life_preserver_owner == player.id:
            if player.location is Location.SEA:
                actions.append(Action.use_life_preserver(player.id, "reduce_fish_difficulty"))
            else:
                actions.append(Action.use_life_preserver(player.id, "reduce_shop_cost"))
            if not player.lifeboat_flipped:
                actions.append(Action.use_life_preserver(player.id, "flip_lifeboat"))
        return actions


def legal_actions(state: GameState, player_id: str, rules: RulesConfig = DEFAULT_RULES) -> list[Action]:
    """Convenience wrapper around ActionGenerator.generate()."""
    return ActionGenerator(rules).generate(state, player_id)
