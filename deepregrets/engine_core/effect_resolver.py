"""
Effect Resolver - Cascading effects shared by reducer handlers.

This module handles the effects several actions trigger in common:
- Regret drawing (shields, rod reduction, safety net, deck, theft)
- Madness recalculation and the dice-cap follow-up
- Dice rolling (reroll-ones) and making port
- Dink draws, fishbuck credit
- Fish ability resolution on catch and on eating
- Plug erosion and shop/market refills

Everything here mutates the working copy the reducer hands in; the
reducer owns copying and rollback.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..catalog import (
    DinkCard,
    DiscardTagged,
    DrawDinks,
    DrawRegrets,
    EatDiscardRegret,
    EatReadyDie,
    FishCard,
    ForcePass,
    MadnessAdjust,
    RegretCard,
    StartErosion,
    get_tackle_die,
)
from .madness import player_tier, recalculate_madness
from .rng import GameRandom
from .rules import RulesConfig
from .state import DiceRemoval, GameState, Location, PlayerState, PortState

logger = logging.getLogger(__name__)

SHOP_CATEGORIES = ("rod", "reel", "supply")

# Active effect flags (consumed by later actions)
EFFECT_DIE_PLUS_ONE = "die_plus_one"
EFFECT_IGNORE_MADNESS = "ignore_madness_increase"
EFFECT_DINK_SHOP_DISCOUNT = "shop_discount"
EFFECT_PRESERVER_SHOP_DISCOUNT = "life_preserver_shop_discount"


def descend_threshold(player: PlayerState, rules: RulesConfig) -> int:
    """Minimum die value that pays for one level of descent."""
    reductions = player.count_equipment_effect("descend_cost_-1") + player.count_dink_effect("descend_cost_-1")
    return max(rules.descend_threshold_floor, rules.descend_threshold - reductions)


def is_unreducible(fish: FishCard, rules: RulesConfig) -> bool:
    """Eels, octopuses and krakens always need their printed difficulty."""
    lowered = fish.name.lower()
    return any(word in lowered for word in rules.unreducible_fish_names)


def catch_difficulty(state: GameState, player: PlayerState, fish: FishCard, rules: RulesConfig) -> int:
    """Difficulty after a pending life preserver reduction for this player."""
    reduction = state.life_preserver_difficulty_reduction
    if reduction is None or reduction.player_id != player.id or is_unreducible(fish, rules):
        return fish.difficulty
    return max(0, fish.difficulty - reduction.amount)


def can_auto_catch(player: PlayerState, fish: FishCard, rules: RulesConfig) -> bool:
    return (
        player.has_equipment_effect("auto_catch_difficulty_3")
        and fish.difficulty <= rules.auto_catch_max_difficulty
        and not is_unreducible(fish, rules)
    )


def upgrade_cost(player: PlayerState, list_price: int, rules: RulesConfig) -> tuple[int, list[str]]:
    """Effective shop price and the one-shot discount effects it would consume."""
    discount = 0
    consumed: list[str] = []
    if player_tier(player).port_discount:
        discount += rules.port_discount
    if EFFECT_PRESERVER_SHOP_DISCOUNT in player.active_effects:
        discount += rules.life_preserver_shop_discount
        consumed.append(EFFECT_PRESERVER_SHOP_DISCOUNT)
    if EFFECT_DINK_SHOP_DISCOUNT in player.active_effects:
        discount += rules.dink_shop_discount
        consumed.append(EFFECT_DINK_SHOP_DISCOUNT)
    return max(0, list_price - discount), consumed


@dataclass
class CatchOutcome:
    """What resolving a successful catch set in motion."""
    changes: list[str] = field(default_factory=list)
    force_pass: bool = False
    sea_emptied: bool = False


@dataclass
class EffectResolver:
    """
    Resolves shared effects against a working GameState.

    Holds no game state of its own.
    """
    rules: RulesConfig
    rng: GameRandom

    # ------------------------------------------------------------------
    # Economy
    # ------------------------------------------------------------------

    def credit_fishbucks(self, player: PlayerState, amount: int) -> int:
        """Add fishbucks up to the cap; overflow is lost. Returns amount kept."""
        before = player.fishbucks
        player.fishbucks = min(self.rules.fishbucks_cap, player.fishbucks + max(0, amount))
        return player.fishbucks - before

    # ------------------------------------------------------------------
    # Madness
    # ------------------------------------------------------------------

    def sync_madness(self, state: GameState, player: PlayerState) -> None:
        """
        Recalculate derived madness fields and police the dice cap.

        Excess fresh dice open a removal request for the player; if another
        player already holds the request, the excess is spent directly.
        """
        recalculate_madness(player, self.rules)
        excess = len(player.fresh_dice) - player.max_dice
        pending = state.pending_dice_removal

        if excess <= 0:
            if pending is not None and pending.player_id == player.id:
                state.pending_dice_removal = None
            return

        if pending is None or pending.player_id == player.id:
            state.pending_dice_removal = DiceRemoval(player_id=player.id, count=excess)
        else:
            for _ in range(excess):
                player.spent_dice.append(player.fresh_dice.pop())

    def adjust_madness(self, state: GameState, player: PlayerState, amount: int) -> str:
        """Shift the madness offset. Increases can be blocked."""
        if amount > 0:
            if player.has_equipment_effect("madness_immune"):
                return f"{player.name} is immune to madness"
            if player.consume_effect(EFFECT_IGNORE_MADNESS):
                return f"{player.name} ignored a madness increase"
        player.madness_offset += amount
        self.sync_madness(state, player)
        return f"{player.name} madness {amount:+d}"

    # ------------------------------------------------------------------
    # Regrets
    # ------------------------------------------------------------------

    def draw_regrets(self, state: GameState, player: PlayerState, count: int = 1) -> list[str]:
        """
        Draw regrets for one trigger.

        Each draw is negated by, in order: a regret shield, the rod's
        once-per-trigger reduction, the once-per-day safety net. Otherwise a
        card comes off the deck, or is stolen when no cards are left.
        """
        changes: list[str] = []
        affected = {player.id}
        rod_reduction = player.has_equipment_effect("reduce_regrets_1")

        for _ in range(count):
            if player.regret_shields > 0:
                player.regret_shields -= 1
                changes.append(f"{player.name}'s regret shield absorbed a regret")
                continue
            if rod_reduction:
                rod_reduction = False
                changes.append(f"{player.name}'s rod warded off a regret")
                continue
            if player.has_equipment_effect("prevent_regret_1_per_day") and not player.safety_net_used:
                player.safety_net_used = True
                changes.append(f"{player.name}'s safety net caught a regret")
                continue

            card, victim = self._take_regret_card(state, player)
            if card is None:
                changes.append("No regrets left to draw")
                continue
            player.regrets.append(card)
            if victim is not None:
                affected.add(victim.id)
                changes.append(f"{player.name} took a regret from {victim.name}")
            else:
                changes.append(f"{player.name} drew a regret")

        for target in state.players:
            if target.id in affected:
                self.sync_madness(state, target)
        return changes

    def _take_regret_card(
        self, state: GameState, player: PlayerState
    ) -> tuple[RegretCard | None, PlayerState | None]:
        port = state.port
        if not port.regrets_deck and port.regrets_discard:
            port.regrets_deck = self.rng.shuffle(port.regrets_discard)
            port.regrets_discard = []
        if port.regrets_deck:
            return port.regrets_deck.pop(0), None

        victim = None
        for other in state.players:
            if other.id == player.id or not other.regrets:
                continue
            if victim is None or len(other.regrets) > len(victim.regrets):
                victim = other
        if victim is None:
            return None, None
        card = victim.regrets.pop(self.rng.index(len(victim.regrets)))
        return card, victim

    def discard_regret(
        self, state: GameState, player: PlayerState, regret_id: str | None = None
    ) -> RegretCard | None:
        """Discard a named regret, or a random one when no id is given."""
        if not player.regrets:
            return None
        if regret_id is None:
            card = player.regrets.pop(self.rng.index(len(player.regrets)))
        else:
            index = next((i for i, r in enumerate(player.regrets) if r.id == regret_id), None)
            if index is None:
                return None
            card = player.regrets.pop(index)
        state.port.regrets_discard.append(card)
        self.sync_madness(state, player)
        return card

    # ------------------------------------------------------------------
    # Dice
    # ------------------------------------------------------------------

    def roll_dice(self, player: PlayerState, count: int) -> list[int]:
        values = self.rng.roll(count)
        if player.reroll_ones or player.has_equipment_effect("reroll_1s"):
            values = [self.rng.roll(1)[0] if v == 1 else v for v in values]
        return values

    def reroll_pool(self, player: PlayerState) -> None:
        """Re-roll the whole pool; dice beyond the cap land spent."""
        pool = max(player.total_dice, player.max_dice)
        values = self.roll_dice(player, pool)
        player.fresh_dice = values[:player.max_dice]
        player.spent_dice = values[player.max_dice:]

    def make_port(self, player: PlayerState) -> None:
        """Arrive at port with its free benefits."""
        player.location = Location.PORT
        player.current_shoal = None
        player.can_of_worms_face_up = True
        self.reroll_pool(player)

    def roll_tackle_die(self, die_id: str) -> int:
        return self.rng.roll_face(get_tackle_die(die_id).faces)

    # ------------------------------------------------------------------
    # Dinks
    # ------------------------------------------------------------------

    def draw_dink(self, state: GameState, player: PlayerState) -> DinkCard | None:
        port = state.port
        if not port.dinks_deck and port.dinks_discard:
            port.dinks_deck = self.rng.shuffle(port.dinks_discard)
            port.dinks_discard = []
        if not port.dinks_deck:
            return None
        card = port.dinks_deck.pop(0)
        player.dinks.append(card)
        return card

    # ------------------------------------------------------------------
    # Fish abilities
    # ------------------------------------------------------------------

    def resolve_catch(
        self,
        state: GameState,
        player: PlayerState,
        fish: FishCard,
        depth: int,
        shoal: int,
    ) -> CatchOutcome:
        """
        Resolve everything a successful catch triggers, in rules order:
        overfishing, ability effects, reel dink, madness, preserver bonus.
        """
        outcome = CatchOutcome()

        stack = state.sea.get_shoal(depth, shoal)
        if stack is not None and not stack:
            outcome.changes.append(f"{player.name} overfished shoal {depth}-{shoal}")
            outcome.changes.extend(self.draw_regrets(state, player, 1))
            outcome.sea_emptied = state.sea.all_empty()

        madness_shifts: list[int] = []
        for ability in fish.effects:
            if isinstance(ability, DrawRegrets):
                outcome.changes.extend(self.draw_regrets(state, player, ability.count))
            elif isinstance(ability, DrawDinks):
                for _ in range(ability.count):
                    if self.draw_dink(state, player):
                        outcome.changes.append(f"{player.name} drew a dink")
            elif isinstance(ability, DiscardTagged):
                change = self._discard_tagged(state, player, fish, ability.tag)
                if change:
                    outcome.changes.append(change)
            elif isinstance(ability, StartErosion):
                state.sea.plug_active = True
                outcome.changes.append("The Plug has been pulled; the shoals begin to erode")
            elif isinstance(ability, ForcePass):
                outcome.force_pass = True
            elif isinstance(ability, MadnessAdjust):
                madness_shifts.append(ability.amount)

        if player.has_equipment_effect("draw_dink_on_catch"):
            if self.draw_dink(state, player):
                outcome.changes.append(f"{player.name}'s reel hooked a dink")

        for amount in madness_shifts:
            outcome.changes.append(self.adjust_madness(state, player, amount))

        reduction = state.life_preserver_difficulty_reduction
        if reduction is not None and reduction.player_id == player.id:
            state.life_preserver_difficulty_reduction = None

        return outcome

    def _discard_tagged(
        self, state: GameState, player: PlayerState, caught: FishCard, tag: str
    ) -> str | None:
        if player.has_equipment_effect("ignore_shark_penalty"):
            return f"{player.name}'s harpoon kept the {tag} fish safe"
        caught_index = len(player.hand_fish) - 1
        for i, fish in enumerate(player.hand_fish):
            if i != caught_index and tag in fish.tags:
                player.hand_fish.pop(i)
                state.sea.graveyards.setdefault(fish.depth, []).append(fish)
                return f"{player.name} lost {fish.name}"
        return None

    def resolve_eat(self, state: GameState, player: PlayerState, fish: FishCard) -> list[str]:
        """Eating a fish: its eat abilities, or by default ready one spent die."""
        changes: list[str] = []
        eat_effects = [a for a in fish.effects if isinstance(a, (EatReadyDie, EatDiscardRegret))]
        if not eat_effects:
            eat_effects = [EatReadyDie()]
        for ability in eat_effects:
            if isinstance(ability, EatReadyDie):
                if player.spent_dice and len(player.fresh_dice) < player.max_dice:
                    player.fresh_dice.append(player.spent_dice.pop(0))
                    changes.append(f"{player.name} readied a die")
            elif isinstance(ability, EatDiscardRegret):
                if self.discard_regret(state, player):
                    changes.append(f"{player.name} discarded a regret")
        return changes

    # ------------------------------------------------------------------
    # Sea upkeep
    # ------------------------------------------------------------------

    def erode_plug(self, state: GameState) -> FishCard | None:
        """Wash the next non-empty shoal's top fish into its graveyard."""
        sea = state.sea
        positions = [
            (depth, shoal)
            for depth in sorted(sea.shoals)
            for shoal in range(len(sea.shoals[depth]))
        ]
        if not positions:
            return None
        try:
            start = positions.index((sea.plug_cursor_depth, sea.plug_cursor_shoal))
        except ValueError:
            start = 0

        for offset in range(len(positions)):
            depth, shoal = positions[(start + offset) % len(positions)]
            stack = sea.shoals[depth][shoal]
            if not stack:
                continue
            fish = stack.pop(0)
            sea.graveyards.setdefault(depth, []).append(fish)
            sea.hide(depth, shoal)
            sea.plug_cursor_depth, sea.plug_cursor_shoal = positions[
                (start + offset + 1) % len(positions)
            ]
            logger.info("Plug erosion washed away %s from shoal %s-%s", fish.name, depth, shoal)
            return fish
        return None

    # ------------------------------------------------------------------
    # Port upkeep
    # ------------------------------------------------------------------

    def refill_shop(self, port: PortState, category: str) -> None:
        display = port.shops.setdefault(category, [])
        pool = port.shop_pools.setdefault(category, [])
        while len(display) < self.rules.shop_display_size and pool:
            display.append(pool.pop(0))

    def rotate_shops(self, port: PortState) -> None:
        """The oldest card of each display goes under its pool."""
        for category in SHOP_CATEGORIES:
            display = port.shops.setdefault(category, [])
            if display:
                port.shop_pools.setdefault(category, []).append(display.pop(0))
            self.refill_shop(port, category)

    def refill_tackle_market(self, port: PortState) -> None:
        while len(port.tackle_market) < self.rules.tackle_market_size and port.tackle_bag:
            port.tackle_market.append(port.tackle_bag.pop(0))

    def grant_free_tackle_die(self, state: GameState, player: PlayerState) -> str | None:
        """Give a blue or orange die from the bag, else a green one."""
        bag = state.port.tackle_bag
        if not bag:
            return None
        preferred = [i for i, die_id in enumerate(bag) if get_tackle_die(die_id).color != "green"]
        die_id = bag.pop(preferred[0] if preferred else 0)
        player.tackle_dice.append(die_id)
        return die_id
