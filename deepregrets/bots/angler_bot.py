"""
Angler Bot - Rule-of-thumb automa for Deep Regrets.

The bot:
- Resolves anything the engine is waiting on from it first
- Declares sea or port by comparing heuristic values (with noise)
- At sea: reveals, then catches, descends, or passes
- At port: discards regrets, rerolls, mounts, sells, shops, then passes

Decisions are advisory: the bot returns an action and never touches
the state. All randomness comes from the injected GameRandom.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.action import Action, ActionType
from ..engine_core.effect_resolver import SHOP_CATEGORIES, upgrade_cost
from ..engine_core.madness import adjusted_value_at, player_tier
from ..engine_core.rng import GameRandom
from ..engine_core.rules import DEFAULT_RULES, RulesConfig
from ..engine_core.scoring import total_score
from ..engine_core.state import GamePhase, GameState, Location, PlayerState
from .evaluator import CatchEvaluation, HeuristicEvaluator, days_remaining
from .personality import DIFFICULTIES, MEDIUM, PERSONALITIES, Difficulty, Personality
from .policy import BotDecision, BotPolicy


@dataclass
class AnglerBot(BotPolicy):
    """
    Deep Regrets automa.

    Usage:
        bot = AnglerBot(player_id="player-2", difficulty="hard", rng=GameRandom(7))
        decision = bot.select_action(state, legal_actions(state, "player-2"))
        print(decision.explanation)
    """
    player_id: str
    difficulty: Difficulty | str = MEDIUM
    personality: Personality | str = "balanced"
    rng: GameRandom = field(default_factory=GameRandom)
    rules: RulesConfig = DEFAULT_RULES
    evaluator: HeuristicEvaluator | None = None

    def __post_init__(self):
        if isinstance(self.difficulty, str):
            self.difficulty = DIFFICULTIES[self.difficulty]
        if isinstance(self.personality, str):
            self.personality = PERSONALITIES[self.personality]
        if self.evaluator is None:
            self.evaluator = HeuristicEvaluator(self.personality.weights, self.rules)

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action] | None = None,
    ) -> BotDecision:
        """
        Pick the bot's next action.

        Raises:
            ValueError: the player is unknown or nothing is expected of it
        """
        player = state.get_player(self.player_id)
        if player is None:
            raise ValueError(f"Unknown player: {self.player_id}")

        pending = self._resolve_pending(state, player)
        if pending is not None:
            return pending

        if legal_actions and self.personality.randomness and self.rng.random() < self.personality.randomness:
            action = self.rng.choice(legal_actions)
            return BotDecision(
                action=action,
                explanation=f"Random action (personality: {self.personality.name})",
                confidence=1.0 / len(legal_actions),
                evaluated_actions=len(legal_actions),
            )

        if state.phase is GamePhase.DECLARATION:
            return self._declare(state, player)

        if state.phase is GamePhase.ACTION and not player.has_passed:
            if player.location is Location.SEA:
                return self._sea_action(state, player)
            return self._port_action(state, player)

        raise ValueError(f"{player.name} has nothing to decide during {state.phase.value}")

    def get_name(self) -> str:
        return f"AnglerBot({self.player_id}, {self.difficulty.name}, {self.personality.name})"

    # ------------------------------------------------------------------
    # Awaited input
    # ------------------------------------------------------------------

    def _resolve_pending(self, state: GameState, player: PlayerState) -> BotDecision | None:
        removal = state.pending_dice_removal
        if removal is not None and removal.player_id == player.id and player.fresh_dice:
            lowest = player.fresh_dice.index(min(player.fresh_dice))
            return BotDecision(
                action=Action.remove_die(player.id, lowest),
                explanation=f"Setting aside a {player.fresh_dice[lowest]}",
            )

        gift = state.pending_life_preserver_gift
        if gift is not None and gift.player_id == player.id:
            others = [p for p in state.players if p.id != player.id]
            target = min(others, key=total_score)
            return BotDecision(
                action=Action.give_life_preserver(player.id, target.id),
                explanation=f"Handing the life preserver to {target.name}, who trails",
            )

        reward = state.pending_passing_reward
        if reward is not None and reward.player_id == player.id:
            if player.regrets:
                return BotDecision(
                    action=Action.claim_passing_reward(player.id, "discard_regret"),
                    explanation="Shedding a regret",
                )
            return BotDecision(
                action=Action.claim_passing_reward(player.id, "draw_dink"),
                explanation="No regrets to shed, taking a dink",
            )
        return None

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def _declare(self, state: GameState, player: PlayerState) -> BotDecision:
        sea = self.evaluator.sea_value(state, player)
        port = self.evaluator.port_value(state, player)
        noise = self.difficulty.declaration_noise * 10
        adjusted_sea = sea + (self.rng.random() - 0.5) * noise
        adjusted_port = port + (self.rng.random() - 0.5) * noise

        location = "port" if adjusted_port > adjusted_sea else "sea"
        return BotDecision(
            action=Action.declare(player.id, location),
            explanation=f"Chose {location} (sea: {sea:.1f}, port: {port:.1f})",
            confidence=min(1.0, abs(adjusted_sea - adjusted_port) / 10),
            evaluated_actions=2,
            best_score=max(adjusted_sea, adjusted_port),
            evaluation_details={"sea": sea, "port": port},
        )

    # ------------------------------------------------------------------
    # Sea
    # ------------------------------------------------------------------

    def _sea_action(self, state: GameState, player: PlayerState) -> BotDecision:
        if not player.fresh_dice:
            return self._pass(player, "No dice remaining")

        depth = player.current_depth
        for shoal, stack in enumerate(state.sea.shoals.get(depth, [])):
            if stack and not state.sea.is_revealed(depth, shoal):
                return BotDecision(
                    action=Action.reveal(player.id, depth, shoal),
                    explanation=f"Revealing shoal {shoal} at depth {depth}",
                    confidence=0.9,
                )

        options = self.evaluator.catch_options(state, player, self.difficulty.catch_risk)
        best = options[0] if options else None
        descend = self.evaluator.descend_value(state, player, self.difficulty.descend_risk)

        if best is not None and best.expected_value > self.personality.good_catch_value:
            return self._catch(player, best, len(options))
        if descend > self.personality.descend_value and depth < self.rules.max_depth:
            return BotDecision(
                action=Action.descend(player.id, depth + 1),
                explanation=f"Descending to depth {depth + 1}",
                confidence=0.7,
                best_score=descend,
            )
        if best is not None and best.expected_value > 0:
            return self._catch(player, best, len(options))
        return self._pass(player, "No valuable actions available")

    def _catch(self, player: PlayerState, evaluation: CatchEvaluation, evaluated: int) -> BotDecision:
        return BotDecision(
            action=Action.catch(
                player.id,
                evaluation.fish.id,
                evaluation.depth,
                evaluation.shoal,
                evaluation.dice_indices,
                evaluation.tackle_dice_indices,
            ),
            explanation=f"Catching {evaluation.fish.name} (EV: {evaluation.expected_value:.1f})",
            confidence=evaluation.success_probability,
            evaluated_actions=evaluated,
            best_score=evaluation.expected_value,
        )

    # ------------------------------------------------------------------
    # Port
    # ------------------------------------------------------------------

    def _port_action(self, state: GameState, player: PlayerState) -> BotDecision:
        """Make-port benefits, then mount, sell, shop, pass."""
        for step in (self._port_benefits, self._mount, self._sell, self._shop):
            decision = step(state, player)
            if decision is not None:
                return decision
        return self._pass(player, "No valuable port actions")

    def _port_benefits(self, state: GameState, player: PlayerState) -> BotDecision | None:
        if (
            len(player.regrets) >= self.personality.discard_regrets_at
            and "regret" not in player.shop_visits
            and self.rng.random() < self.difficulty.discard_chance
        ):
            worst = max(player.regrets, key=lambda r: r.value)
            return BotDecision(
                action=Action.simple(ActionType.DISCARD_REGRET, player.id, regret_id=worst.id),
                explanation=f"Discarding a regret to calm down ({len(player.regrets)} regrets)",
                confidence=0.8,
            )

        if player.fresh_dice and "reroll" not in player.shop_visits:
            average = sum(player.fresh_dice) / len(player.fresh_dice)
            if average < self.difficulty.reroll_below and self.rng.random() < self.difficulty.reroll_chance:
                return BotDecision(
                    action=Action.simple(ActionType.ROLL_DICE, player.id),
                    explanation=f"Rerolling poor dice (avg: {average:.1f})",
                    confidence=0.7,
                )
        return None

    def _mount(self, state: GameState, player: PlayerState) -> BotDecision | None:
        if not player.hand_fish:
            return None
        open_slots = [s for s in range(player.max_mount_slots) if player.mount_in_slot(s) is None]
        if not open_slots:
            return None

        tier = player_tier(player)
        fish = max(player.hand_fish, key=lambda f: adjusted_value_at(f, tier))
        slot = open_slots[-1]
        return BotDecision(
            action=Action.mount(player.id, fish.id, slot),
            explanation=f"Mounting {fish.name} in slot {slot} (x{slot + 1})",
            confidence=0.9,
        )

    def _sell(self, state: GameState, player: PlayerState) -> BotDecision | None:
        if not player.hand_fish:
            return None
        tier = player_tier(player)
        open_slots = player.max_mount_slots - len(player.mounted_fish)

        if len(player.hand_fish) > open_slots:
            fish = min(player.hand_fish, key=lambda f: adjusted_value_at(f, tier))
            return BotDecision(
                action=Action.sell(player.id, fish.id),
                explanation=f"Selling {fish.name} (low value, mount slots limited)",
                confidence=0.8,
            )

        if player.fishbucks < 3:
            foul = next((f for f in player.hand_fish if f.is_foul), None)
            if foul is not None:
                return BotDecision(
                    action=Action.sell(player.id, foul.id),
                    explanation=f"Selling foul fish {foul.name} for fishbucks",
                    confidence=0.6,
                )
        return None

    def _shop(self, state: GameState, player: PlayerState) -> BotDecision | None:
        if player.fishbucks < self.personality.minimum_purchase:
            return None

        affordable = []
        for category in SHOP_CATEGORIES:
            if category in player.shop_visits:
                continue
            for upgrade in state.port.shops.get(category, []):
                price, _ = upgrade_cost(player, upgrade.cost, self.rules)
                if price <= player.fishbucks:
                    affordable.append((upgrade, price))
        if not affordable:
            return None

        upgrade, price = max(affordable, key=lambda pair: pair[0].cost)
        if days_remaining(state) < 2 and upgrade.type != "supply":
            return None
        return BotDecision(
            action=Action.buy_upgrade(player.id, upgrade.id),
            explanation=f"Buying {upgrade.name} for {price} fishbucks",
            confidence=0.7,
            evaluated_actions=len(affordable),
        )

    def _pass(self, player: PlayerState, reason: str) -> BotDecision:
        return BotDecision(
            action=Action.pass_turn(player.id),
            explanation=reason,
            confidence=0.8,
        )


def create_bots(
    player_ids: list[str],
    difficulty: str = "medium",
    personality: str = "balanced",
    seed: int | None = None,
) -> dict[str, AnglerBot]:
    """
    Create one independent bot per player id.

    Each bot gets its own random stream derived from the seed.
    """
    return {
        player_id: AnglerBot(
            player_id=player_id,
            difficulty=difficulty,
            personality=personality,
            rng=GameRandom(seed + i if seed is not None else None),
        )
        for i, player_id in enumerate(player_ids)
    }
