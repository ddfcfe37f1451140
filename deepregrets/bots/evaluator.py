"""
Heuristic Evaluator - Scores options for bot decision-making.

The evaluator assigns numeric values to:
- Catching a specific fish (success chance x madness-adjusted value - regret risk)
- Heading to sea vs making port
- Descending to the next depth
- A whole position (score relative to opponents)

Weights can be adjusted to create different personalities.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..catalog import DrawRegrets, FishCard, ForcePass, get_tackle_die
from ..engine_core.action_generator import pick_catch_dice
from ..engine_core.effect_resolver import (
    EFFECT_DIE_PLUS_ONE,
    can_auto_catch,
    catch_difficulty,
    descend_threshold,
)
from ..engine_core.madness import adjusted_value_at, player_tier
from ..engine_core.rules import DEFAULT_RULES, RulesConfig
from ..engine_core.scoring import score_breakdown
from ..engine_core.state import Day, GameState, PlayerState


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Sea
    sea_base: float = 5.0
    per_fresh_die: float = 1.5
    per_average_pip: float = 0.5
    per_day_remaining: float = 0.5
    per_calm_tier: float = 0.3  # Each tier below the maximum
    per_visible_fish: float = 0.3

    # Port
    port_base: float = 3.0
    per_hand_fish: float = 2.0
    per_open_mount: float = 1.5
    basic_rod_upgrade: float = 2.0
    high_madness_relief: float = 3.0
    late_game_mount: float = 5.0
    spare_fishbucks: float = 1.5

    # Catch risk
    regret_penalty: float = 1.5  # Per regret the fish draws on catch
    foul_penalty: float = 0.5  # Foul fish draw a regret when sold
    force_pass_penalty: float = 1.0
    foul_madness_bonus: float = 1.0  # Foul fish at high madness
    fair_calm_bonus: float = 0.5  # Fair fish at low madness

    # Descend
    per_deep_fish: float = 0.5
    per_depth_level: float = 2.0

    # Opponent-related
    opponent_penalty: float = -0.3  # Multiply average opponent score by this


@dataclass
class CatchEvaluation:
    """What catching one fish is expected to be worth."""
    fish: FishCard
    depth: int
    shoal: int
    success_probability: float = 0.0
    expected_value: float = 0.0
    regret_risk: bool = False
    dice_indices: list[int] = field(default_factory=list)
    tackle_dice_indices: list[int] = field(default_factory=list)


@dataclass
class StateEvaluation:
    """
    Result of evaluating a game state.
    """
    total_score: float
    player_scores: dict[str, float] = field(default_factory=dict)
    feature_breakdown: dict[str, float] = field(default_factory=dict)


def days_remaining(state: GameState) -> int:
    days = list(Day)
    return len(days) - days.index(state.day) - 1


class HeuristicEvaluator:
    """
    Evaluates fishing options and positions using weighted heuristics.

    `risk_modifier` inflates regret penalties: easy bots overweight the
    risk, hard bots barely flinch.
    """

    def __init__(self, weights: EvaluationWeights | None = None, rules: RulesConfig = DEFAULT_RULES):
        self.weights = weights or EvaluationWeights()
        self.rules = rules

    # ------------------------------------------------------------------
    # Catching
    # ------------------------------------------------------------------

    def evaluate_catch(
        self,
        state: GameState,
        player: PlayerState,
        fish: FishCard,
        depth: int,
        shoal: int,
        risk_modifier: float = 0.3,
    ) -> CatchEvaluation:
        """
        Evaluate catching one fish with the fewest highest fresh dice.

        Falls back to adding every tackle die at its average face when the
        fresh dice alone cannot reach the difficulty.
        """
        evaluation = CatchEvaluation(fish=fish, depth=depth, shoal=shoal)
        difficulty = catch_difficulty(state, player, fish, self.rules)
        bonus = 1 if EFFECT_DIE_PLUS_ONE in player.active_effects else 0

        if can_auto_catch(player, fish, self.rules):
            evaluation.success_probability = 1.0
        else:
            indices = pick_catch_dice(player.fresh_dice, difficulty, bonus)
            if indices:
                evaluation.success_probability = 1.0
                evaluation.dice_indices = indices
            elif player.fresh_dice and player.tackle_dice:
                tackle_average = sum(
                    sum(get_tackle_die(d).faces) / len(get_tackle_die(d).faces)
                    for d in player.tackle_dice
                )
                if sum(player.fresh_dice) + bonus + tackle_average >= difficulty:
                    evaluation.success_probability = 0.7
                    evaluation.dice_indices = list(range(len(player.fresh_dice)))
                    evaluation.tackle_dice_indices = list(range(len(player.tackle_dice)))

        if evaluation.success_probability <= 0:
            return evaluation

        tier = player_tier(player)
        regrets_drawn = sum(a.count for a in fish.effects if isinstance(a, DrawRegrets))
        evaluation.regret_risk = regrets_drawn > 0

        penalty = regrets_drawn * self.weights.regret_penalty
        if fish.is_foul:
            penalty += self.weights.foul_penalty
        if any(isinstance(a, ForcePass) for a in fish.effects):
            penalty += self.weights.force_pass_penalty
        penalty *= 1 + risk_modifier

        value = evaluation.success_probability * (adjusted_value_at(fish, tier) - penalty)
        regret_count = len(player.regrets)
        if fish.is_foul and regret_count >= 7:
            value += self.weights.foul_madness_bonus
        elif not fish.is_foul and regret_count < 4:
            value += self.weights.fair_calm_bonus
        evaluation.expected_value = value
        return evaluation

    def catch_options(
        self,
        state: GameState,
        player: PlayerState,
        risk_modifier: float = 0.3,
    ) -> list[CatchEvaluation]:
        """Revealed top fish at the player's depth, best expected value first."""
        options = []
        depth = player.current_depth
        for shoal, stack in enumerate(state.sea.shoals.get(depth, [])):
            if stack and state.sea.is_revealed(depth, shoal):
                evaluation = self.evaluate_catch(state, player, stack[0], depth, shoal, risk_modifier)
                if evaluation.success_probability > 0:
                    options.append(evaluation)
        options.sort(key=lambda e: e.expected_value, reverse=True)
        return options

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def sea_value(self, state: GameState, player: PlayerState) -> float:
        w = self.weights
        score = w.sea_base
        score += len(player.fresh_dice) * w.per_fresh_die
        if player.fresh_dice:
            score += sum(player.fresh_dice) / len(player.fresh_dice) * w.per_average_pip
        score += days_remaining(state) * w.per_day_remaining
        score += (6 - player.madness_level) * w.per_calm_tier
        visible = sum(len(stack) for stack in state.sea.shoals.get(player.current_depth, []))
        score += min(visible, 10) * w.per_visible_fish
        return score

    def port_value(self, state: GameState, player: PlayerState) -> float:
        w = self.weights
        remaining = days_remaining(state)
        score = w.port_base
        score += len(player.hand_fish) * w.per_hand_fish

        open_mounts = player.max_mount_slots - len(player.mounted_fish)
        if player.hand_fish and open_mounts > 0:
            score += open_mounts * w.per_open_mount
        if remaining >= 3 and player.equipped_rod is None:
            score += w.basic_rod_upgrade
        if player.madness_level >= 4:
            score += w.high_madness_relief
        if remaining <= 1 and player.hand_fish:
            score += w.late_game_mount
        if player.fishbucks >= 5:
            score += w.spare_fishbucks
        return score

    # ------------------------------------------------------------------
    # Descending
    # ------------------------------------------------------------------

    def descend_value(self, state: GameState, player: PlayerState, risk_modifier: float = 0.5) -> float:
        """Value of moving one depth down; strongly negative when impossible."""
        if player.current_depth >= self.rules.max_depth:
            return -10.0
        threshold = descend_threshold(player, self.rules)
        if not any(v >= threshold for v in player.fresh_dice):
            return -10.0

        w = self.weights
        target = player.current_depth + 1
        deep_fish = sum(len(stack) for stack in state.sea.shoals.get(target, []))
        value = deep_fish * w.per_deep_fish
        value += target * w.per_depth_level
        value += days_remaining(state) * w.per_day_remaining
        return value * risk_modifier

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def evaluate(self, state: GameState, for_player_id: str) -> StateEvaluation:
        """
        Evaluate a game state from a player's perspective.

        Positive if the position is good for the player.
        """
        player_scores = {
            p.id: float(score_breakdown(p, self.rules).total) for p in state.players
        }
        my_score = player_scores.get(for_player_id, 0.0)
        opponent_scores = [s for pid, s in player_scores.items() if pid != for_player_id]

        relative_score = my_score
        if opponent_scores:
            relative_score += self.weights.opponent_penalty * (sum(opponent_scores) / len(opponent_scores))

        if state.is_game_over and state.winner is not None:
            winner = next((p for p in state.players if p.name == state.winner), None)
            relative_score += 1000 if winner is not None and winner.id == for_player_id else -1000

        return StateEvaluation(
            total_score=relative_score,
            player_scores=player_scores,
            feature_breakdown={"relative_score": relative_score},
        )
