"""
Game Loop - Drives a game one action at a time.

Each step does exactly one of:
1. Lets a player answer what the engine is waiting on (dice removal,
   life preserver gift, passing reward)
2. Closes the turn after a turn-ending action
3. Advances the phase as the system actor
4. Lets the current player's bot act

Players without a bot are left to the caller: the loop stops with
WAITING_HUMAN and the caller submits their action with submit().
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..bots.policy import BotPolicy
from ..engine_core.action import SYSTEM_PLAYER, Action, ActionType
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, GameState

logger = logging.getLogger(__name__)

# Actions after which the turn passes to the next angler
TURN_ENDING_ACTIONS = frozenset({
    ActionType.CATCH_FISH,
    ActionType.DESCEND,
    ActionType.MOVE_DEEPER,
    ActionType.ABANDON_SHIP,
    ActionType.PASS,
})


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    WAITING_HUMAN = "waiting_human"
    STALLED = "stalled"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of one loop step.
    """
    success: bool
    loop_state: LoopState
    actor: str = SYSTEM_PLAYER
    action: Action | None = None

    explanation: str = ""
    state_changes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # Game over info
    winner: str | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(state, bots=create_bots([p.id for p in state.players]))
        results = loop.run_to_completion()
        print(loop.state.winner)
    """

    def __init__(
        self,
        state: GameState,
        bots: dict[str, BotPolicy] | None = None,
        reducer: Reducer | None = None,
        generator: ActionGenerator | None = None,
    ):
        self.state = state
        self.bots = bots or {}
        self.reducer = reducer or Reducer()
        self.generator = generator or ActionGenerator(self.reducer.rules)
        self._end_turn_due = False

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> TurnResult:
        """Advance the game by a single action."""
        state = self.state
        if state.is_game_over:
            return TurnResult(success=True, loop_state=LoopState.GAME_OVER, winner=state.winner)

        awaited = self._awaited_player_id()
        if awaited is not None:
            return self._player_step(awaited)

        if self._end_turn_due:
            self._end_turn_due = False
            if state.phase is GamePhase.ACTION:
                return self._system_step(Action.end_turn())

        if state.phase in (GamePhase.START, GamePhase.REFRESH):
            return self._system_step(Action.next_phase())

        if state.phase is GamePhase.DECLARATION:
            return self._player_step(state.current_player.id)

        if state.phase is GamePhase.ACTION:
            if all(p.has_passed for p in state.players):
                return self._system_step(Action.next_phase())
            if state.current_player.has_passed:
                return self._system_step(Action.end_turn())
            return self._player_step(state.current_player.id)

        return TurnResult(
            success=False,
            loop_state=LoopState.STALLED,
            errors=[f"No way forward from phase {state.phase.value}"],
        )

    def submit(self, action: Action) -> TurnResult:
        """Apply an action chosen outside the loop (e.g. by a human)."""
        return self._apply(action.player_id, action, explanation="submitted")

    def run_until(
        self,
        predicate: Callable[[GameState], bool],
        max_steps: int = 5000,
    ) -> list[TurnResult]:
        """
        Step until the predicate holds, the game ends, or the loop cannot
        continue on its own.
        """
        results: list[TurnResult] = []
        for _ in range(max_steps):
            if predicate(self.state):
                return results
            result = self.step()
            results.append(result)
            if result.loop_state is not LoopState.RUNNING:
                return results
        logger.warning("Game %s stopped after %d steps", self.state.game_id, max_steps)
        return results

    def run_to_completion(self, max_steps: int = 5000) -> list[TurnResult]:
        return self.run_until(lambda s: s.is_game_over, max_steps=max_steps)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _awaited_player_id(self) -> str | None:
        state = self.state
        for record in (
            state.pending_dice_removal,
            state.pending_life_preserver_gift,
            state.pending_passing_reward,
        ):
            if record is not None:
                return record.player_id
        return None

    def _system_step(self, action: Action) -> TurnResult:
        return self._apply(SYSTEM_PLAYER, action)

    def _player_step(self, player_id: str) -> TurnResult:
        bot = self.bots.get(player_id)
        if bot is None:
            return TurnResult(success=True, loop_state=LoopState.WAITING_HUMAN, actor=player_id)

        legal = self.generator.generate(self.state, player_id)
        try:
            decision = bot.select_action(self.state, legal)
        except ValueError as e:
            logger.warning("Bot for %s could not decide: %s", player_id, e)
            return self._fallback(player_id, legal, [str(e)])

        result = self._apply(player_id, decision.action, decision.explanation)
        if result.success:
            return result
        return self._fallback(player_id, legal, result.errors)

    def _fallback(self, player_id: str, legal: list[Action], errors: list[str]) -> TurnResult:
        """Passing first, then the first candidate the engine accepts."""
        candidates = [a for a in legal if a.action_type is ActionType.PASS]
        candidates += [a for a in legal if a.action_type is not ActionType.PASS]
        for action in candidates:
            result = self._apply(player_id, action, explanation="fallback")
            if result.success:
                result.errors = errors + result.errors
                return result
        return TurnResult(
            success=False,
            loop_state=LoopState.STALLED,
            actor=player_id,
            errors=errors + [f"No acceptable action for {player_id}"],
        )

    def _apply(self, actor: str, action: Action, explanation: str = "") -> TurnResult:
        result = self.reducer.apply(self.state, action)
        if not result.success:
            logger.debug("%s rejected: %s", action.action_type.value, result.error)
            return TurnResult(
                success=False,
                loop_state=LoopState.RUNNING,
                actor=actor,
                action=action,
                explanation=explanation,
                errors=[result.error or "rejected"],
            )

        self.state = result.new_state
        if (
            action.action_type in TURN_ENDING_ACTIONS
            and action.player_id != SYSTEM_PLAYER
            and self.state.phase is GamePhase.ACTION
        ):
            self._end_turn_due = True

        over = self.state.is_game_over
        return TurnResult(
            success=True,
            loop_state=LoopState.GAME_OVER if over else LoopState.RUNNING,
            actor=actor,
            action=action,
            explanation=explanation,
            state_changes=list(result.state_changes),
            winner=self.state.winner if over else None,
        )
