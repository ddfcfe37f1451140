"""
Session Module - Drives games to completion.

A session here is one play-through held in memory:
- Created from an initial GameState
- Advanced one action at a time by the GameLoop
- Bots act for AI players; other players are submitted by the caller
"""

from .game_loop import GameLoop, LoopState, TurnResult, TURN_ENDING_ACTIONS

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
    "TURN_ENDING_ACTIONS",
]
