"""
Snapshot - Serialize and restore complete game states.

Uses a pydantic TypeAdapter over the GameState dataclass tree, so every
field (pending records, decks, shoals, history) survives a round trip.
"""

from __future__ import annotations
from typing import Any

from pydantic import TypeAdapter

from .state import GameState

_STATE_ADAPTER = TypeAdapter(GameState)


def dump_state(state: GameState) -> dict[str, Any]:
    """GameState -> JSON-compatible dict."""
    return _STATE_ADAPTER.dump_python(state, mode="json")


def load_state(data: dict[str, Any]) -> GameState:
    """JSON-compatible dict -> GameState. Raises pydantic.ValidationError."""
    return _STATE_ADAPTER.validate_python(data)


def state_to_json(state: GameState, indent: int | None = None) -> str:
    return _STATE_ADAPTER.dump_json(state, indent=indent).decode("utf-8")


def state_from_json(text: str | bytes) -> GameState:
    return _STATE_ADAPTER.validate_json(text)
