"""
Game Setup - Creates the initial game state.

This module handles:
- Shuffling every deck with the injected random source
- Dealing each depth's fish round-robin into shoals
- Dealing shop displays and the tackle market
- Creating anglers with their captain's starting bonus
- Rolling starting dice
"""

from __future__ import annotations
import logging

from ..catalog import (
    DINKS,
    REGRETS,
    TACKLE_DICE,
    UPGRADES_BY_TYPE,
    fish_by_depth,
    get_character,
)
from .effect_resolver import SHOP_CATEGORIES, EffectResolver
from .madness import recalculate_madness
from .rng import GameRandom
from .rules import DEFAULT_RULES, RulesConfig
from .state import Day, GamePhase, GameState, Location, PlayerState, PortState, SeaState

logger = logging.getLogger(__name__)


def setup_game(
    characters: list[str],
    rng: GameRandom,
    rules: RulesConfig = DEFAULT_RULES,
    names: list[str] | None = None,
    ai_players: list[bool] | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        characters: Captain id per seat, in turn order
        rng: Random source for every shuffle and roll
        rules: Numeric rules
        names: Display names (default: captain names)
        ai_players: Per-seat flag marking bot-controlled anglers
        game_id: Identifier for the game

    Returns:
        Initial GameState on Monday, start phase

    Raises:
        ValueError: player count out of range or unknown captain id
    """
    if not rules.min_players <= len(characters) <= rules.max_players:
        raise ValueError(
            f"Deep Regrets supports {rules.min_players}-{rules.max_players} players"
        )
    for character_id in characters:
        try:
            get_character(character_id)
        except KeyError:
            raise ValueError(f"Unknown character: {character_id}") from None

    resolver = EffectResolver(rules, rng)
    port = _setup_port(rng)
    sea = _setup_sea(rng, rules)
    state = GameState(
        game_id=game_id or f"game-{rng.seed if rng.seed is not None else 'unseeded'}",
        sea=sea,
        port=port,
        day=Day.MONDAY,
        phase=GamePhase.START,
        seed=rng.seed,
    )

    for i, character_id in enumerate(characters):
        name = names[i] if names and i < len(names) else _default_name(characters, i)
        is_ai = bool(ai_players[i]) if ai_players and i < len(ai_players) else False
        state.players.append(_create_player(i, character_id, name, is_ai, state, resolver, rules))

    for category in SHOP_CATEGORIES:
        resolver.refill_shop(port, category)
    resolver.refill_tackle_market(port)

    logger.info(
        "New game %s with %d players: %s",
        state.game_id, len(state.players), ", ".join(p.name for p in state.players),
    )
    return state


def _default_name(characters: list[str], index: int) -> str:
    character = get_character(characters[index])
    if characters.count(characters[index]) > 1:
        return f"{character.name} {index + 1}"
    return character.name


def _setup_port(rng: GameRandom) -> PortState:
    return PortState(
        shops={category: [] for category in SHOP_CATEGORIES},
        shop_pools={
            category: rng.shuffle(UPGRADES_BY_TYPE[category])
            for category in SHOP_CATEGORIES
        },
        tackle_bag=rng.shuffle([die.id for die in TACKLE_DICE]),
        dinks_deck=rng.shuffle(DINKS),
        regrets_deck=rng.shuffle(REGRETS),
    )


def _setup_sea(rng: GameRandom, rules: RulesConfig) -> SeaState:
    sea = SeaState()
    for depth in range(1, rules.max_depth + 1):
        shoals: list[list] = [[] for _ in range(rules.shoals_per_depth)]
        for i, fish in enumerate(rng.shuffle(fish_by_depth(depth))):
            shoals[i % rules.shoals_per_depth].append(fish)
        sea.shoals[depth] = shoals
        sea.graveyards[depth] = []
    return sea


def _create_player(
    index: int,
    character_id: str,
    name: str,
    is_ai: bool,
    state: GameState,
    resolver: EffectResolver,
    rules: RulesConfig,
) -> PlayerState:
    bonus = get_character(character_id).bonus
    player = PlayerState(
        id=f"player-{index + 1}",
        name=name,
        character_id=character_id,
        is_ai=is_ai,
        location=Location.SEA,
        current_depth=bonus.start_depth,
        fishbucks=min(rules.fishbucks_cap, rules.starting_fishbucks + bonus.extra_fishbucks),
        base_max_dice=bonus.base_max_dice,
        max_mount_slots=bonus.max_mount_slots,
        regret_shields=bonus.regret_shields,
        reroll_ones=bonus.reroll_ones,
    )

    pools = state.port.shop_pools
    if bonus.starting_rod and pools["rod"]:
        player.equipped_rod = pools["rod"].pop(0)
    if bonus.starting_reel and pools["reel"]:
        player.equipped_reel = pools["reel"].pop(0)
    for _ in range(bonus.extra_dinks):
        resolver.draw_dink(state, player)

    recalculate_madness(player, rules)
    player.fresh_dice = resolver.roll_dice(player, player.max_dice)
    return player
