"""
Fish Abilities - Typed ability variants.

Fish abilities are authored as short tokens in the fish table
(e.g. "madness_+1", "regret_draw_2") and parsed once into a closed set
of frozen variants. The engine only ever resolves the variants.

Variants:
- DrawRegrets(count): catcher draws regrets
- DrawDinks(count): catcher draws dink cards
- DiscardTagged(tag): catcher discards another hand fish with the tag
- MadnessAdjust(amount): shifts the catcher's madness offset
- StartErosion: activates the plug erosion
- ForcePass: catcher immediately passes
- EatReadyDie / EatDiscardRegret: effects when the fish is eaten
- Keyword(name): flavor keyword with no rules effect
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class DrawRegrets:
    count: int = 1


@dataclass(frozen=True)
class DrawDinks:
    count: int = 1


@dataclass(frozen=True)
class DiscardTagged:
    tag: str


@dataclass(frozen=True)
class MadnessAdjust:
    amount: int


@dataclass(frozen=True)
class StartErosion:
    pass


@dataclass(frozen=True)
class ForcePass:
    pass


@dataclass(frozen=True)
class EatReadyDie:
    pass


@dataclass(frozen=True)
class EatDiscardRegret:
    pass


@dataclass(frozen=True)
class Keyword:
    name: str


Ability = Union[
    DrawRegrets,
    DrawDinks,
    DiscardTagged,
    MadnessAdjust,
    StartErosion,
    ForcePass,
    EatReadyDie,
    EatDiscardRegret,
    Keyword,
]

EAT_ABILITIES = (EatReadyDie, EatDiscardRegret)

_MADNESS_TOKEN = re.compile(r"^madness_([+-]\d+)$")

_FIXED_TOKENS: dict[str, Ability] = {
    "regret_draw": DrawRegrets(1),
    "regret_draw_2": DrawRegrets(2),
    "dink_on_catch": DrawDinks(1),
    "discard_small": DiscardTagged("small"),
    "start_erosion": StartErosion(),
    "end_turn": ForcePass(),
    "eat_ready_die": EatReadyDie(),
    "eat_discard_regret": EatDiscardRegret(),
}


def parse_ability(token: str) -> Ability:
    """
    Parse a single ability token.

    Unrecognized tokens become a Keyword rather than failing, so flavor
    words in the data table ("quick", "legendary") stay harmless.
    """
    if token in _FIXED_TOKENS:
        return _FIXED_TOKENS[token]

    match = _MADNESS_TOKEN.match(token)
    if match:
        return MadnessAdjust(int(match.group(1)))

    return Keyword(token)


def parse_abilities(tokens: list[str] | tuple[str, ...]) -> tuple[Ability, ...]:
    return tuple(parse_ability(t) for t in tokens)
