"""
Tests for the card catalog and ability parsing.
"""

import pytest

from ..catalog import (
    ALL_FISH,
    CHARACTERS,
    DINKS,
    PLUG_FISH_ID,
    REGRETS,
    TACKLE_DICE,
    DiscardTagged,
    DrawDinks,
    DrawRegrets,
    ForcePass,
    Keyword,
    MadnessAdjust,
    StartErosion,
    fish_by_depth,
    get_character,
    get_fish,
    get_tackle_die,
    parse_ability,
)
from .conftest import SHARK


class TestAbilityParsing:
    """Tests for ability token parsing."""

    @pytest.mark.parametrize("token,expected", [
        ("regret_draw", DrawRegrets(1)),
        ("regret_draw_2", DrawRegrets(2)),
        ("dink_on_catch", DrawDinks(1)),
        ("discard_small", DiscardTagged("small")),
        ("madness_+1", MadnessAdjust(1)),
        ("madness_+2", MadnessAdjust(2)),
        ("madness_-1", MadnessAdjust(-1)),
        ("start_erosion", StartErosion()),
        ("end_turn", ForcePass()),
    ])
    def test_known_tokens(self, token, expected):
        assert parse_ability(token) == expected

    def test_flavor_words_become_keywords(self):
        """Unrecognized tokens are harmless keywords."""
        assert parse_ability("legendary") == Keyword("legendary")

    def test_shark_discards_once(self):
        """A shark with an explicit discard ability discards a single fish."""
        effects = get_fish(SHARK).effects
        assert effects.count(DiscardTagged("small")) == 1

    def test_plug_effects(self):
        """The Plug ends the turn and starts the erosion."""
        effects = get_fish(PLUG_FISH_ID).effects
        assert ForcePass() in effects
        assert StartErosion() in effects


class TestCatalogData:
    """Tests for the reference data itself."""

    def test_thirteen_fish_per_depth(self):
        assert len(ALL_FISH) == 39
        for depth in (1, 2, 3):
            assert len(fish_by_depth(depth)) == 13
            assert all(f.depth == depth for f in fish_by_depth(depth))

    def test_ids_are_unique(self):
        for cards in (ALL_FISH, REGRETS, DINKS, TACKLE_DICE, CHARACTERS):
            ids = [c.id for c in cards]
            assert len(ids) == len(set(ids))

    def test_size_is_first_tag(self):
        for fish in ALL_FISH:
            assert fish.size == fish.tags[0]
            assert fish.base_value == fish.value

    def test_tackle_dice(self):
        """Six dice of each color, priced by color."""
        die = get_tackle_die("TACKLE-ORANGE-004")
        assert die.color == "orange"
        assert die.cost == 3
        assert len(TACKLE_DICE) == 18

    def test_character_bonus(self):
        fred = get_character("fred")
        assert fred.bonus.base_max_dice == 4
        assert fred.bonus.max_mount_slots == 4

    def test_unknown_id_raises(self):
        with pytest.raises(KeyError):
            get_fish("FISH-D9-NOTHING-000")
