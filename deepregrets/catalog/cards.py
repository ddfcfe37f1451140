"""
Deck Cards - Regrets, shop upgrades, dinks, tackle dice and captains.
"""

from __future__ import annotations

from .models import (
    Character,
    DinkCard,
    RegretCard,
    StartingBonus,
    TackleDie,
    UpgradeCard,
)


# ============================================================================
# Regrets
# ============================================================================

REGRETS: tuple[RegretCard, ...] = (
    RegretCard("REG-001", "A Lamentable Incident at Sea", 0),
    RegretCard("REG-002", "The Fish That Got Away", 1),
    RegretCard("REG-003", "Cursed Equipment Failure", 2),
    RegretCard("REG-004", "Nightmares of the Deep", 3),
    RegretCard("REG-005", "Whispers in the Fog", 1),
    RegretCard("REG-006", "The Captain's Last Words", 2),
    RegretCard("REG-007", "Lost at Sea", 1),
    RegretCard("REG-008", "Tentacles in the Net", 3),
    RegretCard("REG-009", "The Sunken Vessel", 2),
    RegretCard("REG-010", "Madness Takes Hold", 3),
    RegretCard("REG-011", "Blood in the Water", 1),
    RegretCard("REG-012", "The Deep Calls", 2),
    RegretCard("REG-013", "Eldritch Visions", 3),
    RegretCard("REG-014", "Sailor's Superstition", 0),
    RegretCard("REG-015", "The Kraken's Eye", 3),
    RegretCard("REG-016", "Cursed Waters", 2),
    RegretCard("REG-017", "The Lighthouse Keeper", 1),
    RegretCard("REG-018", "Storm of Souls", 2),
    RegretCard("REG-019", "The Final Cast", 1),
    RegretCard("REG-020", "Ancient Grudge", 3),
)


# ============================================================================
# Shop upgrades
# ============================================================================

RODS: tuple[UpgradeCard, ...] = (
    UpgradeCard("ROD-001", "Glass Rod", "rod", 3, ("reroll_1_die",),
                "Reroll 1 die when fishing."),
    UpgradeCard("ROD-002", "Carbon Fiber Rod", "rod", 5, ("half_dice_round_up",),
                "Half-dice round up instead of down."),
    UpgradeCard("ROD-003", "Blessed Rod", "rod", 7, ("reduce_regrets_1",),
                "Reduce Regret draws by 1 (minimum 0)."),
    UpgradeCard("ROD-004", "Ancient Harpoon", "rod", 8, ("ignore_shark_penalty",),
                'Ignore "discard small fish" penalties.'),
)

REELS: tuple[UpgradeCard, ...] = (
    UpgradeCard("REEL-001", "Quick Release Reel", "reel", 4, ("draw_dink_on_catch",),
                "Draw a Dink whenever you catch a fish."),
    UpgradeCard("REEL-002", "Deep Sea Reel", "reel", 6, ("descend_cost_-1",),
                "Reduce cost to descend by 1."),
    UpgradeCard("REEL-003", "Mechanical Reel", "reel", 5, ("auto_catch_difficulty_3",),
                "Automatically catch fish with difficulty 3 or less."),
    UpgradeCard("REEL-004", "Void Reel", "reel", 9, ("madness_immune",),
                "Immune to Madness increases from fish."),
)

SUPPLIES: tuple[UpgradeCard, ...] = (
    UpgradeCard("SUPPLY-001", "Lucky Lure", "supply", 2, ("reroll_1s",),
                "Reroll all 1s when fishing."),
    UpgradeCard("SUPPLY-002", "Fish Finder", "supply", 4, ("reveal_before_move",),
                "Reveal top fish before moving to a shoal."),
    UpgradeCard("SUPPLY-003", "Safety Net", "supply", 3, ("prevent_regret_1_per_day",),
                "Prevent 1 Regret draw per day."),
    UpgradeCard("SUPPLY-004", "Ancient Map", "supply", 6, ("start_depth_2",),
                "Start each day at Depth II."),
    UpgradeCard("SUPPLY-005", "Lifeboat", "supply", 5, ("port_from_sea",),
                "Make Port from Sea. Sometimes you just have to abandon ship."),
)

UPGRADES_BY_TYPE: dict[str, tuple[UpgradeCard, ...]] = {
    "rod": RODS,
    "reel": REELS,
    "supply": SUPPLIES,
}


# ============================================================================
# Dinks
# ============================================================================

DINKS: tuple[DinkCard, ...] = (
    DinkCard("DINK-001", "Lucky Minnow", ("immediate",), ("gain_1_fishbuck",), True,
             "Flip this trinket for an instant Fishbuck windfall."),
    DinkCard("DINK-002", "Pocket Compass", ("declaration",), ("start_at_depth_2",), False,
             "Choose to begin the day already positioned at Depth II."),
    DinkCard("DINK-003", "Sturdy Net", ("catch",), ("reroll_failed_catch",), True,
             "After failing a catch attempt, reroll any number of spent dice."),
    DinkCard("DINK-004", "Coffee Thermos", ("refresh",), ("ready_spent_die",), True,
             "Move one spent die back to your fresh pool during Refresh."),
    DinkCard("DINK-005", "Fisherman's Tale", ("end_of_day",), ("score_bonus_2",), False,
             "Spin a yarn to secure +2 glory at the end of the day."),
    DinkCard("DINK-006", "Salt-Cured Worms", ("catch",), ("+1_die_value_once",), True,
             "Treat a single die as though its value were increased by 1."),
    DinkCard("DINK-007", "Tin of Ball Bearings", ("movement",), ("descend_cost_-1",), False,
             "Your rig glides silently, descending costs 1 less die value."),
    DinkCard("DINK-008", "Scrimshaw Token", ("madness",), ("ignore_madness_increase",), True,
             "Discard to ignore a single Madness increase."),
    DinkCard("DINK-009", "Abyssal Chart", ("declaration",), ("peek_shoal_top",), True,
             "Before choosing a shoal, peek at the top fish at your depth."),
    DinkCard("DINK-010", "Lucky Clamshell", ("roll",), ("convert_one_to_six",), True,
             "After rolling dice, turn a single die to show a 6."),
    DinkCard("DINK-011", "Tide Reader", ("start",), ("gain_extra_action",), False,
             "At the start of each day gain one additional action at sea."),
    DinkCard("DINK-012", "Brass Fish Hook", ("sell",), ("sell_bonus_1",), False,
             "Whenever you sell a fish, gain +1 Fishbuck."),
    DinkCard("DINK-013", "Merchant's Token", ("port",), ("shop_discount",), True,
             "Discard at Port to reduce the cost of a single Shop purchase by 2$."),
)


# ============================================================================
# Tackle dice
# ============================================================================

_TACKLE_COLORS = (
    ("green", 1, (0, 0, 1, 2, 1, 2), "Basic tackle die, affordable but unreliable."),
    ("blue", 2, (0, 1, 1, 1, 1, 1), "Steady tackle die, rarely blank."),
    ("orange", 3, (2, 2, 2, 3, 3, 3), "Premium tackle die, always pulls its weight."),
)

TACKLE_DICE: tuple[TackleDie, ...] = tuple(
    TackleDie(
        id=f"TACKLE-{color.upper()}-{n:03d}",
        name=f"{color.title()} Tackle Die",
        color=color,
        cost=cost,
        faces=faces,
        description=description,
    )
    for color, cost, faces, description in _TACKLE_COLORS
    for n in range(1, 7)
)


# ============================================================================
# Captains
# ============================================================================

CHARACTERS: tuple[Character, ...] = (
    Character(
        "hugo", "Hugo", "The Veteran",
        "A weathered fisherman with decades of experience in treacherous waters.",
        "Start with an extra Rod and +2 Fishbucks",
        StartingBonus(extra_fishbucks=2, starting_rod=True),
    ),
    Character(
        "alba", "Alba", "The Beastmaster",
        "A mysterious angler who shares a bond with the creatures of the sea.",
        "Start with a Reel and ignore first Regret draw",
        StartingBonus(starting_reel=True, regret_shields=1),
    ),
    Character(
        "bert", "Bert", "The Hunter",
        "A skilled hunter who brings his expertise to the deep waters.",
        "Start at Depth II and draw an extra Dink",
        StartingBonus(start_depth=2, extra_dinks=1),
    ),
    Character(
        "isla", "Isla", "The Determined",
        "A hardworking fisherwoman who never gives up on her catch.",
        "Start with 3 extra Fishbucks and reroll 1s",
        StartingBonus(extra_fishbucks=3, reroll_ones=True),
    ),
    Character(
        "fred", "Fred", "The Sailor",
        "A fearless sailor who knows every secret of the briny deep.",
        "Start with max dice +1 and extra mount slot",
        StartingBonus(base_max_dice=4, max_mount_slots=4),
    ),
)
