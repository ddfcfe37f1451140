"""
Fish Cards - The 39 fish of the three sea depths.

Difficulty ranges by size and depth:

    DEPTH | SMALL | MID | LARGE
    I     | 0-2   | 1-3 | 2-4
    II    | 1-3   | 2-4 | 3-5
    III   | 2-4   | 3-5 | 4-6
"""

from __future__ import annotations

from .models import FishCard

PLUG_FISH_ID = "FISH-D3-PLUG-003"


def _fish(
    id: str,
    name: str,
    depth: int,
    value: int,
    difficulty: int,
    tags: tuple[str, ...],
    quality: str = "fair",
    abilities: tuple[str, ...] = (),
    description: str = "",
) -> FishCard:
    """Build a fish; size is the first tag, printed value is the base value."""
    return FishCard(
        id=id,
        name=name,
        depth=depth,
        size=tags[0],  # type: ignore[arg-type]
        value=value,
        base_value=value,
        difficulty=difficulty,
        quality=quality,  # type: ignore[arg-type]
        abilities=abilities,
        tags=tags,
        description=description,
    )


DEPTH_1_FISH: tuple[FishCard, ...] = (
    _fish("FISH-D1-SARDINE-001", "Sardine School", 1, 1, 1, ("small", "common"),
          description="Small silver fish that travel in groups."),
    _fish("FISH-D1-HERRING-006", "Silver Herring", 1, 1, 0, ("small", "common"),
          description="A quick flash of silver in the shallows."),
    _fish("FISH-D1-ANCHOVY-009", "Anchovy Swarm", 1, 1, 0, ("small", "common"),
          description="Tiny but abundant, the foundation of the food chain."),
    _fish("FISH-D1-PERCH-007", "Spotted Perch", 1, 2, 1, ("small", "common"),
          description="Colorful spots mark this common catch."),
    _fish("FISH-D1-FLOUNDER-004", "Whispering Flounder", 1, 2, 2, ("small", "mystical"),
          quality="foul", abilities=("dink_on_catch",),
          description="This flatfish seems to whisper secrets from the deep."),
    _fish("FISH-D1-MACKEREL-002", "Atlantic Mackerel", 1, 2, 1, ("mid", "common"),
          description="Striped predator fish, good eating."),
    _fish("FISH-D1-SQUID-012", "Ink Squid", 1, 2, 2, ("mid", "cephalopod"),
          abilities=("dink_on_catch",),
          description="Releases a cloud of ink when caught."),
    _fish("FISH-D1-CRAB-010", "Stone Crab", 1, 2, 2, ("mid", "crustacean"),
          description="Armored claws snap at unwary fingers."),
    _fish("FISH-D1-BASS-003", "Sea Bass", 1, 3, 2, ("mid",),
          abilities=("quick",),
          description="A cunning fish that requires skill to catch."),
    _fish("FISH-D1-TROUT-008", "Rainbow Trout", 1, 3, 3, ("mid",),
          description="Iridescent scales shimmer in the light."),
    _fish("FISH-D1-COD-005", "Ancient Cod", 1, 3, 3, ("large",),
          description="An old fish with wisdom in its eyes."),
    _fish("FISH-D1-SNAPPER-011", "Red Snapper", 1, 3, 3, ("large",),
          description="Prized for its firm, flavorful flesh."),
    _fish("FISH-D1-HALIBUT-013", "Young Halibut", 1, 3, 4, ("large",),
          description="A juvenile flatfish with great potential."),
)


DEPTH_2_FISH: tuple[FishCard, ...] = (
    _fish("FISH-D2-JELLYFISH-009", "Stinging Medusa", 2, 5, 2, ("small", "jellyfish", "dangerous"),
          quality="foul", abilities=("madness_+1",),
          description="Its tentacles burn with eldritch venom. +1 Madness."),
    _fish("FISH-D2-CUTTLEFISH-011", "Hypnotic Cuttlefish", 2, 6, 3, ("small", "cephalopod", "mystical"),
          quality="foul", abilities=("regret_draw",),
          description="Its shifting colors entrance the mind. Draw a Regret."),
    _fish("FISH-D2-MANTA-004", "Shadow Manta", 2, 6, 3, ("mid", "graceful", "mystical"),
          abilities=("glide", "dink_on_catch"),
          description="Glides through water like a living shadow."),
    _fish("FISH-D2-MORAY-007", "Phantom Moray", 2, 6, 3, ("mid", "serpent", "mystical"),
          abilities=("dink_on_catch",),
          description="Slips through the water like a ghost."),
    _fish("FISH-D2-BARRACUDA-005", "Cursed Barracuda", 2, 7, 3, ("mid", "predator", "cursed"),
          quality="foul", abilities=("curse", "madness_+1"),
          description="Its bite carries an otherworldly corruption. +1 Madness."),
    _fish("FISH-D2-TUNA-001", "Bluefin Tuna", 2, 7, 4, ("mid", "valuable"),
          abilities=("strong",),
          description="A powerful fish that fights with tremendous strength."),
    _fish("FISH-D2-GROUPER-008", "Goliath Grouper", 2, 7, 4, ("mid",),
          abilities=("strong",),
          description="A massive fish that tests even experienced anglers."),
    _fish("FISH-D2-WAHOO-012", "Swift Wahoo", 2, 7, 4, ("mid",),
          abilities=("quick",),
          description="One of the fastest fish in the sea."),
    _fish("FISH-D2-SHARK-002", "Reef Shark", 2, 8, 4, ("large", "predator", "dangerous"),
          quality="foul", abilities=("shark", "discard_small"),
          description="Discard a small fish after catching (if any)."),
    _fish("FISH-D2-LOBSTER-013", "Giant Lobster", 2, 8, 4, ("large", "crustacean", "valuable"),
          description="Massive claws guard succulent flesh."),
    _fish("FISH-D2-SWORDFISH-006", "Bronze Swordfish", 2, 9, 4, ("large", "valuable"),
          abilities=("strong",),
          description="Its blade-like bill gleams with ancient power."),
    _fish("FISH-D2-OCTOPUS-003", "Giant Octopus", 2, 10, 5, ("large", "cephalopod", "intelligent"),
          quality="foul", abilities=("tentacles", "regret_draw"),
          description="Its alien intelligence leaves lasting impressions. Draw a Regret."),
    _fish("FISH-D2-MARLIN-010", "Striped Marlin", 2, 10, 5, ("large", "valuable"),
          abilities=("strong",),
          description="The king of sport fish, a true challenge."),
)


DEPTH_3_FISH: tuple[FishCard, ...] = (
    _fish("FISH-D3-BLOBFISH-012", "Eldritch Blobfish", 3, 10, 3, ("small", "deep", "horror"),
          quality="foul", abilities=("madness_+1",),
          description="Its melancholy face haunts your dreams. +1 Madness."),
    _fish("FISH-D3-ISOPOD-011", "Giant Isopod", 3, 12, 4, ("small", "crustacean", "deep"),
          description="An armored scavenger from the deepest trenches."),
    _fish("FISH-D3-ANGLER-005", "Abyssal Anglerfish", 3, 14, 4, ("mid", "deep", "horror"),
          quality="foul", abilities=("lure", "horror", "regret_draw"),
          description="Its hypnotic light draws you into madness. Draw a Regret."),
    _fish("FISH-D3-COELACANTH-009", "Living Fossil", 3, 15, 4, ("mid", "ancient", "rare"),
          abilities=("ancient",),
          description="Thought extinct, it survives in the abyss."),
    _fish("FISH-D3-ORCA-004", "Void Orca", 3, 16, 5, ("mid", "mammal", "intelligent"),
          quality="foul", abilities=("beast", "discard_small", "intelligence"),
          description="An orca touched by void energy. Discard a small fish (if any)."),
    _fish("FISH-D3-OARFISH-010", "Doom Oarfish", 3, 16, 5, ("mid", "serpent", "omen"),
          quality="foul", abilities=("regret_draw",),
          description="Its appearance heralds disaster. Draw a Regret."),
    _fish(PLUG_FISH_ID, "The Plug", 3, 0, 4, ("large", "artifact", "special"),
          quality="foul", abilities=("special", "end_turn", "start_erosion"),
          description="End your turn immediately. Begin shoal erosion process."),
    _fish("FISH-D3-KRAKEN-001", "Lesser Kraken", 3, 18, 5, ("large", "beast", "legendary"),
          quality="foul", abilities=("legendary", "tentacles", "regret_draw_2"),
          description="A smaller cousin of the great Kraken. Draw 2 Regrets."),
    _fish("FISH-D3-SQUID-006", "Colossal Squid", 3, 18, 5, ("large", "cephalopod", "legendary"),
          quality="foul", abilities=("tentacles", "regret_draw"),
          description="Tentacles as thick as ship masts. Draw a Regret."),
    _fish("FISH-D3-SERPENT-008", "Sea Serpent", 3, 20, 5, ("large", "serpent", "legendary"),
          quality="foul", abilities=("legendary", "madness_+1"),
          description="Ancient sailors warned of its coils. +1 Madness."),
    _fish("FISH-D3-WHALE-007", "Ghost Whale", 3, 22, 6, ("large", "mammal", "legendary"),
          abilities=("legendary", "ancient"),
          description="A spectral cetacean from beyond the veil."),
    _fish("FISH-D3-LEVIATHAN-002", "Deep Leviathan", 3, 25, 6, ("large", "beast", "ancient"),
          quality="foul", abilities=("legendary", "ancient", "madness_+2"),
          description="An ancient creature from the beginning of time. +2 Madness."),
    _fish("FISH-D3-DRAGON-013", "Abyssal Dragon", 3, 28, 6, ("large", "beast", "legendary"),
          quality="foul", abilities=("legendary", "madness_+2", "regret_draw"),
          description="The ultimate prize of the deep. +2 Madness, draw a Regret."),
)


FISH_BY_DEPTH: dict[int, tuple[FishCard, ...]] = {
    1: DEPTH_1_FISH,
    2: DEPTH_2_FISH,
    3: DEPTH_3_FISH,
}

ALL_FISH: tuple[FishCard, ...] = DEPTH_1_FISH + DEPTH_2_FISH + DEPTH_3_FISH
