"""
Deep Regrets CLI - Command-line interface for the engine.

Usage:
    deepregrets simulate --players hugo,alba --seed 7   Play a full bot game
    deepregrets tiers                                   Show the madness table
    deepregrets characters                              List playable captains
"""

import argparse
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Deep Regrets - Rules engine and automa",
        prog="deepregrets",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("DEEPREGRETS_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $DEEPREGRETS_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a full game between bots")
    simulate_parser.add_argument(
        "--players", default="hugo,alba",
        help="Comma-separated captain ids, one per seat",
    )
    simulate_parser.add_argument("--seed", type=int, default=_env_seed(), help="Random seed")
    simulate_parser.add_argument(
        "--difficulty", default="medium", choices=["easy", "medium", "hard"],
    )
    simulate_parser.add_argument(
        "--personality", default="balanced", choices=["balanced", "aggressive", "conservative"],
    )
    simulate_parser.add_argument("--max-steps", type=int, default=5000)
    simulate_parser.add_argument("--verbose", "-v", action="store_true", help="Print every action")
    simulate_parser.add_argument("--json", action="store_true", help="Dump the final state as JSON")

    subparsers.add_parser("tiers", help="Show the madness tier table")
    subparsers.add_parser("characters", help="List playable captains")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "tiers":
        cmd_tiers(args)
    elif args.command == "characters":
        cmd_characters(args)
    else:
        parser.print_help()
        sys.exit(1)


def _env_seed():
    raw = os.getenv("DEEPREGRETS_SEED")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        print(f"Ignoring non-integer DEEPREGRETS_SEED: {raw}", file=sys.stderr)
        return None


def cmd_simulate(args):
    """Play a full bot game and print the final scores."""
    from .bots import create_bots
    from .engine_core import Action, GameRandom, Reducer, state_to_json
    from .session import GameLoop, LoopState

    characters = [c.strip() for c in args.players.split(",") if c.strip()]
    reducer = Reducer(rng=GameRandom(args.seed))
    result = reducer.apply(None, Action.init_game(characters, ai_players=[True] * len(characters)))
    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)

    state = result.new_state
    bots = create_bots(
        [p.id for p in state.players],
        difficulty=args.difficulty,
        personality=args.personality,
        seed=args.seed,
    )
    loop = GameLoop(state, bots=bots, reducer=reducer)
    print(f"Simulating {', '.join(p.name for p in state.players)} (seed {args.seed})")

    steps = loop.run_to_completion(max_steps=args.max_steps)
    if args.verbose:
        for step in steps:
            if step.action is None:
                continue
            line = f"[{step.actor}] {step.action.action_type.value}"
            if step.explanation:
                line += f" - {step.explanation}"
            print(line)
            for change in step.state_changes:
                print(f"    {change}")

    final = loop.state
    if not final.is_game_over:
        reason = steps[-1].errors if steps and steps[-1].loop_state is LoopState.STALLED else "step limit"
        print(f"Game did not finish after {len(steps)} steps ({reason})")
        sys.exit(1)

    print(f"\nGame over after {len(steps)} steps")
    print(f"{'Angler':<16}{'Hand':>6}{'Mounted':>9}{'Bucks':>7}{'Regrets':>9}{'Forfeit':>9}{'Total':>7}")
    for player, score in zip(final.players, final.final_scores):
        print(
            f"{player.name:<16}{score.hand_fish:>6}{score.mounted_fish:>9}{score.fishbucks:>7}"
            f"{score.regret_value:>9}{score.forfeited:>9}{score.total:>7}"
        )
    print(f"\nWinner: {final.winner}")

    if args.json:
        print(state_to_json(final, indent=2))


def cmd_tiers(args):
    """Print the madness tier table."""
    from .engine_core.madness import TIERS

    print(f"{'Tier':<6}{'Regrets':<10}{'Fair':>6}{'Foul':>6}{'Dice':>6}  Port discount")
    for tier in TIERS:
        upper = "+" if tier.max_regrets is None else f"-{tier.max_regrets}"
        span = f"{tier.min_regrets}{upper}" if tier.max_regrets != tier.min_regrets else str(tier.min_regrets)
        print(
            f"{tier.index:<6}{span:<10}{tier.fair_modifier:>+6}{tier.foul_modifier:>+6}"
            f"{tier.max_dice:>6}  {'yes' if tier.port_discount else 'no'}"
        )


def cmd_characters(args):
    """List playable captains."""
    from .catalog import CHARACTERS

    for character in CHARACTERS:
        print(f"{character.id:<8}{character.name} - {character.title}")
        print(f"        {character.bonus_text}")


if __name__ == "__main__":
    main()
