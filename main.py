"""Main entry point for d20 roll auditing."""

import argparse
import os
import sys

from parameters import SAVE_FILE
from d20audit.registry import PlayerRegistry
from d20audit.storage import load_registry, save_registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Track players' d20 rolls and check them for cheating"
    )
    parser.add_argument(
        "--save-file",
        type=str,
        default=SAVE_FILE,
        help="Path to the players save file",
    )
    parser.add_argument(
        "--add-player",
        type=str,
        action="append",
        default=[],
        metavar="NAME",
        help="Add a player with an empty table (repeatable)",
    )
    parser.add_argument(
        "--rename",
        type=str,
        nargs=2,
        metavar=("OLD", "NEW"),
        help="Rename a player",
    )
    parser.add_argument(
        "--table-size",
        type=int,
        default=None,
        help="Resize every player's table",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Suspicion score at which a player is flagged",
    )
    parser.add_argument(
        "--roll",
        type=str,
        nargs=2,
        action="append",
        default=[],
        metavar=("NAME", "VALUE"),
        help="Record a roll for a player (repeatable)",
    )
    parser.add_argument(
        "--check",
        type=str,
        action="append",
        default=[],
        metavar="NAME",
        help="Run the cheat check for a player (repeatable)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Print every player's table",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        default=False,
        help="Run the walk-through on the save file",
    )
    return parser


def run_demo(registry: PlayerRegistry, is_new: bool):
    """Walk-through: start Vova with one roll, then fill a bigger table."""
    if is_new:
        vova = registry.add_player("Vova")

        # Table size is the amount of data points (rolls)
        registry.set_table_size(10)
        vova.record_roll(18)
        print(registry)
        return

    print(registry)

    vova = registry.get_player_or_first("Vova")
    vova.record_roll(1)
    registry.get_player_or_first(0).record_roll(2)
    registry.get_player_or_first("Vova").record_roll(1)

    registry.set_table_size(20)
    for value in range(1, 21):
        vova.record_roll(value)

    print(vova.face_counts())
    print(registry)
    print(f"Vova: {registry.verdict(vova)}")


def main(args=None):
    """Apply the requested changes to the save file and report.

    Args:
        args: Optional parsed arguments (for programmatic use)
    """
    if args is None:
        args = build_parser().parse_args()

    print("=== d20 Roll Audit ===\n")

    is_new = not os.path.exists(args.save_file)
    if is_new:
        print(f"Save file {args.save_file} does not exist, starting a new one.")
        registry = PlayerRegistry()
    else:
        registry = load_registry(args.save_file)
        print(f"Loaded {len(registry)} players from {args.save_file}")

    changed = False

    if args.demo:
        run_demo(registry, is_new)
        changed = True

    for name in args.add_player:
        if registry.find_player(name) is not None:
            print(
                f"Warning: Player {name} already exists, skipped.", file=sys.stderr
            )
            continue
        registry.add_player(name)
        print(f"Added player {name}")
        changed = True

    if args.rename:
        old_name, new_name = args.rename
        registry.rename_player(old_name, new_name)
        print(f"Renamed {old_name} to {new_name}")
        changed = True

    if args.table_size is not None:
        try:
            registry.set_table_size(args.table_size)
        except ValueError as e:
            print(f"Warning: {e}, table size unchanged.", file=sys.stderr)
        else:
            print(f"Table size set to {args.table_size}")
            changed = True

    if args.threshold is not None:
        registry.threshold = args.threshold
        print(f"Threshold set to {args.threshold}")
        changed = True

    for name, value in args.roll:
        try:
            roll = int(value)
        except ValueError:
            print(
                f"Warning: Roll {value!r} for {name} is not a number, skipped.",
                file=sys.stderr,
            )
            continue
        try:
            player = registry.get_player_or_first(name)
        except LookupError:
            print(
                f"Warning: No players to record {name}'s roll for.", file=sys.stderr
            )
            continue
        outcome = player.record_roll(roll)
        print(f"{player.name} rolled {outcome}")
        changed = True

    if args.show:
        print(registry)

    for name in args.check:
        try:
            player = registry.get_player_or_first(name)
        except LookupError:
            print(f"Warning: No players to check for {name}.", file=sys.stderr)
            continue
        print(f"{player.name}: {registry.verdict(player)}")

    if changed:
        save_registry(registry, args.save_file)
        print(f"Saved {len(registry)} players to {args.save_file}")


if __name__ == "__main__":
    main()
