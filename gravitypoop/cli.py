from __future__ import annotations

import argparse
import importlib
import math
import random
import sys

from gravitypoop.collaborators import AutoConfirmer, Confirmer, Notifier
from gravitypoop.definition import GameDefinition
from gravitypoop.formatting import format_number, format_status
from gravitypoop.log import configure_logging
from gravitypoop.persistence import JsonFileStore
from gravitypoop.runtime import GameRuntime

DEFAULT_GAME = "gravitypoop.catalog"


class PromptConfirmer(Confirmer):
    """Asks on stdin. Anything but y/yes declines."""

    def confirm(self, message: str) -> bool:
        try:
            answer = input(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


class PrintNotifier(Notifier):
    def notify(self, title: str, message: str = "") -> None:
        print(f"*** {title} {message}".rstrip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gravitypoop",
        description="Gravity Poop idle game in the terminal",
    )
    parser.add_argument(
        "--game",
        default=DEFAULT_GAME,
        help=f"Python module with define_game() (default: {DEFAULT_GAME})",
    )
    parser.add_argument(
        "--save-dir", default="saves", help="Directory holding save files"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Log level (default: WARNING)"
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show the current game state")

    click = sub.add_parser("click", help="Click the poop")
    click.add_argument("--count", type=int, default=1, help="Number of clicks")

    buy = sub.add_parser("buy", help="Buy a producer")
    buy.add_argument("producer", help="Producer id, e.g. toilet")
    buy.add_argument("--count", type=int, default=1, help="How many to buy")

    prestige = sub.add_parser("prestige", help="Reset for one Gold Essence")
    prestige.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )

    idle = sub.add_parser("idle", help="Let game time pass")
    idle.add_argument("seconds", type=float, help="Seconds of game time")
    idle.add_argument("--seed", type=int, default=None, help="Random seed")
    idle.add_argument(
        "--collect-bonus",
        action="store_true",
        help="Collect every golden poop as soon as it appears",
    )

    return parser


def load_game(module_path: str) -> GameDefinition:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def build_runtime(args: argparse.Namespace) -> GameRuntime:
    definition = load_game(args.game)
    confirmer: Confirmer
    if getattr(args, "yes", False):
        confirmer = AutoConfirmer(True)
    else:
        confirmer = PromptConfirmer()
    runtime = GameRuntime(
        definition,
        store=JsonFileStore(args.save_dir),
        confirmer=confirmer,
        notifier=PrintNotifier(),
        rng=random.Random(getattr(args, "seed", None)),
    )
    runtime.load()
    return runtime


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "idle" and not (math.isfinite(args.seconds) and args.seconds >= 0):
        parser.error(f"idle: seconds must be a finite non-negative number, got {args.seconds}")

    configure_logging(args.log_level)
    runtime = build_runtime(args)

    if args.command == "status":
        print(format_status(runtime))
        return

    if args.command == "click":
        total = 0.0
        for _ in range(max(0, args.count)):
            total += runtime.on_click()
        runtime.check_achievements()
        print(f"+{format_number(total)} poop ({format_number(runtime.state.resource_count)} total)")

    elif args.command == "buy":
        if runtime.definition.get_producer(args.producer) is None:
            print(f"Error: unknown producer {args.producer!r}")
            sys.exit(1)
        bought = 0
        for _ in range(max(0, args.count)):
            result = runtime.purchase(args.producer)
            if not result.success:
                print(f"Stopped: {result.reason} (next costs {format_number(result.cost)})")
                break
            bought += 1
        runtime.check_achievements()
        print(f"Bought {bought} x {args.producer}")

    elif args.command == "prestige":
        result = runtime.request_prestige()
        if not result.success:
            print(f"No prestige: {result.reason}")

    elif args.command == "idle":
        _run_idle(runtime, args.seconds, args.collect_bonus)
        print(format_status(runtime))

    runtime.save()


def _run_idle(runtime: GameRuntime, seconds: float, collect_bonus: bool) -> None:
    """Advance game time with the standard periodic actions running."""
    runtime.start()
    if collect_bonus:

        def _collect_all() -> None:
            for event in runtime.visible_bonus_events():
                runtime.collect_bonus_event(event.handle)

        runtime.scheduler.call_every(
            runtime.config.bonus_check_interval, _collect_all, name="auto-collect"
        )
    runtime.advance(seconds)
