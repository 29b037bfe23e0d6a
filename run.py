"""Dungeon Crawler generator CLI entry point.

Generates a dungeon layout and prints either a glyph map with a generation
report or the JSON payload consumed by renderers. Accepts configuration via
flags and CRAWLER_* environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from crawler import __version__
from crawler.dungeon import DungeonConfig, DungeonConfigError, generate_dungeon
from crawler.logging_utils import get_logger, set_level

log = get_logger("crawler.cli")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Crawler Generator

    Place rooms, triangulate their centers, keep a spanning tree plus a few
    loops, and route corridors between them. Configuration can be provided via
    CLI flags or CRAWLER_* environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          CRAWLER_WIDTH, CRAWLER_HEIGHT          Grid size (default: 30x30)
          CRAWLER_MAX_ROOMS                      Target room count (default: 7)
          CRAWLER_EXTRA_EDGE_CHANCE              Loop edge probability (default: 0.3)
          CRAWLER_SEED                           Fixed seed (default: random)
          CRAWLER_LOG_LEVEL                      debug | info | warn | error

        Examples:
          # Generate with a random seed and print the map
          python run.py

          # Reproduce a layout
          python run.py generate --seed 42

          # Emit the renderer payload
          python run.py generate --seed 42 --json > dungeon.json
        """
    )

    parser = argparse.ArgumentParser(
        prog="crawler",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Dungeon Crawler Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon layout",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env CRAWLER_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height in cells")
    gen_parser.add_argument("--max-rooms", dest="max_rooms", type=int, default=None, help="Target room count")
    gen_parser.add_argument(
        "--extra-edge-chance",
        dest="extra_edge_chance",
        type=float,
        default=None,
        help="Probability of re-adding a non-tree edge as a loop",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the dungeon payload and report as JSON")
    gen_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored output")
    gen_parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Override CRAWLER_LOG_LEVEL",
    )
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to generate (inserted after top-level options)
    argv = list(argv)
    i = 0
    while i < len(argv):
        if argv[i] == "--env-file":
            i += 2
        elif argv[i].startswith("--env-file=") or argv[i] in ("--version", "-h", "--help"):
            i += 1
        else:
            break
    if i >= len(argv) or argv[i] not in subparsers.choices:
        argv.insert(min(i, len(argv)), "generate")

    return parser.parse_args(argv)


def _render_text(dungeon, color: bool) -> str:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon{Style.RESET_ALL}" if color else "Dungeon"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    report = dungeon.report
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Seed:'):12} {value(dungeon.seed)}",
        f"  {label('Size:'):12} {value(f'{dungeon.width}x{dungeon.height}')}",
        f"  {label('Rooms:'):12} {value(f'{report.rooms_placed}/{report.rooms_target}')}",
        f"  {label('Edges:'):12} {value(f'{report.mst_edges} tree + {report.loop_edges} loop')}",
        f"  {label('Routed:'):12} {value(report.edges_routed)}",
        f"  {label('Dropped:'):12} {value(report.edges_dropped)}",
        f"  {label('Corridors:'):12} {value(report.corridor_cells)}",
        divider,
    ]
    border = "+" + "-" * dungeon.width + "+"
    body = [border] + [f"|{row}|" for row in dungeon.to_ascii().split("\n")] + [border]
    if report.degraded:
        warn = f"{Fore.RED}[WARN]{Style.RESET_ALL}" if color else "[WARN]"
        body.append(f"{warn} {report.room_groups} room groups are not joined by corridors")
    return "\n".join(lines + body)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    if getattr(args, "log_level", None):
        set_level(args.log_level)

    try:
        config = DungeonConfig.from_env(
            seed=args.seed,
            width=args.width,
            height=args.height,
            max_rooms=args.max_rooms,
            extra_edge_chance=args.extra_edge_chance,
        )
        dungeon = generate_dungeon(config)
    except DungeonConfigError as exc:
        log.error(event="invalid_config", error=str(exc))
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = {"seed": dungeon.seed, "dungeon": dungeon.to_dict(), "report": dungeon.report.to_dict()}
        print(json.dumps(payload))
        return 0

    color = not args.no_color and sys.stdout.isatty()
    if color:
        _color_init()  # pragma: no cover - terminal dependent
    print(_render_text(dungeon, color))
    return 0


def cli() -> None:  # pragma: no cover - console script shim
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
