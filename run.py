"""mazegen CLI entry point.

Provides subcommands for generating a map and printing its metrics. Accepts
configuration via flags and MAZEGEN_* environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import sys
from dataclasses import replace
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mazegen import ConfigError, MapConfig, MazeGenerator, __version__
from mazegen.logging_utils import log, set_level
from mazegen.maze.metrics import map_stats
from mazegen.maze.textmap import render

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    mazegen - symmetric arcade maze generator

    Generate a maze map from size and path constraints. Configuration can be
    provided via CLI flags or MAZEGEN_* environment variables; CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAZEGEN_SEED          Seed for reproducible maps
          MAZEGEN_DEBUG         1 to log generation progress at info level
          MAZEGEN_MAX_ATTEMPTS  Attempt budget
          MAZEGEN_MAX_TIME_MS   Time budget in milliseconds
          MAZEGEN_LOG_LEVEL     debug | info | warn | error (default: info)
          MAZEGEN_LOG_JSON      1 to emit JSON log lines

        Examples:
          # Generate the default 28x31 map
          python run.py generate

          # Small reproducible map
          python run.py generate --width 12 --height 13 --path-min 40 --seed 7

          # Options as a JSON file (same keys as MapConfig.from_options)
          python run.py generate --options maze.json

          # Metrics of one generation as JSON
          python run.py stats --seed 7

          # Load variables from .env first
          python run.py --env-file .env generate
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazegen",
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
        "--log-level",
        dest="log_level",
        default=None,
        choices=["debug", "info", "warn", "error"],
        help="Override MAZEGEN_LOG_LEVEL",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mazegen {__version__}",
    )

    # Flags shared by both subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--options", dest="options_path", default=None, help="JSON file with nested generator options")
    common.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    common.add_argument("--width", type=int, default=None, help="Grid width, even, >= 12 (default: 28)")
    common.add_argument("--height", type=int, default=None, help="Grid height, odd, >= 12 (default: 31)")
    common.add_argument("--path-min", dest="path_min", type=int, default=None, help="Minimum EMPTY cells")
    common.add_argument("--path-max", dest="path_max", type=int, default=None, help="Maximum EMPTY cells")
    common.add_argument("--max-attempts", dest="max_attempts", type=int, default=None, help="Attempt budget")
    common.add_argument("--max-time-ms", dest="max_time_ms", type=int, default=None, help="Time budget (ms)")
    common.add_argument("--debug", action="store_true", help="Log generation progress at info level")

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate a map and print it as text",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a map and print it (# wall, . path, G ghost house, T teleporter)",
    )
    gen_parser.set_defaults(command="generate")

    stats_parser = subparsers.add_parser(
        "stats",
        parents=[common],
        help="Generate a map and print its metrics as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    stats_parser.set_defaults(command="stats")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    if args.command is None:
        # Only global flags were given
        args = parser.parse_args(list(argv) + ["generate"])
    return args


_FLAG_FIELDS = ("seed", "width", "height", "path_min", "path_max", "max_attempts", "max_time_ms")


def build_config(args: argparse.Namespace) -> MapConfig:
    """Options file (or defaults), then environment, then CLI flags."""
    if args.options_path:
        with open(args.options_path, "r", encoding="utf-8") as f:
            config = MapConfig.from_options(json.load(f))
    else:
        config = MapConfig()
    config = config.with_env_overrides()
    changes = {name: getattr(args, name) for name in _FLAG_FIELDS if getattr(args, name) is not None}
    if args.debug:
        changes["debug"] = True
    if changes:
        config = replace(config, **changes)
    return config.validate()


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()
    if args.log_level:
        set_level(args.log_level)

    mode = (getattr(args, "command", None) or "generate").lower()
    try:
        config = build_config(args)
        gen = MazeGenerator(config)
    except ConfigError as e:
        log.error(event="invalid_config", field=e.field, code=e.code, message=e.message)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    grid = gen.run()
    stats = map_stats(grid)

    if mode == "stats":
        print(
            json.dumps(
                {
                    "seed": gen.rng.seed,
                    "valid": gen.valid,
                    "path_blocks": stats.path_blocks,
                    "teleporter_pairs": stats.teleporter_pairs,
                    "metrics": gen.metrics,
                },
                indent=2,
            )
        )
        return 0 if gen.valid else 1

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}mazegen {__version__}{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else f"mazegen {__version__}"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Size:'):12} {value(f'{config.width}x{config.height}')}",
        f"  {label('Seed:'):12} {value(gen.rng.seed)}",
        f"  {label('Attempts:'):12} {value(gen.attempts)}",
        f"  {label('Valid:'):12} {value('YES' if gen.valid else 'NO')}",
        f"  {label('Paths:'):12} {value(stats.path_blocks)}",
        f"  {label('Teleporters:'):12} {value(stats.teleporter_pairs)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    print(render(grid))
    return 0 if gen.valid else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
