"""
Command line entry point.

Usage:
    asciigrav [CONFIG] [--bodies N] [--ticks N] [--tps R] [--seed S]
              [--force-method {pairwise,parallel}] [--headless]

Without CONFIG the reference configuration is used: 1000 bodies, G = 1,
10 ticks/s, running until interrupted (Ctrl-C exits with status 0).
"""

import argparse
import sys
import time
from typing import Optional, Sequence

from asciigrav import constants as const
from asciigrav.config import SimulationParameters
from asciigrav.evolution import run_live, run_simulation
from asciigrav.initialization import initialize_simulation
from asciigrav.terminal import AnsiTerminal

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2

# Headless runs need an explicit length
DEFAULT_HEADLESS_TICKS = 100


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='asciigrav',
        description='Live ASCII N-body gravity simulation'
    )
    parser.add_argument(
        'config',
        type=str,
        nargs='?',
        default=None,
        help='Path to YAML configuration file (default: reference configuration)'
    )
    parser.add_argument(
        '--bodies',
        type=int,
        default=None,
        help='Number of bodies'
    )
    parser.add_argument(
        '--ticks',
        type=int,
        default=None,
        help='Stop after this many ticks (default: run until interrupted)'
    )
    parser.add_argument(
        '--tps',
        type=float,
        default=None,
        help='Target ticks per second'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed (default: current time)'
    )
    parser.add_argument(
        '--force-method',
        choices=const.FORCE_METHODS,
        default=None,
        help='Force kernel'
    )
    parser.add_argument(
        '--headless',
        action='store_true',
        help=f'Integrate without drawing or pacing (default {DEFAULT_HEADLESS_TICKS} ticks)'
    )
    return parser


def load_parameters(args: argparse.Namespace) -> SimulationParameters:
    """Configuration file (or defaults) with command line overrides applied."""
    if args.config is not None:
        params = SimulationParameters.from_yaml(args.config)
    else:
        params = SimulationParameters()

    if args.bodies is not None:
        params.n_bodies = args.bodies
    if args.ticks is not None:
        params.max_ticks = args.ticks
    if args.tps is not None:
        params.ticks_per_second = args.tps
    if args.seed is not None:
        params.seed = args.seed
    if args.force_method is not None:
        params.force_method = args.force_method

    return params


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        params = load_parameters(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    messages = params.validate()
    for message in messages:
        print(message, file=sys.stderr)
    if any(message.startswith("ERROR") for message in messages):
        return EXIT_CONFIG_ERROR

    # Seed once per process; time-based unless given
    seed = params.seed if params.seed is not None else int(time.time())

    if args.headless:
        n_steps = params.max_ticks if params.max_ticks is not None else DEFAULT_HEADLESS_TICKS
        print(f"Seed: {seed}")
        run_simulation(params, n_steps, seed=seed)
        return EXIT_OK

    state = initialize_simulation(params, seed=seed)

    with AnsiTerminal(fallback=(params.fallback_width, params.fallback_height)) as terminal:
        try:
            run_live(state, params, terminal)
        except KeyboardInterrupt:
            pass

    print()
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
