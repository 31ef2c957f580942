#!/usr/bin/env python3
"""
Command line driver for the positional-key cellular automaton.

Seeds a random grid, then prints every generation followed by a separator
line, pausing between generations. Runs until the generation budget is spent
or the user interrupts it.
"""

import sys
import argparse
import logging
from typing import Optional, Sequence

from .config import AutomatonConfig, DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_DELAY
from .render import DEFAULT_STYLE, render_grid, separator
from .seeder import DEFAULT_LIVE_PROBABILITY
from .simulation import Simulation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poscell",
        description="Cellular automaton with positional neighborhood rules")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Grid height in cells")
    parser.add_argument("--probability", type=float, default=DEFAULT_LIVE_PROBABILITY,
                        help="Initial probability of a cell being alive")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY, help="Seconds between generations")
    parser.add_argument("--generations", type=int, default=None,
                        help="Generations to run (default: until interrupted)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the initial grid")
    parser.add_argument("--rules", default=None,
                        help="JSON file with a list of [key, state] rules (default: reference rules)")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Two characters for alive and dead cells")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = AutomatonConfig.from_args(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    simulation = Simulation.from_config(config)
    width = config.width

    def show(grid, generation):
        print(render_grid(grid, config.style))
        print(separator(width), flush=True)

    try:
        simulation.run(generations=config.generations, delay=config.delay, on_generation=show)
    except KeyboardInterrupt:
        logger.info(f"Interrupted at generation {simulation.generation}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
