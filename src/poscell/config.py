"""Run configuration for the automaton."""

from dataclasses import dataclass, field
from typing import Optional
import argparse
import logging

from .core.grid import validate_dimensions
from .core.rule_table import RuleTable, reference_table, load_rules
from .render import DEFAULT_STYLE, validate_style
from .seeder import DEFAULT_LIVE_PROBABILITY

logger = logging.getLogger(__name__)


DEFAULT_WIDTH = 44
DEFAULT_HEIGHT = 22
DEFAULT_DELAY = 0.5


@dataclass
class AutomatonConfig:
    """Parameters of one automaton run.

    Raises:
        ValueError: From __post_init__ if any parameter is out of range
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    live_probability: float = DEFAULT_LIVE_PROBABILITY
    delay: float = DEFAULT_DELAY
    style: str = DEFAULT_STYLE
    generations: Optional[int] = None   # None = run until cancelled
    seed: Optional[int] = None
    rules: RuleTable = field(default_factory=reference_table)

    def __post_init__(self):
        validate_dimensions(self.width, self.height)
        if not (0.0 <= self.live_probability <= 1.0):
            raise ValueError(f"Live probability must be in [0.0, 1.0], got {self.live_probability}")
        if self.delay < 0:
            raise ValueError(f"Delay must be non-negative, got {self.delay}")
        if self.generations is not None and self.generations < 0:
            raise ValueError(f"Generations must be non-negative, got {self.generations}")
        if not isinstance(self.rules, RuleTable):
            self.rules = RuleTable(self.rules)
        validate_style(self.style)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'AutomatonConfig':
        """Build a config from parsed command line arguments."""
        rules = load_rules(args.rules) if args.rules else reference_table()
        return cls(
            width=args.width,
            height=args.height,
            live_probability=args.probability,
            delay=args.delay,
            style=args.style,
            generations=args.generations,
            seed=args.seed,
            rules=rules,
        )
