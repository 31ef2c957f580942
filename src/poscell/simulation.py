"""
Simulation driver

Owns the current grid and advances it one generation at a time. Each
generation is encoded and stepped in full before the grid is replaced; the
loop runs for a fixed number of generations or until a cancellation token
is set.
"""

import threading
import time
import numpy as np
from typing import TYPE_CHECKING, Callable, Optional
import logging

from .core.grid import Grid
from .core.rule_table import RuleTable
from .core.stepper import GridStepper
from .seeder import seed_grid

if TYPE_CHECKING:
    from .config import AutomatonConfig

logger = logging.getLogger(__name__)


class Simulation:
    """Evolving automaton: a grid plus the stepper that advances it."""

    def __init__(self, grid: Grid, rule_table: Optional[RuleTable] = None):
        """Initialize simulation.

        Args:
            grid: Initial grid (not modified; each step replaces it)
            rule_table: Rules to apply (reference table if None)
        """
        if not isinstance(grid, Grid):
            raise ValueError(f"grid must be a Grid, got {type(grid).__name__}")

        self.grid = grid
        self.stepper = GridStepper(rule_table)
        self.generation = 0

        logger.debug(f"Created simulation on {grid.width}x{grid.height} grid with {len(self.stepper.rule_table)} rules")

    @classmethod
    def from_config(cls, config: 'AutomatonConfig') -> 'Simulation':
        """Seed a grid from an AutomatonConfig and wrap it in a simulation."""
        rng = np.random.default_rng(config.seed)
        grid = seed_grid(config.width, config.height, config.live_probability, rng)
        return cls(grid, config.rules)

    @property
    def rule_table(self) -> RuleTable:
        return self.stepper.rule_table

    def step(self) -> int:
        """Advance one generation.

        Returns:
            Number of live cells after evolution
        """
        self.grid = self.stepper.update_grid(self.grid)
        self.generation += 1
        return self.grid.count_alive()

    def step_multiple(self, steps: int) -> list[int]:
        """Advance several generations.

        Returns:
            Live cell count after each step
        """
        if steps < 0:
            raise ValueError(f"Steps must be non-negative, got {steps}")
        return [self.step() for _ in range(steps)]

    def run(self, generations: Optional[int] = None, delay: float = 0.0,
            on_generation: Optional[Callable[[Grid, int], None]] = None,
            cancel: Optional[threading.Event] = None) -> int:
        """Evolve until the generation budget is spent or cancel is set.

        Args:
            generations: Number of generations to run (None = until cancelled)
            delay: Pause in seconds after each generation
            on_generation: Called with (grid, generation) after every step
            cancel: Token checked between generations; also interrupts the pause

        Returns:
            Number of generations completed by this call
        """
        if generations is not None and generations < 0:
            raise ValueError(f"Generations must be non-negative, got {generations}")
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        logger.info(f"Starting run: generations={'unbounded' if generations is None else generations}, delay={delay}s")

        completed = 0
        while generations is None or completed < generations:
            if cancel is not None and cancel.is_set():
                break

            self.step()
            completed += 1

            if on_generation is not None:
                on_generation(self.grid, self.generation)

            if delay > 0:
                if cancel is not None:
                    cancel.wait(delay)
                else:
                    time.sleep(delay)

        logger.info(f"Run stopped after {completed} generations (total {self.generation})")
        return completed

    def __repr__(self) -> str:
        return f"Simulation(generation={self.generation}, grid={self.grid!r})"
