"""Generation stepper.

Applies a RuleTable to the PatternKey of every cell. All keys are computed
from the untouched current grid before any cell of the next grid is
decided, so the result does not depend on cell processing order.
"""

import numpy as np
from typing import Optional
import logging

from .grid import Grid
from .encoder import encode_cell, encode_grid, key_at
from .rule_table import RuleTable, reference_table

logger = logging.getLogger(__name__)


class GridStepper:
    """Computes the next generation of a grid from a rule table."""

    def __init__(self, rule_table: Optional[RuleTable] = None):
        """Initialize the stepper.

        Args:
            rule_table: Rules to apply (reference table if None)
        """
        if rule_table is not None and not isinstance(rule_table, RuleTable):
            raise ValueError(f"rule_table must be a RuleTable, got {type(rule_table).__name__}")
        self.rule_table = rule_table if rule_table is not None else reference_table()

    def update_cell(self, grid: Grid, x: int, y: int) -> bool:
        """Next state of a single cell.

        Args:
            grid: Current grid state
            x: X coordinate of cell (column)
            y: Y coordinate of cell (row)

        Returns:
            Next state of the cell (True=alive, False=dead)
        """
        return self.rule_table.lookup(encode_cell(grid, x, y))

    def apply_rules(self, keys: np.ndarray) -> Grid:
        """Map an encode_grid result to a new grid of next states."""
        if keys.ndim != 3 or keys.shape[2] != 2:
            raise ValueError(f"Key array must have shape (height, width, 2), got {keys.shape}")

        height, width = keys.shape[:2]
        new_grid = Grid(width, height)

        for y in range(height):
            for x in range(width):
                new_grid.state[y, x] = self.rule_table.lookup(key_at(keys, x, y))

        return new_grid

    def update_grid(self, grid: Grid) -> Grid:
        """Apply one generation of rules to the entire grid.

        Args:
            grid: Current grid state (left unmodified)

        Returns:
            New grid with next generation state
        """
        keys = encode_grid(grid)
        return self.apply_rules(keys)
