"""Random initial grids."""

import numpy as np
from typing import Optional
import logging

from .core.grid import Grid, validate_dimensions

logger = logging.getLogger(__name__)

DEFAULT_LIVE_PROBABILITY = 0.2


def seed_grid(width: int, height: int,
              live_probability: float = DEFAULT_LIVE_PROBABILITY,
              rng: Optional[np.random.Generator] = None) -> Grid:
    """Create a grid whose cells are independently alive with given probability.

    Args:
        width: Grid width in cells
        height: Grid height in cells
        live_probability: Probability of each cell being alive (0.0 to 1.0)
        rng: Random generator (fresh unseeded generator if None)

    Returns:
        Newly seeded grid

    Raises:
        ValueError: If dimensions or probability are invalid
    """
    if not (0.0 <= live_probability <= 1.0):
        raise ValueError(f"Live probability must be in [0.0, 1.0], got {live_probability}")
    validate_dimensions(width, height)

    if rng is None:
        rng = np.random.default_rng()

    state = rng.random((height, width)) < live_probability
    grid = Grid(width, height, state)

    logger.debug(f"Seeded {width}x{height} grid with p={live_probability}: {grid.count_alive()} alive")
    return grid
