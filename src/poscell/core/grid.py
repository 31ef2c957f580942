"""Core grid state for the positional-key cellular automaton.

The grid is a fixed-size, bounded (non-wrapping) field of boolean cells
backed by a numpy boolean array indexed ``state[y, x]``. A simulation step
never mutates a grid in place; it produces a new one of identical size.
"""

import numpy as np
from typing import Iterable, Iterator, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


def validate_dimensions(width: int, height: int) -> None:
    """Check that width and height are integers of at least 1.

    Raises:
        ValueError: If either dimension is not an integer (bools included) or is below 1
    """
    for value in (width, height):
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"Grid dimensions must be integers, got {width!r}x{height!r}")
    if width < 1 or height < 1:
        raise ValueError(f"Grid dimensions must be at least 1x1, got {width}x{height}")


class Grid:
    """2D boolean grid of cell states.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        state: 2D numpy boolean array of shape (height, width), True=alive
    """

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            initial_state: Optional initial grid state array

        Raises:
            ValueError: If dimensions are invalid or initial_state shape doesn't match
        """
        validate_dimensions(width, height)

        self.width = int(width)
        self.height = int(height)

        if initial_state is not None:
            if initial_state.shape != (self.height, self.width):
                raise ValueError(f"Initial state shape {initial_state.shape} doesn't match grid size {(self.height, self.width)}")
            if initial_state.dtype != bool:
                raise ValueError("Initial state must be boolean array")
            self.state = initial_state.copy()
        else:
            self.state = np.zeros((self.height, self.width), dtype=bool)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Grid':
        """Create a grid sized to a 2D array; non-boolean arrays are cast."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Grid array must be 2D, got {array.ndim}D")
        if array.dtype != bool:
            array = array.astype(bool)
        height, width = array.shape
        return cls(width, height, array)

    @classmethod
    def from_cells(cls, width: int, height: int, alive: Iterable[Tuple[int, int]]) -> 'Grid':
        """Create a grid with the given (x, y) cells alive."""
        grid = cls(width, height)
        for x, y in alive:
            grid.set(x, y, True)
        return grid

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        return Grid(self.width, self.height, self.state)

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height) of the grid."""
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> bool:
        """Get cell state at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        return bool(self.state[y, x])

    def set(self, x: int, y: int, alive: bool) -> None:
        """Set cell state at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)
            alive: True to set alive, False to set dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        self.state[y, x] = bool(alive)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate over every (x, y) coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def alive_cells(self) -> list[Tuple[int, int]]:
        """List (x, y) coordinates of alive cells in row-major order."""
        rows, cols = np.nonzero(self.state)
        return [(int(x), int(y)) for y, x in zip(rows, cols)]

    def count_alive(self) -> int:
        """Count total number of alive cells."""
        return int(np.sum(self.state))

    def density(self) -> float:
        """Get fraction of cells that are alive."""
        return self.count_alive() / (self.width * self.height)

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self.state)

    def __getitem__(self, key: Tuple[int, int]) -> bool:
        """Access cell state using grid[x, y] syntax."""
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key: Tuple[int, int], value: bool) -> None:
        """Set cell state using grid[x, y] = value syntax."""
        x, y = key
        self.set(x, y, value)

    def __eq__(self, other: object) -> bool:
        """Check equality with another grid."""
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width == other.width and
                self.height == other.height and
                np.array_equal(self.state, other.state))

    __hash__ = None

    def __str__(self) -> str:
        """Full text dump using the default render style."""
        from ..render import render_grid
        return render_grid(self)

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        alive_count = self.count_alive()
        density_pct = self.density() * 100
        return f"Grid({self.width}x{self.height}, alive={alive_count}, density={density_pct:.1f}%)"
