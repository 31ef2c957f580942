"""Positional neighborhood encoding.

Instead of the usual 0-8 live-neighbor count, every cell's 3x3 block is
collapsed into a PatternKey: a pair of independent integer sums.

Positions of the block are numbered 1..9 in row-major raster order, the
centre being 5. Corner positions (1, 3, 7, 9) each add 1 to the ``imag``
axis when alive, edge positions (2, 4, 6, 8) each add 1 to the ``real``
axis, and a live centre adds CENTER_WEIGHT to the ``real`` axis. The key
therefore tells orthogonal and diagonal neighbors apart, which a plain
count cannot.

Weights are flat (1 per slot), so two blocks with the same number of live
edges and live corners share a key even if the live cells sit in different
slots: 512 blocks fall into 50 key classes.
"""

import math
import re
import numpy as np
from collections import Counter
from typing import NamedTuple, Tuple, Union
import logging

from .grid import Grid

logger = logging.getLogger(__name__)


CENTER_WEIGHT = 10

# (dx, dy, real_weight, imag_weight) in raster order, top-left first.
NEIGHBORHOOD_WEIGHTS: Tuple[Tuple[int, int, int, int], ...] = tuple(
    (n % 3 - 1, n // 3 - 1,
     CENTER_WEIGHT if n == 4 else (1 if n % 2 == 1 else 0),
     0 if n == 4 or n % 2 == 1 else 1)
    for n in range(9)
)

_KEY_PATTERN = re.compile(
    r"^\s*(?:(?P<real>[+-]?\d+)(?=[+-]))?(?P<imag>[+-]?\d*)[ij]\s*$|^\s*(?P<only>[+-]?\d+)\s*$"
)


class PatternKey(NamedTuple):
    """Neighborhood key as an integer pair compared by structural equality."""

    real: int
    imag: int = 0

    def __str__(self) -> str:
        if self.imag == 0:
            return str(self.real)
        if self.real == 0:
            return f"{self.imag}i"
        sign = "+" if self.imag > 0 else "-"
        return f"{self.real}{sign}{abs(self.imag)}i"

    @property
    def center_alive(self) -> bool:
        """Whether the key includes the centre offset."""
        return self.real >= CENTER_WEIGHT

    @property
    def orthogonal(self) -> int:
        """Number of live edge neighbors."""
        return self.real - CENTER_WEIGHT if self.center_alive else self.real

    @property
    def diagonal(self) -> int:
        """Number of live corner neighbors."""
        return self.imag

    @classmethod
    def parse(cls, text: str) -> 'PatternKey':
        """Parse complex-literal notation such as ``"12"``, ``"2i"`` or ``"10+1i"``.

        Raises:
            ValueError: If the text is not an integer or integer complex literal
        """
        match = _KEY_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Cannot parse pattern key {text!r}")
        if match.group("only") is not None:
            return cls(int(match.group("only")), 0)

        real = int(match.group("real")) if match.group("real") is not None else 0
        imag_text = match.group("imag")
        if imag_text in ("", "+"):
            imag = 1
        elif imag_text == "-":
            imag = -1
        else:
            imag = int(imag_text)
        return cls(real, imag)

    @classmethod
    def coerce(cls, value: Union['PatternKey', int, complex, str, Tuple[int, int]]) -> 'PatternKey':
        """Normalise any accepted key representation to a PatternKey.

        Accepts a PatternKey, an int, an (int, int) pair, a complex number with
        integral parts, or a string in complex-literal notation.

        Raises:
            ValueError: If the value has no exact integer-pair reading
        """
        if isinstance(value, PatternKey):
            return value
        if isinstance(value, (bool, np.bool_)):
            raise ValueError(f"Pattern key must not be a boolean: {value!r}")
        if isinstance(value, (int, np.integer)):
            return cls(int(value), 0)
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, complex):
            if not (math.isfinite(value.real) and math.isfinite(value.imag)):
                raise ValueError(f"Pattern key {value!r} has non-finite components")
            if value.real != int(value.real) or value.imag != int(value.imag):
                raise ValueError(f"Pattern key {value!r} has non-integral components")
            return cls(int(value.real), int(value.imag))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            real, imag = value
            if all(isinstance(v, (int, np.integer)) and not isinstance(v, (bool, np.bool_))
                   for v in (real, imag)):
                return cls(int(real), int(imag))
        raise ValueError(f"Unsupported pattern key representation: {value!r}")


def encode_pattern(pattern: np.ndarray) -> PatternKey:
    """Encode a single 3x3 boolean block.

    Args:
        pattern: 3x3 boolean array, pattern[row, col], centre at [1, 1]

    Returns:
        PatternKey for the block
    """
    pattern = np.asarray(pattern, dtype=bool)
    if pattern.shape != (3, 3):
        raise ValueError(f"Neighborhood pattern must be 3x3, got {pattern.shape}")

    real = 0
    imag = 0
    for dx, dy, real_weight, imag_weight in NEIGHBORHOOD_WEIGHTS:
        if pattern[dy + 1, dx + 1]:
            real += real_weight
            imag += imag_weight
    return PatternKey(real, imag)


def encode_cell(grid: Grid, x: int, y: int) -> PatternKey:
    """Encode the 3x3 block centred on (x, y).

    Positions outside the grid are dead; they are never wrapped.

    Args:
        grid: The grid containing the cell
        x: X coordinate of cell (column)
        y: Y coordinate of cell (row)

    Returns:
        PatternKey summarising the neighborhood
    """
    real = 0
    imag = 0

    for dx, dy, real_weight, imag_weight in NEIGHBORHOOD_WEIGHTS:
        nx, ny = x + dx, y + dy

        if 0 <= nx < grid.width and 0 <= ny < grid.height:
            if grid.state[ny, nx]:
                real += real_weight
                imag += imag_weight

    return PatternKey(real, imag)


def encode_grid(grid: Grid) -> np.ndarray:
    """Encode every cell of a grid.

    Returns:
        Integer array of shape (height, width, 2); [..., 0] is the real axis
        and [..., 1] the imaginary axis of each cell's key
    """
    keys = np.zeros((grid.height, grid.width, 2), dtype=np.int64)

    for y in range(grid.height):
        for x in range(grid.width):
            keys[y, x] = encode_cell(grid, x, y)

    return keys


def key_at(keys: np.ndarray, x: int, y: int) -> PatternKey:
    """Read the key of cell (x, y) from an encode_grid result."""
    real, imag = keys[y, x]
    return PatternKey(int(real), int(imag))


def neighborhood_pattern(grid: Grid, x: int, y: int) -> np.ndarray:
    """Extract the 3x3 block around (x, y) with out-of-bounds cells dead."""
    pattern = np.zeros((3, 3), dtype=bool)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            nx, ny = x + dx, y + dy
            if 0 <= nx < grid.width and 0 <= ny < grid.height:
                pattern[dy + 1, dx + 1] = grid.state[ny, nx]
    return pattern


def neighborhood_patterns(grid: Grid) -> list[np.ndarray]:
    """All 3x3 blocks of a grid in row-major cell order."""
    return [neighborhood_pattern(grid, x, y) for x, y in grid.cells()]


def generate_neighborhood_pattern(center_alive: bool, neighbors_mask: int) -> np.ndarray:
    """Generate a 3x3 boolean pattern showing a specific neighborhood configuration.

    Args:
        center_alive: Whether center cell is alive
        neighbors_mask: 8-bit integer representing neighbor states (clockwise from top-left)

    Returns:
        3x3 boolean numpy array
    """
    if not 0 <= neighbors_mask < 256:
        raise ValueError(f"Neighbor mask must be in [0, 255], got {neighbors_mask}")

    pattern = np.zeros((3, 3), dtype=bool)
    pattern[1, 1] = center_alive

    neighbor_positions = [
        (0, 0), (0, 1), (0, 2),  # top row
        (1, 2),                  # right
        (2, 2), (2, 1), (2, 0),  # bottom row
        (1, 0)                   # left
    ]

    for i, (row, col) in enumerate(neighbor_positions):
        bit = (neighbors_mask >> (7 - i)) & 1
        pattern[row, col] = bool(bit)

    return pattern


def key_class_sizes() -> Counter:
    """Count how many of the 512 possible 3x3 blocks map to each key."""
    sizes: Counter = Counter()
    for center_alive in (False, True):
        for neighbors_mask in range(256):
            pattern = generate_neighborhood_pattern(center_alive, neighbors_mask)
            sizes[encode_pattern(pattern)] += 1
    return sizes
