"""Text rendering of grids."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.grid import Grid


DEFAULT_STYLE = "0·"
SEPARATOR_CHAR = "_"


def validate_style(style: str) -> str:
    """Check that a style holds exactly two characters (alive, dead)."""
    if not isinstance(style, str) or len(style) != 2:
        raise ValueError(f"Render style must be exactly two characters, got {style!r}")
    return style


def render_grid(grid: 'Grid', style: str = DEFAULT_STYLE) -> str:
    """Render a grid one row per line, columns left to right.

    Args:
        grid: Grid to render
        style: Two characters, the first for alive cells and the second for dead

    Returns:
        Multi-line string without a trailing newline
    """
    alive_char, dead_char = validate_style(style)

    lines = []
    for y in range(grid.height):
        lines.append(''.join(alive_char if cell else dead_char for cell in grid.state[y]))
    return '\n'.join(lines)


def separator(width: int, char: str = SEPARATOR_CHAR) -> str:
    """Line printed between generations."""
    return char * width
