"""Tests for positional neighborhood encoding.

Covers the PatternKey value type, single-cell and whole-grid encoding,
boundary treatment and the deliberately non-injective flat weights.
"""

import pytest
import numpy as np
from poscell.core.grid import Grid
from poscell.core.encoder import (
    CENTER_WEIGHT, PatternKey, encode_cell, encode_grid, encode_pattern, key_at,
    neighborhood_pattern, neighborhood_patterns, generate_neighborhood_pattern,
    key_class_sizes,
)


def padded_oracle(state: np.ndarray, x: int, y: int) -> tuple:
    """Independent key computation from a zero-padded copy of the state."""
    padded = np.pad(state, 1, constant_values=False)
    block = padded[y:y + 3, x:x + 3]
    orthogonal = int(block[0, 1]) + int(block[1, 0]) + int(block[1, 2]) + int(block[2, 1])
    diagonal = int(block[0, 0]) + int(block[0, 2]) + int(block[2, 0]) + int(block[2, 2])
    return (orthogonal + CENTER_WEIGHT * int(block[1, 1]), diagonal)


class TestPatternKey:
    """PatternKey construction, parsing and formatting."""

    @pytest.mark.parametrize("text,expected", [
        ("12", (12, 0)),
        ("0", (0, 0)),
        ("2i", (0, 2)),
        ("i", (0, 1)),
        ("1+2i", (1, 2)),
        ("10+1i", (10, 1)),
        ("1-1i", (1, -1)),
        ("-3i", (0, -3)),
        ("3j", (0, 3)),
        (" 2+2i ", (2, 2)),
    ])
    def test_parse(self, text, expected):
        assert PatternKey.parse(text) == PatternKey(*expected)

    @pytest.mark.parametrize("text", ["", "1+", "abc", "1.5", "2+2", "i2", "1+2i+3"])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(ValueError, match="Cannot parse"):
            PatternKey.parse(text)

    @pytest.mark.parametrize("text", ["12", "1", "4", "1+2i", "2i", "1+1i", "4i", "2+2i", "10+1i"])
    def test_reference_keys_format_back(self, text):
        """Reference table keys print in the same notation they are written in."""
        assert str(PatternKey.parse(text)) == text

    def test_str_negative_imag(self):
        assert str(PatternKey(1, -2)) == "1-2i"

    def test_coerce_accepted_forms(self):
        expected = PatternKey(1, 2)
        assert PatternKey.coerce(expected) is expected
        assert PatternKey.coerce(1 + 2j) == expected
        assert PatternKey.coerce((1, 2)) == expected
        assert PatternKey.coerce([1, 2]) == expected
        assert PatternKey.coerce("1+2i") == expected
        assert PatternKey.coerce(12) == PatternKey(12, 0)
        assert PatternKey.coerce(np.int64(4)) == PatternKey(4, 0)

    @pytest.mark.parametrize("value", [
        True, 1.5, 0.5j, (1,), (1, 2, 3), (1.0, 2), None, {"real": 1},
        complex("inf"), complex(0, float("-inf")), complex(float("nan"), 1),
    ])
    def test_coerce_rejects(self, value):
        with pytest.raises(ValueError):
            PatternKey.coerce(value)

    def test_components(self):
        key = PatternKey(12, 1)
        assert key.center_alive is True
        assert key.orthogonal == 2
        assert key.diagonal == 1

        key = PatternKey(3, 0)
        assert key.center_alive is False
        assert key.orthogonal == 3

    def test_structural_equality(self):
        """Keys are equal only when both axes match."""
        assert PatternKey(1, 1) == PatternKey(1, 1)
        assert PatternKey(1, 1) != PatternKey(1, 0)
        assert PatternKey(2, 0) != PatternKey(0, 2)
        assert hash(PatternKey(1, 2)) == hash(PatternKey.parse("1+2i"))


class TestEncodeCell:
    """Single cell encoding on small grids."""

    def test_empty_neighborhood(self):
        grid = Grid(3, 3)
        assert encode_cell(grid, 1, 1) == PatternKey(0, 0)

    def test_center_only(self):
        """A live cell with no live neighbors encodes to the centre class."""
        grid = Grid.from_cells(3, 3, [(1, 1)])
        assert encode_cell(grid, 1, 1) == PatternKey(CENTER_WEIGHT, 0)
        assert str(encode_cell(grid, 1, 1)) == "10"

    @pytest.mark.parametrize("cell", [(1, 0), (0, 1), (2, 1), (1, 2)])
    def test_single_orthogonal_neighbor(self, cell):
        """Any one live edge neighbor gives key 1."""
        grid = Grid.from_cells(3, 3, [cell])
        assert encode_cell(grid, 1, 1) == PatternKey(1, 0)

    @pytest.mark.parametrize("cell", [(0, 0), (2, 0), (0, 2), (2, 2)])
    def test_single_diagonal_neighbor(self, cell):
        """Any one live corner neighbor gives key 1i."""
        grid = Grid.from_cells(3, 3, [cell])
        assert encode_cell(grid, 1, 1) == PatternKey(0, 1)

    def test_one_of_each_axis(self):
        grid = Grid.from_cells(3, 3, [(1, 0), (2, 2)])
        assert encode_cell(grid, 1, 1) == PatternKey(1, 1)

    def test_full_block(self):
        grid = Grid(3, 3, np.ones((3, 3), dtype=bool))
        assert encode_cell(grid, 1, 1) == PatternKey(14, 4)

    def test_corner_cell_boundary(self):
        """Corner cells only see their in-bounds neighbors; nothing wraps."""
        grid = Grid(3, 3, np.ones((3, 3), dtype=bool))

        assert encode_cell(grid, 0, 0) == PatternKey(12, 1)
        assert encode_cell(grid, 2, 2) == PatternKey(12, 1)
        assert encode_cell(grid, 1, 0) == PatternKey(13, 2)

    def test_lone_corner_cell(self):
        """A lone live cell in the corner is the centre class, not wrapped."""
        grid = Grid.from_cells(5, 5, [(0, 0)])
        assert encode_cell(grid, 0, 0) == PatternKey(10, 0)
        assert encode_cell(grid, 4, 4) == PatternKey(0, 0)
        assert encode_cell(grid, 4, 0) == PatternKey(0, 0)

    def test_single_cell_grid(self):
        grid = Grid.from_cells(1, 1, [(0, 0)])
        assert encode_cell(grid, 0, 0) == PatternKey(10, 0)

    def test_flat_weights_merge_positions(self):
        """Neighborhoods with equal per-axis counts share a key."""
        left_right = Grid.from_cells(3, 3, [(0, 1), (2, 1)])
        up_left = Grid.from_cells(3, 3, [(1, 0), (0, 1)])

        assert encode_cell(left_right, 1, 1) == encode_cell(up_left, 1, 1) == PatternKey(2, 0)


class TestEncodeGrid:
    """Whole-grid encoding."""

    def test_shape_and_dtype(self):
        keys = encode_grid(Grid(7, 4))
        assert keys.shape == (4, 7, 2)
        assert np.issubdtype(keys.dtype, np.integer)

    def test_matches_padded_oracle(self):
        rng = np.random.default_rng(1234)
        state = rng.random((9, 13)) < 0.4
        grid = Grid(13, 9, state)

        keys = encode_grid(grid)

        for y in range(9):
            for x in range(13):
                assert tuple(keys[y, x]) == padded_oracle(state, x, y)
                assert key_at(keys, x, y) == encode_cell(grid, x, y)

    def test_input_unchanged(self):
        rng = np.random.default_rng(7)
        grid = Grid(6, 6, rng.random((6, 6)) < 0.5)
        before = grid.copy()

        encode_grid(grid)

        assert grid == before

    def test_key_at_returns_python_ints(self):
        keys = encode_grid(Grid.from_cells(3, 3, [(1, 1)]))
        key = key_at(keys, 1, 1)
        assert key == PatternKey(10, 0)
        assert type(key.real) is int
        assert type(key.imag) is int


class TestNeighborhoodPatterns:
    """3x3 block extraction and enumeration."""

    def test_pattern_at_corner(self):
        grid = Grid(3, 3, np.ones((3, 3), dtype=bool))
        expected = np.array([
            [False, False, False],
            [False, True, True],
            [False, True, True],
        ])
        np.testing.assert_array_equal(neighborhood_pattern(grid, 0, 0), expected)

    def test_all_patterns_in_row_major_order(self):
        grid = Grid.from_cells(2, 2, [(1, 0)])
        patterns = neighborhood_patterns(grid)

        assert len(patterns) == 4
        assert patterns[1][1, 1]            # cell (1, 0) itself
        assert patterns[0][1, 2]            # right neighbor of (0, 0)
        assert patterns[3][0, 1]            # top neighbor of (1, 1)

    def test_encode_pattern_agrees_with_encode_cell(self):
        rng = np.random.default_rng(99)
        grid = Grid(5, 5, rng.random((5, 5)) < 0.5)

        for x, y in grid.cells():
            assert encode_pattern(neighborhood_pattern(grid, x, y)) == encode_cell(grid, x, y)

    def test_encode_pattern_shape_check(self):
        with pytest.raises(ValueError, match="must be 3x3"):
            encode_pattern(np.zeros((2, 3), dtype=bool))

    def test_generate_pattern_mask_order(self):
        """Mask bits run clockwise from the top-left corner."""
        top_left = generate_neighborhood_pattern(False, 0b10000000)
        assert top_left[0, 0] and top_left.sum() == 1
        assert encode_pattern(top_left) == PatternKey(0, 1)

        left = generate_neighborhood_pattern(True, 0b00000001)
        assert left[1, 0] and left[1, 1] and left.sum() == 2
        assert encode_pattern(left) == PatternKey(11, 0)

    def test_generate_pattern_rejects_bad_mask(self):
        with pytest.raises(ValueError):
            generate_neighborhood_pattern(False, 256)


class TestKeyClasses:
    """All 512 neighborhoods against the flat-weight encoding."""

    def test_class_count(self):
        """512 blocks fall into 5 x 5 x 2 = 50 key classes."""
        sizes = key_class_sizes()
        assert len(sizes) == 50
        assert sum(sizes.values()) == 512

    def test_class_sizes(self):
        """Class size is the number of ways to pick the live edges and corners."""
        sizes = key_class_sizes()
        assert sizes[PatternKey(0, 0)] == 1
        assert sizes[PatternKey(10, 0)] == 1
        assert sizes[PatternKey(1, 0)] == 4
        assert sizes[PatternKey(1, 1)] == 16
        assert sizes[PatternKey(2, 2)] == 36
        assert sizes[PatternKey(14, 4)] == 1

    def test_every_pattern_matches_counts(self):
        for center_alive in (False, True):
            for mask in range(256):
                pattern = generate_neighborhood_pattern(center_alive, mask)
                expected = padded_oracle(pattern, 1, 1)
                assert tuple(encode_pattern(pattern)) == expected
