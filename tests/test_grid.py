"""Unit tests for the puzzle grid, cells, candidates and validation."""

import pytest
import numpy as np
from dlxsudoku.core import (
    CandidateSet,
    CellState,
    GridLayout,
    HouseKind,
    PuzzleGrid,
    find_conflicts,
    has_unique_solution,
    is_valid_placement,
    validate_solution,
)
from dlxsudoku.core.errors import InvalidPuzzleError


TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class TestCandidateSet:
    """Tests for the candidate bitset."""

    def test_full_set(self):
        """Test a full set holds 1..n."""
        full = CandidateSet.full(9)
        assert len(full) == 9
        assert list(full) == list(range(1, 10))
        assert 0 not in full
        assert 10 not in full

    def test_set_algebra(self):
        """Test union, intersection and difference."""
        a = CandidateSet.of(1, 2, 3)
        b = CandidateSet.of(3, 4)
        assert a | b == CandidateSet.of(1, 2, 3, 4)
        assert a & b == CandidateSet.of(3)
        assert a - b == CandidateSet.of(1, 2)
        assert CandidateSet.of(3).issubset(a)
        assert not b.issubset(a)

    def test_first_and_empty(self):
        """Test the smallest value and the empty set."""
        assert CandidateSet.of(7, 4).first() == 4
        assert CandidateSet().first() is None
        assert not CandidateSet()

    def test_invalid_values(self):
        """Test that value 0 and negative masks are rejected."""
        with pytest.raises(ValueError):
            CandidateSet.of(0)
        with pytest.raises(ValueError):
            CandidateSet(1)

    def test_immutable_updates(self):
        """Test that with_value/without return new sets."""
        a = CandidateSet.of(1)
        b = a.with_value(5)
        assert 5 in b
        assert 5 not in a
        assert b.without(1) == CandidateSet.of(5)


class TestGridLayout:
    """Tests for grid topology options."""

    def test_default_block_shapes(self):
        """Test the inferred block shape for common sizes."""
        assert (GridLayout(size=9).block_height, GridLayout(size=9).block_width) == (3, 3)
        assert (GridLayout(size=6).block_height, GridLayout(size=6).block_width) == (2, 3)
        assert (GridLayout(size=16).block_height, GridLayout(size=16).block_width) == (4, 4)

    def test_bad_block_shape(self):
        """Test that blocks which do not tile the grid are rejected."""
        with pytest.raises(InvalidPuzzleError):
            GridLayout(size=9, block_height=2, block_width=4)

    def test_jigsaw_layout(self):
        """Test an irregular block map."""
        layout = GridLayout.jigsaw_layout([
            [0, 0, 0, 1],
            [0, 1, 1, 1],
            [2, 2, 3, 3],
            [2, 2, 3, 3],
        ])
        assert layout.is_jigsaw
        assert layout.block_index(1, 0) == 0
        assert layout.block_index(0, 3) == 1

    def test_bad_jigsaw_layout(self):
        """Test that a block map with uneven blocks is rejected."""
        with pytest.raises(InvalidPuzzleError):
            GridLayout.jigsaw_layout([
                [0, 0, 0, 0],
                [0, 1, 1, 1],
                [2, 2, 3, 3],
                [2, 2, 3, 3],
            ])
        with pytest.raises(InvalidPuzzleError):
            GridLayout.jigsaw_layout([[0, -1], [1, 1]])


class TestPuzzleGrid:
    """Tests for PuzzleGrid."""

    def test_create_empty_grid(self):
        """Test creating an empty 9x9 grid."""
        grid = PuzzleGrid()
        assert grid.size == 9
        assert grid.count_empty() == 81
        assert grid.count_filled() == 0
        assert all(cell.state == CellState.UNSOLVED for cell in grid)
        assert all(len(cell.candidates) == 9 for cell in grid)

    def test_houses(self):
        """Test the house order and contents."""
        grid = PuzzleGrid()
        assert len(grid.houses) == 27
        assert [h.kind for h in grid.houses[:1] + grid.houses[9:10] + grid.houses[18:19]] == [
            HouseKind.ROW, HouseKind.COLUMN, HouseKind.BLOCK
        ]
        assert all(len(house) == 9 for house in grid.houses)
        assert grid.rows[2].name == "row 3"

    def test_diagonal_houses(self):
        """Test that X-sudoku adds the two diagonals."""
        grid = PuzzleGrid(GridLayout(diagonals=True))
        assert len(grid.houses) == 29
        assert grid.diagonals[0].name == "main diagonal"
        assert grid.diagonals[1].name == "anti-diagonal"

    def test_buddies(self):
        """Test the buddy relation."""
        grid = PuzzleGrid()
        cell = grid.cell_at(4, 4)
        assert len(grid.buddies(cell)) == 20
        assert grid.are_buddies(cell, grid.cell_at(3, 3))
        assert not grid.are_buddies(cell, grid.cell_at(0, 0))

        x_grid = PuzzleGrid(GridLayout(diagonals=True))
        center = x_grid.cell_at(4, 4)
        assert len(x_grid.buddies(center)) == 32
        assert x_grid.are_buddies(center, x_grid.cell_at(0, 0))

    def test_from_string(self):
        """Test creating a grid from a string."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        assert grid.get(0, 0) == 5
        assert grid.get(0, 2) == 0
        assert grid.cell_at(0, 0).state == CellState.GIVEN
        assert grid.count_filled() == 30

    def test_from_string_candidates(self):
        """Test that candidates exclude the values of buddies."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        assert grid.cell_at(0, 2).candidates == CandidateSet.of(1, 2, 4)

    def test_from_string_dots_and_whitespace(self):
        """Test that '.' blanks and line breaks are accepted."""
        text = "\n".join(TEST_PUZZLE[i:i + 9].replace("0", ".") for i in range(0, 81, 9))
        grid = PuzzleGrid.from_string(text)
        assert grid.to_string() == TEST_PUZZLE.replace("0", ".")

    def test_from_string_errors(self):
        """Test that bad puzzle text raises InvalidPuzzleError."""
        with pytest.raises(InvalidPuzzleError):
            PuzzleGrid.from_string("123")
        with pytest.raises(InvalidPuzzleError):
            PuzzleGrid.from_string("X" + TEST_PUZZLE[1:])
        with pytest.raises(InvalidPuzzleError):
            PuzzleGrid.from_string("5" + "." * 15, GridLayout(size=4))

    def test_from_2d_list_out_of_range(self):
        """Test that values outside 0..size raise InvalidPuzzleError."""
        data = [[0] * 4 for _ in range(4)]
        data[1][2] = 40
        with pytest.raises(InvalidPuzzleError, match="r2c3"):
            PuzzleGrid.from_2d_list(data)

        data[1][2] = -1
        with pytest.raises(InvalidPuzzleError, match="-1"):
            PuzzleGrid.from_2d_list(data)

        data[1][2] = 5
        with pytest.raises(InvalidPuzzleError):
            PuzzleGrid.from_2d_list(data)

    def test_invalid_puzzle_error_is_value_error(self):
        """Test that parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            PuzzleGrid.from_string("not a puzzle")

    def test_large_grid_letters(self):
        """Test that values above 9 use letters."""
        text = "G" + "." * 255
        grid = PuzzleGrid.from_string(text)
        assert grid.size == 16
        assert grid.get(0, 0) == 16
        assert grid.to_string()[0] == "G"

    def test_place_and_clear(self):
        """Test placing a value updates buddies and clearing restores them."""
        grid = PuzzleGrid()
        cell = grid.cell_at(0, 0)
        touched = grid.place_value(cell, 5)
        assert cell.state == CellState.SOLVED
        assert len(touched) == 20
        assert 5 not in grid.cell_at(0, 8).candidates
        assert 5 in grid.cell_at(8, 8).candidates

        grid.clear_cell(cell)
        assert cell.state == CellState.UNSOLVED
        assert 5 in cell.candidates
        assert 5 in grid.cell_at(0, 8).candidates

    def test_values_array(self):
        """Test the numpy view of the values."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        values = grid.values
        assert values.shape == (9, 9)
        assert values.dtype == np.int32
        assert values[0, 1] == 3

    def test_copy_is_independent(self):
        """Test that copies do not share cells."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        copy = grid.copy()
        copy.place_value(copy.cell_at(0, 2), 4)
        assert grid.get(0, 2) == 0
        assert copy.snapshot() != grid.snapshot()

    def test_original_puzzle(self):
        """Test that solved cells are left out of the givens."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        grid.place_value(grid.cell_at(0, 2), 4)
        assert grid.to_string()[2] == "4"
        assert grid.original_puzzle() == TEST_PUZZLE.replace("0", ".")

    def test_render(self):
        """Test the pretty-printed grid."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        lines = grid.render().splitlines()
        assert lines[0] == "+-------+-------+-------+"
        assert lines[1] == "| 5 3 . | . 7 . | . . . |"
        assert len(lines) == 13


class TestValidation:
    """Tests for validation utilities."""

    def test_is_valid_placement(self):
        """Test placement validation."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        assert is_valid_placement(grid, 0, 2, 4)
        assert not is_valid_placement(grid, 0, 2, 5)   # in row
        assert not is_valid_placement(grid, 0, 2, 8)   # in column
        assert not is_valid_placement(grid, 0, 2, 10)  # out of range

    def test_find_conflicts(self):
        """Test that duplicate values are reported by house."""
        grid = PuzzleGrid.from_string("55" + "." * 79)
        conflicts = find_conflicts(grid)
        kinds = [house.kind for house, value, cells in conflicts]
        assert kinds == [HouseKind.ROW, HouseKind.BLOCK]
        assert all(value == 5 for _, value, _ in conflicts)

    def test_validate_solution(self):
        """Test that a solution is checked against the puzzle."""
        puzzle = PuzzleGrid.from_string(TEST_PUZZLE)
        solution = PuzzleGrid.from_string(TEST_SOLUTION)
        assert solution.is_solved()
        assert validate_solution(puzzle, solution)

        wrong = PuzzleGrid.from_string("6" + TEST_SOLUTION[1:])
        assert not validate_solution(puzzle, wrong)

    def test_has_unique_solution(self):
        """Test the unique solution check."""
        assert has_unique_solution(PuzzleGrid.from_string(TEST_PUZZLE))
        assert not has_unique_solution(PuzzleGrid(size=4))
