"""Unit tests for reversible steps, history and the puzzle session."""

import pytest
from dlxsudoku import PuzzleGrid, PuzzleSession, Validity
from dlxsudoku.core import CandidateSet, CellState
from dlxsudoku.core.errors import StepConflictError
from dlxsudoku.steps import CandidateRemovalStep, History, ValuePlacementStep


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


class TestValuePlacementStep:
    """Tests for placing values as steps."""

    def test_redo_and_undo(self):
        """Test that undo restores the grid exactly."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        before = grid.snapshot()
        cell = grid.cell_at(0, 2)

        step = ValuePlacementStep(grid, cell, 4)
        step.apply()
        assert cell.state == CellState.SOLVED
        assert cell.value == 4
        assert 4 not in grid.cell_at(0, 3).candidates

        step.undo()
        assert grid.snapshot() == before

    def test_undo_only_restores_touched_buddies(self):
        """Test that buddies which never had the value do not gain it."""
        grid = PuzzleGrid()
        buddy = grid.cell_at(0, 5)
        buddy.remove_candidate(4)
        before = grid.snapshot()

        step = ValuePlacementStep(grid, grid.cell_at(0, 0), 4)
        step.apply()
        step.undo()
        assert 4 not in buddy.candidates
        assert grid.snapshot() == before

    def test_place_into_filled_cell(self):
        """Test that placing twice is a conflict."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        step = ValuePlacementStep(grid, grid.cell_at(0, 0), 1)
        with pytest.raises(StepConflictError):
            step.apply()

    def test_changed_cells(self):
        """Test the descriptive data of the step."""
        grid = PuzzleGrid()
        step = ValuePlacementStep(grid, grid.cell_at(2, 3), 1, technique="Test",
                                  small_hint="small", big_hint="big")
        assert step.changed_cells == (grid.cell_at(2, 3),)
        assert step.explaining_cells == ()
        assert step.small_hint == "small"
        assert step.big_hint == "big"


class TestCandidateRemovalStep:
    """Tests for removing candidates as steps."""

    def test_redo_and_undo(self):
        """Test removing one value from several cells and restoring it."""
        grid = PuzzleGrid()
        before = grid.snapshot()
        cells = [grid.cell_at(0, 4), grid.cell_at(0, 1)]

        step = CandidateRemovalStep.for_value(cells, 7)
        assert step.changed_cells == (grid.cell_at(0, 1), grid.cell_at(0, 4))
        assert step.value == 7

        step.apply()
        assert all(7 not in cell.candidates for cell in cells)
        step.undo()
        assert grid.snapshot() == before

    def test_different_removals_per_cell(self):
        """Test removing a different set from each cell."""
        grid = PuzzleGrid()
        a, b = grid.cell_at(0, 0), grid.cell_at(0, 1)
        step = CandidateRemovalStep({a: CandidateSet.of(1, 2), b: 3})
        assert step.value is None
        step.apply()
        assert a.candidates == CandidateSet.of(3, 4, 5, 6, 7, 8, 9)
        assert b.candidates == CandidateSet.of(1, 2, 4, 5, 6, 7, 8, 9)

    def test_remove_absent_candidate(self):
        """Test that removing a missing candidate is a conflict and changes nothing."""
        grid = PuzzleGrid()
        a, b = grid.cell_at(0, 0), grid.cell_at(0, 1)
        b.remove_candidate(5)
        before = grid.snapshot()
        with pytest.raises(StepConflictError):
            CandidateRemovalStep.for_value([a, b], 5).apply()
        assert grid.snapshot() == before

    def test_conflict_is_runtime_error(self):
        """Test that step conflicts are RuntimeErrors."""
        assert issubclass(StepConflictError, RuntimeError)


class TestHistory:
    """Tests for the undo/redo stacks."""

    def test_undo_redo(self):
        """Test moving steps between the stacks."""
        grid = PuzzleGrid()
        history = History()
        step = ValuePlacementStep(grid, grid.cell_at(0, 0), 1)
        step.apply()
        history.push(step)
        assert history.can_undo
        assert not history.can_redo

        assert history.undo() is step
        assert grid.get(0, 0) == 0
        assert history.can_redo

        assert history.redo() is step
        assert grid.get(0, 0) == 1

    def test_push_clears_redo(self):
        """Test that history is linear."""
        grid = PuzzleGrid()
        history = History()
        first = ValuePlacementStep(grid, grid.cell_at(0, 0), 1)
        first.apply()
        history.push(first)
        history.undo()

        second = ValuePlacementStep(grid, grid.cell_at(0, 0), 2)
        second.apply()
        history.push(second)
        assert not history.can_redo
        assert len(history) == 1

    def test_empty_stacks(self):
        """Test that popping an empty stack raises IndexError."""
        history = History()
        with pytest.raises(IndexError):
            history.undo()
        with pytest.raises(IndexError):
            history.redo()


class TestPuzzleSession:
    """Tests for the session object."""

    def test_hint_and_apply(self):
        """Test that a hint highlights cells and can be applied."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        session = PuzzleSession(grid)
        assert session.hint() == "Naked Single"
        assert len(session.highlighted_cells) == 1
        assert session.supporting_cells

        target = session.highlighted_cells[0]
        step = session.apply_hint()
        assert step.changed_cells == (target,)
        assert target.state == CellState.SOLVED
        assert session.highlighted_cells == ()
        assert session.history.can_undo

    def test_big_hint(self):
        """Test the detailed hint text."""
        session = PuzzleSession(PuzzleGrid.from_string(TEST_PUZZLE))
        assert session.hint(big=True).startswith("Naked Single: r")

    def test_user_actions_are_undoable(self):
        """Test that user entries go through the history."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        session = PuzzleSession(grid)
        before = grid.snapshot()

        session.place_value(grid.cell_at(0, 2), 4)
        session.remove_candidate(grid.cell_at(0, 3), 2)
        assert session.undo() is not None
        assert session.undo() is not None
        assert session.undo() is None
        assert grid.snapshot() == before

        session.redo()
        assert grid.get(0, 2) == 4

    def test_check(self):
        """Test checking through the session."""
        session = PuzzleSession(PuzzleGrid.from_string(TEST_PUZZLE))
        result = session.check()
        assert result.validity == Validity.UNIQUE
        assert result.consistent

    def test_replace_grid(self):
        """Test that a new puzzle starts with an empty history."""
        grid = PuzzleGrid.from_string(TEST_PUZZLE)
        session = PuzzleSession(grid)
        session.place_value(grid.cell_at(0, 2), 4)

        session.replace_grid(PuzzleGrid())
        assert not session.history.can_undo
        assert session.grid.count_empty() == 81
