"""Unit tests for the game session and the AI auto-solve loop."""

import random
import threading

import pytest

from sudokai.core.exceptions import CellValueError
from sudokai.game import AutoSolveConfig, AutoSolver, GameSession, format_time, move_index
from sudokai.generator import Difficulty, GeneratedPuzzle
from sudokai.solvers.heuristic import AIReason

from conftest import TEST_PUZZLE, TEST_SOLUTION, text_cells


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def _known_puzzle():
    cells = text_cells(TEST_PUZZLE)
    return GeneratedPuzzle(
        puzzle=tuple(cells),
        fixed=tuple(bool(v) for v in cells),
        solution=tuple(TEST_SOLUTION),
        difficulty=Difficulty.MEDIUM,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    s = GameSession(clock=clock)
    s.load(_known_puzzle())
    return s


class TestHelpers:
    """Tests for time formatting and keyboard-style navigation."""

    def test_format_time(self):
        """Test MM:SS formatting of elapsed milliseconds."""
        assert format_time(0) == "00:00"
        assert format_time(61_500) == "01:01"
        assert format_time(3_599_999) == "59:59"

    def test_move_index(self):
        """Test moving focus in each direction."""
        assert move_index(40, "up") == 31
        assert move_index(40, "down") == 49
        assert move_index(40, "left") == 39
        assert move_index(40, "right") == 41

    def test_move_index_clamped(self):
        """Test that focus stops at the board edges."""
        assert move_index(0, "up") == 0
        assert move_index(0, "left") == 0
        assert move_index(80, "down") == 80
        assert move_index(80, "right") == 80
        with pytest.raises(ValueError):
            move_index(0, "diagonal")


class TestGameSession:
    """Tests for edits, conflicts and completion."""

    def test_initial_state(self):
        """Test a fresh session before any game."""
        s = GameSession()
        assert s.cells == [""] * 81
        assert not s.game_active
        assert s.solution is None

    def test_load(self, session):
        """Test loading a prepared puzzle."""
        assert session.game_active
        assert session.difficulty is Difficulty.MEDIUM
        assert session.errors == set()
        assert session.completed_in_ms is None
        assert session.started_at == 100.0

    def test_new_game(self, clock):
        """Test starting a newly generated game."""
        s = GameSession(rng=random.Random(4), clock=clock)
        s.new_game("easy")
        assert s.difficulty is Difficulty.EASY
        assert s.game_active
        assert 36 <= sum(s.fixed) <= 49
        assert all(s.cells[i] == s.solution[i] for i in range(81) if s.fixed[i])

    def test_clue_edits_ignored(self, session):
        """Test that clue cells cannot be edited."""
        session.input_digit(0, "9")
        assert session.cells[0] == "5"
        session.clear_cell(0)
        assert session.cells[0] == "5"

    def test_conflicts_tracked(self, session):
        """Test that conflicts are tracked after edits."""
        # r1c3 = 5 duplicates the 5 at r1c1.
        session.input_digit(2, "5")
        assert {0, 2} <= session.errors
        session.clear_cell(2)
        assert session.errors == set()

    def test_invalid_input(self, session):
        """Test that bad digits and indices are rejected."""
        with pytest.raises(CellValueError):
            session.input_digit(2, "0")
        with pytest.raises(IndexError):
            session.input_digit(81, "1")
        with pytest.raises(IndexError):
            session.set_active(-1)

    def test_completion_recorded_once(self, session, clock):
        """Test that the completion time is recorded only once."""
        blanks = [i for i in range(81) if not session.fixed[i]]
        for i in blanks[:-1]:
            session.input_digit(i, TEST_SOLUTION[i])
        assert session.completed_in_ms is None

        clock.now = 165.0
        session.input_digit(blanks[-1], TEST_SOLUTION[blanks[-1]])
        assert session.completed_in_ms == 65_000
        assert session.is_completed
        assert session.is_solved

        clock.now = 500.0
        session.input_digit(blanks[-1], TEST_SOLUTION[blanks[-1]])
        assert session.completed_in_ms == 65_000

    def test_full_board_with_conflict_not_complete(self, session):
        """Test that a full board with conflicts is not complete."""
        for i in range(81):
            if not session.fixed[i]:
                session.input_digit(i, "1")
        assert all(session.cells)
        assert session.errors
        assert session.completed_in_ms is None

    def test_counts(self, session):
        """Test per-digit counts."""
        counts = session.counts()
        assert len(counts) == 10
        assert counts[0] == 0
        assert sum(counts) == sum(session.fixed)
        assert counts[5] == TEST_PUZZLE.count("5")

    def test_set_active_and_difficulty(self, session):
        """Test focus and difficulty setters."""
        session.set_active(10)
        assert session.active == 10
        session.set_active(None)
        assert session.active is None
        session.set_difficulty("hard")
        assert session.difficulty is Difficulty.HARD


class TestAutoSolver:
    """Tests for the paced auto-solve loop."""

    def test_solves_known_puzzle(self, session):
        """Test auto-solving the known puzzle with pacing."""
        sleeps = []
        moves = []
        solver = AutoSolver(session, AutoSolveConfig(delay_ms=1200, step_delay_ms=55), sleep=sleeps.append)
        stats = solver.run(on_move=moves.append)

        assert stats.solved
        assert session.cells == list(TEST_SOLUTION)
        assert session.is_completed
        assert stats.moves == TEST_PUZZLE.count("0")
        assert len(moves) == stats.moves
        assert sum(stats.reason_counts.values()) == stats.moves
        assert stats.snapped == 0
        # Initial pause, then one pause between consecutive moves.
        assert sleeps[0] == pytest.approx(1.2)
        assert len(sleeps) == stats.moves
        assert all(s == pytest.approx(0.055) for s in sleeps[1:])

    def test_fixes_mistakes_first(self, session):
        """Test that wrong entries are corrected first."""
        session.input_digit(2, "1")
        moves = []
        AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run(on_move=moves.append)
        assert moves[0].reason is AIReason.FIX_WRONG
        assert moves[0].index == 2
        assert session.is_solved

    def test_cancel(self, session):
        """Test stopping the loop through the cancel event."""
        cancel = threading.Event()
        moves = []

        def on_move(move):
            moves.append(move)
            if len(moves) == 3:
                cancel.set()

        stats = AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run(cancel, on_move)
        assert stats.cancelled
        assert stats.moves == 3
        assert not stats.solved
        assert not session.is_completed

    def test_max_steps(self, session):
        """Test the move cap."""
        config = AutoSolveConfig(delay_ms=0, step_delay_ms=0, max_steps=5)
        stats = AutoSolver(session, config).run()
        assert stats.moves == 5
        assert not stats.solved

    def test_skips_completed_game(self, session):
        """Test that a finished game makes no moves."""
        AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run()
        stats = AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run()
        assert stats.moves == 0
        assert stats.solved

    def test_snaps_when_fixed_cells_block_progress(self, clock):
        """Test a wrong clue that leaves nothing to snap."""
        # A wrong clue with no blanks left: the loop stops at once and there
        # is nothing editable to snap.
        cells = list(TEST_SOLUTION)
        cells[0] = "1"
        fixed = [False] * 81
        fixed[0] = True
        s = GameSession(clock=clock)
        s.load(GeneratedPuzzle(tuple(cells), tuple(fixed), tuple(TEST_SOLUTION)))
        stats = AutoSolver(s, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run()
        assert stats.moves == 0
        assert stats.snapped == 0
        assert not stats.solved

    def test_snap_fills_remaining_cells(self, session):
        """Test filling the remaining cells from the solution."""
        session.cells[2] = "4"
        # Already correct, so it is not counted as snapped.
        solver = AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0))
        assert solver._snap(session.solution) == TEST_PUZZLE.count("0") - 1
        assert session.is_solved
        assert session.is_completed

    def test_config_validation(self):
        """Test rejecting negative config values."""
        with pytest.raises(ValueError):
            AutoSolveConfig(delay_ms=-1)
        with pytest.raises(ValueError):
            AutoSolveConfig(max_steps=-1)

    def test_stats_to_dict(self, session):
        """Test stats serialisation."""
        stats = AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0)).run()
        data = stats.to_dict()
        assert data["solved"] is True
        assert data["moves"] == stats.moves
        assert set(data["reason_counts"]) <= {r.value for r in AIReason}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
