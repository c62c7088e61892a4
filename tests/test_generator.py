"""Unit tests for the puzzle generator."""

import dataclasses
import random

import pytest

from sudokai.core.conflicts import compute_conflicts
from sudokai.core.exceptions import DifficultyRangeError
from sudokai.core.geometry import BOXES, COLS, ROWS
from sudokai.core.validator import count_solutions
from sudokai.generator import (
    CLUE_RANGES, Difficulty, GeneratedPuzzle, SudokuGenerator, check_presets,
    generate_puzzle, generate_solved,
)

from conftest import is_perm19


def _all_units_valid(board):
    return all(is_perm19([board[i] for i in unit]) for unit in ROWS + COLS + BOXES)


class TestGenerateSolved:
    """Tests for full-grid generation."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 42, 1234])
    def test_full_valid_grid(self, seed):
        """Test that seeded grids are complete and valid."""
        board = generate_solved(random.Random(seed))
        assert len(board) == 81
        assert _all_units_valid(board)

    def test_unseeded(self):
        """Test generation without a seed."""
        assert _all_units_valid(generate_solved())

    def test_grids_vary(self):
        """Test that successive grids differ."""
        rng = random.Random(5)
        grids = {tuple(generate_solved(rng)) for _ in range(5)}
        assert len(grids) > 1


class TestGeneratePuzzle:
    """Tests for puzzle carving."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_unique_and_consistent(self, difficulty):
        """Run a few times per difficulty to shake out flaky carving."""
        rng = random.Random(difficulty.value)
        for _ in range(3):
            result = generate_puzzle(difficulty, rng)
            puzzle, fixed, solution = result.puzzle, result.fixed, result.solution
            assert len(puzzle) == len(fixed) == len(solution) == 81

            for i in range(81):
                if fixed[i]:
                    assert puzzle[i] != ""
                    assert puzzle[i] == solution[i]
                else:
                    assert puzzle[i] == ""

            numeric = [int(v) if v else 0 for v in puzzle]
            assert count_solutions(list(numeric), 2) == 1

            merged = [v if v else solution[i] for i, v in enumerate(puzzle)]
            assert _all_units_valid([int(v) for v in merged])
            assert compute_conflicts(merged) == set()

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_clue_count_near_range(self, difficulty):
        """Test clue counts against the difficulty range."""
        min_clues, max_clues = difficulty.clue_range
        result = generate_puzzle(difficulty, random.Random(99))
        # Carving stops at the target or runs out of removable cells above it.
        assert result.clue_count >= min_clues
        assert result.clue_count <= max_clues + 8

    def test_easy_lands_in_range(self):
        """Test that easy puzzles land inside their range."""
        rng = random.Random(3)
        for _ in range(3):
            clues = generate_puzzle(Difficulty.EASY, rng).clue_count
            assert 36 <= clues <= 49

    def test_accepts_difficulty_name(self):
        """Test passing the difficulty by name."""
        result = generate_puzzle("hard", random.Random(1))
        assert result.difficulty is Difficulty.HARD

    def test_result_is_immutable(self):
        """Test that generated puzzles are frozen."""
        result = generate_puzzle(Difficulty.EASY, random.Random(1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.puzzle = ()
        assert isinstance(result.fixed, tuple)

    def test_to_dict(self):
        """Test JSON-ready serialisation."""
        result = generate_puzzle(Difficulty.MEDIUM, random.Random(8))
        data = result.to_dict()
        assert data["difficulty"] == "medium"
        assert len(data["puzzle"]) == 81
        assert data["puzzle"].count("0") == 81 - result.clue_count
        assert data["solution"] == "".join(result.solution)
        assert data["clues"] == result.clue_count


class TestSudokuGenerator:
    """Tests for the seedable generator facade."""

    def test_seed_reproducible(self):
        """Test that the same seed yields the same puzzle."""
        a = SudokuGenerator(seed=7).generate(Difficulty.MEDIUM)
        b = SudokuGenerator(seed=7).generate(Difficulty.MEDIUM)
        assert a == b

    def test_difficulty_affects_clue_count(self):
        """Test that easier puzzles keep more clues."""
        generator = SudokuGenerator(seed=42)
        easy = generator.generate(Difficulty.EASY)
        hard = generator.generate(Difficulty.HARD)
        assert easy.clue_count > hard.clue_count

    def test_generate_batch(self):
        """Test generating a batch of puzzles."""
        puzzles = SudokuGenerator(seed=42).generate_batch(3, "easy")
        assert len(puzzles) == 3
        assert all(isinstance(p, GeneratedPuzzle) for p in puzzles)

    def test_generate_solved(self):
        """Test solved-grid generation through the facade."""
        assert _all_units_valid(SudokuGenerator(seed=1).generate_solved())


class TestDifficultyLevels:
    """Tests for difficulty presets."""

    def test_clue_ranges(self):
        """Test the preset clue ranges."""
        assert Difficulty.EASY.clue_range == (36, 49)
        assert Difficulty.MEDIUM.clue_range == (30, 35)
        assert Difficulty.HARD.clue_range == (24, 29)

    def test_parse(self):
        """Test parsing difficulty names."""
        assert Difficulty.parse("easy") is Difficulty.EASY
        assert Difficulty.parse("HARD") is Difficulty.HARD
        assert Difficulty.parse(Difficulty.MEDIUM) is Difficulty.MEDIUM
        with pytest.raises(DifficultyRangeError):
            Difficulty.parse("expert")

    def test_presets_valid(self):
        """Test that the shipped presets pass the check."""
        check_presets()

    def test_degenerate_range_rejected(self):
        """Test that an inverted range is rejected."""
        bad = dict(CLUE_RANGES)
        bad[Difficulty.HARD] = (30, 24)
        with pytest.raises(DifficultyRangeError):
            check_presets(bad)

    def test_missing_range_rejected(self):
        """Test that a missing preset is rejected."""
        bad = dict(CLUE_RANGES)
        del bad[Difficulty.EASY]
        with pytest.raises(DifficultyRangeError):
            check_presets(bad)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
