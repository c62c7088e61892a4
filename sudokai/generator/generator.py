"""Sudoku puzzle generator with clue-count based difficulty levels."""

from __future__ import annotations
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.board import to_cells
from ..core.exceptions import DifficultyRangeError
from ..core.geometry import BOX_SIZE, CELL_COUNT, DIGITS, SIZE
from ..core.validator import count_solutions, iter_solutions
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles, approximated by clue count."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the inclusive range of clues for this difficulty (min, max)."""
        return CLUE_RANGES[self]

    @classmethod
    def parse(cls, value: Union[Difficulty, str]) -> Difficulty:
        """Accept a Difficulty or its name ("easy", "HARD", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise DifficultyRangeError(
                f"Unknown difficulty {value!r}, expected one of {[d.value for d in cls]}"
            ) from None


CLUE_RANGES: Dict[Difficulty, Tuple[int, int]] = {
    Difficulty.EASY: (36, 49),
    Difficulty.MEDIUM: (30, 35),
    Difficulty.HARD: (24, 29),
}


def check_presets(ranges: Optional[Dict[Difficulty, Tuple[int, int]]] = None) -> None:
    """
    Validate the clue range table.

    Every difficulty needs a range with ``0 < min <= max <= 81``. Called at
    import time so a broken table fails before any puzzle is generated.
    """
    ranges = CLUE_RANGES if ranges is None else ranges
    for difficulty in Difficulty:
        if difficulty not in ranges:
            raise DifficultyRangeError(f"No clue range configured for {difficulty.value}")
        low, high = ranges[difficulty]
        if not 0 < low <= high <= CELL_COUNT:
            raise DifficultyRangeError(
                f"Invalid clue range for {difficulty.value}: ({low}, {high})"
            )


check_presets()


@dataclass(frozen=True)
class GeneratedPuzzle:
    """A puzzle together with its clue mask and unique solution."""
    puzzle: Tuple[str, ...]
    fixed: Tuple[bool, ...]
    solution: Tuple[str, ...]
    difficulty: Optional[Difficulty] = None

    @property
    def clue_count(self) -> int:
        return sum(self.fixed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty.value if self.difficulty else None,
            "puzzle": "".join(v or "0" for v in self.puzzle),
            "solution": "".join(self.solution),
            "clues": self.clue_count,
        }


def _fill_diagonal_boxes(board: List[int], rng: random.Random) -> None:
    """Fill the three diagonal boxes with independent shuffled permutations."""
    for b in range(BOX_SIZE):
        values = list(DIGITS)
        rng.shuffle(values)
        start = b * BOX_SIZE
        k = 0
        for r in range(BOX_SIZE):
            for c in range(BOX_SIZE):
                board[(start + r) * SIZE + (start + c)] = values[k]
                k += 1


def generate_solved(rng: Optional[random.Random] = None) -> List[int]:
    """
    Generate a complete, valid 9x9 grid.

    The three diagonal boxes share no row or column, so they are seeded
    with independent permutations first. The other 54 cells are completed
    by backtracking with a shuffled digit order at every branch.

    Args:
        rng: Random source. A fresh unseeded one if None.

    Returns:
        81 ints, all in 1-9.
    """
    rng = rng or random.Random()
    board = [0] * CELL_COUNT
    _fill_diagonal_boxes(board, rng)

    search = iter_solutions(board, digit_order=lambda: rng.sample(DIGITS, len(DIGITS)))
    try:
        solved = list(next(search))
    finally:
        search.close()
    return solved


def carve(
    solved: List[int],
    target_clues: int,
    rng: random.Random,
) -> List[int]:
    """
    Remove clues from a solved grid while keeping the solution unique.

    Cells are visited once each in random order. A removal is kept only if
    the puzzle still has exactly one solution. Stops as soon as the clue
    count is at or below ``target_clues``, so the result may end a little
    above the target when removals are rejected.

    Returns:
        The puzzle as 81 ints, 0 for removed cells.
    """
    puzzle = list(solved)
    order = list(range(CELL_COUNT))
    rng.shuffle(order)

    clues = CELL_COUNT
    rejected = 0
    for idx in order:
        backup = puzzle[idx]
        if backup == 0:
            continue
        puzzle[idx] = 0
        if count_solutions(list(puzzle), 2) != 1:
            puzzle[idx] = backup
            rejected += 1
        else:
            clues -= 1
        if clues <= target_clues:
            break

    logger.debug("Carved puzzle: target=%d clues=%d rejected=%d", target_clues, clues, rejected)
    return puzzle


def generate_puzzle(
    difficulty: Union[Difficulty, str] = Difficulty.EASY,
    rng: Optional[random.Random] = None,
) -> GeneratedPuzzle:
    """
    Generate a uniquely solvable puzzle for the given difficulty.

    Args:
        difficulty: Difficulty preset, or its name.
        rng: Random source. A fresh unseeded one if None.

    Returns:
        GeneratedPuzzle with the textual puzzle ("" for blanks), the clue
        mask and the textual solution.
    """
    difficulty = Difficulty.parse(difficulty)
    rng = rng or random.Random()
    start = time.perf_counter()

    solved = generate_solved(rng)
    min_clues, max_clues = difficulty.clue_range
    target_clues = rng.randint(min_clues, max_clues)
    puzzle = carve(solved, target_clues, rng)

    result = GeneratedPuzzle(
        puzzle=tuple(to_cells(puzzle)),
        fixed=tuple(v != 0 for v in puzzle),
        solution=tuple(to_cells(solved)),
        difficulty=difficulty,
    )
    logger.debug(
        "Generated %s puzzle with %d clues in %.3fs",
        difficulty.value, result.clue_count, time.perf_counter() - start,
    )
    return result


class SudokuGenerator:
    """
    Seedable generator for Sudoku puzzles.

    Algorithm:
    1. Generate a complete valid grid using randomized backtracking
    2. Remove cells in random order down to the difficulty's clue target
    3. Keep a removal only while the puzzle has a unique solution
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def generate_solved(self) -> List[int]:
        """Generate a full solved grid as 81 ints."""
        return generate_solved(self.rng)

    def generate(self, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> GeneratedPuzzle:
        """Generate one puzzle with its clue mask and solution."""
        return generate_puzzle(difficulty, self.rng)

    def generate_batch(
        self, count: int, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM
    ) -> List[GeneratedPuzzle]:
        """
        Generate multiple puzzles of the same difficulty.

        Args:
            count: Number of puzzles to generate.
            difficulty: Desired difficulty level.
        """
        return [self.generate(difficulty) for _ in range(count)]
