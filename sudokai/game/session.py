"""A single game of Sudoku: board state, edits, conflicts and completion time."""

from __future__ import annotations
import random
import time
from typing import Callable, List, Optional, Set, Union

from ..core.board import TEXT_DIGITS, check_cells, check_length
from ..core.conflicts import compute_conflicts
from ..core.exceptions import CellValueError
from ..core.geometry import CELL_COUNT, SIZE
from ..generator import Difficulty, GeneratedPuzzle, generate_puzzle
from ..utils.logger import get_logger

logger = get_logger(__name__)

DIRECTIONS = ("up", "down", "left", "right")


def format_time(ms: int) -> str:
    """Format milliseconds as MM:SS."""
    s = int(ms) // 1000
    return f"{s // 60:02d}:{s % 60:02d}"


def move_index(i: int, direction: str) -> int:
    """Move a cell index one step in a direction, clamped to the board edge."""
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")
    r, c = divmod(i, SIZE)
    if direction == "up":
        r = max(0, r - 1)
    elif direction == "down":
        r = min(SIZE - 1, r + 1)
    elif direction == "left":
        c = max(0, c - 1)
    else:
        c = min(SIZE - 1, c + 1)
    return r * SIZE + c


class GameSession:
    """
    Mutable state of one game.

    Every edit goes through :meth:`input_digit` or :meth:`clear_cell`,
    which recompute the conflict set and detect completion. Clue cells
    can never be edited.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            difficulty: Difficulty used by :meth:`new_game` when none is given.
            rng: Random source for puzzle generation.
            clock: Returns seconds; injectable for tests.
        """
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = rng or random.Random()
        self.clock = clock

        self.cells: List[str] = [""] * CELL_COUNT
        self.fixed: List[bool] = [False] * CELL_COUNT
        self.solution: Optional[List[str]] = None
        self.errors: Set[int] = set()
        self.active: Optional[int] = None
        self.started_at: Optional[float] = None
        self.completed_in_ms: Optional[int] = None
        self.game_active = False

    def new_game(self, difficulty: Union[Difficulty, str, None] = None) -> None:
        """Generate a new puzzle and reset errors, focus and timers."""
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)
        self.load(generate_puzzle(self.difficulty, self.rng))

    def load(self, generated: GeneratedPuzzle) -> None:
        """Start a game from an already generated puzzle."""
        check_cells(generated.puzzle, "puzzle")
        check_length(generated.fixed, "fixed")
        check_cells(generated.solution, "solution")

        if generated.difficulty is not None:
            self.difficulty = generated.difficulty
        self.cells = list(generated.puzzle)
        self.fixed = list(generated.fixed)
        self.solution = list(generated.solution)
        self.errors = compute_conflicts(self.cells)
        self.active = None
        self.started_at = self.clock()
        self.completed_in_ms = None
        self.game_active = True
        logger.debug("New %s game with %d clues", self.difficulty.value, sum(self.fixed))

    def set_active(self, i: Optional[int]) -> None:
        if i is not None:
            self._check_index(i)
        self.active = i

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        """Set the difficulty for the next game."""
        self.difficulty = Difficulty.parse(difficulty)

    def input_digit(self, i: int, value: str) -> None:
        """
        Put a digit into a cell.

        Edits to clue cells are ignored. After the edit the conflict set is
        recomputed; a full, conflict-free board records the completion time
        once.
        """
        self._check_index(i)
        if value not in TEXT_DIGITS:
            raise CellValueError(f"digit must be '1'..'9', got {value!r}")
        if self.fixed[i]:
            return

        self.cells[i] = value
        self.errors = compute_conflicts(self.cells)

        if (
            all(self.cells)
            and not self.errors
            and self.completed_in_ms is None
            and self.started_at is not None
        ):
            self.completed_in_ms = int((self.clock() - self.started_at) * 1000)
            logger.debug("Game completed in %s", format_time(self.completed_in_ms))

    def clear_cell(self, i: int) -> None:
        """Blank a cell and recompute conflicts. Clue cells are left alone."""
        self._check_index(i)
        if self.fixed[i]:
            return
        self.cells[i] = ""
        self.errors = compute_conflicts(self.cells)

    def counts(self) -> List[int]:
        """How many times each digit is on the board; index 0 is unused."""
        counts = [0] * (SIZE + 1)
        for v in self.cells:
            if v:
                counts[int(v)] += 1
        return counts

    @property
    def is_completed(self) -> bool:
        return self.completed_in_ms is not None

    @property
    def is_solved(self) -> bool:
        """True when the board matches the known solution."""
        return self.solution is not None and self.cells == self.solution

    @staticmethod
    def _check_index(i: int) -> None:
        if not 0 <= i < CELL_COUNT:
            raise IndexError(f"cell index must be 0-{CELL_COUNT - 1}, got {i}")
