"""Board representations and conversions between numeric and textual cells.

Two flat forms are used throughout the package:

* numeric cells: 81 ints, 0 for blank, 1-9 for digits (generation, solving)
* textual cells: 81 strings, ``""`` for blank, ``"1"``..``"9"`` (conflicts,
  candidates, the AI heuristic, the game session)

:class:`SudokuBoard` wraps a numpy grid for parsing and pretty-printing at
the CLI boundary.
"""

from __future__ import annotations
import numpy as np
from typing import List, Optional, Sequence

from .exceptions import BoardShapeError, CellValueError
from .geometry import SIZE, BOX_SIZE, CELL_COUNT, UNITS

TEXT_DIGITS = frozenset(str(d) for d in range(1, SIZE + 1))


def check_length(values: Sequence, what: str = "board") -> None:
    """Fail fast if ``values`` is not exactly 81 long."""
    if len(values) != CELL_COUNT:
        raise BoardShapeError(f"{what} must have {CELL_COUNT} cells, got {len(values)}")


def check_numeric(board: Sequence[int]) -> None:
    """Validate a numeric board: 81 ints in 0-9."""
    check_length(board)
    for i, v in enumerate(board):
        if not 0 <= v <= SIZE:
            raise CellValueError(f"cell {i} must be 0-{SIZE}, got {v!r}")


def check_cells(cells: Sequence[str], what: str = "cells") -> None:
    """Validate a textual board: 81 strings, each blank or "1".."9"."""
    check_length(cells, what)
    for i, v in enumerate(cells):
        if v and v not in TEXT_DIGITS:
            raise CellValueError(f"{what}[{i}] must be '' or '1'..'9', got {v!r}")


def to_numeric(cells: Sequence[str]) -> List[int]:
    """Convert textual cells to a numeric board."""
    check_cells(cells)
    return [int(v) if v else 0 for v in cells]


def to_cells(board: Sequence[int]) -> List[str]:
    """Convert a numeric board to textual cells."""
    check_numeric(board)
    return [str(int(v)) if v else "" for v in board]


class SudokuBoard:
    """
    A 9x9 Sudoku board backed by a numpy grid.

    Used where a 2D view is handy: parsing puzzle strings, printing boards,
    and checking a whole grid at once.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            grid: Optional 9x9 array of ints (0 for blank). Empty if None.
        """
        if grid is not None:
            if grid.shape != (SIZE, SIZE):
                raise BoardShapeError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise CellValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.grid)

    def get(self, row: int, col: int) -> int:
        """Get value at (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise CellValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == 0

    def count_empty(self) -> int:
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """Check that no unit holds the same digit twice. Blanks are ignored."""
        flat = self.grid.flatten()
        for unit in UNITS:
            values = flat[list(unit)]
            non_zero = values[values != 0]
            if len(non_zero) != len(np.unique(non_zero)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the board is completely and correctly filled."""
        return self.is_complete() and self.is_valid()

    def to_numeric(self) -> List[int]:
        """Flatten to 81 ints in row-major order."""
        return [int(v) for v in self.grid.flatten()]

    def to_cells(self) -> List[str]:
        """Flatten to 81 textual cells."""
        return to_cells(self.to_numeric())

    def to_string(self) -> str:
        """Compact 81-char form with '0' for blanks."""
        return "".join(str(v) for v in self.to_numeric())

    @classmethod
    def from_numeric(cls, board: Sequence[int]) -> SudokuBoard:
        check_numeric(board)
        return cls(np.array(board, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> SudokuBoard:
        return cls.from_numeric(to_numeric(cells))

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-char string.

        Args:
            s: '0' or '.' for blanks, '1'-'9' for digits. Whitespace is ignored.
        """
        s = "".join(s.split())
        if len(s) != CELL_COUNT:
            raise BoardShapeError(f"String length must be {CELL_COUNT}, got {len(s)}")

        values = []
        for idx, c in enumerate(s):
            if c in "0.":
                values.append(0)
            elif c in TEXT_DIGITS:
                values.append(int(c))
            else:
                raise CellValueError(f"Unexpected character {c!r} at position {idx}")
        return cls.from_numeric(values)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = "+" + (("-" * (BOX_SIZE * 2 + 1)) + "+") * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = "|"
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += " ." if val == 0 else f" {val}"
                if (j + 1) % BOX_SIZE == 0:
                    row_str += " |"
            lines.append(row_str)

        lines.append(horizontal_sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
