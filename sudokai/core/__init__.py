"""Core module: board geometry, representations, validation and conflicts."""

from .board import SudokuBoard, to_cells, to_numeric
from .conflicts import compute_conflicts
from .exceptions import BoardShapeError, CellValueError, DifficultyRangeError, SudokuError
from .validator import count_solutions, has_unique_solution, solve, validate_solution

__all__ = [
    "SudokuBoard",
    "to_cells",
    "to_numeric",
    "compute_conflicts",
    "count_solutions",
    "has_unique_solution",
    "solve",
    "validate_solution",
    "SudokuError",
    "BoardShapeError",
    "CellValueError",
    "DifficultyRangeError",
]
