"""Sudoku puzzle generator, validator and human-like AI auto-solver."""

from .core.conflicts import compute_conflicts
from .core.validator import count_solutions
from .generator import Difficulty, GeneratedPuzzle, SudokuGenerator, generate_puzzle, generate_solved
from .solvers import AIMove, AIReason, compute_candidates, next_ai_move

__version__ = "1.0.0"

__all__ = [
    "compute_conflicts",
    "count_solutions",
    "Difficulty",
    "GeneratedPuzzle",
    "SudokuGenerator",
    "generate_puzzle",
    "generate_solved",
    "AIMove",
    "AIReason",
    "compute_candidates",
    "next_ai_move",
]
