"""Generator module for creating Sudoku puzzles."""

from .generator import (
    CLUE_RANGES,
    Difficulty,
    GeneratedPuzzle,
    SudokuGenerator,
    check_presets,
    generate_puzzle,
    generate_solved,
)

__all__ = [
    "CLUE_RANGES",
    "Difficulty",
    "GeneratedPuzzle",
    "SudokuGenerator",
    "check_presets",
    "generate_puzzle",
    "generate_solved",
]
