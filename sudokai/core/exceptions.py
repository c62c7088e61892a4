"""Exception hierarchy for board, generator and preset errors."""


class SudokuError(Exception):
    """Base exception for all sudokai failures."""


class BoardShapeError(SudokuError, ValueError):
    """Raised when a board, clue mask or solution is not exactly 81 cells long."""


class CellValueError(SudokuError, ValueError):
    """Raised when a cell holds something other than a blank or a digit 1-9."""


class DifficultyRangeError(SudokuError, ValueError):
    """Raised for an unknown difficulty or a degenerate clue range."""
