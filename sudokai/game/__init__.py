"""Game session and the paced AI auto-solve loop."""

from .session import GameSession, format_time, move_index
from .autoplay import AutoSolveConfig, AutoSolveStats, AutoSolver

__all__ = [
    "GameSession",
    "format_time",
    "move_index",
    "AutoSolveConfig",
    "AutoSolveStats",
    "AutoSolver",
]
