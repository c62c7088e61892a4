"""Paced AI auto-solve loop driving a :class:`GameSession`."""

from __future__ import annotations
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..solvers.heuristic import AIMove, next_ai_move
from ..utils.logger import get_logger
from .session import GameSession

logger = get_logger(__name__)


@dataclass
class AutoSolveConfig:
    """Pacing and safety-net settings for the auto-solver."""
    # Pause before the first move.
    delay_ms: int = 1200
    # Pause between moves.
    step_delay_ms: int = 55
    snap_to_solution: bool = True
    max_steps: Optional[int] = None

    def __post_init__(self):
        if self.delay_ms < 0 or self.step_delay_ms < 0:
            raise ValueError("delays must be >= 0")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")


@dataclass
class AutoSolveStats:
    """Statistics from one auto-solve run."""
    solved: bool = False
    moves: int = 0
    reason_counts: Dict[str, int] = field(default_factory=dict)
    cancelled: bool = False
    snapped: int = 0
    time_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solved": self.solved,
            "moves": self.moves,
            "reason_counts": dict(self.reason_counts),
            "cancelled": self.cancelled,
            "snapped": self.snapped,
            "time_seconds": self.time_seconds,
        }


class AutoSolver:
    """
    Fills a game board one heuristic move at a time.

    All progress lives in the session's cells; the solver keeps no state
    between moves. Cancellation is cooperative: set ``cancel_event`` and the
    loop stops before the next move.
    """

    def __init__(
        self,
        session: GameSession,
        config: Optional[AutoSolveConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.config = config or AutoSolveConfig()
        self.sleep = sleep

    def _pause(self, ms: int, cancel_event: Optional[threading.Event]) -> None:
        if ms <= 0:
            return
        if cancel_event is not None:
            cancel_event.wait(ms / 1000)
        else:
            self.sleep(ms / 1000)

    def run(
        self,
        cancel_event: Optional[threading.Event] = None,
        on_move: Optional[Callable[[AIMove], None]] = None,
    ) -> AutoSolveStats:
        """
        Play the current game to the end.

        Args:
            cancel_event: Stops the loop between moves when set.
            on_move: Called after each move has been applied.

        Returns:
            AutoSolveStats for the run.
        """
        session = self.session
        stats = AutoSolveStats()
        if session.solution is None or session.is_completed:
            logger.debug("Auto-solve skipped: no game or game already completed")
            stats.solved = session.is_completed
            return stats

        start = time.perf_counter()
        reasons: Counter = Counter()
        solution = session.solution

        self._pause(self.config.delay_ms, cancel_event)

        while True:
            if cancel_event is not None and cancel_event.is_set():
                stats.cancelled = True
                break
            if self.config.max_steps is not None and stats.moves >= self.config.max_steps:
                break

            move = next_ai_move(session.cells, session.fixed, solution)
            if move is None:
                if not session.is_completed and self.config.snap_to_solution:
                    stats.snapped = self._snap(solution)
                break

            session.input_digit(move.index, move.value)
            stats.moves += 1
            reasons[move.reason.value] += 1
            logger.debug("AI move %d: %s at %d (%s)", stats.moves, move.value, move.index, move.reason.value)
            if on_move is not None:
                on_move(move)

            if session.is_completed:
                break
            self._pause(self.config.step_delay_ms, cancel_event)

        stats.reason_counts = dict(reasons)
        stats.solved = session.is_solved
        stats.time_seconds = time.perf_counter() - start
        return stats

    def _snap(self, solution) -> int:
        """Copy the solution into every editable cell that differs from it."""
        snapped = 0
        for i, value in enumerate(solution):
            if not self.session.fixed[i] and self.session.cells[i] != value:
                self.session.input_digit(i, value)
                snapped += 1
        if snapped:
            logger.debug("Snapped %d cells to the solution", snapped)
        return snapped
