"""Benchmark puzzle generation and AI play-throughs across difficulties."""

from __future__ import annotations
import json
import os
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..game.autoplay import AutoSolveConfig, AutoSolver
from ..game.session import GameSession
from ..generator import Difficulty, GeneratedPuzzle, generate_puzzle
from ..solvers.heuristic import AIReason
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BenchmarkResult:
    """Results from generating and auto-solving one puzzle."""
    puzzle_id: int
    difficulty: str
    clues: int
    generation_seconds: float
    solved: bool
    moves: int
    solve_seconds: float
    snapped: int = 0
    reason_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "clues": self.clues,
            "generation_seconds": self.generation_seconds,
            "solved": self.solved,
            "moves": self.moves,
            "solve_seconds": self.solve_seconds,
            "snapped": self.snapped,
            "reason_counts": dict(self.reason_counts),
        }


class Benchmark:
    """
    Measure the generator and the move heuristic together.

    For every difficulty, generates puzzles (timed) and plays each one to
    the end with the auto-solver running without delays, recording which
    strategies it needed.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.seed = seed
        self.rng = random.Random(seed)

        self.puzzles: Dict[str, List[GeneratedPuzzle]] = {}
        self.generation_times: Dict[str, List[float]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate all puzzles, timing each one."""
        total = len(self.difficulties) * self.puzzles_per_difficulty
        pbar = tqdm(total=total, desc="Generating", disable=not show_progress)

        for difficulty in self.difficulties:
            puzzles = []
            times = []
            for _ in range(self.puzzles_per_difficulty):
                start = time.perf_counter()
                puzzles.append(generate_puzzle(difficulty, self.rng))
                times.append(time.perf_counter() - start)
                pbar.update(1)
            self.puzzles[difficulty.value] = puzzles
            self.generation_times[difficulty.value] = times

        pbar.close()

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []
        total = sum(len(p) for p in self.puzzles.values())
        pbar = tqdm(total=total, desc="Auto-solving", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                gen_time = self.generation_times.get(difficulty_name, [0.0] * len(puzzles))[puzzle_id]
                self.results.append(self._run_single(puzzle, puzzle_id, difficulty_name, gen_time))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: GeneratedPuzzle,
        puzzle_id: int,
        difficulty: str,
        generation_seconds: float,
    ) -> BenchmarkResult:
        """Auto-solve a single puzzle with no pacing."""
        session = GameSession(difficulty)
        session.load(puzzle)
        solver = AutoSolver(session, AutoSolveConfig(delay_ms=0, step_delay_ms=0))
        stats = solver.run()

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            clues=puzzle.clue_count,
            generation_seconds=generation_seconds,
            solved=stats.solved,
            moves=stats.moves,
            solve_seconds=stats.time_seconds,
            snapped=stats.snapped,
            reason_counts=stats.reason_counts,
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics grouped by difficulty."""
        summary: Dict[str, Any] = {
            "total_puzzles": len(self.results),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {},
        }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue

            clues = [r.clues for r in diff_results]
            gen_times = [r.generation_seconds for r in diff_results]
            reasons = {reason.value: 0 for reason in AIReason}
            for r in diff_results:
                for reason, count in r.reason_counts.items():
                    reasons[reason] = reasons.get(reason, 0) + count

            summary["results_by_difficulty"][difficulty.value] = {
                "clue_range": list(difficulty.clue_range),
                "avg_clues": sum(clues) / len(clues),
                "min_clues": min(clues),
                "max_clues": max(clues),
                "avg_generation_seconds": sum(gen_times) / len(gen_times),
                "max_generation_seconds": max(gen_times),
                "solved": sum(1 for r in diff_results if r.solved),
                "tested": len(diff_results),
                "avg_moves": sum(r.moves for r in diff_results) / len(diff_results),
                "reason_counts": reasons,
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_file = os.path.join(output_dir, "puzzles.json")
        with open(puzzles_file, "w") as f:
            json.dump(
                {d: [p.to_dict() for p in puzzles] for d, puzzles in self.puzzles.items()},
                f,
                indent=2,
            )

        logger.info("Results and puzzles saved to %s", output_dir)
