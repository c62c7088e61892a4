"""Charts for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..solvers.heuristic import AIReason
from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for benchmark results.

    Compares clue counts, generation cost and strategy usage across
    difficulties.
    """

    COLORS = {
        "easy": "#2ecc71",
        "medium": "#f39c12",
        "hard": "#e74c3c",
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use("seaborn-v0_8-whitegrid")
        sns.set_palette("husl")

    def _difficulties(self) -> List[str]:
        order = list(self.COLORS)
        found = {r.difficulty for r in self.results}
        return [d for d in order if d in found] + sorted(found - set(order))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches="tight")
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_clue_distribution(),
            self.plot_generation_time(),
            self.plot_reason_usage(),
        ]

    def plot_clue_distribution(self) -> str:
        """Box plot of clue counts per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        data = [[r.clues for r in self.results if r.difficulty == d] for d in difficulties]

        bp = ax.boxplot(data, patch_artist=True)
        for patch, diff in zip(bp["boxes"], difficulties):
            patch.set_facecolor(self.COLORS.get(diff, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xticks(np.arange(1, len(difficulties) + 1))
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_xlabel("Difficulty", fontsize=12)
        ax.set_ylabel("Clues", fontsize=12)
        ax.set_title("Clue Count by Difficulty", fontsize=14, fontweight="bold")

        return self._save("clue_distribution.png")

    def plot_generation_time(self) -> str:
        """Bar chart of average generation time per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        avg_times = [
            np.mean([r.generation_seconds for r in self.results if r.difficulty == d])
            for d in difficulties
        ]
        colors = [self.COLORS.get(d, "#95a5a6") for d in difficulties]

        bars = ax.bar([d.capitalize() for d in difficulties], avg_times,
                      color=colors, edgecolor="black", linewidth=0.5)
        for bar, t in zip(bars, avg_times):
            ax.annotate(f"{t:.3f}s",
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha="center", va="bottom", fontsize=10)

        ax.set_xlabel("Difficulty", fontsize=12)
        ax.set_ylabel("Average Generation Time (seconds)", fontsize=12)
        ax.set_title("Puzzle Generation Time", fontsize=14, fontweight="bold")
        ax.set_ylim(bottom=0)

        return self._save("generation_time.png")

    def plot_reason_usage(self) -> str:
        """Grouped bar chart of average moves per strategy and difficulty."""
        fig, ax = plt.subplots(figsize=(12, 6))

        difficulties = self._difficulties()
        reasons = [reason.value for reason in AIReason]
        x = np.arange(len(reasons))
        width = 0.8 / max(len(difficulties), 1)

        for i, diff in enumerate(difficulties):
            diff_results = [r for r in self.results if r.difficulty == diff]
            averages = [
                np.mean([r.reason_counts.get(reason, 0) for r in diff_results])
                for reason in reasons
            ]
            offset = (i - len(difficulties) / 2 + 0.5) * width
            ax.bar(x + offset, averages, width,
                   label=diff.capitalize(),
                   color=self.COLORS.get(diff, "#95a5a6"),
                   edgecolor="black", linewidth=0.5)

        ax.set_xticks(x)
        ax.set_xticklabels(reasons, rotation=20, ha="right")
        ax.set_ylabel("Average Moves per Puzzle", fontsize=12)
        ax.set_title("Strategy Usage by Difficulty", fontsize=14, fontweight="bold")
        ax.legend(title="Difficulty")

        return self._save("reason_usage.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Difficulty | Puzzles | Avg Clues | Avg Gen Time | Solved | Avg Moves |",
            "|------------|---------|-----------|--------------|--------|-----------|",
        ]

        for diff in self._difficulties():
            diff_results = [r for r in self.results if r.difficulty == diff]
            solved = sum(1 for r in diff_results if r.solved)
            avg_clues = np.mean([r.clues for r in diff_results])
            avg_time = np.mean([r.generation_seconds for r in diff_results])
            avg_moves = np.mean([r.moves for r in diff_results])
            lines.append(
                f"| {diff} | {len(diff_results)} | {avg_clues:.1f} | {avg_time:.4f}s "
                f"| {solved}/{len(diff_results)} | {avg_moves:.1f} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
