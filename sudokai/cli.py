"""Command-line interface for the Sudoku generator and AI auto-solver."""

import argparse
import json
import logging
import sys

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.board import SudokuBoard
from .core.conflicts import compute_conflicts
from .core.exceptions import SudokuError
from .core.validator import count_solutions, solve, validate_solution
from .game.autoplay import AutoSolveConfig, AutoSolver
from .game.session import GameSession, format_time
from .generator import Difficulty, GeneratedPuzzle, SudokuGenerator
from .utils.logger import configure_logging

DIFFICULTY_CHOICES = [d.value for d in Difficulty] + ["all"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sudoku Puzzle Generator & Human-like AI Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 hard puzzles
  sudokai generate --count 5 --difficulty hard

  # Watch the AI solve a puzzle move by move
  sudokai solve --puzzle "530070000600195000..."

  # Benchmark generation and AI play-throughs
  sudokai benchmark --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    solve_parser = subparsers.add_parser("solve", help="Let the AI solve a puzzle step by step")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Puzzle string (81 chars, 0 or . for empty cells). Generated if omitted."
    )
    solve_parser.add_argument(
        "--solution", type=str, default=None,
        help="Known solution string; derived by backtracking if omitted"
    )
    solve_parser.add_argument(
        "--difficulty", "-d", choices=[d.value for d in Difficulty], default="easy",
        help="Difficulty for a generated puzzle (default: easy)"
    )
    solve_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for a generated puzzle"
    )
    solve_parser.add_argument(
        "--delay-ms", type=int, default=0,
        help="Pause before the first move in milliseconds (default: 0)"
    )
    solve_parser.add_argument(
        "--step-delay-ms", type=int, default=0,
        help="Pause between moves in milliseconds (default: 0)"
    )
    solve_parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Only print the final board"
    )

    check_parser = subparsers.add_parser("check", help="Report conflicts and solution count")
    check_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )

    bench_parser = subparsers.add_parser("benchmark", help="Benchmark generation and AI solving")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _difficulties(name: str):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def _parse_board(text: str, label: str) -> SudokuBoard:
    try:
        return SudokuBoard.from_string(text)
    except SudokuError as e:
        print(f"Error parsing {label}: {e}")
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed)
    all_puzzles = []

    for difficulty in _difficulties(args.difficulty):
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        for i, puzzle in enumerate(generator.generate_batch(args.count, difficulty), 1):
            data = puzzle.to_dict()
            data["index"] = i
            all_puzzles.append(data)

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({puzzle.clue_count} clues) ---")
            print(SudokuBoard.from_cells(puzzle.puzzle))

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def _puzzle_from_args(args) -> GeneratedPuzzle:
    if args.puzzle is None:
        return SudokuGenerator(seed=args.seed).generate(args.difficulty)

    board = _parse_board(args.puzzle, "puzzle")
    cells = board.to_cells()
    if compute_conflicts(cells):
        print("Puzzle has conflicting clues:", sorted(compute_conflicts(cells)))
        sys.exit(1)

    if args.solution is not None:
        solution = _parse_board(args.solution, "solution")
        if not validate_solution(board.to_numeric(), solution.to_numeric()):
            print("Solution is not a valid completion of the puzzle")
            sys.exit(1)
        solved = solution.to_numeric()
    else:
        solved = solve(board.to_numeric())
        if solved is None:
            print("Puzzle has no solution")
            sys.exit(1)
        if count_solutions(board.to_numeric(), 2) > 1:
            print("Warning: puzzle has more than one solution; following the first one found")

    return GeneratedPuzzle(
        puzzle=tuple(cells),
        fixed=tuple(bool(v) for v in cells),
        solution=tuple(SudokuBoard.from_numeric(solved).to_cells()),
    )


def cmd_solve(args):
    """Handle the solve command."""
    puzzle = _puzzle_from_args(args)

    session = GameSession()
    session.load(puzzle)

    print("Input puzzle:")
    print(SudokuBoard.from_cells(session.cells))
    print()

    def show(move):
        if not args.quiet:
            r, c = divmod(move.index, 9)
            print(f"  r{r + 1}c{c + 1} <- {move.value}  ({move.reason.value})")

    try:
        config = AutoSolveConfig(delay_ms=args.delay_ms, step_delay_ms=args.step_delay_ms)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    stats = AutoSolver(session, config).run(on_move=show)

    print()
    print(SudokuBoard.from_cells(session.cells))
    if stats.solved:
        print(f"✓ Solved in {stats.moves} moves ({format_time(session.completed_in_ms or 0)})")
    else:
        print("✗ Failed to solve")
    for reason, count in sorted(stats.reason_counts.items()):
        print(f"  {reason}: {count}")
    if stats.snapped:
        print(f"  snapped to solution: {stats.snapped}")


def cmd_check(args):
    """Handle the check command."""
    board = _parse_board(args.puzzle, "puzzle")
    print(board)

    conflicts = compute_conflicts(board.to_cells())
    if conflicts:
        print(f"Conflicting cells: {sorted(conflicts)}")
    else:
        print("No conflicts")
        n = count_solutions(board.to_numeric(), 2)
        label = {0: "no solution", 1: "unique solution"}.get(n, "multiple solutions")
        print(f"Solutions: {label}")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("SUDOKU GENERATOR & AI BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=args.seed
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for diff, stats in summary["results_by_difficulty"].items():
        low, high = stats["clue_range"]
        print(f"\n{diff}:")
        print(f"  Clues: avg {stats['avg_clues']:.1f} (min {stats['min_clues']}, "
              f"max {stats['max_clues']}, target {low}-{high})")
        print(f"  Avg Generation Time: {stats['avg_generation_seconds']:.4f}s")
        print(f"  Solved: {stats['solved']}/{stats['tested']} in {stats['avg_moves']:.1f} moves avg")
        for reason, count in stats["reason_counts"].items():
            print(f"    {reason}: {count}")

    benchmark.save_results(args.output)
    print(f"\nResults and puzzles saved to {args.output}")

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
