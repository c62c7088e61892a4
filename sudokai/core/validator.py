"""Backtracking search, solution counting and solution checks on numeric boards."""

from __future__ import annotations
from contextlib import closing
from typing import Callable, Iterable, Iterator, List, MutableSequence, Optional, Sequence, Tuple

from .board import check_numeric
from .geometry import DIGITS, PEERS, UNITS, is_safe

DigitOrder = Callable[[], Iterable[int]]


def _in_order() -> Iterable[int]:
    return DIGITS


def _fewest_candidates(board: Sequence[int], empties: Sequence[int]) -> Tuple[int, List[int]]:
    """Pick the blank cell with the fewest candidates (MRV)."""
    best = -1
    best_cands: List[int] = []
    for i in empties:
        if board[i]:
            continue
        used = {board[p] for p in PEERS[i]}
        cands = [d for d in DIGITS if d not in used]
        if best == -1 or len(cands) < len(best_cands):
            best, best_cands = i, cands
            if len(cands) <= 1:
                break
    return best, best_cands


def givens_conflict(board: Sequence[int]) -> bool:
    """Check whether any row, column or box repeats a non-zero digit."""
    for unit in UNITS:
        seen = set()
        for i in unit:
            value = board[i]
            if value:
                if value in seen:
                    return True
                seen.add(value)
    return False


def iter_solutions(
    board: MutableSequence[int],
    digit_order: DigitOrder = _in_order,
    mrv: bool = False,
) -> Iterator[MutableSequence[int]]:
    """
    Yield every completion of ``board`` found by backtracking.

    By default the search branches on the lowest-index blank cell and tries
    digits in the order produced by ``digit_order`` (called once per
    branch). With ``mrv=True`` it branches on the blank cell with the
    fewest candidates instead, trying them in ascending order. Either way
    it runs on an explicit stack of ``(cell_index, remaining digits)``
    frames instead of recursion.

    The board is filled in place: each yielded value *is* ``board``, holding
    a complete solution at that moment. Copy it if you need to keep it.
    Every blank cell is restored to 0 once the generator finishes or is
    closed.

    Args:
        board: 81 ints, 0 for blank. Mutated during the search.
        digit_order: Callable returning the digits to try for a new branch.
        mrv: Use the minimum-remaining-values heuristic to pick cells.
    """
    empties = [i for i, v in enumerate(board) if v == 0]

    def branch(depth: int) -> Tuple[int, Iterator[int]]:
        if mrv:
            cell, cands = _fewest_candidates(board, empties)
            return cell, iter(cands)
        return empties[depth], iter(digit_order())

    try:
        if not empties:
            yield board
            return

        stack: List[Tuple[int, Iterator[int]]] = [branch(0)]
        while stack:
            cell, remaining = stack[-1]
            board[cell] = 0
            for value in remaining:
                if is_safe(board, cell, value):
                    board[cell] = value
                    break
            else:
                stack.pop()
                continue

            depth = len(stack)
            if depth == len(empties):
                yield board
            else:
                stack.append(branch(depth))
    finally:
        for i in empties:
            board[i] = 0


def count_solutions(board: MutableSequence[int], limit: int = 2) -> int:
    """
    Count the solutions of a puzzle, stopping early at ``limit``.

    Only used to test uniqueness, so the default limit of 2 is enough.
    Branches on the cell with the fewest candidates to keep the search small.
    The board is mutated during the search and restored before returning;
    callers should still pass a disposable copy. A board whose clues
    already repeat a digit in some unit returns 0 without searching.

    Args:
        board: The puzzle as 81 ints (0 for blank).
        limit: Maximum solutions to count before stopping (>= 1).

    Returns:
        Number of solutions found, in ``[0, limit]``.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    check_numeric(board)
    if givens_conflict(board):
        return 0

    count = 0
    with closing(iter_solutions(board, mrv=True)) as solutions:
        for _ in solutions:
            count += 1
            if count >= limit:
                break
    return count


def has_unique_solution(board: Sequence[int]) -> bool:
    """Check if a puzzle has exactly one solution. The input is not touched."""
    return count_solutions(list(board), limit=2) == 1


def solve(board: Sequence[int]) -> Optional[List[int]]:
    """
    Return the first solution found, or None if there is none.

    Deterministic: the same puzzle always yields the same grid.
    """
    check_numeric(board)
    if givens_conflict(board):
        return None
    work = list(board)
    with closing(iter_solutions(work, mrv=True)) as solutions:
        for solution in solutions:
            return list(solution)
    return None


def is_solved_grid(board: Sequence[int]) -> bool:
    """Check that every row, column and box is a permutation of 1-9."""
    check_numeric(board)
    digits = set(DIGITS)
    return all({board[i] for i in unit} == digits for unit in UNITS)


def validate_solution(puzzle: Sequence[int], solution: Sequence[int]) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Returns:
        True if the solution is a valid full grid that keeps every clue.
    """
    check_numeric(puzzle)
    for given, value in zip(puzzle, solution):
        if given and given != value:
            return False
    return is_solved_grid(solution)
