"""Human-like move selection for the AI auto-solver.

Each call picks exactly one cell and digit, trying strategies in order of
increasing sophistication:

1. fix a wrong user entry
2. naked single
3. hidden single in a row, then a column, then a box
4. most constrained cell, revealing its solution digit
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.board import check_cells, check_length
from ..core.geometry import BOXES, CELL_COUNT, COLS, ROWS, constraint_score
from .candidates import compute_candidates


class AIReason(str, Enum):
    """Which strategy produced a move."""
    FIX_WRONG = "fix-wrong"
    NAKED_SINGLE = "naked-single"
    HIDDEN_SINGLE_ROW = "hidden-single-row"
    HIDDEN_SINGLE_COL = "hidden-single-col"
    HIDDEN_SINGLE_BOX = "hidden-single-box"
    MOST_CONSTRAINED = "most-constrained"


@dataclass(frozen=True)
class AIMove:
    """One step of AI output: put ``value`` at ``index`` because of ``reason``."""
    index: int
    value: str
    reason: AIReason

    def to_dict(self) -> Dict[str, object]:
        return {"index": self.index, "value": self.value, "reason": self.reason.value}


_HIDDEN_SINGLE_SCANS: Tuple[Tuple[Tuple[Tuple[int, ...], ...], AIReason], ...] = (
    (ROWS, AIReason.HIDDEN_SINGLE_ROW),
    (COLS, AIReason.HIDDEN_SINGLE_COL),
    (BOXES, AIReason.HIDDEN_SINGLE_BOX),
)


def _find_wrong(
    cells: Sequence[str], fixed: Sequence[bool], solution: Sequence[str]
) -> Optional[AIMove]:
    for i in range(CELL_COUNT):
        if fixed[i]:
            continue
        if cells[i] and cells[i] != solution[i]:
            return AIMove(i, solution[i], AIReason.FIX_WRONG)
    return None


def _find_naked_single(
    cells: Sequence[str], fixed: Sequence[bool], cand: List[Set[int]]
) -> Optional[AIMove]:
    for i in range(CELL_COUNT):
        if fixed[i] or cells[i]:
            continue
        if len(cand[i]) == 1:
            (only,) = cand[i]
            return AIMove(i, str(only), AIReason.NAKED_SINGLE)
    return None


def _find_hidden_single(
    cells: Sequence[str],
    fixed: Sequence[bool],
    cand: List[Set[int]],
    units: Tuple[Tuple[int, ...], ...],
    reason: AIReason,
) -> Optional[AIMove]:
    """
    Find a digit that fits exactly one blank cell of some unit.

    Units are scanned in index order. Within a unit, digits are checked in
    the order they are first seen (cells in index order, candidates
    ascending), which keeps the choice deterministic for a given board.
    """
    for unit in units:
        where: Dict[int, List[int]] = {}
        for i in unit:
            if fixed[i] or cells[i]:
                continue
            for digit in sorted(cand[i]):
                where.setdefault(digit, []).append(i)
        for digit, positions in where.items():
            if len(positions) == 1:
                return AIMove(positions[0], str(digit), reason)
    return None


def _find_most_constrained(
    cells: Sequence[str], fixed: Sequence[bool], solution: Sequence[str]
) -> Optional[AIMove]:
    best = -1
    best_score = -1
    for i in range(CELL_COUNT):
        if fixed[i] or cells[i]:
            continue
        score = constraint_score(cells, i)
        # Strict '>' keeps the lowest index on ties.
        if score > best_score:
            best_score = score
            best = i
    if best == -1:
        return None
    return AIMove(best, solution[best], AIReason.MOST_CONSTRAINED)


def next_ai_move(
    cells: Sequence[str],
    fixed: Sequence[bool],
    solution: Sequence[str],
) -> Optional[AIMove]:
    """
    Pick the next move the way a human solver would.

    Order: fix wrong -> naked single -> hidden single (row/col/box) ->
    most constrained. The function is pure; the caller applies the move.

    Args:
        cells: Current values, "" or "1".."9" (81 entries).
        fixed: True for clue cells, which are never touched.
        solution: The solved board as strings (81 entries).

    Returns:
        The move to make, or None once no blank editable cell remains.
    """
    check_cells(cells)
    check_length(fixed, "fixed")
    check_cells(solution, "solution")

    move = _find_wrong(cells, fixed, solution)
    if move is not None:
        return move

    cand = compute_candidates(cells)

    move = _find_naked_single(cells, fixed, cand)
    if move is not None:
        return move

    for units, reason in _HIDDEN_SINGLE_SCANS:
        move = _find_hidden_single(cells, fixed, cand, units, reason)
        if move is not None:
            return move

    return _find_most_constrained(cells, fixed, solution)
