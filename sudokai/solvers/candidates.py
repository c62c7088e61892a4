"""Candidate digits for blank cells, from their filled peers."""

from __future__ import annotations
from typing import List, Sequence, Set

from ..core.board import check_cells
from ..core.geometry import CELL_COUNT, DIGITS, PEERS


def candidates_for(cells: Sequence[str], i: int) -> Set[int]:
    """Digits 1-9 not held by any peer of ``i``. Empty if ``i`` is filled."""
    if cells[i]:
        return set()
    used = {int(cells[p]) for p in PEERS[i] if cells[p]}
    return {d for d in DIGITS if d not in used}


def compute_candidates(cells: Sequence[str]) -> List[Set[int]]:
    """
    Compute candidate sets for every cell.

    This is a local check against peers only; a listed candidate is not
    guaranteed to extend to a full solution.

    Args:
        cells: 81 strings, "" for blank or "1".."9".

    Returns:
        81 sets of ints, empty for filled cells.
    """
    check_cells(cells)
    return [candidates_for(cells, i) for i in range(CELL_COUNT)]
