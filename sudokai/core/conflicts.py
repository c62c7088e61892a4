"""Conflict detection over textual cells."""

from __future__ import annotations
from typing import Dict, List, Sequence, Set

from .board import check_cells
from .geometry import UNITS


def compute_conflicts(cells: Sequence[str]) -> Set[int]:
    """
    Find every cell taking part in a duplicate within a row, column or box.

    Blank cells are never flagged. A cell duplicated in several units
    appears once. The function is pure and should simply be re-run after
    each change to the board.

    Args:
        cells: 81 strings, "" for blank or "1".."9".

    Returns:
        Set of conflicting indices (0-80).
    """
    check_cells(cells)
    bad: Set[int] = set()

    for unit in UNITS:
        seen: Dict[str, List[int]] = {}
        for idx in unit:
            value = cells[idx]
            if value:
                seen.setdefault(value, []).append(idx)
        for positions in seen.values():
            if len(positions) > 1:
                bad.update(positions)

    return bad


def is_complete(cells: Sequence[str]) -> bool:
    """True when every cell is filled and no unit holds a duplicate."""
    return all(cells) and not compute_conflicts(cells)
