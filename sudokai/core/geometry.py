"""Index geometry for the 9x9 board: rows, columns, boxes and peers.

Cells are addressed by a linear index ``i`` in ``[0, 80]`` in row-major
order. All tables below are built once at import time and never mutated.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple

SIZE = 9
BOX_SIZE = 3
CELL_COUNT = SIZE * SIZE
DIGITS: Tuple[int, ...] = tuple(range(1, SIZE + 1))


def row_of(i: int) -> int:
    """Row (0-8) of a linear index."""
    return i // SIZE


def col_of(i: int) -> int:
    """Column (0-8) of a linear index."""
    return i % SIZE


def box_of(i: int) -> int:
    """Box (0-8, row-major over the 3x3 boxes) of a linear index."""
    return (i // 27) * BOX_SIZE + (i % SIZE) // BOX_SIZE


def _box_cells(b: int) -> Tuple[int, ...]:
    base_row = (b // BOX_SIZE) * BOX_SIZE
    base_col = (b % BOX_SIZE) * BOX_SIZE
    return tuple(
        (base_row + r) * SIZE + (base_col + c)
        for r in range(BOX_SIZE)
        for c in range(BOX_SIZE)
    )


ROWS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(r * SIZE + c for c in range(SIZE)) for r in range(SIZE)
)
COLS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(r * SIZE + c for r in range(SIZE)) for c in range(SIZE)
)
BOXES: Tuple[Tuple[int, ...], ...] = tuple(_box_cells(b) for b in range(SIZE))

# 9 rows, then 9 columns, then 9 boxes.
UNITS: Tuple[Tuple[int, ...], ...] = ROWS + COLS + BOXES


def _build_peers() -> Tuple[Tuple[int, ...], ...]:
    peers: List[Tuple[int, ...]] = []
    for i in range(CELL_COUNT):
        group = set(ROWS[row_of(i)]) | set(COLS[col_of(i)]) | set(BOXES[box_of(i)])
        group.discard(i)
        peers.append(tuple(sorted(group)))
    return tuple(peers)


PEERS: Tuple[Tuple[int, ...], ...] = _build_peers()


def peers_of(i: int) -> Tuple[int, ...]:
    """Return the 20 indices sharing a row, column or box with ``i``."""
    return PEERS[i]


def is_safe(board: Sequence[int], i: int, val: int) -> bool:
    """
    Check whether ``val`` can be placed at ``i`` on a numeric board.

    Args:
        board: 81 ints, 0 for blank.
        i: Linear index to test.
        val: Digit 1-9.

    Returns:
        False if ``val`` already occurs in the row, column or box of ``i``.
        Blanks never match.
    """
    for j in ROWS[row_of(i)]:
        if board[j] == val:
            return False
    for j in COLS[col_of(i)]:
        if board[j] == val:
            return False
    for j in BOXES[box_of(i)]:
        if board[j] == val:
            return False
    return True


def constraint_score(cells: Sequence[str], i: int) -> int:
    """
    Count filled cells in the row, column and box of ``i``.

    Each unit is counted on its own, so a filled cell sharing both the row
    and the box of ``i`` counts twice. Higher means more constrained.
    """
    score = 0
    for unit in (ROWS[row_of(i)], COLS[col_of(i)], BOXES[box_of(i)]):
        for j in unit:
            if cells[j]:
                score += 1
    return score
