"""
Board completion checks: nonogram clues, flow connections and sliding tiles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .paths import are_adjacent

BLANK_TILE = 0


# PUBLIC_INTERFACE
def nonogram_clue(cells: Sequence[Any]) -> Tuple[int, ...]:
    """Run lengths of filled cells, e.g. ``[1, 1, 0, 1] -> (2, 1)``."""
    runs: List[int] = []
    count = 0
    for filled in cells:
        if filled:
            count += 1
        elif count:
            runs.append(count)
            count = 0
    if count:
        runs.append(count)
    return tuple(runs)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class NonogramReport:
    """Per-line pass/fail for rows and columns."""

    is_correct: bool
    rows: Tuple[bool, ...]
    cols: Tuple[bool, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "rows": list(self.rows), "cols": list(self.cols)}


# PUBLIC_INTERFACE
def nonogram_check(
    grid: Sequence[Any],
    row_clues: Sequence[Sequence[int]],
    col_clues: Sequence[Sequence[int]],
) -> NonogramReport:
    """Check a filled grid against every row and column clue.

    A grid of the wrong size yields empty line tuples.
    """
    n_rows, n_cols = len(row_clues), len(col_clues)
    if not n_rows or not n_cols or len(grid) != n_rows * n_cols:
        return NonogramReport(is_correct=False, rows=(), cols=())

    rows = tuple(
        nonogram_clue(grid[r * n_cols:(r + 1) * n_cols]) == tuple(row_clues[r])
        for r in range(n_rows)
    )
    cols = tuple(
        nonogram_clue(grid[c::n_cols]) == tuple(col_clues[c])
        for c in range(n_cols)
    )
    return NonogramReport(is_correct=all(rows) and all(cols), rows=rows, cols=cols)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class FlowReport:
    """``connected`` lists the colours whose pipe joins its two dots."""

    is_correct: bool
    connected: Tuple[str, ...]
    covered: int
    total: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "is_correct": self.is_correct,
            "connected": list(self.connected),
            "covered": self.covered,
            "total": self.total,
        }


def _is_cell(pos: Any, total: int) -> bool:
    return isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos < total


# PUBLIC_INTERFACE
def flow_check(
    paths: Mapping[str, Sequence[Any]],
    dots: Mapping[str, Tuple[int, int]],
    rows: int,
    cols: int,
) -> FlowReport:
    """Validate a flow board.

    Each colour's pipe runs between its two dots through orthogonal
    neighbours without touching another colour's dot. Pipes never share a
    cell and together they cover the whole board.
    """
    total = rows * cols
    dot_owner = {pos: colour for colour, ends in dots.items() for pos in ends}
    occupied: Dict[int, str] = {}
    overlap = False
    connected: List[str] = []

    for colour, path in paths.items():
        cells = [pos for pos in path if _is_cell(pos, total)]
        for pos in cells:
            if pos in occupied:
                overlap = True
            occupied[pos] = colour
        if colour not in dots or len(cells) != len(path) or len(cells) < 2:
            continue
        ends = dots[colour]
        joins = {cells[0], cells[-1]} == set(ends) and cells[0] != cells[-1]
        steps_ok = all(are_adjacent(a, b, cols) for a, b in zip(cells, cells[1:]))
        clear = all(dot_owner.get(pos, colour) == colour for pos in cells)
        if joins and steps_ok and clear:
            connected.append(colour)

    is_correct = (
        not overlap
        and set(paths) <= set(dots)
        and set(connected) == set(dots)
        and len(occupied) == total
    )
    return FlowReport(
        is_correct=bool(dots) and is_correct,
        connected=tuple(sorted(connected)),
        covered=len(occupied),
        total=total,
    )


# PUBLIC_INTERFACE
def sliding_solved(tiles: Sequence[Any]) -> bool:
    """True when tiles read ``1, 2, ..., n - 1`` with the blank last."""
    if len(tiles) < 2:
        return False
    expected = list(range(1, len(tiles))) + [BLANK_TILE]
    return list(tiles) == expected
