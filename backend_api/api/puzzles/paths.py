"""
Structural path validation shared by traversal puzzles.

Positions are flat cell indices (``row * cols + col``). Paths are checked
against rules rather than a stored solution, so every valid traversal is
accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .types import ADJACENCY_DIAGONAL, ADJACENCY_ORTHOGONAL, EMPTY_CELL, AdjacencyMode

logger = logging.getLogger(__name__)

INCOMPLETE = "incomplete"
REPEATED_CELL = "repeated_cell"
OUT_OF_BOUNDS = "out_of_bounds"
NOT_ADJACENT = "not_adjacent"
NO_NUMBERS = "no_numbers"
NUMBERS_OUT_OF_ORDER = "numbers_out_of_order"
NUMBERS_NOT_CONTIGUOUS = "numbers_not_contiguous"
SHAPE_MISMATCH = "shape_mismatch"
OUT_OF_RANGE = "out_of_range"
REPEATED_NUMBER = "repeated_number"
MISSING_NUMBER = "missing_number"
GIVEN_CHANGED = "given_changed"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class PathReport:
    """Diagnostic outcome: ``reason`` is the first failed rule, ``errors`` lists all of them."""

    is_correct: bool
    reason: Optional[str] = None
    errors: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "reason": self.reason, "errors": list(self.errors)}


def _is_cell(pos: Any, total: int) -> bool:
    return isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos < total


# PUBLIC_INTERFACE
def are_adjacent(a: int, b: int, cols: int, mode: AdjacencyMode = ADJACENCY_ORTHOGONAL) -> bool:
    """Grid adjacency of two flat indices: 4-neighbourhood, or 8 with ``diagonal``."""
    row_a, col_a = divmod(a, cols)
    row_b, col_b = divmod(b, cols)
    dr, dc = abs(row_a - row_b), abs(col_a - col_b)
    if mode == ADJACENCY_DIAGONAL:
        return max(dr, dc) == 1
    return dr + dc == 1


def _path_violations(
    path: Sequence[Any],
    rows: int,
    cols: int,
    numbers: Mapping[int, int],
    mode: AdjacencyMode,
    first_only: bool,
) -> List[Tuple[str, str]]:
    found: List[Tuple[str, str]] = []

    def fail(reason: str, message: str) -> bool:
        found.append((reason, message))
        return first_only

    total = rows * cols
    if rows <= 0 or cols <= 0 or mode not in (ADJACENCY_ORTHOGONAL, ADJACENCY_DIAGONAL):
        fail(SHAPE_MISMATCH, "Grid dimensions or adjacency mode are invalid")
        return found

    # (a) every cell exactly once
    cells: List[Optional[int]] = []
    seen = set()
    for step, pos in enumerate(path, start=1):
        if not _is_cell(pos, total):
            cells.append(None)
            if fail(OUT_OF_BOUNDS, f"Step {step} is outside the grid"):
                return found
            continue
        cells.append(pos)
        if pos in seen:
            if fail(REPEATED_CELL, f"Cell {pos} is visited more than once"):
                return found
        seen.add(pos)
    if len(seen) != total:
        if fail(INCOMPLETE, f"Path covers {len(seen)} of {total} cells"):
            return found

    # (b) consecutive steps are neighbours
    for step, (prev, cur) in enumerate(zip(cells, cells[1:]), start=2):
        if prev is None or cur is None:
            continue
        if not are_adjacent(prev, cur, cols, mode):
            if fail(NOT_ADJACENT, f"Step {step} does not touch the previous cell"):
                return found

    # (c) numbered cells read 1, 2, 3... along the path
    encountered = [numbers[pos] for pos in cells if pos is not None and pos in numbers]
    if not encountered:
        fail(NO_NUMBERS, "Path passes through no numbered cell")
    elif any(b <= a for a, b in zip(encountered, encountered[1:])):
        fail(NUMBERS_OUT_OF_ORDER, "Numbers are not visited in ascending order")
    elif encountered != list(range(1, len(encountered) + 1)):
        fail(NUMBERS_NOT_CONTIGUOUS, "Numbers must run from 1 without gaps")
    return found


# PUBLIC_INTERFACE
def path_check(
    path: Sequence[Any],
    rows: int,
    cols: int,
    numbers: Mapping[int, int],
    mode: AdjacencyMode = ADJACENCY_ORTHOGONAL,
) -> PathReport:
    """Validate a claimed traversal and report every violated rule.

    Checks full single coverage, adjacency under ``mode`` and that the
    numbered cells are met in the order 1, 2, 3, ... with no gaps.
    """
    violations = _path_violations(path, rows, cols, numbers, mode, first_only=False)
    if not violations:
        return PathReport(is_correct=True)
    return PathReport(
        is_correct=False,
        reason=violations[0][0],
        errors=tuple(message for _, message in violations),
    )


# PUBLIC_INTERFACE
def is_valid_path(
    path: Sequence[Any],
    rows: int,
    cols: int,
    numbers: Mapping[int, int],
    mode: AdjacencyMode = ADJACENCY_ORTHOGONAL,
) -> bool:
    """Boolean form of ``path_check``; stops at the first violation."""
    return not _path_violations(path, rows, cols, numbers, mode, first_only=True)


# PUBLIC_INTERFACE
def trail_check(
    grid: Sequence[Optional[int]],
    rows: int,
    cols: int,
    start: int,
    end: int,
    givens: Mapping[int, int],
) -> PathReport:
    """Validate a filled number-trail grid.

    Every number in ``[start, end]`` appears once, nothing falls outside that
    range, each number touches its successor in one of 8 directions and all
    givens keep their value. Empty cells are ``None`` or 0.
    """
    total = rows * cols
    if rows <= 0 or cols <= 0 or len(grid) != total or end < start:
        return PathReport(
            is_correct=False,
            reason=SHAPE_MISMATCH,
            errors=(f"Grid has {len(grid)} cells, expected {max(total, 0)}",),
        )

    violations: List[Tuple[str, str]] = []
    positions: Dict[int, int] = {}
    for pos, value in enumerate(grid):
        if value is None or value == EMPTY_CELL:
            continue
        if not isinstance(value, int) or isinstance(value, bool) or not start <= value <= end:
            violations.append((OUT_OF_RANGE, f"Number {value} is outside range [{start}, {end}]"))
        elif value in positions:
            violations.append((REPEATED_NUMBER, f"Number {value} appears twice"))
        else:
            positions[value] = pos

    missing = [n for n in range(start, end + 1) if n not in positions]
    if missing:
        violations.append((MISSING_NUMBER, f"Number {missing[0]} is missing"))

    # The trail is the cells ordered by number.
    for n in range(start + 1, end + 1):
        if n - 1 not in positions or n not in positions:
            continue
        if not are_adjacent(positions[n - 1], positions[n], cols, ADJACENCY_DIAGONAL):
            violations.append((NOT_ADJACENT, f"Numbers {n - 1} and {n} are not adjacent"))

    for pos, value in givens.items():
        if not _is_cell(pos, total) or grid[pos] != value:
            violations.append((GIVEN_CHANGED, f"Given at cell {pos} should be {value}"))

    if not violations:
        return PathReport(is_correct=True)
    logger.debug("Trail rejected with %d violation(s)", len(violations))
    return PathReport(
        is_correct=False,
        reason=violations[0][0],
        errors=tuple(message for _, message in violations),
    )
