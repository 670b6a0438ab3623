"""
Constraint validation for square numeric grids.

One validator backs magic squares (line sums + each of 1..N*N once), Latin
and inequality grids (each row/column holds 1..N, pairwise ``<``/``>``) and
uniquely-solved grids compared against a stored solution. Grids are flat,
row-major sequences; empty cells are ``None`` or 0.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .types import DONT_CARE, EMPTY_CELL, Inequality, ValueRule

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GridReport:
    """Per-cell pass/fail plus readable messages for every failed rule."""

    is_correct: bool
    cells: Tuple[bool, ...]
    errors: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "cells": list(self.cells), "errors": list(self.errors)}


def _number(value: Any) -> Optional[int]:
    """The cell's number, or None when the cell is empty or not numeric."""
    if isinstance(value, bool) or not isinstance(value, int) or value == EMPTY_CELL:
        return None
    return value


def _lines(size: int) -> Iterable[Tuple[str, List[int]]]:
    for r in range(size):
        yield f"Row {r + 1}", [r * size + c for c in range(size)]
    for c in range(size):
        yield f"Column {c + 1}", [r * size + c for r in range(size)]


def _diagonals(size: int) -> Iterable[Tuple[str, List[int]]]:
    yield "Main diagonal", [i * size + i for i in range(size)]
    yield "Anti-diagonal", [i * size + (size - 1 - i) for i in range(size)]


class _Checker:
    """Accumulates failures for one grid evaluation."""

    def __init__(self, grid: Sequence[Any], size: int) -> None:
        self.grid = grid
        self.size = size
        self.values = [_number(v) for v in grid]
        self.cells = [True] * len(grid)
        self.errors: List[str] = []

    def fail(self, message: str, *positions: int) -> None:
        for pos in positions:
            self.cells[pos] = False
        if message not in self.errors:
            self.errors.append(message)

    def report(self) -> GridReport:
        ok = not self.errors and all(self.cells)
        return GridReport(is_correct=ok, cells=tuple(self.cells), errors=tuple(self.errors))

    # -- individual rules -------------------------------------------------

    def completeness(self, skip: Iterable[int] = ()) -> None:
        skipped = set(skip)
        for pos, value in enumerate(self.values):
            if value is None and pos not in skipped:
                self.fail("All cells must be filled", pos)

    def givens(self, givens: Mapping[int, int]) -> None:
        for pos, expected in givens.items():
            if not 0 <= pos < len(self.grid):
                self.fail(f"Given cell {pos} lies outside the grid")
            elif self.values[pos] != expected:
                self.fail(f"Given at cell {pos} should be {expected}", pos)

    def line_sums(self, target: int) -> None:
        for label, line in list(_lines(self.size)) + list(_diagonals(self.size)):
            total = sum(self.values[pos] or 0 for pos in line)
            if total != target:
                self.fail(f"{label} sums to {total}, not {target}")

    def square_values(self) -> None:
        top = self.size * self.size
        counts = Counter(v for v in self.values if v is not None)
        for pos, value in enumerate(self.values):
            if value is None:
                continue
            if not 1 <= value <= top or counts[value] > 1:
                self.fail(f"All numbers 1 through {top} must appear exactly once", pos)
        if sorted(counts.elements()) != list(range(1, top + 1)):
            self.fail(f"All numbers 1 through {top} must appear exactly once")

    def latin_values(self) -> None:
        expected = list(range(1, self.size + 1))
        for label, line in _lines(self.size):
            line_values = [self.values[pos] for pos in line]
            counts = Counter(v for v in line_values if v is not None)
            for pos, value in zip(line, line_values):
                if value is not None and (not 1 <= value <= self.size or counts[value] > 1):
                    self.fail(f"{label} is invalid", pos)
            if sorted(counts.elements()) != expected:
                self.fail(f"{label} is invalid")

    def inequalities(self, inequalities: Sequence[Inequality]) -> None:
        for ineq in inequalities:
            a, b = ineq.cell_a, ineq.cell_b
            if not (0 <= a < len(self.grid) and 0 <= b < len(self.grid)) or ineq.operator not in ("<", ">"):
                self.fail(f"Inequality {a} {ineq.operator} {b} is malformed")
                continue
            left, right = self.values[a], self.values[b]
            if left is None or right is None:
                continue
            holds = left < right if ineq.operator == "<" else left > right
            if not holds:
                self.fail("Inequality constraint violated", a, b)

    def matches(self, solution: Sequence[int]) -> None:
        for pos, expected in enumerate(solution):
            if expected == DONT_CARE:
                continue
            value = self.values[pos]
            if value is not None and value != expected:
                self.fail("Some cells do not match the solution", pos)


# PUBLIC_INTERFACE
def grid_check(
    grid: Sequence[Any],
    size: int,
    givens: Optional[Mapping[int, int]] = None,
    magic_constant: Optional[int] = None,
    values: Optional[ValueRule] = None,
    inequalities: Sequence[Inequality] = (),
    solution: Optional[Sequence[int]] = None,
) -> GridReport:
    """Validate a flat ``size x size`` grid against the given constraint set.

    Rules are independent and all must pass: completeness, givens,
    line sums (rows, columns, both diagonals) when ``magic_constant`` is
    set, the ``values`` rule (``square`` or ``latin``; ``square`` when only a
    magic constant is given) and inequalities.
    With a ``solution`` the sum and value-set rules are replaced by a
    cell-by-cell comparison where a solution 0 matches anything.
    """
    total = size * size if size > 0 else 0
    if total == 0 or len(grid) != total or (solution is not None and len(solution) != total):
        return GridReport(
            is_correct=False,
            cells=(),
            errors=(f"Grid has {len(grid)} cells, expected {total}",),
        )

    checker = _Checker(grid, size)
    if solution is not None:
        checker.completeness(skip=[pos for pos, v in enumerate(solution) if v == DONT_CARE])
        checker.givens(givens or {})
        checker.matches(solution)
    else:
        checker.completeness()
        checker.givens(givens or {})
        if magic_constant is not None:
            checker.line_sums(magic_constant)
            # a magic square also holds each of 1..N*N exactly once
            values = values or "square"
        if values == "square":
            checker.square_values()
        elif values == "latin":
            checker.latin_values()
        checker.inequalities(inequalities)

    report = checker.report()
    if not report.is_correct:
        logger.debug("Grid rejected: %s", "; ".join(report.errors))
    return report

