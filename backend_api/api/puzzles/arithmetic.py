"""
Restricted arithmetic for quick-math puzzles.

Expressions are tokenized by hand and folded left to right with no operator
precedence: ``2 + 3 * 4`` is ``20``. Nothing here hands text to an
interpreter. Bad tokens and division by zero give ``None``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .normalize import normalize_text, split_answers

Token = Union[float, str]

_OPERATORS = ("+", "-", "*", "/")
_ALIASES = {"×": "*", "x": "*", "÷": "/"}
_PRECISION = 3


def _parse_number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _tokenize(expression: str) -> Optional[List[Token]]:
    """Split into alternating operand/operator tokens, or None if malformed."""
    tokens: List[Token] = []
    expect_operand = True
    i, n = 0, len(expression)
    while i < n:
        ch = expression[i]
        if ch.isspace():
            i += 1
            continue
        if expect_operand:
            j = i + 1 if ch in "+-" else i
            k = j
            while k < n and (expression[k] in "0123456789."):
                k += 1
            if k == j:
                return None
            number = _parse_number(expression[i:k])
            if number is None:
                return None
            tokens.append(number)
            expect_operand = False
            i = k
        else:
            op = _ALIASES.get(ch.lower(), ch)
            if op not in _OPERATORS:
                return None
            tokens.append(op)
            expect_operand = True
            i += 1
    if expect_operand:
        return None
    return tokens


def _apply(left: float, op: str, right: float) -> Optional[float]:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        return None if right == 0 else left / right
    return None


# PUBLIC_INTERFACE
def arith_eval(expression: Any) -> Optional[float]:
    """Evaluate ``a op b`` or a left-to-right chain ``a op b op c ...``.

    Returns None for anything it cannot evaluate; it never raises.
    """
    if not isinstance(expression, str):
        return None
    tokens = _tokenize(expression)
    if tokens is None or len(tokens) < 3:
        return None

    result = tokens[0]
    for i in range(1, len(tokens), 2):
        result = _apply(result, tokens[i], tokens[i + 1])
        if result is None or not math.isfinite(result):
            return None
    return result


def format_number(value: float) -> str:
    """Render a result the way players type it: ``8`` rather than ``8.0``."""
    rounded = round(value, _PRECISION)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SheetReport:
    """Per-problem ``correct``/``incorrect``/``ungraded`` for a quick-math sheet."""

    is_correct: bool
    results: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "is_correct": self.is_correct,
            "results": list(self.results),
            "correct": sum(1 for r in self.results if r == "correct"),
        }


def _same_answer(given: str, accepted: Sequence[str]) -> bool:
    if given in accepted:
        return True
    value = _parse_number(given)
    if value is None:
        return False
    for alternative in accepted:
        expected = _parse_number(alternative)
        if expected is not None and round(expected, _PRECISION) == round(value, _PRECISION):
            return True
    return False


# PUBLIC_INTERFACE
def grade_sheet(
    problems: Sequence[str],
    answers: Sequence[str],
    player_answers: Sequence[Optional[str]],
) -> SheetReport:
    """Grade every answer of a quick-math sheet.

    Stored ``answers`` win; a problem without one is evaluated instead. A
    problem that cannot be evaluated is ``ungraded`` and fails the sheet.
    """
    if not problems or len(player_answers) != len(problems):
        return SheetReport(is_correct=False, results=())

    results: List[str] = []
    for i, problem in enumerate(problems):
        accepted = split_answers(answers[i]) if i < len(answers) else ()
        if not accepted:
            value = arith_eval(problem)
            if value is None:
                results.append("ungraded")
                continue
            accepted = (format_number(value),)
        given = normalize_text(player_answers[i] if isinstance(player_answers[i], str) else None)
        results.append("correct" if given and _same_answer(given, accepted) else "incorrect")

    return SheetReport(
        is_correct=all(r == "correct" for r in results),
        results=tuple(results),
    )
