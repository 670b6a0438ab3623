from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .normalize import normalize_text

WordPredicate = Callable[[str], bool]


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ChainReport:
    """One ``valid``/``invalid`` status per submitted rung."""

    is_correct: bool
    steps: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "steps": list(self.steps)}


# PUBLIC_INTERFACE
def differs_by_one_letter(a: str, b: str) -> bool:
    """Same length and exactly one mismatching position."""
    if len(a) != len(b):
        return False
    return sum(1 for x, y in zip(a, b) if x != y) == 1


# PUBLIC_INTERFACE
def chain_check(
    start: str,
    end: str,
    candidates: Sequence[Optional[str]],
    is_word: WordPredicate,
) -> ChainReport:
    """Validate a word ladder from ``start`` to ``end``.

    The player supplies ``len(start) - 1`` intermediate words; a trailing copy
    of ``end`` is accepted and then must itself be one step from the last
    intermediate. Each rung must be a dictionary word one letter away from
    the previous rung, and the last intermediate one letter away from ``end``.
    """
    start_n = normalize_text(start)
    end_n = normalize_text(end)
    words = [normalize_text(word) for word in candidates]
    length = len(start_n)

    arrives = len(words) == length and bool(words) and words[-1] == end_n
    expected = length if arrives else length - 1
    if length < 2 or len(end_n) != length or len(words) != expected:
        return ChainReport(is_correct=False, steps=())

    steps: List[str] = []
    previous = start_n
    for index, word in enumerate(words):
        is_end = arrives and index == len(words) - 1
        ok = (
            len(word) == length
            and (is_end or is_word(word))
            and differs_by_one_letter(previous, word)
        )
        steps.append("valid" if ok else "invalid")
        previous = word

    all_valid = all(status == "valid" for status in steps)
    if not arrives and all_valid and not differs_by_one_letter(words[-1], end_n):
        steps[-1] = "invalid"
        all_valid = False
    return ChainReport(is_correct=all_valid, steps=tuple(steps))


# PUBLIC_INTERFACE
def membership(words: Sequence[str]) -> WordPredicate:
    """Build a case-insensitive membership predicate over a word list."""
    accepted = frozenset(normalize_text(w) for w in words)
    return lambda word: normalize_text(word) in accepted
