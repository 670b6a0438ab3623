"""
Letter-grid checks: crossword fills, word searches, spelling bee words and
Boggle-style traced words.

Cells are flat indices (``row * cols + col``) as everywhere else in the
engine. Letter comparison is trimmed and case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .chain import WordPredicate
from .normalize import normalize_text
from .paths import are_adjacent
from .types import ADJACENCY_DIAGONAL

TOO_SHORT = "too_short"
MISSING_CENTER = "missing_center"
INVALID_LETTERS = "invalid_letters"
NOT_A_WORD = "not_a_word"
NOT_ADJACENT = "not_adjacent"


def _text(value: Any) -> str:
    return normalize_text(value if isinstance(value, str) else None)


# PUBLIC_INTERFACE
def crossword_cell_correct(value: Any, expected: str) -> bool:
    return _text(value) == _text(expected)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class CrosswordReport:
    """``incorrect`` lists the white cells whose letter is missing or wrong."""

    is_correct: bool
    incorrect: Tuple[int, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "incorrect": list(self.incorrect)}


# PUBLIC_INTERFACE
def crossword_check(grid: Sequence[Any], solution: Mapping[int, str]) -> CrosswordReport:
    """Compare every white cell of a filled crossword with its solution letter."""
    incorrect = tuple(
        pos
        for pos in sorted(solution)
        if not (0 <= pos < len(grid) and crossword_cell_correct(grid[pos], solution[pos]))
    )
    return CrosswordReport(is_correct=bool(solution) and not incorrect, incorrect=incorrect)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class WordSearchMatch:
    word: Optional[str]

    @property
    def is_correct(self) -> bool:
        return self.word is not None

    def as_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "is_correct": self.is_correct}


# PUBLIC_INTERFACE
def word_search_match(
    tapped: Sequence[int],
    words: Sequence[Tuple[str, Sequence[int]]],
) -> WordSearchMatch:
    """Find the hidden word whose cells were traced, in either direction."""
    traced = tuple(tapped)
    for word, cells in words:
        cells = tuple(cells)
        if not cells or len(cells) != len(traced):
            continue
        if traced == cells or traced == cells[::-1]:
            return WordSearchMatch(word=word)
    return WordSearchMatch(word=None)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class WordReport:
    """Outcome for one submitted word; ``reason`` names the first failed rule."""

    is_correct: bool
    word: str
    reason: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "word": self.word, "reason": self.reason}


# PUBLIC_INTERFACE
def spelling_bee_check(
    word: Optional[str],
    center: str,
    outer: Sequence[str],
    is_word: WordPredicate,
    min_length: int = 4,
) -> WordReport:
    """Judge a spelling bee word.

    Rules, in order: long enough, contains the center letter, uses only the
    seven letters, and is an accepted word.
    """
    text = normalize_text(word)
    middle = normalize_text(center)
    allowed = {middle} | {normalize_text(letter) for letter in outer}

    if len(text) < min_length:
        return WordReport(is_correct=False, word=text, reason=TOO_SHORT)
    if not middle or middle not in text:
        return WordReport(is_correct=False, word=text, reason=MISSING_CENTER)
    if any(ch not in allowed for ch in text):
        return WordReport(is_correct=False, word=text, reason=INVALID_LETTERS)
    if not is_word(text):
        return WordReport(is_correct=False, word=text, reason=NOT_A_WORD)
    return WordReport(is_correct=True, word=text)


# PUBLIC_INTERFACE
def letter_path_adjacent(path: Sequence[Any], rows: int, cols: int) -> bool:
    """True if the path stays on the grid, never reuses a cell and moves one step in 8 directions."""
    total = rows * cols
    seen = set()
    for step, pos in enumerate(path):
        if not isinstance(pos, int) or isinstance(pos, bool) or not 0 <= pos < total or pos in seen:
            return False
        if step and not are_adjacent(path[step - 1], pos, cols, ADJACENCY_DIAGONAL):
            return False
        seen.add(pos)
    return True


# PUBLIC_INTERFACE
def letter_path_word(path: Sequence[int], letters: Sequence[str]) -> str:
    """Read the letters along a path; cells off the grid read as nothing."""
    return "".join(letters[pos] if 0 <= pos < len(letters) else "" for pos in path).lower()


# PUBLIC_INTERFACE
def letter_path_check(
    path: Sequence[Any],
    rows: int,
    cols: int,
    letters: Sequence[str],
    is_word: WordPredicate,
    min_length: int = 3,
) -> WordReport:
    """Judge a word traced through a letter grid."""
    if not path or not letter_path_adjacent(path, rows, cols):
        return WordReport(is_correct=False, word="", reason=NOT_ADJACENT)
    word = letter_path_word(path, letters)
    if len(word) < min_length:
        return WordReport(is_correct=False, word=word, reason=TOO_SHORT)
    if not is_word(word):
        return WordReport(is_correct=False, word=word, reason=NOT_A_WORD)
    return WordReport(is_correct=True, word=word)
