from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .normalize import normalize_text
from .types import LetterStatus

_STATUS_RANK: Dict[str, int] = {"absent": 0, "present": 1, "correct": 2}


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class WordFeedback:
    """Per-letter statuses for one guess. Empty ``letters`` means the guess had the wrong length."""

    letters: Tuple[LetterStatus, ...]
    is_correct: bool

    def as_dict(self) -> Dict[str, Any]:
        return {"letters": list(self.letters), "is_correct": self.is_correct}


def _compute_letter_feedback(target: str, guess: str) -> List[LetterStatus]:
    """Compute per-letter feedback with Wordle rules.

    - correct: correct letter in correct position
    - present: letter exists in target but different position (respect counts)
    - absent: letter not in target or already satisfied by count
    """
    n = len(target)
    result: List[LetterStatus] = ["absent"] * n

    # First pass: mark corrects and build the pool of unmatched target letters
    remaining_counts: Dict[str, int] = {}
    for i in range(n):
        if guess[i] == target[i]:
            result[i] = "correct"
        else:
            remaining_counts[target[i]] = remaining_counts.get(target[i], 0) + 1

    # Second pass: present while the pool still holds the letter
    for i in range(n):
        if result[i] == "correct":
            continue
        ch = guess[i]
        if remaining_counts.get(ch, 0) > 0:
            result[i] = "present"
            remaining_counts[ch] -= 1

    return result


# PUBLIC_INTERFACE
def word_feedback(guess: str, secret: str) -> WordFeedback:
    """Score ``guess`` against ``secret`` letter by letter, case-insensitively.

    A length mismatch yields an empty status tuple and ``is_correct=False``.
    """
    guess_n = normalize_text(guess)
    secret_n = normalize_text(secret)
    if not secret_n or len(guess_n) != len(secret_n):
        return WordFeedback(letters=(), is_correct=False)

    letters = tuple(_compute_letter_feedback(secret_n, guess_n))
    return WordFeedback(letters=letters, is_correct=all(s == "correct" for s in letters))


# PUBLIC_INTERFACE
def keyboard_states(rows: Iterable[Tuple[str, Sequence[LetterStatus]]]) -> Dict[str, LetterStatus]:
    """Fold previous (guess, statuses) rows into one status per letter.

    A key only ever upgrades: absent -> present -> correct.
    """
    states: Dict[str, LetterStatus] = {}
    for guess, statuses in rows:
        for ch, status in zip(normalize_text(guess), statuses):
            current = states.get(ch)
            if current is None or _STATUS_RANK[status] > _STATUS_RANK[current]:
                states[ch] = status
    return states
