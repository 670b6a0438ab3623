from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

HangmanStatus = Literal["in_progress", "won", "lost"]
MASK = "_"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class HangmanState:
    masked: str
    misses: Tuple[str, ...]
    remaining: int
    status: HangmanStatus

    @property
    def is_correct(self) -> bool:
        return self.status == "won"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "masked": self.masked,
            "misses": list(self.misses),
            "remaining": self.remaining,
            "status": self.status,
            "is_correct": self.is_correct,
        }


# PUBLIC_INTERFACE
def hangman_state(word: str, guessed: Iterable[Optional[str]], max_misses: int = 6) -> HangmanState:
    """Replay guessed letters against ``word``.

    Letters are case-insensitive and repeated guesses count once. Characters
    that are not letters (spaces, hyphens) are always shown. Guesses after
    the game is decided are ignored.
    """
    target = (word or "").upper()
    letters = {ch for ch in target if ch.isalpha()}
    seen: List[str] = []
    misses: List[str] = []
    status: HangmanStatus = "in_progress"

    for raw in guessed:
        letter = (raw or "").strip().upper()
        if len(letter) != 1 or not letter.isalpha() or letter in seen:
            continue
        seen.append(letter)
        if letter not in letters:
            misses.append(letter)
        if letters and letters.issubset(seen):
            status = "won"
            break
        if len(misses) >= max_misses:
            status = "lost"
            break

    masked = "".join(ch if not ch.isalpha() or ch in seen else MASK for ch in target)
    return HangmanState(
        masked=masked,
        misses=tuple(misses),
        remaining=max(max_misses - len(misses), 0),
        status=status,
    )
