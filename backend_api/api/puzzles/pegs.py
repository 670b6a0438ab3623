from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from .normalize import normalize_symbols


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class PegFeedback:
    """Mastermind scoring of one guess.

    ``exact`` counts right symbol in the right slot, ``present`` right symbol
    in another slot, ``positions`` flags the exact slots.
    """

    exact: int
    present: int
    positions: Tuple[bool, ...]
    is_correct: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "exact": self.exact,
            "present": self.present,
            "positions": list(self.positions),
            "is_correct": self.is_correct,
        }


# PUBLIC_INTERFACE
def code_feedback(guess: Sequence[str], secret: Sequence[str]) -> PegFeedback:
    """Count exact and present pegs; each secret symbol is consumed at most once."""
    g = normalize_symbols(guess)
    s = normalize_symbols(secret)
    if not s or len(g) != len(s):
        return PegFeedback(exact=0, present=0, positions=(), is_correct=False)

    exact = 0
    positions: List[bool] = [False] * len(s)
    remaining_guess: List[str] = []
    remaining_secret: Dict[str, int] = {}

    # Pass 1: exact matches leave both pools
    for i, (gs, ss) in enumerate(zip(g, s)):
        if gs == ss:
            exact += 1
            positions[i] = True
        else:
            remaining_guess.append(gs)
            remaining_secret[ss] = remaining_secret.get(ss, 0) + 1

    # Pass 2: greedy match of what is left
    present = 0
    for symbol in remaining_guess:
        if remaining_secret.get(symbol, 0) > 0:
            present += 1
            remaining_secret[symbol] -= 1

    return PegFeedback(
        exact=exact,
        present=present,
        positions=tuple(positions),
        is_correct=exact == len(s),
    )
