from __future__ import annotations

from typing import Optional, Sequence


# PUBLIC_INTERFACE
def sequence_check(arrangement: Sequence[Optional[int]], solution: Sequence[int]) -> bool:
    """True iff ``arrangement`` places the same items in the same slots as ``solution``.

    Unfilled slots are ``None`` and never match.
    """
    if len(arrangement) != len(solution):
        return False
    return all(a is not None and a == s for a, s in zip(arrangement, solution))
