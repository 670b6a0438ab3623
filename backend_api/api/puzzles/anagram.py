from __future__ import annotations

from typing import Optional

from .normalize import normalize_letters


# PUBLIC_INTERFACE
def anagram_check(value: Optional[str], target: Optional[str]) -> bool:
    """True iff both strings use the same letters, ignoring case and whitespace."""
    return sorted(normalize_letters(value)) == sorted(normalize_letters(target))
