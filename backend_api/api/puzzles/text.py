from __future__ import annotations

from typing import Optional

from .normalize import normalize_text, split_answers


# PUBLIC_INTERFACE
def exact_match(value: Optional[str], answer: Optional[str], case_sensitive: bool = False) -> bool:
    """Compare trimmed strings, case-insensitively unless asked otherwise."""
    if case_sensitive:
        return (value or "").strip() == (answer or "").strip()
    return normalize_text(value) == normalize_text(answer)


# PUBLIC_INTERFACE
def answer_match(value: Optional[str], accepted: Optional[str]) -> bool:
    """True if ``value`` equals any comma-separated alternative of ``accepted``.

    An empty guess never matches.
    """
    guess = normalize_text(value)
    return bool(guess) and guess in split_answers(accepted)
