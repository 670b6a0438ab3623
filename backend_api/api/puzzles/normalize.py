from __future__ import annotations

from typing import Iterable, Optional, Tuple


# PUBLIC_INTERFACE
def normalize_text(value: Optional[str]) -> str:
    """Trim and lower-case raw text input. ``None`` becomes an empty string."""
    return (value or "").strip().lower()


# PUBLIC_INTERFACE
def normalize_letters(value: Optional[str]) -> str:
    """Case-fold a string and drop every whitespace character."""
    return "".join((value or "").casefold().split())


# PUBLIC_INTERFACE
def normalize_symbols(values: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Normalize each symbol of a code sequence (peg colours, digits...)."""
    return tuple(normalize_text(v if v is None else str(v)) for v in values)


# PUBLIC_INTERFACE
def split_answers(value: Optional[str]) -> Tuple[str, ...]:
    """Split a stored answer into its accepted alternatives.

    Content storage keeps several accepted answers in one comma-separated
    string, e.g. ``"piano, a piano"``. Empty alternatives are dropped.
    """
    parts = (normalize_text(part) for part in (value or "").split(","))
    return tuple(part for part in parts if part)
