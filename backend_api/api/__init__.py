"""
API package initializer.

Re-exports the puzzle verification façade so callers can import from api
directly, e.g.:

    from api import evaluate, WordSpec
"""

# PUBLIC_INTERFACE
from .puzzles import (
    EngineRegistry,
    PuzzleSpec,
    Verdict,
    WordSpec,
    evaluate,
    get_engine,
)

__all__ = [
    "EngineRegistry",
    "PuzzleSpec",
    "Verdict",
    "WordSpec",
    "evaluate",
    "get_engine",
]
