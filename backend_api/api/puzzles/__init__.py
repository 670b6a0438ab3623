"""
Puzzle verification engine.

Exports:
- the PuzzleSpec union and Verdict value types
- evaluate, EngineRegistry and get_engine for dispatching by puzzle kind
- the pure checks behind each engine (word_feedback, code_feedback, grid_check, ...)

These modules are framework-agnostic and can be reused by views or services
without importing request objects or Django settings.
"""

from .anagram import anagram_check
from .arithmetic import arith_eval, grade_sheet
from .boards import flow_check, nonogram_check, nonogram_clue, sliding_solved
from .chain import chain_check, differs_by_one_letter, membership
from .grids import grid_check
from .groups import group_match
from .hangman import hangman_state
from .paths import are_adjacent, is_valid_path, path_check, trail_check
from .pegs import code_feedback
from .registry import EngineRegistry, UnknownPuzzleKind, evaluate, get_engine
from .sequence import sequence_check
from .text import answer_match, exact_match
from .types import (
    AnagramSpec,
    ArithmeticSpec,
    ChainSpec,
    CodeSpec,
    CrosswordSpec,
    FlowSpec,
    FrozenMapping,
    GridSpec,
    GroupSpec,
    HangmanSpec,
    Inequality,
    LetterGridSpec,
    NonogramSpec,
    PathSpec,
    PuzzleSpec,
    SequenceSpec,
    SlidingSpec,
    SpellingBeeSpec,
    TextSpec,
    TrailSpec,
    Verdict,
    WordSearchSpec,
    WordSpec,
)
from .word import keyboard_states, word_feedback
from .wordgrids import (
    crossword_check,
    letter_path_adjacent,
    letter_path_check,
    letter_path_word,
    spelling_bee_check,
    word_search_match,
)

__all__ = [
    "AnagramSpec",
    "ArithmeticSpec",
    "ChainSpec",
    "CodeSpec",
    "CrosswordSpec",
    "FlowSpec",
    "FrozenMapping",
    "GridSpec",
    "GroupSpec",
    "HangmanSpec",
    "Inequality",
    "LetterGridSpec",
    "NonogramSpec",
    "PathSpec",
    "PuzzleSpec",
    "SequenceSpec",
    "SlidingSpec",
    "SpellingBeeSpec",
    "TextSpec",
    "TrailSpec",
    "Verdict",
    "WordSearchSpec",
    "WordSpec",
    "EngineRegistry",
    "UnknownPuzzleKind",
    "evaluate",
    "get_engine",
    "anagram_check",
    "answer_match",
    "arith_eval",
    "are_adjacent",
    "chain_check",
    "code_feedback",
    "crossword_check",
    "differs_by_one_letter",
    "exact_match",
    "flow_check",
    "grade_sheet",
    "grid_check",
    "group_match",
    "hangman_state",
    "is_valid_path",
    "keyboard_states",
    "letter_path_adjacent",
    "letter_path_check",
    "letter_path_word",
    "membership",
    "nonogram_check",
    "nonogram_clue",
    "path_check",
    "sequence_check",
    "sliding_solved",
    "spelling_bee_check",
    "trail_check",
    "word_feedback",
    "word_search_match",
]
