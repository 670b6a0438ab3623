"""
Value types shared by the puzzle verification engine.

A ``PuzzleSpec`` is the closed tagged union of puzzle kinds: each subclass
carries only what is needed to judge an answer. Specs arrive already built
from content storage and are never mutated. A ``Verdict`` is the single
output shape of the engine: a correctness flag plus an optional,
kind-specific feedback payload.
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, FrozenSet, Literal, Mapping, Optional, Protocol, Tuple

LetterStatus = Literal["correct", "present", "absent"]
AdjacencyMode = Literal["orthogonal", "diagonal"]
ValueRule = Literal["square", "latin"]

ADJACENCY_ORTHOGONAL: AdjacencyMode = "orthogonal"
ADJACENCY_DIAGONAL: AdjacencyMode = "diagonal"

# Player grids use 0 (or None) for an empty cell; solution grids use 0 for "don't care".
EMPTY_CELL = 0
DONT_CARE = 0


class Feedback(Protocol):
    """Anything that can render itself as a JSON-friendly dict."""

    def as_dict(self) -> Dict[str, Any]: ...


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Verdict:
    """Result of evaluating one player action against a puzzle."""

    kind: str
    is_correct: bool
    feedback: Optional[Feedback] = None

    @classmethod
    def failure(cls, kind: Optional[str] = None) -> "Verdict":
        """A bare failure verdict with no feedback payload."""
        return cls(kind=kind or "unknown", is_correct=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "is_correct": self.is_correct,
            "feedback": self.feedback.as_dict() if self.feedback is not None else None,
        }


class FrozenMapping(abc.Mapping):
    """Read-only, hashable mapping held by spec fields."""

    __slots__ = ("_data", "_hash")

    def __init__(self, data: Any = ()) -> None:
        self._data = dict(data)
        self._hash: Optional[int] = None

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __repr__(self) -> str:
        return f"FrozenMapping({self._data!r})"


def _freeze(value: Any) -> Any:
    """Deep-convert lists, sets and dicts into tuples, frozensets and FrozenMappings."""
    if isinstance(value, (str, bytes, FrozenMapping, frozenset)):
        return value
    if isinstance(value, abc.Mapping):
        return FrozenMapping((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, abc.Set)):
        return frozenset(_freeze(v) for v in value)
    return value


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class PuzzleSpec:
    """Base of the puzzle-kind union. Subclasses set ``kind``.

    Container fields are frozen on construction, so every spec is immutable
    and hashable and can key a cache together with the player input.
    """

    kind: ClassVar[str] = ""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            frozen = _freeze(value)
            if frozen is not value:
                object.__setattr__(self, f.name, frozen)


@dataclass(frozen=True)
class WordSpec(PuzzleSpec):
    """Wordle-style word guess."""

    kind: ClassVar[str] = "word"
    secret: str


@dataclass(frozen=True)
class CodeSpec(PuzzleSpec):
    """Mastermind / code-breaker secret of symbols."""

    kind: ClassVar[str] = "code"
    secret: Tuple[str, ...]


@dataclass(frozen=True)
class SequenceSpec(PuzzleSpec):
    """Exact-order placement: ``solution`` lists item indices slot by slot."""

    kind: ClassVar[str] = "sequence"
    solution: Tuple[int, ...]


@dataclass(frozen=True)
class PathSpec(PuzzleSpec):
    """Zip-style traversal of a ``rows x cols`` grid.

    ``numbers`` maps flat cell index to the number printed in that cell.
    """

    kind: ClassVar[str] = "path"
    rows: int
    cols: int
    numbers: Mapping[int, int] = field(default_factory=FrozenMapping)
    adjacency: AdjacencyMode = ADJACENCY_ORTHOGONAL


@dataclass(frozen=True)
class TrailSpec(PuzzleSpec):
    """Number-trail grid (Hidato style): place ``start..end`` so neighbours touch."""

    kind: ClassVar[str] = "trail"
    rows: int
    cols: int
    start: int
    end: int
    givens: Mapping[int, int] = field(default_factory=FrozenMapping)


@dataclass(frozen=True)
class Inequality:
    """``cell_a <operator> cell_b`` between two flat cell indices."""

    cell_a: int
    operator: Literal["<", ">"]
    cell_b: int


@dataclass(frozen=True)
class GridSpec(PuzzleSpec):
    """Square numeric grid checked against a constraint set.

    When ``solution`` is present the grid is compared cell by cell (sudoku
    and other uniquely-solved grids) and the sum/value-set rules are skipped.
    """

    kind: ClassVar[str] = "grid"
    size: int
    givens: Mapping[int, int] = field(default_factory=FrozenMapping)
    magic_constant: Optional[int] = None
    values: Optional[ValueRule] = None
    inequalities: Tuple[Inequality, ...] = ()
    solution: Optional[Tuple[int, ...]] = None


@dataclass(frozen=True)
class ChainSpec(PuzzleSpec):
    """Word ladder from ``start`` to ``end`` one letter at a time."""

    kind: ClassVar[str] = "chain"
    start: str
    end: str
    valid_words: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class GroupSpec(PuzzleSpec):
    """Connections-style partition: ``items`` maps item id to group tag."""

    kind: ClassVar[str] = "group"
    items: Mapping[str, str]
    group_size: int


@dataclass(frozen=True)
class ArithmeticSpec(PuzzleSpec):
    """Quick-math sheet. ``answers`` may be empty; problems are then evaluated."""

    kind: ClassVar[str] = "arithmetic"
    problems: Tuple[str, ...]
    answers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnagramSpec(PuzzleSpec):
    kind: ClassVar[str] = "anagram"
    target: str


@dataclass(frozen=True)
class TextSpec(PuzzleSpec):
    """Free-text answer (riddle, alias, trivia). ``answer`` may list alternatives."""

    kind: ClassVar[str] = "text"
    answer: str
    case_sensitive: bool = False


@dataclass(frozen=True)
class HangmanSpec(PuzzleSpec):
    kind: ClassVar[str] = "hangman"
    word: str
    max_misses: int = 6


@dataclass(frozen=True)
class CrosswordSpec(PuzzleSpec):
    """Crossword fill. ``solution`` maps each white cell to its letter; black cells are absent."""

    kind: ClassVar[str] = "crossword"
    rows: int
    cols: int
    solution: Mapping[int, str]


@dataclass(frozen=True)
class WordSearchSpec(PuzzleSpec):
    """Word search: each hidden word with the cells it occupies, in reading order."""

    kind: ClassVar[str] = "word_search"
    rows: int
    cols: int
    words: Tuple[Tuple[str, Tuple[int, ...]], ...]


@dataclass(frozen=True)
class SpellingBeeSpec(PuzzleSpec):
    kind: ClassVar[str] = "spelling_bee"
    center: str
    outer: Tuple[str, ...]
    valid_words: FrozenSet[str] = frozenset()
    min_length: int = 4


@dataclass(frozen=True)
class LetterGridSpec(PuzzleSpec):
    """Boggle-style grid: ``letters`` is row-major, one entry per cell."""

    kind: ClassVar[str] = "letter_grid"
    rows: int
    cols: int
    letters: Tuple[str, ...]
    valid_words: FrozenSet[str] = frozenset()
    min_length: int = 3


@dataclass(frozen=True)
class NonogramSpec(PuzzleSpec):
    """Picross grid described by its run-length clues."""

    kind: ClassVar[str] = "nonogram"
    row_clues: Tuple[Tuple[int, ...], ...]
    col_clues: Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class FlowSpec(PuzzleSpec):
    """Flow / numberlink: ``dots`` maps each colour to its two endpoint cells."""

    kind: ClassVar[str] = "flow"
    rows: int
    cols: int
    dots: Mapping[str, Tuple[int, int]]


@dataclass(frozen=True)
class SlidingSpec(PuzzleSpec):
    """Sliding tile puzzle solved as ``1, 2, ..., size*size - 1, 0``."""

    kind: ClassVar[str] = "sliding"
    size: int
