from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Protocol

from .anagram import anagram_check
from .arithmetic import grade_sheet
from .boards import flow_check, nonogram_check, sliding_solved
from .chain import WordPredicate, chain_check, membership
from .grids import grid_check
from .groups import group_match
from .hangman import hangman_state
from .normalize import normalize_text
from .paths import path_check, trail_check
from .pegs import code_feedback
from .sequence import sequence_check
from .text import answer_match, exact_match
from .types import (
    AnagramSpec,
    ArithmeticSpec,
    ChainSpec,
    CodeSpec,
    CrosswordSpec,
    FlowSpec,
    GridSpec,
    GroupSpec,
    HangmanSpec,
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
from .word import WordFeedback, word_feedback
from .wordgrids import crossword_check, letter_path_check, spelling_bee_check, word_search_match


class Engine(Protocol):
    """Protocol for puzzle engines."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: Any, player_input: Any) -> Verdict:
        """Judge ``player_input`` against ``spec``.

        Returns a fresh Verdict. Input of the wrong shape is a failure
        verdict, never an exception.
        """


def _as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_list(value: Any) -> Optional[List[Any]]:
    return list(value) if isinstance(value, (list, tuple)) else None


@dataclass
class BaseEngine:
    """Shared collaborators. ``dictionary`` widens word-membership checks."""

    dictionary: Optional[WordPredicate] = None

    def accepted_words(self, valid_words: Iterable[str]) -> WordPredicate:
        """Membership in the puzzle's own word list, widened by ``dictionary``."""
        listed = membership(sorted(valid_words))
        extra = self.dictionary
        return listed if extra is None else (lambda w: listed(w) or extra(w))


@dataclass
class WordEngine(BaseEngine):
    """Word-guess engine using per-letter feedback."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: WordSpec, player_input: Any) -> Verdict:
        guess = _as_text(player_input)
        if guess is None:
            return Verdict.failure(spec.kind)
        feedback = word_feedback(guess, spec.secret)
        if not feedback.letters:
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=feedback.is_correct, feedback=feedback)


@dataclass
class CodeEngine(BaseEngine):
    """Code-breaker engine scoring exact and present pegs."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: CodeSpec, player_input: Any) -> Verdict:
        guess = _as_list(player_input)
        if guess is None or len(guess) != len(spec.secret) or any(g is None for g in guess):
            return Verdict.failure(spec.kind)
        feedback = code_feedback([str(g) for g in guess], spec.secret)
        return Verdict(kind=spec.kind, is_correct=feedback.is_correct, feedback=feedback)


@dataclass
class SequenceEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: SequenceSpec, player_input: Any) -> Verdict:
        arrangement = _as_list(player_input)
        if arrangement is None:
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=sequence_check(arrangement, spec.solution))


@dataclass
class PathEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: PathSpec, player_input: Any) -> Verdict:
        path = _as_list(player_input)
        if path is None:
            return Verdict.failure(spec.kind)
        report = path_check(path, spec.rows, spec.cols, spec.numbers, spec.adjacency)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class TrailEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: TrailSpec, player_input: Any) -> Verdict:
        grid = _as_list(player_input)
        if grid is None or len(grid) != spec.rows * spec.cols:
            return Verdict.failure(spec.kind)
        report = trail_check(grid, spec.rows, spec.cols, spec.start, spec.end, spec.givens)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class GridEngine(BaseEngine):
    """Constraint or solution grids, depending on what the spec carries."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: GridSpec, player_input: Any) -> Verdict:
        grid = _as_list(player_input)
        if grid is None or len(grid) != spec.size * spec.size:
            return Verdict.failure(spec.kind)
        report = grid_check(
            grid,
            spec.size,
            givens=spec.givens,
            magic_constant=spec.magic_constant,
            values=spec.values,
            inequalities=spec.inequalities,
            solution=spec.solution,
        )
        if not report.cells:
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class ChainEngine(BaseEngine):
    """Word ladder engine; accepts the puzzle's own word list plus ``dictionary``."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: ChainSpec, player_input: Any) -> Verdict:
        candidates = _as_list(player_input)
        if candidates is None or not all(isinstance(c, str) for c in candidates):
            return Verdict.failure(spec.kind)

        report = chain_check(spec.start, spec.end, candidates, self.accepted_words(spec.valid_words))
        if not report.steps:
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class GroupEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: GroupSpec, player_input: Any) -> Verdict:
        selected = _as_list(player_input)
        if selected is None:
            return Verdict.failure(spec.kind)
        match = group_match([str(s) for s in selected], spec.items, spec.group_size)
        return Verdict(kind=spec.kind, is_correct=match.is_correct, feedback=match)


@dataclass
class AnagramEngine(BaseEngine):
    """Anagram puzzle engine.

    Rule: a guess is correct if it uses exactly the same multiset of letters
    as the target. For UI compatibility the per-position word feedback is
    still returned when the lengths agree.
    """

    # PUBLIC_INTERFACE
    def evaluate(self, spec: AnagramSpec, player_input: Any) -> Verdict:
        guess = _as_text(player_input)
        if guess is None:
            return Verdict.failure(spec.kind)
        is_correct = anagram_check(guess, spec.target)
        letters = word_feedback(guess, spec.target).letters
        feedback = WordFeedback(letters=letters, is_correct=is_correct) if letters else None
        return Verdict(kind=spec.kind, is_correct=is_correct, feedback=feedback)


@dataclass
class ArithmeticEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: ArithmeticSpec, player_input: Any) -> Verdict:
        answers = _as_list(player_input)
        if answers is None and isinstance(player_input, str) and len(spec.problems) == 1:
            answers = [player_input]
        if answers is None or len(answers) != len(spec.problems):
            return Verdict.failure(spec.kind)
        report = grade_sheet(spec.problems, spec.answers, answers)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class TextEngine(BaseEngine):
    """Free-text answers: riddles, aliases and trivia."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: TextSpec, player_input: Any) -> Verdict:
        guess = _as_text(player_input)
        if guess is None:
            return Verdict.failure(spec.kind)
        if spec.case_sensitive:
            is_correct = any(
                exact_match(guess, alternative, case_sensitive=True)
                for alternative in spec.answer.split(",")
                if alternative.strip()
            )
        else:
            is_correct = answer_match(guess, spec.answer)
        return Verdict(kind=spec.kind, is_correct=is_correct)


@dataclass
class HangmanEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: HangmanSpec, player_input: Any) -> Verdict:
        if isinstance(player_input, str):
            guessed = list(normalize_text(player_input))
        else:
            guessed = _as_list(player_input)
        if guessed is None or not all(isinstance(g, str) for g in guessed):
            return Verdict.failure(spec.kind)
        state = hangman_state(spec.word, guessed, spec.max_misses)
        return Verdict(kind=spec.kind, is_correct=state.is_correct, feedback=state)


@dataclass
class CrosswordEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: CrosswordSpec, player_input: Any) -> Verdict:
        grid = _as_list(player_input)
        if grid is None or len(grid) != spec.rows * spec.cols:
            return Verdict.failure(spec.kind)
        report = crossword_check(grid, spec.solution)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class WordSearchEngine(BaseEngine):
    """One traced selection per call; a match names the word found."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: WordSearchSpec, player_input: Any) -> Verdict:
        tapped = _as_list(player_input)
        if tapped is None or not tapped:
            return Verdict.failure(spec.kind)
        match = word_search_match(tapped, spec.words)
        return Verdict(kind=spec.kind, is_correct=match.is_correct, feedback=match)


@dataclass
class SpellingBeeEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: SpellingBeeSpec, player_input: Any) -> Verdict:
        word = _as_text(player_input)
        if word is None:
            return Verdict.failure(spec.kind)
        report = spelling_bee_check(
            word, spec.center, spec.outer, self.accepted_words(spec.valid_words), spec.min_length
        )
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class LetterGridEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: LetterGridSpec, player_input: Any) -> Verdict:
        path = _as_list(player_input)
        if path is None or len(spec.letters) != spec.rows * spec.cols:
            return Verdict.failure(spec.kind)
        report = letter_path_check(
            path, spec.rows, spec.cols, spec.letters, self.accepted_words(spec.valid_words), spec.min_length
        )
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class NonogramEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: NonogramSpec, player_input: Any) -> Verdict:
        grid = _as_list(player_input)
        if grid is None:
            return Verdict.failure(spec.kind)
        report = nonogram_check(grid, spec.row_clues, spec.col_clues)
        if not report.rows:
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class FlowEngine(BaseEngine):
    """Input maps each colour to the cells of its pipe, dot to dot."""

    # PUBLIC_INTERFACE
    def evaluate(self, spec: FlowSpec, player_input: Any) -> Verdict:
        if not isinstance(player_input, Mapping):
            return Verdict.failure(spec.kind)
        paths = {str(colour): _as_list(path) for colour, path in player_input.items()}
        if any(path is None for path in paths.values()):
            return Verdict.failure(spec.kind)
        report = flow_check(paths, spec.dots, spec.rows, spec.cols)
        return Verdict(kind=spec.kind, is_correct=report.is_correct, feedback=report)


@dataclass
class SlidingEngine(BaseEngine):
    # PUBLIC_INTERFACE
    def evaluate(self, spec: SlidingSpec, player_input: Any) -> Verdict:
        tiles = _as_list(player_input)
        if tiles is None or len(tiles) != spec.size * spec.size:
            return Verdict.failure(spec.kind)
        if any(isinstance(t, bool) or not isinstance(t, int) for t in tiles):
            return Verdict.failure(spec.kind)
        return Verdict(kind=spec.kind, is_correct=sliding_solved(tiles))


ENGINES_BY_SPEC = {
    WordSpec: WordEngine,
    CodeSpec: CodeEngine,
    SequenceSpec: SequenceEngine,
    PathSpec: PathEngine,
    TrailSpec: TrailEngine,
    GridSpec: GridEngine,
    ChainSpec: ChainEngine,
    GroupSpec: GroupEngine,
    ArithmeticSpec: ArithmeticEngine,
    AnagramSpec: AnagramEngine,
    TextSpec: TextEngine,
    HangmanSpec: HangmanEngine,
    CrosswordSpec: CrosswordEngine,
    WordSearchSpec: WordSearchEngine,
    SpellingBeeSpec: SpellingBeeEngine,
    LetterGridSpec: LetterGridEngine,
    NonogramSpec: NonogramEngine,
    FlowSpec: FlowEngine,
    SlidingSpec: SlidingEngine,
}


def _check_union_covered() -> None:
    missing = [cls.__name__ for cls in PuzzleSpec.__subclasses__() if cls not in ENGINES_BY_SPEC]
    if missing:
        raise RuntimeError(f"No engine registered for: {', '.join(missing)}")


_check_union_covered()
