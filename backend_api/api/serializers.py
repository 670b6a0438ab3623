from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from rest_framework import serializers

from .puzzles import (
    AnagramSpec,
    ArithmeticSpec,
    ChainSpec,
    CodeSpec,
    CrosswordSpec,
    FlowSpec,
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
    WordSearchSpec,
    WordSpec,
)
from .puzzles.normalize import normalize_text
from .puzzles.types import ADJACENCY_DIAGONAL, ADJACENCY_ORTHOGONAL

PUZZLE_LIMIT_DEFAULTS: Dict[str, int] = {
    "MAX_GRID_SIZE": 6,
    "MAX_WORD_LENGTH": 10,
    "MAX_SEQUENCE_LENGTH": 8,
    "MAX_CODE_LENGTH": 8,
}


def _limit(name: str) -> int:
    """Read a bound from ``settings.PUZZLES`` with a built-in fallback."""
    return getattr(settings, "PUZZLES", {}).get(name, PUZZLE_LIMIT_DEFAULTS[name])


def _validate_word(value: str) -> str:
    """Ensure a stored word is alphabetic, non-empty and not too long."""
    value = normalize_text(value)
    if not value or not value.isalpha():
        raise serializers.ValidationError("Word must be a non-empty alphabetic string.")
    if len(value) > _limit("MAX_WORD_LENGTH"):
        raise serializers.ValidationError(f"Word must be at most {_limit('MAX_WORD_LENGTH')} letters.")
    return value


def _check_dimension(value: int, label: str = "Grid dimension") -> int:
    if value > _limit("MAX_GRID_SIZE"):
        raise serializers.ValidationError(f"{label} must be at most {_limit('MAX_GRID_SIZE')}.")
    return value


class CellValueSerializer(serializers.Serializer):
    """A fixed cell: ``{"row": 0, "col": 2, "value": 7}``."""

    row = serializers.IntegerField(min_value=0)
    col = serializers.IntegerField(min_value=0)
    value = serializers.IntegerField()


class NumberedCellSerializer(serializers.Serializer):
    """A printed number on a path grid: ``{"pos": 4, "number": 2}``."""

    pos = serializers.IntegerField(min_value=0)
    number = serializers.IntegerField(min_value=1)


class InequalitySerializer(serializers.Serializer):
    """``cell(row1, col1) <operator> cell(row2, col2)``."""

    row1 = serializers.IntegerField(min_value=0)
    col1 = serializers.IntegerField(min_value=0)
    row2 = serializers.IntegerField(min_value=0)
    col2 = serializers.IntegerField(min_value=0)
    operator = serializers.ChoiceField(choices=["<", ">"])


class GroupItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    group = serializers.CharField()


def _flat_givens(givens: List[Dict[str, int]], rows: int, cols: int) -> Dict[int, int]:
    flat: Dict[int, int] = {}
    for given in givens:
        if given["row"] >= rows or given["col"] >= cols:
            raise serializers.ValidationError({"givens": f"Given ({given['row']}, {given['col']}) lies outside the grid."})
        flat[given["row"] * cols + given["col"]] = given["value"]
    return flat


# PUBLIC_INTERFACE
class PuzzleDataSerializer(serializers.Serializer):
    """Base for per-kind puzzle documents.

    Every subclass defines ``to_spec()``, which builds the PuzzleSpec from
    ``validated_data``.
    """


class WordDataSerializer(PuzzleDataSerializer):
    secret = serializers.CharField()

    def validate_secret(self, value: str) -> str:
        return _validate_word(value)

    def to_spec(self) -> PuzzleSpec:
        return WordSpec(secret=self.validated_data["secret"])


class CodeDataSerializer(PuzzleDataSerializer):
    secret = serializers.ListField(child=serializers.CharField(), min_length=1)

    def validate_secret(self, value: List[str]) -> List[str]:
        if len(value) > _limit("MAX_CODE_LENGTH"):
            raise serializers.ValidationError(f"Code must be at most {_limit('MAX_CODE_LENGTH')} symbols.")
        return value

    def to_spec(self) -> PuzzleSpec:
        return CodeSpec(secret=tuple(self.validated_data["secret"]))


class SequenceDataSerializer(PuzzleDataSerializer):
    solution = serializers.ListField(child=serializers.IntegerField(min_value=0), min_length=1)

    def validate_solution(self, value: List[int]) -> List[int]:
        if len(value) > _limit("MAX_SEQUENCE_LENGTH"):
            raise serializers.ValidationError(
                f"Sequence must be at most {_limit('MAX_SEQUENCE_LENGTH')} items."
            )
        return value

    def to_spec(self) -> PuzzleSpec:
        return SequenceSpec(solution=tuple(self.validated_data["solution"]))


class PathDataSerializer(PuzzleDataSerializer):
    rows = serializers.IntegerField(min_value=1)
    cols = serializers.IntegerField(min_value=1)
    numbers = NumberedCellSerializer(many=True)
    adjacency = serializers.ChoiceField(
        choices=[ADJACENCY_ORTHOGONAL, ADJACENCY_DIAGONAL],
        default=ADJACENCY_ORTHOGONAL,
    )

    def validate_rows(self, value: int) -> int:
        return _check_dimension(value)

    def validate_cols(self, value: int) -> int:
        return _check_dimension(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        total = attrs["rows"] * attrs["cols"]
        if any(cell["pos"] >= total for cell in attrs["numbers"]):
            raise serializers.ValidationError({"numbers": "Numbered cell lies outside the grid."})
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return PathSpec(
            rows=vd["rows"],
            cols=vd["cols"],
            numbers={cell["pos"]: cell["number"] for cell in vd["numbers"]},
            adjacency=vd["adjacency"],
        )


class TrailDataSerializer(PuzzleDataSerializer):
    rows = serializers.IntegerField(min_value=1)
    cols = serializers.IntegerField(min_value=1)
    start = serializers.IntegerField(min_value=1, default=1)
    end = serializers.IntegerField(min_value=1)
    givens = CellValueSerializer(many=True, required=False, default=list)

    def validate_rows(self, value: int) -> int:
        return _check_dimension(value)

    def validate_cols(self, value: int) -> int:
        return _check_dimension(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if attrs["end"] < attrs["start"]:
            raise serializers.ValidationError({"end": "Trail end must not precede its start."})
        if attrs["end"] - attrs["start"] + 1 > attrs["rows"] * attrs["cols"]:
            raise serializers.ValidationError({"end": "Trail is longer than the grid."})
        attrs["flat_givens"] = _flat_givens(attrs["givens"], attrs["rows"], attrs["cols"])
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return TrailSpec(
            rows=vd["rows"],
            cols=vd["cols"],
            start=vd["start"],
            end=vd["end"],
            givens=vd["flat_givens"],
        )


class GridDataSerializer(PuzzleDataSerializer):
    """Magic-square, Latin/inequality or solution grids."""

    size = serializers.IntegerField(min_value=1)
    givens = CellValueSerializer(many=True, required=False, default=list)
    magic_constant = serializers.IntegerField(required=False, allow_null=True, default=None)
    values = serializers.ChoiceField(choices=["square", "latin"], required=False, allow_null=True, default=None)
    inequalities = InequalitySerializer(many=True, required=False, default=list)
    solution = serializers.ListField(
        child=serializers.IntegerField(min_value=0), required=False, allow_null=True, default=None
    )

    def validate_size(self, value: int) -> int:
        return _check_dimension(value, "Grid size")

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        size = attrs["size"]
        solution = attrs.get("solution")
        if solution is not None and len(solution) != size * size:
            raise serializers.ValidationError({"solution": f"Solution must hold {size * size} cells."})
        if solution is None:
            if attrs.get("magic_constant") is not None and not attrs.get("values"):
                attrs["values"] = "square"
            if attrs.get("inequalities") and not attrs.get("values"):
                raise serializers.ValidationError({"values": "Inequality grids need a value rule."})
            if not attrs.get("values"):
                raise serializers.ValidationError("Grid puzzle declares no value rule, magic constant or solution.")

        inequalities: List[Inequality] = []
        for ineq in attrs.get("inequalities") or []:
            if max(ineq["row1"], ineq["col1"], ineq["row2"], ineq["col2"]) >= size:
                raise serializers.ValidationError({"inequalities": "Inequality references a cell outside the grid."})
            inequalities.append(
                Inequality(
                    cell_a=ineq["row1"] * size + ineq["col1"],
                    operator=ineq["operator"],
                    cell_b=ineq["row2"] * size + ineq["col2"],
                )
            )
        attrs["flat_inequalities"] = tuple(inequalities)
        attrs["flat_givens"] = _flat_givens(attrs.get("givens") or [], size, size)
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        solution: Optional[Tuple[int, ...]] = tuple(vd["solution"]) if vd.get("solution") is not None else None
        return GridSpec(
            size=vd["size"],
            givens=vd["flat_givens"],
            magic_constant=vd.get("magic_constant"),
            values=vd.get("values"),
            inequalities=vd["flat_inequalities"],
            solution=solution,
        )


class ChainDataSerializer(PuzzleDataSerializer):
    start = serializers.CharField()
    end = serializers.CharField()
    valid_words = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_start(self, value: str) -> str:
        return _validate_word(value)

    def validate_end(self, value: str) -> str:
        return _validate_word(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if len(attrs["start"]) != len(attrs["end"]):
            raise serializers.ValidationError("Start and end words must have the same length.")
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return ChainSpec(
            start=vd["start"],
            end=vd["end"],
            valid_words=frozenset(normalize_text(w) for w in vd["valid_words"]),
        )


class GroupDataSerializer(PuzzleDataSerializer):
    items = GroupItemSerializer(many=True)
    group_size = serializers.IntegerField(min_value=1)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        ids = [item["id"] for item in attrs["items"]]
        if len(set(ids)) != len(ids):
            raise serializers.ValidationError({"items": "Item ids must be unique."})
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return GroupSpec(
            items={item["id"]: item["group"] for item in vd["items"]},
            group_size=vd["group_size"],
        )


class ArithmeticDataSerializer(PuzzleDataSerializer):
    problems = serializers.ListField(child=serializers.CharField(), min_length=1)
    answers = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if attrs["answers"] and len(attrs["answers"]) != len(attrs["problems"]):
            raise serializers.ValidationError({"answers": "Provide one answer per problem or none at all."})
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return ArithmeticSpec(problems=tuple(vd["problems"]), answers=tuple(vd["answers"]))


class AnagramDataSerializer(PuzzleDataSerializer):
    target = serializers.CharField()

    def to_spec(self) -> PuzzleSpec:
        return AnagramSpec(target=self.validated_data["target"])


class TextDataSerializer(PuzzleDataSerializer):
    answer = serializers.CharField()
    case_sensitive = serializers.BooleanField(default=False)

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return TextSpec(answer=vd["answer"], case_sensitive=vd["case_sensitive"])


class HangmanDataSerializer(PuzzleDataSerializer):
    word = serializers.CharField()
    max_misses = serializers.IntegerField(min_value=1, max_value=26, default=6)

    def validate_word(self, value: str) -> str:
        if not any(ch.isalpha() for ch in value):
            raise serializers.ValidationError("Word must contain at least one letter.")
        return value

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return HangmanSpec(word=vd["word"], max_misses=vd["max_misses"])


class CellSerializer(serializers.Serializer):
    row = serializers.IntegerField(min_value=0)
    col = serializers.IntegerField(min_value=0)


class CrosswordCellSerializer(CellSerializer):
    answer = serializers.CharField()


class HiddenWordSerializer(serializers.Serializer):
    word = serializers.CharField()
    cells = CellSerializer(many=True, allow_empty=False)


class DotSerializer(CellSerializer):
    id = serializers.CharField()


def _flat_cell(cell: Dict[str, Any], rows: int, cols: int, label: str) -> int:
    if cell["row"] >= rows or cell["col"] >= cols:
        raise serializers.ValidationError({label: f"Cell ({cell['row']}, {cell['col']}) lies outside the grid."})
    return cell["row"] * cols + cell["col"]


class CrosswordDataSerializer(PuzzleDataSerializer):
    rows = serializers.IntegerField(min_value=1)
    cols = serializers.IntegerField(min_value=1)
    cells = CrosswordCellSerializer(many=True, allow_empty=False)

    def validate_rows(self, value: int) -> int:
        return _check_dimension(value)

    def validate_cols(self, value: int) -> int:
        return _check_dimension(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        attrs["solution"] = {
            _flat_cell(cell, attrs["rows"], attrs["cols"], "cells"): cell["answer"] for cell in attrs["cells"]
        }
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return CrosswordSpec(rows=vd["rows"], cols=vd["cols"], solution=vd["solution"])


class WordSearchDataSerializer(PuzzleDataSerializer):
    rows = serializers.IntegerField(min_value=1)
    cols = serializers.IntegerField(min_value=1)
    words = HiddenWordSerializer(many=True, allow_empty=False)

    def validate_rows(self, value: int) -> int:
        return _check_dimension(value)

    def validate_cols(self, value: int) -> int:
        return _check_dimension(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        attrs["hidden"] = tuple(
            (
                normalize_text(entry["word"]),
                tuple(_flat_cell(cell, attrs["rows"], attrs["cols"], "words") for cell in entry["cells"]),
            )
            for entry in attrs["words"]
        )
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return WordSearchSpec(rows=vd["rows"], cols=vd["cols"], words=vd["hidden"])


class SpellingBeeDataSerializer(PuzzleDataSerializer):
    center = serializers.CharField(max_length=1)
    outer = serializers.ListField(child=serializers.CharField(max_length=1), min_length=1)
    valid_words = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    min_length = serializers.IntegerField(min_value=1, default=4)

    def validate_center(self, value: str) -> str:
        if not value.isalpha():
            raise serializers.ValidationError("Center must be a letter.")
        return normalize_text(value)

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return SpellingBeeSpec(
            center=vd["center"],
            outer=tuple(normalize_text(letter) for letter in vd["outer"]),
            valid_words=frozenset(normalize_text(w) for w in vd["valid_words"]),
            min_length=vd["min_length"],
        )


class LetterGridDataSerializer(PuzzleDataSerializer):
    """``grid`` lists rows of cells; a cell may hold more than one letter (``"qu"``)."""

    grid = serializers.ListField(
        child=serializers.ListField(child=serializers.CharField(), min_length=1), min_length=1
    )
    valid_words = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    min_length = serializers.IntegerField(min_value=1, default=3)

    def validate_grid(self, value: List[List[str]]) -> List[List[str]]:
        if len({len(row) for row in value}) != 1:
            raise serializers.ValidationError("All grid rows must have the same length.")
        _check_dimension(len(value))
        _check_dimension(len(value[0]))
        return value

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        grid = vd["grid"]
        return LetterGridSpec(
            rows=len(grid),
            cols=len(grid[0]),
            letters=tuple(normalize_text(cell) for row in grid for cell in row),
            valid_words=frozenset(normalize_text(w) for w in vd["valid_words"]),
            min_length=vd["min_length"],
        )


class NonogramDataSerializer(PuzzleDataSerializer):
    row_clues = serializers.ListField(
        child=serializers.ListField(child=serializers.IntegerField(min_value=1)), min_length=1
    )
    col_clues = serializers.ListField(
        child=serializers.ListField(child=serializers.IntegerField(min_value=1)), min_length=1
    )

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        rows, cols = len(attrs["row_clues"]), len(attrs["col_clues"])
        _check_dimension(rows)
        _check_dimension(cols)
        for name, clues, length in (("row_clues", attrs["row_clues"], cols), ("col_clues", attrs["col_clues"], rows)):
            if any(sum(clue) + len(clue) - 1 > length for clue in clues if clue):
                raise serializers.ValidationError({name: "A clue does not fit in its line."})
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return NonogramSpec(row_clues=vd["row_clues"], col_clues=vd["col_clues"])


class FlowDataSerializer(PuzzleDataSerializer):
    rows = serializers.IntegerField(min_value=1)
    cols = serializers.IntegerField(min_value=1)
    dots = DotSerializer(many=True, allow_empty=False)

    def validate_rows(self, value: int) -> int:
        return _check_dimension(value)

    def validate_cols(self, value: int) -> int:
        return _check_dimension(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        ends: Dict[str, List[int]] = {}
        for dot in attrs["dots"]:
            ends.setdefault(dot["id"], []).append(_flat_cell(dot, attrs["rows"], attrs["cols"], "dots"))
        if any(len(cells) != 2 or cells[0] == cells[1] for cells in ends.values()):
            raise serializers.ValidationError({"dots": "Each colour needs exactly two distinct dots."})
        attrs["ends"] = {colour: tuple(cells) for colour, cells in ends.items()}
        return attrs

    def to_spec(self) -> PuzzleSpec:
        vd = self.validated_data
        return FlowSpec(rows=vd["rows"], cols=vd["cols"], dots=vd["ends"])


class SlidingDataSerializer(PuzzleDataSerializer):
    size = serializers.IntegerField(min_value=2)

    def validate_size(self, value: int) -> int:
        return _check_dimension(value, "Board size")

    def to_spec(self) -> PuzzleSpec:
        return SlidingSpec(size=self.validated_data["size"])


DATA_SERIALIZERS = {
    "word": WordDataSerializer,
    "code": CodeDataSerializer,
    "sequence": SequenceDataSerializer,
    "path": PathDataSerializer,
    "trail": TrailDataSerializer,
    "grid": GridDataSerializer,
    "chain": ChainDataSerializer,
    "group": GroupDataSerializer,
    "arithmetic": ArithmeticDataSerializer,
    "anagram": AnagramDataSerializer,
    "text": TextDataSerializer,
    "hangman": HangmanDataSerializer,
    "crossword": CrosswordDataSerializer,
    "word_search": WordSearchDataSerializer,
    "spelling_bee": SpellingBeeDataSerializer,
    "letter_grid": LetterGridDataSerializer,
    "nonogram": NonogramDataSerializer,
    "flow": FlowDataSerializer,
    "sliding": SlidingDataSerializer,
}


# PUBLIC_INTERFACE
class PuzzleDocumentSerializer(serializers.Serializer):
    """A puzzle document as kept in content storage: ``{"kind": ..., "data": {...}}``.

    Validated data gains ``spec`` (a PuzzleSpec), or ``None`` when the kind is
    not one this service knows.
    """

    kind = serializers.CharField()
    data = serializers.DictField(required=False, default=dict)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        kind = normalize_text(attrs["kind"])
        attrs["kind"] = kind
        serializer_cls = DATA_SERIALIZERS.get(kind)
        if serializer_cls is None:
            attrs["spec"] = None
            return attrs
        data_serializer = serializer_cls(data=attrs["data"])
        if not data_serializer.is_valid():
            raise serializers.ValidationError({"data": data_serializer.errors})
        attrs["spec"] = data_serializer.to_spec()
        return attrs


# PUBLIC_INTERFACE
class EvaluateRequestSerializer(serializers.Serializer):
    """Request payload: a puzzle document and the player's current input."""

    puzzle = PuzzleDocumentSerializer()
    input = serializers.JSONField(allow_null=True)


# PUBLIC_INTERFACE
class VerdictSerializer(serializers.Serializer):
    """Response payload for an evaluation."""

    kind = serializers.CharField()
    is_correct = serializers.BooleanField()
    feedback = serializers.DictField(allow_null=True, help_text="Kind-specific feedback, or null.")
