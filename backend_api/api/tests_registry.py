from unittest import mock

from django.test import SimpleTestCase

from api.puzzles import (
    AnagramSpec,
    ArithmeticSpec,
    ChainSpec,
    CodeSpec,
    CrosswordSpec,
    EngineRegistry,
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
    UnknownPuzzleKind,
    Verdict,
    WordSearchSpec,
    WordSpec,
    evaluate,
    get_engine,
    membership,
)
from api.puzzles import engines


CORRECT_ANSWERS = [
    (WordSpec(secret="apple"), "APPLE"),
    (CodeSpec(secret=("1", "2", "3")), [1, 2, 3]),
    (SequenceSpec(solution=(1, 0)), [1, 0]),
    (PathSpec(rows=2, cols=2, numbers={0: 1, 2: 2}), [0, 1, 3, 2]),
    (TrailSpec(rows=1, cols=3, start=1, end=3, givens={0: 1}), [1, 2, 3]),
    (GridSpec(size=3, magic_constant=15, values="square"), [2, 7, 6, 9, 5, 1, 4, 3, 8]),
    (ChainSpec(start="cold", end="warm", valid_words=frozenset({"cord", "card", "ward"})), ["cord", "card", "ward"]),
    (GroupSpec(items={"a": "x", "b": "x", "c": "y"}, group_size=2), ["b", "a"]),
    (ArithmeticSpec(problems=("6 / 3",)), "2"),
    (AnagramSpec(target="listen"), "Silent"),
    (TextSpec(answer="piano, a piano"), "A Piano"),
    (HangmanSpec(word="apple"), "aple"),
    (CrosswordSpec(rows=2, cols=2, solution={0: "a", 1: "t", 3: "o"}), ["A", "t", None, "o"]),
    (WordSearchSpec(rows=2, cols=3, words=(("cat", (0, 1, 2)),)), [2, 1, 0]),
    (SpellingBeeSpec(center="a", outer=("p", "l", "e", "s", "t", "r"), valid_words=frozenset({"plate"})), "Plate"),
    (LetterGridSpec(rows=2, cols=2, letters=("c", "a", "t", "s"), valid_words=frozenset({"cat"})), [0, 1, 2]),
    (NonogramSpec(row_clues=((2,), (1,)), col_clues=((2,), (1,))), [1, 1, 1, 0]),
    (FlowSpec(rows=2, cols=2, dots={"red": (0, 1), "blue": (2, 3)}), {"red": [0, 1], "blue": [3, 2]}),
    (SlidingSpec(size=2), [1, 2, 3, 0]),
]

# Deliberately wrong input of the right shape for every kind.
WRONG_ANSWERS = [
    (WordSpec(secret="apple"), "apply"),
    (CodeSpec(secret=("1", "2", "3")), [3, 2, 1]),
    (PathSpec(rows=2, cols=2, numbers={0: 1, 2: 2}), [0, 2, 3, 1]),
    (TrailSpec(rows=1, cols=3, start=1, end=3), [1, 3, 2]),
    (GridSpec(size=3, magic_constant=15), [5] * 9),
    (ChainSpec(start="cold", end="warm", valid_words=frozenset({"cord"})), ["cord", "card", "ward"]),
    (GroupSpec(items={"a": "x", "b": "x", "c": "y"}, group_size=2), ["a", "c"]),
    (ArithmeticSpec(problems=("6 / 3",)), "3"),
    (AnagramSpec(target="listen"), "lister"),
    (HangmanSpec(word="apple", max_misses=1), ["z"]),
    (CrosswordSpec(rows=1, cols=2, solution={0: "a", 1: "t"}), ["a", "x"]),
    (WordSearchSpec(rows=1, cols=3, words=(("cat", (0, 1, 2)),)), [0, 1]),
    (SpellingBeeSpec(center="a", outer=("p", "l", "e", "s", "t", "r")), "pelt"),
    (LetterGridSpec(rows=2, cols=2, letters=("c", "a", "t", "s"), valid_words=frozenset({"cat"})), [0, 3, 2]),
    (NonogramSpec(row_clues=((2,), (1,)), col_clues=((2,), (1,))), [1, 1, 0, 1]),
    (FlowSpec(rows=2, cols=2, dots={"red": (0, 1), "blue": (2, 3)}), {"red": [0, 1]}),
]


class RegistryTests(SimpleTestCase):
    def test_every_spec_kind_has_an_engine(self):
        kinds = {cls.kind for cls in PuzzleSpec.__subclasses__()}
        self.assertEqual(set(EngineRegistry.kinds()), kinds)
        self.assertEqual(len(kinds), 19)

    def test_lookup_is_case_insensitive(self):
        self.assertIs(get_engine(" WORD "), engines.WordEngine)

    def test_unknown_kind_raises(self):
        with self.assertRaises(UnknownPuzzleKind):
            get_engine("jigsaw")
        self.assertTrue(issubclass(UnknownPuzzleKind, KeyError))

    def test_missing_engine_detected(self):
        with mock.patch.dict(engines.ENGINES_BY_SPEC):
            del engines.ENGINES_BY_SPEC[HangmanSpec]
            with self.assertRaises(RuntimeError):
                engines._check_union_covered()

    def test_register_override(self):
        with mock.patch.dict(EngineRegistry._registry):
            EngineRegistry.register("Riddle", engines.TextEngine)
            self.assertIs(get_engine("riddle"), engines.TextEngine)
            with self.assertRaises(ValueError):
                EngineRegistry.register("  ", engines.TextEngine)
        self.assertNotIn("riddle", EngineRegistry.kinds())


class EvaluateTests(SimpleTestCase):
    def test_word_verdict(self):
        verdict = evaluate(WordSpec(secret="cares"), "crane")
        self.assertEqual(verdict.kind, "word")
        self.assertFalse(verdict.is_correct)
        self.assertEqual(
            verdict.to_dict()["feedback"]["letters"],
            ["correct", "present", "present", "absent", "present"],
        )

    def test_shape_mismatch_is_bare_failure(self):
        cases = [
            (WordSpec(secret="apple"), "app"),
            (WordSpec(secret="apple"), 12345),
            (CodeSpec(secret=("r", "g")), ["r"]),
            (CodeSpec(secret=("r", "g")), "rg"),
            (GridSpec(size=3, magic_constant=15), [1, 2, 3]),
            (TrailSpec(rows=2, cols=2, start=1, end=4), [1, 2, 3]),
            (ChainSpec(start="cold", end="warm"), ["cord"]),
            (ArithmeticSpec(problems=("1 + 1", "2 + 2")), ["2"]),
            (HangmanSpec(word="apple"), [1, 2]),
            (PathSpec(rows=2, cols=2), None),
        ]
        for spec, player_input in cases:
            verdict = evaluate(spec, player_input)
            self.assertEqual(verdict, Verdict(kind=spec.kind, is_correct=False))
            self.assertIsNone(verdict.to_dict()["feedback"])

    def test_sequence_has_no_feedback(self):
        self.assertEqual(evaluate(SequenceSpec(solution=(2, 0, 1)), [2, 0, 1]), Verdict("sequence", True))
        self.assertFalse(evaluate(SequenceSpec(solution=(2, 0, 1)), [0, 1, 2]).is_correct)

    def test_unrecognised_spec_is_failure(self):
        with self.assertLogs("api.puzzles.registry", level="WARNING"):
            verdict = evaluate(PuzzleSpec(), "anything")
        self.assertEqual(verdict, Verdict(kind="unknown", is_correct=False))
        self.assertFalse(evaluate({"kind": "word"}, "apple").is_correct)

    def test_malformed_spec_does_not_raise(self):
        with self.assertLogs("api.puzzles.registry", level="WARNING"):
            verdict = evaluate(GridSpec(size="3"), [1] * 9)
        self.assertFalse(verdict.is_correct)

    def test_every_kind_accepts_a_correct_answer(self):
        for spec, player_input in CORRECT_ANSWERS:
            with self.subTest(kind=spec.kind):
                verdict = evaluate(spec, player_input)
                self.assertTrue(verdict.is_correct)
                self.assertEqual(verdict.kind, spec.kind)

    def test_chain_uses_supplied_dictionary(self):
        spec = ChainSpec(start="cold", end="warm")
        self.assertFalse(evaluate(spec, ["cord", "card", "ward"]).is_correct)
        dictionary = membership(["cord", "card", "ward"])
        verdict = evaluate(spec, ["cord", "card", "ward"], dictionary=dictionary)
        self.assertTrue(verdict.is_correct)
        self.assertEqual(verdict.to_dict()["feedback"]["steps"], ["valid", "valid", "valid"])

    def test_case_sensitive_text(self):
        spec = TextSpec(answer="Echo", case_sensitive=True)
        self.assertTrue(evaluate(spec, "Echo").is_correct)
        self.assertFalse(evaluate(spec, "echo").is_correct)

    def test_repeated_calls_give_equal_verdicts(self):
        spec = CodeSpec(secret=("red", "blue", "green", "yellow"))
        guess = ["red", "green", "blue", "yellow"]
        first = evaluate(spec, guess)
        self.assertEqual(first, evaluate(spec, guess))
        self.assertEqual(first.to_dict()["feedback"]["exact"], 2)
        self.assertEqual(first.to_dict()["feedback"]["present"], 2)

    def test_feedback_agrees_with_verdict(self):
        for spec, player_input in CORRECT_ANSWERS + WRONG_ANSWERS:
            with self.subTest(kind=spec.kind, player_input=player_input):
                result = evaluate(spec, player_input).to_dict()
                feedback = result["feedback"]
                if feedback is not None and "is_correct" in feedback:
                    self.assertEqual(feedback["is_correct"], result["is_correct"])

    def test_anagram_feedback_marks_a_rearrangement_correct(self):
        result = evaluate(AnagramSpec(target="listen"), "silent").to_dict()
        self.assertTrue(result["is_correct"])
        self.assertTrue(result["feedback"]["is_correct"])


class SpecImmutabilityTests(SimpleTestCase):
    def test_specs_with_mappings_are_hashable(self):
        spec = PathSpec(rows=2, cols=2, numbers={0: 1})
        same = PathSpec(rows=2, cols=2, numbers={0: 1})
        self.assertEqual(hash(spec), hash(same))
        self.assertEqual({spec: "cached"}[same], "cached")
        self.assertEqual(spec.numbers, {0: 1})
        self.assertNotEqual(spec, PathSpec(rows=2, cols=2, numbers={0: 2}))

    def test_nested_containers_are_frozen(self):
        spec = GroupSpec(items={"a": "x", "b": "x"}, group_size=2)
        with self.assertRaises(TypeError):
            spec.items["c"] = "y"
        flow = FlowSpec(rows=2, cols=2, dots={"red": [0, 1]})
        self.assertEqual(flow.dots["red"], (0, 1))
        self.assertEqual(CodeSpec(secret=["r", "g"]).secret, ("r", "g"))
        hash(flow)
        hash(ChainSpec(start="cold", end="warm", valid_words={"cord"}))

    def test_path_numbers_cannot_be_changed(self):
        spec = PathSpec(rows=2, cols=2, numbers={0: 1})
        with self.assertRaises(TypeError):
            spec.numbers[0] = 2
        self.assertEqual(spec.numbers[0], 1)
