from django.core.management import call_command
from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from api.models import Word
from api.seed_utils import DEFAULT_SEED, ensure_seed_words
from api.serializers import DATA_SERIALIZERS, PuzzleDataSerializer


class EvaluateEndpointTests(APITestCase):
    def setUp(self):
        for text in ("cord", "card", "ward"):
            Word.objects.create(text=text, length=len(text), is_active=True)

    def post(self, kind, data, player_input):
        payload = {"puzzle": {"kind": kind, "data": data}, "input": player_input}
        return self.client.post(reverse("evaluate"), payload, format="json")

    def test_health(self):
        resp = self.client.get(reverse("Health"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Server is up!"})

    def test_puzzle_types(self):
        resp = self.client.get(reverse("get-puzzle-types"))
        self.assertEqual(resp.status_code, 200)
        kinds = resp.json()
        self.assertEqual(len(kinds), 19)
        self.assertIn("word", kinds)
        self.assertEqual(kinds, sorted(kinds))

    def test_word_feedback(self):
        resp = self.post("word", {"secret": "cares"}, "crane")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["kind"], "word")
        self.assertFalse(data["is_correct"])
        self.assertEqual(data["feedback"]["letters"], ["correct", "present", "present", "absent", "present"])

    def test_magic_square_with_givens(self):
        data = {"size": 3, "magic_constant": 15, "values": "square", "givens": [{"row": 1, "col": 1, "value": 5}]}
        resp = self.post("grid", data, [2, 7, 6, 9, 5, 1, 4, 3, 8])
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_correct"])

    def test_magic_square_without_value_rule_rejects_repeats(self):
        data = {"size": 3, "magic_constant": 15, "givens": [{"row": 1, "col": 1, "value": 5}]}
        resp = self.post("grid", data, [5] * 9)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertFalse(body["is_correct"])
        self.assertIn("All numbers 1 through 9 must appear exactly once", body["feedback"]["errors"])
        self.assertTrue(self.post("grid", data, [2, 7, 6, 9, 5, 1, 4, 3, 8]).json()["is_correct"])

    def test_inequality_grid(self):
        data = {
            "size": 3,
            "values": "latin",
            "inequalities": [{"row1": 0, "col1": 0, "row2": 0, "col2": 1, "operator": ">"}],
        }
        resp = self.post("grid", data, [1, 2, 3, 2, 3, 1, 3, 1, 2])
        body = resp.json()
        self.assertFalse(body["is_correct"])
        self.assertEqual(body["feedback"]["errors"], ["Inequality constraint violated"])

    def test_path(self):
        data = {"rows": 2, "cols": 2, "numbers": [{"pos": 0, "number": 1}, {"pos": 3, "number": 2}]}
        resp = self.post("path", data, [0, 1, 3, 2])
        self.assertTrue(resp.json()["is_correct"])
        resp = self.post("path", data, [0, 1, 1, 3])
        self.assertEqual(resp.json()["feedback"]["reason"], "repeated_cell")

    def test_chain_uses_word_table(self):
        resp = self.post("chain", {"start": "cold", "end": "warm"}, ["cord", "card", "ward"])
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_correct"])

    @override_settings(PUZZLES={"DICTIONARY_FALLBACK": False})
    def test_chain_without_word_table(self):
        resp = self.post("chain", {"start": "cold", "end": "warm"}, ["cord", "card", "ward"])
        self.assertFalse(resp.json()["is_correct"])
        resp = self.post(
            "chain",
            {"start": "cold", "end": "warm", "valid_words": ["CORD", "card", "ward"]},
            ["cord", "card", "ward", "warm"],
        )
        self.assertTrue(resp.json()["is_correct"])

    def test_unknown_kind_is_failure_verdict(self):
        resp = self.post("jigsaw", {"pieces": []}, "anything")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"kind": "jigsaw", "is_correct": False, "feedback": None})

    def test_wrong_input_shape_is_failure_verdict(self):
        resp = self.post("word", {"secret": "apple"}, ["a", "p"])
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"kind": "word", "is_correct": False, "feedback": None})
        resp = self.post("code", {"secret": ["r", "g", "b"]}, None)
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["is_correct"])

    def test_malformed_document_rejected(self):
        resp = self.post("word", {}, "apple")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("puzzle", resp.json())

        resp = self.post("word", {"secret": "extraordinary"}, "apple")
        self.assertEqual(resp.status_code, 400)

        resp = self.post("grid", {"size": 7, "magic_constant": 175}, [1] * 49)
        self.assertEqual(resp.status_code, 400)

        resp = self.post("grid", {"size": 2}, [1, 2, 3, 4])
        self.assertEqual(resp.status_code, 400)

        resp = self.post("hangman", {"word": "123"}, ["a"])
        self.assertEqual(resp.status_code, 400)
        self.assertIn("word", resp.json()["puzzle"]["data"])

        inequality = {"row1": 0, "col1": 0, "row2": 0, "col2": 1, "operator": "<"}
        resp = self.post("grid", {"size": 3, "inequalities": [inequality]}, [1] * 9)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("values", resp.json()["puzzle"]["data"])

        resp = self.client.post(reverse("evaluate"), {"puzzle": {"kind": "word", "data": {"secret": "apple"}}}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("input", resp.json())

    @override_settings(PUZZLES={"MAX_WORD_LENGTH": 4})
    def test_limits_come_from_settings(self):
        self.assertEqual(self.post("word", {"secret": "apple"}, "apple").status_code, 400)
        self.assertEqual(self.post("word", {"secret": "pear"}, "pear").status_code, 200)

    def test_quick_math_and_hangman(self):
        resp = self.post("arithmetic", {"problems": ["2 + 3 * 4", "8 / 0"]}, ["20", "0"])
        body = resp.json()
        self.assertEqual(body["feedback"]["results"], ["correct", "ungraded"])
        self.assertFalse(body["is_correct"])

        resp = self.post("hangman", {"word": "apple", "max_misses": 3}, ["a", "z"])
        feedback = resp.json()["feedback"]
        self.assertEqual(feedback["masked"], "A____")
        self.assertEqual(feedback["remaining"], 2)


class BoardKindsEndpointTests(APITestCase):
    def post(self, kind, data, player_input):
        payload = {"puzzle": {"kind": kind, "data": data}, "input": player_input}
        return self.client.post(reverse("evaluate"), payload, format="json")

    def test_crossword(self):
        data = {"rows": 1, "cols": 3, "cells": [{"row": 0, "col": 0, "answer": "A"}, {"row": 0, "col": 2, "answer": "T"}]}
        self.assertTrue(self.post("crossword", data, ["a", None, "t"]).json()["is_correct"])
        body = self.post("crossword", data, ["a", None, "x"]).json()
        self.assertFalse(body["is_correct"])
        self.assertEqual(body["feedback"]["incorrect"], [2])

    def test_word_search_either_direction(self):
        cells = [{"row": 0, "col": 0}, {"row": 1, "col": 1}]
        data = {"rows": 2, "cols": 2, "words": [{"word": "Go", "cells": cells}]}
        self.assertEqual(self.post("word_search", data, [3, 0]).json()["feedback"]["word"], "go")
        self.assertFalse(self.post("word_search", data, [0, 1]).json()["is_correct"])

    def test_spelling_bee_reason(self):
        data = {"center": "A", "outer": list("plestr"), "valid_words": ["plate"]}
        self.assertTrue(self.post("spelling_bee", data, "plate").json()["is_correct"])
        self.assertEqual(self.post("spelling_bee", data, "pelt").json()["feedback"]["reason"], "missing_center")
        self.assertEqual(self.post("spelling_bee", {"center": "1", "outer": ["a"]}, "a").status_code, 400)

    def test_letter_grid_uses_word_table(self):
        Word.objects.create(text="cat", length=3, is_active=True)
        data = {"grid": [["c", "a"], ["t", "s"]]}
        self.assertTrue(self.post("letter_grid", data, [0, 1, 2]).json()["is_correct"])
        self.assertEqual(self.post("letter_grid", data, [0, 3, 0]).json()["feedback"]["reason"], "not_adjacent")
        self.assertEqual(self.post("letter_grid", {"grid": [["c", "a"], ["t"]]}, [0]).status_code, 400)

    def test_nonogram(self):
        data = {"row_clues": [[2], [1]], "col_clues": [[2], [1]]}
        self.assertTrue(self.post("nonogram", data, [1, 1, 1, 0]).json()["is_correct"])
        feedback = self.post("nonogram", data, [1, 1, 0, 1]).json()["feedback"]
        self.assertEqual(feedback["rows"], [True, True])
        self.assertEqual(feedback["cols"], [False, False])
        self.assertEqual(self.post("nonogram", {"row_clues": [[3]], "col_clues": [[1]]}, [1]).status_code, 400)

    def test_flow(self):
        dots = [
            {"id": "red", "row": 0, "col": 0},
            {"id": "red", "row": 0, "col": 1},
            {"id": "blue", "row": 1, "col": 0},
            {"id": "blue", "row": 1, "col": 1},
        ]
        data = {"rows": 2, "cols": 2, "dots": dots}
        self.assertTrue(self.post("flow", data, {"red": [0, 1], "blue": [2, 3]}).json()["is_correct"])
        body = self.post("flow", data, {"red": [0, 1]}).json()
        self.assertEqual(body["feedback"]["connected"], ["red"])
        self.assertEqual(self.post("flow", {"rows": 2, "cols": 2, "dots": dots[:3]}, {}).status_code, 400)

    def test_sliding(self):
        self.assertTrue(self.post("sliding", {"size": 2}, [1, 2, 3, 0]).json()["is_correct"])
        self.assertEqual(
            self.post("sliding", {"size": 2}, [1, 2, 0, 3]).json(),
            {"kind": "sliding", "is_correct": False, "feedback": None},
        )
        self.assertEqual(self.post("sliding", {"size": 1}, [0]).status_code, 400)


class DataSerializerTests(SimpleTestCase):
    def test_every_kind_builds_its_own_spec(self):
        self.assertFalse(hasattr(PuzzleDataSerializer, "to_spec"))
        for kind, serializer_cls in DATA_SERIALIZERS.items():
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(serializer_cls, PuzzleDataSerializer))
                self.assertIn("to_spec", vars(serializer_cls))


class SeedWordsTests(APITestCase):
    def test_ensure_seed_words_only_once(self):
        inserted = ensure_seed_words()
        self.assertEqual(inserted, len(set(DEFAULT_SEED)))
        self.assertEqual(ensure_seed_words(), 0)
        self.assertTrue(Word.objects.accepts(" COLD "))
        self.assertFalse(Word.objects.accepts("qzxv"))

    def test_management_command(self):
        call_command("seed_words")
        self.assertTrue(Word.objects.filter(text="warm", length=4).exists())

    def test_inactive_words_not_accepted(self):
        Word.objects.create(text="Bolt", length=0, is_active=False)
        word = Word.objects.get(text="bolt")
        self.assertEqual(word.length, 4)
        self.assertFalse(Word.objects.accepts("bolt"))
