from django.test import SimpleTestCase

from api.puzzles import (
    anagram_check,
    answer_match,
    code_feedback,
    exact_match,
    keyboard_states,
    sequence_check,
    word_feedback,
)
from api.puzzles.normalize import normalize_letters, normalize_symbols, split_answers


class WordFeedbackTests(SimpleTestCase):
    def test_repeated_letters_scored_against_remaining_pool(self):
        fb = word_feedback("CRANE", "CARES")
        self.assertEqual(list(fb.letters), ["correct", "present", "present", "absent", "present"])
        self.assertFalse(fb.is_correct)

    def test_duplicate_guess_letter_only_counted_once(self):
        # the only "l" in the secret is taken by the exact match
        fb = word_feedback("hello", "world")
        self.assertEqual(list(fb.letters), ["absent", "absent", "absent", "correct", "present"])

    def test_case_insensitive_exact_match(self):
        fb = word_feedback("Apple", "APPLE")
        self.assertTrue(fb.is_correct)
        self.assertEqual(set(fb.letters), {"correct"})

    def test_length_mismatch_has_no_statuses(self):
        fb = word_feedback("app", "apple")
        self.assertEqual(fb.letters, ())
        self.assertFalse(fb.is_correct)

    def test_status_list_matches_word_length(self):
        pairs = [("abcde", "edcba"), ("aaaaa", "abcde"), ("mamma", "madam"), ("zzzzz", "zzzzz")]
        for guess, secret in pairs:
            fb = word_feedback(guess, secret)
            self.assertEqual(len(fb.letters), len(secret))
            self.assertEqual(fb.is_correct, all(s == "correct" for s in fb.letters))

    def test_keyboard_states_only_upgrade(self):
        rows = [
            ("crane", word_feedback("crane", "cares").letters),
            ("cares", word_feedback("cares", "cares").letters),
            ("nacre", ("absent", "absent", "absent", "absent", "absent")),
        ]
        states = keyboard_states(rows)
        self.assertEqual(states["a"], "correct")
        self.assertEqual(states["r"], "correct")
        self.assertEqual(states["n"], "absent")


class CodeFeedbackTests(SimpleTestCase):
    def test_two_exact_two_present(self):
        fb = code_feedback(["red", "green", "blue", "yellow"], ["red", "blue", "green", "yellow"])
        self.assertEqual((fb.exact, fb.present, fb.is_correct), (2, 2, False))
        self.assertEqual(fb.positions, (True, False, False, True))

    def test_secret_against_itself(self):
        secret = ["1", "2", "2", "3"]
        fb = code_feedback(secret, secret)
        self.assertEqual(fb.exact, 4)
        self.assertEqual(fb.present, 0)
        self.assertTrue(fb.is_correct)

    def test_each_secret_symbol_consumed_once(self):
        fb = code_feedback(["a", "a", "a", "a"], ["a", "b", "b", "b"])
        self.assertEqual((fb.exact, fb.present), (1, 0))
        fb = code_feedback(["b", "a", "a", "c"], ["a", "b", "d", "d"])
        self.assertEqual((fb.exact, fb.present), (0, 2))

    def test_exact_plus_present_bounded_by_length(self):
        secret = ["r", "g", "b", "y"]
        for guess in (["g", "r", "y", "b"], ["r", "r", "r", "r"], ["x", "y", "z", "g"]):
            fb = code_feedback(guess, secret)
            self.assertLessEqual(fb.exact + fb.present, len(secret))

    def test_length_mismatch_is_failure(self):
        fb = code_feedback(["red"], ["red", "blue"])
        self.assertEqual((fb.exact, fb.present, fb.positions, fb.is_correct), (0, 0, (), False))


class SequenceAnagramTextTests(SimpleTestCase):
    def test_sequence_check(self):
        self.assertTrue(sequence_check([2, 0, 1], [2, 0, 1]))
        self.assertFalse(sequence_check([0, 1, 2], [2, 0, 1]))
        self.assertFalse(sequence_check([2, 0], [2, 0, 1]))
        self.assertFalse(sequence_check([2, None, 1], [2, 0, 1]))

    def test_anagram_examples(self):
        self.assertTrue(anagram_check("LISTEN", "SILENT"))
        self.assertFalse(anagram_check("HELLO", "WORLD"))

    def test_anagram_symmetric_and_reflexive(self):
        pairs = [("Dormitory", "dirty room"), ("abc", "abd"), ("", "a"), ("A gentleman", "Elegant man")]
        for a, b in pairs:
            self.assertEqual(anagram_check(a, b), anagram_check(b, a))
            self.assertTrue(anagram_check(a, a))
        self.assertTrue(anagram_check("Dormitory", "dirty room"))

    def test_answer_match_alternatives(self):
        self.assertTrue(answer_match("  Piano ", "piano, a piano"))
        self.assertTrue(answer_match("a piano", "piano, a piano"))
        self.assertFalse(answer_match("", "piano"))
        self.assertFalse(answer_match("keyboard", "piano"))

    def test_exact_match_case_sensitivity(self):
        self.assertTrue(exact_match("Echo", "echo"))
        self.assertFalse(exact_match("Echo", "echo", case_sensitive=True))
        self.assertTrue(exact_match(" Echo ", "Echo", case_sensitive=True))


class NormalizeTests(SimpleTestCase):
    def test_helpers(self):
        self.assertEqual(normalize_letters(" Dirty  Room "), "dirtyroom")
        self.assertEqual(normalize_symbols(["Red", " blue", None]), ("red", "blue", ""))
        self.assertEqual(split_answers("Piano, , A Piano"), ("piano", "a piano"))
        self.assertEqual(split_answers(None), ())
