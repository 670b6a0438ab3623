from django.test import SimpleTestCase

from api.puzzles import (
    arith_eval,
    chain_check,
    differs_by_one_letter,
    grade_sheet,
    group_match,
    hangman_state,
    membership,
)

LADDER = membership(["cord", "card", "ward", "warm", "worm"])


class ChainCheckTests(SimpleTestCase):
    def test_cold_to_warm_arriving_at_end(self):
        report = chain_check("COLD", "WARM", ["CORD", "CARD", "WARD", "WARM"], LADDER)
        self.assertTrue(report.is_correct)
        self.assertEqual(report.steps, ("valid",) * 4)

    def test_intermediates_only(self):
        self.assertTrue(chain_check("cold", "warm", ["cord", "card", "ward"], LADDER).is_correct)

    def test_non_dictionary_word_breaks_chain(self):
        report = chain_check("cold", "warm", ["cord", "cxrd", "ward"], LADDER)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.steps[1], "invalid")

    def test_last_rung_must_reach_end(self):
        report = chain_check("cold", "warm", ["cord", "card", "cart"], membership(["cord", "card", "cart"]))
        self.assertFalse(report.is_correct)
        self.assertEqual(report.steps, ("valid", "valid", "invalid"))

    def test_wrong_number_of_rungs(self):
        report = chain_check("cold", "warm", ["cord", "card"], LADDER)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.steps, ())

    def test_differs_by_one_letter(self):
        self.assertTrue(differs_by_one_letter("cold", "cord"))
        self.assertFalse(differs_by_one_letter("cold", "cold"))
        self.assertFalse(differs_by_one_letter("cold", "card"))
        self.assertFalse(differs_by_one_letter("cold", "colds"))


class GroupMatchTests(SimpleTestCase):
    catalog = {"apple": "fruit", "pear": "fruit", "red": "color", "blue": "color"}

    def test_shared_tag(self):
        match = group_match(["pear", "apple"], self.catalog, 2)
        self.assertEqual(match.group, "fruit")
        self.assertTrue(match.is_correct)

    def test_no_match(self):
        for selected in (["apple", "red"], ["apple", "apple"], ["apple", "kiwi"], ["apple"]):
            self.assertIsNone(group_match(selected, self.catalog, 2).group)


class ArithmeticTests(SimpleTestCase):
    def test_left_to_right_without_precedence(self):
        self.assertEqual(arith_eval("2 + 3 * 4"), 20)
        self.assertEqual(arith_eval("7 - 10"), -3)
        self.assertEqual(arith_eval("12 ÷ 4"), 3)
        self.assertEqual(arith_eval("3 x 4"), 12)
        self.assertEqual(arith_eval("-2 * -3"), 6)
        self.assertEqual(arith_eval("1.5+1.5"), 3)

    def test_no_result_never_raises(self):
        for expression in ("6 / 0", "", "2 +", "abc", "5", "1..2 + 1", "__import__('os')", "2 ** 3", None, 42, ["1", "+", "1"]):
            self.assertIsNone(arith_eval(expression))

    def test_grade_sheet_with_and_without_stored_answers(self):
        report = grade_sheet(["2 + 2", "10 / 4"], [], ["4", "2.50"])
        self.assertTrue(report.is_correct)
        self.assertEqual(report.as_dict()["correct"], 2)

        report = grade_sheet(["7 * 6", "1 + 1"], ["42", "two, 2"], ["42", "Two"])
        self.assertTrue(report.is_correct)

        report = grade_sheet(["7 * 6", "1 + 1"], ["42", ""], ["41", None])
        self.assertEqual(report.results, ("incorrect", "incorrect"))

    def test_unevaluable_problem_is_ungraded(self):
        report = grade_sheet(["2 +", "1 + 1"], [], ["2", "2"])
        self.assertFalse(report.is_correct)
        self.assertEqual(report.results, ("ungraded", "correct"))

    def test_answer_count_mismatch(self):
        self.assertEqual(grade_sheet(["1 + 1"], [], []).results, ())


class HangmanTests(SimpleTestCase):
    def test_win(self):
        state = hangman_state("apple", ["a", "P", "l", "e"])
        self.assertEqual(state.status, "won")
        self.assertEqual(state.masked, "APPLE")
        self.assertTrue(state.is_correct)

    def test_loss_and_remaining(self):
        state = hangman_state("apple", ["z", "x"], max_misses=2)
        self.assertEqual(state.status, "lost")
        self.assertEqual(state.remaining, 0)

    def test_repeats_count_once_and_spaces_are_shown(self):
        state = hangman_state("ice cream", ["c", "c", "z"])
        self.assertEqual(state.masked, "_C_ C____")
        self.assertEqual(state.misses, ("Z",))
        self.assertEqual(state.remaining, 5)
        self.assertEqual(state.status, "in_progress")

    def test_guesses_after_win_ignored(self):
        state = hangman_state("apple", ["a", "p", "l", "e", "z"])
        self.assertEqual(state.misses, ())
