from django.test import SimpleTestCase

from api.puzzles import (
    crossword_check,
    flow_check,
    letter_path_adjacent,
    letter_path_check,
    letter_path_word,
    membership,
    nonogram_check,
    nonogram_clue,
    sliding_solved,
    spelling_bee_check,
    word_search_match,
)
from api.puzzles.wordgrids import INVALID_LETTERS, MISSING_CENTER, NOT_A_WORD, NOT_ADJACENT, TOO_SHORT

# c a t
# o r e
# w s n
LETTERS = ("c", "a", "t", "o", "r", "e", "w", "s", "n")
WORDS = membership(["cat", "care", "rat", "cow", "tea"])


class CrosswordTests(SimpleTestCase):
    solution = {0: "c", 1: "a", 2: "t", 4: "r"}

    def test_filled_grid(self):
        grid = ["C", " a ", "t", None, "r", None]
        report = crossword_check(grid, self.solution)
        self.assertTrue(report.is_correct)
        self.assertEqual(report.incorrect, ())

    def test_wrong_and_missing_cells_listed(self):
        report = crossword_check(["c", "o", "t", None, None, None], self.solution)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.incorrect, (1, 4))

    def test_empty_solution_never_complete(self):
        self.assertFalse(crossword_check([], {}).is_correct)


class WordSearchTests(SimpleTestCase):
    words = (("cat", (0, 1, 2)), ("cow", (0, 3, 6)))

    def test_forward_and_backward(self):
        self.assertEqual(word_search_match([0, 1, 2], self.words).word, "cat")
        self.assertEqual(word_search_match([6, 3, 0], self.words).word, "cow")

    def test_partial_or_scrambled_selection(self):
        self.assertIsNone(word_search_match([0, 1], self.words).word)
        self.assertFalse(word_search_match([1, 0, 2], self.words).is_correct)


class SpellingBeeTests(SimpleTestCase):
    outer = ("c", "r", "e", "t", "o", "w")

    def check(self, word, min_length=4):
        return spelling_bee_check(word, "a", self.outer, WORDS, min_length)

    def test_valid_word(self):
        report = self.check(" CARE ")
        self.assertTrue(report.is_correct)
        self.assertEqual(report.word, "care")
        self.assertIsNone(report.reason)

    def test_reasons_in_rule_order(self):
        self.assertEqual(self.check("cat").reason, TOO_SHORT)
        self.assertEqual(self.check("crew").reason, MISSING_CENTER)
        self.assertEqual(self.check("cabs").reason, INVALID_LETTERS)
        self.assertEqual(self.check("tact").reason, NOT_A_WORD)
        self.assertEqual(self.check("cat", min_length=3).reason, None)


class LetterGridTests(SimpleTestCase):
    def test_adjacency_includes_diagonals(self):
        self.assertTrue(letter_path_adjacent([0, 4, 8], 3, 3))
        self.assertFalse(letter_path_adjacent([0, 2], 3, 3))
        self.assertFalse(letter_path_adjacent([0, 1, 0], 3, 3))
        self.assertFalse(letter_path_adjacent([0, 9], 3, 3))
        self.assertFalse(letter_path_adjacent([0, True], 3, 3))

    def test_word_along_path(self):
        self.assertEqual(letter_path_word([4, 1, 2], LETTERS), "rat")

    def test_traced_word(self):
        report = letter_path_check([0, 1, 2], 3, 3, LETTERS, WORDS)
        self.assertTrue(report.is_correct)
        self.assertEqual(report.word, "cat")

    def test_failure_reasons(self):
        self.assertEqual(letter_path_check([0, 2], 3, 3, LETTERS, WORDS).reason, NOT_ADJACENT)
        self.assertEqual(letter_path_check([], 3, 3, LETTERS, WORDS).reason, NOT_ADJACENT)
        self.assertEqual(letter_path_check([0, 1], 3, 3, LETTERS, WORDS).reason, TOO_SHORT)
        self.assertEqual(letter_path_check([0, 4, 8], 3, 3, LETTERS, WORDS).reason, NOT_A_WORD)


class NonogramTests(SimpleTestCase):
    def test_clue_runs(self):
        self.assertEqual(nonogram_clue([1, 1, 0, 1]), (2, 1))
        self.assertEqual(nonogram_clue([0, 0, 0]), ())
        self.assertEqual(nonogram_clue([True, False, True, True]), (1, 2))

    def test_solved_grid(self):
        grid = [
            1, 1, 0,
            0, 1, 1,
            1, 0, 1,
        ]
        row_clues = [(2,), (2,), (1, 1)]
        col_clues = [(1, 1), (2,), (2,)]
        report = nonogram_check(grid, row_clues, col_clues)
        self.assertTrue(report.is_correct)
        self.assertEqual(report.rows, (True, True, True))

    def test_failing_lines_reported(self):
        report = nonogram_check([1, 0, 0, 1], [(1,), (1,)], [(2,), ()])
        self.assertFalse(report.is_correct)
        self.assertEqual(report.rows, (True, True))
        self.assertEqual(report.cols, (False, False))

    def test_wrong_size(self):
        report = nonogram_check([1, 1, 1], [(1,), (1,)], [(1,), (1,)])
        self.assertFalse(report.is_correct)
        self.assertEqual(report.rows, ())


class FlowTests(SimpleTestCase):
    # R . B
    # R . B
    dots = {"red": (0, 3), "blue": (2, 5)}

    def test_solved_board(self):
        paths = {"red": [0, 1, 4, 3], "blue": [2, 5]}
        report = flow_check(paths, self.dots, 2, 3)
        self.assertTrue(report.is_correct)
        self.assertEqual(report.connected, ("blue", "red"))
        self.assertEqual((report.covered, report.total), (6, 6))

    def test_connected_but_board_not_covered(self):
        report = flow_check({"red": [0, 3], "blue": [2, 5]}, self.dots, 2, 3)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.connected, ("blue", "red"))
        self.assertEqual(report.covered, 4)

    def test_overlapping_pipes(self):
        paths = {"red": [0, 1, 4, 3], "blue": [2, 1, 4, 5]}
        self.assertFalse(flow_check(paths, self.dots, 2, 3).is_correct)

    def test_pipe_must_join_its_own_dots(self):
        paths = {"red": [0, 1, 2], "blue": [5, 4, 3]}
        report = flow_check(paths, self.dots, 2, 3)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.connected, ())

    def test_unknown_colour_or_diagonal_step(self):
        self.assertFalse(flow_check({"red": [0, 4, 3], "green": [1, 2]}, self.dots, 2, 3).is_correct)
        self.assertNotIn("red", flow_check({"red": [0, 4, 3]}, self.dots, 2, 3).connected)
        self.assertNotIn("red", flow_check({"red": [0, 1, 3]}, self.dots, 2, 3).connected)


class SlidingTests(SimpleTestCase):
    def test_solved_order(self):
        self.assertTrue(sliding_solved([1, 2, 3, 4, 5, 6, 7, 8, 0]))
        self.assertTrue(sliding_solved([1, 0]))

    def test_unsolved(self):
        self.assertFalse(sliding_solved([1, 2, 3, 4, 5, 6, 7, 0, 8]))
        self.assertFalse(sliding_solved([0, 1, 2, 3]))
        self.assertFalse(sliding_solved([0]))
