from django.test import SimpleTestCase

from api.puzzles import Inequality, are_adjacent, grid_check, is_valid_path, path_check, trail_check
from api.puzzles.paths import (
    GIVEN_CHANGED,
    INCOMPLETE,
    MISSING_NUMBER,
    NO_NUMBERS,
    NOT_ADJACENT,
    NUMBERS_NOT_CONTIGUOUS,
    NUMBERS_OUT_OF_ORDER,
    OUT_OF_BOUNDS,
    OUT_OF_RANGE,
    REPEATED_CELL,
    SHAPE_MISMATCH,
)

MAGIC = [2, 7, 6, 9, 5, 1, 4, 3, 8]
LATIN = [1, 2, 3, 2, 3, 1, 3, 1, 2]


class PathCheckTests(SimpleTestCase):
    numbers = {0: 1, 3: 2}

    def test_valid_orthogonal_path(self):
        report = path_check([0, 1, 3, 2], 2, 2, self.numbers)
        self.assertTrue(report.is_correct)
        self.assertIsNone(report.reason)
        self.assertTrue(is_valid_path([0, 1, 3, 2], 2, 2, self.numbers))

    def test_repeated_cell_rejected(self):
        report = path_check([0, 1, 1, 3], 2, 2, self.numbers)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.reason, REPEATED_CELL)
        # diagnostics keep going past the first failure
        self.assertGreater(len(report.errors), 1)
        self.assertFalse(is_valid_path([0, 1, 1, 3], 2, 2, self.numbers))

    def test_diagonal_step_depends_on_mode(self):
        path = [0, 3, 1, 2]
        self.assertEqual(path_check(path, 2, 2, self.numbers).reason, NOT_ADJACENT)
        self.assertTrue(path_check(path, 2, 2, self.numbers, mode="diagonal").is_correct)

    def test_out_of_bounds_and_incomplete(self):
        report = path_check([0, 1, 3, 7], 2, 2, self.numbers)
        self.assertEqual(report.reason, OUT_OF_BOUNDS)
        self.assertEqual(path_check([0, 1, 3], 2, 2, self.numbers).reason, INCOMPLETE)

    def test_number_order_rules(self):
        path = [0, 1, 3, 2]
        self.assertEqual(path_check(path, 2, 2, {0: 2, 3: 1}).reason, NUMBERS_OUT_OF_ORDER)
        self.assertEqual(path_check(path, 2, 2, {0: 1, 3: 3}).reason, NUMBERS_NOT_CONTIGUOUS)
        self.assertEqual(path_check(path, 2, 2, {}).reason, NO_NUMBERS)

    def test_are_adjacent(self):
        self.assertTrue(are_adjacent(0, 1, 3))
        self.assertFalse(are_adjacent(2, 3, 3))  # row wrap
        self.assertFalse(are_adjacent(0, 4, 3))
        self.assertTrue(are_adjacent(0, 4, 3, "diagonal"))


class TrailCheckTests(SimpleTestCase):
    def test_valid_trail(self):
        self.assertTrue(trail_check([1, 2, 4, 3], 2, 2, 1, 4, {0: 1}).is_correct)
        self.assertTrue(trail_check([1, 3, 4, 2], 2, 2, 1, 4, {}).is_correct)

    def test_non_adjacent_successor(self):
        report = trail_check([1, 3, 2, 4], 1, 4, 1, 4, {})
        self.assertFalse(report.is_correct)
        self.assertEqual(report.reason, NOT_ADJACENT)

    def test_missing_number_is_not_also_an_adjacency_error(self):
        report = trail_check([1, 2, 0, 4], 1, 4, 1, 4, {})
        self.assertEqual(report.reason, MISSING_NUMBER)
        self.assertEqual(report.errors, ("Number 3 is missing",))

    def test_given_changed(self):
        report = trail_check([2, 1, 4, 3], 2, 2, 1, 4, {0: 1})
        self.assertEqual(report.reason, GIVEN_CHANGED)

    def test_out_of_range_and_shape(self):
        self.assertEqual(trail_check([1, 2, 5, 3], 1, 4, 1, 4, {}).reason, OUT_OF_RANGE)
        self.assertEqual(trail_check([1, 2, 3], 1, 4, 1, 4, {}).reason, SHAPE_MISMATCH)


class GridCheckTests(SimpleTestCase):
    def test_magic_square(self):
        report = grid_check(MAGIC, 3, magic_constant=15, values="square")
        self.assertTrue(report.is_correct)
        self.assertEqual(report.cells, (True,) * 9)

    def test_magic_constant_implies_distinct_values(self):
        # every line of [5] * 9 sums to 15
        report = grid_check([5] * 9, 3, magic_constant=15)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.errors, ("All numbers 1 through 9 must appear exactly once",))
        self.assertEqual(report.cells, (False,) * 9)
        self.assertTrue(grid_check(MAGIC, 3, magic_constant=15).is_correct)

    def test_reflexive_against_own_solution(self):
        self.assertTrue(grid_check(MAGIC, 3, solution=MAGIC).is_correct)
        self.assertTrue(grid_check(LATIN, 3, solution=LATIN).is_correct)

    def test_single_out_of_range_cell_fails(self):
        for pos in range(9):
            grid = list(MAGIC)
            grid[pos] = 99
            self.assertFalse(grid_check(grid, 3, givens={4: 5} if pos != 4 else {}, magic_constant=15, values="square").is_correct)
            self.assertFalse(grid_check(grid, 3, solution=MAGIC).is_correct)

    def test_line_sum_messages(self):
        grid = [2, 7, 6, 9, 5, 1, 8, 3, 4]
        report = grid_check(grid, 3, magic_constant=15)
        self.assertFalse(report.is_correct)
        self.assertIn("Column 1 sums to 19, not 15", report.errors)
        self.assertIn("Main diagonal sums to 11, not 15", report.errors)

    def test_incomplete_grid(self):
        grid = list(MAGIC)
        grid[0] = None
        report = grid_check(grid, 3, magic_constant=15, values="square")
        self.assertIn("All cells must be filled", report.errors)
        self.assertFalse(report.cells[0])

    def test_given_fidelity(self):
        report = grid_check(MAGIC, 3, givens={4: 6}, magic_constant=15)
        self.assertFalse(report.is_correct)
        self.assertIn("Given at cell 4 should be 6", report.errors)

    def test_latin_and_inequalities(self):
        self.assertTrue(grid_check(LATIN, 3, values="latin", inequalities=[Inequality(0, "<", 1)]).is_correct)

        report = grid_check(LATIN, 3, values="latin", inequalities=[Inequality(0, ">", 1)])
        self.assertEqual(report.errors, ("Inequality constraint violated",))
        self.assertFalse(report.cells[0])
        self.assertFalse(report.cells[1])

        report = grid_check([1, 1, 3, 2, 3, 1, 3, 2, 2], 3, values="latin")
        self.assertIn("Row 1 is invalid", report.errors)

    def test_solution_dont_care_cells(self):
        solution = [1, 0, 3, 4]
        self.assertTrue(grid_check([1, None, 3, 4], 2, solution=solution).is_correct)
        self.assertTrue(grid_check([1, 9, 3, 4], 2, solution=solution).is_correct)
        report = grid_check([2, 0, 3, 4], 2, solution=solution)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.cells, (False, True, True, True))

    def test_shape_mismatch(self):
        report = grid_check(MAGIC[:8], 3, magic_constant=15)
        self.assertFalse(report.is_correct)
        self.assertEqual(report.cells, ())
