"""Tests for rebuilding the seat grid of a stored hall."""

import unittest

from utils.seating_grid import build_seating_grid, grid_shape


def seat(n, row=None, column=None):
    entry = {'name': f'S{n}', 'studentId': f'ID{n}', 'seatNumber': n}
    if row is not None:
        entry['row'] = row
    if column is not None:
        entry['column'] = column
    return entry


class TestGridShape(unittest.TestCase):

    def test_uses_stored_shape(self):
        self.assertEqual(grid_shape({'capacity': 20, 'rows': 5, 'columns': 4}), (5, 4))

    def test_derives_missing_values(self):
        self.assertEqual(grid_shape({'capacity': 30, 'rows': 6}), (6, 5))
        self.assertEqual(grid_shape({'capacity': 30}), (6, 5))
        self.assertEqual(grid_shape({'totalStudents': 7, 'rows': 0}), (3, 3))
        self.assertEqual(grid_shape({}), (1, 1))


class TestBuildSeatingGrid(unittest.TestCase):

    def test_places_by_row_and_column(self):
        hall = {'capacity': 4, 'rows': 2, 'columns': 2,
                'students': [seat(1, 1, 1), seat(2, 1, 2), seat(3, 2, 1)]}
        grid = build_seating_grid(hall)
        self.assertEqual(grid[0][0]['name'], 'S1')
        self.assertEqual(grid[0][1]['name'], 'S2')
        self.assertEqual(grid[1][0]['name'], 'S3')
        self.assertIsNone(grid[1][1])

    def test_missing_positions_fill_first_empty_cell(self):
        hall = {'capacity': 4, 'rows': 2, 'columns': 2,
                'students': [seat(1, 1, 1), seat(2), seat(3, 9, 9)]}
        grid = build_seating_grid(hall)
        self.assertEqual(grid[0][1]['name'], 'S2')
        self.assertEqual(grid[0][1]['row'], 1)
        self.assertEqual(grid[0][1]['column'], 2)
        self.assertEqual(grid[1][0]['name'], 'S3')

    def test_conflicting_position_moves_to_free_cell(self):
        hall = {'capacity': 2, 'rows': 1, 'columns': 2, 'students': [seat(1, 1, 1), seat(2, 1, 1)]}
        grid = build_seating_grid(hall)
        self.assertEqual([c['name'] for c in grid[0]], ['S1', 'S2'])

    def test_empty_hall(self):
        grid = build_seating_grid({'capacity': 6, 'rows': 2, 'columns': 3, 'students': []})
        self.assertEqual(grid, [[None, None, None], [None, None, None]])


if __name__ == '__main__':
    unittest.main()
