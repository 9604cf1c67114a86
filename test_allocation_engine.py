"""
Tests for the seat allocation engine.

Covers:
1. Class interleaving (round-robin) and class-by-class order
2. Hall saturation: fill each hall before the next, last hall takes the rest
3. Grid placement: seat number -> (row, column), unique seats inside the grid
4. Randomised placement through an injected shuffle
5. Capacity overflow is rejected, never truncated
"""

import unittest

from utils.allocation_engine import (
    SeatingOptions,
    allocate_seats,
    count_same_class_neighbours,
    flatten_roster,
    interleave_by_class,
    place_in_hall,
    seat_position,
)
from utils.hall_registry import Hall
from utils.seating_errors import CapacityExceeded


def make_students(class_name, count):
    return [
        {'name': f'{class_name} Student {i}', 'studentId': f'{class_name}-{i:03d}', 'class': class_name, 'section': 'A'}
        for i in range(1, count + 1)
    ]


def two_class_roster(first=20, second=15):
    students_by_class = {'10': make_students('10', first), '9': make_students('9', second)}
    return flatten_roster(['10', '9'], students_by_class)


class TestInterleaving(unittest.TestCase):

    def test_round_robin_across_classes(self):
        tagged = flatten_roster(['A', 'B', 'C'], {
            'A': make_students('A', 3),
            'B': make_students('B', 2),
            'C': make_students('C', 1),
        })
        order = [student['studentId'] for _, student in interleave_by_class(tagged)]
        self.assertEqual(order, ['A-001', 'B-001', 'C-001', 'A-002', 'B-002', 'A-003'])

    def test_interleave_keeps_every_student_once(self):
        tagged = two_class_roster(7, 3)
        result = interleave_by_class(tagged)
        self.assertEqual(sorted(s['studentId'] for _, s in result), sorted(s['studentId'] for _, s in tagged))

    def test_flatten_skips_classes_missing_from_roster(self):
        tagged = flatten_roster(['A', 'Z'], {'A': make_students('A', 2)})
        self.assertEqual([c for c, _ in tagged], ['A', 'A'])


class TestSeatPosition(unittest.TestCase):

    def test_row_major_mapping(self):
        self.assertEqual(seat_position(1, 4), (1, 1))
        self.assertEqual(seat_position(4, 4), (1, 4))
        self.assertEqual(seat_position(5, 4), (2, 1))
        self.assertEqual(seat_position(20, 4), (5, 4))

    def test_place_in_hall_numbers_sequentially(self):
        hall = Hall('Hall A', 6, rows=2)
        seats = place_in_hall(hall, flatten_roster(['A'], {'A': make_students('A', 5)}))
        self.assertEqual([s.seat_number for s in seats], [1, 2, 3, 4, 5])
        self.assertEqual([(s.row, s.column) for s in seats], [(1, 1), (1, 2), (1, 3), (2, 1), (2, 2)])


class TestAllocateSeats(unittest.TestCase):

    def setUp(self):
        self.halls = [Hall('Hall A', 20, rows=5), Hall('Hall B', 20, rows=5)]
        self.options = SeatingOptions(shuffle_same_class=True, randomize_seats=False)

    def test_two_classes_two_halls(self):
        results = allocate_seats(two_class_roster(), self.halls, self.options)
        self.assertEqual([r.total_students for r in results], [20, 15])
        self.assertEqual(self.halls[0].columns, 4)

        first_hall_classes = [s.class_name for s in results[0].seats]
        self.assertEqual(first_hall_classes.count('10'), 10)
        self.assertEqual(first_hall_classes.count('9'), 10)
        # Interleaved: no two consecutive seats from the same class in hall A
        for a, b in zip(first_hall_classes, first_hall_classes[1:]):
            self.assertNotEqual(a, b)
        # Leftover class-10 students end up at the back of hall B
        self.assertEqual([s.class_name for s in results[1].seats][-5:], ['10'] * 5)

    def test_conservation_and_capacity(self):
        tagged = two_class_roster(23, 11)
        results = allocate_seats(tagged, self.halls, self.options)
        self.assertEqual(sum(r.total_students for r in results), len(tagged))
        placed = [s.student['studentId'] for r in results for s in r.seats]
        self.assertEqual(len(placed), len(set(placed)))
        for r in results:
            self.assertLessEqual(r.total_students, r.hall.capacity)

    def test_seats_unique_and_inside_grid(self):
        halls = [Hall('Odd', 17, rows=3), Hall('Wide', 12, rows=2, columns=8)]
        options = SeatingOptions(randomize_seats=True)
        results = allocate_seats(two_class_roster(14, 12), halls, options)
        for r in results:
            positions = [(s.row, s.column) for s in r.seats]
            self.assertEqual(len(positions), len(set(positions)))
            for row, column in positions:
                self.assertTrue(1 <= row <= r.hall.rows)
                self.assertTrue(1 <= column <= r.hall.columns)

    def test_deterministic_without_randomize(self):
        first = allocate_seats(two_class_roster(), self.halls, self.options)
        second = allocate_seats(two_class_roster(), self.halls, self.options)
        self.assertEqual([r.to_dict() for r in first], [r.to_dict() for r in second])

    def test_class_by_class_when_not_interleaving(self):
        options = SeatingOptions(shuffle_same_class=False)
        results = allocate_seats(two_class_roster(), self.halls, options)
        self.assertEqual({s.class_name for s in results[0].seats}, {'10'})
        self.assertEqual({s.class_name for s in results[1].seats}, {'9'})
        self.assertEqual(results[0].seats[0].student['studentId'], '10-001')

    def test_randomize_uses_injected_shuffle(self):
        options = SeatingOptions(shuffle_same_class=True, randomize_seats=True)
        results = allocate_seats(two_class_roster(), self.halls, options, shuffle=lambda seq: seq.reverse())
        first = results[0].seats[0]
        self.assertEqual(first.seat_number, 1)
        self.assertEqual(first.student['studentId'], '9-010')
        self.assertEqual((first.row, first.column), (1, 1))

    def test_shuffle_ignored_when_randomize_off(self):
        calls = []
        allocate_seats(two_class_roster(), self.halls, self.options, shuffle=calls.append)
        self.assertEqual(calls, [])

    def test_unused_hall_gets_empty_result(self):
        halls = self.halls + [Hall('Hall C', 10, rows=2)]
        results = allocate_seats(two_class_roster(), halls, self.options)
        self.assertEqual(results[2].total_students, 0)
        self.assertEqual(results[2].to_dict()['students'], [])

    def test_capacity_exceeded_is_rejected(self):
        with self.assertRaises(CapacityExceeded) as ctx:
            allocate_seats(two_class_roster(30, 20), self.halls, self.options)
        self.assertEqual(ctx.exception.students, 50)
        self.assertEqual(ctx.exception.capacity, 40)

    def test_grid_smaller_than_capacity_limits_seats(self):
        halls = [Hall('Tight', 30, rows=5, columns=4)]
        with self.assertRaises(CapacityExceeded):
            allocate_seats(two_class_roster(15, 10), halls, self.options)

    def test_hall_result_dict_shape(self):
        results = allocate_seats(two_class_roster(2, 1), [Hall('Hall A', 4, rows=2)], self.options)
        data = results[0].to_dict()
        self.assertEqual(data['hallName'], 'Hall A')
        self.assertEqual(data['totalStudents'], 3)
        self.assertIsNone(data['supervisor'])
        seat = data['students'][0]
        self.assertEqual(seat['studentId'], '10-001')
        self.assertEqual((seat['seatNumber'], seat['row'], seat['column']), (1, 1, 1))


class TestSameClassNeighbours(unittest.TestCase):

    def test_min_distance_one_reports_nothing(self):
        hall = Hall('Hall A', 3, rows=1)
        seats = place_in_hall(hall, flatten_roster(['A'], {'A': make_students('A', 3)}))
        self.assertEqual(count_same_class_neighbours(seats, 1), 0)

    def test_adjacent_same_class_pairs(self):
        hall = Hall('Hall A', 3, rows=1)
        seats = place_in_hall(hall, flatten_roster(['A'], {'A': make_students('A', 3)}))
        self.assertEqual(count_same_class_neighbours(seats, 2), 2)
        self.assertEqual(count_same_class_neighbours(seats, 3), 3)

    def test_interleaved_row_has_no_adjacent_pairs(self):
        hall = Hall('Hall A', 4, rows=1)
        tagged = interleave_by_class(two_class_roster(2, 2))
        seats = place_in_hall(hall, tagged)
        self.assertEqual(count_same_class_neighbours(seats, 2), 0)


class TestSeatingOptions(unittest.TestCase):

    def test_min_distance_at_least_one(self):
        self.assertEqual(SeatingOptions(min_distance=0).min_distance, 1)
        self.assertEqual(SeatingOptions(min_distance='x').min_distance, 1)

    def test_from_dict_defaults(self):
        options = SeatingOptions.from_dict(None, default_min_distance=3)
        self.assertTrue(options.shuffle_same_class)
        self.assertFalse(options.randomize_seats)
        self.assertEqual(options.min_distance, 3)
        self.assertEqual(options.to_dict()['minDistanceBetweenSameClass'], 3)


if __name__ == '__main__':
    unittest.main()
