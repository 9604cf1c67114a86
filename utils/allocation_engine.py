"""Seat allocation engine - class interleaving, hall saturation, and grid placement."""
import logging
import random
from math import ceil

from utils.seating_errors import CapacityExceeded

logger = logging.getLogger(__name__)


class SeatingOptions:
    """Generation switches collected with the request.

    ``min_distance`` is advisory: placement never enforces it, it is only
    used to report same-class neighbours after the fact.
    """

    def __init__(self, shuffle_same_class=True, min_distance=2, randomize_seats=False):
        self.shuffle_same_class = bool(shuffle_same_class)
        self.randomize_seats = bool(randomize_seats)
        try:
            min_distance = int(min_distance)
        except (TypeError, ValueError, OverflowError):
            min_distance = 1
        self.min_distance = max(1, min_distance)

    @classmethod
    def from_dict(cls, data, default_min_distance=2):
        data = data or {}
        return cls(
            shuffle_same_class=data.get('shuffleSameClass', True),
            min_distance=data.get('minDistanceBetweenSameClass', default_min_distance),
            randomize_seats=data.get('randomizeSeats', False),
        )

    def to_dict(self):
        return {
            'shuffleSameClass': self.shuffle_same_class,
            'minDistanceBetweenSameClass': self.min_distance,
            'randomizeSeats': self.randomize_seats,
        }


class StudentSeat:
    """One student in one (row, column) slot. ``student`` is passed through untouched."""

    def __init__(self, student, class_name, seat_number, row, column):
        self.student = student
        self.class_name = class_name
        self.seat_number = seat_number
        self.row = row
        self.column = column

    def to_dict(self):
        entry = dict(self.student)
        entry.update({'seatNumber': self.seat_number, 'row': self.row, 'column': self.column})
        return entry

    def __repr__(self):
        return f"StudentSeat({self.seat_number}, r{self.row}c{self.column}, {self.class_name})"


class HallResult:
    def __init__(self, hall, seats, supervisor=None):
        self.hall = hall
        self.seats = seats
        self.supervisor = supervisor

    @property
    def total_students(self):
        return len(self.seats)

    def to_dict(self):
        data = self.hall.to_dict()
        data.update({
            'totalStudents': self.total_students,
            'students': [s.to_dict() for s in self.seats],
            'supervisor': self.supervisor,
        })
        return data


def flatten_roster(classes, students_by_class):
    """Tag every student with its class: [(class_name, student), ...] in class order."""
    tagged = []
    for class_name in classes:
        for student in students_by_class.get(class_name, []):
            tagged.append((class_name, student))
    return tagged


def group_by_class(tagged_students):
    """Split tagged students into per-class lists, classes in first-seen order."""
    groups = {}
    for class_name, student in tagged_students:
        groups.setdefault(class_name, []).append((class_name, student))
    return list(groups.values())


def interleave_by_class(tagged_students):
    """Round-robin across class groups: A1, B1, C1, A2, B2, C2, ...

    Consecutive entries only share a class once the other groups run out.
    """
    groups = group_by_class(tagged_students)
    result = []
    depth = 0
    while True:
        layer = [g[depth] for g in groups if depth < len(g)]
        if not layer:
            break
        result.extend(layer)
        depth += 1
    return result


def seat_position(seat_number, columns):
    """1-based seat number -> 1-based (row, column), filling row by row."""
    return ceil(seat_number / columns), ((seat_number - 1) % columns) + 1


def usable_seats(hall):
    """Seats the allocator may fill: the capacity, bounded by the grid size."""
    return min(hall.capacity, hall.rows * hall.columns)


def place_in_hall(hall, tagged_students, permute=None):
    """Number the hall's students 1..n and map each seat number onto the grid.

    ``permute`` (e.g. random.shuffle) reorders a copy of the students in
    place before numbering.
    """
    order = list(tagged_students)
    if permute is not None:
        permute(order)
    seats = []
    for seat_number, (class_name, student) in enumerate(order, start=1):
        row, column = seat_position(seat_number, hall.columns)
        seats.append(StudentSeat(student, class_name, seat_number, row, column))
    return seats


def allocate_seats(tagged_students, halls, options=None, shuffle=None):
    """
    Allocate students to halls:

    1. Interleaving: with ``shuffle_same_class`` the students are taken
       round-robin across classes; otherwise class by class in roster order.
    2. Saturation: fill each hall (in the given order) up to its capacity
       before moving to the next; the last used hall takes the remainder.
    3. Placement: seat numbers 1..n per hall, row = ceil(n / columns),
       column = ((n - 1) mod columns) + 1. With ``randomize_seats`` the
       hall's students are permuted first using ``shuffle`` (default
       random.shuffle).

    tagged_students: [(class_name, student_dict), ...]
    halls: [Hall, ...]
    Returns: [HallResult, ...], one per hall, supervisors unset.
    Raises CapacityExceeded (and places nobody) when the halls cannot take
    every student.
    """
    options = options or SeatingOptions()
    tagged_students = list(tagged_students)
    total = len(tagged_students)
    capacity = sum(usable_seats(h) for h in halls)
    if total > capacity:
        raise CapacityExceeded(total, capacity)

    if options.shuffle_same_class:
        order = interleave_by_class(tagged_students)
    else:
        order = [entry for group in group_by_class(tagged_students) for entry in group]

    permute = (shuffle or random.shuffle) if options.randomize_seats else None

    results = []
    cursor = 0
    for hall in halls:
        take = min(usable_seats(hall), total - cursor)
        subset = order[cursor:cursor + take]
        cursor += take
        results.append(HallResult(hall, place_in_hall(hall, subset, permute)))

    logger.debug('Allocated %d students across %d halls', total, len(halls))
    return results


def count_same_class_neighbours(seats, min_distance):
    """Same-class seat pairs closer than ``min_distance`` (Chebyshev distance on the grid)."""
    reach = min_distance - 1
    if reach < 1:
        return 0
    by_position = {(s.row, s.column): s.class_name for s in seats}
    pairs = 0
    for (row, column), class_name in by_position.items():
        for dr in range(0, reach + 1):
            for dc in range(-reach, reach + 1):
                if dr == 0 and dc <= 0:
                    continue
                if by_position.get((row + dr, column + dc)) == class_name:
                    pairs += 1
    return pairs
