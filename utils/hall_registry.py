"""Exam halls for a single seating request."""
from math import ceil, sqrt

from utils.seating_errors import DuplicateHallName, InvalidHallGeometry


def _to_int(value, field):
    if value is None or value == '':
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InvalidHallGeometry(f'Hall {field} must be a whole number, got {value!r}')


def default_columns(capacity, rows):
    """Columns needed to hold ``capacity`` seats in ``rows`` rows (at least 1)."""
    return max(1, ceil(capacity / max(1, rows)))


class Hall:
    """An exam room: a capacity laid out on a rows x columns grid.

    ``columns`` is derived as ceil(capacity / rows) when omitted or
    non-positive, and ``rows`` as ceil(sqrt(capacity)) when omitted. The grid
    may hold more slots than the capacity; the spare slots stay empty.
    """

    def __init__(self, hall_name, capacity, rows=None, columns=None):
        if capacity is None or capacity <= 0:
            raise InvalidHallGeometry(f'Hall {hall_name}: capacity must be greater than zero')
        if rows is not None and rows <= 0:
            raise InvalidHallGeometry(f'Hall {hall_name}: rows must be greater than zero')
        self.hall_name = hall_name
        self.capacity = capacity
        if rows is None:
            rows = ceil(sqrt(capacity))
        self.rows = max(1, rows)
        if columns is None or columns <= 0:
            columns = default_columns(capacity, self.rows)
        self.columns = max(1, columns)

    @property
    def seat_slots(self):
        return self.rows * self.columns

    @classmethod
    def from_dict(cls, data):
        """Build a validated hall from a request payload (camelCase or snake_case keys)."""
        if not isinstance(data, dict):
            raise InvalidHallGeometry(f"Hall entries must be objects, got {data!r}")
        name = str(data.get('hallName') or data.get('hall_name') or '').strip()
        if not name:
            raise InvalidHallGeometry('Please enter a valid hall name, capacity, and number of rows')
        capacity = _to_int(data.get('capacity'), 'capacity')
        rows = _to_int(data.get('rows'), 'rows')
        columns = _to_int(data.get('columns'), 'columns')
        return cls(name, capacity, rows, columns)

    def to_dict(self):
        return {
            'hallName': self.hall_name,
            'capacity': self.capacity,
            'rows': self.rows,
            'columns': self.columns,
        }

    def __repr__(self):
        return f"Hall({self.hall_name}, {self.capacity} seats, {self.rows}x{self.columns})"


class HallRegistry:
    """Ordered, name-unique list of halls being prepared for one generation call."""

    def __init__(self, halls=None):
        self._halls = []
        for h in halls or []:
            self.add(h)

    def add(self, hall):
        """Register a ``Hall`` or a hall payload dict. Returns the registered hall."""
        if not isinstance(hall, Hall):
            hall = Hall.from_dict(hall)
        if any(h.hall_name == hall.hall_name for h in self._halls):
            raise DuplicateHallName(hall.hall_name)
        self._halls.append(hall)
        return hall

    def add_hall(self, hall_name, capacity, rows=None, columns=None):
        return self.add({'hallName': hall_name, 'capacity': capacity, 'rows': rows, 'columns': columns})

    def remove(self, index):
        """Remove and return the hall at ``index``."""
        return self._halls.pop(index)

    @property
    def halls(self):
        return list(self._halls)

    @property
    def total_capacity(self):
        return sum(h.capacity for h in self._halls)

    def to_list(self):
        return [h.to_dict() for h in self._halls]

    def __len__(self):
        return len(self._halls)

    def __iter__(self):
        return iter(list(self._halls))
