"""Rebuild a hall's rows x columns seat grid from a stored hall result."""
from math import ceil, sqrt


def _positive_int(value):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return 0
    return value if value > 0 else 0


def grid_shape(hall):
    """(rows, columns) for a hall dict, deriving whatever is missing."""
    size = _positive_int(hall.get('capacity')) or _positive_int(hall.get('totalStudents')) or 1
    rows = _positive_int(hall.get('rows')) or max(1, ceil(sqrt(size)))
    columns = _positive_int(hall.get('columns')) or max(1, ceil(size / rows))
    return rows, columns


def build_seating_grid(hall):
    """Return ``grid[row][column]`` (0-based lists) holding student dicts or None.

    Students are placed by their stored row/column. A student without a
    usable position, or whose cell is already taken, goes into the first
    empty cell in row-major order; one that still does not fit is dropped
    from the grid (it stays in the student list).
    """
    rows, columns = grid_shape(hall)
    grid = [[None] * columns for _ in range(rows)]
    unplaced = []
    for student in hall.get('students') or []:
        r = _positive_int(student.get('row')) - 1
        c = _positive_int(student.get('column')) - 1
        if 0 <= r < rows and 0 <= c < columns and grid[r][c] is None:
            grid[r][c] = student
        else:
            unplaced.append(student)

    if unplaced:
        empty = ((r, c) for r in range(rows) for c in range(columns) if grid[r][c] is None)
        for student, (r, c) in zip(unplaced, empty):
            grid[r][c] = dict(student, row=r + 1, column=c + 1)
    return grid
