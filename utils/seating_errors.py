"""Errors raised while registering halls, generating and storing seating arrangements."""


class SeatingError(ValueError):
    """Base class. ``code`` is the machine-readable kind sent to API clients."""
    code = 'SEATING_ERROR'
    status_code = 400


class MissingExamMetadata(SeatingError):
    code = 'MISSING_EXAM_METADATA'

    def __init__(self, message='Please enter exam name and date'):
        super().__init__(message)


class NoClassesSelected(SeatingError):
    code = 'NO_CLASSES_SELECTED'

    def __init__(self, message='Please select at least one class'):
        super().__init__(message)


class NoStudentsFound(SeatingError):
    code = 'NO_STUDENTS_FOUND'

    def __init__(self, message='No students found for selected classes'):
        super().__init__(message)


class NoHallsConfigured(SeatingError):
    code = 'NO_HALLS_CONFIGURED'

    def __init__(self, message='Please add at least one exam hall'):
        super().__init__(message)


class InsufficientTeachers(SeatingError):
    code = 'INSUFFICIENT_TEACHERS'

    def __init__(self, required, available):
        self.required = required
        self.available = available
        super().__init__(f'Not enough teachers: need {required}, have {available}')


class InsufficientCapacity(SeatingError):
    code = 'INSUFFICIENT_CAPACITY'

    def __init__(self, students, capacity):
        self.students = students
        self.capacity = capacity
        super().__init__(f'Total students ({students}) exceed total hall capacity ({capacity})')


class CapacityExceeded(SeatingError):
    """Raised by the allocator itself when handed more students than seats."""
    code = 'CAPACITY_EXCEEDED'

    def __init__(self, students, capacity):
        self.students = students
        self.capacity = capacity
        super().__init__(
            f'Cannot seat {students} students in halls with {capacity} seats; nothing was allocated'
        )


class DuplicateHallName(SeatingError):
    code = 'DUPLICATE_HALL_NAME'

    def __init__(self, hall_name):
        self.hall_name = hall_name
        super().__init__(f'Hall name already exists: {hall_name}')


class InvalidHallGeometry(SeatingError):
    code = 'INVALID_HALL_GEOMETRY'


class InvalidHallFile(SeatingError):
    code = 'INVALID_HALL_FILE'


class RecordNotFound(SeatingError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f'Exam seating arrangement not found: {record_id}')
