"""Exam seating generation: pre-flight validation, allocation, supervisors, persistence."""
import logging
from datetime import date, datetime

from utils.allocation_engine import (
    SeatingOptions,
    allocate_seats,
    count_same_class_neighbours,
    flatten_roster,
    usable_seats,
)
from utils.hall_registry import HallRegistry
from utils.seating_errors import (
    InsufficientCapacity,
    InsufficientTeachers,
    MissingExamMetadata,
    NoClassesSelected,
    NoHallsConfigured,
    NoStudentsFound,
    SeatingError,
)
from utils.supervisor import assign_supervisors

logger = logging.getLogger(__name__)

DATE_FORMATS = ('%Y-%m-%d', '%d-%m-%Y', '%d/%m/%Y')


def parse_exam_date(value):
    """Return a ``date`` for a date object or a string in one of DATE_FORMATS, else None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = str(value or '').strip()
    if not value:
        return None
    # ISO timestamps from browsers: keep the date part
    if len(value) > 10 and value[10] in 'T ':
        value = value[:10]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_classes(value):
    if isinstance(value, str):
        value = value.split(',')
    elif value is not None and not isinstance(value, (list, tuple)):
        raise SeatingError(f'classes must be a list of class names, got {value!r}')
    classes = []
    for c in value or []:
        c = str(c).strip()
        if c and c not in classes:
            classes.append(c)
    return classes


class ExamSeatingRequest:
    """Everything the caller supplies for one generation call.

    Student and teacher totals are not part of the request: they come from
    the roster sources at generation time. ``total_teachers`` may be given
    to override the available count.
    """

    def __init__(self, exam_name, exam_date, classes, halls, options=None, total_teachers=None):
        self.exam_name = (exam_name or '').strip()
        self.exam_date = exam_date
        self.classes = _parse_classes(classes)
        registry = halls if isinstance(halls, HallRegistry) else HallRegistry(halls)
        self.halls = registry.halls
        self.options = options or SeatingOptions()
        self.total_teachers = total_teachers

    @classmethod
    def from_dict(cls, data, default_min_distance=2):
        total_teachers = data.get('totalTeachers')
        if total_teachers is not None and total_teachers != '':
            try:
                total_teachers = int(total_teachers)
            except (TypeError, ValueError, OverflowError):
                raise SeatingError(f'totalTeachers must be a whole number, got {total_teachers!r}')
        else:
            total_teachers = None
        halls = data.get('examHalls') or []
        if not isinstance(halls, list):
            raise SeatingError('examHalls must be a list of halls')
        options = data.get('options')
        if options is not None and not isinstance(options, dict):
            raise SeatingError(f'options must be an object, got {options!r}')
        return cls(
            exam_name=str(data.get('examName') or ''),
            exam_date=data.get('examDate'),
            classes=data.get('classes') or [],
            halls=halls,
            options=SeatingOptions.from_dict(options, default_min_distance),
            total_teachers=total_teachers,
        )

    @property
    def total_capacity(self):
        return sum(h.capacity for h in self.halls)

    @property
    def usable_capacity(self):
        """Seats the allocator can actually fill (a hall's grid may be smaller than its capacity)."""
        return sum(usable_seats(h) for h in self.halls)


def validate_request(request, total_students, total_teachers):
    """Run the pre-flight checks in order; the first failure is raised. Returns the exam date."""
    exam_date = parse_exam_date(request.exam_date)
    if not request.exam_name or exam_date is None:
        raise MissingExamMetadata()
    if not request.classes:
        raise NoClassesSelected()
    if total_students <= 0:
        raise NoStudentsFound()
    if not request.halls:
        raise NoHallsConfigured()
    if total_teachers < len(request.halls):
        raise InsufficientTeachers(len(request.halls), total_teachers)
    if total_students > request.usable_capacity:
        raise InsufficientCapacity(total_students, request.usable_capacity)
    return exam_date


def build_summary(hall_results, total_students, total_capacity, min_distance):
    rate = (total_students / total_capacity) * 100 if total_capacity else 0
    return {
        'utilizationRate': f'{rate:.1f}%',
        'totalCapacity': total_capacity,
        'hallsUsed': sum(1 for h in hall_results if h.total_students),
        'sameClassNeighbours': sum(
            count_same_class_neighbours(h.seats, min_distance) for h in hall_results
        ),
    }


def generate_seating(request, roster_source, teacher_source, store=None, shuffle=None):
    """Generate (and, with a ``store``, persist) one seating arrangement.

    Returns the record dict. Any validation or allocation error is raised
    before anything is stored.
    """
    try:
        if request.classes:
            roster = roster_source.fetch_class_roster(request.classes)
        else:
            roster = {'totalStudents': 0, 'studentsByClass': {}}
        students_by_class = roster.get('studentsByClass') or {}
        tagged = flatten_roster(request.classes, students_by_class)
        total_students = len(tagged)

        if request.total_teachers is not None:
            total_teachers = request.total_teachers
        else:
            total_teachers = teacher_source.available_teacher_count()

        exam_date = validate_request(request, total_students, total_teachers)

        hall_results = allocate_seats(tagged, request.halls, request.options, shuffle=shuffle)
        pool = teacher_source.available_teachers()[:total_teachers]
        assign_supervisors(hall_results, pool)
    except SeatingError as e:
        logger.warning('Exam seating rejected for %r: [%s] %s', request.exam_name, e.code, e)
        raise

    exam_halls = [h.to_dict() for h in hall_results]
    summary = build_summary(hall_results, total_students, request.total_capacity,
                            request.options.min_distance)
    record = {
        'id': None,
        'examName': request.exam_name,
        'examDate': exam_date.isoformat(),
        'classes': list(request.classes),
        'totalStudents': total_students,
        'totalTeachers': total_teachers,
        'totalHalls': len(exam_halls),
        'examHalls': exam_halls,
        'options': request.options.to_dict(),
        'summary': summary,
        'createdAt': None,
    }
    if store is None:
        return record

    record_id = store.create(
        exam_name=request.exam_name,
        exam_date=exam_date,
        classes=request.classes,
        total_students=total_students,
        total_teachers=total_teachers,
        exam_halls=exam_halls,
        summary=summary,
        options=request.options.to_dict(),
    )
    logger.info('Exam seating %s generated: %d students in %d halls',
                record_id, total_students, len(exam_halls))
    return store.get(record_id)
