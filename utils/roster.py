"""Student and teacher directories the seating generator reads from."""
from models import Student, Teacher


class RosterSource:
    """Student directory interface."""

    def list_classes(self):
        raise NotImplementedError

    def fetch_class_roster(self, class_names):
        """Return {'totalStudents': int, 'studentsByClass': {class: [student, ...]}}."""
        raise NotImplementedError


class TeacherSource:
    """Teacher directory interface."""

    def available_teachers(self):
        """Ordered teacher identifiers that may supervise a hall."""
        raise NotImplementedError

    def available_teacher_count(self):
        return len(self.available_teachers())


class DatabaseRosterSource(RosterSource):
    """Reads active students from the ``students`` table."""

    def list_classes(self):
        rows = (
            Student.query.with_entities(Student.class_name)
            .filter(Student.is_active.is_(True))
            .distinct()
            .all()
        )
        return sorted(r[0] for r in rows)

    def fetch_class_roster(self, class_names):
        class_names = list(class_names)
        students_by_class = {c: [] for c in class_names}
        if class_names:
            students = (
                Student.query
                .filter(Student.class_name.in_(class_names), Student.is_active.is_(True))
                .order_by(Student.class_name, Student.section, Student.student_id)
                .all()
            )
            for s in students:
                students_by_class[s.class_name].append(s.to_seating_ref())
        return {
            'totalStudents': sum(len(v) for v in students_by_class.values()),
            'studentsByClass': students_by_class,
        }


class DatabaseTeacherSource(TeacherSource):
    """Active teachers from the ``teachers`` table.

    Names are not unique, so each supervisor is identified by
    ``{'teacherId', 'name'}``.
    """

    def available_teachers(self):
        teachers = (
            Teacher.query.filter(Teacher.is_active.is_(True))
            .order_by(Teacher.name, Teacher.teacher_id)
            .all()
        )
        return [t.to_supervisor_ref() for t in teachers]

    def available_teacher_count(self):
        return Teacher.query.filter(Teacher.is_active.is_(True)).count()
