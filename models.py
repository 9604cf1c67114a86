"""Database models for the Exam Seating service."""
import uuid
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _new_record_id():
    return uuid.uuid4().hex


class Student(db.Model):
    """Student directory entry (read-only for seating)."""
    __tablename__ = 'students'
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(50), nullable=False, unique=True)
    name = db.Column(db.String(150), nullable=False)
    class_name = db.Column(db.String(50), nullable=False, index=True)  # e.g. 10, 12-Science
    section = db.Column(db.String(20))  # Optional, e.g. A
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_seating_ref(self):
        return {
            'name': self.name,
            'studentId': self.student_id,
            'class': self.class_name,
            'section': self.section or '',
        }


class Teacher(db.Model):
    """Teacher directory entry; active teachers form the supervisor pool."""
    __tablename__ = 'teachers'
    id = db.Column(db.Integer, primary_key=True)
    teacher_id = db.Column(db.String(50), nullable=False, unique=True)
    name = db.Column(db.String(150), nullable=False)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_supervisor_ref(self):
        return {'teacherId': self.teacher_id, 'name': self.name}


class ExamSeating(db.Model):
    """A generated seating arrangement. Immutable once stored; deleted by id."""
    __tablename__ = 'exam_seatings'
    id = db.Column(db.String(32), primary_key=True, default=_new_record_id)
    exam_name = db.Column(db.String(200), nullable=False)
    exam_date = db.Column(db.Date, nullable=False)
    classes = db.Column(db.JSON, nullable=False)
    total_students = db.Column(db.Integer, nullable=False)
    total_teachers = db.Column(db.Integer, nullable=False)
    exam_halls = db.Column(db.JSON, nullable=False)  # list of HallResult dicts
    options = db.Column(db.JSON)
    summary = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def to_summary(self):
        return {
            'id': self.id,
            'examName': self.exam_name,
            'examDate': self.exam_date.isoformat(),
            'classes': list(self.classes or []),
            'totalStudents': self.total_students,
            'totalTeachers': self.total_teachers,
            'totalHalls': len(self.exam_halls or []),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def to_dict(self):
        data = self.to_summary()
        data.update({
            'examHalls': list(self.exam_halls or []),
            'options': dict(self.options or {}),
            'summary': dict(self.summary or {}),
        })
        return data
