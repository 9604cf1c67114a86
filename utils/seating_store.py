"""Persistence for generated exam seating arrangements."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db, ExamSeating
from utils.seating_errors import RecordNotFound

logger = logging.getLogger(__name__)


class SeatingRecordStore:
    """create / get / list / delete. There is no update: regenerating makes a new record."""

    def __init__(self, session=None):
        self.session = session or db.session

    def create(self, exam_name, exam_date, classes, total_students, total_teachers,
               exam_halls, summary, options=None):
        """Persist one record in a single commit and return its id."""
        record = ExamSeating(
            exam_name=exam_name,
            exam_date=exam_date,
            classes=list(classes),
            total_students=total_students,
            total_teachers=total_teachers,
            exam_halls=exam_halls,
            summary=summary,
            options=options or {},
        )
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception('Could not store exam seating for %s', exam_name)
            raise
        return record.id

    def _get_model(self, record_id):
        record = self.session.get(ExamSeating, str(record_id))
        if record is None:
            raise RecordNotFound(record_id)
        return record

    def get(self, record_id):
        return self._get_model(record_id).to_dict()

    def list(self):
        records = (
            self.session.query(ExamSeating)
            .order_by(ExamSeating.created_at.desc(), ExamSeating.id)
            .all()
        )
        return [r.to_summary() for r in records]

    def delete(self, record_id):
        record = self._get_model(record_id)
        try:
            self.session.delete(record)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception('Could not delete exam seating %s', record_id)
            raise
        return True
