"""Persistence for the student roster.

Routes and services depend on :class:`StudentRepository` only; the session
it wraps decides where records actually live.
"""

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from student_portal.models.student import StudentRecord

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "course", "enrollment_date")


class StudentNotFoundError(LookupError):
    """Raised when no student record matches the requested key."""


@dataclass(frozen=True)
class RosterStats:
    total_students: int
    active_courses: int
    new_this_month: int


class StudentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self, search: str | None = None) -> list[StudentRecord]:
        query = self.db.query(StudentRecord)
        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            query = query.filter(
                or_(
                    func.lower(StudentRecord.name).like(pattern),
                    func.lower(StudentRecord.email).like(pattern),
                    func.lower(StudentRecord.course).like(pattern),
                )
            )
        return query.order_by(StudentRecord.id).all()

    def get(self, owner_user_id: int) -> StudentRecord:
        record = (
            self.db.query(StudentRecord)
            .filter(StudentRecord.owner_user_id == owner_user_id)
            .order_by(StudentRecord.id)
            .first()
        )
        if record is None:
            raise StudentNotFoundError(f"No student record owned by user {owner_user_id}")
        return record

    def get_by_id(self, student_id: int) -> StudentRecord:
        record = self.db.get(StudentRecord, student_id)
        if record is None:
            raise StudentNotFoundError(f"No student record with id {student_id}")
        return record

    def create(self, data: dict) -> StudentRecord:
        record = StudentRecord(**data)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Created student record %s", record.id)
        return record

    def update(self, student_id: int, changes: dict) -> StudentRecord:
        record = self.get_by_id(student_id)
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                raise ValueError(f"Field {field!r} cannot be updated")
            setattr(record, field, value)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Updated student record %s (%s)", record.id, ", ".join(sorted(changes)) or "no changes")
        return record

    def delete(self, student_id: int) -> None:
        record = self.get_by_id(student_id)
        self.db.delete(record)
        self.db.commit()
        logger.info("Deleted student record %s", student_id)

    def stats(self, today: date) -> RosterStats:
        records = self.list()
        return RosterStats(
            total_students=len(records),
            active_courses=len({record.course for record in records}),
            new_this_month=sum(
                1
                for record in records
                if record.enrollment_date.year == today.year
                and record.enrollment_date.month == today.month
            ),
        )
