"""Student record model definitions."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String

from student_portal.database import Base

UNASSIGNED_COURSE = "Not Assigned"


class StudentRecord(Base):
    """Represents a student's profile on the roster."""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    course = Column(String, nullable=False, default=UNASSIGNED_COURSE)
    enrollment_date = Column(Date, nullable=False)
    owner_user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
