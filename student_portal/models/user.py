"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String

from student_portal.core.roles import Role
from student_portal.database import Base

__all__ = ["Role", "User"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(Role, values_callable=lambda roles: [role.value for role in roles]), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
