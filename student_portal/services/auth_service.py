import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from student_portal.auth.passwords import hash_password, verify_password
from student_portal.models.student import UNASSIGNED_COURSE, StudentRecord
from student_portal.models.user import Role, User
from student_portal.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Raised when an email/password pair does not match a user."""


class DuplicateUserError(Exception):
    """Raised when signing up with an email that is already registered."""


def authenticate(db: Session, email: str, password: str) -> User:
    user = UserRepository(db).get_by_email(email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt for %s", email)
        raise InvalidCredentialsError("Invalid credentials")
    logger.info("User %s logged in", user.id)
    return user


def register(db: Session, *, name: str, email: str, password: str, role: Role) -> User:
    """Create a user and, for students, the matching roster record.

    Both rows are committed together; nothing is written when the email is
    already taken.
    """
    users = UserRepository(db)
    if users.get_by_email(email) is not None:
        raise DuplicateUserError("User already exists")

    try:
        user = users.create(name=name, email=email, hashed_password=hash_password(password), role=role)
        if role is Role.STUDENT:
            db.add(
                StudentRecord(
                    name=name,
                    email=email,
                    course=UNASSIGNED_COURSE,
                    enrollment_date=date.today(),
                    owner_user_id=user.id,
                )
            )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateUserError("User already exists") from exc

    db.refresh(user)
    logger.info("Registered %s user %s", role.value, user.id)
    return user
