"""Demo roster loaded into an empty database."""

import logging
from datetime import date

from sqlalchemy.orm import Session

from student_portal.auth.passwords import hash_password
from student_portal.models.student import StudentRecord
from student_portal.models.user import Role
from student_portal.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("Admin User", "admin@example.com", Role.ADMIN),
    ("John Student", "john@example.com", Role.STUDENT),
]

DEMO_STUDENTS = [
    ("John Student", "john@example.com", "MERN Bootcamp", date(2024, 1, 15)),
    ("Jane Smith", "jane@example.com", "Full Stack Development", date(2024, 1, 20)),
    ("Bob Johnson", "bob@example.com", "React Masterclass", date(2024, 1, 25)),
]


def seed_demo_data(db: Session, password: str) -> bool:
    users = UserRepository(db)
    if users.count():
        return False

    hashed = hash_password(password)
    owners = {}
    for name, email, role in DEMO_USERS:
        user = users.create(name=name, email=email, hashed_password=hashed, role=role)
        owners[email] = user.id

    for name, email, course, enrolled in DEMO_STUDENTS:
        db.add(
            StudentRecord(
                name=name,
                email=email,
                course=course,
                enrollment_date=enrolled,
                owner_user_id=owners.get(email),
            )
        )
    db.commit()
    logger.info("Seeded %d demo users and %d student records", len(DEMO_USERS), len(DEMO_STUDENTS))
    return True
