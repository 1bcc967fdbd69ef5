from sqlalchemy.orm import Session

from student_portal.models.user import Role, User


class UserRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def count(self) -> int:
        return self.db.query(User).count()

    def create(self, *, name: str, email: str, hashed_password: str, role: Role) -> User:
        user = User(name=name, email=email, hashed_password=hashed_password, role=role)
        self.db.add(user)
        self.db.flush()
        return user
