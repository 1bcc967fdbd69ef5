"""Create a portal user from the command line.

Usage:
    python -m student_portal.create_user NAME EMAIL PASSWORD [--role admin|student]
"""
import argparse
import sys

from pydantic import ValidationError

from student_portal.database import SessionLocal, ensure_schema
from student_portal.models.user import Role
from student_portal.routes.auth_routes import SignupRequest
from student_portal.services import auth_service


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a student portal user.")
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--role", choices=[role.value for role in Role], default=Role.STUDENT.value)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        request = SignupRequest(name=args.name, email=args.email, password=args.password, role=args.role)
    except ValidationError as exc:
        for error in exc.errors():
            print(f"{error['loc'][0]}: {error['msg']}", file=sys.stderr)
        return 2

    ensure_schema()
    db = SessionLocal()
    try:
        user = auth_service.register(
            db,
            name=request.name,
            email=request.email,
            password=request.password,
            role=request.role,
        )
    except auth_service.DuplicateUserError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created {user.role.value} user {user.email} (id {user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
