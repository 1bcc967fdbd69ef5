import enum


class Role(str, enum.Enum):
    """Closed set of portal roles."""

    ADMIN = "admin"
    STUDENT = "student"
