import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# An empty sqlite URL is an in-memory database that resets on restart.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:5173"])

# The demo admin has a published password, so seeding defaults on in development only.
SEED_DEMO_DATA = _get_bool(os.getenv("SEED_DEMO_DATA"), default=APP_ENV.lower() == "development")
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "password123")

PORTAL_API_URL = os.getenv("PORTAL_API_URL", "http://localhost:8000")
PORTAL_TOKEN_FILE = os.getenv(
    "PORTAL_TOKEN_FILE",
    os.path.join(os.path.expanduser("~"), ".student_portal", "storage.json"),
)


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if APP_ENV.lower() == "production" and SEED_DEMO_DATA:
        raise RuntimeError("SEED_DEMO_DATA must be off in production.")
