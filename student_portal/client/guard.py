from dataclasses import dataclass

from student_portal.core.roles import Role

LOGIN_PATH = '/login'
SIGNUP_PATH = '/signup'
ADMIN_PATH = '/admin'
STUDENT_PATH = '/student'

PUBLIC_PATHS = frozenset({LOGIN_PATH, SIGNUP_PATH})
PROTECTED_PATHS = {
    ADMIN_PATH: Role.ADMIN,
    STUDENT_PATH: Role.STUDENT,
}


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    redirect_to: str | None = None


def home_path_for(role: Role) -> str:
    role = Role(role)
    if role is Role.ADMIN:
        return ADMIN_PATH
    if role is Role.STUDENT:
        return STUDENT_PATH
    raise ValueError(f'Unknown role: {role!r}')


def check_access(required_role: Role, user) -> GuardDecision:
    """Decide whether ``user`` may see a view restricted to ``required_role``."""
    if user is None:
        return GuardDecision(allowed=False, redirect_to=LOGIN_PATH)
    if Role(user.role) != Role(required_role):
        return GuardDecision(allowed=False, redirect_to=home_path_for(user.role))
    return GuardDecision(allowed=True)


def resolve_route(path: str, user) -> str:
    """Return the path that is rendered when navigating to ``path``."""
    normalized = '/' + path.strip('/') if path.strip('/') else '/'

    if normalized in PUBLIC_PATHS:
        return normalized

    required_role = PROTECTED_PATHS.get(normalized)
    if required_role is not None:
        decision = check_access(required_role, user)
        return normalized if decision.allowed else decision.redirect_to

    if user is None:
        return LOGIN_PATH
    return home_path_for(user.role)
