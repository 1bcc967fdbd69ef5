from types import SimpleNamespace

import pytest

from student_portal.client.guard import GuardDecision, check_access, home_path_for, resolve_route
from student_portal.core.roles import Role

ADMIN = SimpleNamespace(role=Role.ADMIN)
STUDENT = SimpleNamespace(role=Role.STUDENT)


def test_home_path_covers_every_role() -> None:
    assert {role: home_path_for(role) for role in Role} == {Role.ADMIN: '/admin', Role.STUDENT: '/student'}


def test_check_access_without_session_redirects_to_login() -> None:
    assert check_access(Role.ADMIN, None) == GuardDecision(allowed=False, redirect_to='/login')


def test_check_access_wrong_role_redirects_home() -> None:
    assert check_access(Role.ADMIN, STUDENT) == GuardDecision(allowed=False, redirect_to='/student')
    assert check_access(Role.STUDENT, ADMIN) == GuardDecision(allowed=False, redirect_to='/admin')


def test_check_access_matching_role_is_allowed() -> None:
    assert check_access(Role.ADMIN, ADMIN).allowed is True


@pytest.mark.parametrize(
    ('path', 'user', 'expected'),
    [
        ('/login', None, '/login'),
        ('/signup', STUDENT, '/signup'),
        ('/admin', None, '/login'),
        ('/admin', STUDENT, '/student'),
        ('/admin', ADMIN, '/admin'),
        ('/student/', STUDENT, '/student'),
        ('/student', ADMIN, '/admin'),
        ('/', None, '/login'),
        ('/', ADMIN, '/admin'),
        ('', STUDENT, '/student'),
        ('/nowhere', STUDENT, '/student'),
        ('/nowhere', None, '/login'),
    ],
)
def test_resolve_route(path: str, user, expected: str) -> None:
    assert resolve_route(path, user) == expected


def test_plain_string_roles_compare_by_value() -> None:
    admin = SimpleNamespace(role='admin')

    assert check_access(Role.ADMIN, admin).allowed is True
    assert check_access('student', admin) == GuardDecision(allowed=False, redirect_to='/admin')
    assert resolve_route('/admin', admin) == '/admin'
    assert resolve_route('/', SimpleNamespace(role='student')) == '/student'


def test_home_path_rejects_unknown_role() -> None:
    with pytest.raises(ValueError):
        home_path_for('superuser')
