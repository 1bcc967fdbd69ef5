import httpx
import pytest

from conftest import signup
from student_portal.client.api_client import PortalApiClient
from student_portal.client.guard import resolve_route
from student_portal.client.session_store import SESSION_EXPIRED_MESSAGE, SessionStore
from student_portal.client.token_storage import TOKEN_KEY, FileTokenStorage, MemoryTokenStorage
from student_portal.core import config
from student_portal.core.roles import Role


@pytest.fixture
def storage():
    return MemoryTokenStorage()


@pytest.fixture
def session(client, storage):
    return SessionStore(PortalApiClient(client, storage), storage)


def test_signup_login_and_guard_scenario(session, storage) -> None:
    assert session.signup('Jane', 'jane@x.com', 'secret1', Role.STUDENT) is True
    session.logout()

    assert session.login('jane@x.com', 'secret1') is True

    assert session.user.role is Role.STUDENT
    assert storage.get_item(TOKEN_KEY)
    assert session.error is None
    assert resolve_route('/admin', session.user) == '/student'


def test_failed_login_sets_server_message_and_leaves_session_empty(session, storage) -> None:
    assert session.login('nobody@x.com', 'secret1') is False

    assert session.user is None
    assert session.error == 'Invalid credentials'
    assert storage.get_item(TOKEN_KEY) is None
    assert session.loading is False


def test_duplicate_signup_fails_with_message(session) -> None:
    assert session.signup('Jane', 'jane@x.com', 'secret1', Role.STUDENT) is True
    session.logout()

    assert session.signup('Jane Two', 'jane@x.com', 'secret2', Role.ADMIN) is False
    assert session.error == 'User already exists'
    assert session.user is None


def test_signup_validation_error_is_reported(session) -> None:
    assert session.signup('Jane', 'jane@x.com', '123', Role.STUDENT) is False

    assert 'Password must be at least 6 characters' in session.error


def test_successful_login_clears_previous_error(session) -> None:
    session.signup('Jane', 'jane@x.com', 'secret1', Role.STUDENT)
    session.logout()
    session.login('jane@x.com', 'wrong-password')

    assert session.login('jane@x.com', 'secret1') is True
    assert session.error is None


def test_logout_clears_token_and_user(session, storage) -> None:
    session.signup('Jane', 'jane@x.com', 'secret1', Role.STUDENT)

    session.logout()

    assert session.user is None
    assert storage.get_item(TOKEN_KEY) is None


def test_bootstrap_resumes_the_token_owner(client, storage) -> None:
    signup(client, 'Ada Admin', 'ada@x.com', role='admin')
    jane = signup(client, 'Jane', 'jane@x.com')
    storage.set_item(TOKEN_KEY, jane['access_token'])
    session = SessionStore(PortalApiClient(client, storage), storage)

    session.bootstrap()

    assert session.user.email == 'jane@x.com'
    assert session.error is None


def test_bootstrap_with_invalid_token_expires_session(session, storage) -> None:
    storage.set_item(TOKEN_KEY, 'mock-jwt-token-1')

    session.bootstrap()

    assert session.user is None
    assert session.error == SESSION_EXPIRED_MESSAGE
    assert storage.get_item(TOKEN_KEY) is None


def test_bootstrap_without_token_does_nothing(session) -> None:
    session.bootstrap()

    assert session.user is None
    assert session.error is None


def test_unreachable_api_uses_fallback_message(storage) -> None:
    def refuse(request):
        raise httpx.ConnectError('connection refused', request=request)

    http = httpx.Client(base_url='http://portal.invalid', transport=httpx.MockTransport(refuse))
    session = SessionStore(PortalApiClient(http, storage), storage)

    assert session.login('jane@x.com', 'secret1') is False
    assert session.error == 'Login failed'


def test_failed_login_while_signed_in_clears_previous_session(session, storage) -> None:
    assert session.signup('Ada Admin', 'ada@x.com', 'secret1', Role.ADMIN) is True
    assert session.is_authenticated is True

    assert session.login('ada@x.com', 'wrong-pass') is False

    assert session.is_authenticated is False
    assert session.user is None
    assert storage.get_item(TOKEN_KEY) is None
    assert session.error == 'Invalid credentials'


def test_failed_signup_while_signed_in_clears_previous_session(session, storage) -> None:
    session.signup('Jane', 'jane@x.com', 'secret1', Role.STUDENT)

    assert session.signup('Jane Again', 'jane@x.com', 'secret1', Role.STUDENT) is False

    assert session.user is None
    assert storage.get_item(TOKEN_KEY) is None


def test_from_config_uses_token_file_and_api_url(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    token_file = tmp_path / 'portal' / 'storage.json'
    monkeypatch.setattr(config, 'PORTAL_TOKEN_FILE', str(token_file))
    monkeypatch.setattr(config, 'PORTAL_API_URL', 'http://portal.test:9000')

    session = SessionStore.from_config()
    try:
        session.storage.set_item(TOKEN_KEY, 'abc')

        assert isinstance(session.storage, FileTokenStorage)
        assert session.storage.path == str(token_file)
        assert FileTokenStorage(str(token_file)).get_item(TOKEN_KEY) == 'abc'
        assert session.api.storage is session.storage
        assert session.api.http.base_url.host == 'portal.test'
        assert session.api.http.base_url.port == 9000
        assert session.token == 'abc'
    finally:
        session.api.http.close()
