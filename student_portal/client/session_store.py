"""Holds who is signed in on this client.

The store owns the current user, the error message shown next to the
login/signup forms and the ``loading`` flag. The bearer token itself lives in
the token storage so it survives a restart; :meth:`SessionStore.bootstrap`
resumes the session from it.
"""

import logging

import httpx

from student_portal.client.api_client import PortalApiClient, PortalApiError, PortalUser
from student_portal.client.token_storage import TOKEN_KEY, FileTokenStorage
from student_portal.core import config
from student_portal.core.roles import Role

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = 'Session expired. Please login again.'


class SessionStore:
    def __init__(self, api: PortalApiClient, storage) -> None:
        self.api = api
        self.storage = storage
        self.user: PortalUser | None = None
        self.error: str | None = None
        self.loading = False

    @classmethod
    def from_config(cls) -> 'SessionStore':
        """Session backed by the token file and API URL from the environment."""
        storage = FileTokenStorage(config.PORTAL_TOKEN_FILE)
        return cls(PortalApiClient.from_config(storage), storage)

    @property
    def token(self) -> str | None:
        return self.storage.get_item(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def bootstrap(self) -> None:
        token = self.token
        if not token:
            return

        self.loading = True
        try:
            self.user = self.verify(token)
        except (PortalApiError, httpx.HTTPError):
            logger.info('Stored token rejected; clearing session')
            self._clear()
            self.error = SESSION_EXPIRED_MESSAGE
        finally:
            self.loading = False

    def verify(self, token: str) -> PortalUser:
        return self.api.verify_token(token)

    def login(self, email: str, password: str) -> bool:
        return self._authenticate('Login failed', self.api.login, email, password)

    def signup(self, name: str, email: str, password: str, role: Role) -> bool:
        return self._authenticate('Signup failed', self.api.signup, name, email, password, role)

    def logout(self) -> None:
        self._clear()
        self.error = None

    def _clear(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
        self.user = None

    def _authenticate(self, fallback_message: str, call, *args) -> bool:
        self.loading = True
        self.error = None
        try:
            result = call(*args)
        except PortalApiError as exc:
            self._clear()
            self.error = exc.message or fallback_message
            return False
        except httpx.HTTPError:
            logger.exception('%s: portal API unreachable', fallback_message)
            self._clear()
            self.error = fallback_message
            return False
        finally:
            self.loading = False

        self.storage.set_item(TOKEN_KEY, result.access_token)
        self.user = result.user
        return True
