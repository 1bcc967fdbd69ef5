import logging
from datetime import date, datetime

import httpx
from pydantic import BaseModel

from student_portal.client.token_storage import TOKEN_KEY
from student_portal.core import config
from student_portal.core.roles import Role

logger = logging.getLogger(__name__)


class PortalUser(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime


class Student(BaseModel):
    id: int
    name: str
    email: str
    course: str
    enrollment_date: date
    owner_user_id: int | None = None


class RosterStats(BaseModel):
    total_students: int
    active_courses: int
    new_this_month: int


class AuthResult(BaseModel):
    access_token: str
    token_type: str
    user: PortalUser


class PortalApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class RecordNotFoundError(PortalApiError):
    """The requested student record does not exist."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get('detail') if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        messages = [item.get('msg', '') for item in detail if isinstance(item, dict)]
        return '; '.join(message for message in messages if message) or response.reason_phrase
    return response.reason_phrase or f'HTTP {response.status_code}'


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    message = _error_message(response)
    if response.status_code == 404:
        raise RecordNotFoundError(response.status_code, message)
    raise PortalApiError(response.status_code, message)


class PortalApiClient:
    """Calls the portal API, attaching the stored bearer token."""

    def __init__(self, http: httpx.Client, storage) -> None:
        self.http = http
        self.storage = storage

    @classmethod
    def from_config(cls, storage) -> 'PortalApiClient':
        return cls(httpx.Client(base_url=config.PORTAL_API_URL), storage)

    def _headers(self, token: str | None = None) -> dict[str, str]:
        token = token or self.storage.get_item(TOKEN_KEY)
        if not token:
            return {}
        return {'Authorization': f'Bearer {token}'}

    def _request(self, method: str, url: str, *, token: str | None = None, **kwargs) -> httpx.Response:
        response = self.http.request(method, url, headers=self._headers(token), **kwargs)
        _raise_for_status(response)
        return response

    def login(self, email: str, password: str) -> AuthResult:
        response = self._request('POST', '/auth/login', json={'email': email, 'password': password})
        return AuthResult.model_validate(response.json())

    def signup(self, name: str, email: str, password: str, role: Role) -> AuthResult:
        response = self._request(
            'POST',
            '/auth/signup',
            json={'name': name, 'email': email, 'password': password, 'role': Role(role).value},
        )
        return AuthResult.model_validate(response.json())

    def verify_token(self, token: str) -> PortalUser:
        response = self._request('GET', '/auth/verify', token=token)
        return PortalUser.model_validate(response.json()['user'])

    def list_students(self, search: str | None = None) -> list[Student]:
        params = {'search': search} if search else None
        response = self._request('GET', '/students', params=params)
        return [Student.model_validate(item) for item in response.json()]

    def roster_stats(self) -> RosterStats:
        return RosterStats.model_validate(self._request('GET', '/students/stats').json())

    def get_student_profile(self, owner_user_id: int) -> Student:
        response = self._request('GET', f'/students/{owner_user_id}')
        return Student.model_validate(response.json())

    def create_student(self, data: dict) -> Student:
        response = self._request('POST', '/students', json=_jsonable(data))
        return Student.model_validate(response.json())

    def update_student(self, student_id: int, data: dict) -> Student:
        response = self._request('PATCH', f'/students/{student_id}', json=_jsonable(data))
        return Student.model_validate(response.json())

    def delete_student(self, student_id: int) -> None:
        self._request('DELETE', f'/students/{student_id}')


def _jsonable(data: dict) -> dict:
    return {key: value.isoformat() if isinstance(value, date) else value for key, value in data.items()}
