import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from student_portal.auth.dependencies import get_current_user, require_admin
from student_portal.database import get_db
from student_portal.models.user import Role, User
from student_portal.repositories.student_repository import StudentNotFoundError, StudentRepository
from student_portal.repositories.user_repository import UserRepository
from student_portal.routes.auth_routes import normalize_email

router = APIRouter(tags=['students'])

logger = logging.getLogger(__name__)

STUDENT_EDITABLE_FIELDS = {'name', 'email', 'course'}
MAX_SEARCH_LENGTH = 100


def _required_text(value: str | None, label: str) -> str:
    normalized = (value or '').strip()
    if not normalized:
        raise ValueError(f'{label} is required')
    return normalized


class StudentCreateRequest(BaseModel):
    name: str
    email: str
    course: str
    enrollment_date: date
    owner_user_id: int | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value, 'Name')

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('course')
    @classmethod
    def validate_course(cls, value: str) -> str:
        return _required_text(value, 'Course')


class StudentUpdateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    course: str | None = None
    enrollment_date: date | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return _required_text(value, 'Name')

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str:
        if value is None:
            raise ValueError('Email is required')
        return normalize_email(value)

    @field_validator('course')
    @classmethod
    def validate_course(cls, value: str | None) -> str:
        return _required_text(value, 'Course')

    @field_validator('enrollment_date')
    @classmethod
    def validate_enrollment_date(cls, value: date | None) -> date:
        if value is None:
            raise ValueError('Enrollment date is required')
        return value


class StudentResponse(BaseModel):
    id: int
    name: str
    email: str
    course: str
    enrollment_date: date
    owner_user_id: int | None = None

    class Config:
        from_attributes = True


class RosterStatsResponse(BaseModel):
    total_students: int
    active_courses: int
    new_this_month: int

    class Config:
        from_attributes = True


def get_student_repository(db: Session = Depends(get_db)) -> StudentRepository:
    return StudentRepository(db)


def _not_found(exc: StudentNotFoundError) -> HTTPException:
    logger.info('%s', exc)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Student not found')


@router.get('', response_model=list[StudentResponse])
def list_students(
    search: str | None = Query(default=None, max_length=MAX_SEARCH_LENGTH),
    _admin: User = Depends(require_admin),
    students: StudentRepository = Depends(get_student_repository),
):
    return students.list(search)


@router.get('/stats', response_model=RosterStatsResponse)
def roster_stats(
    _admin: User = Depends(require_admin),
    students: StudentRepository = Depends(get_student_repository),
):
    return students.stats(date.today())


@router.get('/{owner_user_id}', response_model=StudentResponse)
def get_student_profile(
    owner_user_id: int,
    current_user: User = Depends(get_current_user),
    students: StudentRepository = Depends(get_student_repository),
):
    if current_user.role is not Role.ADMIN and current_user.id != owner_user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail='Students can only view their own profile.',
        )

    try:
        return students.get(owner_user_id)
    except StudentNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post('', response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    payload: StudentCreateRequest,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if payload.owner_user_id is not None and UserRepository(db).get(payload.owner_user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Owner user does not exist.',
        )
    return StudentRepository(db).create(payload.model_dump())


@router.patch('/{student_id}', response_model=StudentResponse)
def update_student(
    student_id: int,
    payload: StudentUpdateRequest,
    current_user: User = Depends(get_current_user),
    students: StudentRepository = Depends(get_student_repository),
):
    changes = payload.model_dump(exclude_unset=True)

    try:
        record = students.get_by_id(student_id)
    except StudentNotFoundError as exc:
        raise _not_found(exc) from exc

    if current_user.role is Role.STUDENT:
        if record.owner_user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail='Students can only edit their own profile.',
            )
        if not set(changes) <= STUDENT_EDITABLE_FIELDS:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail='Students cannot change their enrollment date.',
            )

    return students.update(student_id, changes)


@router.delete('/{student_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: int,
    _admin: User = Depends(require_admin),
    students: StudentRepository = Depends(get_student_repository),
):
    try:
        students.delete(student_id)
    except StudentNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
