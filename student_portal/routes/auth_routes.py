from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from student_portal.auth import jwt_handler
from student_portal.auth.dependencies import get_current_user
from student_portal.core.validation import MIN_PASSWORD_LENGTH, is_valid_email
from student_portal.database import get_db
from student_portal.models.user import Role, User
from student_portal.services import auth_service

router = APIRouter(tags=['auth'])


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    if not normalized:
        raise ValueError('Email is required')
    if not is_valid_email(normalized):
        raise ValueError('Email is invalid')
    return normalized


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.strip().lower()


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    role: Role = Role.STUDENT

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        return value


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse


class VerifyResponse(BaseModel):
    user: UserResponse


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=jwt_handler.create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = auth_service.authenticate(db, payload.email, payload.password)
    except auth_service.InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _token_response(user)


@router.post('/signup', response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    try:
        user = auth_service.register(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
    except auth_service.DuplicateUserError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _token_response(user)


@router.get('/verify', response_model=VerifyResponse)
def verify(current_user: User = Depends(get_current_user)):
    return VerifyResponse(user=UserResponse.model_validate(current_user))
