import uuid
from typing import Annotated

from pydantic import EmailStr, StringConstraints, field_validator

from app.schemas.common import CamelModel, NonEmptyStr, UTCDatetime

# bcrypt rejects passwords longer than this many UTF-8 bytes
MAX_PASSWORD_BYTES = 72

Password = Annotated[str, StringConstraints(min_length=6, max_length=MAX_PASSWORD_BYTES)]


class UserRegister(CamelModel):
    """Schema for registering a new user."""
    name: NonEmptyStr
    email: EmailStr
    password: Password

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return value


class UserLogin(CamelModel):
    """Schema for logging in."""
    email: EmailStr
    password: NonEmptyStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserRead(CamelModel):
    """Public profile. Never carries the password hash."""
    id: uuid.UUID
    name: str
    email: str
    created_at: UTCDatetime


class AuthResponse(CamelModel):
    message: str
    user: UserRead
    token: str


class UserResponse(CamelModel):
    user: UserRead
