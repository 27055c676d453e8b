"""Authentication and profile schemas."""

from datetime import date

from pydantic import ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel


class UserSignup(CamelModel):
    """User signup request."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    sports: list[str] = Field(..., min_length=1)
    allergies: list[str]


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ProfileUpdate(CamelModel):
    """Profile update request; every editable field is replaced."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    height: str | None = Field(None, max_length=50)
    weight: str | None = Field(None, max_length=50)
    sports: list[str] = Field(..., min_length=1)
    allergies: list[str]


class UserResponse(CamelModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    date_of_birth: date
    height: str | None = None
    weight: str | None = None
    sports: list[str]
    allergies: list[str]


class AuthResponse(CamelModel):
    """Login response with token and user info."""

    message: str
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class SignupResponse(AuthResponse):
    """Signup response; also carries the new user's id."""

    user_id: int


class ProfileResponse(CamelModel):
    """Profile read response."""

    user: UserResponse


class ProfileUpdateResponse(CamelModel):
    """Profile update response."""

    message: str
    user: UserResponse
