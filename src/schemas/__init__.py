"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    ProfileUpdate,
    SignupResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from src.schemas.base import CamelModel, MessageResponse
from src.schemas.duplicates import DuplicateCheckRequest, DuplicateCheckResponse
from src.schemas.pantry import CustomSupplementCreate, PantryItemCreate
from src.schemas.tracking import IntakeLogCreate, IntakeLogResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserSignup",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "AuthResponse",
    "SignupResponse",
    "PantryItemCreate",
    "CustomSupplementCreate",
    "DuplicateCheckRequest",
    "DuplicateCheckResponse",
    "IntakeLogCreate",
    "IntakeLogResponse",
]
