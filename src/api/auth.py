"""Authentication and profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_current_user_id
from src.database import get_db
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    SignupResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from src.services.auth import authenticate_user, create_access_token, create_user, update_profile

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = create_user(
        db,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        date_of_birth=user_data.date_of_birth,
        sports=user_data.sports,
        allergies=user_data.allergies,
    )

    return SignupResponse(
        message="User created successfully",
        user_id=user.id,
        token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the current user's profile."""
    return ProfileResponse(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=ProfileUpdateResponse)
def put_profile(
    profile: ProfileUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace the current user's profile fields."""
    user = update_profile(
        db,
        user_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        date_of_birth=profile.date_of_birth,
        height=profile.height,
        weight=profile.weight,
        sports=profile.sports,
        allergies=profile.allergies,
    )
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )
