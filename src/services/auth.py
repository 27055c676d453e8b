"""Authentication service for JWT, password handling and the user profile."""

import logging
from datetime import UTC, date, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User
from src.services.errors import AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"  # noqa: S105
OAUTH_STATE_TOKEN_TYPE = "strava_oauth"  # noqa: S105


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def _encode(user_id: int, token_type: str, expires_in: timedelta) -> str:
    issued_at = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _decode_user_id(token: str, token_type: str) -> int:
    payload = decode_access_token(token)
    if payload is None or payload.get("type") != token_type:
        raise AuthenticationError("Invalid token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token") from None

    if user_id <= 0:
        raise AuthenticationError("Invalid token")
    return user_id


def create_access_token(user_id: int) -> str:
    """Create a JWT access token carrying the user id and issue time."""
    return _encode(
        user_id, ACCESS_TOKEN_TYPE, timedelta(minutes=settings.jwt_expiration_minutes)
    )


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def decode_user_id(token: str) -> int:
    """Extract the user id from an access token.

    Raises AuthenticationError when the token is unsigned, expired, of the wrong
    type, or its subject is not a positive integer.
    """
    return _decode_user_id(token, ACCESS_TOKEN_TYPE)


def create_oauth_state(user_id: int) -> str:
    """Create the short-lived state value sent through the Strava OAuth redirect."""
    return _encode(
        user_id,
        OAUTH_STATE_TOKEN_TYPE,
        timedelta(minutes=settings.oauth_state_expiration_minutes),
    )


def decode_oauth_state(state: str) -> int:
    """Recover the user id from an OAuth state value."""
    return _decode_user_id(state, OAUTH_STATE_TOKEN_TYPE)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user(db: Session, user_id: int) -> User:
    """Get a user by id, raising NotFoundError if the row is gone."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    date_of_birth: date,
    sports: list[str],
    allergies: list[str],
) -> User:
    """Create a new user.

    Raises ValidationError when the username or email is already taken.
    """
    if not sports:
        raise ValidationError("At least one sport must be selected")

    existing = (
        db.query(User.id).filter(or_(User.username == username, User.email == email)).first()
    )
    if existing:
        raise ValidationError("Username or email already exists")

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        sports=list(sports),
        allergies=list(allergies),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username/email
        db.rollback()
        raise ValidationError("Username or email already exists") from None
    db.refresh(user)
    logger.info(f"Created user {user.id} ({user.username})")
    return user


def update_profile(
    db: Session,
    user_id: int,
    *,
    first_name: str,
    last_name: str,
    date_of_birth: date,
    sports: list[str],
    allergies: list[str],
    height: str | None = None,
    weight: str | None = None,
) -> User:
    """Replace the editable profile fields of a user."""
    if not sports:
        raise ValidationError("At least one sport must be selected")

    user = get_user(db, user_id)
    user.first_name = first_name
    user.last_name = last_name
    user.date_of_birth = date_of_birth
    user.height = height or None
    user.weight = weight or None
    user.sports = list(sports)
    user.allergies = list(allergies)
    db.commit()
    db.refresh(user)
    return user
