"""User model."""

from sqlalchemy import JSON, Column, Date, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, ownership and the athlete profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    height = Column(String(50), nullable=True)  # Free text, e.g. "180 cm"
    weight = Column(String(50), nullable=True)
    sports = Column(JSON, nullable=False, default=list)
    allergies = Column(JSON, nullable=False, default=list)
