"""
Storefront API - User Model
===========================
Accounts that sign in and own products.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Enum, Integer, String, Text

from storefront.core.database import Base

DEFAULT_ABOUT = "This is a default about section"
DEFAULT_PHOTO_URL = "https://www.gravatar.com/avatar/?d=mp&s=256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"


class Gender(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identity
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(254), unique=True, nullable=False, index=True)  # always lowercase
    hashed_password = Column(String(255), nullable=False)

    # Role
    role = Column(Enum(UserRole, name="user_role", native_enum=False), nullable=False, default=UserRole.user)

    # Extended profile
    age = Column(Integer, nullable=True)
    gender = Column(Enum(Gender, name="user_gender", native_enum=False), nullable=True)
    about = Column(Text, nullable=False, default=DEFAULT_ABOUT)
    skills = Column(JSON, nullable=False, default=list)
    photo_url = Column(String(500), nullable=False, default=DEFAULT_PHOTO_URL)

    # Metadata
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
