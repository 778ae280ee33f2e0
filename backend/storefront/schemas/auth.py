"""
Storefront API - Authentication Schemas
=======================================
Request bodies use camelCase keys (``firstName``); snake_case is
accepted as well.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from storefront.models.user import Gender, UserRole

FirstName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
LastName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Skill = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


class SignupRequest(BaseModel):
    first_name: FirstName
    last_name: LastName
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    role: UserRole = UserRole.user

    age: Optional[int] = Field(default=None, ge=13, le=120)
    gender: Optional[Gender] = None
    about: Optional[str] = Field(default=None, max_length=500)
    skills: list[Skill] = Field(default_factory=list, max_length=10)
    photo_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str]) -> list[str]:
        clean: list[str] = []
        for skill in value:
            if skill not in clean:
                clean.append(skill)
        return clean

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.strip().lower()
