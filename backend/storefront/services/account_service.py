"""
Storefront API - Account Service
================================
Signup, login, profile and the privileged role grant.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import Conflict, Forbidden, NotFound, Unauthenticated
from storefront.core.logging import get_logger
from storefront.core.security import hash_password, verify_password
from storefront.models import User, UserRole
from storefront.repositories.user_repository import user_repository
from storefront.schemas.auth import SignupRequest
from storefront.services.auth_gateway import AuthGateway

logger = get_logger("services.account")

_PROFILE_FIELDS = ("age", "gender", "about", "skills", "photo_url")


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("storefront-timing-equalizer")


def _invalid_credentials() -> Unauthenticated:
    return Unauthenticated("Invalid credentials", code="invalid_credentials")


class AccountService:
    async def signup(self, db: AsyncSession, payload: SignupRequest) -> User:
        if payload.role != UserRole.user:
            raise Forbidden(
                "The admin role cannot be self-assigned at signup",
                code="role_not_assignable",
            )

        if await user_repository.get_by_email(db, payload.email):
            raise Conflict("User with that email already exists", code="email_taken")

        profile = {
            field: getattr(payload, field)
            for field in _PROFILE_FIELDS
            if getattr(payload, field) is not None
        }
        try:
            user = await user_repository.create(
                db,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                hashed_password=hash_password(payload.password),
                role=UserRole.user,
                profile=profile,
            )
            await db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email.
            await db.rollback()
            raise Conflict("User with that email already exists", code="email_taken")

        logger.info("signup_success", user_id=user.id)
        return user

    async def login(
        self,
        db: AsyncSession,
        *,
        gateway: AuthGateway,
        email: str,
        password: str,
    ) -> tuple[str, User]:
        user = await user_repository.get_by_email(db, email)
        if user is None:
            verify_password(password, _dummy_hash())
            logger.warning("login_failed", reason="unknown_email")
            raise _invalid_credentials()

        if not verify_password(password, user.hashed_password):
            logger.warning("login_failed", reason="password_mismatch", user_id=user.id)
            raise _invalid_credentials()

        await user_repository.touch_last_login(db, user)
        await db.commit()

        token = gateway.mint(user)
        logger.info("login_success", user_id=user.id)
        return token, user

    def get_profile(self, current_user: User) -> User:
        return current_user

    async def grant_role(self, db: AsyncSession, *, email: str, role: UserRole) -> tuple[User, UserRole]:
        """Privileged path: change an existing user's role. Returns the user and the previous role."""
        user = await user_repository.get_by_email(db, email)
        if user is None:
            raise NotFound("User not found", code="user_not_found")
        previous = UserRole(user.role)
        await user_repository.set_role(db, user, role)
        await db.commit()
        logger.info("role_granted", user_id=user.id, previous=previous.value, role=role.value)
        return user, previous


account_service = AccountService()
