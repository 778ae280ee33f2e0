from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import User, UserRole


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    async def get_by_id(self, db: AsyncSession, user_id: int) -> User | None:
        row = await db.execute(select(User).where(User.id == user_id))
        return row.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        row = await db.execute(select(User).where(User.email == normalize_email(email)))
        return row.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        *,
        first_name: str,
        last_name: str,
        email: str,
        hashed_password: str,
        role: UserRole = UserRole.user,
        profile: dict | None = None,
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=normalize_email(email),
            hashed_password=hashed_password,
            role=role,
            **(profile or {}),
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    async def touch_last_login(self, db: AsyncSession, user: User) -> None:
        user.last_login_at = datetime.now(timezone.utc)
        await db.flush()

    async def set_role(self, db: AsyncSession, user: User, role: UserRole) -> User:
        user.role = role
        await db.flush()
        return user

    async def summaries_by_ids(self, db: AsyncSession, user_ids: Iterable[int]) -> dict[int, dict]:
        """Batch lookup of display fields for a set of user ids."""
        ids = sorted({int(user_id) for user_id in user_ids if user_id is not None})
        if not ids:
            return {}
        rows = await db.execute(
            select(User.id, User.first_name, User.last_name, User.email).where(User.id.in_(ids))
        )
        return {
            row.id: {
                "id": row.id,
                "first_name": row.first_name,
                "last_name": row.last_name,
                "email": row.email,
            }
            for row in rows.all()
        }


user_repository = UserRepository()
