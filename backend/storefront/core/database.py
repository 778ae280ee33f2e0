"""
Storefront API - Database Engine
================================
Async SQLAlchemy engine with connection pooling.

PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for local runs
and tests. The engine is built from explicit settings by the app factory
and kept on ``app.state``.
"""

from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from storefront.core.config import Settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.database_url
    engine_kwargs: dict = {"echo": False}
    if not url.startswith("sqlite"):
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["max_overflow"] = settings.database_max_overflow
        engine_kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a DB session."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    # Import for side effects: registers every table on Base.metadata.
    import storefront.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
