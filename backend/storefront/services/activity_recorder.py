"""
Storefront API - Activity Recorder
==================================
Best-effort activity logging. A failed write is logged and swallowed:
it never changes the outcome of the request that triggered it.
"""

from __future__ import annotations

import enum
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.logging import get_logger
from storefront.core.request_context import get_request_id
from storefront.repositories.activity_repository import activity_repository

logger = get_logger("services.activity")


def _client_details(request: Request | None) -> tuple[str | None, str | None]:
    if request is None:
        return None, None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip() or None
    else:
        ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    return ip_address, (user_agent[:500] if user_agent else None)


class ActivityRecorder:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def record(
        self,
        actor_id: int | None,
        action: str | enum.Enum,
        *,
        resource_type: str | None = None,
        resource_id: str | int | None = None,
        meta: dict[str, Any] | None = None,
        request: Request | None = None,
    ) -> None:
        action_value = action.value if isinstance(action, enum.Enum) else str(action)
        try:
            ip_address, user_agent = _client_details(request)
            async with self._session_factory() as session:
                await activity_repository.add(
                    session,
                    actor_id=actor_id,
                    action=action_value,
                    resource_type=resource_type,
                    resource_id=str(resource_id) if resource_id is not None else None,
                    meta=meta,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    request_id=get_request_id() or None,
                )
                await session.commit()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "activity_log_write_failed",
                action=action_value,
                actor_id=actor_id,
                error=exc.__class__.__name__,
            )

    async def purge_expired(self, retention_days: int) -> int:
        """Delete entries older than the retention window. Returns -1 on failure."""
        try:
            async with self._session_factory() as session:
                removed = await activity_repository.purge_expired(session, retention_days=retention_days)
                await session.commit()
        except Exception as exc:  # noqa: BLE001
            logger.warning("activity_log_purge_failed", error=exc.__class__.__name__)
            return -1
        logger.info("activity_log_purged", removed=removed, retention_days=retention_days)
        return removed
