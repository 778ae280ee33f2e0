from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import ActivityLog


def _since(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=max(0, days))


class ActivityRepository:
    async def add(
        self,
        db: AsyncSession,
        *,
        actor_id: int | None,
        action: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
        meta: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        request_id: str | None = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            meta=meta or {},
            ip_address=ip_address,
            user_agent=user_agent,
            request_id=request_id,
        )
        db.add(entry)
        await db.flush()
        return entry

    async def summary_for_user(self, db: AsyncSession, actor_id: int, *, days: int = 30) -> list[dict]:
        """Count and latest timestamp per action, busiest action first."""
        count = func.count(ActivityLog.id).label("count")
        rows = await db.execute(
            select(
                ActivityLog.action,
                count,
                func.max(ActivityLog.created_at).label("last_activity"),
            )
            .where(ActivityLog.actor_id == actor_id, ActivityLog.created_at >= _since(days))
            .group_by(ActivityLog.action)
            .order_by(desc(count))
        )
        return [
            {"action": row.action, "count": int(row.count), "last_activity": row.last_activity}
            for row in rows.all()
        ]

    async def recent_for_user(self, db: AsyncSession, actor_id: int, *, limit: int = 20) -> list[ActivityLog]:
        rows = await db.execute(
            select(ActivityLog)
            .where(ActivityLog.actor_id == actor_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(max(1, min(limit, 500)))
        )
        return list(rows.scalars().all())

    async def system_stats(self, db: AsyncSession, *, days: int = 30) -> list[dict]:
        """Count per action per day, newest day first."""
        day = func.date(ActivityLog.created_at).label("day")
        rows = await db.execute(
            select(day, ActivityLog.action, func.count(ActivityLog.id).label("count"))
            .where(ActivityLog.created_at >= _since(days))
            .group_by(day, ActivityLog.action)
            .order_by(desc(day), ActivityLog.action)
        )
        return [
            {"date": str(row.day), "action": row.action, "count": int(row.count)}
            for row in rows.all()
        ]

    async def purge_expired(self, db: AsyncSession, *, retention_days: int) -> int:
        result = await db.execute(
            delete(ActivityLog).where(ActivityLog.created_at < _since(retention_days))
        )
        return int(result.rowcount or 0)


activity_repository = ActivityRepository()
