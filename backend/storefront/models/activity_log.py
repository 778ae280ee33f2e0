"""
Storefront API - Activity Log Model
===================================
Append-only record of what users did. References to users and products
are plain ids: lookups only, never cascades.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String

from storefront.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityAction(str, enum.Enum):
    SIGNUP = "SIGNUP"
    LOGIN = "LOGIN"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"
    GET_PROFILE = "GET_PROFILE"
    CREATE_PRODUCT = "CREATE_PRODUCT"
    GET_PRODUCTS = "GET_PRODUCTS"
    UPDATE_PRODUCT = "UPDATE_PRODUCT"
    DELETE_PRODUCT = "DELETE_PRODUCT"
    GRANT_ROLE = "GRANT_ROLE"


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    actor_id = Column(Integer, nullable=True, index=True)
    action = Column(String(40), nullable=False, index=True)
    resource_type = Column(String(40), nullable=True)
    resource_id = Column(String(64), nullable=True)
    meta = Column(JSON, nullable=False, default=dict)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    request_id = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    __table_args__ = (
        Index("ix_activity_logs_actor_created", "actor_id", "created_at"),
        Index("ix_activity_logs_action_created", "action", "created_at"),
    )
