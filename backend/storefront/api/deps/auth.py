from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import get_db
from storefront.models import User
from storefront.services.activity_recorder import ActivityRecorder
from storefront.services.auth_gateway import AuthGateway

_bearer = HTTPBearer(auto_error=False)


def get_auth_gateway(request: Request) -> AuthGateway:
    return request.app.state.auth_gateway


def get_activity_recorder(request: Request) -> ActivityRecorder:
    return request.app.state.activity_recorder


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_db),
    gateway: AuthGateway = Depends(get_auth_gateway),
) -> User:
    """Resolve the request's token (Bearer header or cookie) to a stored user."""
    bearer = credentials.credentials if credentials is not None else None
    token = gateway.token_from_request(request, bearer)
    return await gateway.verify(db, token)
