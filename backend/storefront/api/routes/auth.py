"""
Storefront API - Authentication Routes
======================================
Signup, login and logout. The access token travels only in an
HTTP-only cookie.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps.auth import get_activity_recorder, get_auth_gateway, get_current_user
from storefront.api.envelope import success_envelope
from storefront.api.serializers import public_user
from storefront.core.database import get_db
from storefront.core.errors import Unauthenticated
from storefront.models import ActivityAction, User
from storefront.schemas.auth import LoginRequest, SignupRequest
from storefront.services.account_service import account_service
from storefront.services.activity_recorder import ActivityRecorder
from storefront.services.auth_gateway import AuthGateway

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    user = await account_service.signup(db, payload)
    await recorder.record(
        user.id,
        ActivityAction.SIGNUP,
        resource_type="User",
        resource_id=user.id,
        request=request,
    )
    return success_envelope(
        public_user(user),
        status_code=status.HTTP_201_CREATED,
        message="User signup successfully",
    )


@router.post("/login")
async def login(
    payload: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    gateway: AuthGateway = Depends(get_auth_gateway),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    try:
        token, user = await account_service.login(
            db,
            gateway=gateway,
            email=payload.email,
            password=payload.password,
        )
    except Unauthenticated:
        await recorder.record(
            None,
            ActivityAction.LOGIN_FAILED,
            resource_type="User",
            meta={"email": payload.email},
            request=request,
        )
        raise

    response = success_envelope(public_user(user), message="Login successful")
    gateway.issue_cookie(response, token)
    await recorder.record(
        user.id,
        ActivityAction.LOGIN,
        resource_type="User",
        resource_id=user.id,
        request=request,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user),
    gateway: AuthGateway = Depends(get_auth_gateway),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    response = success_envelope(None, message="Logout successful")
    gateway.revoke(response)
    await recorder.record(
        current_user.id,
        ActivityAction.LOGOUT,
        resource_type="User",
        resource_id=current_user.id,
        request=request,
    )
    return response
