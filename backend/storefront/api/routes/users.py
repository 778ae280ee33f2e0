from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from storefront.api.deps.auth import get_activity_recorder, get_current_user
from storefront.api.envelope import success_envelope
from storefront.api.serializers import public_user
from storefront.models import ActivityAction, User
from storefront.services.account_service import account_service
from storefront.services.activity_recorder import ActivityRecorder

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile")
async def get_profile(
    request: Request,
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    user = account_service.get_profile(current_user)
    await recorder.record(
        user.id,
        ActivityAction.GET_PROFILE,
        resource_type="User",
        resource_id=user.id,
        request=request,
    )
    return success_envelope(public_user(user))
