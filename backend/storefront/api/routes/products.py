"""
Storefront API - Product Routes
===============================
Any authenticated user may list products; only the owner may update or
delete one.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps.auth import get_activity_recorder, get_current_user
from storefront.api.envelope import success_envelope
from storefront.api.serializers import product_to_dict, user_as_creator
from storefront.core.database import get_db
from storefront.models import ActivityAction, User
from storefront.schemas.product import ProductCreateRequest, ProductUpdateRequest
from storefront.services.activity_recorder import ActivityRecorder
from storefront.services.product_service import product_service

router = APIRouter(prefix="/products", tags=["Products"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreateRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    product = await product_service.create(db, owner=current_user, payload=payload)
    await recorder.record(
        current_user.id,
        ActivityAction.CREATE_PRODUCT,
        resource_type="Product",
        resource_id=product.id,
        meta={"name": product.name},
        request=request,
    )
    return success_envelope(
        product_to_dict(product, user_as_creator(current_user)),
        status_code=status.HTTP_201_CREATED,
        message="Product created",
    )


@router.get("")
async def list_products(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    products, creators = await product_service.list_with_creators(db)
    await recorder.record(
        current_user.id,
        ActivityAction.GET_PRODUCTS,
        resource_type="Product",
        meta={"count": len(products)},
        request=request,
    )
    return success_envelope(
        [product_to_dict(product, creators.get(product.owner_id)) for product in products],
        meta={"count": len(products)},
    )


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductUpdateRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    product, changes = await product_service.update(
        db,
        actor=current_user,
        product_id=product_id,
        payload=payload,
    )
    await recorder.record(
        current_user.id,
        ActivityAction.UPDATE_PRODUCT,
        resource_type="Product",
        resource_id=product.id,
        meta={"changes": changes},
        request=request,
    )
    return success_envelope(
        product_to_dict(product, user_as_creator(current_user)),
        message="Product updated" if changes else "No changes",
    )


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    product = await product_service.delete(db, actor=current_user, product_id=product_id)
    await recorder.record(
        current_user.id,
        ActivityAction.DELETE_PRODUCT,
        resource_type="Product",
        resource_id=product.id,
        meta={"name": product.name},
        request=request,
    )
    return success_envelope({"id": product.id}, message="Product deleted")
