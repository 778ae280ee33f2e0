"""
Storefront API - Product Service
================================
Owner-scoped product CRUD. Only the user that created a product may
update or delete it; any authenticated user may list all products.

Concurrent updates to the same product are last-write-wins at the store.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import Forbidden, NotFound
from storefront.core.logging import get_logger
from storefront.models import MUTABLE_FIELDS, Product, User
from storefront.repositories.product_repository import product_repository
from storefront.repositories.user_repository import user_repository
from storefront.schemas.product import ProductCreateRequest, ProductUpdateRequest

logger = get_logger("services.product")

# products.id is a 32-bit INTEGER column.
_MAX_PRODUCT_ID = 2**31 - 1


def parse_product_id(raw: Any) -> int:
    """Ids that cannot name a stored product resolve to NotFound."""
    try:
        product_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise NotFound("Product not found", code="product_not_found")
    if not 0 < product_id <= _MAX_PRODUCT_ID:
        raise NotFound("Product not found", code="product_not_found")
    return product_id


def diff_fields(product: Product, supplied: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Map of field -> {"old", "new"} for supplied values that differ from stored ones."""
    changes: dict[str, dict[str, Any]] = {}
    for field in MUTABLE_FIELDS:
        if field not in supplied:
            continue
        old_value = getattr(product, field)
        new_value = supplied[field]
        if old_value != new_value:
            changes[field] = {"old": old_value, "new": new_value}
    return changes


class ProductService:
    async def create(self, db: AsyncSession, *, owner: User, payload: ProductCreateRequest) -> Product:
        product = await product_repository.create(db, owner_id=owner.id, fields=payload.model_dump())
        await db.commit()
        logger.info("product_created", product_id=product.id, owner_id=owner.id)
        return product

    async def list_with_creators(self, db: AsyncSession) -> tuple[list[Product], dict[int, dict]]:
        products = await product_repository.list_all(db)
        creators = await user_repository.summaries_by_ids(db, (p.owner_id for p in products))
        return products, creators

    async def get_owned(self, db: AsyncSession, *, actor: User, product_id: Any) -> Product:
        product = await product_repository.get_by_id(db, parse_product_id(product_id))
        if product is None:
            raise NotFound("Product not found", code="product_not_found")
        if product.owner_id != actor.id:
            raise Forbidden("Forbidden: not the product owner", code="not_owner")
        return product

    async def update(
        self,
        db: AsyncSession,
        *,
        actor: User,
        product_id: Any,
        payload: ProductUpdateRequest,
    ) -> tuple[Product, dict[str, dict[str, Any]]]:
        product = await self.get_owned(db, actor=actor, product_id=product_id)

        changes = diff_fields(product, payload.supplied_fields())
        if not changes:
            return product, changes

        for field, change in changes.items():
            setattr(product, field, change["new"])
        entry = {
            "editor_id": actor.id,
            "changes": changes,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        # Reassign so the JSON column is flagged dirty.
        product.update_history = [*(product.update_history or []), entry]

        product = await product_repository.save(db, product)
        await db.commit()
        logger.info("product_updated", product_id=product.id, fields=sorted(changes))
        return product, changes

    async def delete(self, db: AsyncSession, *, actor: User, product_id: Any) -> Product:
        product = await self.get_owned(db, actor=actor, product_id=product_id)
        await product_repository.delete(db, product)
        await db.commit()
        logger.info("product_deleted", product_id=product.id, owner_id=actor.id)
        return product


product_service = ProductService()
