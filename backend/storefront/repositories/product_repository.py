from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import Product


class ProductRepository:
    async def create(self, db: AsyncSession, *, owner_id: int, fields: dict) -> Product:
        product = Product(owner_id=owner_id, update_history=[], **fields)
        db.add(product)
        await db.flush()
        await db.refresh(product)
        return product

    async def get_by_id(self, db: AsyncSession, product_id: int) -> Product | None:
        row = await db.execute(select(Product).where(Product.id == product_id))
        return row.scalar_one_or_none()

    async def list_all(self, db: AsyncSession) -> list[Product]:
        rows = await db.execute(select(Product).order_by(Product.created_at.desc(), Product.id.desc()))
        return list(rows.scalars().all())

    async def save(self, db: AsyncSession, product: Product) -> Product:
        await db.flush()
        await db.refresh(product)
        return product

    async def delete(self, db: AsyncSession, product: Product) -> None:
        await db.delete(product)
        await db.flush()


product_repository = ProductRepository()
