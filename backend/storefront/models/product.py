"""
Storefront API - Product Model
==============================
Products are owned by the user that created them. Every effective update
appends one entry to ``update_history``:

    {"editor_id": 7, "changes": {"price": {"old": 9.99, "new": 12.5}}, "updated_at": "..."}
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text

from storefront.core.database import Base

DEFAULT_CATEGORY = "general"

# Fields a product update may touch, in a stable order for history entries.
MUTABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category",
    "stock",
    "tags",
    "image_url",
    "is_active",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False, default=0.0)
    category = Column(String(80), nullable=False, default=DEFAULT_CATEGORY, index=True)

    # Set once at creation.
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    stock = Column(Integer, nullable=False, default=0)
    tags = Column(JSON, nullable=False, default=list)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    update_history = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_products_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self):
        return f"<Product {self.id} {self.name!r} owner={self.owner_id}>"
