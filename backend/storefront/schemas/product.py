"""
Storefront API - Product Schemas
================================
Create and update share the same per-field rules. Updates are partial:
omitted fields are left untouched, null clears ``imageUrl`` and is
ignored elsewhere, unknown fields (the owner included) are ignored.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints
from pydantic.alias_generators import to_camel

from storefront.models.product import DEFAULT_CATEGORY

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=80)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]

DESCRIPTION_MAX_LENGTH = 2000

# Nullable columns: an explicit null in an update clears them.
CLEARABLE_FIELDS = frozenset({"image_url"})


class ProductCreateRequest(BaseModel):
    name: ProductName
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    category: Category = DEFAULT_CATEGORY
    stock: int = Field(default=0, ge=0)
    tags: list[Tag] = Field(default_factory=list, max_length=20)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ProductUpdateRequest(BaseModel):
    name: Optional[ProductName] = None
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    category: Optional[Category] = None
    stock: Optional[int] = Field(default=None, ge=0)
    tags: Optional[list[Tag]] = Field(default=None, max_length=20)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def supplied_fields(self) -> dict:
        """Fields sent in the body. A null is kept only for clearable fields."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            field: value
            for field, value in supplied.items()
            if value is not None or field in CLEARABLE_FIELDS
        }
