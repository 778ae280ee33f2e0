"""Models package."""
from storefront.models.user import User, UserRole, Gender
from storefront.models.product import Product, MUTABLE_FIELDS
from storefront.models.activity_log import ActivityLog, ActivityAction

__all__ = [
    "User", "UserRole", "Gender",
    "Product", "MUTABLE_FIELDS",
    "ActivityLog", "ActivityAction",
]
