"""Request schemas."""
from storefront.schemas.auth import LoginRequest, SignupRequest
from storefront.schemas.product import ProductCreateRequest, ProductUpdateRequest

__all__ = ["LoginRequest", "SignupRequest", "ProductCreateRequest", "ProductUpdateRequest"]
