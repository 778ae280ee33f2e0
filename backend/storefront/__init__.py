"""Storefront API: accounts, cookie-held JWTs and owner-scoped products."""

__version__ = "1.0.0"
