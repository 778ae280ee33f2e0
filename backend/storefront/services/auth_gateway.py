"""
Storefront API - Auth Gateway
=============================
Issues access tokens, delivers them as HTTP-only cookies, and resolves
an inbound token to a stored user. There is no server-side session
table: clearing the cookie is the only revocation.
"""

from __future__ import annotations

from fastapi import Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings
from storefront.core.errors import Unauthenticated
from storefront.core.security import TokenIssuer
from storefront.models import User
from storefront.repositories.user_repository import user_repository


class AuthGateway:
    def __init__(
        self,
        tokens: TokenIssuer,
        *,
        cookie_name: str = "token",
        cookie_secure: bool = False,
    ):
        self.tokens = tokens
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthGateway":
        return cls(
            TokenIssuer.from_settings(settings),
            cookie_name=settings.auth_cookie_name,
            cookie_secure=settings.is_production,
        )

    def mint(self, user: User) -> str:
        role = user.role.value if hasattr(user.role, "value") else str(user.role)
        return self.tokens.mint(user.id, role)

    async def verify(self, db: AsyncSession, token: str | None) -> User:
        claims = self.tokens.decode(token)

        sub = claims.get("sub")
        try:
            user_id = int(sub)
        except (TypeError, ValueError):
            raise Unauthenticated("Unauthorized: invalid token", code="token_invalid")

        user = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise Unauthenticated("Unauthorized: user not found", code="user_not_found")
        return user

    def token_from_request(self, request: Request, bearer: str | None = None) -> str | None:
        # An explicit Authorization header wins over the cookie.
        if bearer:
            return bearer
        return request.cookies.get(self.cookie_name) or None

    def issue_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.tokens.lifetime_seconds,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.cookie_secure,
        )

    def revoke(self, response: Response) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value="",
            max_age=0,
            expires=0,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.cookie_secure,
        )
