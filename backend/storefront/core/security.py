"""
Storefront API - Security Module
================================
Password hashing (bcrypt) and JWT token management.
Plain-text passwords are never stored.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from storefront.core.config import Settings
from storefront.core.errors import Unauthenticated

# bcrypt only looks at the first 72 bytes of the input.
_BCRYPT_MAX_BYTES = 72


# -- Password Hashing --

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(pwd_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed one."""
    if not plain_password or not hashed_password:
        return False
    pwd_bytes = plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    hash_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pwd_bytes, hash_bytes)
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


# -- JWT Tokens --

class TokenIssuer:
    """Mints and decodes signed, time-limited access tokens."""

    def __init__(self, secret_key: str, *, algorithm: str = "HS256", lifetime: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ValueError("jwt_secret_blank")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(hours=settings.access_token_expire_hours),
        )

    @property
    def lifetime_seconds(self) -> int:
        return int(self.lifetime.total_seconds())

    def mint(self, user_id: int, role: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str | None) -> dict[str, Any]:
        """Return the verified claims or raise Unauthenticated."""
        if not token:
            raise Unauthenticated("Unauthorized: token missing", code="missing_token")
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise Unauthenticated("Unauthorized: token expired", code="token_expired")
        except JWTError:
            raise Unauthenticated("Unauthorized: invalid token", code="token_invalid")
