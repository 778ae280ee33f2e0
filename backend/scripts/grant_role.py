"""
Storefront API - Grant Role Script
==================================
The only path that can elevate an account. Signup always creates plain
users; an operator with database access runs this to grant ``admin``.

Usage:
    python -m scripts.grant_role jane@example.com admin
"""

import argparse
import asyncio

from storefront.core.config import get_settings
from storefront.core.database import build_engine, build_session_factory, init_db
from storefront.core.errors import NotFound
from storefront.core.logging import setup_logging
from storefront.models import ActivityAction, UserRole
from storefront.services.account_service import account_service
from storefront.services.activity_recorder import ActivityRecorder


async def grant_role(email: str, role: UserRole) -> int:
    settings = get_settings()
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    try:
        await init_db(engine)
        async with session_factory() as session:
            try:
                user, previous = await account_service.grant_role(session, email=email, role=role)
            except NotFound:
                print(f"No user with email {email.strip().lower()}")
                return 1

        await ActivityRecorder(session_factory).record(
            None,
            ActivityAction.GRANT_ROLE,
            resource_type="User",
            resource_id=user.id,
            meta={"from": previous.value, "to": role.value, "via": "cli"},
        )
        print(f"{user.email}: {previous.value} -> {role.value}")
        return 0
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Change the role of an existing account.")
    parser.add_argument("email")
    parser.add_argument("role", choices=[role.value for role in UserRole])
    args = parser.parse_args(argv)

    setup_logging(debug=False)
    return asyncio.run(grant_role(args.email, UserRole(args.role)))


if __name__ == "__main__":
    raise SystemExit(main())
