"""
Storefront API - Activity Report Script
=======================================
Prints activity statistics from the activity log.

Usage:
    python -m scripts.activity_report                      # system-wide counts per day
    python -m scripts.activity_report --user-email a@b.com # one user's summary + recent entries
    python -m scripts.activity_report --purge              # drop entries past retention
"""

import argparse
import asyncio

from storefront.core.config import get_settings
from storefront.core.database import build_engine, build_session_factory, init_db
from storefront.core.logging import setup_logging
from storefront.repositories.activity_repository import activity_repository
from storefront.repositories.user_repository import user_repository
from storefront.services.activity_recorder import ActivityRecorder


async def report(user_email: str | None, days: int, limit: int, purge: bool) -> int:
    settings = get_settings()
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    try:
        await init_db(engine)

        if purge:
            removed = await ActivityRecorder(session_factory).purge_expired(settings.activity_retention_days)
            if removed < 0:
                print("Purge failed, see log output")
                return 1
            print(f"Purged {removed} entries older than {settings.activity_retention_days} days")

        async with session_factory() as session:
            if user_email:
                user = await user_repository.get_by_email(session, user_email)
                if user is None:
                    print(f"No user with email {user_email.strip().lower()}")
                    return 1

                print(f"Activity for {user.email} over the last {days} days")
                for row in await activity_repository.summary_for_user(session, user.id, days=days):
                    last = row["last_activity"].isoformat() if row["last_activity"] else "-"
                    print(f"  {row['action']:<16} {row['count']:>6}  last: {last}")

                print(f"\nMost recent {limit} entries")
                for entry in await activity_repository.recent_for_user(session, user.id, limit=limit):
                    target = f"{entry.resource_type}:{entry.resource_id}" if entry.resource_type else "-"
                    print(f"  {entry.created_at.isoformat()}  {entry.action:<16} {target}")
            else:
                print(f"System activity over the last {days} days")
                for row in await activity_repository.system_stats(session, days=days):
                    print(f"  {row['date']}  {row['action']:<16} {row['count']:>6}")
        return 0
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Activity log statistics.")
    parser.add_argument("--user-email", default=None)
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--purge", action="store_true", help="delete entries beyond the retention window first")
    args = parser.parse_args(argv)

    setup_logging(debug=False)
    return asyncio.run(report(args.user_email, args.days, args.limit, args.purge))


if __name__ == "__main__":
    raise SystemExit(main())
