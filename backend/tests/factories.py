"""Stand-ins for ORM rows and sessions used by the service tests."""

from __future__ import annotations

from types import SimpleNamespace


class DbStub:
    """Stands in for AsyncSession where repositories are monkeypatched."""

    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


def make_user(**overrides) -> SimpleNamespace:
    values = {
        "id": 1,
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@x.com",
        "hashed_password": "",
        "role": "user",
        "age": None,
        "gender": None,
        "about": "This is a default about section",
        "skills": [],
        "photo_url": "https://www.gravatar.com/avatar/?d=mp&s=256",
        "last_login_at": None,
        "created_at": None,
        "updated_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_product(**overrides) -> SimpleNamespace:
    values = {
        "id": 10,
        "name": "Widget",
        "description": "d",
        "price": 9.99,
        "category": "tools",
        "owner_id": 1,
        "stock": 0,
        "tags": [],
        "image_url": None,
        "is_active": True,
        "update_history": [],
        "created_at": None,
        "updated_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)
