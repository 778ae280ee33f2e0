from __future__ import annotations

from datetime import datetime, timezone

from factories import make_product, make_user
from storefront.api.serializers import (
    creator_summary,
    format_price,
    full_name,
    product_to_dict,
    public_user,
    user_as_creator,
)
from storefront.models import UserRole


def test_public_user_never_exposes_password_hash() -> None:
    user = make_user(hashed_password="$2b$12$secret", role=UserRole.admin)
    data = public_user(user)
    assert "hashed_password" not in data
    assert "password" not in data
    assert "$2b$12$secret" not in data.values()
    assert data["role"] == "admin"
    assert data["fullName"] == "Jane Doe"


def test_full_name_skips_missing_parts() -> None:
    assert full_name("Jane", "Doe") == "Jane Doe"
    assert full_name("Jane", "") == "Jane"
    assert full_name(None, None) == ""


def test_format_price() -> None:
    assert format_price(9.99) == "$9.99"
    assert format_price(1234.5) == "$1,234.50"
    assert format_price(None) == "$0.00"


def test_product_to_dict_includes_creator_and_history() -> None:
    created = datetime(2026, 1, 2, tzinfo=timezone.utc)
    product = make_product(
        price=12.5,
        created_at=created,
        update_history=[
            {"editor_id": 1, "changes": {"price": {"old": 9.99, "new": 12.5}}, "updated_at": "2026-01-03T00:00:00+00:00"}
        ],
    )
    data = product_to_dict(product, user_as_creator(make_user()))

    assert data["createdBy"] == {
        "id": 1,
        "firstName": "Jane",
        "lastName": "Doe",
        "fullName": "Jane Doe",
        "email": "jane@x.com",
    }
    assert data["formattedPrice"] == "$12.50"
    assert data["createdAt"] == created.isoformat()
    assert data["updateHistory"] == [
        {"editorId": 1, "changes": {"price": {"old": 9.99, "new": 12.5}}, "updatedAt": "2026-01-03T00:00:00+00:00"}
    ]


def test_creator_summary_for_missing_owner() -> None:
    assert creator_summary(5, None)["id"] == 5
    assert creator_summary(5, None)["email"] is None
