"""
Outbound JSON shapes.

Derived display values (full name, formatted price) are computed here and
never stored. The password hash is never part of any shape.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from storefront.models import Product, User


def _iso(value: Any) -> str | None:
    return value.isoformat() if isinstance(value, datetime) else None


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def full_name(first_name: str | None, last_name: str | None) -> str:
    return " ".join(part for part in (first_name, last_name) if part).strip()


def format_price(price: float | int | None) -> str:
    return f"${float(price or 0):,.2f}"


def public_user(user: User) -> dict:
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "fullName": full_name(user.first_name, user.last_name),
        "email": user.email,
        "role": _enum_value(user.role),
        "age": user.age,
        "gender": _enum_value(user.gender),
        "about": user.about,
        "skills": list(user.skills or []),
        "photoUrl": user.photo_url,
        "lastLoginAt": _iso(user.last_login_at),
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
    }


def creator_summary(owner_id: int, summary: dict | None) -> dict:
    if not summary:
        return {"id": owner_id, "firstName": None, "lastName": None, "fullName": None, "email": None}
    return {
        "id": summary["id"],
        "firstName": summary["first_name"],
        "lastName": summary["last_name"],
        "fullName": full_name(summary["first_name"], summary["last_name"]),
        "email": summary["email"],
    }


def history_entry(entry: dict) -> dict:
    return {
        "editorId": entry.get("editor_id"),
        "changes": entry.get("changes") or {},
        "updatedAt": entry.get("updated_at"),
    }


def product_to_dict(product: Product, creator: dict | None = None) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "formattedPrice": format_price(product.price),
        "category": product.category,
        "stock": product.stock,
        "tags": list(product.tags or []),
        "imageUrl": product.image_url,
        "isActive": product.is_active,
        "createdBy": creator_summary(product.owner_id, creator),
        "updateHistory": [history_entry(entry) for entry in (product.update_history or [])],
        "createdAt": _iso(product.created_at),
        "updatedAt": _iso(product.updated_at),
    }


def user_as_creator(user: User) -> dict:
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
    }
