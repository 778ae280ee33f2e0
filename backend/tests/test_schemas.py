from __future__ import annotations

import pytest
from pydantic import ValidationError

from storefront.models import UserRole
from storefront.schemas.auth import LoginRequest, SignupRequest
from storefront.schemas.product import ProductCreateRequest, ProductUpdateRequest


class TestSignupRequest:
    def _valid(self, **overrides):
        values = {"firstName": "Jane", "lastName": "Doe", "email": "jane@x.com", "password": "secret1"}
        values.update(overrides)
        return values

    def test_camel_case_body_and_defaults(self):
        payload = SignupRequest.model_validate(self._valid(email="Jane@X.COM"))
        assert payload.first_name == "Jane"
        assert payload.email == "jane@x.com"
        assert payload.role == UserRole.user
        assert payload.skills == []

    def test_snake_case_also_accepted(self):
        payload = SignupRequest.model_validate(
            {"first_name": "Jane", "last_name": "Doe", "email": "jane@x.com", "password": "secret1"}
        )
        assert payload.last_name == "Doe"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"password": "12345"},
            {"firstName": "J"},
            {"firstName": "  "},
            {"lastName": ""},
            {"email": "not-an-email"},
            {"role": "superuser"},
            {"age": 7},
            {"gender": "robot"},
            {"skills": [f"s{i}" for i in range(11)]},
            {"about": "x" * 501},
        ],
    )
    def test_policy_violations_rejected(self, overrides):
        with pytest.raises(ValidationError):
            SignupRequest.model_validate(self._valid(**overrides))

    def test_missing_last_name_rejected(self):
        values = self._valid()
        values.pop("lastName")
        with pytest.raises(ValidationError):
            SignupRequest.model_validate(values)


def test_login_request_lowercases_email() -> None:
    assert LoginRequest(email="JANE@x.com", password="secret1").email == "jane@x.com"


class TestProductRequests:
    def test_create_defaults(self):
        payload = ProductCreateRequest.model_validate({"name": "  Widget  "})
        assert payload.name == "Widget"
        assert payload.price == 0
        assert payload.category == "general"
        assert payload.description == ""
        assert payload.is_active is True

    @pytest.mark.parametrize(
        "body",
        [
            {"name": ""},
            {"name": "   "},
            {"name": "Widget", "price": -0.01},
            {"name": "Widget", "price": "abc"},
            {"name": "Widget", "stock": -1},
            {"name": "Widget", "description": "x" * 2001},
            {"name": "x" * 201},
        ],
    )
    def test_create_rejects_out_of_policy_values(self, body):
        with pytest.raises(ValidationError):
            ProductCreateRequest.model_validate(body)

    def test_update_reports_only_supplied_fields(self):
        payload = ProductUpdateRequest.model_validate({"price": 12.5, "isActive": False})
        assert payload.supplied_fields() == {"price": 12.5, "is_active": False}

    def test_update_null_clears_image_url_only(self):
        payload = ProductUpdateRequest.model_validate({"imageUrl": None, "name": None, "price": None})
        assert payload.supplied_fields() == {"image_url": None}

    def test_update_ignores_owner_and_history_fields(self):
        payload = ProductUpdateRequest.model_validate({"createdBy": 99, "ownerId": 99, "updateHistory": []})
        assert payload.supplied_fields() == {}

    def test_update_validates_each_supplied_field(self):
        with pytest.raises(ValidationError):
            ProductUpdateRequest.model_validate({"price": -1})
        with pytest.raises(ValidationError):
            ProductUpdateRequest.model_validate({"name": ""})
