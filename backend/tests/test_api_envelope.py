import json

from storefront.api.envelope import error_envelope, success_envelope
from storefront.core.request_context import set_request_id


def test_success_envelope_shape() -> None:
    response = success_envelope({"value": 1}, status_code=201, message="Created")
    body = json.loads(response.body.decode("utf-8"))
    assert response.status_code == 201
    assert body["ok"] is True
    assert body["data"] == {"value": 1}
    assert body["message"] == "Created"
    assert isinstance(body.get("meta"), dict)


def test_error_envelope_shape() -> None:
    response = error_envelope(code="forbidden", message="Forbidden: not the product owner", status_code=403)
    body = json.loads(response.body.decode("utf-8"))
    assert response.status_code == 403
    assert body["ok"] is False
    assert body["data"] is None
    assert body["error"]["code"] == "forbidden"
    assert body["message"] == body["error"]["message"]


def test_meta_carries_request_id() -> None:
    set_request_id("req-abc")
    try:
        body = json.loads(success_envelope(None).body.decode("utf-8"))
    finally:
        set_request_id("")
    assert body["meta"]["request_id"] == "req-abc"
