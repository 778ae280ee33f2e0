from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from storefront.core.request_context import set_request_id
from storefront.models import ActivityAction
from storefront.services import activity_recorder as recorder_module
from storefront.services.activity_recorder import ActivityRecorder


class _SessionStub:
    def __init__(self, fail_commit: bool = False):
        self.fail_commit = fail_commit
        self.committed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc):
        return False

    async def commit(self):
        if self.fail_commit:
            raise OperationalError("COMMIT", {}, Exception("database is locked"))
        self.committed = True


def _factory(session):
    return lambda: session


@pytest.mark.asyncio
async def test_record_writes_entry_with_request_context(monkeypatch) -> None:
    session = _SessionStub()
    captured = {}

    async def _add(_db, **kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(recorder_module.activity_repository, "add", _add)
    request = SimpleNamespace(
        headers={"user-agent": "pytest", "x-forwarded-for": "203.0.113.9, 10.0.0.1"},
        client=SimpleNamespace(host="127.0.0.1"),
    )

    set_request_id("req-123")
    try:
        await ActivityRecorder(_factory(session)).record(
            7,
            ActivityAction.UPDATE_PRODUCT,
            resource_type="Product",
            resource_id=42,
            meta={"changes": {"price": {"old": 1.0, "new": 2.0}}},
            request=request,
        )
    finally:
        set_request_id("")

    assert session.committed is True
    assert captured["action"] == "UPDATE_PRODUCT"
    assert captured["resource_id"] == "42"
    assert captured["ip_address"] == "203.0.113.9"
    assert captured["user_agent"] == "pytest"
    assert captured["request_id"] == "req-123"


@pytest.mark.asyncio
async def test_record_allows_anonymous_actor(monkeypatch) -> None:
    captured = {}

    async def _add(_db, **kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(recorder_module.activity_repository, "add", _add)

    await ActivityRecorder(_factory(_SessionStub())).record(None, ActivityAction.LOGIN_FAILED, meta={"email": "x@y.com"})

    assert captured["actor_id"] is None
    assert captured["resource_id"] is None
    assert captured["ip_address"] is None


@pytest.mark.asyncio
async def test_store_failure_is_swallowed(monkeypatch) -> None:
    async def _add(_db, **_kwargs):
        return None

    monkeypatch.setattr(recorder_module.activity_repository, "add", _add)

    # Must not raise.
    await ActivityRecorder(_factory(_SessionStub(fail_commit=True))).record(1, ActivityAction.LOGIN)


@pytest.mark.asyncio
async def test_unavailable_store_is_swallowed() -> None:
    def _broken_factory():
        raise ConnectionRefusedError("store unavailable")

    await ActivityRecorder(_broken_factory).record(1, ActivityAction.GET_PRODUCTS)


@pytest.mark.asyncio
async def test_serialization_failure_is_swallowed(monkeypatch) -> None:
    async def _add(_db, **kwargs):
        raise TypeError("Object of type set is not JSON serializable")

    monkeypatch.setattr(recorder_module.activity_repository, "add", _add)

    await ActivityRecorder(_factory(_SessionStub())).record(1, ActivityAction.CREATE_PRODUCT, meta={"bad": {1, 2}})


@pytest.mark.asyncio
async def test_purge_reports_removed_count_and_failure(monkeypatch) -> None:
    async def _purge(_db, *, retention_days):
        assert retention_days == 90
        return 4

    monkeypatch.setattr(recorder_module.activity_repository, "purge_expired", _purge)
    assert await ActivityRecorder(_factory(_SessionStub())).purge_expired(90) == 4
    assert await ActivityRecorder(_factory(_SessionStub(fail_commit=True))).purge_expired(90) == -1
