"""Per-request identifiers shared by the log middleware, envelopes and activity records."""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4


request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "x-request-id"


def new_request_id() -> str:
    return f"req-{uuid4().hex[:20]}"


def set_request_id(value: str) -> None:
    request_id_ctx.set(value or "")


def get_request_id() -> str:
    return request_id_ctx.get("")
