"""Tests for log context propagation and the JSON formatter."""
import json
import logging

import pytest
from httpx import AsyncClient

from app.core.logging import ContextFilter, JSONFormatter, request_id_var, tick_var


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("engine.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestContextFilter:
    def test_no_context(self):
        record = _record()
        assert ContextFilter().filter(record) is True
        assert record.context == ""
        assert record.tick is None

    def test_request_and_tick(self):
        rid_token = request_id_var.set("abc123")
        tick_token = tick_var.set(7)
        try:
            record = _record()
            ContextFilter().filter(record)
        finally:
            tick_var.reset(tick_token)
            request_id_var.reset(rid_token)
        assert record.context == "(req=abc123 tick=7) "


class TestJSONFormatter:
    def test_fields(self):
        record = _record(mode="offline", fallback=True, tick_count=3)
        tick_token = tick_var.set(3)
        try:
            ContextFilter().filter(record)
        finally:
            tick_var.reset(tick_token)

        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "engine.test"
        assert entry["tick"] == 3
        assert entry["mode"] == "offline"
        assert entry["fallback"] is True
        assert "request_id" not in entry

    def test_exception(self):
        try:
            raise RuntimeError("bad tick")
        except RuntimeError:
            import sys

            record = logging.LogRecord(
                "engine.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: bad tick" in entry["exception"]


class TestRequestId:
    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client: AsyncClient):
        resp = await client.get("/health", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client: AsyncClient):
        resp = await client.get("/api/v1/energy/mode")
        assert len(resp.headers["X-Request-ID"]) == 8
