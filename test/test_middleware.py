"""
Structured logging middleware tests
"""

import inspect
import json
import logging

from starlette.middleware.base import BaseHTTPMiddleware

from locale_root.middleware.logging import (
    RequestIdFilter,
    StructuredFormatter,
    StructuredLoggingMiddleware,
    request_id_var,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("locale_root.access", logging.INFO, __file__, 1, "GET /fr/ - 200", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_json_output(self):
        output = json.loads(StructuredFormatter().format(_record(request_id="r-1")))

        assert output["level"] == "INFO"
        assert output["logger"] == "locale_root.access"
        assert output["message"] == "GET /fr/ - 200"
        assert output["request_id"] == "r-1"

    def test_routing_fields_included(self):
        output = json.loads(StructuredFormatter().format(_record(locale="fr_FR", routing_decision="ServeContent")))

        assert output["locale"] == "fr_FR"
        assert output["routing_decision"] == "ServeContent"

    def test_unknown_extras_dropped(self):
        output = json.loads(StructuredFormatter().format(_record(password="hunter2")))
        assert "password" not in output


class TestRequestIdFilter:
    def test_adds_current_request_id(self):
        token = request_id_var.set("req-42")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
            assert record.request_id == "req-42"
        finally:
            request_id_var.reset(token)


class TestStructuredLoggingMiddleware:
    def test_is_base_http_middleware(self):
        assert issubclass(StructuredLoggingMiddleware, BaseHTTPMiddleware)

    def test_dispatch_is_coroutine(self):
        assert inspect.iscoroutinefunction(StructuredLoggingMiddleware.dispatch)

    def test_generates_request_id(self, client):
        response = client.get("/", headers={"Accept-Language": "fr"})
        assert response.headers["x-request-id"]

    def test_access_log_carries_decision(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="locale_root.access"):
            client.get("/fr/")

        records = [r for r in caplog.records if r.name == "locale_root.access"]
        assert records
        assert records[-1].locale == "fr_FR"
        assert records[-1].routing_decision == "ServeContent"
        assert records[-1].status_code == 200

    def test_health_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="locale_root.access"):
            assert client.get("/health").status_code == 200

        assert not [r for r in caplog.records if r.name == "locale_root.access"]
