import importlib
import sys
import logging

import pytest


def load_app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    for module in ["main", "app.config"]:
        if module in sys.modules:
            del sys.modules[module]
    entry = importlib.import_module("main")
    return entry.app


@pytest.fixture()
def test_client(monkeypatch):
    app = load_app(monkeypatch)
    app.config.update(TESTING=True)
    return app.test_client()


def test_request_id_header_and_propagation(test_client):
    resp = test_client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_logs_include_request_id_attribute(monkeypatch, caplog):
    app = load_app(monkeypatch)
    app.config.update(TESTING=True)
    caplog.set_level("INFO")
    client = app.test_client()
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_sensitive_fields_masked_in_info(monkeypatch, caplog):
    from app.logging import MaskingFilter
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    app = load_app(monkeypatch)
    app.config.update(TESTING=True)
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    with app.app_context():
        logger.info({"email": "user@example.com", "otp": "123456"})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert isinstance(record.msg, dict)
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["otp"] == "[REDACTED]"


def test_sensitive_fields_visible_in_debug(monkeypatch, caplog):
    from app.logging import MaskingFilter
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    app = load_app(monkeypatch)
    monkeypatch.setenv("APP_ENV", "development")
    app.config.update(TESTING=True)
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    with app.app_context():
        logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert isinstance(record.msg, dict)
    assert record.msg["password"] == "secret"



def test_phone_numbers_masked_in_production(monkeypatch, caplog):
    from app.logging import MaskingFilter, mask_phone
    assert mask_phone("issued for +919876543210") == "issued for ******3210"
    monkeypatch.setenv("APP_ENV", "production")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logging.getLogger("mask_phone_test").info("Tokens issued for %s", "+919876543210")
    record = next(r for r in caplog.records if r.name == "mask_phone_test")
    assert record.getMessage() == "Tokens issued for ******3210"


def test_json_formatter_keeps_unicode_and_exceptions():
    import json
    from app.logging import JsonFormatter
    formatter = JsonFormatter(service="viraddhi-storefront")
    try:
        raise ValueError("bad")
    except ValueError:
        import sys
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "भाषा %s", ("hi",), sys.exc_info())
    out = json.loads(formatter.format(record))
    assert out["message"] == "भाषा hi"
    assert out["service"] == "viraddhi-storefront"
    assert "ValueError" in out["exc"]
