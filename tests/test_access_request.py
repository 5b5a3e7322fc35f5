"""Tests for relaying access requests by e-mail."""

from __future__ import annotations

import pytest
import requests

from support import FakeHttp, FakeResponse
from finanzasimple.config import TestingConfig
from finanzasimple.errors import ApiError, ConfigurationError, ValidationError
from finanzasimple.services.access_request import request_access


@pytest.fixture
def mail_config(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")
    return TestingConfig()


def test_sends_mail_to_admin(mail_config):
    http = FakeHttp().queue(FakeResponse(200, {"id": "mail-1"}))

    result = request_access("nuevo@example.com", mail_config, http=http)

    assert result == {"id": "mail-1"}
    call = http.calls[0]
    assert call.url == mail_config.RESEND_API_URL
    assert call.headers["Authorization"] == "Bearer re_test"
    assert call.json["to"] == ["admin@example.com"]
    assert "nuevo@example.com" in call.json["html"]


def test_email_is_escaped(mail_config):
    http = FakeHttp().queue(FakeResponse(200, {}))

    request_access("a<b>@example.com", mail_config, http=http)

    assert "<b>" not in http.calls[0].json["html"].split("<br>")[1]


def test_invalid_email_is_rejected(mail_config):
    http = FakeHttp()

    with pytest.raises(ValidationError):
        request_access("no-es-correo", mail_config, http=http)

    assert http.calls == []


def test_missing_configuration(config):
    with pytest.raises(ConfigurationError):
        request_access("nuevo@example.com", config, http=FakeHttp())


@pytest.mark.parametrize(
    "response",
    [FakeResponse(422, {"message": "invalid"}), requests.Timeout("slow")],
)
def test_provider_failures_raise_api_error(mail_config, response):
    http = FakeHttp().queue(response)

    with pytest.raises(ApiError):
        request_access("nuevo@example.com", mail_config, http=http)
