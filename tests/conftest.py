"""Pytest configuration and shared fixtures for FinanzaSimple tests.

Services are exercised against the scripted HTTP fake in ``support`` so no
backend is needed.
"""

from __future__ import annotations

import pytest

from finanzasimple.config import TestingConfig
from finanzasimple.infra.repositories import MemoryKeyValueStore
from finanzasimple.services.api import ApiClient
from support import BASE_URL, FakeHttp, PageSpy, RecordingNotifier


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config, logs and the local DB inside a temp directory."""

    monkeypatch.setenv("FINANZASIMPLE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FINANZASIMPLE_DEV_MODE", "true")
    for name in (
        "BACK_URL",
        "FINANZASIMPLE_DATABASE_URL",
        "FINANZASIMPLE_REQUEST_TIMEOUT",
        "RESEND_API_KEY",
        "ADMIN_EMAIL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def config():
    return TestingConfig()


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def token_holder():
    """Mutable token source for the client under test."""

    return {"token": "tok-123"}


@pytest.fixture
def api(http, token_holder):
    return ApiClient(BASE_URL, lambda: token_holder["token"], http=http)


@pytest.fixture
def storage():
    return MemoryKeyValueStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def page_spy():
    return PageSpy()
