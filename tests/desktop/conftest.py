"""Fixtures for desktop (Flet) tests that run headless."""

from __future__ import annotations

import pytest

from finanzasimple.config import TestingConfig
from finanzasimple.desktop.context import create_app_context
from finanzasimple.infra.repositories import MemoryKeyValueStore
from support import DummyPage


@pytest.fixture
def dummy_page():
    return DummyPage()


@pytest.fixture
def app_ctx(http, dummy_page):
    ctx = create_app_context(TestingConfig(), storage=MemoryKeyValueStore(), http=http)
    ctx.attach_page(dummy_page)
    return ctx
