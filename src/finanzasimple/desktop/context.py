"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft
import requests

from ..config import BaseConfig
from ..domain.storage import KeyValueStore
from ..infra.database import bootstrap_database
from ..infra.repositories import SQLModelKeyValueStore
from ..services.api import ApiClient
from ..services.session import SessionStore


@dataclass
class AppContext:
    """Explicitly owned services shared by every view.

    ``session`` is the single writer of the authenticated user/token pair;
    ``api`` reads the token from it on every call.
    """

    config: BaseConfig
    storage: KeyValueStore
    api: ApiClient
    session: SessionStore

    page: Optional[ft.Page] = None
    dev_mode: bool = False

    def attach_page(self, page: ft.Page) -> None:
        self.page = page
        self.session.navigator = page


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    storage: Optional[KeyValueStore] = None,
    http: Optional[requests.Session] = None,
) -> AppContext:
    """Create and wire the application context (no network I/O)."""

    if config is None:
        config = BaseConfig()

    if storage is None:
        _engine, session_factory = bootstrap_database(config)
        storage = SQLModelKeyValueStore(session_factory)

    session: SessionStore
    api = ApiClient(
        config.BACK_URL,
        lambda: session.token,
        http=http,
        timeout=config.REQUEST_TIMEOUT,
    )
    session = SessionStore(storage, api)

    return AppContext(
        config=config,
        storage=storage,
        api=api,
        session=session,
        dev_mode=config.DEV_MODE,
    )
