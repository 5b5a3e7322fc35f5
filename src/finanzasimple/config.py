"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

from .errors import ConfigurationError

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinanzaSimple"
    DB_FILENAME = "finanzasimple.db"
    DEFAULT_BACK_URL = "http://localhost:4000"
    RESEND_API_URL = "https://api.resend.com/emails"
    MAIL_FROM = "FinanzaSimple <onboarding@resend.dev>"

    def __init__(self) -> None:
        back_url = os.getenv("BACK_URL")
        self.DEV_MODE = _env_bool("FINANZASIMPLE_DEV_MODE", default=True)
        if not self.DEV_MODE and not back_url:
            raise ConfigurationError("BACK_URL must be set in non-dev mode.")
        self.BACK_URL = (back_url or self.DEFAULT_BACK_URL).rstrip("/")
        self.ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
        self.RESEND_API_KEY = os.getenv("RESEND_API_KEY")
        self.REQUEST_TIMEOUT = _env_float("FINANZASIMPLE_REQUEST_TIMEOUT")
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("FINANZASIMPLE_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the local state DB and logs live."""

        data_root = os.getenv("FINANZASIMPLE_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        return {"connect_args": {"check_same_thread": False}}


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; state lives in memory."""

    DEBUG = False
    TESTING = True

    def _build_sqlite_url(self) -> str:
        return "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        # A single shared connection keeps the in-memory schema alive.
        options = super().sqlalchemy_engine_options()
        options["poolclass"] = StaticPool
        return options
