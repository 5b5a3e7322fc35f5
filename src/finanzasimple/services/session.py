"""Client session lifecycle: token storage, start-up verification, gating.

State machine::

    uninitialized -> verifying -> authenticated | unauthenticated
    authenticated -> unauthenticated   (logout, failed verification)

The store is the only writer of the session record. ``user`` and ``token``
are always set together and cleared together, in memory and in storage.
"""

from __future__ import annotations

import json
import threading
from enum import Enum
from typing import Optional

from ..domain.notifications import PageLike
from ..domain.storage import KeyValueStore
from ..errors import FinanzaSimpleError, StorageError
from ..logging_config import get_logger
from ..models.user import SessionUser
from . import auth
from .api import ApiClient

logger = get_logger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

AUTH_ROUTE = "/auth"
APP_ROUTE = "/app"


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class GuardDecision(str, Enum):
    """What an authenticated view should do right now."""

    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"


class SessionStore:
    """Owns the authenticated user + bearer token pair."""

    def __init__(
        self,
        storage: KeyValueStore,
        client: ApiClient,
        *,
        navigator: Optional[PageLike] = None,
    ) -> None:
        self.storage = storage
        self.client = client
        self.navigator = navigator
        self._state = SessionState.UNINITIALIZED
        self._user: Optional[SessionUser] = None
        self._token: Optional[str] = None
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    def guard(self) -> GuardDecision:
        if self._state in (SessionState.UNINITIALIZED, SessionState.VERIFYING):
            return GuardDecision.LOADING
        if self._state is SessionState.UNAUTHENTICATED:
            return GuardDecision.REDIRECT
        return GuardDecision.RENDER

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def initialize(self) -> SessionState:
        """Verify the persisted token, once, at process start."""

        stored_token = self.storage.get(TOKEN_KEY)
        if not stored_token:
            with self._lock:
                self._drop_session()
            logger.info("No stored session")
            return self._state

        with self._lock:
            self._state = SessionState.VERIFYING

        try:
            result = auth.verify_token(self.client, stored_token)
        except FinanzaSimpleError as exc:
            logger.warning("Session verification failed", extra={"error": str(exc)})
            return self._fail_verification()

        user = result.user or self._stored_user()
        if not result.authenticated or user is None:
            logger.warning("Stored token rejected by backend")
            return self._fail_verification()

        try:
            with self._lock:
                self._set_session(user, stored_token)
        except StorageError:
            return self._fail_verification()
        logger.info("Session restored", extra={"user_id": user.id})
        return self._state

    def login(self, email: str, password: str) -> SessionUser:
        """Log in.

        Rejected credentials leave the current session untouched. If the
        session record cannot be saved, nothing stays stored and
        :class:`StorageError` is raised.
        """

        result = auth.login(self.client, email=email, password=password)
        with self._lock:
            self._set_session(result.user, result.token)
        self._redirect(APP_ROUTE)
        return result.user

    def logout(self) -> None:
        with self._lock:
            self._drop_session()
        logger.info("Logged out")
        self._redirect(AUTH_ROUTE)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fail_verification(self) -> SessionState:
        with self._lock:
            self._drop_session()
        self._redirect(AUTH_ROUTE)
        return self._state

    def _set_session(self, user: SessionUser, token: str) -> None:
        try:
            self.storage.set_many({TOKEN_KEY: token, USER_KEY: user.to_storage()})
        except Exception as exc:
            logger.exception("Could not store session", extra={"user_id": user.id})
            self._drop_session()
            raise StorageError("No se pudo guardar la sesión") from exc
        self._user = user
        self._token = token
        self._state = SessionState.AUTHENTICATED

    def _drop_session(self) -> None:
        self._user = None
        self._token = None
        self._state = SessionState.UNAUTHENTICATED
        try:
            self.storage.clear(TOKEN_KEY, USER_KEY)
        except Exception:  # logout must not fail on a broken store
            logger.exception("Could not clear stored session")

    def _stored_user(self) -> Optional[SessionUser]:
        raw = self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return SessionUser.model_validate(json.loads(raw))
        except ValueError:
            return None

    def _redirect(self, route: str) -> None:
        if self.navigator is not None:
            self.navigator.go(route)


__all__ = [
    "APP_ROUTE",
    "AUTH_ROUTE",
    "GuardDecision",
    "SessionState",
    "SessionStore",
    "TOKEN_KEY",
    "USER_KEY",
]
