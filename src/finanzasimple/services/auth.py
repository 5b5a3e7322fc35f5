"""Calls against the backend's auth endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import ValidationError as SchemaError

from ..errors import ApiError, AuthenticationInvalidError, ValidationError
from ..logging_config import get_logger
from ..models.user import SessionUser
from .api import ApiClient

logger = get_logger(__name__)

_REJECTED_STATUSES = {400, 401, 403}


@dataclass(frozen=True)
class LoginResult:
    """User and bearer token returned by a successful login."""

    user: SessionUser
    token: str


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of ``GET /api/auth/verify``."""

    authenticated: bool
    user: Optional[SessionUser] = None


def _user_from(payload: Any) -> Optional[SessionUser]:
    if not isinstance(payload, Mapping):
        return None
    try:
        return SessionUser.model_validate(payload)
    except SchemaError:
        return None


def login(client: ApiClient, *, email: str, password: str) -> LoginResult:
    """Exchange credentials for a bearer token."""

    email = email.strip()
    if not email or not password:
        raise ValidationError("El correo y la contraseña son obligatorios")

    try:
        data = client.request(
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
            error_message="Error al iniciar sesión",
        )
    except ApiError as exc:
        if exc.status_code in _REJECTED_STATUSES:
            raise AuthenticationInvalidError(exc.message) from exc
        raise

    user = _user_from(data)
    token = data.get("token") if isinstance(data, Mapping) else None
    if user is None or not token:
        raise ApiError("Respuesta de inicio de sesión inválida")
    logger.info("Login accepted", extra={"user_id": user.id})
    return LoginResult(user=user, token=token)


def verify_token(client: ApiClient, token: str) -> VerifyResult:
    """Ask the backend whether ``token`` is still valid.

    Raises ``ApiError`` on transport or non-2xx failures; callers treat any
    exception as a failed verification.
    """

    data = client.request(
        "GET",
        "/api/auth/verify",
        headers=client.auth_headers(token),
        authenticated=False,
        error_message="Error al verificar la sesión",
    )
    if not isinstance(data, Mapping):
        return VerifyResult(authenticated=False)
    return VerifyResult(
        authenticated=data.get("authenticated") is True,
        user=_user_from(data.get("user")),
    )


__all__ = ["LoginResult", "VerifyResult", "login", "verify_token"]
