"""Relay an access request to the administrator by e-mail (Resend API)."""

from __future__ import annotations

import html
import re
from typing import Any, Optional

import requests

from ..config import BaseConfig
from ..errors import ApiError, ConfigurationError, ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _body(email: str) -> str:
    return (
        "<h2>Nueva solicitud de acceso</h2>"
        "<p>Administrador, has recibido una nueva solicitud de acceso del siguiente correo: "
        f"<br> {html.escape(email)}</p><br>"
        "<p>Saludos,<br>Equipo FinanzaSimple</p>"
    )


def request_access(
    email: str,
    config: BaseConfig,
    *,
    http: Optional[requests.Session] = None,
) -> Any:
    """Send the access request and return the provider's JSON response."""

    email = (email or "").strip()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Ingresa un correo válido", field="email")
    if not config.RESEND_API_KEY or not config.ADMIN_EMAIL:
        raise ConfigurationError("RESEND_API_KEY and ADMIN_EMAIL must be set to relay access requests.")

    client = http or requests.Session()
    try:
        response = client.request(
            "POST",
            config.RESEND_API_URL,
            headers={
                "Authorization": f"Bearer {config.RESEND_API_KEY}",
                "Content-Type": "application/json",
            },
            json={
                "from": config.MAIL_FROM,
                "to": [config.ADMIN_EMAIL],
                "subject": "Solicitud de acceso a FinanzaSimple",
                "html": _body(email),
            },
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.error("Access request relay failed", extra={"error": str(exc)})
        raise ApiError("No se pudo enviar la solicitud de acceso") from exc

    if not response.ok:
        logger.error("Access request rejected by provider", extra={"status": response.status_code})
        raise ApiError("No se pudo enviar la solicitud de acceso", status_code=response.status_code)

    logger.info("Access request sent")
    try:
        return response.json()
    except ValueError:
        return None


__all__ = ["request_access"]
