"""REST client for the FinanzaSimple backend.

Every call is synchronous and raises on failure:

- ``AuthenticationMissingError`` before any I/O when no token is available
- ``ApiError`` for non-2xx responses (server message when present),
  transport failures and undecodable bodies

Callers own the user-facing messaging; nothing is retried here.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

import requests
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..errors import ApiError, AuthenticationMissingError
from ..logging_config import get_logger
from ..models.category import Category, CategoryCreate, CategoryUpdate, TipoTransaccion
from ..models.transaction import Transaction, TransactionFilters, TransactionPayload

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]

_SERVER_MESSAGE_KEYS = ("mensaje", "message", "error")


def _parse(model: type[BaseModel], data: Any, error_message: str) -> Any:
    """Validate a response body, reporting schema mismatches as ``ApiError``."""

    try:
        return model.model_validate(data)
    except SchemaError as exc:
        logger.warning("Unexpected response shape", extra={"model": model.__name__})
        raise ApiError(error_message) from exc


def _server_message(response: requests.Response) -> Optional[str]:
    """Best-effort extraction of the backend's error message."""

    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        for key in _SERVER_MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return None


class ApiClient:
    """Thin wrapper over ``requests`` that attaches the session token."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        *,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.http = http or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def auth_headers(self, token: Optional[str] = None) -> dict[str, str]:
        token = token if token is not None else self.token_provider()
        if not token:
            raise AuthenticationMissingError()
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        json: Any = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        authenticated: bool = True,
        expect_body: bool = True,
    ) -> Any:
        """Issue a request and return the decoded JSON body."""

        merged: dict[str, str] = {}
        if authenticated:
            merged.update(self.auth_headers())
        if json is not None:
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)

        url = f"{self.base_url}{path}"
        logger.debug("API request", extra={"method": method, "path": path})
        try:
            response = self.http.request(
                method,
                url,
                headers=merged,
                json=json,
                params=dict(params) if params else None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(
                "API transport failure",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            raise ApiError(error_message) from exc

        if not response.ok:
            message = _server_message(response) or error_message
            logger.warning(
                "API error response",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise ApiError(message, status_code=response.status_code)

        if not expect_body:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(error_message, status_code=response.status_code) from exc

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def fetch_categories(self, tipo: Optional[TipoTransaccion] = None) -> list[Category]:
        """Return the user's categories, optionally only those of ``tipo``."""

        message = "Error al obtener categorías"
        data = self.request("GET", "/api/categorias", error_message=message)
        categories = [_parse(Category, item, message) for item in data or []]
        if tipo is not None:
            categories = [cat for cat in categories if cat.tipo == tipo]
        return categories

    def fetch_category(self, category_id: str) -> Category:
        data = self.request(
            "GET",
            f"/api/categorias/{category_id}",
            error_message="Error al obtener la categoría",
        )
        return _parse(Category, data, "Error al obtener la categoría")

    def create_category(self, payload: CategoryCreate) -> Category:
        data = self.request(
            "POST",
            "/api/categorias",
            json=payload.model_dump(by_alias=True, exclude_none=True),
            error_message="Error al crear categoría",
        )
        return _parse(Category, data, "Error al crear categoría")

    def update_category(self, category_id: str, updates: CategoryUpdate) -> Category:
        data = self.request(
            "PUT",
            f"/api/categorias/{category_id}",
            json=updates.model_dump(by_alias=True, exclude_none=True),
            error_message="Error al actualizar categoría",
        )
        return _parse(Category, data, "Error al actualizar categoría")

    def delete_category(self, category_id: str) -> bool:
        self.request(
            "DELETE",
            f"/api/categorias/{category_id}",
            error_message="Error al eliminar categoría",
            expect_body=False,
        )
        return True

    def update_visibility(self, category_id: str, is_visible: bool) -> Any:
        return self.request(
            "PATCH",
            f"/api/categorias/{category_id}/visibility",
            json={"isVisible": is_visible},
            error_message="Error al actualizar la visibilidad de la categoría",
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def fetch_transactions(self, filters: Optional[TransactionFilters] = None) -> list[Transaction]:
        params = filters.as_params() if filters else None
        message = "Error al obtener las transacciones"
        data = self.request("GET", "/api/transacciones", params=params, error_message=message)
        return [_parse(Transaction, item, message) for item in data or []]

    def fetch_transaction(self, transaction_id: str) -> Transaction:
        data = self.request(
            "GET",
            f"/api/transacciones/{transaction_id}",
            error_message="Error al obtener la transacción",
        )
        return _parse(Transaction, data, "Error al obtener la transacción")

    def create_transaction(self, payload: TransactionPayload) -> Any:
        return self.request(
            "POST",
            "/api/transacciones",
            json=payload.model_dump(exclude_none=True),
            error_message="Error al crear la transacción",
        )

    def update_transaction(self, transaction_id: str, payload: TransactionPayload) -> Any:
        return self.request(
            "PUT",
            f"/api/transacciones/{transaction_id}",
            json=payload.model_dump(exclude_none=True),
            error_message="Error al actualizar la transacción",
        )

    def delete_transaction(self, transaction_id: str) -> bool:
        self.request(
            "DELETE",
            f"/api/transacciones/{transaction_id}",
            error_message="Error al eliminar la transacción",
            expect_body=False,
        )
        return True


__all__ = ["ApiClient", "TokenProvider"]
