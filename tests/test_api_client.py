"""Tests for the REST client."""

from __future__ import annotations

import pytest
import requests

from support import BASE_URL, FakeResponse, category_json, transaction_json
from finanzasimple.errors import ApiError, AuthenticationMissingError
from finanzasimple.models import CategoryCreate, CategoryUpdate, TransactionFilters, TransactionPayload
from finanzasimple.services.api import ApiClient


def test_authenticated_call_sends_bearer_token(api, http):
    http.queue(FakeResponse(200, []))

    api.fetch_categories()

    call = http.calls[0]
    assert call.method == "GET"
    assert call.url == f"{BASE_URL}/api/categorias"
    assert call.headers["Authorization"] == "Bearer tok-123"


def test_missing_token_fails_before_any_request(api, http, token_holder):
    token_holder["token"] = None

    with pytest.raises(AuthenticationMissingError):
        api.fetch_transactions()

    assert http.calls == []


def test_non_2xx_uses_server_message(api, http):
    http.queue(FakeResponse(400, {"mensaje": "Nombre duplicado"}))

    with pytest.raises(ApiError) as excinfo:
        api.create_category(CategoryCreate(nombre="Comida", tipo="egreso", orden=1))

    assert str(excinfo.value) == "Nombre duplicado"
    assert excinfo.value.status_code == 400


def test_non_2xx_without_message_uses_generic_text(api, http):
    http.queue(FakeResponse(500, None, invalid_json=True))

    with pytest.raises(ApiError) as excinfo:
        api.delete_category("c1")

    assert str(excinfo.value) == "Error al eliminar categoría"
    assert excinfo.value.status_code == 500


def test_transport_failure_is_normalized_and_not_retried(api, http):
    http.queue(requests.ConnectionError("boom"))

    with pytest.raises(ApiError):
        api.fetch_categories()

    assert len(http.calls) == 1


def test_fetch_categories_filters_by_tipo(api, http):
    http.queue(
        FakeResponse(
            200,
            [
                category_json("a", "Sueldo", "ingreso"),
                category_json("b", "Comida", "egreso"),
            ],
        )
    )

    categories = api.fetch_categories("ingreso")

    assert [c.id for c in categories] == ["a"]


def test_unexpected_shape_becomes_api_error(api, http):
    http.queue(FakeResponse(200, [{"nombre": "sin id"}]))

    with pytest.raises(ApiError):
        api.fetch_categories()


def test_update_category_only_sends_set_fields(api, http):
    http.queue(FakeResponse(200, category_json("c1", "Mercado")))

    updated = api.update_category("c1", CategoryUpdate(nombre="Mercado"))

    assert http.calls[0].method == "PUT"
    assert http.calls[0].json == {"nombre": "Mercado"}
    assert updated.nombre == "Mercado"


def test_visibility_patch_body(api, http):
    http.queue(FakeResponse(200, {"ok": True}))

    api.update_visibility("c1", False)

    call = http.calls[0]
    assert call.method == "PATCH"
    assert call.url.endswith("/api/categorias/c1/visibility")
    assert call.json == {"isVisible": False}


def test_fetch_transactions_sends_filters_as_params(api, http):
    http.queue(FakeResponse(200, [transaction_json("t1", 25000, "ingreso")]))

    result = api.fetch_transactions(
        TransactionFilters(start_date="2024-03-01", end_date="2024-03-31", tipo="ingreso")
    )

    assert http.calls[0].params == {
        "startDate": "2024-03-01",
        "endDate": "2024-03-31",
        "tipo": "ingreso",
    }
    assert result[0].signed_amount == 25000


def test_create_transaction_omits_missing_date(api, http):
    http.queue(FakeResponse(201, {"_id": "t9"}))

    api.create_transaction(TransactionPayload(monto=150000, tipo="egreso", categoria="c1"))

    assert http.calls[0].json == {
        "monto": 150000,
        "tipo": "egreso",
        "categoria": "c1",
        "descripcion": "",
    }


def test_delete_transaction_ignores_empty_body(api, http):
    http.queue(FakeResponse(204, None, invalid_json=True))

    assert api.delete_transaction("t1") is True
    assert http.calls[0].method == "DELETE"


def test_timeout_is_forwarded(http):
    client = ApiClient(BASE_URL + "/", lambda: "tok", http=http, timeout=5.0)
    http.queue(FakeResponse(200, []))

    client.fetch_categories()

    assert http.calls[0].timeout == 5.0
    assert http.calls[0].url == f"{BASE_URL}/api/categorias"


def test_fetch_single_category_and_transaction(api, http):
    http.queue(
        FakeResponse(200, category_json("c1", "Mascotas")),
        FakeResponse(200, transaction_json("t1", 5000)),
    )

    category = api.fetch_category("c1")
    transaction = api.fetch_transaction("t1")

    assert category.nombre == "Mascotas"
    assert transaction.monto == 5000
    assert [c.url for c in http.calls] == [
        f"{BASE_URL}/api/categorias/c1",
        f"{BASE_URL}/api/transacciones/t1",
    ]
