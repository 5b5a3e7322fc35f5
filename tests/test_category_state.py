"""Tests for category selection and management state."""

from __future__ import annotations

import pytest
import requests

from support import FakeResponse, category_json
from finanzasimple.services.categories import CategoryMode, CategoryState
from finanzasimple.services.transactions import TransactionForm


@pytest.fixture
def selections():
    return []


@pytest.fixture
def state(api, http, notifier, selections):
    http.queue(
        FakeResponse(
            200,
            [
                category_json("d1", "📝 Otros Gastos", default=True),
                category_json("d2", "🚗 Transporte", default=True),
                category_json("c1", "Mascotas", orden=1),
                category_json("c2", "Gimnasio", orden=2, visible=False),
                category_json("i1", "Sueldo", "ingreso"),
            ],
        )
    )
    category_state = CategoryState(api, notifier, "egreso", on_change=selections.append)
    assert category_state.load()
    http.calls.clear()
    return category_state


def test_load_keeps_only_tipo_and_collects_hidden(state):
    assert [c.id for c in state.categories] == ["d1", "d2", "c1", "c2"]
    assert state.hidden == {"c2"}


def test_selection_mode_hides_hidden_categories(state):
    assert [c.id for c in state.grouped().custom] == ["c1"]
    assert [c.id for c in state.grouped().default] == ["d1", "d2"]

    state.toggle_mode()

    assert state.mode is CategoryMode.MANAGEMENT
    assert state.is_open
    assert [c.id for c in state.grouped().custom] == ["c1", "c2"]


def test_toggle_visibility_on_default_is_a_no_op(state, http):
    state.toggle_visibility("d1")

    assert http.calls == []
    assert "d1" not in state.hidden


def test_toggle_visibility_hides_and_shows(state, http):
    http.queue(FakeResponse(200, {}), FakeResponse(200, {}))

    state.toggle_visibility("c1")
    assert "c1" in state.hidden
    assert http.calls[0].json == {"isVisible": False}
    assert state.find("c1").is_visible is False

    state.toggle_visibility("c1")
    assert "c1" not in state.hidden
    assert http.calls[1].json == {"isVisible": True}


def test_toggle_visibility_failure_keeps_state(state, http, notifier):
    http.queue(FakeResponse(500, {}))

    state.toggle_visibility("c1")

    assert "c1" not in state.hidden
    assert notifier.errors


def test_create_appends_selects_and_notifies(state, http, notifier, selections):
    http.queue(FakeResponse(201, category_json("c9", "Regalos", orden=5)))

    created = state.create("  Regalos ")

    assert created.id == "c9"
    assert http.calls[0].json == {"nombre": "Regalos", "tipo": "egreso", "orden": 5}
    assert state.categories[-1].id == "c9"
    assert state.value == "c9"
    assert selections == ["c9"]
    assert notifier.successes


def test_create_with_blank_name_is_ignored(state, http):
    assert state.create("   ") is None
    assert http.calls == []


def test_created_category_flows_into_transaction_payload(api, state, http, notifier):
    form = TransactionForm(api, notifier)
    state.on_change = form.set_category
    http.queue(FakeResponse(201, category_json("c9", "Regalos")))

    state.create("Regalos")
    form.set_amount_input("20000")

    payload = form.build_payload()
    assert payload.categoria == "c9"
    assert payload.monto == 20000


def test_rename_to_same_name_makes_no_call(state, http):
    assert state.begin_edit("c1")
    state.set_edit_value("Mascotas ")

    assert state.submit_edit() is None
    assert http.calls == []
    assert state.editing_id is None


def test_rename_blank_makes_no_call(state, http):
    state.begin_edit("c1")
    state.set_edit_value("  ")

    state.submit_edit()

    assert http.calls == []


def test_rename_replaces_in_place(state, http):
    http.queue(FakeResponse(200, category_json("c1", "Perros", orden=1)))
    state.begin_edit("c1")
    state.set_edit_value("Perros")

    updated = state.submit_edit()

    assert updated.nombre == "Perros"
    assert http.calls[0].json == {"nombre": "Perros"}
    assert [c.nombre for c in state.categories][2] == "Perros"
    assert state.editing_id is None


def test_defaults_cannot_be_edited_or_deleted(state):
    assert state.begin_edit("d1") is False
    assert state.request_delete("d2") is False
    assert state.pending_delete is None


def test_delete_selected_category_clears_selection(state, http, notifier, selections):
    state.select("c1")
    http.queue(FakeResponse(204, None, invalid_json=True))

    assert state.request_delete("c1")
    assert state.confirm_delete()

    assert state.find("c1") is None
    assert state.value == ""
    assert selections == ["c1", ""]
    assert any("📝 Otros Gastos" in msg for msg in notifier.successes)


def test_delete_last_custom_category(api, http, notifier):
    http.queue(FakeResponse(200, [category_json("c1", "Única")]))
    only = CategoryState(api, notifier, "egreso", value="c1")
    only.load()
    http.queue(FakeResponse(200, None, invalid_json=True))

    only.request_delete("c1")
    only.confirm_delete()

    assert only.categories == []
    assert only.value == ""


def test_delete_failure_keeps_category(state, http, notifier):
    http.queue(FakeResponse(500, {"message": "No se puede"}))
    state.request_delete("c1")

    assert state.confirm_delete() is False
    assert state.find("c1") is not None
    assert state.pending_delete is None
    assert notifier.errors == ["No se puede"]


def test_set_tipo_reloads_and_drops_foreign_selection(state, http, selections):
    state.select("c1")
    http.queue(FakeResponse(200, [category_json("i1", "Sueldo", "ingreso")]))

    state.set_tipo("ingreso")

    assert [c.id for c in state.categories] == ["i1"]
    assert state.value == ""
    assert selections[-1] == ""


def test_load_failure_notifies(api, http, notifier):
    http.queue(FakeResponse(500, {}))
    failing = CategoryState(api, notifier, "egreso")

    assert failing.load() is False
    assert notifier.errors


def test_set_tipo_failure_empties_cache_and_selection(api, state, http, notifier, selections):
    form = TransactionForm(api, notifier)
    state.on_change = form.set_category
    state.select("c1")
    form.set_amount_input("1000")
    http.queue(requests.ConnectionError("down"))

    form.set_tipo("ingreso")
    state.set_tipo("ingreso")

    assert state.tipo == "ingreso"
    assert state.categories == []
    assert state.hidden == set()
    assert state.value == ""
    assert state.selected is None
    assert form.category == ""
    assert notifier.errors
