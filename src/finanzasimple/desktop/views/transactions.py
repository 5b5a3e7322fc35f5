"""Transaction entry view (income or expense)."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import flet as ft

from ...logging_config import get_logger
from ...services.session import APP_ROUTE
from ...services.transactions import TransactionForm
from ..components import CategorySelector, build_app_view
from ..notifier import SnackBarNotifier

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)

TIPO_LABELS = {"egreso": "Gasto", "ingreso": "Ingreso"}


def build_transactions_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the entry form for a new transaction."""

    form = TransactionForm(ctx.api, SnackBarNotifier(page))
    selector = CategorySelector(ctx.api, page, form.tipo, on_change=form.set_category)

    amount_field = ft.TextField(
        label="Monto *",
        hint_text="$0",
        keyboard_type=ft.KeyboardType.NUMBER,
        text_size=28,
        width=360,
    )
    description_field = ft.TextField(
        label="Descripción (opcional)",
        multiline=True,
        min_lines=1,
        max_lines=3,
        width=360,
    )
    date_field = ft.TextField(
        label="Fecha (opcional)",
        hint_text="YYYY-MM-DD",
        width=360,
    )
    save_button = ft.FilledButton("Registrar", icon=ft.Icons.SAVE, width=360)
    tipo_buttons = ft.Row(alignment=ft.MainAxisAlignment.CENTER)

    def _render_tipo() -> None:
        tipo_buttons.controls = [
            ft.ElevatedButton(
                label,
                bgcolor=(
                    (ft.Colors.GREEN if tipo == "ingreso" else ft.Colors.RED)
                    if form.tipo == tipo
                    else None
                ),
                color=ft.Colors.WHITE if form.tipo == tipo else None,
                on_click=lambda _e, t=tipo: _set_tipo(t),
            )
            for tipo, label in TIPO_LABELS.items()
        ]

    def _set_tipo(tipo: str) -> None:
        form.set_tipo(tipo)
        _render_tipo()
        selector.set_tipo(form.tipo)

    def _on_amount_change(e):
        amount_field.value = form.set_amount_input(e.control.value or "")
        page.update()

    def _reset_fields() -> None:
        amount_field.value = form.amount_display
        description_field.value = form.description
        date_field.value = ""
        selector.state.value = form.category
        selector.render()

    def _save(_e):
        date_field.error_text = None
        date_str = (date_field.value or "").strip()
        form.fecha = None
        if date_str:
            try:
                form.fecha = date.fromisoformat(date_str)
            except ValueError:
                date_field.error_text = "Fecha inválida (usa AAAA-MM-DD)"
                page.update()
                return
        form.description = description_field.value or ""
        save_button.disabled = True
        page.update()
        try:
            if form.submit():
                _reset_fields()
        finally:
            save_button.disabled = False
            page.update()

    amount_field.on_change = _on_amount_change
    save_button.on_click = _save
    _render_tipo()

    content = ft.Column(
        [
            ft.Text("Nueva transacción", size=24, weight=ft.FontWeight.BOLD),
            tipo_buttons,
            amount_field,
            ft.Container(content=selector.control, width=360),
            description_field,
            date_field,
            ft.Container(height=8),
            save_button,
        ],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=12,
    )

    view = build_app_view(ctx, page, APP_ROUTE, ctx.config.APP_NAME, content)
    selector.load()
    return view
