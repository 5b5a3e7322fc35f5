"""Edit dialog for an existing transaction.

Pre-fills amount, category, description and date from the stored
transaction and sends a full update on save. The date goes out only when
the user picks a different day, so an untouched one keeps its stored time.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ....logging_config import get_logger
from ....models.transaction import Transaction
from ....services.transactions import TransactionForm
from ...notifier import SnackBarNotifier
from ..category_selector import CategorySelector

if TYPE_CHECKING:
    from ...context import AppContext

logger = get_logger(__name__)


def show_transaction_dialog(
    ctx: AppContext,
    page: ft.Page,
    transaction: Transaction,
    on_save_callback: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show the edit dialog for ``transaction``.

    Args:
        ctx: Application context
        page: Flet page
        transaction: Transaction to edit
        on_save_callback: Called after a successful save, before closing
    """

    def _close(_=None):
        dialog.open = False
        page.update()

    form = TransactionForm(
        ctx.api,
        SnackBarNotifier(page),
        transaction=transaction,
        on_saved=on_save_callback,
        on_close=_close,
    )

    amount_field = ft.TextField(
        label="Monto *",
        value=form.amount_display,
        keyboard_type=ft.KeyboardType.NUMBER,
        width=200,
    )
    date_field = ft.TextField(
        label="Fecha",
        value=form.fecha.isoformat() if form.fecha else "",
        hint_text="YYYY-MM-DD",
        width=200,
    )
    description_field = ft.TextField(
        label="Descripción (opcional)",
        value=form.description,
        multiline=True,
        min_lines=1,
        max_lines=3,
        width=420,
    )
    selector = CategorySelector(
        ctx.api,
        page,
        form.tipo,
        value=form.category,
        on_change=form.set_category,
    )

    def _on_amount_change(e):
        amount_field.value = form.set_amount_input(e.control.value or "")
        page.update()

    amount_field.on_change = _on_amount_change

    def _save(_):
        date_field.error_text = None
        date_str = (date_field.value or "").strip()
        if not date_str:
            date_field.error_text = "La fecha es obligatoria"
            page.update()
            return
        try:
            form.fecha = date.fromisoformat(date_str)
        except ValueError:
            date_field.error_text = "Fecha inválida (usa AAAA-MM-DD)"
            page.update()
            return
        form.description = description_field.value or ""
        if form.submit():
            logger.info("Transaction dialog saved", extra={"transaction_id": transaction.id})

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Editar transacción"),
        content=ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text(
                        "Ingreso" if form.tipo == "ingreso" else "Gasto",
                        weight=ft.FontWeight.BOLD,
                        color=ft.Colors.GREEN if form.tipo == "ingreso" else ft.Colors.RED,
                    ),
                    ft.Row([amount_field, date_field], spacing=10),
                    selector.control,
                    description_field,
                ],
                tight=True,
                spacing=12,
                scroll=ft.ScrollMode.AUTO,
            ),
            width=460,
        ),
        actions=[
            ft.TextButton("Cancelar", on_click=_close),
            ft.ElevatedButton("Guardar cambios", icon=ft.Icons.SAVE, on_click=_save),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )

    page.dialog = dialog
    dialog.open = True
    selector.load()
    return dialog
