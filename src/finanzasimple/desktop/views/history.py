"""History view: filtered transaction list with balance summary."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import flet as ft

from ...logging_config import get_logger
from ...services.dates import TIME_RANGE_LABELS, TimeRange
from ...services.history import TransactionHistory, TransactionRow, TypeFilter, ViewMode
from ...services.money import format_currency, format_signed
from ..components import build_app_view, build_stat_card
from ..components.dialogs import show_transaction_dialog
from ..navigation import HISTORY_ROUTE
from ..notifier import SnackBarNotifier

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)

TYPE_FILTER_LABELS = {
    TypeFilter.ALL: "Todos",
    TypeFilter.INCOME: "Ingresos",
    TypeFilter.EXPENSE: "Gastos",
}

_WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


def format_day_heading(day: date) -> str:
    return f"{_WEEKDAYS[day.weekday()]}, {day.day} de {_MONTHS[day.month - 1]} de {day.year}"


def build_history_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the history page for ``/app/historial``."""

    notifier = SnackBarNotifier(page)
    history = TransactionHistory(ctx.api, notifier)

    filter_row = ft.Row(wrap=True, spacing=8)
    range_row = ft.Row(wrap=True, spacing=8)
    summary_row = ft.ResponsiveRow()
    list_column = ft.Column(spacing=8)
    detail_container = ft.Container()

    start_field = ft.TextField(label="Desde", hint_text="YYYY-MM-DD", width=160)
    end_field = ft.TextField(label="Hasta", hint_text="YYYY-MM-DD", width=160)

    def _chip(label: str, selected: bool, on_click) -> ft.Control:
        if selected:
            return ft.FilledButton(label, on_click=on_click)
        return ft.OutlinedButton(label, on_click=on_click)

    def _render_filters() -> None:
        filter_row.controls = [
            _chip(label, history.type_filter is tf, lambda _e, tf=tf: _run(history.set_type_filter, tf))
            for tf, label in TYPE_FILTER_LABELS.items()
        ]
        mode_toggle = ft.TextButton(
            "Rango personalizado" if history.view_mode is ViewMode.QUICK else "Rangos rápidos",
            icon=ft.Icons.DATE_RANGE,
            on_click=lambda _e: _run(
                history.set_view_mode,
                ViewMode.CUSTOM if history.view_mode is ViewMode.QUICK else ViewMode.QUICK,
            ),
        )
        if history.view_mode is ViewMode.QUICK:
            range_row.controls = [
                _chip(label, history.time_range is tr, lambda _e, tr=tr: _run(history.set_time_range, tr))
                for tr, label in TIME_RANGE_LABELS.items()
            ] + [mode_toggle]
        else:
            start, end = history.custom_range
            start_field.value = start.isoformat()
            end_field.value = end.isoformat()
            range_row.controls = [
                start_field,
                end_field,
                ft.FilledButton("Aplicar", icon=ft.Icons.SEARCH, on_click=_apply_custom_range),
                mode_toggle,
            ]

    def _render_summary() -> None:
        summary = history.summary()
        summary_row.controls = [
            ft.Container(
                content=build_stat_card(
                    "Balance",
                    format_signed(summary.balance),
                    ft.Colors.GREEN if summary.balance >= 0 else ft.Colors.RED,
                ),
                col={"sm": 12, "md": 4},
            ),
            ft.Container(
                content=build_stat_card("Ingresos", format_currency(summary.total_ingresos), ft.Colors.GREEN),
                col={"sm": 12, "md": 4},
            ),
            ft.Container(
                content=build_stat_card("Gastos", format_currency(summary.total_gastos), ft.Colors.RED),
                col={"sm": 12, "md": 4},
            ),
        ]

    def _build_row(row: TransactionRow) -> ft.Control:
        lines = [ft.Text(row.category_name, weight=ft.FontWeight.BOLD)]
        if row.description:
            lines.append(ft.Text(row.description, size=12, color=ft.Colors.ON_SURFACE_VARIANT))
        selected = history.selected is not None and history.selected.id == row.transaction_id
        return ft.Container(
            content=ft.Row(
                [
                    ft.Column(lines, spacing=2, expand=True),
                    ft.Text(
                        row.amount_text,
                        weight=ft.FontWeight.BOLD,
                        color=ft.Colors.GREEN if row.amount_text.startswith("+") else ft.Colors.RED,
                    ),
                ]
            ),
            padding=12,
            border_radius=8,
            bgcolor=ft.Colors.SECONDARY_CONTAINER if selected else None,
            on_click=lambda _e, tid=row.transaction_id: _select(tid),
        )

    def _render_list() -> None:
        if history.is_loading:
            list_column.controls = [ft.ProgressRing()]
            return
        if history.error:
            list_column.controls = [ft.Text(history.error, color=ft.Colors.ERROR)]
            return
        groups = history.grouped_by_day()
        if not groups:
            list_column.controls = [
                ft.Text("No hay transacciones en este período", color=ft.Colors.ON_SURFACE_VARIANT)
            ]
            return
        controls: list[ft.Control] = []
        for day, rows in groups.items():
            controls.append(ft.Text(format_day_heading(day), size=14, weight=ft.FontWeight.W_500))
            controls.extend(_build_row(row) for row in rows)
        list_column.controls = controls

    def _render_detail() -> None:
        txn = history.selected
        if txn is None:
            detail_container.content = None
            return
        detail_container.content = ft.Card(
            content=ft.Container(
                content=ft.Column(
                    [
                        ft.Text(txn.categoria.nombre, size=18, weight=ft.FontWeight.BOLD),
                        ft.Text(format_signed(txn.signed_amount), size=22),
                        ft.Text(txn.descripcion or "Sin descripción", color=ft.Colors.ON_SURFACE_VARIANT),
                        ft.Row(
                            [
                                ft.TextButton("Cerrar", on_click=lambda _e: _clear_selection()),
                                ft.OutlinedButton("Editar", icon=ft.Icons.EDIT, on_click=lambda _e: _edit()),
                                ft.FilledButton(
                                    "Eliminar",
                                    icon=ft.Icons.DELETE,
                                    style=ft.ButtonStyle(bgcolor=ft.Colors.ERROR, color=ft.Colors.ON_ERROR),
                                    on_click=lambda _e: _confirm_delete(),
                                ),
                            ],
                            alignment=ft.MainAxisAlignment.END,
                        ),
                    ],
                    spacing=6,
                ),
                padding=16,
            )
        )

    def render() -> None:
        _render_filters()
        _render_summary()
        _render_list()
        _render_detail()
        page.update()

    def _run(action, *args) -> None:
        action(*args)
        render()

    def _apply_custom_range(_e) -> None:
        try:
            start = date.fromisoformat((start_field.value or "").strip())
            end = date.fromisoformat((end_field.value or "").strip())
        except ValueError:
            notifier.error("Error", "Fecha inválida (usa AAAA-MM-DD)")
            return
        _run(history.set_custom_range, start, end)

    def _select(transaction_id: str) -> None:
        history.select(transaction_id)
        render()

    def _clear_selection() -> None:
        history.selected = None
        history.is_edit_mode = False
        render()

    def _after_save() -> None:
        history.after_mutation()
        render()

    def _edit() -> None:
        if history.begin_edit():
            show_transaction_dialog(ctx, page, history.selected, on_save_callback=_after_save)

    def _confirm_delete() -> None:
        txn = history.selected
        if txn is None:
            return

        def _close(_e=None):
            dialog.open = False
            page.update()

        def _delete(_e):
            _close()
            history.delete(txn)
            render()

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Eliminar transacción"),
            content=ft.Text(
                f"¿Eliminar {format_signed(txn.signed_amount)} en {txn.categoria.nombre}? "
                "Esta acción no se puede deshacer."
            ),
            actions=[
                ft.TextButton("Cancelar", on_click=_close),
                ft.FilledButton("Eliminar", on_click=_delete),
            ],
        )
        page.dialog = dialog
        dialog.open = True
        page.update()

    content = ft.Column(
        [
            ft.Text("Historial", size=24, weight=ft.FontWeight.BOLD),
            filter_row,
            range_row,
            summary_row,
            detail_container,
            list_column,
        ],
        spacing=16,
    )

    view = build_app_view(ctx, page, HISTORY_ROUTE, ctx.config.APP_NAME, content)
    history.load()
    render()
    return view
