"""Category selector: pick a category or manage the user's own ones."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft

from ...models.category import Category, TipoTransaccion
from ...services.api import ApiClient
from ...services.categories import CategoryMode, CategoryState
from ..notifier import SnackBarNotifier


class CategorySelector:
    """Flet adapter over :class:`CategoryState`.

    ``control`` is the column to place in a view; it is re-rendered after
    every state change.
    """

    def __init__(
        self,
        api: ApiClient,
        page: ft.Page,
        tipo: TipoTransaccion,
        *,
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.page = page
        self.state = CategoryState(
            api,
            SnackBarNotifier(page),
            tipo,
            value=value,
            on_change=on_change,
        )
        self.new_name_field = ft.TextField(
            hint_text="Nueva categoría...",
            dense=True,
            expand=True,
            on_submit=self._create,
        )
        self.control = ft.Column(spacing=4)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> None:
        self.state.load()
        self.render()

    def set_tipo(self, tipo: TipoTransaccion) -> None:
        self.state.set_tipo(tipo)
        self.render()

    def render(self) -> None:
        self.control.controls = [self._build_header()]
        if self.state.is_open:
            self.control.controls.append(self._build_panel())
        self.page.update()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _toggle_open(self, _e=None) -> None:
        self.state.toggle_open()
        self.render()

    def _toggle_mode(self, _e=None) -> None:
        self.state.toggle_mode()
        self.render()

    def _select(self, category_id: str) -> None:
        self.state.select(category_id)
        self.render()

    def _create(self, _e=None) -> None:
        if self.state.create(self.new_name_field.value or ""):
            self.new_name_field.value = ""
        self.render()

    def _begin_edit(self, category_id: str) -> None:
        self.state.begin_edit(category_id)
        self.render()

    def _submit_edit(self, _e=None) -> None:
        self.state.submit_edit()
        self.render()

    def _cancel_edit(self, _e=None) -> None:
        self.state.cancel_edit()
        self.render()

    def _toggle_visibility(self, category_id: str) -> None:
        self.state.toggle_visibility(category_id)
        self.render()

    def _ask_delete(self, category_id: str) -> None:
        if not self.state.request_delete(category_id):
            return
        category = self.state.pending_delete

        def _close(_e=None):
            dialog.open = False
            self.page.update()

        def _confirm(_e):
            _close()
            self.state.confirm_delete()
            self.render()

        def _cancel(_e):
            self.state.cancel_delete()
            _close()

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Eliminar categoría"),
            content=ft.Text(
                f'¿Eliminar "{category.nombre}"?\n\n'
                "Sus transacciones se moverán a la categoría de respaldo."
            ),
            actions=[
                ft.TextButton("Cancelar", on_click=_cancel),
                ft.FilledButton(
                    "Eliminar",
                    on_click=_confirm,
                    style=ft.ButtonStyle(bgcolor=ft.Colors.ERROR, color=ft.Colors.ON_ERROR),
                ),
            ],
        )
        self.page.dialog = dialog
        dialog.open = True
        self.page.update()

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def _build_header(self) -> ft.Control:
        selected = self.state.selected
        managing = self.state.mode is CategoryMode.MANAGEMENT
        return ft.Row(
            [
                ft.OutlinedButton(
                    selected.nombre if selected else "Seleccionar categoría...",
                    icon=ft.Icons.ARROW_DROP_DOWN,
                    expand=True,
                    on_click=self._toggle_open,
                ),
                ft.IconButton(
                    icon=ft.Icons.CHECK if managing else ft.Icons.SETTINGS,
                    tooltip="Terminar" if managing else "Administrar categorías",
                    on_click=self._toggle_mode,
                ),
            ]
        )

    def _build_panel(self) -> ft.Control:
        groups = self.state.grouped()
        controls: list[ft.Control] = [
            ft.Row(
                [
                    self.new_name_field,
                    ft.IconButton(
                        icon=ft.Icons.ADD,
                        tooltip="Crear categoría",
                        disabled=self.state.is_loading,
                        on_click=self._create,
                    ),
                ]
            )
        ]
        if self.state.is_loading and not self.state.categories:
            controls.append(ft.ProgressRing())
        if groups.custom:
            controls.append(ft.Text("Mis categorías", size=12, weight=ft.FontWeight.BOLD))
            controls.extend(self._build_custom_row(cat) for cat in groups.custom)
        if groups.custom and groups.default:
            controls.append(ft.Divider())
        if groups.default:
            controls.append(ft.Text("Categorías predefinidas", size=12, weight=ft.FontWeight.BOLD))
            controls.extend(self._build_default_row(cat) for cat in groups.default)
        return ft.Container(
            content=ft.Column(controls, spacing=2, scroll=ft.ScrollMode.AUTO),
            border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            border_radius=8,
            padding=8,
        )

    def _build_default_row(self, cat: Category) -> ft.Control:
        return ft.ListTile(
            title=ft.Text(cat.nombre, color=ft.Colors.ON_SURFACE_VARIANT),
            selected=cat.id == self.state.value,
            dense=True,
            on_click=lambda _e, cid=cat.id: self._select(cid),
        )

    def _build_custom_row(self, cat: Category) -> ft.Control:
        if self.state.editing_id == cat.id:
            edit_field = ft.TextField(
                value=self.state.edit_value,
                dense=True,
                autofocus=True,
                expand=True,
                on_change=lambda e: self.state.set_edit_value(e.control.value or ""),
                on_submit=self._submit_edit,
            )
            return ft.Row(
                [
                    edit_field,
                    ft.IconButton(icon=ft.Icons.CHECK, on_click=self._submit_edit),
                    ft.IconButton(icon=ft.Icons.CLOSE, on_click=self._cancel_edit),
                ]
            )

        trailing: list[ft.Control] = []
        if self.state.mode is CategoryMode.MANAGEMENT:
            hidden = self.state.is_hidden(cat.id)
            trailing = [
                ft.IconButton(
                    icon=ft.Icons.VISIBILITY_OFF if hidden else ft.Icons.VISIBILITY,
                    tooltip="Mostrar" if hidden else "Ocultar",
                    on_click=lambda _e, cid=cat.id: self._toggle_visibility(cid),
                ),
                ft.IconButton(
                    icon=ft.Icons.EDIT,
                    tooltip="Renombrar",
                    on_click=lambda _e, cid=cat.id: self._begin_edit(cid),
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE,
                    tooltip="Eliminar",
                    icon_color=ft.Colors.ERROR,
                    on_click=lambda _e, cid=cat.id: self._ask_delete(cid),
                ),
            ]
        return ft.Row(
            [
                ft.TextButton(
                    cat.nombre,
                    expand=True,
                    on_click=lambda _e, cid=cat.id: self._select(cid),
                ),
                *trailing,
            ]
        )
