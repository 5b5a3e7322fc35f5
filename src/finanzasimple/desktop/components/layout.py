"""Layout components shared by the authenticated views."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import flet as ft

from ...services.session import APP_ROUTE
from ..navigation import HISTORY_ROUTE

if TYPE_CHECKING:
    from ..context import AppContext


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """App bar with navigation between entry and history, and logout."""

    def _logout(_e):
        ctx.session.logout()
        page.snack_bar = ft.SnackBar(content=ft.Text("Sesión cerrada"))
        page.snack_bar.open = True
        page.update()

    actions: List[ft.Control] = [
        ft.IconButton(
            icon=ft.Icons.ADD,
            tooltip="Registrar",
            on_click=lambda _: page.go(APP_ROUTE),
        ),
        ft.IconButton(
            icon=ft.Icons.RECEIPT_LONG,
            tooltip="Historial",
            on_click=lambda _: page.go(HISTORY_ROUTE),
        ),
    ]
    user = ctx.session.user
    if user is not None:
        actions.extend(
            [
                ft.Chip(label=ft.Text(user.email), leading=ft.Icon(ft.Icons.PERSON)),
                ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Cerrar sesión", on_click=_logout),
            ]
        )

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )


def build_app_view(ctx: AppContext, page: ft.Page, route: str, title: str, content: ft.Control) -> ft.View:
    return ft.View(
        route=route,
        appbar=build_app_bar(ctx, title, page),
        controls=[
            ft.Container(
                content=content,
                padding=24,
                expand=True,
                alignment=ft.alignment.top_center,
            )
        ],
        padding=0,
        scroll=ft.ScrollMode.AUTO,
    )
