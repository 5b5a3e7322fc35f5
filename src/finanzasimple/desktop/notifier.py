"""Snack-bar implementation of the notification sink."""

from __future__ import annotations

import flet as ft


class SnackBarNotifier:
    """Shows success and error messages on the page's snack bar."""

    def __init__(self, page: ft.Page):
        self.page = page

    def _show(self, title: str, message: str, bgcolor: str | None = None) -> None:
        text = f"{title}: {message}" if title else message
        self.page.snack_bar = ft.SnackBar(content=ft.Text(text), bgcolor=bgcolor)
        self.page.snack_bar.open = True
        self.page.update()

    def success(self, title: str, message: str) -> None:
        self._show(title, message)

    def error(self, title: str, message: str) -> None:
        self._show(title, message, bgcolor=ft.Colors.ERROR)
