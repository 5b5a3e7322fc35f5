"""Small display widgets."""

from __future__ import annotations

from typing import Optional

import flet as ft


def build_stat_card(label: str, value: str, color: Optional[str] = None) -> ft.Card:
    """Label/value card used by the balance strip."""

    return ft.Card(
        content=ft.Container(
            content=ft.Column(
                [
                    ft.Text(label, size=13, color=ft.Colors.ON_SURFACE_VARIANT),
                    ft.Text(value, size=24, weight=ft.FontWeight.BOLD, color=color),
                ],
                spacing=4,
            ),
            padding=16,
        ),
        elevation=2,
    )
