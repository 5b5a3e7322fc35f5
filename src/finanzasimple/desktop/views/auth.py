"""Authentication view: sign in, or ask the administrator for access."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...errors import AuthenticationInvalidError, ConfigurationError, FinanzaSimpleError
from ...logging_config import get_logger
from ...services.access_request import request_access
from ...services.session import AUTH_ROUTE

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the login view with email and password fields."""

    email_field = ft.TextField(
        label="Correo electrónico",
        hint_text="tu@correo.com",
        autofocus=True,
        keyboard_type=ft.KeyboardType.EMAIL,
        width=300,
    )
    password_field = ft.TextField(
        label="Contraseña",
        password=True,
        can_reveal_password=True,
        width=300,
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
    login_button = ft.FilledButton("Iniciar sesión", width=300)

    access_field = ft.TextField(
        label="Correo para solicitar acceso",
        keyboard_type=ft.KeyboardType.EMAIL,
        width=300,
    )
    access_status = ft.Text("", visible=False)

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    def do_login(_e):
        error_text.visible = False
        login_button.disabled = True
        page.update()
        try:
            user = ctx.session.login(email_field.value or "", password_field.value or "")
        except AuthenticationInvalidError:
            _show_error("Correo o contraseña incorrectos")
            return
        except FinanzaSimpleError as exc:
            _show_error(str(exc))
            return
        finally:
            login_button.disabled = False

        page.snack_bar = ft.SnackBar(content=ft.Text(f"Bienvenido, {user.email}"))
        page.snack_bar.open = True
        page.update()

    def do_request_access(_e):
        access_status.visible = True
        try:
            request_access(access_field.value or "", ctx.config)
        except ConfigurationError as exc:
            logger.error("Access request not configured", extra={"error": str(exc)})
            access_status.value = "Las solicitudes de acceso no están disponibles"
            access_status.color = ft.Colors.ERROR
        except FinanzaSimpleError as exc:
            access_status.value = str(exc)
            access_status.color = ft.Colors.ERROR
        else:
            access_status.value = "Solicitud enviada. Te contactaremos pronto."
            access_status.color = ft.Colors.GREEN
            access_field.value = ""
        page.update()

    login_button.on_click = do_login
    email_field.on_submit = lambda _: password_field.focus()
    password_field.on_submit = do_login
    access_field.on_submit = do_request_access

    return ft.View(
        route=AUTH_ROUTE,
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Container(
                            content=ft.Icon(
                                ft.Icons.ACCOUNT_BALANCE_WALLET,
                                size=64,
                                color=ft.Colors.PRIMARY,
                            ),
                            alignment=ft.alignment.center,
                        ),
                        ft.Text(
                            ctx.config.APP_NAME,
                            size=32,
                            weight=ft.FontWeight.BOLD,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Text(
                            "Inicia sesión para continuar",
                            size=16,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Container(height=32),
                        email_field,
                        password_field,
                        error_text,
                        ft.Container(height=16),
                        login_button,
                        ft.Container(height=24),
                        ft.Divider(),
                        ft.Text(
                            "¿No tienes cuenta?",
                            size=12,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                        ),
                        access_field,
                        ft.OutlinedButton("Solicitar acceso", width=300, on_click=do_request_access),
                        access_status,
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=8,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=20,
    )
