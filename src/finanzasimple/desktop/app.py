"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..devtools import dev_log
from ..logging_config import setup_logging
from ..services.session import APP_ROUTE, AUTH_ROUTE, SessionState
from .context import create_app_context
from .navigation import HISTORY_ROUTE, Router
from .views import build_auth_view, build_history_view, build_transactions_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()

    logger = setup_logging(ctx.config)
    logger.info("FinanzaSimple desktop application starting")

    page.title = f"{ctx.config.APP_NAME} (DEV)" if ctx.dev_mode else ctx.config.APP_NAME
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"back_url": ctx.config.BACK_URL})
        page.banner = ft.Banner(
            bgcolor=ft.Colors.AMBER_50,
            leading=ft.Icon(ft.Icons.BUG_REPORT, color=ft.Colors.AMBER_700),
            content=ft.Text(f"Modo desarrollo: backend {ctx.config.BACK_URL}"),
            actions=[ft.TextButton("Ocultar", on_click=lambda _e: setattr(page.banner, "open", False))],
            open=True,
        )
    page.theme_mode = ft.ThemeMode.LIGHT
    page.padding = 0
    page.window_width = 1024
    page.window_height = 760
    page.window_min_width = 420
    page.window_min_height = 600

    # Verify the stored token before any route is built.
    state = ctx.session.initialize()
    ctx.attach_page(page)

    router = Router(page, ctx)
    route_builders = {
        AUTH_ROUTE: build_auth_view,
        APP_ROUTE: build_transactions_view,
        HISTORY_ROUTE: build_history_view,
    }
    for route, builder in route_builders.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        logger.error("Flet page error", extra={"data": getattr(e, "data", None)})

    page.on_error = _on_error

    if state is SessionState.AUTHENTICATED:
        requested = page.route if page.route not in ("", "/") else APP_ROUTE
        page.go(requested)
    else:
        page.go(AUTH_ROUTE)


def run() -> None:
    """Console-script entry point."""
    ft.app(target=main)


if __name__ == "__main__":
    run()
