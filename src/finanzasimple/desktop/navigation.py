"""Navigation and routing for the Flet app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..devtools import dev_log
from ..logging_config import get_logger
from ..services.session import APP_ROUTE, AUTH_ROUTE, GuardDecision

logger = get_logger(__name__)

HISTORY_ROUTE = "/app/historial"

# View builder type
ViewBuilder = Callable[["AppContext", ft.Page], ft.View]


def build_loading_view(route: str) -> ft.View:
    """Placeholder shown while the stored session is being verified."""

    return ft.View(
        route=route,
        controls=[
            ft.Container(
                content=ft.Column(
                    [ft.ProgressRing(), ft.Text("Cargando...")],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
    )


class Router:
    """Routes page changes, gating every route but ``/auth`` on the session."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def resolve(self, route: str) -> str:
        """Return the route whose view should be built, or redirect."""

        session = self.context.session
        if route == AUTH_ROUTE:
            if session.is_authenticated:
                return APP_ROUTE
            return AUTH_ROUTE
        if route not in self.routes:
            logger.warning(f"Route not in registered routes: {route}, defaulting to {APP_ROUTE}")
            route = APP_ROUTE
        return route

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        requested = e.route or APP_ROUTE
        route = self.resolve(requested)
        if route != requested:
            self.page.go(route)
            return

        if route != AUTH_ROUTE:
            decision = self.context.session.guard()
            if decision is GuardDecision.LOADING:
                self._show(build_loading_view(route))
                return
            if decision is GuardDecision.REDIRECT:
                logger.warning("Route blocked - no authenticated session", extra={"route": route})
                self.page.go(AUTH_ROUTE)
                return

        builder = self.routes[route]
        try:
            self._show(builder(self.context, self.page))
            logger.info(f"Loaded view for route: {route}")
        except Exception as ex:
            logger.error(f"Failed to build view for route {route}: {ex}", exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            self.show_error(f"Error cargando la vista: {ex}")

    def _show(self, view: ft.View) -> None:
        if self.page.views:
            self.page.views[-1] = view
        else:
            self.page.views.append(view)
        self.page.update()

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)

    def show_error(self, message: str) -> None:
        dialog = ft.AlertDialog(
            title=ft.Text("Error"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.close_dialog(dialog))],
        )
        self.page.dialog = dialog
        dialog.open = True
        self.page.update()

    def close_dialog(self, dialog: ft.AlertDialog) -> None:
        dialog.open = False
        self.page.update()
