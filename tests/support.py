"""Test doubles and data factories shared across the suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import flet as ft

BASE_URL = "http://backend.test"


# =============================================================================
# HTTP fakes
# =============================================================================


class FakeResponse:
    """Just enough of ``requests.Response`` for the client."""

    def __init__(self, status_code: int = 200, body: Any = None, *, invalid_json: bool = False):
        self.status_code = status_code
        self._body = body
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._body


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict
    json: Any
    params: Optional[dict]
    timeout: Optional[float]


class FakeHttp:
    """Records requests and answers from a FIFO queue of responses.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self):
        self.calls: list[RecordedCall] = []
        self.responses: list[Any] = []

    def queue(self, *responses: Any) -> "FakeHttp":
        self.responses.extend(responses)
        return self

    def request(self, method, url, *, headers=None, json=None, params=None, timeout=None):
        self.calls.append(
            RecordedCall(
                method=method,
                url=url,
                headers=dict(headers or {}),
                json=json,
                params=params,
                timeout=timeout,
            )
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# =============================================================================
# UI fakes
# =============================================================================


@dataclass
class PageSpy:
    """Minimal fake page that records navigation actions."""

    navigated_to: list[str] = field(default_factory=list)

    def go(self, route: str) -> None:
        self.navigated_to.append(route)


class RecordingNotifier:
    """Collects ``(kind, title, message)`` tuples."""

    def __init__(self):
        self.messages: list[tuple[str, str, str]] = []

    def success(self, title: str, message: str) -> None:
        self.messages.append(("success", title, message))

    def error(self, title: str, message: str) -> None:
        self.messages.append(("error", title, message))

    @property
    def errors(self) -> list[str]:
        return [msg for kind, _title, msg in self.messages if kind == "error"]

    @property
    def successes(self) -> list[str]:
        return [msg for kind, _title, msg in self.messages if kind == "success"]


# =============================================================================
# Data factories
# =============================================================================


def category_json(
    cid: str,
    nombre: str,
    tipo: str = "egreso",
    *,
    default: bool = False,
    visible: bool = True,
    orden: int = 0,
) -> dict:
    return {
        "_id": cid,
        "nombre": nombre,
        "tipo": tipo,
        "orden": orden,
        "isVisible": visible,
        "isDefault": default,
        "usuario": None if default else "u1",
    }


def transaction_json(
    tid: str,
    monto: int,
    tipo: str = "egreso",
    *,
    fecha: str = "2024-03-15T00:00:00.000Z",
    descripcion: str = "",
    categoria: Optional[dict] = None,
) -> dict:
    return {
        "_id": tid,
        "fecha": fecha,
        "monto": monto,
        "descripcion": descripcion,
        "tipo": tipo,
        "categoria": categoria or category_json("c-" + tid, "Comida", tipo),
        "usuario": "u1",
    }



# =============================================================================
# Flet helpers
# =============================================================================


class DummyPage:
    """Minimal stand-in for flet.Page used in view builders and router tests."""

    def __init__(self):
        self.views: list[ft.View] = []
        self.route: str = ""
        self.snack_bar = None
        self.dialog = None
        self.overlay: list[ft.Control] = []
        self.navigated_to: list[str] = []
        self.updates = 0

    def go(self, route: str):
        self.route = route
        self.navigated_to.append(route)

    def update(self):
        self.updates += 1


def find_controls(root: Any, predicate) -> list[Any]:
    """Walk a control tree depth-first and collect matches."""

    found: list[Any] = []
    stack = [root]
    seen: set[int] = set()
    while stack:
        node = stack.pop()
        if node is None or id(node) in seen:
            continue
        seen.add(id(node))
        if predicate(node):
            found.append(node)
        for attr in ("controls", "content", "actions", "appbar", "title", "leading"):
            child = getattr(node, attr, None)
            if isinstance(child, list):
                stack.extend(reversed(child))
            elif isinstance(child, ft.Control):
                stack.append(child)
    return found


def texts(root: Any) -> list[str]:
    """Visible string values of every ``ft.Text`` under ``root``."""

    return [c.value for c in find_controls(root, lambda c: isinstance(c, ft.Text)) if c.value]
