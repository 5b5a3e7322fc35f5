"""Notification sink protocol (toasts/snack bars)."""

from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    """Where components send user-visible success and error messages."""

    def success(self, title: str, message: str) -> None: ...

    def error(self, title: str, message: str) -> None: ...


class PageLike(Protocol):
    """Minimal subset of ``ft.Page`` needed for navigation."""

    def go(self, route: str) -> None: ...
