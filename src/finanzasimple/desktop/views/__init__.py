"""Desktop views (one builder per route)."""

from .auth import build_auth_view
from .history import build_history_view
from .transactions import build_transactions_view

__all__ = ["build_auth_view", "build_history_view", "build_transactions_view"]
