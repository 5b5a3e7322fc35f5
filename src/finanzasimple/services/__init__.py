"""Service layer: REST client, session lifecycle and UI state objects."""

from .api import ApiClient
from .categories import CategoryMode, CategoryState
from .history import TransactionHistory
from .session import GuardDecision, SessionState, SessionStore
from .transactions import TransactionForm

__all__ = [
    "ApiClient",
    "CategoryMode",
    "CategoryState",
    "GuardDecision",
    "SessionState",
    "SessionStore",
    "TransactionForm",
    "TransactionHistory",
]
