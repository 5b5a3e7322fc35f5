"""Dialog components for the FinanzaSimple desktop app."""

from .transaction_dialog import show_transaction_dialog

__all__ = ["show_transaction_dialog"]
