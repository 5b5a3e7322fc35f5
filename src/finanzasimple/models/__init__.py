"""Wire models and the local SQLModel table."""

from .category import (
    FALLBACK_CATEGORY_NAMES,
    Category,
    CategoryCreate,
    CategoryUpdate,
    TipoTransaccion,
)
from .settings import ClientSetting
from .transaction import Transaction, TransactionFilters, TransactionPayload
from .user import SessionUser

__all__ = [
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "ClientSetting",
    "FALLBACK_CATEGORY_NAMES",
    "SessionUser",
    "TipoTransaccion",
    "Transaction",
    "TransactionFilters",
    "TransactionPayload",
]
