"""Transaction history: filters, sequenced loading, balance and rows."""

from __future__ import annotations

import itertools
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from ..domain.notifications import Notifier
from ..errors import FinanzaSimpleError, ValidationError
from ..logging_config import get_logger
from ..models.category import TipoTransaccion
from ..models.transaction import Transaction, TransactionFilters
from .api import ApiClient
from .dates import TimeRange, calendar_date, date_range_for, to_iso_date, validate_custom_range
from .money import format_signed

logger = get_logger(__name__)


class ViewMode(str, Enum):
    QUICK = "quick"
    CUSTOM = "custom"


class TypeFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def tipo(self) -> Optional[TipoTransaccion]:
        if self is TypeFilter.INCOME:
            return "ingreso"
        if self is TypeFilter.EXPENSE:
            return "egreso"
        return None


@dataclass(frozen=True)
class BalanceSummary:
    balance: int = 0
    total_ingresos: int = 0
    total_gastos: int = 0


@dataclass(frozen=True)
class TransactionRow:
    """Display-ready view of one transaction."""

    transaction_id: str
    category_name: str
    amount_text: str
    day: date
    description: Optional[str] = None


def summarize(transactions: list[Transaction]) -> BalanceSummary:
    ingresos = sum(t.monto for t in transactions if t.tipo == "ingreso")
    gastos = sum(t.monto for t in transactions if t.tipo == "egreso")
    return BalanceSummary(balance=ingresos - gastos, total_ingresos=ingresos, total_gastos=gastos)


def to_row(transaction: Transaction) -> TransactionRow:
    description = (transaction.descripcion or "").strip()
    return TransactionRow(
        transaction_id=transaction.id,
        category_name=transaction.categoria.nombre,
        amount_text=format_signed(transaction.signed_amount),
        day=calendar_date(transaction.fecha),
        description=description or None,
    )


class TransactionHistory:
    """State behind the history page.

    Each ``load()`` takes a monotonically increasing request id; a response
    is applied only if its id is still the latest one issued, so a slow
    answer to an old filter cannot overwrite a newer one.
    """

    def __init__(self, api: ApiClient, notifier: Notifier, *, today: Optional[date] = None) -> None:
        self.api = api
        self.notifier = notifier
        self._today = today

        self.view_mode = ViewMode.QUICK
        self.time_range = TimeRange.TODAY
        self.type_filter = TypeFilter.ALL
        current = self.today()
        self.custom_range: tuple[date, date] = (current, current)

        self.transactions: list[Transaction] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.selected: Optional[Transaction] = None
        self.is_edit_mode = False

        self._request_ids = itertools.count(1)
        self._latest_request = 0
        self._lock = threading.Lock()

    def today(self) -> date:
        return self._today or date.today()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def current_range(self) -> tuple[date, date]:
        if self.view_mode is ViewMode.QUICK:
            return date_range_for(self.time_range, self.today())
        return self.custom_range

    def filters(self) -> TransactionFilters:
        start, end = self.current_range()
        return TransactionFilters(
            start_date=to_iso_date(start),
            end_date=to_iso_date(end),
            tipo=self.type_filter.tipo,
        )

    def set_view_mode(self, mode: ViewMode) -> bool:
        self.view_mode = mode
        if mode is ViewMode.QUICK:
            self.time_range = TimeRange.TODAY
        else:
            current = self.today()
            self.custom_range = (current, current)
        return self.load()

    def set_time_range(self, time_range: TimeRange) -> bool:
        self.time_range = time_range
        return self.load()

    def set_type_filter(self, type_filter: TypeFilter) -> bool:
        self.type_filter = type_filter
        return self.load()

    def set_custom_range(self, start: date, end: date) -> bool:
        try:
            self.custom_range = validate_custom_range(start, end)
        except ValidationError as exc:
            self.notifier.error("Error", str(exc))
            return False
        return self.load()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _next_request(self) -> int:
        with self._lock:
            self._latest_request = next(self._request_ids)
            return self._latest_request

    def _is_latest(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._latest_request

    def load(self) -> bool:
        """Fetch with the current filters; False if failed or superseded."""

        request_id = self._next_request()
        filters = self.filters()
        self.is_loading = True
        self.error = None
        try:
            transactions = self.api.fetch_transactions(filters)
        except FinanzaSimpleError as exc:
            if not self._is_latest(request_id):
                return False
            logger.error("Failed to load transactions", extra={"error": str(exc)})
            self.error = "Error al cargar las transacciones"
            self.is_loading = False
            self.notifier.error(
                "Error", "No se pudieron cargar las transacciones. Intenta de nuevo más tarde."
            )
            return False

        if not self._is_latest(request_id):
            logger.info("Discarding stale transaction response", extra={"request_id": request_id})
            return False

        self.transactions = transactions
        self.is_loading = False
        logger.info(
            "Transactions loaded",
            extra={"count": len(transactions), **filters.as_params()},
        )
        return True

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def summary(self) -> BalanceSummary:
        return summarize(self.transactions)

    def rows(self) -> list[TransactionRow]:
        return [to_row(t) for t in self.transactions]

    def grouped_by_day(self) -> "OrderedDict[date, list[TransactionRow]]":
        groups: OrderedDict[date, list[TransactionRow]] = OrderedDict()
        for row in sorted(self.rows(), key=lambda r: r.day, reverse=True):
            groups.setdefault(row.day, []).append(row)
        return groups

    def find(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    # ------------------------------------------------------------------
    # Selection and mutations
    # ------------------------------------------------------------------

    def select(self, transaction_id: str) -> Optional[Transaction]:
        self.selected = self.find(transaction_id)
        self.is_edit_mode = False
        return self.selected

    def begin_edit(self) -> bool:
        if self.selected is None:
            return False
        self.is_edit_mode = True
        return True

    def after_mutation(self) -> bool:
        """Reload from the server and drop selection/edit state."""

        self.selected = None
        self.is_edit_mode = False
        return self.load()

    def delete(self, transaction: Transaction) -> bool:
        try:
            self.api.delete_transaction(transaction.id)
        except FinanzaSimpleError as exc:
            logger.error("Failed to delete transaction", extra={"transaction_id": transaction.id, "error": str(exc)})
            self.notifier.error("Error", str(exc) or "Error al eliminar la transacción")
            return False
        self.notifier.success("Transacción eliminada", "La transacción se eliminó correctamente")
        self.after_mutation()
        return True


__all__ = [
    "BalanceSummary",
    "TransactionHistory",
    "TransactionRow",
    "TypeFilter",
    "ViewMode",
    "summarize",
    "to_row",
]
