"""Entry and edit form state for a single transaction."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..domain.notifications import Notifier
from ..errors import FinanzaSimpleError, ValidationError
from ..logging_config import get_logger
from ..models.category import TipoTransaccion
from ..models.transaction import Transaction, TransactionPayload
from .api import ApiClient
from .dates import calendar_date, to_iso_date
from .money import format_amount_input, format_currency, parse_formatted_amount

logger = get_logger(__name__)


class TransactionForm:
    """Amount, category, description and date of a create or edit submission.

    ``amount_display`` holds the formatted text shown in the field; the
    numeric value is always recovered from its digits.
    """

    def __init__(
        self,
        api: ApiClient,
        notifier: Notifier,
        *,
        tipo: TipoTransaccion = "egreso",
        transaction: Optional[Transaction] = None,
        on_saved: Optional[Callable[[], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.transaction = transaction
        self.on_saved = on_saved
        self.on_close = on_close
        self.is_loading = False

        self.tipo: TipoTransaccion = tipo
        self.amount_display = ""
        self.category = ""
        self.description = ""
        self.fecha: Optional[date] = None
        self._stored_fecha: Optional[date] = None

        if transaction is not None:
            self.tipo = transaction.tipo
            self.amount_display = format_currency(transaction.monto)
            self.category = transaction.categoria.id
            self.description = transaction.descripcion or ""
            self.fecha = calendar_date(transaction.fecha)
            self._stored_fecha = self.fecha

    @property
    def is_edit(self) -> bool:
        return self.transaction is not None

    @property
    def amount(self) -> Optional[int]:
        return parse_formatted_amount(self.amount_display)

    def set_amount_input(self, raw: str) -> str:
        self.amount_display = format_amount_input(raw)
        return self.amount_display

    def set_category(self, category_id: str) -> None:
        self.category = category_id

    def set_tipo(self, tipo: TipoTransaccion) -> None:
        # Edits keep the stored type.
        if not self.is_edit:
            self.tipo = tipo

    def build_payload(self) -> TransactionPayload:
        amount = self.amount
        if amount is None or not self.category:
            raise ValidationError("El monto y la categoría son obligatorios")
        return TransactionPayload(
            monto=amount,
            tipo=self.tipo,
            categoria=self.category,
            descripcion=self.description.strip(),
            fecha=self._fecha_to_send(),
        )

    def _fecha_to_send(self) -> Optional[str]:
        # An unchanged day is left out so the backend keeps its full timestamp.
        if self.fecha is None or self.fecha == self._stored_fecha:
            return None
        return to_iso_date(self.fecha)

    def submit(self) -> bool:
        """Create or fully update the transaction.

        Returns True on success. Validation and API failures are reported
        through the notifier and keep the entered values.
        """

        try:
            payload = self.build_payload()
        except ValidationError as exc:
            self.notifier.error("Error", str(exc))
            return False

        self.is_loading = True
        try:
            if self.transaction is not None:
                self.api.update_transaction(self.transaction.id, payload)
            else:
                self.api.create_transaction(payload)
        except FinanzaSimpleError as exc:
            logger.error(
                "Failed to save transaction",
                extra={"edit": self.is_edit, "error": str(exc)},
            )
            if self.is_edit:
                self.notifier.error("Error", "No se pudo actualizar la transacción. Intenta de nuevo.")
            else:
                self.notifier.error("Error", str(exc) or "Error al crear transacción")
            return False
        finally:
            self.is_loading = False

        if self.is_edit:
            logger.info("Transaction updated", extra={"transaction_id": self.transaction.id})
            self.notifier.success("Transacción actualizada", "Los cambios se han guardado correctamente")
        else:
            logger.info("Transaction created", extra={"tipo": payload.tipo})
            self.notifier.success("Éxito", "Transacción registrada correctamente.")
            self.reset()

        if self.on_saved:
            self.on_saved()
        if self.on_close:
            self.on_close()
        return True

    def reset(self) -> None:
        self.amount_display = ""
        self.category = ""
        self.description = ""
        self.fecha = None


__all__ = ["TransactionForm"]
