"""Transaction wire models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .category import Category, TipoTransaccion


class Transaction(BaseModel):
    """A single income or expense entry with its category embedded."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    fecha: str
    # Amounts are whole currency units; the sign comes from ``tipo``.
    monto: int = Field(ge=0)
    descripcion: str = ""
    tipo: TipoTransaccion
    categoria: Category
    usuario: Optional[str] = None

    @property
    def signed_amount(self) -> int:
        return self.monto if self.tipo == "ingreso" else -self.monto


class TransactionPayload(BaseModel):
    """Body of the create and full-update transaction calls."""

    monto: int = Field(ge=0)
    tipo: TipoTransaccion
    categoria: str
    descripcion: str = ""
    fecha: Optional[str] = None


class TransactionFilters(BaseModel):
    """Query parameters accepted by ``GET /api/transacciones``."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    tipo: Optional[TipoTransaccion] = None

    def as_params(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)
