"""Category wire models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TipoTransaccion = Literal["ingreso", "egreso"]

# Server-side categories that absorb the transactions of a deleted one.
FALLBACK_CATEGORY_NAMES: dict[str, str] = {
    "ingreso": "✨ Otros Ingresos",
    "egreso": "📝 Otros Gastos",
}


class Category(BaseModel):
    """A user-created or system-provided category of one transaction type."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    nombre: str
    tipo: TipoTransaccion
    orden: int = 0
    is_visible: bool = Field(default=True, alias="isVisible")
    is_default: bool = Field(default=False, alias="isDefault")
    usuario: Optional[str] = None


class CategoryCreate(BaseModel):
    """Body of ``POST /api/categorias``."""

    model_config = ConfigDict(populate_by_name=True)

    nombre: str
    tipo: TipoTransaccion
    orden: Optional[int] = None
    is_visible: Optional[bool] = Field(default=None, alias="isVisible")


class CategoryUpdate(BaseModel):
    """Body of ``PUT /api/categorias/:id``; unset fields are not sent."""

    model_config = ConfigDict(populate_by_name=True)

    nombre: Optional[str] = None
    orden: Optional[int] = None
    is_visible: Optional[bool] = Field(default=None, alias="isVisible")
