"""Client-side cache of one transaction type's categories.

The cache is only changed after the server confirms a mutation: append on
create, replace in place on rename, filter out on delete. Failures are
reported through the notifier and leave the cache untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..domain.notifications import Notifier
from ..errors import FinanzaSimpleError
from ..logging_config import get_logger
from ..models.category import (
    FALLBACK_CATEGORY_NAMES,
    Category,
    CategoryCreate,
    CategoryUpdate,
    TipoTransaccion,
)
from .api import ApiClient

logger = get_logger(__name__)


class CategoryMode(str, Enum):
    SELECTION = "selection"
    MANAGEMENT = "management"


@dataclass
class CategoryGroups:
    custom: list[Category] = field(default_factory=list)
    default: list[Category] = field(default_factory=list)


class CategoryState:
    """Selection and management state behind the category selector."""

    def __init__(
        self,
        api: ApiClient,
        notifier: Notifier,
        tipo: TipoTransaccion,
        *,
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.tipo: TipoTransaccion = tipo
        self.value = value
        self.on_change = on_change

        self.categories: list[Category] = []
        self.hidden: set[str] = set()
        self.mode = CategoryMode.SELECTION
        self.is_open = False
        self.is_loading = False

        self.editing_id: Optional[str] = None
        self.edit_value = ""
        self.pending_delete: Optional[Category] = None

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def visible_categories(self) -> list[Category]:
        if self.mode is CategoryMode.SELECTION:
            return [cat for cat in self.categories if cat.id not in self.hidden]
        return list(self.categories)

    @property
    def selected(self) -> Optional[Category]:
        return self.find(self.value)

    def find(self, category_id: str) -> Optional[Category]:
        return next((cat for cat in self.categories if cat.id == category_id), None)

    def grouped(self) -> CategoryGroups:
        groups = CategoryGroups()
        for cat in self.visible_categories:
            (groups.default if cat.is_default else groups.custom).append(cat)
        return groups

    def is_hidden(self, category_id: str) -> bool:
        return category_id in self.hidden

    # ------------------------------------------------------------------
    # Loading and selection
    # ------------------------------------------------------------------

    def load(self) -> bool:
        self.is_loading = True
        try:
            categories = self.api.fetch_categories(self.tipo)
        except FinanzaSimpleError as exc:
            logger.error("Failed to load categories", extra={"tipo": self.tipo, "error": str(exc)})
            self.notifier.error("Error", str(exc) or "Error al cargar categorías")
            return False
        finally:
            self.is_loading = False

        self.categories = categories
        self.hidden = {cat.id for cat in categories if not cat.is_visible}
        logger.info("Categories loaded", extra={"tipo": self.tipo, "count": len(categories)})
        return True

    def set_tipo(self, tipo: TipoTransaccion) -> None:
        if tipo == self.tipo:
            return
        self.tipo = tipo
        self.cancel_edit()
        self.pending_delete = None
        if not self.load():
            # The cache only ever holds categories of ``self.tipo``.
            self.categories = []
            self.hidden = set()
        if self.value and self.find(self.value) is None:
            self._set_value("")

    def select(self, category_id: str) -> None:
        self._set_value(category_id)
        self.is_open = False

    def toggle_open(self) -> None:
        self.is_open = not self.is_open

    def toggle_mode(self) -> CategoryMode:
        self.mode = (
            CategoryMode.MANAGEMENT if self.mode is CategoryMode.SELECTION else CategoryMode.SELECTION
        )
        self.is_open = True
        return self.mode

    def _set_value(self, category_id: str) -> None:
        self.value = category_id
        if self.on_change:
            self.on_change(category_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def toggle_visibility(self, category_id: str) -> None:
        """Hide or show a user-created category.

        Default and unknown categories are ignored without a request.
        """

        category = self.find(category_id)
        if category is None or category.is_default:
            return

        currently_visible = category_id not in self.hidden
        try:
            self.api.update_visibility(category_id, not currently_visible)
        except FinanzaSimpleError as exc:
            logger.error("Failed to toggle visibility", extra={"category_id": category_id, "error": str(exc)})
            self.notifier.error("Error", "No se pudo actualizar la visibilidad de la categoría")
            return

        if currently_visible:
            self.hidden.add(category_id)
        else:
            self.hidden.discard(category_id)
        self._replace(category.model_copy(update={"is_visible": not currently_visible}))

    def create(self, name: str) -> Optional[Category]:
        nombre = (name or "").strip()
        if not nombre:
            return None

        self.is_loading = True
        try:
            created = self.api.create_category(
                CategoryCreate(nombre=nombre, tipo=self.tipo, orden=len(self.categories) + 1)
            )
        except FinanzaSimpleError as exc:
            logger.error("Failed to create category", extra={"nombre": nombre, "error": str(exc)})
            self.notifier.error("Error", str(exc) or "Error al crear categoría")
            return None
        finally:
            self.is_loading = False

        self.categories.append(created)
        if not created.is_visible:
            self.hidden.add(created.id)
        self._set_value(created.id)
        logger.info("Category created", extra={"category_id": created.id})
        self.notifier.success("Éxito", f'Categoría "{created.nombre}" creada.')
        return created

    def begin_edit(self, category_id: str) -> bool:
        category = self.find(category_id)
        if category is None or category.is_default:
            return False
        self.editing_id = category_id
        self.edit_value = category.nombre
        return True

    def set_edit_value(self, value: str) -> None:
        self.edit_value = value

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_value = ""

    def submit_edit(self) -> Optional[Category]:
        """Rename the category being edited; edit mode always ends."""

        category = self.find(self.editing_id) if self.editing_id else None
        nombre = self.edit_value.strip()
        try:
            if category is None or not nombre or nombre == category.nombre:
                return None
            try:
                updated = self.api.update_category(category.id, CategoryUpdate(nombre=nombre))
            except FinanzaSimpleError as exc:
                logger.error("Failed to rename category", extra={"category_id": category.id, "error": str(exc)})
                self.notifier.error("Error", str(exc) or "Error al actualizar categoría")
                return None
            self._replace(updated)
            self.notifier.success("Éxito", f'Categoría actualizada a "{updated.nombre}".')
            return updated
        finally:
            self.cancel_edit()

    def request_delete(self, category_id: str) -> bool:
        category = self.find(category_id)
        if category is None or category.is_default:
            return False
        self.pending_delete = category
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        category = self.pending_delete
        if category is None:
            return False
        try:
            self.api.delete_category(category.id)
        except FinanzaSimpleError as exc:
            logger.error("Failed to delete category", extra={"category_id": category.id, "error": str(exc)})
            self.notifier.error("Error", str(exc) or "Error al eliminar categoría")
            return False
        finally:
            self.pending_delete = None

        self.categories = [cat for cat in self.categories if cat.id != category.id]
        self.hidden.discard(category.id)
        if self.value == category.id:
            self._set_value("")
        fallback = FALLBACK_CATEGORY_NAMES[category.tipo]
        logger.info("Category deleted", extra={"category_id": category.id})
        self.notifier.success(
            "Categoría eliminada", f'Las transacciones se han movido a "{fallback}"'
        )
        return True

    def _replace(self, updated: Category) -> None:
        self.categories = [updated if cat.id == updated.id else cat for cat in self.categories]


__all__ = ["CategoryGroups", "CategoryMode", "CategoryState"]
