"""
Expense Category Catalog

A static taxonomy: each primary category maps to an ordered list of
subcategories. The catalog never changes at runtime.

DESIGN DECISION: Category names coming from callers are resolved against
the catalog (case-insensitively) and replaced by their canonical spelling.
This removes the "ahorros" vs "Ahorros" class of mismatches between
budgets and expenses.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Optional


EXPENSE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Gastos Fijos": (
        "Alquiler/Hipoteca",
        "Servicios (Luz)",
        "Servicios (Agua)",
        "Servicios (Gas)",
        "Servicios (Internet)",
        "Servicios (Teléfono)",
        "Suscripciones (Streaming)",
        "Suscripciones (Software)",
        "Seguros",
        "Cuotas Préstamos",
        "Impuestos/Tasas",
        "Otro Gasto Fijo",
    ),
    "Gastos Necesarios": (
        "Alimentos/Supermercado",
        "Transporte (Combustible)",
        "Transporte (Público)",
        "Salud/Medicamentos",
        "Educación",
        "Cuidado Personal",
        "Ropa",
        "Mantenimiento del Hogar",
        "Deudas (Tarjetas, Créditos)",
        "Mascotas",
        "Otro Gasto Necesario",
    ),
    "Gastos Ocasionales": (
        "Entretenimiento/Ocio",
        "Restaurantes/Comida Fuera",
        "Compras (Ropa, Electrónica, etc.)",
        "Viajes",
        "Regalos",
        "Hobbies",
        "Donaciones",
        "Otro Gasto Ocasional",
    ),
    # Money moved to savings is recorded as an expense of the account
    "Ahorros": (
        "Ahorro para Meta",
        "Fondo de Emergencia",
        "Inversiones",
        "Otro Ahorro",
    ),
}


def _normalize(name: str) -> str:
    return name.strip().casefold()


class CategoryCatalog:
    """Read-only primary category -> subcategories mapping."""

    def __init__(self, categories: Mapping[str, Sequence[str]]):
        self._categories = MappingProxyType(
            {primary: tuple(subs) for primary, subs in categories.items()}
        )
        self._primary_index = {
            _normalize(primary): primary for primary in self._categories
        }

    @property
    def categories(self) -> Mapping[str, tuple[str, ...]]:
        return self._categories

    def primary_categories(self) -> tuple[str, ...]:
        """Primary category names in insertion order."""
        return tuple(self._categories)

    def subcategories_of(self, primary: str) -> tuple[str, ...]:
        """Subcategories of a primary category, empty if it is unknown."""
        return self._categories.get(primary, ())

    def all_subcategories(self) -> tuple[str, ...]:
        return tuple(
            sub for subs in self._categories.values() for sub in subs
        )

    def resolve_primary(self, name: str) -> Optional[str]:
        """Canonical spelling of a primary category, or None if unknown."""
        return self._primary_index.get(_normalize(name))

    def resolve_subcategory(self, primary: str, name: str) -> Optional[str]:
        """Canonical spelling of a subcategory of ``primary``, or None."""
        wanted = _normalize(name)
        for sub in self.subcategories_of(primary):
            if _normalize(sub) == wanted:
                return sub
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve_primary(name) is not None

    def __len__(self) -> int:
        return len(self._categories)


DEFAULT_CATALOG = CategoryCatalog(EXPENSE_CATEGORIES)
PRIMARY_EXPENSE_CATEGORIES = DEFAULT_CATALOG.primary_categories()
