"""
Service layer for products.

``ProductService`` implements the CRUD and query operations over the
``products`` array of the JSON document.  Every operation reads the
whole document from the store first so external edits to the file are
picked up; every mutation writes the whole document back before
returning.  Each read‑modify‑write sequence runs under the store's
lock, so concurrent requests in one process cannot overwrite each
other's changes.

Products are plain dictionaries keyed by their wire names
(``unitCost``, ``totalSales``...).  Callers receive copies, so
mutating a returned product does not touch the in-memory document.
"""

from __future__ import annotations

import copy
import enum
import logging
import operator
import secrets
import string
from typing import Any, Callable, Dict, List, Mapping, Optional

from product_catalog_api.app.core.store import JsonDocumentStore

logger = logging.getLogger(__name__)

Product = Dict[str, Any]

ID_ALPHABET = string.ascii_letters + string.digits + "_-"
ID_LENGTH = 21


def generate_id(size: int = ID_LENGTH) -> str:
    """Return a random URL-safe identifier (126 bits of entropy by default)."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


class ComparisonOperator(str, enum.Enum):
    """Relational test applied by :meth:`ProductService.filter_by_cost_and_sales`."""

    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"

    @classmethod
    def parse(cls, value: Optional[str], param: str = "operator") -> "ComparisonOperator":
        """Convert a query value to an operator; ``None`` means ``gt``.

        Raises ``ValueError`` for anything outside gt/gte/lt/lte.
        """
        if value is None:
            return cls.GT
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(op.value for op in cls)
            raise ValueError(f"Invalid {param} '{value}', expected one of: {allowed}") from None

    def compare(self, left: Any, right: float) -> bool:
        # Missing or non-numeric values never match.
        if isinstance(left, bool) or not isinstance(left, (int, float)):
            return False
        return _OPERATORS[self](left, right)


_OPERATORS: Dict[ComparisonOperator, Callable[[Any, Any], bool]] = {
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.GTE: operator.ge,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.LTE: operator.le,
}


class ProductService:
    """CRUD and query operations over the product collection."""

    def __init__(self, store: JsonDocumentStore) -> None:
        self.store = store

    def _products(self) -> List[Product]:
        return self.store.read()["products"]

    def get_all(self) -> List[Product]:
        """Return every product in document order."""
        with self.store.lock:
            return copy.deepcopy(self._products())

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product with ``product_id`` or ``None``."""
        with self.store.lock:
            for product in self._products():
                if product.get("id") == product_id:
                    return copy.deepcopy(product)
        return None

    def create(
        self,
        name: Any,
        unitCost: float,
        totalSales: float,
        inventory: float,
        description: Any,
        imageUrl: Any,
    ) -> Product:
        """Append a new product with a freshly generated id and persist it."""
        with self.store.lock:
            products = self._products()
            product = {
                "id": generate_id(),
                "name": name,
                "unitCost": unitCost,
                "totalSales": totalSales,
                "inventory": inventory,
                "description": description,
                "imageUrl": imageUrl,
            }
            products.append(product)
            self.store.write()
        logger.info("Created product %s (%s)", product["id"], name)
        return copy.deepcopy(product)

    def update_by_id(self, product_id: str, updates: Mapping[str, Any]) -> Optional[Product]:
        """Shallow-merge ``updates`` into the product and persist it.

        The product keeps its position in the list.  An ``id`` key in
        ``updates`` is ignored.  Returns the updated product, or ``None``
        if no product has ``product_id``.
        """
        changes = {key: value for key, value in updates.items() if key != "id"}
        with self.store.lock:
            products = self._products()
            for index, product in enumerate(products):
                if product.get("id") == product_id:
                    products[index] = {**product, **changes}
                    self.store.write()
                    updated = copy.deepcopy(products[index])
                    break
            else:
                return None
        logger.info("Updated product %s (fields: %s)", product_id, ", ".join(sorted(changes)) or "none")
        return updated

    def delete_by_id(self, product_id: str) -> bool:
        """Remove the first product with ``product_id``.

        Returns ``True`` if a product was removed.
        """
        with self.store.lock:
            products = self._products()
            for index, product in enumerate(products):
                if product.get("id") == product_id:
                    del products[index]
                    self.store.write()
                    break
            else:
                return False
        logger.info("Deleted product %s", product_id)
        return True

    def search_by_name(self, name: str) -> List[Product]:
        """Case-insensitive substring search on ``name``."""
        needle = name.lower()
        return [
            product
            for product in self.get_all()
            if isinstance(product.get("name"), str) and needle in product["name"].lower()
        ]

    def filter_by_cost_and_sales(
        self,
        cost: Optional[float] = None,
        cost_op: Optional[str] = None,
        sales: Optional[float] = None,
        sales_op: Optional[str] = None,
    ) -> List[Product]:
        """Filter by ``unitCost`` and/or ``totalSales``.

        Each bound is optional; when both are given a product must
        satisfy both.  Operators are ``gt`` (default), ``gte``, ``lt``
        and ``lte``.  Result order follows the document.

        Raises ``ValueError`` for an unknown operator paired with a
        bound; an operator without its bound is ignored.
        """
        cost_cmp = ComparisonOperator.parse(cost_op, "costOp") if cost is not None else None
        sales_cmp = ComparisonOperator.parse(sales_op, "salesOp") if sales is not None else None

        results = self.get_all()
        if cost_cmp is not None:
            results = [p for p in results if cost_cmp.compare(p.get("unitCost"), cost)]
        if sales_cmp is not None:
            results = [p for p in results if sales_cmp.compare(p.get("totalSales"), sales)]
        return results
