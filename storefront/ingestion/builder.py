"""
Catalog Builder

Maps parsed sheet rows to Product records. Every field is looked up
through an ordered list of accepted column names so the same code reads
English and Bulgarian sheets (and any locale added in config).
"""

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..common.constants import DEFAULT_FIELD_ALIASES
from ..common.text_utils import normalize_text, split_list
from ..models import Product, Store

logger = logging.getLogger(__name__)


def pick_field(row: Mapping[str, str], keys: Sequence[str]) -> str:
    """
    Return the first non-empty value among the given columns.

    Args:
        row: Parsed sheet row
        keys: Column names in priority order

    Returns:
        Normalized value, or "" if every column is missing or blank
    """
    for key in keys:
        value = normalize_text(row.get(key))
        if value:
            return value
    return ""


def parse_id(value: str, fallback: int) -> int:
    """
    Parse a product id cell.

    Anything that is not a finite positive number falls back to the
    1-based row position.

    Example:
        parse_id("7", 3) -> 7
        parse_id("", 3) -> 3
        parse_id("abc", 3) -> 3
    """
    text = normalize_text(value)
    if not text:
        return fallback
    try:
        number = float(text)
    except ValueError:
        return fallback
    if not math.isfinite(number) or int(number) <= 0:
        return fallback
    return int(number)


class CatalogBuilder:
    """
    Builds products from rows using a configurable alias table.

    Usage:
        builder = CatalogBuilder()
        products = builder.build(rows)
        store = builder.to_store(products)
    """

    def __init__(self, field_aliases: Optional[Mapping[str, Sequence[str]]] = None):
        """
        Initialize the builder.

        Args:
            field_aliases: field -> accepted column names. Fields missing
                from the mapping fall back to the default aliases.
        """
        self.field_aliases: Dict[str, List[str]] = {
            k: list(v) for k, v in DEFAULT_FIELD_ALIASES.items()
        }
        if field_aliases:
            for field_name, columns in field_aliases.items():
                self.field_aliases[field_name] = list(columns)

    def resolve(self, row: Mapping[str, str], field_name: str) -> str:
        return pick_field(row, self.field_aliases.get(field_name, [field_name]))

    def build_product(self, row: Mapping[str, str], index: int) -> Optional[Product]:
        """
        Build one product, or None when the row has no name or category.

        Args:
            row: Parsed sheet row
            index: 0-based row position, used for the fallback id
        """
        name = self.resolve(row, "name")
        category = self.resolve(row, "category")
        if not name or not category:
            logger.debug("Dropping row %d: missing %s", index + 1,
                         "name" if not name else "category")
            return None

        return Product(
            id=parse_id(self.resolve(row, "id"), index + 1),
            name=name,
            price=self.resolve(row, "price"),
            category=category,
            note=self.resolve(row, "note"),
            image=self.resolve(row, "image"),
            tags=split_list(self.resolve(row, "tags")),
            gallery=split_list(self.resolve(row, "gallery")),
        )

    def build(self, rows: Iterable[Mapping[str, str]]) -> List[Product]:
        """Build products, dropping rows without a name or category."""
        products = []
        total = 0
        for index, row in enumerate(rows):
            total += 1
            product = self.build_product(row, index)
            if product is not None:
                products.append(product)

        if total != len(products):
            logger.info("Built %d products from %d rows (%d dropped)",
                        len(products), total, total - len(products))
        return products

    @staticmethod
    def to_store(products: Iterable[Product]) -> Store:
        return Store.from_products(products)


def build_products(
    rows: Iterable[Mapping[str, str]],
    field_aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> List[Product]:
    """Convenience function: build products with a one-off builder."""
    return CatalogBuilder(field_aliases).build(rows)


def build_store(products: Iterable[Product]) -> Store:
    """Derive a Store (categories, tags) from built products."""
    return Store.from_products(products)
