"""
Catalog Queries

Pure lookups over a Store used by the product grid and detail pages.
"""

from typing import Iterable, List, Optional
from urllib.parse import quote

from ..common.constants import ALL_CATEGORIES, PLACEHOLDER_IMAGE
from ..models import Product, Store


def matches(product: Product, category: str, active_tags: Iterable[str]) -> bool:
    """
    Check one product against the grid filters.

    Args:
        product: Catalog product
        category: Exact category name, or "all"
        active_tags: Selected tags; empty means no tag restriction

    Returns:
        True if the category matches and the product shares at least
        one tag with active_tags (when any are selected)
    """
    if category != ALL_CATEGORIES and product.category != category:
        return False

    active = set(active_tags)
    if not active:
        return True
    return any(tag in active for tag in product.tags)


def filter_products(
    store: Store,
    category: str = ALL_CATEGORIES,
    active_tags: Iterable[str] = (),
) -> List[Product]:
    """
    Products matching a category and any of the active tags, in store order.

    Example:
        filter_products(store, "Свещи", ["Рожден ден"])
    """
    active = list(active_tags)
    return [p for p in store.products if matches(p, category, active)]


def find_product(store: Store, product_id) -> Optional[Product]:
    """
    Find a product by id.

    Ids are compared as text, since the detail page receives them from
    the query string ("?id=3").
    """
    if product_id is None:
        return None
    wanted = str(product_id).strip()
    for product in store.products:
        if str(product.id) == wanted:
            return product
    return None


def primary_image(product: Product, placeholder: str = PLACEHOLDER_IMAGE) -> str:
    """Product image path, or the placeholder when none is set."""
    return product.image or placeholder


def product_link(product: Product, page: str = "product.html") -> str:
    """Relative link to a product's detail page."""
    return f"{page}?id={quote(str(product.id), safe='')}"
