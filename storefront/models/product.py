"""
Catalog data models.

Pure data classes for representing the storefront catalog.
No business logic - only data structure definitions and their
JSON-friendly dict conversions (used by the session cache).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple


@dataclass
class Product:
    """
    A single catalog entry built from one spreadsheet row.

    Only name and category are required; every other field may be empty.
    """

    id: int
    name: str
    category: str
    price: str = ""             # Display string, e.g. "24 лв."
    note: str = ""
    image: str = ""             # Empty means "use placeholder"
    tags: List[str] = field(default_factory=list)
    gallery: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.name:
            raise ValueError("Product name is required")
        if not self.category:
            raise ValueError("Product category is required")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "note": self.note,
            "image": self.image,
            "tags": list(self.tags),
            "gallery": list(self.gallery),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """
        Rebuild a product from its dict form.

        Raises:
            KeyError: If a required key is missing
            TypeError, ValueError: If values have the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"Product payload must be an object, got {type(data).__name__}")
        tags = data.get("tags") or []
        gallery = data.get("gallery") or []
        if not isinstance(tags, list) or not isinstance(gallery, list):
            raise TypeError("tags and gallery must be lists")
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            category=str(data["category"]),
            price=str(data.get("price", "")),
            note=str(data.get("note", "")),
            image=str(data.get("image", "")),
            tags=[str(tag) for tag in tags],
            gallery=[str(src) for src in gallery],
        )


def _distinct(values: Iterable[str]) -> Tuple[str, ...]:
    """Distinct values in first-occurrence order."""
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class Store:
    """
    The in-memory catalog: categories, tags and products.

    Stores are immutable values. A new Store replaces the old one
    wholesale after every successful load.
    """

    categories: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    products: Tuple[Product, ...] = ()

    @classmethod
    def from_products(cls, products: Iterable[Product]) -> "Store":
        """Build a store, deriving categories and tags from the products."""
        products = tuple(products)
        return cls(
            categories=_distinct(p.category for p in products),
            tags=_distinct(tag for p in products for tag in p.tags),
            products=products,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": list(self.categories),
            "tags": list(self.tags),
            "products": [p.to_dict() for p in self.products],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        """
        Rebuild a store from its dict form.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"Store payload must be an object, got {type(data).__name__}")
        products = data["products"]
        if not isinstance(products, list):
            raise TypeError("products must be a list")
        return cls(
            categories=tuple(str(c) for c in data["categories"]),
            tags=tuple(str(t) for t in data["tags"]),
            products=tuple(Product.from_dict(p) for p in products),
        )


@dataclass(frozen=True)
class GalleryState:
    """Image carousel position for one product detail view."""
    ordered_sources: Tuple[str, ...]
    active_index: int = 0
