"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

from ..models import Product, Store

# Logical catalog columns, in the order used when a sheet has no header row
CANONICAL_FIELDS = (
    "id",
    "name",
    "price",
    "category",
    "note",
    "image",
    "tags",
    "gallery",
)

# Column names accepted for each field, tried in order (English first, then Bulgarian)
DEFAULT_FIELD_ALIASES = {
    "id": ["id"],
    "name": ["name", "име", "продукт"],
    "price": ["price", "цена"],
    "category": ["category", "категория"],
    "note": ["note", "описание", "description"],
    "image": ["image", "снимка", "photo"],
    "tags": ["tags", "тагове", "таг"],
    "gallery": ["gallery", "галерия"],
}

# Separator for multi-value cells (tags, gallery)
LIST_SEPARATOR = "|"

# Session cache
STORE_CACHE_KEY = "lindilove-store-cache"
STORE_CACHE_TTL_MS = 10 * 60 * 1000

# Persistent consent flag
CONSENT_KEY = "lindilove-cookie-accepted"

# Marker left in the config template until a real sheet URL is pasted in
SOURCE_PLACEHOLDER_MARKER = "PASTE"

# Images
PLACEHOLDER_IMAGE = "images/gallery-1.svg"
PLACEHOLDER_GALLERY = (
    "images/gallery-1.svg",
    "images/gallery-2.svg",
    "images/gallery-3.svg",
)

# Filter sentinel matching every category
ALL_CATEGORIES = "all"

# Bundled catalog served when the remote sheet is missing or broken
FALLBACK_STORE = Store(
    categories=("Свещи", "Китки"),
    tags=("14 Февруари", "Рожден ден", "Кръщене"),
    products=(
        Product(
            id=1,
            name="Свещ - Ванилия и бял чай",
            price="24 лв.",
            category="Свещи",
            note="Създадена за уютни вечери",
            image="images/candle-vanilla.svg",
            tags=["14 Февруари"],
            gallery=[],
        ),
    ),
)
