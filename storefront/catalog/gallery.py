"""
Gallery Navigator

Image carousel state for a product detail view: which image is shown,
prev/next with wraparound, and whether the prev/next controls are needed
at all. Rendering is delegated to a GalleryView.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..common.config_loader import CatalogSettings
from ..common.constants import PLACEHOLDER_GALLERY, PLACEHOLDER_IMAGE
from ..models import GalleryState, Product
from .query import primary_image

logger = logging.getLogger(__name__)

# Widths within this many pixels of each other count as "fits"
SCROLL_TOLERANCE_PX = 4


def gallery_sources(
    product: Product,
    placeholder_image: str = PLACEHOLDER_IMAGE,
    placeholder_gallery: Iterable[str] = PLACEHOLDER_GALLERY,
) -> Tuple[str, ...]:
    """
    Ordered, deduplicated image list for a product.

    The primary image comes first, followed by the product's gallery, or
    by the placeholder set when the product declares no gallery.
    """
    rest: List[str] = list(product.gallery) if product.gallery else list(placeholder_gallery)
    sources = [primary_image(product, placeholder_image)] + rest
    return tuple(dict.fromkeys(src for src in sources if src))


class GalleryView:
    """
    Rendering side of the gallery. The default implementation renders
    nothing and reports a strip that fits, so the navigator can run headless.
    """

    def show_image(self, src: str, alt: str) -> None:
        """Point the main image and its lightbox link at src."""

    def mark_active_thumbnail(self, index: int) -> None:
        pass

    def scroll_thumbnail_into_view(self, index: int) -> None:
        pass

    def set_navigation_visible(self, visible: bool) -> None:
        pass

    def strip_widths(self) -> Tuple[int, int]:
        """Return (natural width, visible width) of the thumbnail strip."""
        return 0, 0


class GalleryNavigator:
    """
    Per-view gallery state machine.

    Usage:
        nav = GalleryNavigator(product, view)   # shows image 0
        nav.next()
        nav.select(2)
        nav.refresh_navigation()                # on window resize
    """

    def __init__(
        self,
        product: Product,
        view: Optional[GalleryView] = None,
        placeholder_image: str = PLACEHOLDER_IMAGE,
        placeholder_gallery: Iterable[str] = PLACEHOLDER_GALLERY,
    ):
        self.product = product
        self.view = view or GalleryView()
        self.sources = gallery_sources(product, placeholder_image, placeholder_gallery)
        self.active_index = 0
        self.select(0)

    @classmethod
    def from_settings(
        cls, product: Product, settings: CatalogSettings, view: Optional[GalleryView] = None,
    ) -> "GalleryNavigator":
        """Navigator using the placeholder images configured in catalog.yaml."""
        return cls(product, view, settings.placeholder_image, settings.placeholder_gallery)

    def __len__(self) -> int:
        return len(self.sources)

    @property
    def state(self) -> GalleryState:
        return GalleryState(ordered_sources=self.sources, active_index=self.active_index)

    @property
    def active_source(self) -> str:
        return self.sources[self.active_index]

    def select(self, index: int) -> bool:
        """
        Show the image at index.

        Returns:
            False (and changes nothing) if index is out of range
        """
        if not 0 <= index < len(self.sources):
            logger.warning("Gallery index %d out of range for %d images (product %s)",
                           index, len(self.sources), self.product.id)
            return False

        self.active_index = index
        self.view.show_image(self.sources[index], self.product.name)
        self.view.mark_active_thumbnail(index)
        self.view.scroll_thumbnail_into_view(index)
        self.refresh_navigation()
        return True

    def next(self) -> bool:
        count = len(self.sources)
        if not count:
            return False
        return self.select((self.active_index + 1) % count)

    def prev(self) -> bool:
        count = len(self.sources)
        if not count:
            return False
        return self.select((self.active_index - 1 + count) % count)

    def navigation_needed(self) -> bool:
        natural, visible = self.view.strip_widths()
        return natural > visible + SCROLL_TOLERANCE_PX

    def refresh_navigation(self) -> None:
        """Show prev/next only when the thumbnails overflow. Also the resize hook."""
        self.view.set_navigation_visible(self.navigation_needed())
