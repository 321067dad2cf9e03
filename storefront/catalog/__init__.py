"""
Catalog queries and the product detail gallery.

Modules:
    query - Category/tag filtering and product lookups
    gallery - Image carousel state machine
"""

from .gallery import GalleryNavigator, GalleryView, gallery_sources
from .query import filter_products, find_product, matches, primary_image, product_link

__all__ = [
    'filter_products',
    'find_product',
    'matches',
    'primary_image',
    'product_link',
    'GalleryNavigator',
    'GalleryView',
    'gallery_sources',
]
