"""
Data models for the storefront catalog.

This module contains pure data classes with no business logic.
"""

from .product import GalleryState, Product, Store

__all__ = ['Product', 'Store', 'GalleryState']
