"""
CSV Utilities

Functions for writing a catalog back out as a delimited sheet, in the
same column layout the loader reads.
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..models import Product
from .constants import CANONICAL_FIELDS, LIST_SEPARATOR


def product_to_row(product: Product) -> Dict[str, str]:
    """
    Flatten a product into a sheet row.

    Args:
        product: Catalog product

    Returns:
        Dictionary keyed by canonical field name, tags/gallery pipe-joined
    """
    return {
        'id': str(product.id),
        'name': product.name,
        'price': product.price,
        'category': product.category,
        'note': product.note,
        'image': product.image,
        'tags': LIST_SEPARATOR.join(product.tags),
        'gallery': LIST_SEPARATOR.join(product.gallery),
    }


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, str]],
    fieldnames: Optional[List[str]] = None,
    delimiter: str = ',',
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    Args:
        file_path: Path to output CSV file
        rows: List of dictionaries to write
        fieldnames: Column names (if None, uses keys from first row)
        delimiter: Field separator ("," or ";")
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    if not rows:
        return 0

    if fieldnames is None:
        fieldnames = list(rows[0].keys())

    with open(file_path, 'w', encoding=encoding, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)


def write_products_csv(
    file_path: str | Path,
    products: Iterable[Product],
    delimiter: str = ',',
) -> int:
    """
    Export products with a canonical header row.

    Returns:
        Number of products written
    """
    rows = [product_to_row(p) for p in products]
    return write_csv(file_path, rows, fieldnames=list(CANONICAL_FIELDS), delimiter=delimiter)
