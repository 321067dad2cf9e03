#!/usr/bin/env python3
"""
Catalog Tool

Loads the storefront catalog from the published sheet (or the session
cache, or the bundled fallback) and lists, filters or exports it.

Usage:
    python3 catalog_tool.py load
    python3 catalog_tool.py filter --category "Свещи" --tag "Рожден ден"
    python3 catalog_tool.py show --id 3
    python3 catalog_tool.py export --output output/catalog.csv
    python3 catalog_tool.py load --source "https://.../pub?output=csv" --no-cache --verbose
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from storefront.catalog import GalleryNavigator, filter_products, find_product, product_link
from storefront.common import (
    FileStorage,
    MemoryStorage,
    load_catalog_settings,
    setup_logging,
    write_products_csv,
)
from storefront.common.constants import ALL_CATEGORIES
from storefront.ingestion import LoadResult, StoreLoader

logger = logging.getLogger("storefront.catalog_tool")

DEFAULT_SESSION_FILE = Path(".cache") / "session.json"


def load_settings(args):
    """Catalog settings from config, .env and the command line."""
    settings = load_catalog_settings()
    if args.source:
        settings = replace(settings, source_url=args.source)
    return settings


def load(args, settings=None) -> LoadResult:
    """Load the store with the given (or freshly loaded) settings."""
    if settings is None:
        settings = load_settings(args)

    storage = MemoryStorage() if args.no_cache else FileStorage(args.session_file)
    with StoreLoader(settings, storage=storage) as loader:
        return loader.load()


def print_products(products) -> None:
    for p in products:
        tags = ", ".join(p.tags) if p.tags else "-"
        print(f"  [{p.id:>3}] {p.name:40} {p.price:>10}  {p.category}  ({tags})  {product_link(p)}")


def cmd_load(args) -> int:
    result = load(args)
    store = result.store

    source = result.outcome.value
    if result.failure:
        source += f" ({result.failure.value}: {result.detail})"
    print(f"Source:     {source}")
    print(f"Categories: {', '.join(store.categories)}")
    print(f"Tags:       {', '.join(store.tags)}")
    print(f"Products:   {len(store.products)}")
    print_products(store.products)
    return 0


def cmd_filter(args) -> int:
    store = load(args).store
    products = filter_products(store, args.category, args.tag or [])
    print(f"{len(products)} of {len(store.products)} products match "
          f"category={args.category!r} tags={args.tag or []}")
    print_products(products)
    return 0


def cmd_show(args) -> int:
    settings = load_settings(args)
    product = find_product(load(args, settings).store, args.id)
    if product is None:
        logger.error("No product with id %s", args.id)
        return 1

    nav = GalleryNavigator.from_settings(product, settings)
    print_products([product])
    if product.note:
        print(f"  {product.note}")
    for index, src in enumerate(nav.sources):
        marker = "*" if index == nav.active_index else " "
        print(f"  {marker} {index + 1}. {src}")
    return 0


def cmd_export(args) -> int:
    result = load(args)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    count = write_products_csv(output, result.store.products, delimiter=args.delimiter)
    logger.info("Exported %d products (%s) to %s", count, result.outcome.value, output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load, filter and export the storefront catalog")
    parser.add_argument("--source", help="Sheet URL (overrides config and CATALOG_SOURCE_URL)")
    parser.add_argument("--no-cache", action="store_true", help="Ignore and do not write the session cache")
    parser.add_argument("--session-file", default=str(DEFAULT_SESSION_FILE),
                        help=f"Session cache file (default: {DEFAULT_SESSION_FILE})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("load", help="Load and list the catalog").set_defaults(func=cmd_load)

    p_filter = sub.add_parser("filter", help="List products matching a category and tags")
    p_filter.add_argument("--category", default=ALL_CATEGORIES,
                          help=f"Category name (default: {ALL_CATEGORIES})")
    p_filter.add_argument("--tag", action="append", help="Tag to match (repeatable, any matches)")
    p_filter.set_defaults(func=cmd_filter)

    p_show = sub.add_parser("show", help="Show one product and its gallery images")
    p_show.add_argument("--id", required=True, help="Product id")
    p_show.set_defaults(func=cmd_show)

    p_export = sub.add_parser("export", help="Write the catalog as CSV")
    p_export.add_argument("--output", "-o", required=True, help="Output CSV path")
    p_export.add_argument("--delimiter", default=",", choices=[",", ";"], help="Field separator")
    p_export.set_defaults(func=cmd_export)

    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return args.func(args)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
