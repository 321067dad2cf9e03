"""
Storefront Catalog

Modules:
    models      - Data models (Product, Store, GalleryState)
    common      - Shared utilities (config loader, logging, storage, CSV export)
    ingestion   - Sheet parsing, catalog building, caching and loading
    catalog     - Grid filtering, product lookups, detail gallery navigation
    contact     - Contact/order form relay
"""
