"""Shared test fixtures."""

from pathlib import Path

import pytest

from storefront.common.config_loader import CatalogSettings
from storefront.common.storage import MemoryStorage
from storefront.models import Product, Store

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SHEET_URL = "https://docs.example.com/spreadsheets/d/e/test/pub?output=csv"


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def bulgarian_sheet_csv():
    """Load the semicolon-separated Bulgarian sheet fixture."""
    return (FIXTURES_DIR / "catalog_bg.csv").read_text(encoding="utf-8")


@pytest.fixture
def english_sheet_csv():
    """Load the comma-separated English sheet fixture."""
    return (FIXTURES_DIR / "catalog_en.csv").read_text(encoding="utf-8")


@pytest.fixture
def minimal_product():
    """Create a minimal product with only required fields."""
    return Product(id=1, name="Candle A", category="Candles")


@pytest.fixture
def sample_store():
    """Small store covering two categories and overlapping tags."""
    return Store.from_products([
        Product(id=1, name="Vanilla candle", category="Candles", price="24 лв.",
                tags=["Birthday", "Valentine"]),
        Product(id=2, name="Rose bouquet", category="Bouquets", price="40 лв.",
                tags=["Valentine"]),
        Product(id=3, name="Cedar candle", category="Candles", price="22 лв.",
                tags=["Christening"]),
        Product(id=4, name="Plain candle", category="Candles", price="15 лв."),
        Product(id=5, name="Birthday bouquet", category="Bouquets", price="35 лв.",
                tags=["Birthday"]),
    ])


@pytest.fixture
def settings():
    """Catalog settings pointing at a test sheet URL."""
    return CatalogSettings(source_url=SHEET_URL)


@pytest.fixture
def storage():
    """Fresh in-memory session storage."""
    return MemoryStorage()


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()
