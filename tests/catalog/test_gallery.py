"""Tests for storefront/catalog/gallery.py"""

from unittest.mock import MagicMock

import pytest

from storefront.catalog.gallery import GalleryNavigator, GalleryView, gallery_sources
from storefront.common.config_loader import CatalogSettings
from storefront.common.constants import PLACEHOLDER_GALLERY, PLACEHOLDER_IMAGE
from storefront.models import GalleryState, Product


class RecordingView(GalleryView):
    """View that records calls and reports a configurable strip width."""

    def __init__(self, natural: int = 0, visible: int = 0):
        self.natural = natural
        self.visible = visible
        self.shown = []
        self.active_thumbs = []
        self.scrolled = []
        self.nav_visible = []

    def show_image(self, src, alt):
        self.shown.append((src, alt))

    def mark_active_thumbnail(self, index):
        self.active_thumbs.append(index)

    def scroll_thumbnail_into_view(self, index):
        self.scrolled.append(index)

    def set_navigation_visible(self, visible):
        self.nav_visible.append(visible)

    def strip_widths(self):
        return self.natural, self.visible


@pytest.fixture
def product():
    return Product(id=5, name="Vanilla candle", category="Candles",
                   image="img/main.svg", gallery=["img/main.svg", "img/2.svg", "img/3.svg"])


class TestGallerySources:
    def test_primary_first_and_deduplicated(self, product):
        assert gallery_sources(product) == ("img/main.svg", "img/2.svg", "img/3.svg")

    def test_placeholder_gallery_when_none_declared(self):
        p = Product(id=1, name="A", category="X", image="img/a.svg")
        assert gallery_sources(p) == ("img/a.svg",) + PLACEHOLDER_GALLERY

    def test_no_image_and_no_gallery_collapses_placeholders(self, minimal_product):
        # The placeholder image is also the first placeholder gallery entry
        assert minimal_product.image == ""
        assert gallery_sources(minimal_product) == PLACEHOLDER_GALLERY
        assert gallery_sources(minimal_product)[0] == PLACEHOLDER_IMAGE

    def test_duplicates_inside_gallery_collapse(self):
        p = Product(id=1, name="A", category="X", image="a.svg", gallery=["b.svg", "b.svg", "a.svg"])
        assert gallery_sources(p) == ("a.svg", "b.svg")


class TestNavigatorInitialState:
    def test_starts_at_zero_and_renders(self, product):
        view = RecordingView()
        nav = GalleryNavigator(product, view)

        assert nav.active_index == 0
        assert view.shown == [("img/main.svg", "Vanilla candle")]
        assert view.active_thumbs == [0]
        assert view.scrolled == [0]
        assert view.nav_visible == [False]

    def test_state(self, product):
        nav = GalleryNavigator(product)
        assert nav.state == GalleryState(ordered_sources=nav.sources, active_index=0)
        assert len(nav) == 3

    def test_headless_default_view(self, product):
        nav = GalleryNavigator(product)
        assert nav.next() is True
        assert nav.active_source == "img/2.svg"


class TestNavigation:
    def test_select(self, product):
        view = RecordingView()
        nav = GalleryNavigator(product, view)
        assert nav.select(2) is True
        assert nav.active_index == 2
        assert view.shown[-1] == ("img/3.svg", "Vanilla candle")
        assert view.active_thumbs[-1] == 2
        assert view.scrolled[-1] == 2

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_select_out_of_range_is_noop(self, product, index):
        view = RecordingView()
        nav = GalleryNavigator(product, view)
        nav.select(1)
        calls = len(view.shown)

        assert nav.select(index) is False
        assert nav.active_index == 1
        assert len(view.shown) == calls

    def test_next_wraps_around(self, product):
        nav = GalleryNavigator(product)
        nav.select(2)
        nav.next()
        assert nav.active_index == 0

    def test_prev_wraps_around(self, product):
        nav = GalleryNavigator(product)
        nav.prev()
        assert nav.active_index == 2

    def test_next_then_prev_returns(self, product):
        nav = GalleryNavigator(product)
        nav.next()
        nav.next()
        nav.prev()
        assert nav.active_index == 1

    def test_single_image_stays_put(self):
        p = Product(id=1, name="A", category="X", image="a.svg", gallery=["a.svg"])
        nav = GalleryNavigator(p)
        assert nav.next() is True
        assert nav.active_index == 0
        assert nav.prev() is True
        assert nav.active_index == 0

    def test_empty_sources_never_crash(self, minimal_product):
        nav = GalleryNavigator(minimal_product, placeholder_image="", placeholder_gallery=())
        assert len(nav) == 0
        assert nav.next() is False
        assert nav.prev() is False

    def test_from_settings_uses_configured_placeholders(self, minimal_product):
        settings = CatalogSettings(placeholder_image="img/none.svg",
                                   placeholder_gallery=("img/p1.svg", "img/p2.svg"))
        view = RecordingView()
        nav = GalleryNavigator.from_settings(minimal_product, settings, view)

        assert nav.sources == ("img/none.svg", "img/p1.svg", "img/p2.svg")
        assert view.shown == [("img/none.svg", minimal_product.name)]


class TestNavigationVisibility:
    def test_hidden_when_strip_fits(self, product):
        view = RecordingView(natural=300, visible=300)
        GalleryNavigator(product, view)
        assert view.nav_visible == [False]

    def test_hidden_within_tolerance(self, product):
        view = RecordingView(natural=304, visible=300)
        GalleryNavigator(product, view)
        assert view.nav_visible == [False]

    def test_shown_when_strip_overflows(self, product):
        view = RecordingView(natural=600, visible=300)
        GalleryNavigator(product, view)
        assert view.nav_visible == [True]

    def test_recomputed_on_resize(self, product):
        view = RecordingView(natural=600, visible=300)
        nav = GalleryNavigator(product, view)
        view.visible = 800
        nav.refresh_navigation()
        assert view.nav_visible == [True, False]

    def test_recomputed_after_every_selection(self, product):
        view = MagicMock(spec=GalleryView)
        view.strip_widths.return_value = (10, 100)
        nav = GalleryNavigator(product, view)
        nav.next()
        nav.prev()
        assert view.set_navigation_visible.call_count == 3
