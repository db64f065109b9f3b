"""Shared test fixtures."""

import threading
from types import SimpleNamespace
from urllib.parse import urlparse

import pytest

from bikeparts.extraction import load_profiles
from bikeparts.models import (
    BikeSpecification,
    BrakeType,
    FrameStyle,
    HandlebarType,
    ShifterStyle,
    WheelPreference,
)
from bikeparts.resolution import PartCatalog


def wiggle_page(name: str, price: str) -> str:
    """Page markup used by wiggle.com and chainreactioncycles.com."""
    return f'''
    <html><body>
    <div class="ProductDetail_container__FX6xF">
        <h1>{name}</h1>
        <div class="ProductPrice_productPrice__Fg1nA"><p>{price}</p></div>
    </div>
    </body></html>
    '''


def halo_page(name: str, price: str, sale_price: str = "") -> str:
    sale = f"<ins><span>{sale_price}</span></ins>" if sale_price else ""
    return f'''
    <html><body>
    <div class="productDetails">
        <h1>{name}</h1>
        <div class="priceSummary"><span>{price}</span>{sale}</div>
    </div>
    </body></html>
    '''


def dolan_page(name: str, price: str) -> str:
    return f'''
    <html><body>
    <div class="productBuy"><div class="productPanel">
        <h1>{name}</h1>
        <div class="price"><span class="price">{price}</span></div>
    </div></div>
    </body></html>
    '''


def genesis_page(name: str, price: str) -> str:
    return f'''
    <html><body>
    <div class="product-info-main-header">
        <h1 class="page-title">{name}</h1>
        <div class="product-info-price">
            <div class="price-final_price"><span class="price">{price}</span></div>
        </div>
    </div>
    </body></html>
    '''


PAGE_BUILDERS = {
    "wiggle.com": wiggle_page,
    "chainreactioncycles.com": wiggle_page,
    "halowheels.com": halo_page,
    "dolan-bikes.com": dolan_page,
    "genesisbikes.co.uk": genesis_page,
}


class FakeSession:
    """
    Thread-safe stand-in for requests.Session.

    Serves a vendor-shaped page for every URL, named after the URL slug and
    priced at `price`. Individual URLs can be overridden with a status code,
    custom HTML or an exception to raise.
    """

    def __init__(self, price: str = "£10.00"):
        self.price = price
        self.headers = {}
        self.overrides = {}
        self.requested = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url, headers=None, timeout=None):
        with self._lock:
            self.requested.append(url)
        override = self.overrides.get(url)
        if isinstance(override, Exception):
            raise override
        if isinstance(override, tuple):
            status, html = override
            return SimpleNamespace(status_code=status, text=html)

        host = urlparse(url).netloc.lower()
        if host.startswith("www."):
            host = host[4:]
        slug = url.rstrip("/").rsplit("/", 1)[-1]
        return SimpleNamespace(status_code=200, text=PAGE_BUILDERS[host](slug, self.price))

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture(scope="session")
def catalog():
    """The real part catalogue from config/."""
    return PartCatalog.load()


@pytest.fixture(scope="session")
def profiles():
    """The real vendor profiles from config/."""
    return load_profiles()


@pytest.fixture
def test_settings():
    return {
        "fetch_timeout": 5,
        "max_workers": 8,
        "currency_symbol": "£",
        "headers": {"User-Agent": "test"},
    }


@pytest.fixture
def make_spec():
    """Factory for specifications with sensible road-bike defaults."""
    def _make(**overrides):
        fields = {
            "frame_style": FrameStyle.ROAD,
            "disc_brake_compatible": False,
            "brake_type": BrakeType.RIM,
            "shifter_style": ShifterStyle.STI,
            "handlebar_type": HandlebarType.DROPS,
            "wheel_preference": WheelPreference.CHEAP,
            "front_gears": 2,
            "rear_gears": 11,
        }
        fields.update(overrides)
        return BikeSpecification(**fields)
    return _make


@pytest.fixture
def single_speed_spec(make_spec):
    return make_spec(
        frame_style=FrameStyle.SINGLE_SPEED,
        brake_type=BrakeType.RIM,
        shifter_style=ShifterStyle.TRIGGER,
        handlebar_type=HandlebarType.BULLHORNS,
        wheel_preference=WheelPreference.CHEAP,
        front_gears=1,
        rear_gears=1,
    )


@pytest.fixture
def hydraulic_sti_spec(make_spec):
    return make_spec(
        disc_brake_compatible=True,
        brake_type=BrakeType.HYDRAULIC_DISC,
        shifter_style=ShifterStyle.STI,
        front_gears=2,
        rear_gears=11,
    )


@pytest.fixture
def pages():
    """Vendor page builders keyed by shop."""
    return SimpleNamespace(wiggle=wiggle_page, halo=halo_page, dolan=dolan_page, genesis=genesis_page)


@pytest.fixture
def make_session():
    return FakeSession
