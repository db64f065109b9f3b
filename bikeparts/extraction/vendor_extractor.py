"""
Vendor Page Extractor

Fetches a vendor product page and extracts the product name and price
using the vendor's extraction profile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup

from ..common.constants import DEFAULT_FETCH_TIMEOUT, DEFAULT_HEADERS
from .errors import ExtractError, FetchError
from .price import parse_price
from .profiles import ExtractionProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VendorProduct:
    """Name and normalised price read from a vendor page."""
    name: str
    price: Decimal
    url: str


class VendorPageExtractor:
    """
    Extracts a product name and price from one vendor page.

    Usage:
        extractor = VendorPageExtractor(url, profile, session=session)
        extractor.fetch()
        product = extractor.extract()
    """

    def __init__(
        self,
        url: str,
        profile: ExtractionProfile,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.url = url
        self.profile = profile
        self.timeout = timeout
        self.headers = headers or DEFAULT_HEADERS
        self._session = session
        self.html = None
        self.soup = None

    def fetch(self) -> None:
        """
        Fetch the product page HTML. Single attempt, no retries.

        Raises:
            FetchError: On network failure, timeout or a non-200 response
        """
        logger.info("Connecting to link: %s", self.url)
        requester = self._session or requests
        try:
            response = requester.get(self.url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Timed out after {self.timeout}s", url=self.url) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"{type(e).__name__}: {str(e)[:100]}", url=self.url) from e

        if response.status_code != 200:
            raise FetchError(f"HTTP {response.status_code} from vendor", url=self.url)

        self.load_html(response.text)

    def load_html(self, html: str) -> None:
        """Load pre-fetched HTML for extraction without a network request."""
        self.html = html
        self.soup = BeautifulSoup(self.html, "lxml")

    def extract(self) -> VendorProduct:
        """
        Extract the product name and price.

        A discounted-price node is preferred over the standard price node
        when the profile defines one and the page contains it.

        Raises:
            ExtractError: If the container, title or price node is missing,
                or the price text is malformed
        """
        if self.soup is None:
            raise ExtractError("No page loaded", url=self.url)

        scope = self.soup
        if self.profile.container:
            scope = self.soup.select_one(self.profile.container)
            if scope is None:
                raise ExtractError(
                    f"Product container '{self.profile.container}' not found", url=self.url
                )

        name = self._extract_title(scope)
        price = self._extract_price(scope)

        logger.info("Found product: %s for %s", name, price)
        return VendorProduct(name=name, price=price, url=self.url)

    def _extract_title(self, scope) -> str:
        element = scope.select_one(self.profile.title)
        title = element.get_text(" ", strip=True) if element else ""
        if not title:
            raise ExtractError(f"Title '{self.profile.title}' not found", url=self.url)
        return title

    def _extract_price(self, scope) -> Decimal:
        element = None
        if self.profile.discount_price:
            element = scope.select_one(self.profile.discount_price)
        if element is None:
            element = scope.select_one(self.profile.price)
        if element is None:
            raise ExtractError(f"Price '{self.profile.price}' not found", url=self.url)

        try:
            return parse_price(element.get_text(" ", strip=True), self.profile)
        except ExtractError as e:
            raise ExtractError(str(e), url=self.url) from e


def extract(
    url: str,
    profile: ExtractionProfile,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
) -> VendorProduct:
    """
    Fetch a vendor page and extract its name and price.

    Args:
        url: Vendor product URL
        profile: Extraction profile for the vendor
        session: Optional shared requests.Session
        timeout: Fetch timeout in seconds
        headers: Request headers (defaults to DEFAULT_HEADERS)

    Returns:
        VendorProduct

    Raises:
        FetchError: Network failure, timeout or non-200 response
        ExtractError: Missing node or malformed price
    """
    extractor = VendorPageExtractor(url, profile, session=session, timeout=timeout, headers=headers)
    extractor.fetch()
    return extractor.extract()
