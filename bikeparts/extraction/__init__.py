"""
Vendor page extraction.

Modules:
    vendor_extractor - VendorPageExtractor and extract() (fetch + parse)
    profiles - ExtractionProfile, loaded from config/vendor_profiles.yaml
    price - Price text normalisation
    errors - ResolveError / FetchError / ExtractError
"""

from typing import Dict
from urllib.parse import urlparse

from .errors import ExtractError, FetchError, PartLookupError, ResolveError
from .price import normalize_price, parse_price
from .profiles import ExtractionProfile, load_profiles
from .vendor_extractor import VendorPageExtractor, VendorProduct, extract


def get_vendor_from_url(url: str) -> str:
    """
    Get vendor identifier from URL.

    Args:
        url: Any URL from the vendor site

    Returns:
        Vendor identifier (e.g., "wiggle.com")
    """
    domain = urlparse(url).netloc.lower().split(":")[0]
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def get_profile_for_url(url: str, profiles: Dict[str, ExtractionProfile]) -> ExtractionProfile:
    """
    Get the extraction profile for a URL.

    Args:
        url: Product URL
        profiles: Loaded profiles keyed by vendor host

    Returns:
        ExtractionProfile for the URL's vendor

    Raises:
        ExtractError: If no profile covers the vendor
    """
    vendor = get_vendor_from_url(url)

    for site, profile in profiles.items():
        if vendor == site or vendor.endswith("." + site):
            return profile

    supported = ', '.join(sorted(profiles))
    raise ExtractError(f"Unsupported vendor: {vendor}. Supported: {supported}", url=url)


__all__ = [
    # Extraction
    'VendorPageExtractor',
    'VendorProduct',
    'extract',
    # Profiles
    'ExtractionProfile',
    'load_profiles',
    'get_profile_for_url',
    'get_vendor_from_url',
    # Prices
    'normalize_price',
    'parse_price',
    # Errors
    'PartLookupError',
    'ResolveError',
    'FetchError',
    'ExtractError',
]
