"""
Price Normalisation

Turns vendor price text ("£1,234", "£45.5 RRP") into a canonical
two-decimal string ("1234.00", "45.50").
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .errors import ExtractError
from .profiles import ExtractionProfile

_PRICE_PATTERN = re.compile(r'\d+(?:\.\d{0,2})?')


def normalize_price(text: str, profile: Optional[ExtractionProfile] = None) -> str:
    """
    Normalise a vendor price string.

    Steps:
    1. Strip the currency symbol and surrounding whitespace
    2. Keep only the first whitespace-separated token
    3. Remove the thousands separator, convert the decimal separator to "."
    4. Append ".00" when there is no decimal point
    5. Require a non-negative decimal with at most two fractional digits

    Args:
        text: Raw price text from the page
        profile: Vendor profile supplying symbol and separators (GBP defaults if None)

    Returns:
        Price with exactly two fractional digits, e.g. "45.50"

    Raises:
        ExtractError: If the text is not a valid non-negative price
    """
    symbol = profile.currency_symbol if profile else "£"
    thousands = profile.thousands_separator if profile else ","
    decimal_sep = profile.decimal_separator if profile else "."

    cleaned = (text or "").strip()
    if symbol:
        cleaned = cleaned.replace(symbol, "")

    tokens = cleaned.split()
    if not tokens:
        raise ExtractError(f"Empty price text: {text!r}")
    token = tokens[0]

    if thousands:
        token = token.replace(thousands, "")
    if decimal_sep and decimal_sep != ".":
        token = token.replace(decimal_sep, ".")

    if "." not in token:
        token = token + ".00"

    if not _PRICE_PATTERN.fullmatch(token):
        raise ExtractError(f"Malformed price text: {text!r}")

    try:
        value = Decimal(token)
    except InvalidOperation as e:
        raise ExtractError(f"Malformed price text: {text!r}") from e

    return f"{value:.2f}"


def parse_price(text: str, profile: Optional[ExtractionProfile] = None) -> Decimal:
    """Normalise price text and return it as a Decimal."""
    return Decimal(normalize_price(text, profile))
