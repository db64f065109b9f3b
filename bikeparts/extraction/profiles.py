"""
Vendor Extraction Profiles

Per-vendor CSS selectors and price-format rules, loaded from
config/vendor_profiles.yaml. Adding a vendor is a config change only.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..common.config_loader import load_vendor_profiles


@dataclass(frozen=True)
class ExtractionProfile:
    """Selectors and price-format rules for one vendor site."""
    vendor: str
    title: str
    price: str
    container: str = ""
    discount_price: str = ""
    currency_symbol: str = "£"
    thousands_separator: str = ","
    decimal_separator: str = "."

    @classmethod
    def from_dict(cls, vendor: str, data: Dict[str, Any]) -> ExtractionProfile:
        """
        Build a profile from its YAML mapping.

        Raises:
            ValueError: If the title or price selector is missing
        """
        for required in ("title", "price"):
            if not data.get(required):
                raise ValueError(f"Vendor profile '{vendor}' is missing the '{required}' selector")

        return cls(
            vendor=vendor,
            title=data["title"],
            price=data["price"],
            container=data.get("container") or "",
            discount_price=data.get("discount_price") or "",
            currency_symbol=data.get("currency_symbol", "£"),
            thousands_separator=data.get("thousands_separator", ","),
            decimal_separator=data.get("decimal_separator", "."),
        )


def load_profiles(config_dir: Optional[Path] = None) -> Dict[str, ExtractionProfile]:
    """
    Load all vendor profiles.

    Returns:
        Dictionary mapping vendor host (e.g. "wiggle.com") to its profile
    """
    raw = load_vendor_profiles(config_dir)
    return {
        vendor.lower(): ExtractionProfile.from_dict(vendor.lower(), data or {})
        for vendor, data in raw.items()
    }
