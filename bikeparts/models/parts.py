"""
Bill of materials models.

Pure data classes for resolved parts, per-component errors and the
aggregated bill. No business logic - only data structure definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from .bike import BikeSpecification


class ErrorStage(str, Enum):
    """Pipeline stage at which a component failed."""

    RESOLVE = "RESOLVE"
    FETCH = "FETCH"
    EXTRACT = "EXTRACT"


@dataclass(frozen=True)
class Part:
    """A resolved, priced component of the bike."""
    label: str
    name: str
    price: Decimal
    url: str

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.name:
            raise ValueError("Part name is required")
        if not self.url:
            raise ValueError("Part URL is required")
        if self.price < 0:
            raise ValueError(f"Part price must be non-negative, got {self.price}")

    def to_dict(self) -> Dict[str, str]:
        return {
            "label": self.label,
            "name": self.name,
            "price": f"{self.price:.2f}",
            "url": self.url,
        }


@dataclass(frozen=True)
class ResolutionError:
    """A component that could not be fully resolved."""
    component: str
    stage: ErrorStage
    detail: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "component": self.component,
            "stage": self.stage.value,
            "detail": self.detail,
            "url": self.url,
        }


@dataclass
class BillOfMaterials:
    """
    Result of one resolution run.

    Field Groups:
    - parts / errors: Outcomes of every component task (order is not significant)
    - notes: Informational messages (benign omissions, substitutes, clamps)
    - specification: The specification the parts were resolved against,
      after any gear-count clamps
    - total_price / total_price_display: Sum over parts, each rounded up to
      the cent, and its currency-formatted form
    """

    specification: BikeSpecification
    parts: List[Part] = field(default_factory=list)
    errors: List[ResolutionError] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    total_price: Decimal = Decimal("0.00")
    total_price_display: str = ""

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_complete(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specification": self.specification.to_dict(),
            "parts": [part.to_dict() for part in self.parts],
            "errors": [error.to_dict() for error in self.errors],
            "notes": list(self.notes),
            "total_price": f"{self.total_price:.2f}",
            "total_price_display": self.total_price_display,
        }
