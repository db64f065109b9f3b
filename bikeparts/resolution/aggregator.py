"""
Bill-of-Materials Aggregator

Collects resolved parts and per-component errors into a BillOfMaterials
and computes the total price.
"""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal
from typing import Iterable, List, Optional, Union

from ..common.constants import DEFAULT_CURRENCY_SYMBOL
from ..models import BikeSpecification, BillOfMaterials, Part, ResolutionError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

Outcome = Union[Part, ResolutionError]


def round_up_to_cent(value: Decimal) -> Decimal:
    """Round up (ceiling) to two decimal places: 123.451 -> 123.46."""
    return Decimal(value).quantize(CENT, rounding=ROUND_CEILING)


def format_price(amount: Decimal, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format an amount for display: £1,234.50."""
    return f"{currency_symbol}{amount:,.2f}"


class BillOfMaterialsAggregator:
    """Builds a BillOfMaterials from component outcomes."""

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL):
        self.currency_symbol = currency_symbol

    def aggregate(
        self,
        outcomes: Iterable[Outcome],
        specification: BikeSpecification,
        notes: Optional[List[str]] = None,
    ) -> BillOfMaterials:
        """
        Assemble the bill of materials.

        Errors do not block the total: it is computed over the parts that
        resolved, each rounded up to the cent before summation.

        Args:
            outcomes: Parts and ResolutionErrors, in any order
            specification: Specification the parts were resolved against
            notes: Informational messages to carry on the bill

        Returns:
            BillOfMaterials
        """
        bill = BillOfMaterials(specification=specification, notes=list(notes or []))

        for outcome in outcomes:
            if isinstance(outcome, Part):
                bill.parts.append(outcome)
            elif isinstance(outcome, ResolutionError):
                bill.errors.append(outcome)
            else:
                raise TypeError(f"Unexpected outcome type: {type(outcome).__name__}")

        total = sum((round_up_to_cent(part.price) for part in bill.parts), Decimal("0.00"))
        bill.total_price = total
        bill.total_price_display = format_price(total, self.currency_symbol)

        if bill.errors:
            logger.error(
                "Bill has %d error(s): %s",
                len(bill.errors),
                "; ".join(f"{e.component} [{e.stage.value}] {e.detail}" for e in bill.errors),
            )
        logger.info("Total for %d part(s): %s", len(bill.parts), bill.total_price_display)
        return bill
