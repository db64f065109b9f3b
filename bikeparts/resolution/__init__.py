"""
Part resolution and aggregation.

Modules:
    catalog - PartCatalog rule tables from config/part_catalog.yaml
    resolver - ComponentResolver (specification -> vendor links)
    orchestrator - PartsOrchestrator (pre-pass, fan-out, join, aggregate)
    aggregator - BillOfMaterialsAggregator and price rounding/formatting
"""

from .aggregator import BillOfMaterialsAggregator, format_price, round_up_to_cent
from .catalog import ComponentTable, PartCatalog, Rule
from .orchestrator import PartsOrchestrator, resolve_parts_for_specification
from .resolver import ComponentResolver, LineItem, Resolution, ResolutionStatus

__all__ = [
    # Catalogue
    'PartCatalog',
    'ComponentTable',
    'Rule',
    # Resolver
    'ComponentResolver',
    'Resolution',
    'ResolutionStatus',
    'LineItem',
    # Orchestration
    'PartsOrchestrator',
    'resolve_parts_for_specification',
    # Aggregation
    'BillOfMaterialsAggregator',
    'round_up_to_cent',
    'format_price',
]
