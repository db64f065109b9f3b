"""
Component Resolver

Pure decision logic: maps (component, specification) to the vendor links
for that component, using the part catalogue's rule tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..models import BikeSpecification, SpecPatch
from .catalog import PartCatalog


class ResolutionStatus(str, Enum):
    RESOLVED = "RESOLVED"
    UNRESOLVED = "UNRESOLVED"          # true gap, reported as an error
    OMITTED = "OMITTED"                # benign omission, reported as a note
    NOT_APPLICABLE = "NOT_APPLICABLE"  # component not part of this build


@dataclass(frozen=True)
class LineItem:
    """One bill-of-materials line to be priced from a vendor link."""
    label: str
    url: str


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one component against a specification."""
    component: str
    display_name: str
    status: ResolutionStatus
    items: Tuple[LineItem, ...] = ()
    patch: Optional[SpecPatch] = None
    note: str = ""
    detail: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    @property
    def urls(self) -> Tuple[str, ...]:
        return tuple(item.url for item in self.items)


class ComponentResolver:
    """
    Resolves components against the part catalogue.

    Usage:
        resolver = ComponentResolver(PartCatalog.load())
        resolution = resolver.resolve("chainring", spec)
        if resolution.patch:
            spec = spec.apply_patch(resolution.patch)
    """

    def __init__(self, catalog: PartCatalog):
        self.catalog = catalog

    def resolve(self, component: str, spec: BikeSpecification) -> Resolution:
        """
        Resolve one component.

        Args:
            component: Catalogue component name (e.g. "rear_derailleur")
            spec: Current bike specification

        Returns:
            Resolution (resolved items, unresolved gap, benign omission or
            not applicable to this build)

        Raises:
            ValueError: If the component is not in the catalogue
        """
        table = self.catalog.table(component)
        name = table.display_name

        if not table.applies_to(spec):
            return Resolution(component, name, ResolutionStatus.NOT_APPLICABLE)

        rule = table.match(spec)
        if rule is None:
            keys = ", ".join(f"{field}={_field_text(spec, field)}" for field in table.key_fields)
            return Resolution(
                component, name, ResolutionStatus.UNRESOLVED,
                detail=f"No catalogue entry for {keys}",
            )

        if rule.omit:
            return Resolution(component, name, ResolutionStatus.OMITTED, note=rule.note)

        labels = rule.labels or table.labels
        items = []
        for label in labels:
            url = rule.url
            for override in table.overrides:
                if override.label == label and override.when.matches(spec):
                    url = override.url
                    break
            items.append(LineItem(label=label, url=url))

        return Resolution(
            component, name, ResolutionStatus.RESOLVED,
            items=tuple(items),
            patch=rule.patch,
            note=rule.note,
        )

    def groupset_patch(self, spec: BikeSpecification) -> Optional[SpecPatch]:
        """
        Return a patch moving the specification onto a catalogued groupset brand.

        Returns:
            SpecPatch, or None if the brand is already covered
        """
        if spec.groupset_brand in self.catalog.groupset_brands:
            return None
        brand = self.catalog.groupset_brands[0]
        return SpecPatch(
            groupset_brand=brand,
            reason=f"{spec.groupset_brand.value} groupsets are not catalogued, using {brand.value}",
        )


def _field_text(spec: BikeSpecification, field: str) -> str:
    value = getattr(spec, field)
    return value.value if isinstance(value, Enum) else str(value)
