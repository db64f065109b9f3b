"""
Part Catalogue

Lookup tables mapping bike specification fields to vendor product links,
loaded from config/part_catalog.yaml. Each component is an ordered list of
rules; the first rule whose conditions match the specification wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..common.config_loader import load_part_catalog
from ..models import (
    BikeSpecification,
    BrakeType,
    FrameStyle,
    GroupsetBrand,
    HandlebarType,
    ShifterStyle,
    SpecPatch,
    WheelPreference,
)


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected true/false, got {value!r}")
    return value


# Specification fields usable in rule conditions, with their value parsers
FIELD_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "frame_style": FrameStyle.parse,
    "disc_brake_compatible": _parse_bool,
    "brake_type": BrakeType.parse,
    "shifter_style": ShifterStyle.parse,
    "handlebar_type": HandlebarType.parse,
    "wheel_preference": WheelPreference.parse,
    "groupset_brand": GroupsetBrand.parse,
    "front_gears": int,
    "rear_gears": int,
}

PATCH_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "front_gears": int,
    "rear_gears": int,
    "groupset_brand": GroupsetBrand.parse,
}


@dataclass(frozen=True)
class Condition:
    """Conjunction of field -> allowed values; an empty condition matches everything."""
    clauses: Tuple[Tuple[str, Tuple[Any, ...]], ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], where: str) -> Condition:
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"{where}: conditions must be a mapping, got {data!r}")

        clauses = []
        for field_name, raw in data.items():
            parser = FIELD_PARSERS.get(field_name)
            if parser is None:
                raise ValueError(f"{where}: unknown specification field '{field_name}'")
            values = raw if isinstance(raw, list) else [raw]
            try:
                parsed = tuple(parser(value) for value in values)
            except (TypeError, ValueError) as e:
                raise ValueError(f"{where}: bad value for '{field_name}': {e}") from e
            clauses.append((field_name, parsed))
        return cls(tuple(clauses))

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.clauses)

    def matches(self, spec: BikeSpecification) -> bool:
        return all(getattr(spec, name) in values for name, values in self.clauses)


@dataclass(frozen=True)
class Rule:
    """One row of a component table."""
    when: Condition
    url: str = ""
    omit: bool = False
    labels: Tuple[str, ...] = ()
    patch: Optional[SpecPatch] = None
    note: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str) -> Rule:
        url = data.get("url") or ""
        omit = bool(data.get("omit", False))
        if bool(url) == omit:
            raise ValueError(f"{where}: a rule needs exactly one of 'url' or 'omit: true'")

        note = data.get("note") or ""
        patch = None
        if data.get("patch"):
            changes = {}
            for key, value in data["patch"].items():
                if key not in PATCH_PARSERS:
                    raise ValueError(f"{where}: '{key}' cannot be patched")
                changes[key] = PATCH_PARSERS[key](value)
            patch = SpecPatch(reason=note, **changes)

        return cls(
            when=Condition.from_dict(data.get("when"), where),
            url=url,
            omit=omit,
            labels=tuple(data.get("labels") or ()),
            patch=patch,
            note=note,
        )


@dataclass(frozen=True)
class Override:
    """Replaces the link of a single line item when its condition matches."""
    when: Condition
    label: str
    url: str


@dataclass(frozen=True)
class ComponentTable:
    """Rule table for one component kind."""
    name: str
    labels: Tuple[str, ...]
    rules: Tuple[Rule, ...]
    applies_when: Condition = Condition()
    overrides: Tuple[Override, ...] = ()

    @property
    def display_name(self) -> str:
        if len(self.labels) == 1:
            return self.labels[0]
        return self.name.replace("_", " ").title()

    @property
    def key_fields(self) -> Tuple[str, ...]:
        """Specification fields the rules are keyed on, in first-seen order."""
        seen: List[str] = []
        for rule in self.rules:
            for name in rule.when.fields:
                if name not in seen:
                    seen.append(name)
        return tuple(seen)

    def applies_to(self, spec: BikeSpecification) -> bool:
        return self.applies_when.matches(spec)

    def match(self, spec: BikeSpecification) -> Optional[Rule]:
        for rule in self.rules:
            if rule.when.matches(spec):
                return rule
        return None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> ComponentTable:
        where = f"part_catalog.{name}"
        labels = data.get("labels") or ([data["label"]] if data.get("label") else [])
        if not labels:
            raise ValueError(f"{where}: 'label' or 'labels' is required")

        rules = tuple(
            Rule.from_dict(rule, f"{where}.rules[{i}]")
            for i, rule in enumerate(data.get("rules") or [])
        )

        overrides = []
        for i, item in enumerate(data.get("overrides") or []):
            label = item.get("label")
            if label not in labels:
                raise ValueError(f"{where}.overrides[{i}]: unknown label {label!r}")
            if not item.get("url"):
                raise ValueError(f"{where}.overrides[{i}]: 'url' is required")
            overrides.append(Override(
                when=Condition.from_dict(item.get("when"), f"{where}.overrides[{i}]"),
                label=label,
                url=item["url"],
            ))

        return cls(
            name=name,
            labels=tuple(labels),
            rules=rules,
            applies_when=Condition.from_dict(data.get("applies_when"), f"{where}.applies_when"),
            overrides=tuple(overrides),
        )


class PartCatalog:
    """
    All component tables plus the pre-pass ordering.

    Usage:
        catalog = PartCatalog.load()
        table = catalog.table("chainring")
        rule = table.match(spec)
    """

    def __init__(
        self,
        tables: Dict[str, ComponentTable],
        prepass: Tuple[str, ...] = (),
        groupset_brands: Tuple[GroupsetBrand, ...] = (GroupsetBrand.SHIMANO,),
    ):
        unknown = [name for name in prepass if name not in tables]
        if unknown:
            raise ValueError(f"Pre-pass names unknown components: {', '.join(unknown)}")
        # Patching tables must run before fan-out so every reader sees the clamped values
        patching = [
            name for name, table in tables.items()
            if name not in prepass and any(rule.patch for rule in table.rules)
        ]
        if patching:
            raise ValueError(f"Components with patches must be in the pre-pass: {', '.join(patching)}")
        if not groupset_brands:
            raise ValueError("Catalogue must cover at least one groupset brand")

        self.tables = tables
        self.prepass = tuple(prepass)
        self.groupset_brands = tuple(groupset_brands)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PartCatalog:
        components = data.get("components") or {}
        tables = {
            name: ComponentTable.from_dict(name, table or {})
            for name, table in components.items()
        }
        brands = tuple(GroupsetBrand.parse(b) for b in data.get("groupset_brands") or ["SHIMANO"])
        return cls(tables, tuple(data.get("prepass") or ()), brands)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> PartCatalog:
        """Load the catalogue from config/part_catalog.yaml."""
        return cls.from_dict(load_part_catalog(config_dir))

    @property
    def components(self) -> Tuple[str, ...]:
        return tuple(self.tables)

    @property
    def fan_out_components(self) -> Tuple[str, ...]:
        """Components that never patch the specification, in catalogue order."""
        return tuple(name for name in self.tables if name not in self.prepass)

    def table(self, component: str) -> ComponentTable:
        try:
            return self.tables[component]
        except KeyError:
            raise ValueError(f"Unknown component: {component}") from None
