"""
Bike specification models.

Pure data classes describing the bike a customer wants built.
No business logic - only data structure definitions and input checks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

VALID_FRONT_GEARS = frozenset({1, 2, 3})
# 1 is a single-speed rear; 8-12 are geared cassettes
VALID_REAR_GEARS = frozenset({1, 8, 9, 10, 11, 12})


def _parse_flag(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"Invalid {name}: expected true/false, got {value!r}")


def _parse_gear_count(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: expected a whole number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid {name}: expected a whole number, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid {name}: expected a whole number, got {value!r}") from e


class _SpecEnum(str, Enum):
    """String enum that parses loosely formatted names ("Single Speed", "cheap")."""

    @classmethod
    def parse(cls, value: Any):
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            allowed = ", ".join(member.name for member in cls)
            raise ValueError(f"Invalid {cls.__name__}: {value!r}. Allowed: {allowed}") from None


class FrameStyle(_SpecEnum):
    ROAD = "ROAD"
    TOUR = "TOUR"
    GRAVEL = "GRAVEL"
    SINGLE_SPEED = "SINGLE_SPEED"


class BrakeType(_SpecEnum):
    RIM = "RIM"
    MECHANICAL_DISC = "MECHANICAL_DISC"
    HYDRAULIC_DISC = "HYDRAULIC_DISC"


class ShifterStyle(_SpecEnum):
    TRIGGER = "TRIGGER"
    STI = "STI"


class HandlebarType(_SpecEnum):
    DROPS = "DROPS"
    FLAT = "FLAT"
    BULLHORNS = "BULLHORNS"
    FLARE = "FLARE"


class WheelPreference(_SpecEnum):
    CHEAP = "CHEAP"
    PREMIUM = "PREMIUM"


class GroupsetBrand(_SpecEnum):
    SHIMANO = "SHIMANO"
    SRAM = "SRAM"
    CAMPAGNOLO = "CAMPAGNOLO"


@dataclass(frozen=True)
class SpecPatch:
    """Correction to an unsupported specification value, produced during resolution."""
    rear_gears: Optional[int] = None
    front_gears: Optional[int] = None
    groupset_brand: Optional[GroupsetBrand] = None
    reason: str = ""

    @property
    def is_empty(self) -> bool:
        return self.rear_gears is None and self.front_gears is None and self.groupset_brand is None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields this patch overrides."""
        fields = {
            "rear_gears": self.rear_gears,
            "front_gears": self.front_gears,
            "groupset_brand": self.groupset_brand,
        }
        return {name: value for name, value in fields.items() if value is not None}


@dataclass(frozen=True)
class BikeSpecification:
    """
    Desired attributes of a bike build.

    The specification is an immutable value. Corrections made during
    resolution (gear-count clamps) produce a new specification via
    apply_patch(), so every reader of a given instance sees the same values.
    """

    frame_style: FrameStyle
    brake_type: BrakeType
    shifter_style: ShifterStyle
    handlebar_type: HandlebarType
    wheel_preference: WheelPreference
    front_gears: int
    rear_gears: int
    disc_brake_compatible: bool = False
    groupset_brand: GroupsetBrand = GroupsetBrand.SHIMANO

    def __post_init__(self):
        """Validate gear counts after initialization."""
        if self.front_gears not in VALID_FRONT_GEARS:
            raise ValueError(
                f"Front gear count must be one of {sorted(VALID_FRONT_GEARS)}, got {self.front_gears}"
            )
        if self.rear_gears not in VALID_REAR_GEARS:
            raise ValueError(
                f"Rear gear count must be one of {sorted(VALID_REAR_GEARS)}, got {self.rear_gears}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BikeSpecification:
        """
        Build a specification from JSON-style values.

        Enum fields accept their names in any case ("ROAD", "road",
        "Single Speed"). Gear counts accept whole numbers or numeric strings;
        disc_brake_compatible accepts a bool or "true"/"false".

        Args:
            data: Mapping with the specification fields

        Returns:
            BikeSpecification

        Raises:
            ValueError: If a field is missing or has an invalid value
        """
        if not isinstance(data, dict):
            raise ValueError(f"Bike specification must be a mapping, got {type(data).__name__}")

        try:
            return cls(
                frame_style=FrameStyle.parse(data["frame_style"]),
                brake_type=BrakeType.parse(data["brake_type"]),
                shifter_style=ShifterStyle.parse(data["shifter_style"]),
                handlebar_type=HandlebarType.parse(data["handlebar_type"]),
                wheel_preference=WheelPreference.parse(data["wheel_preference"]),
                front_gears=_parse_gear_count("front_gears", data["front_gears"]),
                rear_gears=_parse_gear_count("rear_gears", data["rear_gears"]),
                disc_brake_compatible=_parse_flag("disc_brake_compatible", data.get("disc_brake_compatible", False)),
                groupset_brand=GroupsetBrand.parse(data.get("groupset_brand", "SHIMANO")),
            )
        except KeyError as e:
            raise ValueError(f"Missing bike specification field: {e.args[0]}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frame_style": self.frame_style.value,
            "disc_brake_compatible": self.disc_brake_compatible,
            "brake_type": self.brake_type.value,
            "shifter_style": self.shifter_style.value,
            "handlebar_type": self.handlebar_type.value,
            "wheel_preference": self.wheel_preference.value,
            "groupset_brand": self.groupset_brand.value,
            "front_gears": self.front_gears,
            "rear_gears": self.rear_gears,
        }

    def apply_patch(self, patch: Optional[SpecPatch]) -> BikeSpecification:
        """Return a copy of this specification with the patch applied."""
        if patch is None or patch.is_empty:
            return self
        return replace(self, **patch.changes())
