"""
Data models for bike part resolution.

This module contains pure data classes with no business logic.
"""

from .bike import (
    BikeSpecification,
    BrakeType,
    FrameStyle,
    GroupsetBrand,
    HandlebarType,
    ShifterStyle,
    SpecPatch,
    WheelPreference,
)
from .parts import BillOfMaterials, ErrorStage, Part, ResolutionError

__all__ = [
    'FrameStyle',
    'BrakeType',
    'ShifterStyle',
    'HandlebarType',
    'WheelPreference',
    'GroupsetBrand',
    'BikeSpecification',
    'SpecPatch',
    'Part',
    'ErrorStage',
    'ResolutionError',
    'BillOfMaterials',
]
