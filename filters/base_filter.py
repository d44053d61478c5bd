"""
Base Filter Class
=================
All filter descriptors inherit from this class.

A descriptor is immutable configuration: a unique key, a display name, the
kind of transform the pipeline should run, and the parameters for that
transform. The FilterPipeline owns all per-frame state and caches.

To add a new filter:
1. Pick the descriptor class for its kind (or subclass BaseFilter)
2. Add an instance to FILTER_LIST in filters/__init__.py
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class FilterKind(Enum):
    DIRECT_COLOR_OP = "direct_color_op"
    PIXELATE = "pixelate"
    EDGE_DETECT = "edge_detect"
    LUT_GRADE = "lut_grade"


@dataclass(frozen=True)
class BaseFilter:
    """Abstract base for all filter descriptors"""

    key: str   # Unique identifier (e.g., "teal_orange")
    name: str  # Display name (e.g., "Cinematic Teal & Orange")

    kind: ClassVar[FilterKind]

    def __post_init__(self):
        if type(self) is BaseFilter:
            raise TypeError("BaseFilter is abstract; use a concrete descriptor")
        if not self.key:
            raise ValueError("Filter key must be a non-empty string")
