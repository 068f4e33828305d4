"""
Line-of-sight visibility polygons over 2D wall segments.
"""

from vision.walls import (
    Direction,
    DoorState,
    DoorType,
    ForceBlockRect,
    Rect,
    Sense,
    SenseType,
    Wall,
)
from vision.computer import (
    VisionOptions,
    VisionPolygonComputer,
    compute_visibility_polygon,
)

__all__ = [
    "Direction",
    "DoorState",
    "DoorType",
    "ForceBlockRect",
    "Rect",
    "Sense",
    "SenseType",
    "Wall",
    "VisionOptions",
    "VisionPolygonComputer",
    "compute_visibility_polygon",
]
