"""
Wall records and the small enums that describe how a wall blocks senses.

Numeric values match the host document format so layouts can be loaded
without a translation table.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple
import math

Point = Tuple[float, float]


class SenseType(IntEnum):
    """How a wall affects one sense."""

    NONE = 0
    LIMITED = 10
    NORMAL = 20


class DoorType(IntEnum):
    NONE = 0
    DOOR = 1
    SECRET = 2


class DoorState(IntEnum):
    CLOSED = 0
    OPEN = 1
    LOCKED = 2


class Direction(IntEnum):
    """One-way selector: which side of a->b the wall blocks from."""

    BOTH = 0
    LEFT = 1
    RIGHT = 2


class Sense(Enum):
    """Which wall attribute a query checks."""

    SIGHT = "sight"
    LIGHT = "light"


@dataclass(slots=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """Closed containment test; tolerates negative sizes."""
        x0, x1 = sorted((self.x, self.x + self.width))
        y0, y1 = sorted((self.y, self.y + self.height))
        return x0 <= px <= x1 and y0 <= py <= y1

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in edge order: top-left, top-right, bottom-right, bottom-left."""
        x, y, w, h = self.x, self.y, self.width, self.height
        return ((x, y), (x + w, y), (x + w, y + h), (x, y + h))

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))


@dataclass(slots=True)
class ForceBlockRect(Rect):
    """Region whose overlapped walls always block sight.

    Only applies while the viewer's elevation is inside [bottom, top].
    """

    bottom: float = -math.inf
    top: float = math.inf

    def is_active(self, elevation: Optional[float]) -> bool:
        if elevation is None:
            return True
        return self.bottom <= elevation <= self.top


@dataclass(slots=True)
class Wall:
    """A wall segment and its blocking attributes. Treated as read-only."""

    a: Optional[Point]
    b: Optional[Point]
    sight: SenseType = SenseType.NORMAL
    light: SenseType = SenseType.NORMAL
    door: DoorType = DoorType.NONE
    door_state: DoorState = DoorState.CLOSED
    direction: Direction = Direction.BOTH
    bottom: Optional[float] = None  # Vertical extent; None means unbounded
    top: Optional[float] = None

    @classmethod
    def from_coords(cls, ax: float, ay: float, bx: float, by: float, **attributes) -> "Wall":
        """Build a wall from four coordinates."""
        return cls((ax, ay), (bx, by), **attributes)

    def sense_type(self, sense: Sense) -> SenseType:
        if sense is Sense.LIGHT:
            return self.light
        return self.sight

    @property
    def is_open_door(self) -> bool:
        return self.door != DoorType.NONE and self.door_state == DoorState.OPEN

    @property
    def midpoint(self) -> Point:
        return ((self.a[0] + self.b[0]) / 2, (self.a[1] + self.b[1]) / 2)

    def elevation_range(self) -> Tuple[float, float]:
        """(bottom, top) with missing bounds as infinities and inversions swapped."""
        bottom = -math.inf if self.bottom is None else self.bottom
        top = math.inf if self.top is None else self.top
        if bottom > top:
            bottom, top = top, bottom
        return bottom, top

    def is_well_formed(self) -> bool:
        """Both endpoints present, finite, and distinct."""
        if self.a is None or self.b is None:
            return False
        try:
            ax, ay = self.a
            bx, by = self.b
        except (TypeError, ValueError):
            return False
        try:
            if not all(math.isfinite(v) for v in (ax, ay, bx, by)):
                return False
        except TypeError:
            return False
        return (ax, ay) != (bx, by)
