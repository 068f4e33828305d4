"""
Grow-only scratch storage reused across visibility queries.

A pool hands out mutable slot objects. Resetting a pool only rewinds its
length; the slots themselves stay allocated so a warmed-up computer does not
allocate in its hot loops.
"""

from typing import Callable, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class ScratchPoint:
    """Mutable 2D point used as a temporary inside inner loops."""

    __slots__ = ["x", "y"]

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def set(self, x: float, y: float) -> "ScratchPoint":
        self.x = x
        self.y = y
        return self

    def __repr__(self):
        return f"ScratchPoint({self.x!r}, {self.y!r})"


class SegmentSlot:
    """Segment record: endpoints a=(ax, ay) and b=(bx, by)."""

    __slots__ = ["ax", "ay", "bx", "by"]

    def __init__(self):
        self.ax = self.ay = self.bx = self.by = 0.0

    def set(self, ax: float, ay: float, bx: float, by: float) -> "SegmentSlot":
        self.ax = ax
        self.ay = ay
        self.bx = bx
        self.by = by
        return self


class AngleSlot:
    """Point tagged with its polar angle around the viewpoint.

    Used for both collected endpoints and ray hits.
    """

    __slots__ = ["x", "y", "angle"]

    def __init__(self):
        self.x = self.y = self.angle = 0.0

    def set(self, x: float, y: float, angle: float) -> "AngleSlot":
        self.x = x
        self.y = y
        self.angle = angle
        return self


class RecordPool(Generic[T]):
    """List of reusable records with an explicit length.

    Capacity doubles when exhausted and is never released.
    """

    __slots__ = ["factory", "slots", "length"]

    def __init__(self, factory: Callable[[], T], capacity: int = 16):
        self.factory = factory
        self.slots: List[T] = [factory() for _ in range(max(1, capacity))]
        self.length = 0

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def reset(self):
        """Rewind to empty, keeping every allocated slot."""
        self.length = 0

    def acquire(self) -> T:
        """Return the next free slot, growing the pool if needed."""
        if self.length == len(self.slots):
            self._grow()
        slot = self.slots[self.length]
        self.length += 1
        return slot

    def _grow(self):
        factory = self.factory
        self.slots.extend(factory() for _ in range(len(self.slots)))

    def sort(self, key: Callable[[T], float]):
        """Sort the live records in place; spare slots keep their positions.

        Unless the pool is full this copies the live slice, the one allocation
        left in a warmed-up query. Pass a key built once, not a fresh lambda.
        """
        if self.length == len(self.slots):
            self.slots.sort(key=key)
            return
        live = self.slots[: self.length]
        live.sort(key=key)
        self.slots[: self.length] = live

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self.length
        if not 0 <= index < self.length:
            raise IndexError("pool index out of range")
        return self.slots[index]

    def __iter__(self) -> Iterator[T]:
        slots = self.slots
        for i in range(self.length):
            yield slots[i]
