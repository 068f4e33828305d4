"""
Small 2D helpers shared by the polygon computer and its callers.

Polygons are flat coordinate lists ``[x0, y0, x1, y1, ...]`` with the closing
edge implied.
"""

from typing import Iterator, List, Optional, Sequence, Tuple
import math

from core.pool import ScratchPoint


def closest_point_on_segment(
    px: float,
    py: float,
    ax: float,
    ay: float,
    bx: float,
    by: float,
    out: Optional[ScratchPoint] = None,
) -> ScratchPoint:
    """Closest point to (px, py) on the closed segment a-b, clamped to [a, b]."""
    if out is None:
        out = ScratchPoint()
    dx = bx - ax
    dy = by - ay
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return out.set(ax, ay)

    t = ((px - ax) * dx + (py - ay) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    return out.set(ax + t * dx, ay + t * dy)


def segment_touches_disk(
    cx: float,
    cy: float,
    radius_sq: float,
    ax: float,
    ay: float,
    bx: float,
    by: float,
    closest: Optional[ScratchPoint] = None,
) -> bool:
    """True unless both endpoints and the whole segment lie outside the disk."""
    dist_a_sq = (ax - cx) ** 2 + (ay - cy) ** 2
    if dist_a_sq <= radius_sq:
        return True
    dist_b_sq = (bx - cx) ** 2 + (by - cy) ** 2
    if dist_b_sq <= radius_sq:
        return True

    # Both endpoints outside; the segment may still cross the circle
    c = closest_point_on_segment(cx, cy, ax, ay, bx, by, closest)
    return (c.x - cx) ** 2 + (c.y - cy) ** 2 <= radius_sq


def orientation(
    vx: float, vy: float, ax: float, ay: float, bx: float, by: float
) -> float:
    """Side of the directed segment a->b that v is on.

    Negative means left, positive means right, zero means collinear.
    """
    return (ay - vy) * (bx - vx) - (ax - vx) * (by - vy)


def circle_polygon(cx: float, cy: float, radius: float, num_points: int) -> List[float]:
    """Regular N-gon inscribed in the circle, starting at angle 0."""
    points = []
    step = (math.pi * 2) / num_points
    for i in range(num_points):
        angle = i * step
        points.append(cx + math.cos(angle) * radius)
        points.append(cy + math.sin(angle) * radius)
    return points


def iter_vertices(points: Sequence[float]) -> Iterator[Tuple[float, float]]:
    for i in range(0, len(points) - 1, 2):
        yield points[i], points[i + 1]


def signed_area(points: Sequence[float]) -> float:
    """Shoelace area; positive for counter-clockwise in a y-up frame."""
    n = len(points) // 2
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        x0, y0 = points[2 * i], points[2 * i + 1]
        j = (i + 1) % n
        x1, y1 = points[2 * j], points[2 * j + 1]
        total += x0 * y1 - x1 * y0
    return total / 2


def polygon_area(points: Sequence[float]) -> float:
    return abs(signed_area(points))


def winding_number(points: Sequence[float], px: float, py: float) -> int:
    """Winding number of the ring around (px, py); 0 means outside."""
    n = len(points) // 2
    wn = 0
    for i in range(n):
        x0, y0 = points[2 * i], points[2 * i + 1]
        j = (i + 1) % n
        x1, y1 = points[2 * j], points[2 * j + 1]
        is_left = (x1 - x0) * (py - y0) - (px - x0) * (y1 - y0)
        if y0 <= py:
            if y1 > py and is_left > 0:
                wn += 1
        elif y1 <= py and is_left < 0:
            wn -= 1
    return wn


def contains_point(points: Sequence[float], px: float, py: float) -> bool:
    return winding_number(points, px, py) != 0
