"""
Visibility polygon computation by ray casting toward segment endpoints.

Walls are filtered into segments, closed off by a chord approximation of the
vision circle (and optionally the scene rectangle), then three rays are cast
at every endpoint inside the disk. The nearest hits, sorted by angle, form
the polygon.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable, List, Optional, Sequence, Tuple
import math

from config import CONFIG, VisionConfig
from core.log import create_logger
from core.pool import AngleSlot, RecordPool, ScratchPoint, SegmentSlot
from vision.geometry import (
    circle_polygon,
    orientation,
    segment_touches_disk,
    winding_number,
)
from vision.walls import Direction, ForceBlockRect, Rect, Sense, SenseType, Wall

log = create_logger("computer")

TWO_PI = math.pi * 2

# Slack on the segment parameter so a ray aimed exactly at a shared corner
# cannot slip between the two walls through rounding.
SEGMENT_SLOP = 1e-9

# Packs two quantized coordinates into one integer dedup key
KEY_STRIDE = 1 << 32

BY_ANGLE = attrgetter("angle")


@dataclass(slots=True)
class VisionOptions:
    """Per-query settings."""

    sense: Sense = Sense.SIGHT
    elevation: Optional[float] = None  # None disables elevation filtering
    force_block_rects: Sequence[ForceBlockRect] = ()


DEFAULT_OPTIONS = VisionOptions()


def _resolve_point(point) -> Optional[Tuple[float, float]]:
    """Accept (x, y) pairs or objects with x/y attributes; None if unusable."""
    if point is None:
        return None
    if hasattr(point, "x") and hasattr(point, "y"):
        x, y = point.x, point.y
    else:
        try:
            x, y = point
        except (TypeError, ValueError):
            return None
    try:
        x = float(x)
        y = float(y)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return x, y


def _normalize_angle(angle: float) -> float:
    """Wrap into (-pi, pi]."""
    if angle > math.pi:
        return angle - TWO_PI
    if angle <= -math.pi:
        return angle + TWO_PI
    return angle


class VisionPolygonComputer:
    """Computes line-of-sight polygons from wall data.

    An instance owns its scratch pools and reuses them for every query, so it
    must not be shared between threads. The returned list is a fresh copy.
    """

    def __init__(self, config: Optional[VisionConfig] = None):
        config = config or CONFIG
        self.config = config

        self.circle_segments = config.segments
        self.epsilon = config.epsilon
        self.radius_tolerance = config.radius_tolerance
        self.collinear_epsilon = config.collinear_epsilon
        self.quantization = config.quantization

        # Below this radius neighbouring circle vertices share a dedup key
        self.min_radius = self.quantization / (2 * math.sin(math.pi / self.circle_segments))

        # Scratch pools
        self.segments: RecordPool[SegmentSlot] = RecordPool(SegmentSlot, 64)
        self.endpoints: RecordPool[AngleSlot] = RecordPool(AngleSlot, 64)
        self.intersections: RecordPool[AngleSlot] = RecordPool(AngleSlot, 192)
        self.points: List[float] = []
        self.seen_angles = set()
        self.endpoint_keys = {}

        # Temporaries for inner loops
        self._closest = ScratchPoint()
        self._ray_end = ScratchPoint()
        self._hit = ScratchPoint()
        self._seg_a = ScratchPoint()
        self._seg_b = ScratchPoint()

    def compute(
        self,
        viewpoint,
        radius: float,
        walls: Optional[Iterable[Wall]] = None,
        scene_rect: Optional[Rect] = None,
        options: Optional[VisionOptions] = None,
    ) -> List[float]:
        """Compute the visibility polygon around a viewpoint.

        Returns a flat [x0, y0, x1, y1, ...] list, or [] when the viewpoint is
        missing or non-finite or the radius is not positive. Radii too small
        for the endpoint quantization (see min_radius) get the plain N-gon.
        """
        center = _resolve_point(viewpoint)
        try:
            radius = float(radius)
        except (TypeError, ValueError):
            radius = math.nan
        if center is None or not math.isfinite(radius) or radius <= 0:
            log.debug("compute() early return: center=%r, radius=%r", viewpoint, radius)
            return []

        vx, vy = center
        options = options or DEFAULT_OPTIONS
        self._reset()

        self.add_wall_segments(walls or (), vx, vy, radius, options)
        if scene_rect is not None:
            self.add_rect_boundary(scene_rect, vx, vy, radius)

        if self.segments.length == 0 or radius <= self.min_radius:
            return circle_polygon(vx, vy, radius, self.circle_segments)

        self.add_boundary_circle(vx, vy, radius)
        self.collect_endpoints(vx, vy, radius)
        self.cast_rays(vx, vy, radius)
        return self.assemble(vx, vy, radius)

    def _reset(self):
        self.segments.reset()
        self.endpoints.reset()
        self.intersections.reset()
        self.points.clear()
        self.seen_angles.clear()
        self.endpoint_keys.clear()

    # ------------------------------------------------------------------
    # Wall filter & segment builder

    def blocks(
        self, wall: Wall, vx: float, vy: float, radius_sq: float, options: VisionOptions
    ) -> bool:
        """Run the per-wall gates in order; the first failure rejects."""
        if wall is None or not wall.is_well_formed():
            return False

        ax, ay = wall.a
        bx, by = wall.b

        # Sense; force-block regions only apply to sight
        if wall.sense_type(options.sense) == SenseType.NONE:
            if options.sense is Sense.LIGHT or not self._force_blocked(wall, options):
                return False

        # Open doors
        if wall.is_open_door:
            return False

        # Elevation
        elevation = options.elevation
        if elevation is not None:
            bottom, top = wall.elevation_range()
            if elevation < bottom or elevation > top:
                return False

        # Direction
        if wall.direction != Direction.BOTH:
            o = orientation(vx, vy, ax, ay, bx, by)
            if o != 0:
                side = Direction.LEFT if o < 0 else Direction.RIGHT
                if side != wall.direction:
                    return False

        # Radius
        return segment_touches_disk(vx, vy, radius_sq, ax, ay, bx, by, self._closest)

    def _force_blocked(self, wall: Wall, options: VisionOptions) -> bool:
        if not options.force_block_rects:
            return False
        mx, my = wall.midpoint
        for rect in options.force_block_rects:
            if rect.is_active(options.elevation) and rect.contains(mx, my):
                return True
        return False

    def add_wall_segments(
        self,
        walls: Iterable[Wall],
        vx: float,
        vy: float,
        radius: float,
        options: VisionOptions = DEFAULT_OPTIONS,
    ):
        radius_sq = radius * radius
        segments = self.segments
        for wall in walls:
            if self.blocks(wall, vx, vy, radius_sq, options):
                ax, ay = wall.a
                bx, by = wall.b
                segments.acquire().set(ax, ay, bx, by)

    # ------------------------------------------------------------------
    # Boundary builder

    def add_boundary_circle(self, vx: float, vy: float, radius: float):
        """Append the radius circle as chords whose ends lie on the circle."""
        n = self.circle_segments
        step = TWO_PI / n
        seg_a = self._seg_a.set(vx + radius, vy)
        seg_b = self._seg_b
        for i in range(1, n + 1):
            if i == n:
                seg_b.set(vx + radius, vy)
            else:
                angle = i * step
                seg_b.set(vx + math.cos(angle) * radius, vy + math.sin(angle) * radius)
            self.segments.acquire().set(seg_a.x, seg_a.y, seg_b.x, seg_b.y)
            seg_a.set(seg_b.x, seg_b.y)

    def add_rect_boundary(self, rect: Rect, vx: float, vy: float, radius: float):
        """Append the rectangle edges that touch the vision disk."""
        if not rect.is_finite():
            return
        radius_sq = radius * radius
        corners = rect.corners()
        for i in range(4):
            ax, ay = corners[i]
            bx, by = corners[(i + 1) % 4]
            if (ax, ay) == (bx, by):
                continue
            if segment_touches_disk(vx, vy, radius_sq, ax, ay, bx, by, self._closest):
                self.segments.acquire().set(ax, ay, bx, by)

    # ------------------------------------------------------------------
    # Endpoint collector

    def collect_endpoints(self, vx: float, vy: float, radius: float):
        """Gather deduplicated segment endpoints inside the disk."""
        limit_sq = radius * radius * (1 + self.radius_tolerance)
        scale = 1 / self.quantization
        keys = self.endpoint_keys
        endpoints = self.endpoints
        for seg in self.segments:
            for x, y in ((seg.ax, seg.ay), (seg.bx, seg.by)):
                dx = x - vx
                dy = y - vy
                if dx * dx + dy * dy > limit_sq:
                    continue
                key = round(x * scale) * KEY_STRIDE + round(y * scale)
                if key in keys:
                    continue
                keys[key] = endpoints.length
                endpoints.acquire().set(x, y, math.atan2(dy, dx))

    # ------------------------------------------------------------------
    # Ray caster

    def cast_rays(self, vx: float, vy: float, radius: float):
        """Cast rays at angle - eps, angle and angle + eps for every endpoint."""
        eps = self.epsilon
        seen = self.seen_angles
        for endpoint in self.endpoints:
            for offset in (-eps, 0.0, eps):
                angle = _normalize_angle(endpoint.angle + offset)
                key = round(angle * 1e6)
                if key in seen:
                    continue
                seen.add(key)
                hit = self.cast_ray(vx, vy, angle, radius)
                self.intersections.acquire().set(hit.x, hit.y, angle)

    def cast_ray(self, vx: float, vy: float, angle: float, radius: float) -> ScratchPoint:
        """Nearest hit along one ray, or the point at full radius.

        The returned point is a scratch object overwritten by the next cast.
        """
        ray_end = self._ray_end.set(
            vx + math.cos(angle) * radius, vy + math.sin(angle) * radius
        )
        hit = self._hit.set(ray_end.x, ray_end.y)
        closest_sq = radius * radius

        rdx = ray_end.x - vx
        rdy = ray_end.y - vy
        collinear_eps = self.collinear_epsilon

        slots = self.segments.slots
        for i in range(self.segments.length):
            seg = slots[i]
            sx = seg.ax
            sy = seg.ay
            sdx = seg.bx - sx
            sdy = seg.by - sy

            denom = rdx * sdy - rdy * sdx
            if abs(denom) < collinear_eps:
                continue

            ox = sx - vx
            oy = sy - vy
            t = (ox * sdy - oy * sdx) / denom
            if t < 0 or t > 1:
                continue
            u = (ox * rdy - oy * rdx) / denom
            if u < -SEGMENT_SLOP or u > 1 + SEGMENT_SLOP:
                continue

            ix = vx + t * rdx
            iy = vy + t * rdy
            dist_sq = (ix - vx) ** 2 + (iy - vy) ** 2
            if dist_sq < closest_sq:
                closest_sq = dist_sq
                hit.set(ix, iy)

        return hit

    # ------------------------------------------------------------------
    # Polygon assembler

    def assemble(self, vx: float, vy: float, radius: float) -> List[float]:
        """Sort hits by angle and flatten, dropping repeated vertices."""
        self.intersections.sort(key=BY_ANGLE)

        points = self.points
        last_x = last_y = None
        for hit in self.intersections:
            if hit.x == last_x and hit.y == last_y:
                continue
            points.append(hit.x)
            points.append(hit.y)
            last_x, last_y = hit.x, hit.y

        # The ring closes on itself; a trailing copy of the first vertex is redundant
        while len(points) >= 4 and points[-2] == points[0] and points[-1] == points[1]:
            del points[-2:]

        # A ring that collapsed onto a wall through the viewpoint does not enclose it
        if len(points) < 6 or winding_number(points, vx, vy) == 0:
            log.debug(
                "Degenerate polygon (%d vertices) at (%.1f, %.1f); using circle",
                len(points) // 2,
                vx,
                vy,
            )
            return circle_polygon(vx, vy, radius, self.circle_segments)

        return list(points)


_shared_computer: Optional[VisionPolygonComputer] = None


def compute_visibility_polygon(
    viewpoint,
    radius: float,
    walls: Optional[Iterable[Wall]] = None,
    scene_rect: Optional[Rect] = None,
    options: Optional[VisionOptions] = None,
) -> List[float]:
    """Module-level convenience wrapper around a shared computer."""
    global _shared_computer
    if _shared_computer is None:
        _shared_computer = VisionPolygonComputer()
    return _shared_computer.compute(viewpoint, radius, walls, scene_rect, options)
