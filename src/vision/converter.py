"""
Conversions of flat polygon lists into numpy vertex arrays.

Scene coordinates have their origin at the top-left with y pointing down.
Renderers usually want the origin at the scene centre with y up, and light
previews want vertices relative to the light itself.
"""

from typing import Sequence, Tuple

import numpy as np


def as_vertex_array(points: Sequence[float]) -> np.ndarray:
    """Reshape a flat [x0, y0, ...] list to an (n, 2) float64 array.

    Lists with fewer than three vertices yield an empty (0, 2) array.
    """
    flat = np.asarray(points, dtype=np.float64).ravel()
    if flat.size < 6:
        return np.empty((0, 2), dtype=np.float64)
    usable = flat.size - (flat.size % 2)
    return flat[:usable].reshape(-1, 2)


def to_scene_vertices(
    points: Sequence[float], scene_width: float, scene_height: float
) -> np.ndarray:
    """Centre-origin, y-up (n, 3) float32 vertices with z = 0."""
    verts = as_vertex_array(points)
    out = np.zeros((len(verts), 3), dtype=np.float32)
    if len(verts) == 0:
        return out
    out[:, 0] = verts[:, 0] - scene_width / 2
    out[:, 1] = -(verts[:, 1] - scene_height / 2)
    return out


def to_local_points(points: Sequence[float], origin: Tuple[float, float]) -> np.ndarray:
    """(n, 2) vertices relative to origin."""
    verts = as_vertex_array(points)
    if len(verts) == 0:
        return verts
    return verts - np.asarray(origin, dtype=np.float64)


def vertex_distances(points: Sequence[float], origin: Tuple[float, float]) -> np.ndarray:
    """Euclidean distance of every vertex from origin."""
    local = to_local_points(points, origin)
    return np.hypot(local[:, 0], local[:, 1])
