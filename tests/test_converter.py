"""
Tests for numpy conversions of polygon lists.
"""

import numpy as np
import pytest

from vision.converter import as_vertex_array, to_local_points, to_scene_vertices, vertex_distances

TRIANGLE = [0.0, 0.0, 200.0, 0.0, 100.0, 100.0]


class TestConverter:
    """Test the vertex array helpers."""

    def test_vertex_array_shape(self):
        verts = as_vertex_array(TRIANGLE)

        assert verts.shape == (3, 2)
        assert verts[2].tolist() == [100.0, 100.0]

    @pytest.mark.parametrize("points", [[], [1.0, 2.0], [0, 0, 1, 1]])
    def test_degenerate_inputs_are_empty(self, points):
        assert as_vertex_array(points).shape == (0, 2)
        assert to_scene_vertices(points, 10, 10).shape == (0, 3)
        assert to_local_points(points, (0, 0)).shape == (0, 2)
        assert vertex_distances(points, (0, 0)).size == 0

    def test_scene_vertices_centre_origin_y_up(self):
        verts = to_scene_vertices(TRIANGLE, 200, 100)

        assert verts.dtype == np.float32
        assert verts.shape == (3, 3)
        assert verts[0].tolist() == [-100.0, 50.0, 0.0]
        assert verts[1].tolist() == [100.0, 50.0, 0.0]
        assert verts[2].tolist() == [0.0, -50.0, 0.0]

    def test_local_points(self):
        local = to_local_points(TRIANGLE, (100, 50))

        assert local.tolist() == [[-100.0, -50.0], [100.0, -50.0], [0.0, 50.0]]

    def test_distances_of_open_field(self, computer):
        points = computer.compute((30, 40), 75)

        np.testing.assert_allclose(vertex_distances(points, (30, 40)), 75, rtol=1e-9)
