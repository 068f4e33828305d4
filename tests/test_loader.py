"""
Tests for loading wall layouts from data files.
"""

import pytest

from data.loader import WallLoader, wall_from_record
from vision.computer import VisionOptions
from vision.geometry import polygon_area
from vision.walls import Direction, DoorState, DoorType, SenseType


class TestWallRecords:
    """Test conversion of single records."""

    def test_document_shape(self):
        wall = wall_from_record(
            {"c": [0, 0, 10, 0], "sight": 10, "light": 0, "door": 2, "ds": 2, "dir": 1}
        )

        assert wall.a == (0, 0)
        assert wall.b == (10, 0)
        assert wall.sight == SenseType.LIMITED
        assert wall.light == SenseType.NONE
        assert wall.door == DoorType.SECRET
        assert wall.door_state == DoorState.LOCKED
        assert wall.direction == Direction.LEFT

    def test_keyed_shape(self):
        wall = wall_from_record(
            {"a": [1, 2], "b": [3, 4], "door": "Door", "door_state": "open", "direction": "right"}
        )

        assert wall.a == (1, 2)
        assert wall.is_open_door
        assert wall.direction == Direction.RIGHT

    def test_wall_height_flags(self):
        wall = wall_from_record(
            {"c": [0, 0, 1, 1], "flags": {"wall-height": {"bottom": 5, "top": 15}}}
        )
        assert (wall.bottom, wall.top) == (5, 15)

    @pytest.mark.parametrize(
        "record",
        [{"c": [1, 2]}, {"a": [0, 0]}, {"c": [0, 0, 1, 1], "sight": 99}, {"c": [0, 0, 1, 1], "dir": "up"}],
    )
    def test_malformed(self, record):
        with pytest.raises((KeyError, TypeError, ValueError)):
            wall_from_record(record)


class TestWallLoader:
    """Test the bundled layouts."""

    def test_json_layout(self, layout_loader):
        walls = layout_loader.load_walls("square_room.json")

        # The two-coordinate record is skipped; the degenerate one is kept for the computer to drop
        assert len(walls) == 7
        assert walls[4].is_open_door
        assert walls[5].sight == SenseType.NONE
        assert walls[5].elevation_range() == (0, 10)

    def test_json_scene_rect(self, layout_loader):
        rect = layout_loader.load_scene_rect("square_room.json")
        assert (rect.x, rect.y, rect.width, rect.height) == (-100, -100, 200, 200)

    def test_toml_layout(self, layout_loader):
        walls = layout_loader.load_walls("gallery.toml")

        assert len(walls) == 3
        assert walls[0].direction == Direction.LEFT
        assert walls[1].sight == SenseType.NONE
        assert walls[2].door == DoorType.SECRET
        assert walls[2].door_state == DoorState.LOCKED
        assert (walls[2].bottom, walls[2].top) == (10, 20)

    def test_force_block_rects(self, layout_loader):
        rects = layout_loader.load_force_block_rects("gallery.toml")

        assert len(rects) == 1
        assert rects[0].contains(200, 250)
        assert rects[0].is_active(3)
        assert not rects[0].is_active(6)

    def test_missing_sections(self, layout_loader):
        assert layout_loader.load_force_block_rects("square_room.json") == []

    def test_cache(self, layout_loader):
        first = layout_loader.load_raw("square_room.json")
        assert layout_loader.load_raw("square_room.json") is first

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WallLoader(str(tmp_path)).load_walls("nowhere.json")

    def test_unsupported_format(self, tmp_path):
        (tmp_path / "walls.txt").write_text("")
        with pytest.raises(ValueError):
            WallLoader(str(tmp_path)).load_walls("walls.txt")

    def test_loaded_room_polygon(self, computer, layout_loader):
        walls = layout_loader.load_walls("square_room.json")
        rect = layout_loader.load_scene_rect("square_room.json")

        points = computer.compute((0, 0), 100, walls, rect)

        assert polygon_area(points) == pytest.approx(1600, rel=1e-4)

    def test_loaded_gallery_with_force_block(self, computer, layout_loader):
        walls = layout_loader.load_walls("gallery.toml")
        rects = layout_loader.load_force_block_rects("gallery.toml")
        viewpoint = (200, 150)

        near_floor = VisionOptions(elevation=2, force_block_rects=rects)
        raised = VisionOptions(elevation=7, force_block_rects=rects)

        blocked = computer.compute(viewpoint, 500, walls, options=near_floor)
        through = computer.compute(viewpoint, 500, walls, options=raised)

        assert polygon_area(blocked) < polygon_area(through)
