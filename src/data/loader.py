"""
Loading of wall layouts from data files.

Two record shapes are understood. The host document shape::

    {"c": [ax, ay, bx, by], "sight": 20, "light": 20, "door": 0, "ds": 0,
     "dir": 0, "flags": {"wall-height": {"bottom": 0, "top": 10}}}

and a keyed shape that uses enum names::

    {"a": [ax, ay], "b": [bx, by], "sight": "normal", "door": "door",
     "door_state": "open", "direction": "left", "bottom": 0, "top": 10}
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from core.log import create_logger
from vision.walls import Direction, DoorState, DoorType, ForceBlockRect, Rect, SenseType, Wall

log = create_logger("loader")


def _enum_value(enum_cls, raw, default):
    """Coerce an int value or a case-insensitive member name."""
    if raw is None:
        return default
    if isinstance(raw, str):
        try:
            return enum_cls[raw.upper()]
        except KeyError:
            raise ValueError(f"Unknown {enum_cls.__name__}: {raw!r}")
    return enum_cls(raw)


def _optional_float(raw) -> Optional[float]:
    if raw is None:
        return None
    return float(raw)


def wall_from_record(record: Dict[str, Any]) -> Wall:
    """Build a Wall from one layout record. Raises ValueError/TypeError/KeyError if malformed."""
    if "c" in record:
        ax, ay, bx, by = (float(v) for v in record["c"])
    else:
        ax, ay = (float(v) for v in record["a"])
        bx, by = (float(v) for v in record["b"])

    height = record.get("flags", {}).get("wall-height", {})
    bottom = record.get("bottom", height.get("bottom"))
    top = record.get("top", height.get("top"))

    return Wall(
        (ax, ay),
        (bx, by),
        sight=_enum_value(SenseType, record.get("sight"), SenseType.NORMAL),
        light=_enum_value(SenseType, record.get("light"), SenseType.NORMAL),
        door=_enum_value(DoorType, record.get("door"), DoorType.NONE),
        door_state=_enum_value(
            DoorState, record.get("door_state", record.get("ds")), DoorState.CLOSED
        ),
        direction=_enum_value(
            Direction, record.get("direction", record.get("dir")), Direction.BOTH
        ),
        bottom=_optional_float(bottom),
        top=_optional_float(top),
    )


class WallLoader:
    """Loads wall layouts from JSON or TOML files under a data directory."""

    def __init__(self, data_dir: str = "src/data/static"):
        self.data_dir = Path(data_dir)
        self._cache: Dict[str, Any] = {}

    def load_raw(self, filename: str) -> Dict[str, Any]:
        """Load a layout file; the extension picks the parser."""
        if filename in self._cache:
            return self._cache[filename]

        filepath = self.data_dir / filename
        if not filepath.exists():
            raise FileNotFoundError(f"Layout file not found: {filepath}")

        suffix = filepath.suffix.lower()
        with open(filepath, "r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            elif suffix == ".toml":
                data = toml.load(f)
            else:
                raise ValueError(f"Unsupported layout format: {filepath.suffix}")

        self._cache[filename] = data
        return data

    def load_walls(self, filename: str) -> List[Wall]:
        """Load the walls of a layout, skipping malformed records."""
        walls = []
        for i, record in enumerate(self.load_raw(filename).get("walls", [])):
            try:
                walls.append(wall_from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                log.debug("Skipping wall %d in %s: %s", i, filename, e)
        return walls

    def load_scene_rect(self, filename: str) -> Optional[Rect]:
        scene = self.load_raw(filename).get("scene")
        if not scene:
            return None
        return Rect(
            float(scene["x"]), float(scene["y"]), float(scene["width"]), float(scene["height"])
        )

    def load_force_block_rects(self, filename: str) -> List[ForceBlockRect]:
        rects = []
        for record in self.load_raw(filename).get("force_block", []):
            rects.append(
                ForceBlockRect(
                    float(record["x"]),
                    float(record["y"]),
                    float(record["width"]),
                    float(record["height"]),
                    bottom=float(record.get("bottom", float("-inf"))),
                    top=float(record.get("top", float("inf"))),
                )
            )
        return rects

    def clear_cache(self):
        """Clear the layout cache."""
        self._cache.clear()


# Global layout loader instance
LAYOUT_LOADER = WallLoader(str(Path(__file__).parent / "static"))
