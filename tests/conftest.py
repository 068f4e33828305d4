"""
Pytest configuration and shared fixtures for the visibility engine tests.
"""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import VisionConfig
from vision.computer import VisionPolygonComputer
from vision.walls import Wall
from data.loader import LAYOUT_LOADER

ORIGIN = (0.0, 0.0)
RADIUS = 100.0


@pytest.fixture
def config():
    """Default tuning knobs."""
    return VisionConfig()


@pytest.fixture
def computer(config):
    """A fresh computer with default settings."""
    return VisionPolygonComputer(config)


@pytest.fixture
def horizontal_wall():
    """Sight-blocking wall from (-50, 30) to (50, 30)."""
    return Wall.from_coords(-50, 30, 50, 30)


@pytest.fixture
def square_room():
    """Four walls enclosing [-20, 20] x [-20, 20]."""
    return [
        Wall.from_coords(-20, -20, 20, -20),
        Wall.from_coords(20, -20, 20, 20),
        Wall.from_coords(20, 20, -20, 20),
        Wall.from_coords(-20, 20, -20, -20),
    ]


@pytest.fixture
def layout_loader():
    """The shared loader for the bundled layouts."""
    return LAYOUT_LOADER
