"""
Configuration settings for the visibility engine.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import toml
import os

from core.log import create_logger

log = create_logger("config")


class VisionConfig(BaseModel):
    """Tuning knobs for a VisionPolygonComputer."""

    # Radius boundary / fallback N-gon
    circle_segments: int = Field(default=32, ge=3)
    high_quality_segments: int = Field(default=64, ge=3)
    high_quality: bool = False

    # Ray casting
    epsilon: float = Field(default=1e-4, gt=0)  # Angular offset of flanking rays
    collinear_epsilon: float = Field(default=1e-10, gt=0)

    # Endpoint collection
    radius_tolerance: float = Field(default=0.01, ge=0, le=0.01)
    quantization: float = Field(default=0.01, gt=0)

    # Hosts recompute at most this often while dragging
    update_interval_ms: float = Field(default=100, ge=0)

    log_level: str = "WARNING"

    model_config = ConfigDict(extra="allow")

    @property
    def segments(self) -> int:
        """Chord count actually used for the boundary circle."""
        if self.high_quality:
            return self.high_quality_segments
        return self.circle_segments

    @classmethod
    def load_from_toml(cls, path: str = "sightline.toml") -> "VisionConfig":
        """Load configuration from the [vision] table of a TOML file."""
        if not os.path.exists(path):
            log.info("Config file %s not found. Using defaults.", path)
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)
            return cls(**data.get("vision", {}))
        except (OSError, toml.TomlDecodeError, ValidationError) as e:
            log.error("Error loading config: %s", e)
            return cls()


# Global config instance
CONFIG = VisionConfig.load_from_toml()
