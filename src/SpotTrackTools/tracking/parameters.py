from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from SpotTrackTools.utils import unit_converter
from .config_loader import ConfigLoader
from .config_validator import TrackingConfigValidator


@dataclass(frozen=True)
class TrackingParameters:
    """
    Settings for nearest-neighbour linking, passed explicitly to every call.

    Attributes:
        max_distance (float): Maximum travel distance between two frames, in pixels
        min_tracked_frames (int): Tracks need strictly more points than this to be kept
        channel (int): Channel number used to tag the outputs
        color (str, optional): Display color used to tag the outputs
        bridge_gaps (bool): If True, a frame whose nearest point is too far away is
            skipped and linking resumes in the next frame. If False (default), the
            track ends there.
    """

    max_distance: float = 5.0
    min_tracked_frames: int = 3
    channel: int = 0
    color: Optional[str] = None
    bridge_gaps: bool = False

    def __post_init__(self):
        validator = TrackingConfigValidator()
        validator.validate_max_distance(self.max_distance)
        validator.validate_min_tracked_frames(self.min_tracked_frames)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "TrackingParameters":
        """
        Build parameters from a configuration mapping.

        Accepts either a full configuration with a ``tracking`` section or the
        section itself. ``max_distance`` is given in ``distance_unit`` ("pixel"
        or "um"); micrometers are converted to pixels with ``pixel_size``
        (um per pixel).

        Raises:
            InvalidConfigurationError: If keys are unknown or values out of range
        """
        section = dict(config.get("tracking", config) or {})
        validator = TrackingConfigValidator()
        validator.validate_config_keys(section)

        pixel_size = section.pop("pixel_size", 1.0)
        distance_unit = section.pop("distance_unit", "pixel")
        validator.validate_units(pixel_size, distance_unit)

        if "max_distance" in section and distance_unit == "um":
            validator.validate_max_distance(section["max_distance"])
            section["max_distance"] = unit_converter(
                section["max_distance"], pixel_size, to_unit="pixel"
            )
        return cls(**section)

    @classmethod
    def from_config_file(
        cls,
        config_path: Union[str, Path],
        override_args: Optional[dict] = None,
    ) -> "TrackingParameters":
        """Load parameters from a YAML file or a zip archive holding one."""
        return cls.from_dict(ConfigLoader.load_config(config_path, override_args))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
