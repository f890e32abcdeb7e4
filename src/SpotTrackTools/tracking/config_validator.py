import math
from numbers import Integral, Real
from typing import Any, Dict

DISTANCE_UNITS = ("pixel", "um")

TRACKING_KEYS = {
    "max_distance",
    "min_tracked_frames",
    "channel",
    "color",
    "bridge_gaps",
    "pixel_size",
    "distance_unit",
}


class InvalidConfigurationError(ValueError):
    """Raised when tracking parameters are out of range or malformed."""


class TrackingConfigValidator:
    """Validates tracking parameters and configuration mappings."""

    def validate_max_distance(self, max_distance: Any) -> bool:
        """
        Validate the maximum inter-frame travel distance.

        Args:
            max_distance: Distance threshold, same units as the point coordinates

        Returns:
            True if the threshold is a finite, non-negative number

        Raises:
            InvalidConfigurationError: If the threshold is negative, infinite or not a number
        """
        if isinstance(max_distance, bool) or not isinstance(max_distance, Real):
            raise InvalidConfigurationError(
                f"max_distance must be a number, got {type(max_distance).__name__}"
            )
        if not math.isfinite(max_distance) or max_distance < 0:
            raise InvalidConfigurationError(
                f"max_distance must be finite and non-negative, got {max_distance}"
            )
        return True

    def validate_min_tracked_frames(self, min_tracked_frames: Any) -> bool:
        """
        Validate the minimum track length.

        Raises:
            InvalidConfigurationError: If the value is not a non-negative integer
        """
        if isinstance(min_tracked_frames, bool) or not isinstance(
            min_tracked_frames, Integral
        ):
            raise InvalidConfigurationError(
                f"min_tracked_frames must be an integer, got {type(min_tracked_frames).__name__}"
            )
        if min_tracked_frames < 0:
            raise InvalidConfigurationError(
                f"min_tracked_frames must be non-negative, got {min_tracked_frames}"
            )
        return True

    def validate_units(self, pixel_size: Any, distance_unit: str) -> bool:
        """
        Validate the unit settings used to convert max_distance to pixels.

        Raises:
            InvalidConfigurationError: If the unit is unknown or the pixel size is not positive
        """
        if distance_unit not in DISTANCE_UNITS:
            raise InvalidConfigurationError(
                f"distance_unit must be one of {DISTANCE_UNITS}, got {distance_unit!r}"
            )
        if (
            isinstance(pixel_size, bool)
            or not isinstance(pixel_size, Real)
            or not math.isfinite(pixel_size)
            or pixel_size <= 0
        ):
            raise InvalidConfigurationError(
                f"pixel_size must be a positive number, got {pixel_size!r}"
            )
        return True

    def validate_config_keys(self, config: Dict[str, Any]) -> bool:
        """
        Validate that a tracking section only holds known keys.

        Raises:
            InvalidConfigurationError: If unknown keys are present
        """
        unknown = sorted(set(config) - TRACKING_KEYS)
        if unknown:
            raise InvalidConfigurationError(f"Unknown tracking parameters: {unknown}")
        return True
