"""
Nearest-neighbour tracking module for SpotTrackTools.

This module links point detections across time frames into tracks and
renders them as results tables or polyline shapes.
"""

from .points import Point, PointSerie, Track, TrackSet
from .parameters import TrackingParameters
from .nn_tracker import NearestNeighborTracker, closest_point, link, link_channels
from .tag_filter import (
    InvalidFilterKeywordError,
    TrackFilter,
    TrackMarkers,
    filter_tracks,
    track_passes_filter,
)
from .config_loader import ConfigLoader
from .config_validator import InvalidConfigurationError, TrackingConfigValidator
from .renderers import TrackShape, tracks_to_results_table, tracks_to_shapes
from .tracking_utils import frames_from_dataframe, merge_tracking_results

__all__ = [
    "Point",
    "PointSerie",
    "Track",
    "TrackSet",
    "TrackingParameters",
    "NearestNeighborTracker",
    "closest_point",
    "link",
    "link_channels",
    "InvalidFilterKeywordError",
    "TrackFilter",
    "TrackMarkers",
    "filter_tracks",
    "track_passes_filter",
    "ConfigLoader",
    "InvalidConfigurationError",
    "TrackingConfigValidator",
    "TrackShape",
    "tracks_to_results_table",
    "tracks_to_shapes",
    "frames_from_dataframe",
    "merge_tracking_results",
]
