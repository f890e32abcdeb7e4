"""
Render tracks for display: a results table and a collection of polyline shapes.

Both renderers take the TrackSets of one or more channels and apply the tag
filter (see ``tag_filter``) before emitting anything. Track numbers are
1-based; channels keep their labels when given as a mapping.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .points import TrackSet
from .tag_filter import TrackFilter, track_passes_filter

RESULTS_COLUMNS = ["track", "channel", "point", "frame", "x", "y", "tag", "track_tag"]


@dataclass
class TrackShape:
    """
    Polyline shape for one track.

    Attributes:
        name (str): Display name, e.g. "Track_3 Channel 1"
        channel (int): Channel label
        vertices (np.ndarray): (N, 2) array of (x, y) vertices in track order
        color (str, optional): Stroke color
        tag (str): Track tag
    """

    name: str
    channel: int
    vertices: np.ndarray = field(repr=False)
    color: Optional[str] = None
    tag: str = ""


ChannelTracks = Union[TrackSet, Sequence[TrackSet], Mapping[int, TrackSet]]


def _channel_items(
    tracks_by_channel: ChannelTracks, channel: Optional[int] = None
) -> List[Tuple[int, TrackSet]]:
    """Pair every TrackSet with its channel label."""
    if isinstance(tracks_by_channel, TrackSet):
        return [(1 if channel is None else channel, tracks_by_channel)]
    if isinstance(tracks_by_channel, Mapping):
        return [(int(c), tracks_by_channel[c]) for c in sorted(tracks_by_channel)]
    return list(enumerate(tracks_by_channel, start=1))


def tracks_to_results_table(
    tracks_by_channel: ChannelTracks,
    keyword: Union[str, TrackFilter] = TrackFilter.ALL,
    channel: Optional[int] = None,
) -> pd.DataFrame:
    """
    Build a results table with one row per tracked point.

    Args:
        tracks_by_channel: TrackSets keyed by channel label, one TrackSet per
            channel (labelled 1, 2, ...), or a single TrackSet
        keyword: Tag filter keyword, see TrackFilter
        channel: Channel label of a single TrackSet (default 1)

    Returns:
        DataFrame with columns track, channel, point, frame, x, y, tag, track_tag.
        Track numbers follow the position of the track in its channel, so
        filtered-out tracks leave gaps in the numbering.

    Raises:
        InvalidFilterKeywordError: If the keyword is not recognised
    """
    track_filter = TrackFilter.parse(keyword)
    rows = []
    for channel_label, tracks in _channel_items(tracks_by_channel, channel):
        for track_number, track in enumerate(tracks, start=1):
            if not track_passes_filter(track.tag, track_filter):
                continue
            for point_number, point in enumerate(track, start=1):
                rows.append(
                    (
                        track_number,
                        channel_label,
                        point_number,
                        point.frame,
                        point.x,
                        point.y,
                        point.tag,
                        track.tag,
                    )
                )
    return pd.DataFrame(rows, columns=RESULTS_COLUMNS)


def tracks_to_shapes(
    tracks_by_channel: ChannelTracks,
    keyword: Union[str, TrackFilter] = TrackFilter.ALL,
    colors: Optional[Sequence[Optional[str]]] = None,
    channel: Optional[int] = None,
) -> List[TrackShape]:
    """
    Convert tracks to polyline shapes, one per kept track.

    Args:
        tracks_by_channel: Same forms as for tracks_to_results_table
        keyword: Tag filter keyword, see TrackFilter
        colors: Optional stroke color per channel, in ascending channel order
        channel: Channel label of a single TrackSet (default 1)

    Raises:
        InvalidFilterKeywordError: If the keyword is not recognised
    """
    track_filter = TrackFilter.parse(keyword)
    shapes = []
    for position, (channel_label, tracks) in enumerate(
        _channel_items(tracks_by_channel, channel)
    ):
        color = colors[position] if colors is not None else None
        for track_number, track in enumerate(tracks, start=1):
            if not track_passes_filter(track.tag, track_filter):
                continue
            shapes.append(
                TrackShape(
                    name=f"Track_{track_number} Channel {channel_label}",
                    channel=channel_label,
                    vertices=track.to_polyline(),
                    color=color,
                    tag=track.tag,
                )
            )
    return shapes


def shapes_to_records(shapes: Sequence[TrackShape]) -> List[dict]:
    """Plain-python view of the shapes, ready for JSON serialisation."""
    return [
        {
            "name": s.name,
            "channel": s.channel,
            "color": s.color,
            "tag": s.tag,
            "vertices": s.vertices.tolist(),
        }
        for s in shapes
    ]
