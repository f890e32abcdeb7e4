import logging
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .parameters import TrackingParameters
from .points import Point, PointSerie, Track, TrackSet
from .tracking_utils import (
    frames_by_channel_from_dataframe,
    frames_from_dataframe,
    merge_tracking_results,
    tracks_to_dataframe,
    validate_dataframe_integrity,
)

module_logger = logging.getLogger(__name__)


def closest_point(
    reference: Point, candidates: PointSerie
) -> Optional[Tuple[int, float]]:
    """
    Find the candidate closest to ``reference``.

    Plain linear scan over the candidates. On ties the first point in scan
    order wins.

    Args:
        reference: Point to measure from
        candidates: Points to search

    Returns:
        (index, distance) of the closest candidate, or None if there are no candidates
    """
    if len(candidates) == 0:
        return None
    coords = candidates.coordinates()
    distances = np.hypot(coords[:, 0] - reference.x, coords[:, 1] - reference.y)
    index = int(np.argmin(distances))
    return index, float(distances[index])


def link(
    frames: Sequence[PointSerie],
    params: Optional[TrackingParameters] = None,
    logger: Optional[logging.Logger] = None,
) -> TrackSet:
    """
    Link detections across frames into tracks by greedy nearest neighbour.

    Every point not yet claimed by a track seeds a new track, which is then
    extended frame by frame with the closest remaining point, as long as it lies
    within ``params.max_distance`` of the last point of the track. Linked points
    are removed from their frame so that no other track can claim them. A track
    stops at the first empty frame and, unless ``params.bridge_gaps`` is set, at
    the first frame whose closest point is too far away.

    Worst case cost is O(n_frames * n_points^2).

    Args:
        frames: One PointSerie per frame, in time order. Left untouched.
        params: Tracking parameters. Defaults to TrackingParameters().
        logger: Logger for progress messages. Defaults to the module logger.

    Returns:
        TrackSet with the tracks holding more than ``params.min_tracked_frames``
        points, named Track_1, Track_2, ... in discovery order
    """
    if params is None:
        params = TrackingParameters()
    logger = logger or module_logger

    # Linking consumes points, work on a private copy
    working = [frame.copy() for frame in frames]
    tracks = TrackSet()
    n_discarded = 0

    logger.debug(
        f"Linking {sum(len(f) for f in working)} points over {len(working)} frames "
        f"(max_distance={params.max_distance}, min_tracked_frames={params.min_tracked_frames})"
    )

    for i in range(len(working) - 1):
        for seed in list(working[i]):
            track = Track(seed)
            last_point = seed

            for k in range(i + 1, len(working)):
                next_pool = working[k]
                match = closest_point(last_point, next_pool)
                if match is None:
                    break

                index, distance = match
                if distance <= params.max_distance:
                    last_point = next_pool.remove_at(index)
                    track.add_point(last_point)
                elif not params.bridge_gaps:
                    break

            if len(track) > params.min_tracked_frames:
                tracks.add(track)
            else:
                n_discarded += 1

    logger.debug(f"Kept {len(tracks)} tracks, discarded {n_discarded} short tracks")
    return tracks


def link_channels(
    frames_by_channel: Union[Mapping[int, Sequence[PointSerie]], Sequence[Sequence[PointSerie]]],
    params: Optional[TrackingParameters] = None,
    logger: Optional[logging.Logger] = None,
) -> List[TrackSet]:
    """
    Track every channel independently.

    Args:
        frames_by_channel: Frames per channel, as a list or a mapping keyed by
            channel number (processed in ascending key order)
        params: Tracking parameters shared by all channels

    Returns:
        One TrackSet per channel, in channel order
    """
    if isinstance(frames_by_channel, Mapping):
        frames_by_channel = [frames_by_channel[c] for c in sorted(frames_by_channel)]
    return [link(frames, params, logger) for frames in frames_by_channel]


class NearestNeighborTracker:
    """
    Greedy nearest-neighbour tracking of point detections.

    High-level interface around ``link``: loads and validates parameters, takes
    detections as a DataFrame and merges the resulting track ids back onto it.

    Args:
        params: Ready-made tracking parameters
        config_path: Path to a YAML configuration file or zip archive
        config_dict: Configuration mapping (full config or its ``tracking`` section)
        override_args: Overrides applied on top of the file given by config_path
    """

    def __init__(
        self,
        params: Optional[TrackingParameters] = None,
        config_path: Optional[Union[str, Path]] = None,
        config_dict: Optional[dict] = None,
        override_args: Optional[dict] = None,
    ):
        if params is not None:
            self.config_path = None
            self.params = params
        elif config_dict is not None:
            self.config_path = None
            self.params = TrackingParameters.from_dict(config_dict)
        elif config_path is not None:
            self.config_path = config_path
            self.params = TrackingParameters.from_config_file(
                config_path, override_args=override_args
            )
        else:
            self.config_path = None
            self.params = TrackingParameters()

    def track_points(
        self,
        frames: Sequence[PointSerie],
        logger: Optional[logging.Logger] = None,
    ) -> TrackSet:
        """Link a sequence of frames with the tracker parameters."""
        return link(frames, self.params, logger)

    def track_objects(
        self,
        measurements_df: pd.DataFrame,
        logger: Optional[logging.Logger] = None,
        channel_col: str = "channel",
    ) -> pd.DataFrame:
        """
        Perform tracking on a detections DataFrame.

        When a channel column is present every channel is linked on its own
        and track ids restart at 1 in each channel.

        Args:
            measurements_df: Detections with 'frame', 'x', 'y' and optionally
                'tag' and a channel column
            logger: Logger for progress messages
            channel_col: Name of the channel column

        Returns:
            Copy of measurements_df with a nullable integer 'track_id' column
            (1-based, missing for detections outside kept tracks)

        Raises:
            ValueError: If input data validation fails
        """
        # Checks > Prepare > Tracking > Merge
        validate_dataframe_integrity(measurements_df)

        if channel_col not in measurements_df.columns:
            frames = frames_from_dataframe(measurements_df)
            tracks = self.track_points(frames, logger)
            if logger is not None:
                logger.info(
                    f"Tracked {len(measurements_df)} detections over {len(frames)} frames: "
                    f"{len(tracks)} tracks"
                )
            tracks_df = tracks_to_dataframe(tracks)
            return merge_tracking_results(
                measurements_df,
                tracks_df[["track_id", "frame", "x", "y"]],
                merge_on=["frame", "x", "y"],
            )

        frames_by_channel = frames_by_channel_from_dataframe(
            measurements_df, channel_col=channel_col
        )
        channels = sorted(frames_by_channel)
        tracks_by_channel = self.track_channels(frames_by_channel, logger)
        if logger is not None:
            for channel, tracks in zip(channels, tracks_by_channel):
                logger.info(f"Channel {channel}: {len(tracks)} tracks")

        tracks_df = pd.concat(
            [
                tracks_to_dataframe(tracks, channel=channel)
                for channel, tracks in zip(channels, tracks_by_channel)
            ],
            ignore_index=True,
        ).rename(columns={"channel": channel_col})
        merge_on = [channel_col, "frame", "x", "y"]
        return merge_tracking_results(
            measurements_df,
            tracks_df[["track_id"] + merge_on],
            merge_on=merge_on,
        )

    def track_channels(
        self,
        frames_by_channel: Dict[int, Sequence[PointSerie]],
        logger: Optional[logging.Logger] = None,
    ) -> List[TrackSet]:
        """Link every channel with the tracker parameters, in ascending channel order."""
        return link_channels(frames_by_channel, self.params, logger)
