import pandas as pd
import numpy as np
from typing import Dict, List, Optional, Sequence

from .points import Point, PointSerie, TrackSet


def validate_dataframe_integrity(
    df: pd.DataFrame,
    required_cols: Sequence[str] = ("frame", "x", "y"),
) -> None:
    """
    Validate DataFrame has required structure for tracking.

    Args:
        df: DataFrame to validate
        required_cols: Columns that must be present

    Raises:
        ValueError: If validation fails
    """
    if df.empty:
        raise ValueError("DataFrame is empty")

    missing = [col for col in required_cols if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    frames = df["frame"]
    if not pd.api.types.is_numeric_dtype(frames):
        raise ValueError("Frame numbers must be numeric")
    if frames.isna().any():
        raise ValueError("Frame numbers cannot be NaN")
    if not np.all(np.mod(frames.to_numpy(dtype=float), 1) == 0):
        raise ValueError("Frame numbers must be integers")
    if frames.min() < 0:
        raise ValueError("Frame numbers cannot be negative")

    if df[["x", "y"]].isna().any().any():
        raise ValueError("Point coordinates cannot be NaN")


def frames_from_dataframe(
    df: pd.DataFrame,
    n_frames: Optional[int] = None,
    tag_col: str = "tag",
) -> List[PointSerie]:
    """
    Group detections into one PointSerie per frame.

    Frames without detections are kept as empty series, so frame ``t`` is
    always at position ``t`` of the returned list.

    Args:
        df: Detections with 'frame', 'x', 'y' and optionally a tag column
        n_frames: Total number of frames. Defaults to the last frame index + 1.
        tag_col: Column holding point tags. Missing column means empty tags.

    Returns:
        List of PointSerie, one per frame, points in row order
    """
    if n_frames is None:
        n_frames = int(df["frame"].max()) + 1 if not df.empty else 0

    frames = [PointSerie(name=f"Frame_{t + 1}") for t in range(n_frames)]
    tags = df[tag_col].fillna("").astype(str) if tag_col in df.columns else None

    for i, (frame, x, y) in enumerate(
        zip(df["frame"].to_numpy(), df["x"].to_numpy(), df["y"].to_numpy())
    ):
        frame = int(frame)
        if frame >= n_frames:
            raise ValueError(f"Frame {frame} is beyond n_frames={n_frames}")
        tag = tags.iloc[i] if tags is not None else ""
        frames[frame].append(Point(float(x), float(y), tag=tag, frame=frame))

    for serie in frames:
        serie.tag = "\t".join(p.tag for p in serie)
    return frames


def frames_by_channel_from_dataframe(
    df: pd.DataFrame,
    channel_col: str = "channel",
    tag_col: str = "tag",
    default_channel: int = 0,
) -> Dict[int, List[PointSerie]]:
    """
    Split detections per channel and group each channel by frame.

    All channels share the same number of frames. A DataFrame without a
    channel column is treated as a single channel ``default_channel``.
    """
    n_frames = int(df["frame"].max()) + 1 if not df.empty else 0
    if channel_col not in df.columns:
        return {
            default_channel: frames_from_dataframe(df, n_frames=n_frames, tag_col=tag_col)
        }

    return {
        int(channel): frames_from_dataframe(
            channel_df, n_frames=n_frames, tag_col=tag_col
        )
        for channel, channel_df in df.groupby(channel_col, sort=True)
    }


def tracks_to_dataframe(tracks: TrackSet, channel: Optional[int] = None) -> pd.DataFrame:
    """
    Flatten a TrackSet to one row per linked point.

    Args:
        tracks: Tracks to flatten
        channel: If given, added as a 'channel' column

    Returns:
        DataFrame with columns 'track_id' (1-based), 'frame', 'x', 'y', 'tag'
    """
    rows = [
        {
            "track_id": track_id,
            "frame": point.frame,
            "x": point.x,
            "y": point.y,
            "tag": point.tag,
        }
        for track_id, track in enumerate(tracks, start=1)
        for point in track
    ]
    tracks_df = pd.DataFrame(rows, columns=["track_id", "frame", "x", "y", "tag"])
    tracks_df = tracks_df.astype(
        {"track_id": "int64", "frame": "Int64", "x": "float64", "y": "float64"}
    )
    if channel is not None:
        tracks_df.insert(0, "channel", pd.Series([channel] * len(tracks_df), dtype="int64"))
    return tracks_df


def merge_tracking_results(
    original_df: pd.DataFrame,
    tracks_df: pd.DataFrame,
    merge_on: List[str]
) -> pd.DataFrame:
    """
    Merge tracking results back with original measurements.

    Args:
        original_df: Original measurements DataFrame
        tracks_df: Tracking results DataFrame
        merge_on: Columns to merge on

    Returns:
        Merged DataFrame with tracking results, same rows as original_df
    """
    # Identical detections in one frame would otherwise duplicate rows
    tracks_df = tracks_df.drop_duplicates(subset=merge_on, keep="first")
    merged = pd.merge(original_df, tracks_df, on=merge_on, how="left")
    merged["track_id"] = merged["track_id"].astype("Int64")
    return merged


def track_length_summary(tracks: TrackSet) -> pd.Series:
    """Descriptive statistics of track lengths (count, mean, std, min, quartiles, max)."""
    return pd.Series(np.array([len(t) for t in tracks], dtype=int), name="length").describe()
