import argparse
import json
import os
from pathlib import Path

import yaml

from SpotTrackTools.tracking.tag_filter import TrackFilter


def validate_file(file_path: str, extension: tuple = None) -> str:
    """Validate if file exists and has one of the allowed extensions"""
    path = Path(file_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File {file_path} does not exist")
    if extension and path.suffix not in extension:
        raise argparse.ArgumentTypeError(f"File must have {extension} extension")
    return str(path)


def add_link_command(subparsers):
    """Add the link command to the CLI"""
    parser = subparsers.add_parser(
        "link",
        help="Link point detections from a CSV file into tracks",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=lambda x: validate_file(x, (".csv",)),
        required=True,
        help="CSV file with columns frame, x, y and optionally tag, channel",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=lambda x: validate_file(x, (".yml", ".yaml", ".zip")),
        default=None,
        help="Tracking configuration YAML file or zip archive (optional)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output CSV for the results table (default: <input>_tracks.csv)",
    )
    parser.add_argument(
        "--filter",
        type=str,
        default=TrackFilter.ALL.value,
        choices=[f.value for f in TrackFilter],
        help="Only report tracks whose tag matches this filter (default: All)",
    )
    parser.add_argument(
        "--max-distance",
        type=float,
        default=None,
        help="Override the maximum travel distance between two frames",
    )
    parser.add_argument(
        "--min-tracked-frames",
        type=int,
        default=None,
        help="Override the minimum number of frames for a track to be kept",
    )
    parser.add_argument(
        "--channel",
        type=int,
        default=None,
        help="Channel label for input files without a channel column",
    )
    parser.add_argument(
        "--shapes",
        type=str,
        default=None,
        help="Also write the tracks as polyline shapes to this JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Folder for the tracking log file (optional)",
    )
    parser.set_defaults(func=run_link)


def run_link(args):
    """Run the link command"""
    import pandas as pd

    from SpotTrackTools.log_utils import remove_logger, setup_logger
    from SpotTrackTools.resource_management.sysutils import get_system_info
    from SpotTrackTools.tracking.config_loader import ConfigLoader
    from SpotTrackTools.tracking.nn_tracker import NearestNeighborTracker
    from SpotTrackTools.tracking.renderers import (
        shapes_to_records,
        tracks_to_results_table,
        tracks_to_shapes,
    )
    from SpotTrackTools.tracking.tracking_utils import (
        frames_by_channel_from_dataframe,
        track_length_summary,
        validate_dataframe_integrity,
    )
    from SpotTrackTools.utils import remove_file_extension

    overrides = {}
    if args.max_distance is not None:
        overrides["max_distance"] = args.max_distance
    if args.min_tracked_frames is not None:
        overrides["min_tracked_frames"] = args.min_tracked_frames
    if args.channel is not None:
        overrides["channel"] = args.channel

    config = ConfigLoader.load_config(args.config) if args.config is not None else {}
    section = dict(config.get("tracking", config) or {})
    section.update(overrides)
    tracker = NearestNeighborTracker(config_dict=section)

    name = remove_file_extension(os.path.basename(args.input))
    logger = setup_logger(name, output_path=args.log_dir, print_output=True)
    try:
        logger.debug(get_system_info())
        logger.info(f"Tracking parameters: {tracker.params.to_dict()}")
        detections = pd.read_csv(args.input)
        validate_dataframe_integrity(detections)
        frames_by_channel = frames_by_channel_from_dataframe(
            detections, default_channel=tracker.params.channel
        )
        channels = sorted(frames_by_channel)
        tracks = dict(zip(channels, tracker.track_channels(frames_by_channel, logger)))
        for channel, channel_tracks in tracks.items():
            lengths = track_length_summary(channel_tracks)
            logger.info(
                f"Channel {channel}: {len(channel_tracks)} tracks, "
                f"mean length {lengths['mean']:.2f}, max length {lengths['max']:.0f}",
                show_memory=True,
            )

        output = args.output or os.path.join(
            os.path.dirname(args.input), f"{name}_tracks.csv"
        )
        table = tracks_to_results_table(tracks, args.filter)
        table.to_csv(output, index=False)
        logger.info(f"Results table ({len(table)} rows, filter {args.filter}) written to {output}")

        if args.shapes is not None:
            colors = [tracker.params.color] * len(tracks)
            shapes = tracks_to_shapes(tracks, args.filter, colors=colors)
            with open(args.shapes, "w") as f:
                json.dump(shapes_to_records(shapes), f, indent=2)
            logger.info(f"{len(shapes)} track shapes written to {args.shapes}")
    finally:
        remove_logger(logger)


def add_write_config_command(subparsers):
    """Add the write-config command to the CLI"""
    parser = subparsers.add_parser(
        "write-config", help="Write a tracking configuration template"
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=str,
        default="tracking_config.yml",
        help="Output YAML file (default: tracking_config.yml)",
    )
    parser.set_defaults(func=run_write_config)


def run_write_config(args):
    """Run the write-config command"""
    from SpotTrackTools.tracking.parameters import TrackingParameters

    config = {"tracking": TrackingParameters().to_dict()}
    config["tracking"]["pixel_size"] = 1.0
    config["tracking"]["distance_unit"] = "pixel"

    with open(args.output_file, "w") as f:
        yaml.safe_dump(config, f, sort_keys=False)

    print(f"Tracking configuration written to {args.output_file}")


def spottracktools():
    """Main entry point for SpotTrackTools CLI"""
    parser = argparse.ArgumentParser(
        description="SpotTrackTools - Nearest-neighbour tracking of point detections"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_link_command(subparsers)
    add_write_config_command(subparsers)

    return parser
