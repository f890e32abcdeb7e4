#!/usr/bin/env python3
import sys

from SpotTrackTools.cli import spottracktools


def main():
    """Main entry point for SpotTrackTools CLI"""
    parser = spottracktools()
    args = parser.parse_args()

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
