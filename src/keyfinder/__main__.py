"""
Command line key detection.

Usage:
    python -m keyfinder song.wav other.flac
    python -m keyfinder --profile krumhansl --json song.wav
"""

import argparse
import logging
import sys

from .analysis import KeyFinder
from .exceptions import KeyFinderError
from .parameters import Parameters
from .profiles import KeyProfile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyfinder",
        description="Estimate the musical key of audio files",
    )
    parser.add_argument("paths", nargs="+", help="Audio files to analyse")
    parser.add_argument(
        "--profile",
        choices=[p.value for p in KeyProfile],
        default=KeyProfile.SHAATH.value,
        help="Tone profile family (default: shaath)",
    )
    parser.add_argument(
        "--block-frames",
        type=int,
        default=None,
        help="Frames per streamed chunk",
    )
    parser.add_argument("--json", action="store_true", help="Print full results as JSON lines")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    finder = KeyFinder(Parameters(tone_profile=KeyProfile(args.profile)))

    status = 0
    for path in args.paths:
        try:
            estimate = finder.analyze_file(path, args.block_frames)
        except (FileNotFoundError, ValueError, KeyFinderError) as e:
            print(f"{path}: ERROR: {e}", file=sys.stderr)
            status = 1
            continue

        if args.json:
            print(estimate.model_dump_json())
        else:
            camelot = f" ({estimate.camelot})" if estimate.camelot else ""
            print(f"{path}: {estimate.name}{camelot}")

    return status


if __name__ == "__main__":
    sys.exit(main())
