"""
Command-line entry point for splinegen.

Usage:
    python -m splinegen "0,0,0;60,0,0;60,60,90"
    python -m splinegen --file waypoints.txt --settings settings.json
"""

import argparse
import logging
import sys
from pathlib import Path

from splinegen import log
from splinegen.settings import TrajectorySettings
from splinegen.trajectory import TrajectoryStatus, compute_trajectory_from_string

EXIT_CODES = {
    TrajectoryStatus.OK: 0,
    TrajectoryStatus.INSUFFICIENT_INPUT: 1,
    TrajectoryStatus.PARSE_ERROR: 2,
    TrajectoryStatus.COMPUTATION_ERROR: 3,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="splinegen",
        description="Compute a smooth sampled trajectory through waypoints 'x,y,heading;...'",
    )
    parser.add_argument(
        "waypoints",
        type=str,
        nargs="?",
        default=None,
        help="Waypoints 'x,y,heading_degrees' separated by ';' (may be URL-encoded)",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read waypoints from file instead of the command line",
    )
    parser.add_argument(
        "--settings", "-s",
        type=str,
        default=None,
        help="JSON settings file",
    )
    parser.add_argument("--max-dx", type=float, default=None, help="Max advance between samples")
    parser.add_argument("--max-dy", type=float, default=None, help="Max lateral deviation between samples")
    parser.add_argument("--max-dtheta", type=float, default=None, help="Max heading change between samples (rad)")
    parser.add_argument(
        "--no-optimize",
        action="store_true",
        help="Skip the curvature optimizer",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser


def load_settings(args) -> TrajectorySettings:
    if args.settings is not None:
        settings = TrajectorySettings.load(args.settings)
    else:
        settings = TrajectorySettings()
    data = settings.to_dict()
    for name in ("max_dx", "max_dy", "max_dtheta"):
        value = getattr(args, name)
        if value is not None:
            data["sampling"][name] = value
    if args.no_optimize:
        data["optimize"] = False
    return TrajectorySettings.from_dict(data)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
        log.set_level(log.Level.DEBUG)

    if args.file is not None:
        message = Path(args.file).read_text(encoding="utf-8").strip()
    elif args.waypoints is not None:
        message = args.waypoints
    else:
        parser.error("waypoints or --file is required")

    try:
        settings = load_settings(args)
    except (OSError, ValueError) as e:
        print(f"Error: cannot load settings: {e}", file=sys.stderr)
        return 2

    result = compute_trajectory_from_string(message, settings)
    if result.status == TrajectoryStatus.OK:
        print(result.to_json(args.indent))
    elif result.status == TrajectoryStatus.INSUFFICIENT_INPUT:
        print(result.legacy_response())
    else:
        print(f"Error: {result.message}", file=sys.stderr)
    return EXIT_CODES[result.status]


if __name__ == "__main__":
    sys.exit(main())
