from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from . import __version__
from .config import MergeConfig
from .core.errors import TrackMergeError
from .pipeline.runner import run

DEFAULTS = MergeConfig()


def build_cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="trackmerge",
        description="Merge GPS track files, drop stationary and low-precision points, and split the result by day and by size.",
    )
    p.add_argument("inputs", nargs="*", default=["."], help="GPX/CSV files or directories containing them (default: current directory)")
    p.add_argument("-o", "--output-dir", default="out", help="Directory to write output files (default: out)")
    p.add_argument("--max-points", type=int, default=DEFAULTS.max_points, help=f"Maximum points per size-split file (default: {DEFAULTS.max_points})")
    p.add_argument("--tz-offset", type=int, default=DEFAULTS.tz_offset, help="Timezone offset in hours used to assign points to days (default: 0)")
    p.add_argument("--min-move", type=float, default=DEFAULTS.min_move, help=f"Minimum movement in meters between kept points (default: {DEFAULTS.min_move})")
    p.add_argument("--hdop-max", type=float, default=DEFAULTS.hdop_max, help=f"Maximum acceptable hdop (default: {DEFAULTS.hdop_max})")
    p.add_argument("--no-filter", action="store_true", help="Disable movement/precision filtering")
    p.add_argument("--drop-unsorted", action="store_true", help="Drop out-of-order points instead of sorting them")
    p.add_argument("--prefix", default=DEFAULTS.prefix, help="Prefix for output file names")
    p.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> MergeConfig:
    return MergeConfig(
        max_points=args.max_points,
        tz_offset=args.tz_offset,
        min_move=args.min_move,
        hdop_max=args.hdop_max,
        filter_enabled=not args.no_filter,
        drop_unsorted=args.drop_unsorted,
        prefix=args.prefix,
    )


def setup_logging(level: str) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=lvl, format="%(levelname)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_cli(argv)
    setup_logging(args.log_level)
    logging.info("trackmerge v%s", __version__)

    try:
        result = run(args.inputs, args.output_dir, config_from_args(args))
    except (TrackMergeError, OSError) as exc:
        logging.error(str(exc))
        return 1

    if not result.wrote_output:
        logging.info("Done; no output written")
    return 0
