import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from trackmerge.config import MergeConfig
from trackmerge.core.point import Point
from trackmerge.core.stream import CsvTrackStream
from trackmerge.modules.filtering.point_filter import filter_points
from trackmerge.modules.ingestion.gpx import ingest, load_gpx
from trackmerge.modules.ordering.sorter import count_out_of_order, sort_points, verify_sorted
from trackmerge.modules.serialization.gpx_writer import serialize
from trackmerge.modules.splitting.by_day import split_by_day
from trackmerge.modules.splitting.by_size import split_by_size

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".gpx", ".csv")


@dataclass
class RunResult:
    """Summary of one pipeline run."""
    inputs: int = 0
    points_read: int = 0
    points_kept: int = 0
    written: List[Tuple[Path, int]] = field(default_factory=list)

    @property
    def wrote_output(self) -> bool:
        return bool(self.written)


def discover_inputs(paths: Iterable[str | Path]) -> List[Path]:
    """
    Expands the given paths into the list of track files to read.

    Directories contribute their *.gpx and *.csv files sorted by name; files are
    kept as given. Missing paths and unsupported suffixes are skipped with a warning.
    """
    found: List[Path] = []
    for arg in paths:
        path = Path(arg)
        if path.is_dir():
            found.extend(sorted(
                p for p in path.iterdir()
                if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
            ))
        elif path.is_file():
            if path.suffix.lower() in SUPPORTED_SUFFIXES:
                found.append(path)
            else:
                logger.warning("Skipping %s: unsupported file type", path)
        else:
            logger.warning("Path does not exist: %s", path)
    return found


def read_points(paths: Iterable[Path]) -> List[Point]:
    """Reads every file in order and concatenates their points."""
    points: List[Point] = []
    for path in paths:
        if path.suffix.lower() == ".csv":
            file_points = list(CsvTrackStream(path).stream())
        else:
            file_points = ingest([load_gpx(path)])
        logger.info("Read %s: %d points", path.name, len(file_points))
        points.extend(file_points)
    return points


def process_points(points: List[Point], config: MergeConfig) -> List[Point]:
    """
    Orders and filters the merged point sequence.

    Out-of-order points are either sorted into place or, with `drop_unsorted`,
    removed. The movement/precision filter runs when `filter_enabled` is set.
    """
    if not verify_sorted(points):
        logger.warning("%d points are out of chronological order", count_out_of_order(points))
        if not config.drop_unsorted:
            points = sort_points(points)

    if config.filter_enabled:
        kept = filter_points(points, config.min_move, config.hdop_max, config.drop_unsorted)
    elif config.drop_unsorted:
        kept = [p for p in points if not p.out_of_order]
    else:
        kept = points

    logger.info("Kept %d of %d points (%d dropped)", len(kept), len(points), len(points) - len(kept))
    return kept


def run(paths: Iterable[str | Path], output_dir: str | Path, config: MergeConfig) -> RunResult:
    """
    Runs the whole pipeline: discover, read, order, filter, split and write.

    Returns normally, without writing anything, when there are no input files or
    no points survive filtering.
    """
    config.validate()
    result = RunResult()

    files = discover_inputs(paths)
    result.inputs = len(files)
    if not files:
        logger.info("No input files found, nothing to do")
        return result
    logger.info("Found %d input files", len(files))

    points = read_points(files)
    result.points_read = len(points)

    kept = process_points(points, config)
    result.points_kept = len(kept)
    if not kept:
        logger.info("No points remain after filtering, nothing to write")
        return result

    units = split_by_day(kept, config.tz_offset, config.prefix)
    logger.info("Split into %d days", len(units))
    size_units = split_by_size(kept, config.max_points, config.prefix)
    logger.info("Split into %d files of at most %d points", len(size_units), config.max_points)
    units.extend(size_units)

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    for unit in units:
        data, count = serialize(unit)
        target = out / unit.filename
        target.write_bytes(data)
        logger.debug("Wrote %s (%d points, %s -> %s)", target, count, unit.start_time, unit.end_time)
        result.written.append((target, count))

    logger.info("Wrote %d files to %s", len(result.written), out)
    return result
