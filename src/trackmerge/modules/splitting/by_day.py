from datetime import timedelta, timezone
from typing import List

from trackmerge.core.errors import EmptyInputError
from trackmerge.core.point import Point
from trackmerge.core.segment import OutputUnit

DAY_FORMAT = "%Y-%m-%d"

def day_of(point: Point, offset_hours: int) -> str:
    """Calendar day of the point after shifting its UTC time by `offset_hours`."""
    ts = point.timestamp
    # Naive times are taken as UTC, as at ingestion
    ts = ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)
    return (ts + timedelta(hours=offset_hours)).strftime(DAY_FORMAT)

def split_by_day(points: List[Point], offset_hours: int = 0, prefix: str = "") -> List[OutputUnit]:
    """
    Groups a time-ordered sequence into one unit per shifted calendar day.

    Args:
        points: Non-empty, time-ordered points.
        offset_hours: Timezone offset applied before taking the day.
        prefix: Prepended to each day name as "prefix-YYYY-MM-DD" when non-empty.

    Raises:
        EmptyInputError: if `points` is empty.
    """
    if not points:
        raise EmptyInputError("Cannot split an empty point sequence by day")

    name_prefix = f"{prefix}-" if prefix else ""
    units: List[OutputUnit] = []
    current_day = day_of(points[0], offset_hours)
    run: List[Point] = []

    for p in points:
        day = day_of(p, offset_hours)
        if day != current_day:
            units.append(OutputUnit(name=f"{name_prefix}{current_day}", points=run))
            current_day = day
            run = []
        run.append(p)

    units.append(OutputUnit(name=f"{name_prefix}{current_day}", points=run))
    return units
