from datetime import datetime, timezone
from typing import List

from trackmerge.core.point import Point

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

def verify_sorted(points: List[Point]) -> bool:
    """
    Checks chronological order in a single left-to-right pass.

    A point strictly earlier than the latest timestamp seen so far is marked
    `out_of_order`. Marked points do not advance the latest-seen tracker, and the
    scan always runs to the end.

    Returns:
        True if no point was marked.
    """
    latest = EARLIEST
    in_order = True
    for p in points:
        if p.timestamp < latest:
            p.out_of_order = True
            in_order = False
        else:
            latest = p.timestamp
    return in_order

def sort_points(points: List[Point]) -> List[Point]:
    """
    Returns a new list ordered by ascending timestamp.
    sorted() is stable, so points sharing a timestamp keep their relative order.
    """
    return sorted(points, key=lambda p: p.timestamp)

def count_out_of_order(points: List[Point]) -> int:
    return sum(1 for p in points if p.out_of_order)
