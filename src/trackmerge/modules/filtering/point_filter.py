from typing import List, Optional

from trackmerge.core.point import Point
from trackmerge.metrics.distance import distance

def filter_points(
    points: List[Point],
    min_move: float,
    hdop_max: float,
    drop_unsorted: bool = False,
) -> List[Point]:
    """
    Removes stationary noise and low-precision fixes in one pass.

    Each point is checked against the last *accepted* point, in this order:
      1. out-of-order points are dropped when `drop_unsorted` is set
      2. points closer than `min_move` meters to the last accepted point are dropped
      3. points whose hdop exceeds `hdop_max` are dropped (a missing hdop passes)
    Only a point that passes all checks becomes the new reference. The first
    candidate has no reference and always passes the move check.

    Args:
        points: Time-ordered points.
        min_move: Minimum movement in meters. Values <= 0 disable the check.
        hdop_max: Largest acceptable hdop.
        drop_unsorted: Drop points flagged by the order verifier.

    Returns:
        The kept points, in input order.
    """
    kept: List[Point] = []
    last: Optional[Point] = None

    for p in points:
        if drop_unsorted and p.out_of_order:
            continue
        if last is not None and distance(last.lat, last.lon, p.lat, p.lon) < min_move:
            continue
        if p.hdop is not None and p.hdop > hdop_max:
            continue
        kept.append(p)
        last = p

    return kept
