from typing import List

from trackmerge.core.errors import InvalidConfigError
from trackmerge.core.point import Point
from trackmerge.core.segment import OutputUnit

def split_by_size(points: List[Point], max_points: int, prefix: str = "") -> List[OutputUnit]:
    """
    Cuts the sequence into consecutive units of at most `max_points` points.
    Units are numbered from 1 and zero-padded to at least two digits.
    """
    if max_points <= 0:
        raise InvalidConfigError(f"max_points must be positive, got {max_points}")

    name_prefix = f"{prefix}-" if prefix else ""
    return [
        OutputUnit(name=f"{name_prefix}{number:02d}", points=points[start:start + max_points])
        for number, start in enumerate(range(0, len(points), max_points), start=1)
    ]
