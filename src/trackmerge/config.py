from dataclasses import dataclass

from trackmerge.core.errors import InvalidConfigError

@dataclass(frozen=True)
class MergeConfig:
    """
    Settings consumed by the pipeline.

    Attributes:
        max_points: Maximum number of points per size-split file.
        tz_offset: Hours added to UTC times before taking the calendar day.
        min_move: Minimum movement in meters between kept points.
        hdop_max: Largest acceptable horizontal dilution of precision.
        filter_enabled: Apply the movement/precision filter.
        drop_unsorted: Drop out-of-order points instead of sorting them.
        prefix: Optional output filename prefix.
    """
    max_points: int = 1000
    tz_offset: int = 0
    min_move: float = 1.25
    hdop_max: float = 5.0
    filter_enabled: bool = True
    drop_unsorted: bool = False
    prefix: str = ""

    def validate(self) -> "MergeConfig":
        if self.max_points <= 0:
            raise InvalidConfigError(f"max_points must be positive, got {self.max_points}")
        if self.min_move < 0:
            raise InvalidConfigError(f"min_move must not be negative, got {self.min_move}")
        if not -24 < self.tz_offset < 24:
            raise InvalidConfigError(f"tz_offset must be within (-24, 24) hours, got {self.tz_offset}")
        if "/" in self.prefix or "\\" in self.prefix:
            raise InvalidConfigError(f"prefix must not contain path separators: {self.prefix!r}")
        return self
