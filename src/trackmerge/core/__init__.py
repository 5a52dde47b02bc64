from .point import Point
from .segment import OutputUnit
from .errors import TrackMergeError, MalformedPointError, EmptyInputError, InvalidConfigError

__all__ = [
    "Point",
    "OutputUnit",
    "TrackMergeError",
    "MalformedPointError",
    "EmptyInputError",
    "InvalidConfigError",
]
