from dataclasses import dataclass
from datetime import datetime

@dataclass
class Point:
    """
    Represents a single GPS fix (lat, lon, t) read from a track file.
    Optional fields stay None when the source did not record them.
    Only `out_of_order` is ever changed after construction, by the order verifier.
    """
    lat: float
    lon: float
    timestamp: datetime
    elevation: float | None = None
    hdop: float | None = None
    out_of_order: bool = False
