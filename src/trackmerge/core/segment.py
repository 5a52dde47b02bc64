from dataclasses import dataclass, field
from datetime import datetime
from .point import Point

@dataclass(frozen=True)
class OutputUnit:
    """
    One output file's worth of points plus the name it is written under.
    """
    name: str
    points: list[Point] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.name}.gpx"

    @property
    def start_time(self) -> datetime:
        if not self.points:
            raise ValueError("Output unit is empty")
        return self.points[0].timestamp

    @property
    def end_time(self) -> datetime:
        if not self.points:
            raise ValueError("Output unit is empty")
        return self.points[-1].timestamp
