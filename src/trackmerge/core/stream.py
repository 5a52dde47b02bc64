import pandas as pd
from typing import Iterator, Dict
from pathlib import Path
from .point import Point
from .errors import MalformedPointError

class CsvTrackStream:
    """
    Reads track points from a CSV export (one fix per row) in file order.
    Required columns are lat, lon and time; ele and hdop are picked up when present.
    """
    def __init__(
        self,
        filepath: str | Path,
        sep: str = ',',
        col_mapping: Dict[str, str] = None,
    ):
        self.filepath = Path(filepath)
        self.sep = sep

        self.mapping = col_mapping or {
            'lat': 'lat',
            'lon': 'lon',
            'timestamp': 'time',
            'elevation': 'ele',
            'hdop': 'hdop'
        }

    def stream(self) -> Iterator[Point]:
        """
        Yields points from the file one by one.
        Raises MalformedPointError on an empty or unparsable file, and on the first
        row missing a mandatory value.
        """
        try:
            header = pd.read_csv(self.filepath, nrows=0, sep=self.sep)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise MalformedPointError(f"{self.filepath}: cannot read CSV: {exc}") from exc
        for key in ('lat', 'lon', 'timestamp'):
            if self.mapping[key] not in header.columns:
                raise MalformedPointError(
                    f"{self.filepath}: missing required column '{self.mapping[key]}'. Found: {list(header.columns)}"
                )
        has_ele_col = self.mapping.get('elevation') in header.columns
        has_hdop_col = self.mapping.get('hdop') in header.columns

        line = 1
        for chunk in self._chunks():
            chunk[self.mapping['timestamp']] = pd.to_datetime(
                chunk[self.mapping['timestamp']], utc=True, errors='coerce'
            )

            for _, row in chunk.iterrows():
                line += 1
                timestamp = row[self.mapping['timestamp']]
                if pd.isna(timestamp):
                    raise MalformedPointError(f"{self.filepath}:{line}: missing or invalid time")
                try:
                    lat = float(row[self.mapping['lat']])
                    lon = float(row[self.mapping['lon']])
                except (TypeError, ValueError) as exc:
                    raise MalformedPointError(f"{self.filepath}:{line}: invalid coordinates") from exc
                if pd.isna(lat) or pd.isna(lon):
                    raise MalformedPointError(f"{self.filepath}:{line}: missing coordinates")

                yield Point(
                    lat=lat,
                    lon=lon,
                    timestamp=timestamp.to_pydatetime(),
                    elevation=self._optional(row, 'elevation') if has_ele_col else None,
                    hdop=self._optional(row, 'hdop') if has_hdop_col else None
                )

    def _chunks(self) -> Iterator[pd.DataFrame]:
        try:
            with pd.read_csv(self.filepath, chunksize=1000, sep=self.sep) as reader:
                yield from reader
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise MalformedPointError(f"{self.filepath}: cannot read CSV: {exc}") from exc

    def _optional(self, row, key: str) -> float | None:
        value = row[self.mapping[key]]
        if pd.isna(value):
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise MalformedPointError(f"{self.filepath}: invalid {self.mapping[key]} value {value!r}") from exc
