import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

import gpxpy
import gpxpy.gpx

from trackmerge.core.errors import MalformedPointError
from trackmerge.core.point import Point

logger = logging.getLogger(__name__)

XML_DECLARATION_RE = re.compile(
    rb"^(?:\xef\xbb\xbf)?\s*<\?xml(?:[^>]*?\sencoding=[\"'](?P<encoding>[A-Za-z0-9._-]+)[\"'])?[^>]*\?>"
)


def load_gpx(source: str | Path) -> gpxpy.gpx.GPX:
    """
    Parse a GPX document with gpxpy.

    Args:
        source: Path to a GPX file, decoded with the encoding its XML declaration
            names (UTF-8 otherwise), or the XML text itself.

    Returns:
        The parsed gpxpy document.

    Raises:
        MalformedPointError: if gpxpy rejects the document (bad XML, missing lat/lon,
            unparsable numbers) or the file cannot be decoded.
    """
    is_path = isinstance(source, Path)
    label = str(source) if is_path else "<string>"
    try:
        text = _decode(source.read_bytes()) if is_path else source
        return gpxpy.parse(text)
    except (gpxpy.gpx.GPXException, LookupError, ValueError) as exc:
        raise MalformedPointError(f"{label}: {exc}") from exc


def _decode(raw: bytes) -> str:
    # The XML declaration names the file encoding; the text handed on has none
    match = XML_DECLARATION_RE.match(raw)
    if match is None:
        return raw.decode("utf-8-sig")
    encoding = match.group("encoding")
    return raw[match.end():].decode(encoding.decode("ascii") if encoding else "utf-8")


def _to_utc(ts: datetime) -> datetime:
    # Times without an offset are taken as UTC
    if ts.tzinfo is None or ts.utcoffset() is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _coordinate(value, name: str, where: str) -> float:
    if value is None:
        raise MalformedPointError(f"{where}: missing {name}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPointError(f"{where}: unparsable {name} {value!r}") from exc
    if math.isnan(number):
        raise MalformedPointError(f"{where}: unparsable {name} {value!r}")
    return number


def _optional_float(value, name: str, where: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPointError(f"{where}: unparsable {name} {value!r}") from exc


def to_point(raw: gpxpy.gpx.GPXTrackPoint, where: str = "trkpt") -> Point:
    """
    Convert one gpxpy track point into a Point, validating mandatory fields.
    Elevation and hdop are copied only when the source recorded them.
    """
    if raw.time is None:
        raise MalformedPointError(f"{where}: missing time")
    return Point(
        lat=_coordinate(raw.latitude, "latitude", where),
        lon=_coordinate(raw.longitude, "longitude", where),
        timestamp=_to_utc(raw.time),
        elevation=_optional_float(raw.elevation, "elevation", where),
        hdop=_optional_float(raw.horizontal_dilution, "hdop", where),
    )


def ingest(documents: Iterable[gpxpy.gpx.GPX]) -> List[Point]:
    """
    Flatten parsed GPX documents into a single point sequence.

    Order is document, then track, then segment, then point within the segment.
    No sorting or filtering happens here; the first malformed point aborts ingestion.
    """
    points: List[Point] = []
    for doc_idx, doc in enumerate(documents):
        before = len(points)
        for trk_idx, track in enumerate(doc.tracks):
            for seg_idx, segment in enumerate(track.segments):
                for pt_idx, raw in enumerate(segment.points):
                    where = f"document {doc_idx} track {trk_idx} segment {seg_idx} point {pt_idx}"
                    points.append(to_point(raw, where))
        logger.debug("Document %d: %d track points", doc_idx, len(points) - before)
    return points
