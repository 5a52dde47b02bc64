import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Tuple

from trackmerge.core.segment import OutputUnit

GPX_NS = 'http://www.topografix.com/GPX/1/1'
GPX_VERSION = '1.1'
DEFAULT_CREATOR = 'trackmerge'
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no" ?>'

ET.register_namespace('', GPX_NS)


def _tag(name: str) -> str:
    return f'{{{GPX_NS}}}{name}'


def format_number(value: float) -> str:
    """Fixed-point text for a coordinate or measurement, without trailing zeros."""
    text = f'{value:.9f}'.rstrip('0').rstrip('.')
    return '0' if text in ('', '-0') else text


def format_time(ts: datetime) -> str:
    """UTC ISO-8601 with a Z suffix; fractional seconds only when present."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    if ts.microsecond:
        return ts.strftime('%Y-%m-%dT%H:%M:%S.%fZ')
    return ts.strftime('%Y-%m-%dT%H:%M:%SZ')


def serialize(unit: OutputUnit, creator: str = DEFAULT_CREATOR) -> Tuple[bytes, int]:
    """
    Render an output unit as a GPX 1.1 document with one track and one segment.

    Args:
        unit: The unit to render; its filename becomes the track name.
        creator: Value of the root `creator` attribute.

    Returns:
        (document bytes, number of points written)
    """
    root = ET.Element(_tag('gpx'), {'version': GPX_VERSION, 'creator': creator})
    trk = ET.SubElement(root, _tag('trk'))
    ET.SubElement(trk, _tag('name')).text = unit.filename
    trkseg = ET.SubElement(trk, _tag('trkseg'))

    written = 0
    for p in unit.points:
        trkpt = ET.SubElement(trkseg, _tag('trkpt'), {
            'lat': format_number(p.lat),
            'lon': format_number(p.lon),
        })
        ET.SubElement(trkpt, _tag('time')).text = format_time(p.timestamp)
        if p.elevation is not None:
            ET.SubElement(trkpt, _tag('ele')).text = format_number(p.elevation)
        if p.hdop is not None:
            ET.SubElement(trkpt, _tag('hdop')).text = format_number(p.hdop)
        written += 1

    ET.indent(root, space='  ')
    body = ET.tostring(root, encoding='unicode')
    return f'{XML_DECLARATION}\n{body}\n'.encode('utf-8'), written
