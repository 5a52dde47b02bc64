from datetime import datetime, timedelta, timezone

import pytest

from trackmerge.core.point import Point

START = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def make_point(seconds, lat=0.0, lon=0.0, **kwargs):
    return Point(lat=lat, lon=lon, timestamp=START + timedelta(seconds=seconds), **kwargs)


def gpx_document(*tracks):
    """
    Builds GPX text. Each track is a list of segments; each segment a list of
    (lat, lon, time, extra_children) tuples.
    """
    body = []
    for segments in tracks:
        body.append("<trk>")
        for segment in segments:
            body.append("<trkseg>")
            for lat, lon, time, extra in segment:
                time_el = f"<time>{time}</time>" if time else ""
                body.append(f'<trkpt lat="{lat}" lon="{lon}">{time_el}{extra}</trkpt>')
            body.append("</trkseg>")
        body.append("</trk>")
    return (
        '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">'
        + "".join(body)
        + "</gpx>"
    )


@pytest.fixture
def point_factory():
    return make_point


@pytest.fixture
def gpx_builder():
    return gpx_document
