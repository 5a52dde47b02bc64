import pytest
from datetime import datetime, timezone

import gpxpy.gpx

from trackmerge.core.errors import MalformedPointError
from trackmerge.modules.ingestion import ingest, load_gpx


def test_flattens_in_document_track_segment_order(gpx_builder):
    doc1 = load_gpx(gpx_builder(
        [
            [(1.0, 1.0, "2024-05-01T10:00:00Z", ""), (2.0, 2.0, "2024-05-01T10:00:01Z", "")],
            [(3.0, 3.0, "2024-05-01T10:00:02Z", "")],
        ],
        [
            [(4.0, 4.0, "2024-05-01T10:00:03Z", "")],
        ],
    ))
    doc2 = load_gpx(gpx_builder(
        [[(5.0, 5.0, "2024-05-01T09:00:00Z", "")]],
    ))

    points = ingest([doc1, doc2])

    assert [p.lat for p in points] == [1.0, 2.0, 3.0, 4.0, 5.0]
    # No sorting happens at ingestion
    assert points[-1].timestamp == datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)
    assert not any(p.out_of_order for p in points)


def test_optional_fields_only_when_present(gpx_builder):
    doc = load_gpx(gpx_builder([[
        (47.1, 8.5, "2024-05-01T10:00:00Z", "<ele>412.5</ele><hdop>1.2</hdop>"),
        (47.2, 8.6, "2024-05-01T10:00:05Z", ""),
        (47.3, 8.7, "2024-05-01T10:00:10Z", "<ele>0</ele>"),
    ]]))

    p1, p2, p3 = ingest([doc])

    assert p1.elevation == 412.5
    assert p1.hdop == 1.2
    assert p2.elevation is None
    assert p2.hdop is None
    # A measured zero is kept distinct from absence
    assert p3.elevation == 0.0
    assert p3.hdop is None


def test_timestamps_normalized_to_utc(gpx_builder):
    doc = load_gpx(gpx_builder([[
        (0.0, 0.0, "2024-05-01T12:00:00+02:00", ""),
        (0.0, 0.0, "2024-05-01T10:30:00", ""),
    ]]))

    p1, p2 = ingest([doc])

    assert p1.timestamp == datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert p1.timestamp.utcoffset().total_seconds() == 0
    # Naive times are taken as UTC
    assert p2.timestamp == datetime(2024, 5, 1, 10, 30, 0, tzinfo=timezone.utc)


def test_missing_time_fails(gpx_builder):
    doc = load_gpx(gpx_builder([[
        (0.0, 0.0, "2024-05-01T10:00:00Z", ""),
        (0.0, 0.0, None, "<ele>3</ele>"),
    ]]))

    with pytest.raises(MalformedPointError, match="missing time"):
        ingest([doc])


def test_missing_coordinates_fail_programmatic_document():
    gpx = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack()
    segment = gpxpy.gpx.GPXTrackSegment()
    segment.points.append(gpxpy.gpx.GPXTrackPoint(
        latitude=None, longitude=1.0, time=datetime(2024, 5, 1, tzinfo=timezone.utc)
    ))
    track.segments.append(segment)
    gpx.tracks.append(track)

    with pytest.raises(MalformedPointError, match="missing latitude"):
        ingest([gpx])


def test_missing_lat_attribute_rejected_at_load():
    text = (
        '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">'
        '<trk><trkseg><trkpt lon="1.0"><time>2024-05-01T10:00:00Z</time></trkpt></trkseg></trk>'
        '</gpx>'
    )
    with pytest.raises(MalformedPointError):
        load_gpx(text)


def test_load_from_path(tmp_path, gpx_builder):
    path = tmp_path / "track.gpx"
    path.write_text(gpx_builder([[(10.0, 20.0, "2024-05-01T10:00:00Z", "")]]), encoding="utf-8")

    points = ingest([load_gpx(path)])

    assert len(points) == 1
    assert points[0].lat == 10.0
    assert points[0].lon == 20.0


def test_empty_documents(gpx_builder):
    assert ingest([]) == []
    assert ingest([load_gpx(gpx_builder())]) == []
    assert ingest([load_gpx(gpx_builder([[]]))]) == []


def test_load_uses_declared_encoding(tmp_path):
    path = tmp_path / "latin1.gpx"
    path.write_bytes(
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">'
        '<trk><name>Grünwald</name><trkseg>'
        '<trkpt lat="48.0" lon="11.5"><time>2024-05-01T10:00:00Z</time></trkpt>'
        '</trkseg></trk></gpx>'.encode("iso-8859-1")
    )

    doc = load_gpx(path)

    assert doc.tracks[0].name == "Grünwald"
    assert [(p.lat, p.lon) for p in ingest([doc])] == [(48.0, 11.5)]


def test_load_undecodable_file_fails(tmp_path):
    path = tmp_path / "broken.gpx"
    path.write_bytes(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">'
        '<trk><name>Grünwald</name></trk></gpx>'.encode("iso-8859-1")
    )

    with pytest.raises(MalformedPointError, match="broken.gpx"):
        load_gpx(path)


def test_load_unknown_encoding_fails(tmp_path):
    path = tmp_path / "odd.gpx"
    path.write_bytes(b'<?xml version="1.0" encoding="no-such-codec"?><gpx version="1.1" creator="test"/>')

    with pytest.raises(MalformedPointError, match="odd.gpx"):
        load_gpx(path)
