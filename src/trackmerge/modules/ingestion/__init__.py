from .gpx import ingest, load_gpx, to_point
