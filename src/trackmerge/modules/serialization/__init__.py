from .gpx_writer import serialize, format_time, GPX_NS
