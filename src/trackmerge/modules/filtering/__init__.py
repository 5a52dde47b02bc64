from .point_filter import filter_points
