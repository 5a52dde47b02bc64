from .distance import distance, EARTH_RADIUS_M
