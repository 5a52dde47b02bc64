import math

EARTH_RADIUS_M = 6370000.0

def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle surface distance in meters between two coordinates, using the
    haversine formula on a sphere of radius EARTH_RADIUS_M.

    Args:
        lat1, lon1: First coordinate in decimal degrees.
        lat2, lon2: Second coordinate in decimal degrees.

    Returns:
        Distance in meters. Equal coordinates yield 0.0.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # Rounding can push a marginally above 1 for antipodal points
    a = min(1.0, a)
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(a))
