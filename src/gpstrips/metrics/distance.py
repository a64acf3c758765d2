import math

from gpstrips.core.point import GpsPoint

EARTH_RADIUS_KM = 6371.0

def distance_km(lat1: float, lon1: float, lat2: float, lon2: float,
                earth_radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Great-circle distance in kilometres using the haversine formula.

    Args:
        lat1, lon1: First coordinate in degrees.
        lat2, lon2: Second coordinate in degrees.
        earth_radius_km: Sphere radius.

    Returns:
        Non-negative distance. 0.0 for identical coordinates.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lon2) - math.radians(lon1)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    return 2.0 * earth_radius_km * math.asin(math.sqrt(h))

def point_distance_km(p1: GpsPoint, p2: GpsPoint, earth_radius_km: float = EARTH_RADIUS_KM) -> float:
    return distance_km(p1.lat, p1.lon, p2.lat, p2.lon, earth_radius_km)
