from .distance import distance_km, point_distance_km, EARTH_RADIUS_KM
from .trip_stats import TripStats, calculate_trip_stats

__all__ = [
    "distance_km",
    "point_distance_km",
    "EARTH_RADIUS_KM",
    "TripStats",
    "calculate_trip_stats",
]
