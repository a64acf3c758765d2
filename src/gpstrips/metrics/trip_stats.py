from dataclasses import dataclass

from gpstrips.core.trip import Trip
from gpstrips.metrics.distance import point_distance_km, EARTH_RADIUS_KM

SECONDS_PER_HOUR = 3600.0

@dataclass(frozen=True)
class TripStats:
    total_distance_km: float
    duration_s: int
    avg_speed_kmh: float
    max_speed_kmh: float
    point_count: int

    @property
    def duration_min(self) -> float:
        return self.duration_s / 60.0

def calculate_trip_stats(trip: Trip, earth_radius_km: float = EARTH_RADIUS_KM) -> TripStats:
    """
    Computes distance, duration and speed figures for a trip.

    Speeds are km/h. The maximum speed only considers consecutive pairs with
    a positive time difference; the average is 0 for zero-duration trips.
    Values are not rounded.

    Args:
        trip: A trip with at least two points.
        earth_radius_km: Sphere radius passed to the distance function.

    Returns:
        TripStats for the trip.
    """
    points = trip.points
    if len(points) < 2:
        raise ValueError("Trip statistics need at least two points")

    total_distance = 0.0
    max_speed = 0.0
    for p1, p2 in zip(points, points[1:]):
        distance = point_distance_km(p1, p2, earth_radius_km)
        total_distance += distance

        time_diff = p2.timestamp - p1.timestamp
        if time_diff > 0:
            speed = distance / (time_diff / SECONDS_PER_HOUR)
            if speed > max_speed:
                max_speed = speed

    duration = points[-1].timestamp - points[0].timestamp
    avg_speed = total_distance / (duration / SECONDS_PER_HOUR) if duration > 0 else 0.0

    return TripStats(
        total_distance_km=total_distance,
        duration_s=duration,
        avg_speed_kmh=avg_speed,
        max_speed_kmh=max_speed,
        point_count=len(points),
    )
