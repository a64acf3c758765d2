import logging
from typing import Iterable, List, Optional

from gpstrips.core.point import GpsPoint
from gpstrips.core.trip import Trip
from gpstrips.metrics.distance import point_distance_km, EARTH_RADIUS_KM

logger = logging.getLogger(__name__)


def sort_points(points: Iterable[GpsPoint]) -> List[GpsPoint]:
    """
    Orders points by timestamp. The sort is stable, so points sharing a
    timestamp keep their input order.
    """
    return sorted(points, key=lambda p: p.timestamp)


class GapSegmenter:
    """
    Splits a chronologically sorted point stream into trips.

    Each point is compared with the point right before it. A time gap above
    max_time_gap_seconds or a jump above max_distance_km closes the current
    trip and starts a new one at that point. No point is ever discarded,
    single-point trips included.
    """

    def __init__(
        self,
        max_time_gap_seconds: float = 1500,
        max_distance_km: float = 2.0,
        earth_radius_km: float = EARTH_RADIUS_KM,
    ):
        """
        Args:
            max_time_gap_seconds: Time threshold between consecutive points.
            max_distance_km: Distance threshold between consecutive points.
            earth_radius_km: Sphere radius for the haversine distance.
        """
        self.max_time_gap_seconds = max_time_gap_seconds
        self.max_distance_km = max_distance_km
        self.earth_radius_km = earth_radius_km

        self.current: List[GpsPoint] = []

    def is_break(self, prev: GpsPoint, curr: GpsPoint) -> bool:
        time_gap = curr.timestamp - prev.timestamp
        if time_gap > self.max_time_gap_seconds:
            return True
        return point_distance_km(prev, curr, self.earth_radius_km) > self.max_distance_km

    def process_point(self, point: GpsPoint) -> Optional[Trip]:
        """
        Adds the next point. Returns the trip it closes, if any.
        """
        if not self.current:
            self.current = [point]
            return None

        prev = self.current[-1]
        if point.timestamp < prev.timestamp:
            raise ValueError("Points must be sorted by timestamp")

        if self.is_break(prev, point):
            finished = Trip(points=self.current)
            logger.debug("Closed trip with %d points ending at %d", len(finished), finished.end_time)
            self.current = [point]
            return finished

        self.current.append(point)
        return None

    def flush(self) -> Optional[Trip]:
        """
        Emits the trip still open at the end of the stream.
        """
        if not self.current:
            return None
        finished = Trip(points=self.current)
        self.current = []
        return finished

    def process(self, points: Iterable[GpsPoint]) -> List[Trip]:
        """
        Batch helper: segments an already sorted list of points.
        """
        # Drop anything left open by an earlier call that raised
        self.current = []
        trips = []
        for p in points:
            trip = self.process_point(p)
            if trip is not None:
                trips.append(trip)
        last = self.flush()
        if last is not None:
            trips.append(last)
        return trips
