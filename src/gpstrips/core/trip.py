from dataclasses import dataclass, field
from .point import GpsPoint

@dataclass(frozen=True)
class Trip:
    """
    A run of chronologically consecutive points with no time gap or
    distance jump above the segmentation thresholds.
    """
    points: tuple[GpsPoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def start_time(self) -> int:
        if not self.points:
            raise ValueError("Trip is empty")
        return self.points[0].timestamp

    @property
    def end_time(self) -> int:
        if not self.points:
            raise ValueError("Trip is empty")
        return self.points[-1].timestamp

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        return [p.coordinates for p in self.points]

    @property
    def device_ids(self) -> list[str]:
        return sorted({p.device_id for p in self.points})
