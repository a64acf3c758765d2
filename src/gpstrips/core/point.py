from dataclasses import dataclass

@dataclass(frozen=True)
class GpsPoint:
    """
    Represents a single validated GPS fix.
    timestamp is whole epoch seconds (UTC).
    """
    device_id: str
    lat: float
    lon: float
    timestamp: int

    @property
    def coordinates(self) -> tuple[float, float]:
        """(lon, lat) order, as used by GeoJSON."""
        return (self.lon, self.lat)
