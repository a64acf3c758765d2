import unittest
from gpstrips.core.point import GpsPoint
from gpstrips.metrics import distance_km, point_distance_km

class TestHaversineDistance(unittest.TestCase):
    def test_identical_coordinates(self):
        self.assertEqual(distance_km(45.5, -73.6, 45.5, -73.6), 0.0)
        self.assertEqual(distance_km(0.0, 0.0, 0.0, 0.0), 0.0)

    def test_one_degree_longitude_at_equator(self):
        # 6371 * pi / 180 = 111.1949...
        self.assertAlmostEqual(distance_km(0, 0, 0, 1), 111.19, delta=0.01)

    def test_one_degree_latitude(self):
        self.assertAlmostEqual(distance_km(10, 20, 11, 20), 111.19, delta=0.01)

    def test_symmetry(self):
        pairs = [
            ((45.5017, -73.5673), (43.6532, -79.3832)),
            ((-33.8688, 151.2093), (51.5074, -0.1278)),
            ((89.9, 0.0), (-89.9, 180.0)),
            ((0.0, 179.9), (0.0, -179.9)),
        ]
        for (lat1, lon1), (lat2, lon2) in pairs:
            d1 = distance_km(lat1, lon1, lat2, lon2)
            d2 = distance_km(lat2, lon2, lat1, lon1)
            self.assertAlmostEqual(d1, d2, delta=1e-9)
            self.assertGreaterEqual(d1, 0.0)

    def test_antimeridian_is_short(self):
        # 0.2 degrees of longitude across the antimeridian, not 359.8
        self.assertAlmostEqual(distance_km(0.0, 179.9, 0.0, -179.9), 22.24, delta=0.01)

    def test_antipodal_points(self):
        # Half the circumference
        self.assertAlmostEqual(distance_km(0, 0, 0, 180), 20015.09, delta=0.01)

    def test_custom_radius(self):
        self.assertAlmostEqual(distance_km(0, 0, 0, 1, earth_radius_km=1.0), 0.017453, places=5)

    def test_point_distance(self):
        p1 = GpsPoint(device_id="a", lat=0.0, lon=0.0, timestamp=0)
        p2 = GpsPoint(device_id="b", lat=0.0, lon=1.0, timestamp=60)
        self.assertEqual(point_distance_km(p1, p2), distance_km(0.0, 0.0, 0.0, 1.0))

if __name__ == '__main__':
    unittest.main()
