import unittest
from gpstrips.core.point import GpsPoint
from gpstrips.modules.segmentation import GapSegmenter, sort_points

class TestGapSegmenter(unittest.TestCase):
    def setUp(self):
        self.segmenter = GapSegmenter(max_time_gap_seconds=1500, max_distance_km=2.0)

    def create_point(self, t, lat=45.0, lon=-73.0, device_id="dev1"):
        return GpsPoint(device_id=device_id, lat=lat, lon=lon, timestamp=t)

    def test_empty_input(self):
        self.assertEqual(self.segmenter.process([]), [])

    def test_single_point(self):
        trips = self.segmenter.process([self.create_point(0)])
        self.assertEqual(len(trips), 1)
        self.assertEqual(trips[0].point_count, 1)

    def test_time_gap_splits(self):
        # 2000 - 100 = 1900 s > 1500 s
        points = [self.create_point(0), self.create_point(100), self.create_point(2000)]
        trips = self.segmenter.process(points)

        self.assertEqual(len(trips), 2)
        self.assertEqual([p.timestamp for p in trips[0].points], [0, 100])
        self.assertEqual([p.timestamp for p in trips[1].points], [2000])

    def test_gap_equal_to_threshold_does_not_split(self):
        points = [self.create_point(0), self.create_point(1500), self.create_point(3000)]
        trips = self.segmenter.process(points)
        self.assertEqual(len(trips), 1)
        self.assertEqual(trips[0].point_count, 3)

    def test_distance_jump_splits(self):
        # 0.01 deg of latitude is ~1.11 km, 0.03 deg is ~3.34 km
        points = [
            self.create_point(0, lat=45.00),
            self.create_point(60, lat=45.01),
            self.create_point(120, lat=45.04),
            self.create_point(180, lat=45.05),
        ]
        trips = self.segmenter.process(points)
        self.assertEqual([t.point_count for t in trips], [2, 2])
        self.assertEqual(trips[1].points[0].lat, 45.04)

    def test_compares_with_previous_point_not_trip_start(self):
        # Each step is ~1.11 km, the whole walk is ~5.5 km from the start
        points = [self.create_point(i * 60, lat=45.0 + 0.01 * i) for i in range(6)]
        trips = self.segmenter.process(points)
        self.assertEqual(len(trips), 1)
        self.assertEqual(trips[0].point_count, 6)

    def test_continuous_stream_is_one_trip(self):
        points = [self.create_point(i * 600, lat=45.0 + 0.001 * i) for i in range(20)]
        trips = self.segmenter.process(points)
        self.assertEqual(len(trips), 1)
        self.assertEqual(list(trips[0].points), points)

    def test_every_point_kept_in_order(self):
        points = [
            self.create_point(0), self.create_point(5000), self.create_point(5100),
            self.create_point(9000), self.create_point(9060, lat=46.0), self.create_point(9120, lat=46.0),
        ]
        trips = self.segmenter.process(points)
        flattened = [p for t in trips for p in t.points]
        self.assertEqual(flattened, points)
        self.assertEqual([t.point_count for t in trips], [1, 2, 1, 2])

    def test_streaming_interface(self):
        self.assertIsNone(self.segmenter.process_point(self.create_point(0)))
        self.assertIsNone(self.segmenter.process_point(self.create_point(60)))
        closed = self.segmenter.process_point(self.create_point(5000))
        self.assertIsNotNone(closed)
        self.assertEqual(closed.point_count, 2)

        last = self.segmenter.flush()
        self.assertEqual(last.point_count, 1)
        self.assertIsNone(self.segmenter.flush())

    def test_unsorted_input_raises(self):
        with self.assertRaises(ValueError):
            self.segmenter.process([self.create_point(100), self.create_point(0)])

    def test_process_recovers_after_unsorted_input(self):
        with self.assertRaises(ValueError):
            self.segmenter.process([self.create_point(100), self.create_point(0)])
        trips = self.segmenter.process([self.create_point(5000), self.create_point(5001)])
        self.assertEqual([[p.timestamp for p in t.points] for t in trips], [[5000, 5001]])

    def test_custom_thresholds(self):
        segmenter = GapSegmenter(max_time_gap_seconds=60, max_distance_km=100.0)
        points = [self.create_point(0), self.create_point(60), self.create_point(121)]
        self.assertEqual([t.point_count for t in segmenter.process(points)], [2, 1])


class TestSortPoints(unittest.TestCase):
    def test_sorts_by_timestamp(self):
        points = [
            GpsPoint(device_id="a", lat=0.0, lon=0.0, timestamp=300),
            GpsPoint(device_id="b", lat=0.0, lon=0.0, timestamp=100),
            GpsPoint(device_id="c", lat=0.0, lon=0.0, timestamp=200),
        ]
        self.assertEqual([p.device_id for p in sort_points(points)], ["b", "c", "a"])

    def test_stable_for_equal_timestamps(self):
        points = [
            GpsPoint(device_id="first", lat=1.0, lon=0.0, timestamp=100),
            GpsPoint(device_id="early", lat=2.0, lon=0.0, timestamp=50),
            GpsPoint(device_id="second", lat=3.0, lon=0.0, timestamp=100),
        ]
        self.assertEqual([p.device_id for p in sort_points(points)], ["early", "first", "second"])

    def test_idempotent(self):
        points = [GpsPoint(device_id=str(i), lat=0.0, lon=0.0, timestamp=t)
                  for i, t in enumerate([5, 1, 5, 3, 1])]
        once = sort_points(points)
        self.assertEqual(sort_points(once), once)

if __name__ == '__main__':
    unittest.main()
