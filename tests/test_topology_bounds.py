import unittest

from Service.gis_modules.topology.bounds import BoundsCalculator, iter_coordinates
from Service.gis_modules.topology.state import TopologyState

from topology_helpers import feature, geometry, make_logger, make_state


class BoundsCalculatorTests(unittest.TestCase):
    def setUp(self):
        self.bounds = BoundsCalculator(make_logger())

    def test_bbox_covers_all_lines(self):
        state = make_state(
            feature("foo", "LineString", [[0, 0], [1, 0], [2, 0]]),
            feature("bar", "LineString", [[-1, 0], [1, 0], [-2, 3]]),
        )
        self.assertEqual(self.bounds.execute(state), [-2, 0, 2, 3])
        self.assertEqual(state.bbox, [-2, 0, 2, 3])

    def test_points_and_polygons_contribute(self):
        state = make_state(
            feature("p", "Point", [5, -1]),
            feature("poly", "Polygon", [[[0, 0], [1, 0], [1, 1], [0, 0]]]),
        )
        self.assertEqual(self.bounds.execute(state), [0, -1, 5, 1])

    def test_collection_members_are_aggregated(self):
        state = make_state(
            feature("gc", "GeometryCollection", [
                geometry("LineString", [[0, 0], [1, 1]]),
                geometry("Point", [10, -4]),
            ]),
        )
        self.assertEqual(self.bounds.execute(state), [0, -4, 10, 1])

    def test_empty_input_leaves_bbox_unset(self):
        state = TopologyState.from_features([])
        self.assertIsNone(self.bounds.execute(state))
        self.assertIsNone(state.bbox)

    def test_iter_coordinates_keeps_declaration_order(self):
        state = make_state(feature("ml", "MultiLineString", [[[0, 0], [1, 0]], [[2, 2], [3, 3]]]))
        coords = list(iter_coordinates(state.input[0].geometry))
        self.assertEqual(coords, [(0.0, 0.0), (1.0, 0.0), (2.0, 2.0), (3.0, 3.0)])


if __name__ == "__main__":
    unittest.main()
