import unittest

from Service.gis_modules.topology.filter import TopologyFilter, filter_topology
from Service.gis_modules.topology.geojson import to_geojson
from Service.gis_modules.topology.model import Geometry, Topology, Transform
from Service.gis_modules.topology.processor import build_processor
from Service.config import TopologyConfig
from Service.schemas import TopologyOptions

from topology_helpers import collection, feature, make_logger

ONE = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
TWO = [[1, 0], [2, 0], [2, 1], [1, 1], [1, 0]]
THREE = [[1, 1], [2, 1], [2, 2], [1, 2], [1, 1]]


class FilterTopologyTests(unittest.TestCase):
    def setUp(self):
        processor = build_processor(make_logger(), TopologyConfig(diagnostics_enabled=False))
        self.topology = processor.execute(
            collection(
                feature("one", "LineString", ONE),
                feature("two", "LineString", TWO),
                feature("three", "LineString", THREE),
            ),
            TopologyOptions(),
        )

    def test_unreferenced_arcs_are_dropped(self):
        self.assertEqual(len(self.topology.arcs), 6)
        self.assertEqual(self.topology.objects["one"].arcs, [0, 1, 2])
        self.assertEqual(self.topology.objects["two"].arcs, [3, 4, ~1])
        self.assertEqual(self.topology.objects["three"].arcs, [~4, 5])

        filtered = TopologyFilter(make_logger()).execute(self.topology, ["one", "two"])

        self.assertEqual(sorted(filtered.objects), ["one", "two"])
        self.assertEqual(len(filtered.arcs), 5)

    def test_filtered_topology_decodes_to_the_original_coordinates(self):
        filtered = filter_topology(self.topology, ["one", "two"])
        expected = {"one": ONE, "two": TWO}

        features = to_geojson(filtered)["features"]
        self.assertEqual(len(features), 2)
        for item in features:
            self.assertEqual(item["geometry"]["coordinates"], expected[item["id"]])

    def test_arcs_are_renumbered_in_first_use_order(self):
        filtered = filter_topology(self.topology, ["three"])
        self.assertEqual(filtered.objects["three"].arcs, [~0, 1])
        self.assertEqual(filtered.arcs, [self.topology.arcs[4], self.topology.arcs[5]])

    def test_source_topology_is_not_shared(self):
        filtered = filter_topology(self.topology, ["one"])
        filtered.arcs[0][0][0] = 99
        filtered.objects["one"].arcs.append(7)

        self.assertEqual(self.topology.arcs[0][0], [0, 0])
        self.assertEqual(self.topology.objects["one"].arcs, [0, 1, 2])

    def test_unknown_ids_give_an_empty_topology(self):
        filtered = filter_topology(self.topology, ["missing"])
        self.assertEqual(filtered.objects, {})
        self.assertEqual(filtered.arcs, [])


class FilterCollectionTests(unittest.TestCase):
    def setUp(self):
        self.topology = Topology(
            bbox=[0, 0, 10, 10],
            transform=Transform(scale=[0.1, 0.1], translate=[0, 0]),
            objects={
                "group": Geometry(type="GeometryCollection", id="group", geometries=[
                    Geometry(type="LineString", arcs=[2]),
                    Geometry(type="LineString", id="named", arcs=[~0]),
                    Geometry(type="Point", id="other", coordinates=[1, 1]),
                ]),
            },
            arcs=[[[0, 0], [1, 0]], [[5, 5], [1, 1]], [[3, 3], [0, 1]]],
        )

    def test_unnamed_members_follow_the_collection(self):
        filtered = filter_topology(self.topology, ["group"])
        members = filtered.objects["group"].geometries
        self.assertEqual(len(members), 1)
        self.assertEqual(members[0].arcs, [0])
        self.assertEqual(filtered.arcs, [[[3, 3], [0, 1]]])

    def test_named_members_must_be_selected(self):
        filtered = filter_topology(self.topology, ["group", "named"])
        members = filtered.objects["group"].geometries
        self.assertEqual([m.id for m in members], ["", "named"])
        self.assertEqual(members[1].arcs, [~1])
        self.assertEqual(filtered.arcs, [[[3, 3], [0, 1]], [[0, 0], [1, 0]]])

    def test_bbox_and_transform_are_copied(self):
        filtered = filter_topology(self.topology, ["group"])
        self.assertEqual(filtered.bbox, [0, 0, 10, 10])
        self.assertEqual(filtered.transform, self.topology.transform)
        self.assertIsNot(filtered.transform.scale, self.topology.transform.scale)


if __name__ == "__main__":
    unittest.main()
