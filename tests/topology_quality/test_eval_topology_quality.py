import ast
from pathlib import Path
import unittest

from Service.gis_modules.topology.model import Geometry, Topology
from tools.eval_topology import evaluate


class TopologyQualityRegressionWiringTests(unittest.TestCase):
    def setUp(self):
        self.src = Path("tools/eval_topology.py").read_text(encoding="utf-8")
        self.module = ast.parse(self.src)

    def test_quality_metrics_are_defined(self):
        required_keys = [
            '"object_count"',
            '"arc_count"',
            '"point_count"',
            '"shared_arc_count"',
            '"shared_ratio"',
            '"unreferenced_arc_count"',
            '"component_count"',
        ]
        for key in required_keys:
            self.assertIn(key, self.src)

    def test_gate_checks_are_defined(self):
        required_checks = [
            '"min_objects"',
            '"max_arcs"',
            '"max_points"',
            '"min_shared_ratio"',
            '"no_unreferenced_arcs"',
            '"max_components"',
            '"passed": all(checks.values())',
        ]
        for key in required_checks:
            self.assertIn(key, self.src)


class TopologyQualityGateTests(unittest.TestCase):
    def setUp(self):
        self.topology = Topology(
            objects={
                "a": Geometry(type="LineString", id="a", arcs=[0, 1]),
                "b": Geometry(type="LineString", id="b", arcs=[~1]),
            },
            arcs=[[[0, 0], [1, 0]], [[1, 0], [2, 0]], [[5, 5], [6, 6]]],
        )

    def test_metrics(self):
        metrics = evaluate(self.topology, {})["metrics"]
        self.assertEqual(metrics["arc_count"], 3)
        self.assertEqual(metrics["point_count"], 6)
        self.assertEqual(metrics["shared_arc_count"], 1)
        self.assertEqual(metrics["unreferenced_arc_count"], 1)
        self.assertEqual(metrics["component_count"], 2)

    def test_unreferenced_arcs_fail_the_gate_by_default(self):
        result = evaluate(self.topology, {})
        self.assertFalse(result["checks"]["no_unreferenced_arcs"])
        self.assertFalse(result["passed"])

        result = evaluate(self.topology, {"forbid_unreferenced": False})
        self.assertTrue(result["passed"])


if __name__ == "__main__":
    unittest.main()
