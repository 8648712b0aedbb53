import datetime
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import geopandas as gpd
from pydantic import ValidationError
from shapely.geometry import LineString

from Function.log_cleanup import clean_old_logs
from Service.config import TopologyConfig
from Service.container import build_app
from Service.schemas import FileLoadRequest, FileSaveRequest, TopologyOptions
from main import _build_options, parse_args

from topology_helpers import collection, feature, make_logger


class TopologyServiceTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.app = build_app(make_logger(), TopologyConfig(diagnostics_enabled=False))
        self.service = self.app.topology_service

    def tearDown(self):
        self.tmp.cleanup()

    def _write_input(self):
        path = self.root / "squares.geojson"
        data = collection(
            feature("one", "LineString", [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]),
            feature("two", "LineString", [[1, 0], [2, 0], [2, 1], [1, 1], [1, 0]]),
            feature("three", "LineString", [[1, 1], [2, 1], [2, 2], [1, 2], [1, 1]]),
        )
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_build_filter_and_export(self):
        source = self._write_input()
        topo_path = self.root / "out" / "squares.topojson"

        saved = self.service.run_pipeline(str(source), TopologyOptions(), str(topo_path))
        built = json.loads(Path(saved).read_text(encoding="utf-8"))
        self.assertEqual(built["type"], "Topology")
        self.assertEqual(sorted(built["objects"]), ["one", "three", "two"])
        self.assertEqual(len(built["arcs"]), 6)

        filtered_path = self.service.filter_file(saved, ["one", "two"], str(self.root / "filtered.json"))
        filtered = json.loads(Path(filtered_path).read_text(encoding="utf-8"))
        self.assertEqual(sorted(filtered["objects"]), ["one", "two"])
        self.assertEqual(len(filtered["arcs"]), 5)

        geojson_path = self.service.export_geojson(filtered_path, str(self.root / "filtered.geojson"))
        exported = json.loads(Path(geojson_path).read_text(encoding="utf-8"))
        coordinates = {f["id"]: f["geometry"]["coordinates"] for f in exported["features"]}
        self.assertEqual(coordinates["one"], [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]])

    def test_quantized_build_writes_a_transform(self):
        source = self._write_input()
        saved = self.service.run_pipeline(
            str(source), TopologyOptions(post_quantize=1e4), str(self.root / "q.topojson")
        )
        built = json.loads(Path(saved).read_text(encoding="utf-8"))
        self.assertIn("transform", built)
        self.assertTrue(all(isinstance(v, int) for arc in built["arcs"] for p in arc for v in p))

    def test_geopackage_input_uses_id_property(self):
        path = self.root / "roads.gpkg"
        gdf = gpd.GeoDataFrame(
            {"name": ["a", "b"]},
            geometry=[LineString([(0, 0), (1, 0), (2, 0)]), LineString([(2, 0), (1, 0)])],
            crs="EPSG:4326",
        )
        gdf.to_file(path, driver="GPKG")

        saved = self.service.run_pipeline(str(path), TopologyOptions(id_property="name"), str(self.root / "r.json"))
        built = json.loads(Path(saved).read_text(encoding="utf-8"))
        self.assertEqual(built["objects"]["a"]["arcs"], [0, 1])
        self.assertEqual(built["objects"]["b"]["arcs"], [~1])

    def test_requests_are_validated(self):
        with self.assertRaises(ValidationError):
            FileLoadRequest(file_path=self.root / "missing.geojson")
        with self.assertRaises(ValidationError):
            FileLoadRequest(file_path=self.root / "input.csv")
        with self.assertRaises(ValidationError):
            FileSaveRequest(output_path=self.root / "out.geojson")

    def test_empty_collection_is_rejected(self):
        path = self.root / "empty.geojson"
        path.write_text(json.dumps(collection()), encoding="utf-8")
        with self.assertRaises(ValueError):
            self.service.run_pipeline(str(path), TopologyOptions(), str(self.root / "empty.topojson"))


class TopologyConfigTests(unittest.TestCase):
    def test_environment_overrides_defaults(self):
        with mock.patch.dict(os.environ, {"TOPO_SIMPLIFY": "2.5", "TOPO_ID_PROPERTY": "code"}):
            config = TopologyConfig()
        self.assertEqual(config.simplify, 2.5)
        options = TopologyOptions.from_config(config)
        self.assertEqual(options.simplify, 2.5)
        self.assertEqual(options.id_property, "code")

    def test_negative_values_are_rejected(self):
        with self.assertRaises(ValidationError):
            TopologyConfig(pre_quantize=-1)
        with self.assertRaises(ValidationError):
            TopologyOptions(simplify=-0.1)

    def test_quantize_resolution_of_one_or_less_is_rejected(self):
        for value in (1, 0.5):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    TopologyOptions(post_quantize=value)
                with self.assertRaises(ValidationError):
                    TopologyOptions(pre_quantize=value)
                with self.assertRaises(ValidationError):
                    TopologyConfig(pre_quantize=value)
                with self.assertRaises(ValidationError):
                    TopologyConfig(post_quantize=value)
        self.assertEqual(TopologyOptions(pre_quantize=0, post_quantize=2).post_quantize, 2)

    def test_command_line_values_override_config(self):
        args = parse_args(["build", "in.geojson", "--post-quantize", "1e4", "--id-property", "code"])
        options = _build_options(args, TopologyOptions(pre_quantize=1e6, simplify=1.0))
        self.assertEqual(options.pre_quantize, 1e6)
        self.assertEqual(options.post_quantize, 1e4)
        self.assertEqual(options.simplify, 1.0)
        self.assertEqual(options.id_property, "code")

    def test_filter_command_requires_ids(self):
        with self.assertRaises(SystemExit):
            parse_args(["filter", "in.topojson"])


class LogCleanupTests(unittest.TestCase):
    def test_only_expired_dated_logs_are_removed(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            today = datetime.datetime.now().strftime("%Y%m%d")
            for name in ("Log_20000101.log", f"Log_{today}.log", "Log_abcdefgh.log", "Log_99999999.log", "note.txt"):
                (root / name).write_text("", encoding="utf-8")

            removed = clean_old_logs(root, make_logger(), retention_days=3)

            self.assertEqual(removed, 1)
            self.assertEqual(
                sorted(p.name for p in root.iterdir()),
                sorted([f"Log_{today}.log", "Log_abcdefgh.log", "Log_99999999.log", "note.txt"]),
            )

    def test_missing_directory(self):
        self.assertEqual(clean_old_logs("/nonexistent/topology/logs", make_logger()), 0)


if __name__ == "__main__":
    unittest.main()
