from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict

import networkx as nx

from Service.gis_modules.topology.codec import decode_topology
from Service.gis_modules.topology.diagnostics import iter_arc_references
from Service.gis_modules.topology.geojson import decode_arc
from Service.gis_modules.topology.model import Topology


def build_graph(topology: Topology) -> nx.MultiGraph:
    graph = nx.MultiGraph()
    for index, arc in enumerate(topology.arcs):
        coords = decode_arc(arc, topology.transform)
        if not coords:
            continue
        graph.add_edge(tuple(coords[0]), tuple(coords[-1]), key=index)
    return graph


def evaluate(topology: Topology, thresholds: Dict[str, Any]) -> Dict[str, Any]:
    references: Counter = Counter()
    for geometry in topology.objects.values():
        references.update(iter_arc_references(geometry))

    arc_count = len(topology.arcs)
    shared_count = sum(1 for count in references.values() if count > 1)
    graph = build_graph(topology)

    metrics = {
        "object_count": len(topology.objects),
        "arc_count": arc_count,
        "point_count": sum(len(arc) for arc in topology.arcs),
        "shared_arc_count": shared_count,
        "shared_ratio": 0.0 if arc_count == 0 else shared_count / arc_count,
        "unreferenced_arc_count": arc_count - len(references),
        "component_count": nx.number_connected_components(graph) if graph.number_of_nodes() else 0,
    }

    checks = {
        "min_objects": metrics["object_count"] >= int(thresholds.get("min_objects", 0)),
        "max_arcs": metrics["arc_count"] <= int(thresholds.get("max_arcs", 10 ** 9)),
        "max_points": metrics["point_count"] <= int(thresholds.get("max_points", 10 ** 12)),
        "min_shared_ratio": metrics["shared_ratio"] >= float(thresholds.get("min_shared_ratio", 0.0)),
        "no_unreferenced_arcs": (not thresholds.get("forbid_unreferenced", True)) or metrics["unreferenced_arc_count"] == 0,
        "max_components": metrics["component_count"] <= int(thresholds.get("max_components", 10 ** 9)),
    }

    return {"metrics": metrics, "checks": checks, "passed": all(checks.values())}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate topology metrics and pass/fail gates.")
    parser.add_argument("--topology", required=True, help="Topology JSON path")
    parser.add_argument("--thresholds", required=False, help="JSON file for threshold configuration")
    parser.add_argument("--output", required=False, help="Optional output JSON path")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    topology = decode_topology(json.loads(Path(args.topology).read_text(encoding="utf-8")))
    thresholds = json.loads(Path(args.thresholds).read_text(encoding="utf-8")) if args.thresholds else {}

    result = evaluate(topology, thresholds)
    print(json.dumps(result, ensure_ascii=False, indent=2))

    if args.output:
        Path(args.output).write_text(json.dumps(result, ensure_ascii=False, indent=2), encoding="utf-8")

    return 0 if result["passed"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
