"""
Service/gis_modules/topology/diagnostics.py

빌드된 토폴로지의 아크 공유 정도와 연결 구조를 분석하여 로그로 출력하는 진단 모듈입니다.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import networkx as nx
import pandas as pd

from Common.log import Log

from .geojson import decode_arc
from .model import Geometry, Topology, GEOMETRY_COLLECTION, MULTI_POLYGON, LINE_STRING


@dataclass(frozen=True)
class TopologyDiagnosticsPolicy:
    """진단 출력 범위를 제한하는 설정입니다."""
    top_n_shared: int = 5
    max_arcs_for_graph: int = 200000


def iter_arc_references(geometry: Geometry) -> Iterator[int]:
    """geometry 가 참조하는 모든 아크 번호(부호 제거)를 내보냅니다."""
    if geometry.type == GEOMETRY_COLLECTION:
        for child in geometry.geometries or []:
            yield from iter_arc_references(child)
        return

    if geometry.arcs is None:
        return

    if geometry.type == LINE_STRING:
        groups: List[List[int]] = [geometry.arcs]
    elif geometry.type == MULTI_POLYGON:
        groups = [ring for polygon in geometry.arcs for ring in polygon]
    else:
        groups = geometry.arcs

    for group in groups:
        for signed in group:
            yield ~signed if signed < 0 else signed


class TopologyDiagnostics:
    """
    아크 끝점을 노드로, 아크를 간선으로 하는 그래프를 만들어 차수/연결 요약과
    아크 길이(점 수) 분포, 공유 아크 현황을 기록합니다.
    """

    def __init__(self, logger: Log, policy: Optional[TopologyDiagnosticsPolicy] = None):
        self._logger = logger
        self._policy = policy or TopologyDiagnosticsPolicy()

    def report(self, topology: Topology) -> Dict[str, Any]:
        if not topology.arcs:
            self._logger.log("[Topology:Diag] 분석할 아크가 없습니다.", level="WARNING")
            return {}

        summary: Dict[str, Any] = {}
        summary.update(self._log_reference_summary(topology))
        summary.update(self._log_arc_length_summary(topology))

        if len(topology.arcs) > self._policy.max_arcs_for_graph:
            self._logger.log(
                f"[Topology:Diag] 아크 과다로 그래프 분석 생략 (최대 {self._policy.max_arcs_for_graph}개 허용)",
                level="WARNING",
            )
            return summary

        summary.update(self._log_graph_summary(self.build_graph(topology)))
        return summary

    def build_graph(self, topology: Topology) -> nx.MultiGraph:
        """아크 양 끝점(복원 좌표)을 노드로 하는 멀티그래프를 구성합니다."""
        graph = nx.MultiGraph()
        for index, arc in enumerate(topology.arcs):
            coords = decode_arc(arc, topology.transform)
            if not coords:
                continue
            u = tuple(coords[0])
            v = tuple(coords[-1])
            graph.add_edge(u, v, key=index, points=len(coords))
        return graph

    def _log_graph_summary(self, graph: nx.MultiGraph) -> Dict[str, Any]:
        degrees = [d for _, d in graph.degree()]
        d1 = degrees.count(1)
        d2 = degrees.count(2)
        d3p = sum(1 for d in degrees if d >= 3)
        components = nx.number_connected_components(graph) if graph.number_of_nodes() else 0

        self._logger.log(
            f"[Topology:Diag][Graph] 노드={graph.number_of_nodes()} 간선={graph.number_of_edges()} "
            f"그룹={components} 단말(D1)={d1} 통과(D2)={d2} 교차(D3+)={d3p}",
            level="INFO",
        )
        return {"nodes": graph.number_of_nodes(), "edges": graph.number_of_edges(), "components": components}

    def _log_arc_length_summary(self, topology: Topology) -> Dict[str, Any]:
        """아크별 점 개수에 대한 백분위수 분포를 기록합니다."""
        lengths = pd.Series([len(arc) for arc in topology.arcs], dtype="int64")
        desc = lengths.describe(percentiles=[0.1, 0.5, 0.9, 0.99]).to_dict()
        self._logger.log(
            "[Topology:Diag][ArcPoints] "
            + " ".join([f"{k}={float(v):.2f}" for k, v in desc.items() if k != "count"]),
            level="INFO",
        )
        return {"arc_points_mean": float(desc.get("mean", 0.0)), "arc_points_max": float(desc.get("max", 0.0))}

    def _log_reference_summary(self, topology: Topology) -> Dict[str, Any]:
        """두 번 이상 참조되는 공유 아크 수와 상위 공유 아크를 기록합니다."""
        counts: Counter = Counter()
        for geometry in topology.objects.values():
            counts.update(iter_arc_references(geometry))

        shared = [index for index, count in counts.items() if count > 1]
        unused = len(topology.arcs) - len(counts)
        ratio = len(shared) / len(topology.arcs)

        self._logger.log(
            f"[Topology:Diag][Shared] 아크={len(topology.arcs)} 공유={len(shared)} "
            f"비율={ratio:.3f} 미참조={unused}",
            level="INFO",
        )

        for index, count in counts.most_common(self._policy.top_n_shared):
            if count <= 1:
                break
            self._logger.log(f"[Topology:Diag][SharedTop] 아크={index} 참조={count}", level="DEBUG")

        return {"shared_arcs": len(shared), "shared_ratio": ratio, "unused_arcs": unused}
