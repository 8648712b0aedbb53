"""
Service/gis_modules/topology/filter.py

완성된 토폴로지에서 지정한 id 의 객체와 그 객체들이 참조하는 아크만 남기는 모듈입니다.
아크 인덱스는 처음 만난 순서대로 0 부터 다시 매겨집니다.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, Iterable, List, Set

from Common.log import Log

from .model import (
    Geometry,
    Topology,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POLYGON,
    POLYGON,
)


def filter_topology(topology: Topology, ids: Iterable[str]) -> Topology:
    selected: Set[str] = set(ids)
    arc_map: Dict[int, int] = {}

    result = Topology(
        type=topology.type,
        bbox=list(topology.bbox) if topology.bbox is not None else None,
        transform=dataclasses.replace(
            topology.transform,
            scale=list(topology.transform.scale),
            translate=list(topology.transform.translate),
        ) if topology.transform is not None else None,
    )

    for key, geometry in topology.objects.items():
        if geometry.id not in selected and key not in selected:
            continue
        result.objects[key] = _remap_geometry(arc_map, selected, geometry)

    arcs: List[Any] = [None] * len(arc_map)
    for old_index, new_index in arc_map.items():
        arcs[new_index] = copy.deepcopy(topology.arcs[old_index])
    result.arcs = arcs

    return result


def _remap_geometry(arc_map: Dict[int, int], selected: Set[str], geometry: Geometry) -> Geometry:
    remapped = Geometry(
        type=geometry.type,
        id=geometry.id,
        properties=geometry.properties,
        bbox=geometry.bbox,
        coordinates=copy.deepcopy(geometry.coordinates),
    )

    gtype = geometry.type
    if gtype == GEOMETRY_COLLECTION:
        # 이름 없는 구성원은 선택된 컬렉션을 따르고, 이름 있는 구성원은 선택 목록으로 판정
        remapped.geometries = [
            _remap_geometry(arc_map, selected, child)
            for child in geometry.geometries or []
            if not child.id or child.id in selected
        ]
    elif gtype == LINE_STRING:
        remapped.arcs = _remap_line(arc_map, geometry.arcs or [])
    elif gtype in (MULTI_LINE_STRING, POLYGON):
        remapped.arcs = [_remap_line(arc_map, line) for line in geometry.arcs or []]
    elif gtype == MULTI_POLYGON:
        remapped.arcs = [[_remap_line(arc_map, ring) for ring in polygon] for polygon in geometry.arcs or []]

    return remapped


def _remap_line(arc_map: Dict[int, int], line: List[int]) -> List[int]:
    out: List[int] = []
    for arc in line:
        reverse = arc < 0
        index = ~arc if reverse else arc
        new_index = arc_map.setdefault(index, len(arc_map))
        out.append(~new_index if reverse else new_index)
    return out


class TopologyFilter:
    """
    filter_topology 를 실행하고 아크 수 변화를 기록합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, topology: Topology, ids: Iterable[str]) -> Topology:
        id_list = list(ids)
        result = filter_topology(topology, id_list)
        self._logger.log(
            f"[Topology:Filter] 필터 완료: 객체 {len(topology.objects)}→{len(result.objects)}개, "
            f"아크 {len(topology.arcs)}→{len(result.arcs)}개",
            level="INFO",
        )
        return result
