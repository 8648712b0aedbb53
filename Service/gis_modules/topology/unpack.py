"""
Service/gis_modules/topology/unpack.py

유일 아크를 좌표 배열로 꺼내고, 객체 트리의 아크 서술자를 부호 있는 아크 인덱스로 바꾸는 모듈입니다.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from Common.log import Log

from .model import (
    ArcSlice,
    Geometry,
    TopologyObject,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)
from .state import TopologyState


class ArcUnpacker:
    """
    dedup 결과 순서대로 coordinates[start..end] 를 잘라 아크 배열을 만들고
    (start, end) -> 아크 위치 색인을 구성합니다. 이후 좌표 버퍼는 해제됩니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> None:
        coordinates = state.coordinates
        state.arcs = []
        state.arc_indexes = {}

        for i, arc in enumerate(state.unique_arcs):
            state.arc_indexes[(arc.start, arc.end)] = i
            state.arcs.append(list(coordinates[arc.start:arc.end + 1]))

        state.coordinates = []
        state.unique_arcs = []

        self._logger.log(f"[Topology:UnpackArcs] 아크 {len(state.arcs)}개 생성", level="INFO")


class ObjectUnpacker:
    """
    객체 트리를 출력 Geometry 트리로 변환합니다.

    삭제된 아크는 건너뛰고, 남은 아크는 shift 만큼 앞당긴 인덱스로 참조합니다.
    start < end 인 서술자만 정방향이며, 나머지(한 점 아크 포함)는 ~index 로 기록합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger
        self._state: Optional[TopologyState] = None

    def execute(self, state: TopologyState) -> Dict[str, Geometry]:
        self._state = state
        try:
            output: Dict[str, Geometry] = {}
            for obj in state.objects:
                geometry = self._unpack(obj)
                output[geometry.id] = geometry
        finally:
            self._state = None

        state.output = output
        state.objects = []
        state.arc_indexes = {}
        state.deleted = []
        state.shift = []

        self._logger.log(f"[Topology:UnpackObjects] 객체 {len(output)}개 변환 완료", level="INFO")
        return output

    def _unpack(self, obj: TopologyObject) -> Geometry:
        geometry = Geometry(type=obj.type, id=obj.id, properties=obj.properties, bbox=obj.bbox)

        if obj.type == GEOMETRY_COLLECTION:
            geometry.geometries = [self._unpack(child) for child in obj.geometries]
        elif obj.type == POINT:
            geometry.coordinates = list(obj.point)
        elif obj.type == MULTI_POINT:
            geometry.coordinates = [list(p) for p in obj.multi_point]
        elif obj.type == LINE_STRING:
            geometry.arcs = self._lookup_chain(obj.arc)
        elif obj.type in (MULTI_LINE_STRING, POLYGON):
            geometry.arcs = [self._lookup_chain(arc) for arc in obj.arcs]
        elif obj.type == MULTI_POLYGON:
            geometry.arcs = [[self._lookup_chain(arc) for arc in polygon] for polygon in obj.multi_arcs]

        return geometry

    def _lookup_chain(self, arc: Optional[ArcSlice]) -> List[int]:
        state = self._state
        result: List[int] = []
        if arc is None:
            return result

        for node in arc.chain():
            if node.start < node.end:
                index = state.arc_indexes[(node.start, node.end)]
                if not state.deleted[index]:
                    result.append(index - state.shift[index])
            else:
                index = state.arc_indexes[(node.end, node.start)]
                if not state.deleted[index]:
                    result.append(~(index - state.shift[index]))
        return result
