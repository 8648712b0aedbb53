"""
Service/gis_modules/topology/cleaners.py

단순화 이후 아크 목록이 비게 된 geometry 를 아래에서 위로 정리하는 모듈입니다.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from Common.log import Log

from .model import (
    Geometry,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POLYGON,
    POLYGON,
)
from .state import TopologyState


class EmptyGeometryCleaner:
    """
    빈 LineString/Polygon 을 제거하고, 구성원이 하나만 남은 Multi 타입은 단일 타입으로 낮춥니다.
    하위 geometry 가 모두 사라진 컬렉션도 제거합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> Dict[str, Geometry]:
        before = len(state.output)
        cleaned: Dict[str, Geometry] = {}
        for geometry in state.output.values():
            result = self.clean(geometry)
            if result is not None:
                cleaned[result.id] = result
        state.output = cleaned

        removed = before - len(cleaned)
        if removed:
            self._logger.log(f"[Topology:RemoveEmpty] 빈 객체 {removed}개 제거", level="INFO")
        return cleaned

    def clean(self, geometry: Geometry) -> Optional[Geometry]:
        """정리된 geometry 를 반환합니다. 전부 비었으면 None."""
        gtype = geometry.type

        if gtype == GEOMETRY_COLLECTION:
            children = [self.clean(child) for child in geometry.geometries or []]
            children = [child for child in children if child is not None]
            if not children:
                return None
            geometry.geometries = children

        elif gtype == LINE_STRING:
            if not geometry.arcs:
                return None

        elif gtype == MULTI_LINE_STRING:
            lines = [line for line in geometry.arcs or [] if line]
            if not lines:
                return None
            if len(lines) == 1:
                geometry.type = LINE_STRING
                geometry.arcs = lines[0]
            else:
                geometry.arcs = lines

        elif gtype == POLYGON:
            rings = self._clean_polygon(geometry.arcs or [])
            if rings is None:
                return None
            geometry.arcs = rings

        elif gtype == MULTI_POLYGON:
            polygons = [self._clean_polygon(polygon) for polygon in geometry.arcs or []]
            polygons = [polygon for polygon in polygons if polygon is not None]
            if not polygons:
                return None
            if len(polygons) == 1:
                geometry.type = POLYGON
                geometry.arcs = polygons[0]
            else:
                geometry.arcs = polygons

        return geometry

    def _clean_polygon(self, polygon: List[List[int]]) -> Optional[List[List[int]]]:
        """외곽 링이 비었으면 None, 아니면 빈 내부 링만 제거한 링 목록."""
        if not polygon or not polygon[0]:
            return None
        return [ring for ring in polygon if ring]
