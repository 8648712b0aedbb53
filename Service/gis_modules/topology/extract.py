"""
Service/gis_modules/topology/extract.py

입력 피처를 하나의 좌표 버퍼와 피처별 아크 서술자 트리로 평탄화하는 모듈입니다.
"""
from __future__ import annotations

from typing import Any, List, Optional

from Common.log import Log

from .errors import UnsupportedGeometryError
from .model import (
    ArcSlice,
    Point,
    SourceFeature,
    SourceGeometry,
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


class Extractor:
    """
    선과 링의 좌표를 선언 순서대로 버퍼에 추가하고, 각 선/링마다 버퍼 구간을 가리키는
    단일 ArcSlice 를 만들어 lines / rings 목록에 등록합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger
        self._state: Optional[TopologyState] = None

    def execute(self, state: TopologyState) -> List[TopologyObject]:
        self._state = state
        state.objects = []

        try:
            for i, feature in enumerate(state.input):
                obj = self._extract_feature(feature, state.options.id_property)
                if not obj.id:
                    # id 가 없는 피처끼리 덮어쓰지 않도록 위치 기반 id 부여
                    obj.id = f"feature_{i}"
                state.objects.append(obj)
        finally:
            self._state = None

        state.input = []

        self._logger.log(
            f"[Topology:Extract] 추출 완료: 객체 {len(state.objects)}개, 좌표 {len(state.coordinates)}개, "
            f"선 {len(state.lines)}개, 링 {len(state.rings)}개",
            level="INFO",
        )
        return state.objects

    def _extract_feature(self, feature: SourceFeature, id_property: str) -> TopologyObject:
        obj = self._extract_geometry(feature.geometry)
        obj.id = self._feature_id(feature, id_property)
        obj.properties = feature.properties
        obj.bbox = feature.bbox
        return obj

    def _feature_id(self, feature: SourceFeature, id_property: str) -> str:
        """피처 id, 없으면 id_property 속성 값을 문자열로 반환합니다."""
        value: Any = feature.id
        if value is None and feature.properties:
            value = feature.properties.get(id_property)
        if value is None:
            return ""
        return str(value)

    def _extract_geometry(self, geometry: SourceGeometry) -> TopologyObject:
        gtype = geometry.type
        obj = TopologyObject(type=gtype)
        coords = geometry.coordinates

        if gtype == GEOMETRY_COLLECTION:
            obj.geometries = [self._extract_geometry(child) for child in geometry.geometries]
        elif gtype == POINT:
            obj.point = coords
        elif gtype == MULTI_POINT:
            obj.multi_point = list(coords)
        elif gtype == LINE_STRING:
            obj.arc = self._extract_line(coords)
        elif gtype == MULTI_LINE_STRING:
            obj.arcs = [self._extract_line(line) for line in coords]
        elif gtype == POLYGON:
            obj.arcs = [self._extract_ring(ring) for ring in coords]
        elif gtype == MULTI_POLYGON:
            obj.multi_arcs = [[self._extract_ring(ring) for ring in polygon] for polygon in coords]
        else:
            raise UnsupportedGeometryError(f"지원하지 않는 geometry 타입입니다: {gtype}")

        return obj

    def _append(self, points: List[Point]) -> Optional[ArcSlice]:
        if not points:
            return None
        buffer = self._state.coordinates
        buffer.extend(points)
        index = len(buffer) - 1
        return ArcSlice(start=index - len(points) + 1, end=index)

    def _extract_line(self, points: List[Point]) -> Optional[ArcSlice]:
        arc = self._append(points)
        if arc is not None:
            self._state.lines.append(arc)
        return arc

    def _extract_ring(self, points: List[Point]) -> Optional[ArcSlice]:
        arc = self._append(points)
        if arc is not None:
            self._state.rings.append(arc)
        return arc
