"""
Service/gis_modules/topology/geojson.py

토폴로지를 GeoJSON FeatureCollection(dict)으로 되돌리는 모듈입니다.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .model import (
    Geometry,
    Topology,
    Transform,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)


def decode_arc(arc: List[List[float]], transform: Optional[Transform]) -> List[List[float]]:
    """
    저장된 아크 좌표를 실좌표로 복원합니다.

    transform 이 있으면 좌표는 델타 인코딩된 정수이므로 누적합을 구한 뒤 scale/translate 를 적용합니다.
    """
    if transform is None:
        return [[p[0], p[1]] for p in arc]

    out: List[List[float]] = []
    x = y = 0
    for p in arc:
        x += p[0]
        y += p[1]
        out.append(transform.apply(x, y))
    return out


class _ArcResolver:
    """부호 있는 아크 인덱스 목록을 좌표열로 풀어냅니다. 복원된 아크는 캐시합니다."""

    def __init__(self, topology: Topology):
        self._topology = topology
        self._cache: Dict[int, List[List[float]]] = {}

    def arc(self, index: int) -> List[List[float]]:
        if index not in self._cache:
            self._cache[index] = decode_arc(self._topology.arcs[index], self._topology.transform)
        return self._cache[index]

    def line(self, indexes: List[int]) -> List[List[float]]:
        points: List[List[float]] = []
        for signed in indexes:
            reverse = signed < 0
            coords = self.arc(~signed if reverse else signed)
            if reverse:
                coords = coords[::-1]
            for point in coords:
                # 연속 아크가 공유하는 교차점은 한 번만
                if points and points[-1] == point:
                    continue
                points.append(list(point))
        return points

    def point(self, coordinates: List[float]) -> List[float]:
        transform = self._topology.transform
        if transform is None:
            return [coordinates[0], coordinates[1]]
        return transform.apply(coordinates[0], coordinates[1])


def to_geojson(topology: Topology) -> Dict[str, Any]:
    """
    각 객체를 GeoJSON Feature 로 변환합니다. 최상위 GeometryCollection 은 구성원마다 Feature 하나로 펼칩니다.

    Returns:
        Dict[str, Any]: {"type": "FeatureCollection", "features": [...]}
    """
    resolver = _ArcResolver(topology)
    features: List[Dict[str, Any]] = []

    for geometry in topology.objects.values():
        if geometry.type == GEOMETRY_COLLECTION:
            for child in geometry.geometries or []:
                features.append(_feature(resolver, child, fallback=geometry))
        else:
            features.append(_feature(resolver, geometry))

    return {"type": "FeatureCollection", "features": features}


def _feature(resolver: _ArcResolver, geometry: Geometry, fallback: Optional[Geometry] = None) -> Dict[str, Any]:
    source = geometry if geometry.id or fallback is None else fallback
    feature: Dict[str, Any] = {"type": "Feature"}
    if source.id:
        feature["id"] = source.id
    feature["properties"] = geometry.properties if geometry.properties is not None else source.properties
    if geometry.bbox is not None:
        feature["bbox"] = list(geometry.bbox)
    feature["geometry"] = _geometry(resolver, geometry)
    return feature


def _geometry(resolver: _ArcResolver, geometry: Geometry) -> Dict[str, Any]:
    gtype = geometry.type

    if gtype == POINT:
        coordinates: Any = resolver.point(geometry.coordinates)
    elif gtype == MULTI_POINT:
        coordinates = [resolver.point(p) for p in geometry.coordinates or []]
    elif gtype == LINE_STRING:
        coordinates = resolver.line(geometry.arcs or [])
    elif gtype in (MULTI_LINE_STRING, POLYGON):
        coordinates = [resolver.line(part) for part in geometry.arcs or []]
    elif gtype == MULTI_POLYGON:
        coordinates = [[resolver.line(ring) for ring in polygon] for polygon in geometry.arcs or []]
    else:
        return {
            "type": GEOMETRY_COLLECTION,
            "geometries": [_geometry(resolver, child) for child in geometry.geometries or []],
        }

    return {"type": gtype, "coordinates": coordinates}
