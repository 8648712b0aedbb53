"""
Service/gis_modules/topology/state.py

파이프라인 단계들이 공유하며 순서대로 변경하는 토폴로지 빌더 상태 모듈입니다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from Service.schemas import Feature, FeatureCollection, GeoJSONGeometry, TopologyOptions

from .errors import UnsupportedGeometryError
from .model import (
    ArcSlice,
    Geometry,
    Point,
    SourceFeature,
    SourceGeometry,
    Topology,
    TopologyObject,
    Transform,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)


@dataclass
class TopologyState:
    """
    한 번의 빌드 동안만 유효한 작업 상태입니다.

    좌표 버퍼, 아크 서술자 목록, 인덱스 테이블은 빌드가 끝나면 버려지고
    to_topology() 가 만든 결과만 남습니다.
    """
    options: TopologyOptions
    input: List[SourceFeature] = field(default_factory=list)
    bbox: Optional[List[float]] = None
    transform: Optional[Transform] = None

    coordinates: List[Point] = field(default_factory=list)
    objects: List[TopologyObject] = field(default_factory=list)
    lines: List[ArcSlice] = field(default_factory=list)
    rings: List[ArcSlice] = field(default_factory=list)
    unique_arcs: List[ArcSlice] = field(default_factory=list)

    arcs: List[List[Point]] = field(default_factory=list)
    arc_indexes: Dict[Tuple[int, int], int] = field(default_factory=dict)
    deleted: List[bool] = field(default_factory=list)
    shift: List[int] = field(default_factory=list)

    output: Dict[str, Geometry] = field(default_factory=dict)

    @classmethod
    def from_features(cls, features: List[SourceFeature], options: Optional[TopologyOptions] = None) -> "TopologyState":
        return cls(options=options or TopologyOptions(), input=list(features))

    @classmethod
    def from_collection(cls, collection: Any, options: Optional[TopologyOptions] = None) -> "TopologyState":
        """FeatureCollection(모델 또는 dict)을 검증하고 내부 입력 형태로 변환합니다."""
        if not isinstance(collection, FeatureCollection):
            collection = FeatureCollection.model_validate(collection)
        features = [to_source_feature(f) for f in collection.features]
        return cls.from_features(features, options)

    def to_topology(self) -> Topology:
        return Topology(
            bbox=list(self.bbox) if self.bbox is not None else None,
            transform=self.transform,
            objects=dict(self.output),
            arcs=[[list(p) for p in arc] for arc in self.arcs],
        )


def to_source_feature(feature: Feature) -> SourceFeature:
    """pydantic Feature 를 파이프라인 입력 피처로 변환합니다. geometry 가 없으면 빈 컬렉션입니다."""
    if feature.geometry is None:
        geometry = SourceGeometry(type=GEOMETRY_COLLECTION)
    else:
        geometry = to_source_geometry(feature.geometry)

    properties = dict(feature.properties) if feature.properties is not None else None
    bbox = list(feature.bbox) if feature.bbox is not None else None
    return SourceFeature(geometry=geometry, id=feature.id, properties=properties, bbox=bbox)


def to_source_geometry(geometry: GeoJSONGeometry) -> SourceGeometry:
    gtype = geometry.type
    if gtype == GEOMETRY_COLLECTION:
        children = [to_source_geometry(g) for g in (geometry.geometries or [])]
        return SourceGeometry(type=gtype, geometries=children)

    coords = geometry.coordinates
    try:
        if gtype == POINT:
            converted: Any = _point(coords)
        elif gtype in (MULTI_POINT, LINE_STRING):
            converted = [_point(c) for c in coords]
        elif gtype in (MULTI_LINE_STRING, POLYGON):
            converted = [[_point(c) for c in part] for part in coords]
        elif gtype == MULTI_POLYGON:
            converted = [[[_point(c) for c in ring] for ring in poly] for poly in coords]
        else:
            raise UnsupportedGeometryError(f"지원하지 않는 geometry 타입입니다: {gtype}")
    except (TypeError, IndexError) as e:
        raise UnsupportedGeometryError(f"{gtype} 좌표 구조가 올바르지 않습니다: {e}") from e

    return SourceGeometry(type=gtype, coordinates=converted)


def _point(value: Any) -> Point:
    # 3차원 이상의 좌표는 앞의 두 성분만 사용
    return (float(value[0]), float(value[1]))
