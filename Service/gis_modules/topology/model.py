"""
Service/gis_modules/topology/model.py

토폴로지 파이프라인의 내부 자료구조(아크 구간, 객체 트리)와 출력 모델을 정의합니다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

Point = Tuple[float, float]

POINT = "Point"
MULTI_POINT = "MultiPoint"
LINE_STRING = "LineString"
MULTI_LINE_STRING = "MultiLineString"
POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"
GEOMETRY_COLLECTION = "GeometryCollection"


@dataclass
class ArcSlice:
    """
    좌표 버퍼의 [start, end] 구간(양 끝 포함)을 가리키는 아크 서술자입니다.

    cut 단계 이후에는 next 로 이어지는 단일 연결 체인이 됩니다.
    dedup 이후 start > end 이면 역방향 참조를 의미합니다.
    """
    start: int
    end: int
    next: Optional["ArcSlice"] = None

    def chain(self) -> Iterator["ArcSlice"]:
        """자기 자신부터 next 를 따라 체인의 모든 서술자를 순회합니다."""
        node: Optional[ArcSlice] = self
        while node is not None:
            yield node
            node = node.next


@dataclass
class TopologyObject:
    """extract 단계가 만드는 피처별 객체 트리입니다. 선형 요소는 ArcSlice 체인을 참조합니다."""
    type: str
    id: str = ""
    properties: Optional[Dict[str, Any]] = None
    bbox: Optional[List[float]] = None
    point: Optional[Point] = None
    multi_point: List[Point] = field(default_factory=list)
    arc: Optional[ArcSlice] = None
    arcs: List[Optional[ArcSlice]] = field(default_factory=list)
    multi_arcs: List[List[Optional[ArcSlice]]] = field(default_factory=list)
    geometries: List["TopologyObject"] = field(default_factory=list)


@dataclass
class SourceGeometry:
    """파이프라인 입력 geometry. 좌표는 (x, y) 튜플의 중첩 리스트로 정규화되어 있습니다."""
    type: str
    coordinates: Any = None
    geometries: List["SourceGeometry"] = field(default_factory=list)


@dataclass
class SourceFeature:
    """id 와 속성을 가진 입력 피처입니다."""
    geometry: SourceGeometry
    id: Optional[Any] = None
    properties: Optional[Dict[str, Any]] = None
    bbox: Optional[List[float]] = None


@dataclass
class Transform:
    """저장된 정수 좌표를 실수로 되돌리는 변환: real = stored * scale + translate."""
    scale: List[float]
    translate: List[float]

    def apply(self, x: float, y: float) -> List[float]:
        return [x * self.scale[0] + self.translate[0], y * self.scale[1] + self.translate[1]]


@dataclass
class Geometry:
    """
    출력 토폴로지의 geometry 입니다.

    선형 타입은 부호 있는 아크 인덱스(`~i` 는 i 번 아크의 역방향)를 arcs 에,
    점 타입은 좌표를 coordinates 에, 컬렉션은 하위 geometry 를 geometries 에 담습니다.
    """
    type: str
    id: str = ""
    properties: Optional[Dict[str, Any]] = None
    bbox: Optional[List[float]] = None
    coordinates: Optional[List[Any]] = None
    arcs: Optional[List[Any]] = None
    geometries: Optional[List["Geometry"]] = None


@dataclass
class Topology:
    """토폴로지 빌드 결과입니다. arcs 는 객체들이 공유하는 유일 아크 배열입니다."""
    type: str = "Topology"
    bbox: Optional[List[float]] = None
    transform: Optional[Transform] = None
    objects: Dict[str, Geometry] = field(default_factory=dict)
    arcs: List[List[List[float]]] = field(default_factory=list)
