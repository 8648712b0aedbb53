"""
Service/gis_modules/topology/bounds.py

입력 피처 전체의 경계 상자(bbox)를 계산하는 모듈입니다.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from shapely.geometry import MultiPoint

from Common.log import Log

from .model import Point, SourceGeometry, GEOMETRY_COLLECTION, POINT
from .state import TopologyState


def iter_coordinates(geometry: SourceGeometry) -> Iterator[Point]:
    """geometry 에 포함된 모든 좌표를 순서대로 내보냅니다. 컬렉션은 구성원 전체를 합칩니다."""
    if geometry.type == GEOMETRY_COLLECTION:
        for child in geometry.geometries:
            yield from iter_coordinates(child)
        return

    if geometry.type == POINT:
        yield geometry.coordinates
        return

    stack = [geometry.coordinates]
    while stack:
        item = stack.pop()
        if isinstance(item, tuple):
            yield item
        else:
            stack.extend(reversed(item))


class BoundsCalculator:
    """
    모든 입력 좌표를 감싸는 [xmin, ymin, xmax, ymax] 를 계산해 상태에 기록합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> Optional[List[float]]:
        bbox: Optional[List[float]] = None

        for feature in state.input:
            coords = list(iter_coordinates(feature.geometry))
            if not coords:
                continue

            minx, miny, maxx, maxy = MultiPoint(coords).bounds
            if bbox is None:
                bbox = [minx, miny, maxx, maxy]
                continue

            bbox[0] = min(bbox[0], minx)
            bbox[1] = min(bbox[1], miny)
            bbox[2] = max(bbox[2], maxx)
            bbox[3] = max(bbox[3], maxy)

        state.bbox = bbox

        if bbox is None:
            self._logger.log("[Topology:Bounds] 좌표가 없어 경계 상자를 생략합니다.", level="WARNING")
        else:
            self._logger.log(f"[Topology:Bounds] 경계 상자 계산 완료: {bbox}", level="INFO")
        return bbox
