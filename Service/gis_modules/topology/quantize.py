"""
Service/gis_modules/topology/quantize.py

경계 상자 기반 정수 격자 양자화(사전/사후) 모듈입니다.

사전 양자화는 토폴로지 연산 전에 입력 좌표를 격자에 맞춰 점 일치 판정을
정수 비교로 바꾸고, 사후 양자화는 완성된 아크를 출력 해상도로 다시 맞춥니다.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from Common.log import Log

from .model import (
    Geometry,
    Point,
    SourceGeometry,
    Transform,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)
from .state import TopologyState


def round_half_away(value: float) -> int:
    """0.5 를 0 에서 먼 쪽으로 반올림합니다. round(-0.5) == -1."""
    if value < 0:
        return math.ceil(value - 0.5)
    return math.floor(value + 0.5)


def scale_factor(extent: float, q0: float, q1: float) -> float:
    """한 축의 범위 extent 에 대한 양자화 배율. 범위가 0 이면 1 입니다."""
    if extent == 0:
        return 1.0
    return (q1 - 1) / extent * q0 / q1


class Quantizer:
    """
    (x + dx) * kx 를 반올림하는 격자 변환과 그 역변환(Transform)을 함께 보관합니다.
    """

    def __init__(self, dx: float, dy: float, kx: float, ky: float):
        self.dx = dx
        self.dy = dy
        self.kx = kx
        self.ky = ky
        self.transform = Transform(scale=[1 / kx, 1 / ky], translate=[-dx, -dy])

    @classmethod
    def from_bbox(cls, bbox: Optional[Sequence[float]], q0: float, q1: float) -> "Quantizer":
        x0, y0, x1, y1 = bbox if bbox is not None else (0.0, 0.0, 0.0, 0.0)
        return cls(-x0, -y0, scale_factor(x1 - x0, q0, q1), scale_factor(y1 - y0, q0, q1))

    def quantize_point(self, p: Sequence[float]) -> Point:
        return (round_half_away((p[0] + self.dx) * self.kx), round_half_away((p[1] + self.dy) * self.ky))

    def quantize_points(self, points: Sequence[Sequence[float]], collapse: bool) -> List[Point]:
        """
        좌표 목록을 양자화합니다.

        collapse 가 참이면(선형 요소) 연속 중복점을 합치고 최소 2점을 유지하도록
        첫 점을 복제해 채웁니다. MultiPoint 는 collapse=False 로 호출합니다.
        """
        out: List[Point] = []
        for p in points:
            q = self.quantize_point(p)
            if collapse and out and out[-1] == q:
                continue
            out.append(q)

        if collapse and len(out) == 1:
            out.append(out[0])
        return out

    def quantize_geometry(self, geometry: SourceGeometry) -> None:
        """입력 geometry 의 좌표를 제자리에서 교체합니다."""
        gtype = geometry.type
        coords = geometry.coordinates

        if gtype == GEOMETRY_COLLECTION:
            for child in geometry.geometries:
                self.quantize_geometry(child)
        elif gtype == POINT:
            geometry.coordinates = self.quantize_point(coords)
        elif gtype == MULTI_POINT:
            geometry.coordinates = self.quantize_points(coords, collapse=False)
        elif gtype == LINE_STRING:
            geometry.coordinates = self.quantize_points(coords, collapse=True)
        elif gtype in (MULTI_LINE_STRING, POLYGON):
            geometry.coordinates = [self.quantize_points(part, collapse=True) for part in coords]
        elif gtype == MULTI_POLYGON:
            geometry.coordinates = [
                [self.quantize_points(ring, collapse=True) for ring in polygon] for polygon in coords
            ]


class PreQuantizer:
    """
    pre_quantize 가 설정된 경우 입력 좌표 전체를 경계 상자 기준 정수 격자로 스냅합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> Optional[Transform]:
        options = state.options
        if options.pre_quantize == 0:
            return None

        if options.post_quantize == 0:
            options.post_quantize = options.pre_quantize

        quantizer = Quantizer.from_bbox(state.bbox, options.pre_quantize, options.post_quantize)
        for feature in state.input:
            quantizer.quantize_geometry(feature.geometry)

        state.transform = quantizer.transform
        self._logger.log(
            f"[Topology:PreQuantize] 사전 양자화 완료: q0={options.pre_quantize}, q1={options.post_quantize}, "
            f"k=({quantizer.kx:.6g}, {quantizer.ky:.6g})",
            level="INFO",
        )
        return state.transform


class PostQuantizer:
    """
    완성된 아크(및 점 좌표)를 출력 해상도 격자로 다시 양자화하고 변환 정보를 갱신합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> Optional[Transform]:
        options = state.options
        q0 = options.pre_quantize
        q1 = options.post_quantize

        if q1 == 0 or (q0 != 0 and q0 == q1):
            return state.transform

        if q0 != 0:
            k = q1 / q0
            quantizer = Quantizer(0.0, 0.0, k, k)
            if state.transform is not None:
                state.transform.scale[0] /= k
                state.transform.scale[1] /= k
        else:
            x0, y0, x1, y1 = state.bbox if state.bbox is not None else (0.0, 0.0, 0.0, 0.0)
            kx = (q1 - 1) / (x1 - x0) if x1 - x0 != 0 else 1.0
            ky = (q1 - 1) / (y1 - y0) if y1 - y0 != 0 else 1.0
            quantizer = Quantizer(-x0, -y0, kx, ky)
            state.transform = quantizer.transform

        state.arcs = [quantizer.quantize_points(arc, collapse=True) for arc in state.arcs]
        for geometry in state.output.values():
            self._quantize_coordinates(quantizer, geometry)

        self._logger.log(
            f"[Topology:PostQuantize] 사후 양자화 완료: q1={q1}, 아크 {len(state.arcs)}개",
            level="INFO",
        )
        return state.transform

    def _quantize_coordinates(self, quantizer: Quantizer, geometry: Geometry) -> None:
        """Point/MultiPoint 좌표도 같은 격자로 맞춰 변환 정보와 일치시킵니다."""
        if geometry.type == POINT and geometry.coordinates is not None:
            geometry.coordinates = list(quantizer.quantize_point(geometry.coordinates))
        elif geometry.type == MULTI_POINT and geometry.coordinates is not None:
            geometry.coordinates = [list(p) for p in quantizer.quantize_points(geometry.coordinates, collapse=False)]
        elif geometry.type == GEOMETRY_COLLECTION:
            for child in geometry.geometries or []:
                self._quantize_coordinates(quantizer, child)
