"""
Service/gis_modules/topology/delta.py

사후 양자화된 아크를 첫 점 절대값 + 이후 차분 좌표로 인코딩하는 모듈입니다.
"""
from __future__ import annotations

from typing import List, Sequence

from Common.log import Log

from .model import Point
from .state import TopologyState


def delta_encode(arc: Sequence[Point]) -> List[Point]:
    """첫 좌표는 그대로 두고, 이후 좌표를 직전 원본 좌표와의 차로 바꿉니다. 0 길이 구간도 보존합니다."""
    if not arc:
        return []

    out: List[Point] = [arc[0]]
    x0, y0 = arc[0]
    for x1, y1 in arc[1:]:
        out.append((x1 - x0, y1 - y0))
        x0, y0 = x1, y1
    return out


class DeltaEncoder:
    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> None:
        if state.options.post_quantize == 0:
            return

        state.arcs = [delta_encode(arc) for arc in state.arcs]
        self._logger.log(f"[Topology:Delta] 델타 인코딩 완료: 아크 {len(state.arcs)}개", level="INFO")
