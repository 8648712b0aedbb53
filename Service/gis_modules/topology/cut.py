"""
Service/gis_modules/topology/cut.py

교차점 위치에서 아크 서술자를 잘라 연결 체인으로 만드는 모듈입니다.
"""
from __future__ import annotations

from typing import List, Set

from Common.log import Log

from .model import ArcSlice, Point
from .state import TopologyState


class ArcCutter:
    """
    선은 내부 교차점마다 분할하고, 링은 첫 교차점에서 시작하도록 제자리 회전한 뒤 분할합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState, junctions: Set[Point]) -> None:
        coordinates = state.coordinates
        cuts = 0
        rotations = 0

        for line in state.lines:
            current = line
            mid = current.start + 1
            end = current.end
            while mid < end:
                if coordinates[mid] in junctions:
                    current = self._split(current, mid)
                    cuts += 1
                mid += 1

        for ring in state.rings:
            start, end = ring.start, ring.end
            current = ring
            fixed = coordinates[start] in junctions

            mid = start + 1
            while mid < end:
                if coordinates[mid] in junctions:
                    if fixed:
                        current = self._split(current, mid)
                        cuts += 1
                    else:
                        self._rotate(coordinates, start, end, end - mid)
                        coordinates[end] = coordinates[start]
                        fixed = True
                        rotations += 1
                        # 회전 후 앞쪽에 새 교차점이 올 수 있으므로 처음부터 다시 탐색
                        mid = start
                mid += 1

        self._logger.log(f"[Topology:Cut] 절단 완료: 분할 {cuts}회, 링 회전 {rotations}회", level="INFO")

    def _split(self, current: ArcSlice, mid: int) -> ArcSlice:
        following = ArcSlice(start=mid, end=current.end, next=current.next)
        current.end = mid
        current.next = following
        return following

    def _rotate(self, coordinates: List[Point], start: int, end: int, offset: int) -> None:
        """[start, end] 구간(양 끝 포함)을 세 번 뒤집어 offset 만큼 회전시킵니다."""
        self._reverse(coordinates, start, end)
        self._reverse(coordinates, start, start + offset)
        self._reverse(coordinates, start + offset, end)

    def _reverse(self, coordinates: List[Point], start: int, end: int) -> None:
        i, j = start, end
        while i < j:
            coordinates[i], coordinates[j] = coordinates[j], coordinates[i]
            i += 1
            j -= 1
