"""
Service/gis_modules/topology/dedup.py

같은 점 열을 지나는 아크(정방향, 역방향, 링의 회전형)를 하나로 합쳐 유일 아크 목록을 만드는 모듈입니다.
"""
from __future__ import annotations

from typing import Dict, List

from Common.log import Log

from .model import ArcSlice, Point
from .state import TopologyState


class ArcDeduplicator:
    """
    시작/끝 좌표별로 등록된 아크를 후보로 삼아 중복 여부를 검사합니다.

    중복이면 현재 서술자의 (start, end) 를 기존 아크 구간으로 바꾸고(역방향이면 뒤바꿈),
    아니면 새 유일 아크로 등록합니다. 선 체인을 모두 처리한 뒤 링을 처리합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> List[ArcSlice]:
        coordinates = state.coordinates
        arcs_by_end: Dict[Point, List[ArcSlice]] = {}
        unique: List[ArcSlice] = []
        reused = 0

        for line in state.lines:
            for arc in line.chain():
                if not self._dedup_line(coordinates, arcs_by_end, unique, arc):
                    reused += 1

        for ring in state.rings:
            if ring.next is not None:
                # 잘린 링은 더 이상 닫힌 고리가 아니므로 선과 같이 처리
                for arc in ring.chain():
                    if not self._dedup_line(coordinates, arcs_by_end, unique, arc):
                        reused += 1
            elif not self._dedup_ring(coordinates, arcs_by_end, unique, ring):
                reused += 1

        state.unique_arcs = unique
        state.lines = []
        state.rings = []

        self._logger.log(f"[Topology:Dedup] 중복 제거 완료: 유일 아크 {len(unique)}개, 재사용 {reused}회", level="INFO")
        return unique

    def _dedup_line(
        self,
        coordinates: List[Point],
        arcs_by_end: Dict[Point, List[ArcSlice]],
        unique: List[ArcSlice],
        arc: ArcSlice,
    ) -> bool:
        """새 유일 아크로 등록했으면 True, 기존 아크를 재사용했으면 False."""
        start_point = coordinates[arc.start]
        for candidate in arcs_by_end.get(start_point, ()):
            if line_equal(coordinates, arc, candidate):
                arc.start, arc.end = candidate.start, candidate.end
                return False

        end_point = coordinates[arc.end]
        for candidate in arcs_by_end.get(end_point, ()):
            if line_equal_reverse(coordinates, arc, candidate):
                arc.start, arc.end = candidate.end, candidate.start
                return False

        arcs_by_end.setdefault(start_point, []).append(arc)
        if end_point != start_point:
            arcs_by_end.setdefault(end_point, []).append(arc)
        unique.append(arc)
        return True

    def _dedup_ring(
        self,
        coordinates: List[Point],
        arcs_by_end: Dict[Point, List[ArcSlice]],
        unique: List[ArcSlice],
        arc: ArcSlice,
    ) -> bool:
        """시작점과 최소 오프셋 좌표 두 곳에서 회전 동치인 아크를 찾습니다."""
        lookup_points = (
            coordinates[arc.start],
            coordinates[arc.start + find_minimum_offset(coordinates, arc)],
        )

        for point in lookup_points:
            for candidate in arcs_by_end.get(point, ()):
                if ring_equal(coordinates, arc, candidate):
                    arc.start, arc.end = candidate.start, candidate.end
                    return False
                if ring_equal_reverse(coordinates, arc, candidate):
                    arc.start, arc.end = candidate.end, candidate.start
                    return False

        arcs_by_end.setdefault(lookup_points[1], []).append(arc)
        unique.append(arc)
        return True


def line_equal(coordinates: List[Point], a: ArcSlice, b: ArcSlice) -> bool:
    if a.end - a.start != b.end - b.start:
        return False
    ib = b.start
    for ia in range(a.start, a.end + 1):
        if coordinates[ia] != coordinates[ib]:
            return False
        ib += 1
    return True


def line_equal_reverse(coordinates: List[Point], a: ArcSlice, b: ArcSlice) -> bool:
    if a.end - a.start != b.end - b.start:
        return False
    jb = b.end
    for ia in range(a.start, a.end + 1):
        if coordinates[ia] != coordinates[jb]:
            return False
        jb -= 1
    return True


def ring_equal(coordinates: List[Point], a: ArcSlice, b: ArcSlice) -> bool:
    n = a.end - a.start
    if n != b.end - b.start:
        return False

    ka = find_minimum_offset(coordinates, a)
    kb = find_minimum_offset(coordinates, b)
    for i in range(n):
        if coordinates[a.start + (i + ka) % n] != coordinates[b.start + (i + kb) % n]:
            return False
    return True


def ring_equal_reverse(coordinates: List[Point], a: ArcSlice, b: ArcSlice) -> bool:
    n = a.end - a.start
    if n != b.end - b.start:
        return False

    ka = find_minimum_offset(coordinates, a)
    kb = n - find_minimum_offset(coordinates, b)
    for i in range(n):
        if coordinates[a.start + (i + ka) % n] != coordinates[b.end - (i + kb) % n]:
            return False
    return True


def find_minimum_offset(coordinates: List[Point], arc: ArcSlice) -> int:
    """닫는 점을 제외한 링 좌표 중 (x, y) 사전순 최소 좌표의 시작 기준 오프셋."""
    minimum = arc.start
    minimum_point = coordinates[minimum]
    for mid in range(arc.start + 1, arc.end):
        point = coordinates[mid]
        if point < minimum_point:
            minimum = mid
            minimum_point = point
    return minimum - arc.start
