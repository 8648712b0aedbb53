"""
Service/gis_modules/topology/join.py

아크를 잘라야 하는 교차점(junction) 좌표를 찾아내는 모듈입니다.

같은 좌표값의 모든 사본을 최초 등장 인덱스(정규 인덱스)로 모은 뒤,
각 좌표를 지나는 아크들의 (이전, 다음) 이웃 쌍을 비교합니다.
이웃 쌍이 방향과 무관하게 모두 같으면 겹치는 구간이고, 하나라도 다르면 교차점입니다.
열린 선의 양 끝점은 항상 교차점입니다.
"""
from __future__ import annotations

from typing import Dict, List, Set

from Common.log import Log

from .model import Point
from .state import TopologyState


class JunctionDetector:
    """
    좌표 버퍼와 lines / rings 서술자를 읽어 교차점 좌표 집합을 반환합니다.
    """

    def __init__(self, logger: Log):
        self._logger = logger

    def execute(self, state: TopologyState) -> Set[Point]:
        coordinates = state.coordinates
        n = len(coordinates)

        indexes = self._canonical_indexes(coordinates)

        visited: List[int] = [-1] * n
        left: List[int] = [-1] * n
        right: List[int] = [-1] * n
        junctions: List[bool] = [False] * n

        def sequence(i: int, previous: int, current: int, following: int) -> None:
            if visited[current] == i:
                return
            visited[current] = i

            left_index = left[current]
            if left_index >= 0:
                right_index = right[current]
                same = (left_index == previous and right_index == following)
                flipped = (left_index == following and right_index == previous)
                if not (same or flipped):
                    junctions[current] = True
            else:
                left[current] = previous
                right[current] = following

        for i, line in enumerate(state.lines):
            start, end = line.start, line.end
            current = indexes[start]
            junctions[current] = True
            if start == end:
                continue

            following = indexes[start + 1]
            for k in range(start + 2, end + 1):
                previous, current, following = current, following, indexes[k]
                sequence(i, previous, current, following)

            junctions[following] = True

        visited = [-1] * n

        for i, ring in enumerate(state.rings):
            start, end = ring.start, ring.end
            if start == end:
                # 한 점짜리 링은 자기 자신이 이전/다음 이웃
                current = indexes[start]
                sequence(i, current, current, current)
                continue

            previous = indexes[end - 1]
            current = indexes[start]
            following = indexes[start + 1]
            sequence(i, previous, current, following)

            for k in range(start + 2, end + 1):
                previous, current, following = current, following, indexes[k]
                sequence(i, previous, current, following)

        result = {coordinates[k] for k in range(n) if junctions[k]}

        self._logger.log(f"[Topology:Join] 교차점 탐지 완료: {len(result)}개", level="INFO")
        return result

    def _canonical_indexes(self, coordinates: List[Point]) -> List[int]:
        """각 좌표를 같은 값이 처음 나타난 위치의 인덱스로 대응시킵니다."""
        index_by_point: Dict[Point, int] = {}
        return [index_by_point.setdefault(point, i) for i, point in enumerate(coordinates)]
