"""
Service/gis_modules/topology/simplify.py

유일 아크 단위 단순화 모듈입니다.

단순화로 길이가 0 이 된 아크는 삭제 표시하고, 각 아크 인덱스가 앞으로 당겨지는 양(shift)을
기록해 객체 변환 단계가 최종 인덱스를 계산할 수 있게 합니다.
"""
from __future__ import annotations

import heapq
from typing import Callable, List, Sequence, Tuple

from Common.log import Log

from .model import Point
from .state import TopologyState

SimplifyFn = Callable[[Sequence[Point], float], List[Point]]


def _triangle_area(a: Point, b: Point, c: Point) -> float:
    return abs((b[0] - a[0]) * (c[1] - a[1]) - (c[0] - a[0]) * (b[1] - a[1])) / 2.0


def visvalingam_threshold(points: Sequence[Point], threshold: float) -> List[Point]:
    """
    Visvalingam-Whyatt 단순화. 양 끝점은 유지하고, 이웃과 이루는 삼각형 면적이
    threshold 이하인 내부 점을 가장 작은 것부터 제거합니다.

    Args:
        points: 좌표 목록
        threshold: 제거 기준 삼각형 면적

    Returns:
        List[Point]: 단순화된 좌표 목록
    """
    n = len(points)
    if n <= 2 or threshold <= 0:
        return list(points)

    prev_idx = list(range(-1, n - 1))
    next_idx = list(range(1, n + 1))
    removed = [False] * n
    areas = [float("inf")] * n

    heap: List[Tuple[float, int]] = []
    for i in range(1, n - 1):
        areas[i] = _triangle_area(points[i - 1], points[i], points[i + 1])
        heap.append((areas[i], i))
    heapq.heapify(heap)

    while heap:
        area, i = heapq.heappop(heap)
        if removed[i] or area != areas[i]:
            continue
        if area > threshold:
            break

        removed[i] = True
        before, after = prev_idx[i], next_idx[i]
        next_idx[before] = after
        prev_idx[after] = before

        for j in (before, after):
            if 0 < j < n - 1:
                areas[j] = _triangle_area(points[prev_idx[j]], points[j], points[next_idx[j]])
                heapq.heappush(heap, (areas[j], j))

    return [p for i, p in enumerate(points) if not removed[i]]


class ArcSimplifier:
    """
    simplify 임계값이 0 이 아니면 주입된 단순화 함수를 각 아크에 적용합니다.
    """

    def __init__(self, logger: Log, simplify_fn: SimplifyFn = visvalingam_threshold):
        self._logger = logger
        self._simplify_fn = simplify_fn

    def execute(self, state: TopologyState) -> None:
        threshold = state.options.simplify
        count = len(state.arcs)

        if threshold == 0:
            state.deleted = [False] * count
            state.shift = [0] * count
            return

        deleted: List[bool] = []
        shift: List[int] = []
        kept: List[List[Point]] = []

        for i, arc in enumerate(state.arcs):
            simplified = list(self._simplify_fn(arc, threshold))
            shift.append(shift[i - 1] if i > 0 else 0)

            if not simplified or (len(simplified) <= 2 and simplified[0] == simplified[-1]):
                # 길이 0 아크
                deleted.append(True)
                shift[i] += 1
            else:
                deleted.append(False)
                kept.append(simplified)

        state.arcs = kept
        state.deleted = deleted
        state.shift = shift

        self._logger.log(
            f"[Topology:Simplify] 단순화 완료: 임계값={threshold}, 삭제 아크 {count - len(kept)}개",
            level="INFO",
        )
