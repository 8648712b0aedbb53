"""
Service/gis_modules/validator.py

최종 토폴로지의 아크 참조 무결성을 검증하고 위험 요소를 로깅하는 품질 보증(QA) 모듈입니다.
"""
from __future__ import annotations

from typing import List

from Common.log import Log
from Service.config import TopologyConfig
from Service.gis_modules.topology.diagnostics import iter_arc_references
from Service.gis_modules.topology.model import Topology


class ResultValidator:
    """
    모든 부호 있는 아크 인덱스가 유효 범위인지, 참조된 아크가 2점 이상인지 확인합니다.
    """
    def __init__(self, logger: Log, config: TopologyConfig):
        self._logger = logger
        self._config = config

    def execute(self, topology: Topology) -> List[str]:
        """
        검증 로직을 실행하며, 토폴로지를 변경하지 않고 분석 결과만 로그로 출력합니다.

        Returns:
            List[str]: 발견된 문제 목록
        """
        if not topology.objects:
            self._logger.log("[Validator] 검증 실패: 토폴로지 객체가 비어있습니다.", level="WARNING")
            return ["토폴로지 객체가 비어있습니다."]

        self._logger.log("=== 최종 결과물 품질 검증(QA) 시작 ===", level="INFO")

        errors: List[str] = []
        self._check_arc_references(topology, errors)
        self._check_arc_lengths(topology, errors)

        if errors:
            self._logger.log(f"[Validator] 검증 완료: {len(errors)}개의 잠재적 위험 요소가 발견되었습니다.", level="WARNING")
            for err in errors[:5]:
                self._logger.log(f"  - {err}", level="WARNING")
        else:
            self._logger.log("[Validator] 검증 완료: 모든 품질 기준을 통과했습니다.", level="INFO")
        return errors

    def _check_arc_references(self, topology: Topology, errors: List[str]) -> None:
        """객체가 존재하지 않는 아크를 참조하는지 검사합니다."""
        arc_count = len(topology.arcs)
        for key, geometry in topology.objects.items():
            invalid = [index for index in iter_arc_references(geometry) if not 0 <= index < arc_count]
            if invalid:
                errors.append(f"객체 '{key}' 가 범위를 벗어난 아크 {invalid[:3]} 를 참조합니다. (아크 수: {arc_count})")

    def _check_arc_lengths(self, topology: Topology, errors: List[str]) -> None:
        """두 점 미만의 아크를 찾습니다."""
        short = [i for i, arc in enumerate(topology.arcs) if len(arc) < 2]
        if short:
            errors.append(f"점이 2개 미만인 아크 {len(short)}개: {short[:5]}")
