"""
Service/gis_modules/topology/processor.py

입력 피처를 경계 계산, 양자화, 추출, 교차점 탐지, 절단, 중복 제거, 단순화, 인코딩 단계를 거쳐
공유 아크 기반 토폴로지로 변환하는 오케스트레이터 모듈입니다.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.config import TopologyConfig
from Service.schemas import FeatureCollection, TopologyOptions

from .bounds import BoundsCalculator
from .cleaners import EmptyGeometryCleaner
from .cut import ArcCutter
from .dedup import ArcDeduplicator
from .delta import DeltaEncoder
from .diagnostics import TopologyDiagnostics
from .extract import Extractor
from .join import JunctionDetector
from .model import Topology
from .quantize import PostQuantizer, PreQuantizer
from .simplify import ArcSimplifier
from .state import TopologyState
from .unpack import ArcUnpacker, ObjectUnpacker


class TopologyProcessor:
    """
    설정된 단계 객체들을 고정된 순서로 실행합니다. 단계들은 하나의 TopologyState 를 공유합니다.
    """
    def __init__(
            self,
            logger: Log,
            config: TopologyConfig,
            bounds: BoundsCalculator,
            pre_quantizer: PreQuantizer,
            extractor: Extractor,
            joiner: JunctionDetector,
            cutter: ArcCutter,
            deduplicator: ArcDeduplicator,
            arc_unpacker: ArcUnpacker,
            simplifier: ArcSimplifier,
            object_unpacker: ObjectUnpacker,
            cleaner: EmptyGeometryCleaner,
            post_quantizer: PostQuantizer,
            delta_encoder: DeltaEncoder,
            diagnostics: TopologyDiagnostics,
    ):
        self._logger = logger
        self._config = config
        self._bounds = bounds
        self._pre_quantizer = pre_quantizer
        self._extractor = extractor
        self._joiner = joiner
        self._cutter = cutter
        self._deduplicator = deduplicator
        self._arc_unpacker = arc_unpacker
        self._simplifier = simplifier
        self._object_unpacker = object_unpacker
        self._cleaner = cleaner
        self._post_quantizer = post_quantizer
        self._delta_encoder = delta_encoder
        self._diagnostics = diagnostics
        self._last_stage_meta: List[Dict[str, Any]] = []

    @safe_run
    @log_execution_time
    def execute(
        self,
        collection: Union[FeatureCollection, Dict[str, Any]],
        options: Optional[TopologyOptions] = None,
        stage_meta_output_path: Optional[str] = None,
    ) -> Topology:
        """FeatureCollection(모델 또는 dict)으로부터 토폴로지를 빌드합니다."""
        if options is None:
            options = TopologyOptions.from_config(self._config)
        else:
            # 단계가 옵션을 갱신하므로 호출자 객체는 건드리지 않음
            options = options.model_copy()

        state = TopologyState.from_collection(collection, options)
        topology = self._run(state)

        if stage_meta_output_path:
            self._save_stage_meta(stage_meta_output_path)
        return topology

    def get_last_stage_meta(self) -> List[Dict[str, Any]]:
        return [dict(item) for item in self._last_stage_meta]

    def _run(self, state: TopologyState) -> Topology:
        """경계 계산부터 델타 인코딩까지 세부 공정을 제어합니다."""
        self._last_stage_meta = []
        self._logger.log("=== [Topology Pipeline] 시작 ===", level="INFO")

        if not state.input:
            self._logger.log("[Topology] 입력 피처가 비어있습니다.", level="WARNING")

        self._bounds.execute(state)
        self._log_stage_meta("01_bounds", {"features": len(state.input), "bbox": state.bbox})

        self._pre_quantizer.execute(state)
        self._log_stage_meta("02_pre_quantize", {"enabled": state.options.pre_quantize != 0})

        self._extractor.execute(state)
        self._log_stage_meta(
            "03_extract",
            {
                "objects": len(state.objects),
                "coordinates": len(state.coordinates),
                "lines": len(state.lines),
                "rings": len(state.rings),
            },
        )

        junctions = self._joiner.execute(state)
        self._log_stage_meta("04_join", {"junctions": len(junctions)})

        self._cutter.execute(state, junctions)
        self._log_stage_meta("05_cut", {"chains": len(state.lines) + len(state.rings)})

        self._deduplicator.execute(state)
        self._log_stage_meta("06_dedup", {"unique_arcs": len(state.unique_arcs)})

        self._arc_unpacker.execute(state)
        self._log_stage_meta("07_unpack_arcs", {"arcs": len(state.arcs)})

        self._simplifier.execute(state)
        self._log_stage_meta("08_simplify", {"arcs": len(state.arcs), "deleted": sum(state.deleted)})

        self._object_unpacker.execute(state)
        self._log_stage_meta("09_unpack_objects", {"objects": len(state.output)})

        self._cleaner.execute(state)
        self._log_stage_meta("10_remove_empty", {"objects": len(state.output)})

        self._post_quantizer.execute(state)
        self._log_stage_meta("11_post_quantize", {"enabled": state.options.post_quantize != 0})

        self._delta_encoder.execute(state)
        self._log_stage_meta("12_delta", {"arcs": len(state.arcs)})

        topology = state.to_topology()

        if bool(getattr(self._config, "diagnostics_enabled", False)):
            try:
                self._diagnostics.report(topology)
            except Exception as e:
                self._logger.log(f"[Topology:Diag] 진단 로그 출력 실패: {e}", level="WARNING")

        self._logger.log("=== [Topology Pipeline] 완료 ===", level="INFO")
        return topology

    def _log_stage_meta(self, stage: str, meta: Dict[str, object]) -> None:
        stage_record = {"stage": stage, "meta": dict(meta)}
        self._last_stage_meta.append(stage_record)
        items = ", ".join([f"{k}={v}" for k, v in meta.items()])
        self._logger.log(f"[Topology:Stage:{stage}] {items}", level="DEBUG")

    def _save_stage_meta(self, output_path: str) -> None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self._last_stage_meta, ensure_ascii=False, indent=2), encoding="utf-8")


def build_processor(logger: Log, config: Optional[TopologyConfig] = None) -> TopologyProcessor:
    """기본 단계 구성으로 TopologyProcessor 를 조립합니다."""
    config = config or TopologyConfig()
    return TopologyProcessor(
        logger=logger,
        config=config,
        bounds=BoundsCalculator(logger),
        pre_quantizer=PreQuantizer(logger),
        extractor=Extractor(logger),
        joiner=JunctionDetector(logger),
        cutter=ArcCutter(logger),
        deduplicator=ArcDeduplicator(logger),
        arc_unpacker=ArcUnpacker(logger),
        simplifier=ArcSimplifier(logger),
        object_unpacker=ObjectUnpacker(logger),
        cleaner=EmptyGeometryCleaner(logger),
        post_quantizer=PostQuantizer(logger),
        delta_encoder=DeltaEncoder(logger),
        diagnostics=TopologyDiagnostics(logger),
    )
