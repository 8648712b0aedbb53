"""
Service/container.py

애플리케이션의 모든 객체를 생성하고 의존성을 주입하여 실행 가능한 상태로 조립합니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from Common.log import Log

from Service.config import TopologyConfig
from Service.gis_modules import GISIO, ResultValidator, TopologyFilter
from Service.gis_modules.topology import (
    TopologyProcessor,
    BoundsCalculator,
    PreQuantizer,
    Extractor,
    JunctionDetector,
    ArcCutter,
    ArcDeduplicator,
    ArcUnpacker,
    ArcSimplifier,
    ObjectUnpacker,
    EmptyGeometryCleaner,
    PostQuantizer,
    DeltaEncoder,
    TopologyDiagnostics,
)

from Service.topology_service import TopologyService


@dataclass(frozen=True)
class BuiltApp:
    """조립이 완료된 애플리케이션 서비스 객체 묶음입니다."""
    config: TopologyConfig
    topology_service: TopologyService


def build_app(logger: Log, config: Optional[TopologyConfig] = None) -> BuiltApp:
    """
    설정 로드 및 모든 내부 모듈의 의존성을 주입하여 BuiltApp 객체를 생성합니다.
    """
    topology_config = config or TopologyConfig()

    gis_io = GISIO(logger)

    topology_processor = TopologyProcessor(
        logger=logger,
        config=topology_config,
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

    validator = ResultValidator(logger, topology_config)

    topology_service = TopologyService(
        logger=logger,
        gis_io=gis_io,
        processor=topology_processor,
        topology_filter=TopologyFilter(logger),
        validator=validator,
        config=topology_config,
    )

    return BuiltApp(config=topology_config, topology_service=topology_service)
