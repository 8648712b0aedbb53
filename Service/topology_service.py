"""
Service/topology_service.py

파일 단위 토폴로지 작업(빌드, 필터, GeoJSON 내보내기)의 전체 공정을 제어하는 서비스 모듈입니다.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from Common.log import Log
from Function.utils import resolve_output_path
from Function.decorators import log_execution_time, safe_run
from Service.config import TopologyConfig
from Service.schemas import (
    FileLoadRequest,
    FileSaveRequest,
    GeoJSONSaveRequest,
    TopologyLoadRequest,
    TopologyOptions,
)
from Service.gis_modules import GISIO, ResultValidator, TopologyFilter, TopologyProcessor
from Service.gis_modules.topology.geojson import to_geojson


class TopologyService:
    """
    토폴로지 파이프라인의 실행을 관리하는 메인 서비스 클래스입니다.
    """

    def __init__(
        self,
        logger: Log,
        gis_io: GISIO,
        processor: TopologyProcessor,
        topology_filter: TopologyFilter,
        validator: ResultValidator,
        config: Optional[TopologyConfig] = None,
    ):
        self._logger = logger
        self._gis_io = gis_io
        self._processor = processor
        self._filter = topology_filter
        self._validator = validator
        self._config = config

    @safe_run
    @log_execution_time
    def run_pipeline(
        self,
        input_path: str,
        options: Optional[TopologyOptions] = None,
        output_path: Optional[str] = None,
    ) -> str:
        """
        입력 피처 파일을 로드하여 토폴로지를 빌드하고 JSON 으로 저장합니다.
        """
        target_path = Path(input_path)
        final_output = resolve_output_path(target_path, ".topojson", output_path)

        collection = self._gis_io.load(FileLoadRequest(file_path=target_path))

        stage_meta_path = None
        if bool(getattr(self._config, "debug_export_intermediate", False)):
            stage_meta_path = str(final_output.with_name(f"{target_path.stem}_stage_meta.json"))

        topology = self._processor.execute(collection, options, stage_meta_output_path=stage_meta_path)

        self._validator.execute(topology)

        saved = self._gis_io.save_topology(topology, FileSaveRequest(output_path=final_output))
        return str(saved)

    @safe_run
    @log_execution_time
    def filter_file(self, input_path: str, ids: Iterable[str], output_path: Optional[str] = None) -> str:
        """
        저장된 토폴로지에서 지정한 id 의 객체만 남긴 토폴로지를 저장합니다.
        """
        target_path = Path(input_path)
        final_output = resolve_output_path(target_path, "_filtered.topojson", output_path)

        topology = self._gis_io.load_topology(TopologyLoadRequest(file_path=target_path))
        filtered = self._filter.execute(topology, ids)

        self._validator.execute(filtered)

        saved = self._gis_io.save_topology(filtered, FileSaveRequest(output_path=final_output))
        return str(saved)

    @safe_run
    @log_execution_time
    def export_geojson(self, input_path: str, output_path: Optional[str] = None) -> str:
        """
        저장된 토폴로지를 GeoJSON FeatureCollection 으로 되돌려 저장합니다.
        """
        target_path = Path(input_path)
        final_output = resolve_output_path(target_path, ".geojson", output_path)

        topology = self._gis_io.load_topology(TopologyLoadRequest(file_path=target_path))
        collection = to_geojson(topology)

        saved = self._gis_io.save_geojson(collection, GeoJSONSaveRequest(output_path=final_output))
        return str(saved)
